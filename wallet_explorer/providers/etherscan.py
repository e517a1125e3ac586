import logging
from typing import Any, Dict, List, Optional

from ..config import settings
from ..errors import ProviderNotConfigured, UpstreamError
from ..types import EtherPrice
from .base import ExplorerProvider

logger = logging.getLogger(__name__)


class EtherscanProvider(ExplorerProvider):
    """Etherscan v2 multichain explorer provider"""

    name = "etherscan"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = settings.etherscan_api_key if api_key is None else api_key
        self.base_url = base_url or settings.etherscan_api_url
        self.timeout_s = settings.request_timeout_seconds

    async def ready(self) -> bool:
        return bool(self.api_key) and settings.enable_etherscan

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "API key not configured or provider disabled"
            }

        try:
            await self._call({"module": "stats", "action": "ethprice"}, 1, self._parse_price, use_cache=False)
            return {"status": "healthy"}
        except UpstreamError as e:
            return {"status": "error", "reason": str(e)}

    def _params(self, params: Dict[str, Any], chain_id: int) -> Dict[str, Any]:
        if not self.api_key:
            raise ProviderNotConfigured("Etherscan API key is not configured", provider=self.name)
        return {"chainid": str(chain_id), "apikey": self.api_key, **params}

    async def _call(self, params: Dict[str, Any], chain_id: int, parse, *, use_cache: bool = True):
        return await self._request_json(
            "GET",
            self.base_url,
            parse,
            params=self._params(params, chain_id),
            use_cache=use_cache,
        )

    def _envelope(self, payload: Any) -> Dict[str, Any]:
        # Every response is {"status": "1"|"0", "message": ..., "result": ...}
        if not isinstance(payload, dict) or "status" not in payload or "result" not in payload:
            raise UpstreamError("Unexpected API response format", provider=self.name, detail=str(payload)[:500])
        return payload

    def _require_ok(self, payload: Dict[str, Any], error_message: str) -> Any:
        if str(payload.get("status")) != "1":
            raise UpstreamError(
                error_message,
                provider=self.name,
                detail=f"{payload.get('message')}: {payload.get('result')}",
            )
        return payload["result"]

    async def get_native_balance(self, address: str, chain_id: int) -> int:
        """Get native balance in wei"""
        return await self._call(
            {
                "module": "account",
                "action": "balance",
                "address": address,
                "tag": "latest",
            },
            chain_id,
            self._parse_balance,
        )

    def _parse_balance(self, payload: Any) -> int:
        result = self._require_ok(self._envelope(payload), "Failed to fetch wallet balance")
        try:
            return int(str(result))
        except ValueError as exc:
            raise UpstreamError("Unexpected balance format", provider=self.name, detail=repr(result)) from exc

    async def get_transactions(
        self,
        address: str,
        chain_id: int,
        *,
        page: int = 1,
        offset: int = 1000,
        sort: str = "desc",
    ) -> List[Dict[str, Any]]:
        """Get normal transactions for an address"""
        return await self._call(
            {
                "module": "account",
                "action": "txlist",
                "address": address,
                "startblock": "0",
                "endblock": "99999999",
                "page": str(page),
                "offset": str(offset),
                "sort": sort.lower(),
            },
            chain_id,
            self._parse_transactions,
        )

    def _parse_transactions(self, payload: Any) -> List[Dict[str, Any]]:
        payload = self._envelope(payload)
        result = payload["result"]
        # "No transactions found" arrives as status "0" with an empty list
        if not isinstance(result, list):
            raise UpstreamError(
                "Failed to fetch wallet transactions",
                provider=self.name,
                detail=f"{payload.get('message')}: {result}",
            )
        if str(payload.get("status")) != "1":
            logger.info("etherscan txlist returned status %s: %s", payload.get("status"), payload.get("message"))
        if not all(isinstance(tx, dict) for tx in result):
            raise UpstreamError("Unexpected transaction entry", provider=self.name)
        return result

    async def get_ether_price(self, chain_id: int = 1) -> EtherPrice:
        return await self._call(
            {"module": "stats", "action": "ethprice"},
            chain_id,
            self._parse_price,
        )

    def _parse_price(self, payload: Any) -> EtherPrice:
        result = self._require_ok(self._envelope(payload), "Failed to fetch Ethereum price")
        if not isinstance(result, dict) or "ethusd" not in result or "ethbtc" not in result:
            raise UpstreamError("Unexpected price format", provider=self.name, detail=str(result)[:200])
        return EtherPrice.model_validate(result)
