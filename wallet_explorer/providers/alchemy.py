import logging
from typing import Any, Dict, List, Optional

from ..config import settings
from ..errors import ProviderNotConfigured, UpstreamError
from ..types import PageResult, RawBalanceEntry, TokenMetadata, TokenPrice
from .base import TokenBalanceProvider

logger = logging.getLogger(__name__)


class AlchemyProvider(TokenBalanceProvider):
    """Alchemy Data API provider for token balances by wallet address"""

    name = "alchemy"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = settings.alchemy_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.alchemy_data_api_url).rstrip("/")
        self.timeout_s = settings.request_timeout_seconds

    async def ready(self) -> bool:
        return bool(self.api_key) and settings.enable_alchemy

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "API key not configured or provider disabled"
            }
        # The Data API has no free ping endpoint; a configured key is all we can vouch for
        return {"status": "configured"}

    def _endpoint(self, path: str) -> str:
        if not self.api_key:
            raise ProviderNotConfigured("Alchemy API key is not configured", provider=self.name)
        return f"{self.base_url}/{self.api_key}{path}"

    async def fetch_token_page(
        self,
        address: str,
        network: str,
        page_key: Optional[str] = None,
    ) -> PageResult:
        """Fetch a single page of token balances with metadata and prices"""
        body: Dict[str, Any] = {
            "addresses": [{
                "address": address,
                "networks": [network],
            }],
            "withMetadata": True,
            "withPrices": True,
            "includeNativeTokens": False,
        }
        if page_key:
            body["pageKey"] = page_key

        return await self._request_json(
            "POST",
            self._endpoint("/assets/tokens/by-address"),
            self._parse_page,
            json=body,
        )

    def _parse_page(self, payload: Any) -> PageResult:
        """
        Expected format:
        {
          "data": {
            "tokens": [...],
            "pageKey": "..."
          }
        }
        """
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not isinstance(data.get("tokens"), list):
            raise UpstreamError(
                "Unexpected API response format",
                provider=self.name,
                detail=str(payload)[:500],
            )

        page_key = data.get("pageKey")
        if page_key is not None and not isinstance(page_key, str):
            raise UpstreamError("Unexpected pageKey type", provider=self.name, detail=repr(page_key))

        entries = [self._parse_token(token) for token in data["tokens"]]
        return PageResult(entries=entries, continuation_token=page_key or None)

    def _parse_token(self, token: Any) -> RawBalanceEntry:
        if not isinstance(token, dict):
            raise UpstreamError("Unexpected token entry", provider=self.name, detail=repr(token)[:200])

        metadata_raw = token.get("tokenMetadata") or {}
        prices_raw: List[Any] = token.get("tokenPrices") or []
        if not isinstance(metadata_raw, dict) or not isinstance(prices_raw, list):
            raise UpstreamError("Unexpected token entry", provider=self.name, detail=repr(token)[:200])

        raw_balance = token.get("tokenBalance")
        return RawBalanceEntry(
            contract_address=token.get("tokenAddress"),
            raw_balance="0" if raw_balance is None else str(raw_balance),
            metadata=TokenMetadata.model_validate(metadata_raw),
            prices=[TokenPrice.model_validate(price) for price in prices_raw if isinstance(price, dict)],
            network=token.get("network"),
        )
