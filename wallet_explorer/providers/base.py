import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx
from pydantic import ValidationError

from ..cache import cache, request_cache_key
from ..config import settings
from ..errors import UpstreamError
from ..types import EtherPrice, PageResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass

    async def _request_json(
        self,
        method: str,
        url: str,
        parse: Callable[[Any], T],
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        use_cache: bool = True,
    ) -> T:
        """Issue one upstream request and return ``parse(payload)``.

        Transport failures, non-2xx statuses and undecodable bodies become
        ``UpstreamError``; ``parse`` raises ``UpstreamError`` for shapes it
        does not recognize, and pydantic validation errors raised while
        parsing are converted the same way. Only parsed results are cached,
        keyed by URL.
        """
        full_url = str(httpx.URL(url, params=params)) if params else url
        key = request_cache_key(method, full_url, json)

        if use_cache:
            cached = await cache.get(key)
            if cached is not None:
                return cached

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    timeout=self.timeout_s,
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 401:
                logger.warning("%s rejected the API key; is it configured for this environment?", self.name)
            raise UpstreamError(
                f"{self.name} returned HTTP {status}",
                provider=self.name,
                status=status,
                detail=exc.response.text[:500],
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"{self.name} request failed",
                provider=self.name,
                detail=str(exc),
            ) from exc
        except ValueError as exc:
            raise UpstreamError(
                f"{self.name} returned malformed JSON",
                provider=self.name,
                detail=str(exc),
            ) from exc

        try:
            result = parse(payload)
        except ValidationError as exc:
            raise UpstreamError(
                "Unexpected API response format",
                provider=self.name,
                detail=str(exc)[:500],
            ) from exc
        if use_cache:
            await cache.set(key, result, ttl=settings.upstream_cache_ttl_seconds)
        return result


class TokenBalanceProvider(Provider):
    """Provider for paginated token balances with metadata and prices"""

    @abstractmethod
    async def fetch_token_page(
        self,
        address: str,
        network: str,
        page_key: Optional[str] = None,
    ) -> PageResult:
        """Fetch one page of token balances, continuing from ``page_key``"""
        pass


class ExplorerProvider(Provider):
    """Provider for block explorer data (native balance, transactions, price)"""

    @abstractmethod
    async def get_native_balance(self, address: str, chain_id: int) -> int:
        """Native balance in wei"""
        pass

    @abstractmethod
    async def get_transactions(
        self,
        address: str,
        chain_id: int,
        *,
        page: int = 1,
        offset: int = 1000,
        sort: str = "desc",
    ) -> List[Dict[str, Any]]:
        """Raw transaction records, newest first by default"""
        pass

    @abstractmethod
    async def get_ether_price(self, chain_id: int = 1) -> EtherPrice:
        """Current native currency price"""
        pass
