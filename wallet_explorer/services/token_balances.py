"""
Token holdings for a wallet.

Two steps: ``aggregate_token_pages`` walks the provider's pageKey chain and
concatenates every page, ``normalize_balances`` turns raw fixed-point balances
into priced display values and drops dust.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from ..config import settings
from ..errors import ConversionError, UnsupportedChain
from ..providers.alchemy import AlchemyProvider
from ..providers.base import TokenBalanceProvider
from ..types import NormalizedBalance, RawBalanceEntry
from .address import normalize_chain, require_address
from .units import parse_price, parse_raw_balance, to_decimal

logger = logging.getLogger(__name__)


async def aggregate_token_pages(
    provider: TokenBalanceProvider,
    address: str,
    network: str,
    *,
    max_pages: Optional[int] = None,
) -> List[RawBalanceEntry]:
    """Fetch every page of token balances, in arrival order.

    Pages are requested one after another, each carrying the previous page's
    continuation token. Stops when no token comes back or after ``max_pages``
    requests. Any ``UpstreamError`` propagates and no partial list is
    returned.
    """

    ceiling = max_pages if max_pages is not None else settings.token_page_ceiling
    entries: List[RawBalanceEntry] = []
    page_key: Optional[str] = None
    page_count = 0

    while True:
        page = await provider.fetch_token_page(address, network, page_key)
        entries.extend(page.entries)
        page_count += 1
        page_key = page.continuation_token

        logger.info(
            "token balance page fetched",
            extra={
                "provider": provider.name,
                "page": page_count,
                "count": len(page.entries),
            },
        )

        if not page_key:
            break
        if page_count >= ceiling:
            logger.warning(
                "token balance pagination stopped at page ceiling",
                extra={"provider": provider.name, "max_pages": ceiling},
            )
            break

    return entries


def normalize_entry(entry: RawBalanceEntry) -> NormalizedBalance:
    """Convert one raw entry; raises ``ConversionError`` for unparsable balances."""

    raw_value = parse_raw_balance(entry.raw_balance)
    decimal_balance = to_decimal(raw_value, entry.metadata.decimal_places)
    price = entry.usd_price
    price_usd = parse_price(price.value) if price else 0.0

    return NormalizedBalance(
        contract_address=entry.contract_address,
        raw_balance=str(raw_value),
        decimal_balance=decimal_balance,
        price_usd=price_usd,
        value_usd=decimal_balance * price_usd,
        metadata=entry.metadata,
    )


def normalize_balances(
    entries: Iterable[RawBalanceEntry],
    *,
    min_value_usd: Optional[float] = None,
) -> List[NormalizedBalance]:
    """Price, filter and sort raw entries for display.

    Zero balances, unpriced tokens and holdings not worth more than
    ``min_value_usd`` are dropped. The rest are ordered by USD value,
    highest first; ties keep upstream order.
    """

    threshold = settings.min_token_value_usd if min_value_usd is None else min_value_usd
    kept: List[NormalizedBalance] = []

    for entry in entries:
        try:
            balance = normalize_entry(entry)
        except ConversionError as exc:
            logger.warning(
                "skipping token with unparsable balance",
                extra={
                    "contract_address": entry.contract_address,
                    "error": str(exc),
                },
            )
            continue

        if balance.decimal_balance == 0 or balance.price_usd <= 0:
            continue
        if balance.value_usd <= threshold:
            continue
        kept.append(balance)

    # list.sort is stable
    kept.sort(key=lambda b: b.value_usd, reverse=True)
    return kept


async def get_token_balances(
    address: Optional[str],
    chain: Union[str, int, None] = None,
    *,
    provider: Optional[TokenBalanceProvider] = None,
) -> List[NormalizedBalance]:
    """Token holdings worth showing for ``address`` on ``chain``."""

    address = require_address(address)
    chain_config = normalize_chain(chain)
    if not chain_config.alchemy_network:
        raise UnsupportedChain(f"Token balances are not available on {chain_config.name}")

    provider = provider or AlchemyProvider()
    entries = await aggregate_token_pages(provider, address, chain_config.alchemy_network)
    balances = normalize_balances(entries)

    logger.info(
        "token balances normalized",
        extra={"fetched": len(entries), "kept": len(balances)},
    )
    return balances


__all__ = [
    "aggregate_token_pages",
    "normalize_entry",
    "normalize_balances",
    "get_token_balances",
]
