"""Wallet lookups backed by the block explorer, plus the combined overview."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from ..config import settings
from ..errors import ConversionError, ExplorerError, UpstreamError
from ..providers.base import ExplorerProvider, TokenBalanceProvider
from ..providers.etherscan import EtherscanProvider
from ..types import EtherPrice, NativeBalance, Transaction, WalletOverview
from .address import normalize_chain, require_address
from .token_balances import get_token_balances
from .units import NATIVE_DECIMALS, format_units, parse_raw_balance, to_decimal

logger = logging.getLogger(__name__)

ChainRef = Union[str, int, None]


async def get_native_balance(
    address: Optional[str],
    chain: ChainRef = None,
    *,
    provider: Optional[ExplorerProvider] = None,
) -> NativeBalance:
    address = require_address(address)
    chain_config = normalize_chain(chain)
    provider = provider or EtherscanProvider()

    balance_wei = await provider.get_native_balance(address, chain_config.chain_id)
    return NativeBalance(
        address=address,
        chain_id=chain_config.chain_id,
        balance=format_units(balance_wei, chain_config.native_decimals),
        unit=chain_config.native_symbol,
    )


def _native_amount(raw: Any) -> Optional[float]:
    try:
        return to_decimal(parse_raw_balance(raw), NATIVE_DECIMALS)
    except ConversionError:
        return None


def build_transaction(raw: Dict[str, Any]) -> Transaction:
    """Wrap an explorer record and add native-unit value, fee and status."""

    fee: Optional[float] = None
    try:
        gas_used = parse_raw_balance(raw.get("gasUsed") or "0")
        gas_price = parse_raw_balance(raw.get("gasPrice") or "0")
        fee = to_decimal(gas_used * gas_price, NATIVE_DECIMALS)
    except ConversionError:
        pass

    is_error = str(raw.get("isError") or "0")
    record = {
        **raw,
        "isError": is_error,
        "valueNative": _native_amount(raw.get("value") or "0"),
        "feeNative": fee,
        "status": "success" if is_error == "0" else "failed",
    }
    return Transaction.model_validate(record)


async def get_transactions(
    address: Optional[str],
    chain: ChainRef = None,
    *,
    page: int = 1,
    offset: Optional[int] = None,
    sort: str = "desc",
    provider: Optional[ExplorerProvider] = None,
) -> List[Transaction]:
    address = require_address(address)
    chain_config = normalize_chain(chain)
    provider = provider or EtherscanProvider()

    raw_transactions = await provider.get_transactions(
        address,
        chain_config.chain_id,
        page=page,
        offset=offset or settings.transactions_page_size,
        sort=sort,
    )
    try:
        return [build_transaction(tx) for tx in raw_transactions]
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError
        raise UpstreamError("Unexpected transaction format", provider=getattr(provider, "name", None), detail=str(exc)) from exc


async def get_ether_price(
    chain: ChainRef = None,
    *,
    provider: Optional[ExplorerProvider] = None,
) -> EtherPrice:
    chain_config = normalize_chain(chain)
    provider = provider or EtherscanProvider()
    return await provider.get_ether_price(chain_config.chain_id)


async def get_wallet_overview(
    address: Optional[str],
    chain: ChainRef = None,
    *,
    explorer: Optional[ExplorerProvider] = None,
    token_provider: Optional[TokenBalanceProvider] = None,
) -> WalletOverview:
    """Balance, transactions and tokens for one wallet, fetched concurrently.

    The three lookups run side by side and are joined before returning. If
    any of them fails the whole overview fails with that error; there is no
    partial result.
    """

    address = require_address(address)
    chain_config = normalize_chain(chain)
    explorer = explorer or EtherscanProvider()

    results = await asyncio.gather(
        get_native_balance(address, chain_config.chain_id, provider=explorer),
        get_transactions(address, chain_config.chain_id, provider=explorer),
        get_token_balances(address, chain_config.chain_id, provider=token_provider),
        return_exceptions=True,
    )

    for result in results:
        if isinstance(result, ExplorerError):
            raise result
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error("wallet overview lookup failed", exc_info=result)
            raise UpstreamError("Failed to fetch wallet overview", detail=str(result)) from result

    balance, transactions, tokens = results
    return WalletOverview(
        address=address,
        chain_id=chain_config.chain_id,
        balance=balance,
        transactions=transactions,
        tokens=tokens,
        total_value_usd=sum(token.value_usd for token in tokens),
    )


__all__ = [
    "get_native_balance",
    "build_transaction",
    "get_transactions",
    "get_ether_price",
    "get_wallet_overview",
]
