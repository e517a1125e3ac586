from contextlib import contextmanager
from typing import Iterator, List, Literal, Optional

from fastapi import APIRouter, Query

from ..errors import UpstreamError
from ..services.token_balances import get_token_balances
from ..services.wallet import get_native_balance, get_transactions, get_wallet_overview
from ..types import ErrorBody, NativeBalance, NormalizedBalance, Transaction, WalletOverview

router = APIRouter(
    prefix="/api/wallet",
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)

# address is optional at the FastAPI level so a missing value reaches
# MissingAddress (400 with an error body) instead of a 422 validation error
ADDRESS_QUERY = Query(None, description="Wallet address to look up")
CHAIN_QUERY = Query(None, description="Chain id or alias (default: Ethereum)")


@contextmanager
def failure_message(message: str) -> Iterator[None]:
    """Replace the user-facing text of upstream failures raised inside the block."""
    try:
        yield
    except UpstreamError as exc:
        exc.public_message = message
        raise


@router.get("/balance")
async def wallet_balance(
    address: Optional[str] = ADDRESS_QUERY,
    chainid: Optional[str] = CHAIN_QUERY,
) -> NativeBalance:
    """Native currency balance"""
    with failure_message("Failed to fetch wallet balance"):
        return await get_native_balance(address, chainid)


@router.get("/transactions")
async def wallet_transactions(
    address: Optional[str] = ADDRESS_QUERY,
    chainid: Optional[str] = CHAIN_QUERY,
    page: int = Query(1, ge=1),
    offset: Optional[int] = Query(None, ge=1, le=10000, description="Transactions per page"),
    sort: Literal["asc", "desc"] = Query("desc"),
) -> List[Transaction]:
    """Normal transactions, newest first unless ``sort=asc``"""
    with failure_message("Failed to fetch wallet transactions"):
        return await get_transactions(address, chainid, page=page, offset=offset, sort=sort)


@router.get("/tokens")
async def wallet_tokens(
    address: Optional[str] = ADDRESS_QUERY,
    chainid: Optional[str] = CHAIN_QUERY,
) -> List[NormalizedBalance]:
    """Token holdings sorted by USD value, dust removed"""
    with failure_message("Failed to fetch token balances"):
        return await get_token_balances(address, chainid)


@router.get("/overview")
async def wallet_overview(
    address: Optional[str] = ADDRESS_QUERY,
    chainid: Optional[str] = CHAIN_QUERY,
) -> WalletOverview:
    """Balance, transactions and tokens in one response"""
    with failure_message("Failed to fetch wallet overview"):
        return await get_wallet_overview(address, chainid)
