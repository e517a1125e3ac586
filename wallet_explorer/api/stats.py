from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query

from ..services.chains import list_chains
from ..services.wallet import get_ether_price
from ..types import ErrorBody, EtherPrice
from .wallet import failure_message

router = APIRouter(
    prefix="/api",
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)


@router.get("/stats/price")
async def ether_price(
    chainid: Optional[str] = Query(None, description="Chain id or alias (default: Ethereum)"),
) -> EtherPrice:
    """Current ETH price in USD and BTC"""
    with failure_message("Failed to fetch Ethereum price"):
        return await get_ether_price(chainid)


@router.get("/chains")
async def supported_chains() -> List[Dict[str, Any]]:
    """Chains the explorer can look up"""
    return [chain.to_dict() for chain in list_chains()]
