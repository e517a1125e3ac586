"""Service layer helpers"""

from .token_balances import aggregate_token_pages, get_token_balances, normalize_balances
from .wallet import get_ether_price, get_native_balance, get_transactions, get_wallet_overview

__all__ = [
    "aggregate_token_pages",
    "get_token_balances",
    "normalize_balances",
    "get_ether_price",
    "get_native_balance",
    "get_transactions",
    "get_wallet_overview",
]
