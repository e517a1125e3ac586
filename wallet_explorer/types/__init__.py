from .explorer import EtherPrice, NativeBalance, Transaction
from .portfolio import NormalizedBalance, PageResult, RawBalanceEntry, TokenMetadata, TokenPrice
from .responses import ErrorBody, WalletOverview

__all__ = [
    "EtherPrice",
    "NativeBalance",
    "Transaction",
    "NormalizedBalance",
    "PageResult",
    "RawBalanceEntry",
    "TokenMetadata",
    "TokenPrice",
    "ErrorBody",
    "WalletOverview",
]
