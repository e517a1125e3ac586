from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .explorer import NativeBalance, Transaction
from .portfolio import NormalizedBalance


class WalletOverview(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str = Field(description="Wallet address")
    chain_id: int = Field(alias="chainId")
    balance: NativeBalance = Field(description="Native currency balance")
    transactions: List[Transaction] = Field(description="Most recent transactions first")
    tokens: List[NormalizedBalance] = Field(description="Token holdings sorted by USD value")
    total_value_usd: float = Field(
        alias="totalValueUsd",
        description="Summed USD value of the listed token holdings",
    )


class ErrorBody(BaseModel):
    error: str = Field(description="Short, user-facing error message")
