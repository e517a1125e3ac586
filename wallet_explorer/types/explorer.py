from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class NativeBalance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str = Field(description="Wallet address")
    chain_id: int = Field(alias="chainId")
    balance: str = Field(description="Native balance with six fixed decimals")
    unit: str = Field(description="Native currency symbol for the chain")


class Transaction(BaseModel):
    """Explorer transaction record.

    Upstream fields not declared here are passed through untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hash: str
    from_address: Optional[str] = Field(default=None, alias="from")
    to_address: Optional[str] = Field(default=None, alias="to")
    value: str = "0"
    gas_price: Optional[str] = Field(default=None, alias="gasPrice")
    gas_used: Optional[str] = Field(default=None, alias="gasUsed")
    time_stamp: Optional[str] = Field(default=None, alias="timeStamp")
    block_number: Optional[str] = Field(default=None, alias="blockNumber")
    is_error: str = Field(default="0", alias="isError")

    value_native: Optional[float] = Field(default=None, alias="valueNative")
    fee_native: Optional[float] = Field(default=None, alias="feeNative")
    status: Literal["success", "failed"] = "success"


class EtherPrice(BaseModel):
    model_config = ConfigDict(extra="allow")

    ethbtc: str
    ethbtc_timestamp: Optional[str] = None
    ethusd: str
    ethusd_timestamp: Optional[str] = None
