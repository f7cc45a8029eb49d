# File: src/eth_wallet_server/wallet/models.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedResponse(BaseModel):
    timestamp: datetime = Field(default_factory=utcnow)


class HealthStatus(TimestampedResponse):
    status: str = "ok"
    service: str
    version: str


class AccountInfo(TimestampedResponse):
    address: str


class BalanceInfo(TimestampedResponse):
    address: str
    wei: str
    eth: str
    network_id: int


class GasPriceInfo(TimestampedResponse):
    wei: str
    gwei: str


class GasEstimate(TimestampedResponse):
    gas: int
    to: str
    amount_wei: str


class NetworkInfo(TimestampedResponse):
    network_id: int
    network_name: str
    configured_network_id: int
    current_block: Optional[int] = None
    connected: bool


class TransactionRequest(BaseModel):
    to: str
    amount_eth: Decimal
    gas_price: Optional[int] = Field(None, ge=0)
    gas_limit: Optional[int] = Field(None, ge=0)

    @field_validator("amount_eth", mode="before")
    @classmethod
    def _float_as_text(cls, value):
        # JSON numbers arrive as float; parse their shortest repr, not the binary value
        if isinstance(value, float):
            return repr(value)
        return value


class TransactionResult(TimestampedResponse):
    model_config = ConfigDict(populate_by_name=True)

    transaction_hash: str
    from_address: str = Field(alias="from")
    to: str
    amount_wei: str
    amount_eth: str
    gas_price: str
    gas_limit: int
    nonce: int
    chain_id: int
    status: str = "pending"  # broadcast only, not mined


class ErrorResponse(TimestampedResponse):
    kind: str
    message: str
    code: int
