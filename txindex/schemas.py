"""Pydantic schemas shared across the API and the index backends."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column limits of the ``transactions`` table; records outside them are
# rejected up front so every backend accepts the same records.
HASH_MAX_LENGTH = 128
ADDRESS_MAX_LENGTH = 128
ASSET_MAX_LENGTH = 64
AMOUNT_MAX = 10**78 - 1
BIGINT_MAX = 2**63 - 1
INT_MAX = 2**31 - 1


class TxStatus(str, Enum):
    INCOMPLETE = "incomplete"
    DONE = "done"
    REVERTED = "reverted"


class TransactionRecord(BaseModel):
    """A transaction stored in the index, keyed by its hash.

    Timestamps are normalised to UTC; naive values are taken to be UTC already.
    Text fields may not contain NUL characters, which PostgreSQL cannot store.
    """

    hash: str = Field(..., min_length=1, max_length=HASH_MAX_LENGTH)
    status: TxStatus = TxStatus.INCOMPLETE
    sender: Optional[str] = Field(None, max_length=ADDRESS_MAX_LENGTH)
    receiver: Optional[str] = Field(None, max_length=ADDRESS_MAX_LENGTH)
    amount: int = Field(0, ge=0, le=AMOUNT_MAX)
    asset: Optional[str] = Field(None, max_length=ASSET_MAX_LENGTH)
    memo: Optional[str] = None
    block_height: Optional[int] = Field(None, ge=0, le=BIGINT_MAX)
    timestamp: Optional[datetime] = None
    num_outs: int = Field(0, ge=0, le=INT_MAX)
    out_hashes: Tuple[str, ...] = ()
    signers: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid", from_attributes=True)

    @field_validator("hash", "sender", "receiver", "asset", "memo")
    @classmethod
    def _no_nul(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and "\x00" in value:
            raise ValueError("must not contain NUL characters")
        return value

    @field_validator("out_hashes", "signers")
    @classmethod
    def _no_nul_items(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if any("\x00" in item for item in value):
            raise ValueError("must not contain NUL characters")
        return value

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class PingResponse(BaseModel):
    ping: Literal["pong"] = "pong"


class ComponentHealth(BaseModel):
    status: Literal["ok", "error"]
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Aggregated readiness information."""

    status: Literal["ok", "degraded"]
    components: Dict[str, ComponentHealth]


class ErrorResponse(BaseModel):
    detail: Any
