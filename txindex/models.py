"""Database models."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, Enum as SAEnum, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from txindex.db import Base
from txindex.schemas import ADDRESS_MAX_LENGTH, ASSET_MAX_LENGTH, HASH_MAX_LENGTH, TxStatus


class Transaction(Base):
    __tablename__ = "transactions"

    hash: Mapped[str] = mapped_column(String(HASH_MAX_LENGTH), primary_key=True)
    status: Mapped[TxStatus] = mapped_column(
        SAEnum(TxStatus, name="tx_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    sender: Mapped[str | None] = mapped_column(String(ADDRESS_MAX_LENGTH), nullable=True)
    receiver: Mapped[str | None] = mapped_column(String(ADDRESS_MAX_LENGTH), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(78, 0), nullable=False)
    asset: Mapped[str | None] = mapped_column(String(ASSET_MAX_LENGTH), nullable=True)
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)
    block_height: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    num_outs: Mapped[int] = mapped_column(nullable=False, default=0)
    out_hashes: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    signers: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
