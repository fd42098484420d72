"""Transaction index backends.

Every backend answers ``lookup(hash)`` with the stored record or ``None``.
Absence is never an error; only infrastructure failures raise
:class:`~txindex.errors.IndexUnavailableError`.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import DataError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from txindex.errors import IndexUnavailableError
from txindex.models import Transaction
from txindex.schemas import HASH_MAX_LENGTH, TransactionRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class TransactionIndex(Protocol):
    name: str

    async def lookup(self, tx_hash: str) -> TransactionRecord | None:
        ...

    async def publish(self, record: TransactionRecord) -> None:
        ...

    async def publish_many(self, records: Iterable[TransactionRecord]) -> int:
        ...

    async def check(self) -> None:
        ...

    async def close(self) -> None:
        ...


class InMemoryTransactionIndex:
    """Process-local index using read-copy-update.

    Readers dereference the current snapshot without locking. Writers copy the
    snapshot, apply their change and swap the reference in a single assignment,
    so a reader observes either the previous or the next version of a record.
    Writes may come from any thread.
    """

    name = "memory"

    def __init__(self, records: Iterable[TransactionRecord] = ()) -> None:
        self._write_lock = threading.Lock()
        self._snapshot: Mapping[str, TransactionRecord] = MappingProxyType({})
        self._swap_in(records)

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, tx_hash: object) -> bool:
        return tx_hash in self._snapshot

    def _swap_in(self, records: Iterable[TransactionRecord]) -> int:
        batch = {record.hash: record for record in records}
        if not batch:
            return 0
        with self._write_lock:
            updated = dict(self._snapshot)
            updated.update(batch)
            self._snapshot = MappingProxyType(updated)
        return len(batch)

    async def lookup(self, tx_hash: str) -> TransactionRecord | None:
        return self._snapshot.get(tx_hash)

    async def publish(self, record: TransactionRecord) -> None:
        self._swap_in((record,))

    async def publish_many(self, records: Iterable[TransactionRecord]) -> int:
        """Insert or replace records and return how many distinct hashes were written."""

        return self._swap_in(records)

    async def check(self) -> None:
        return None

    async def close(self) -> None:
        return None


def _to_row(record: TransactionRecord) -> dict[str, Any]:
    row = record.model_dump()
    row["out_hashes"] = list(record.out_hashes)
    row["signers"] = list(record.signers)
    return row


def _storable_key(tx_hash: str) -> bool:
    return 0 < len(tx_hash) <= HASH_MAX_LENGTH and "\x00" not in tx_hash


class SqlTransactionIndex:
    """Index backed by the ``transactions`` table in PostgreSQL."""

    name = "postgres"

    def __init__(self, session_factory: async_sessionmaker, engine: AsyncEngine | None = None) -> None:
        self._session_factory = session_factory
        self._engine = engine

    async def lookup(self, tx_hash: str) -> TransactionRecord | None:
        if not _storable_key(tx_hash):
            return None
        try:
            async with self._session_factory() as session:
                row = await session.get(Transaction, tx_hash)
                if row is None:
                    return None
                return TransactionRecord.model_validate(row)
        except DataError as exc:
            logger.debug("Hash %r rejected by the database: %s", tx_hash, exc)
            return None
        except (SQLAlchemyError, OSError) as exc:
            raise IndexUnavailableError(f"lookup of {tx_hash!r} failed: {exc}") from exc

    async def publish(self, record: TransactionRecord) -> None:
        await self.publish_many((record,))

    async def publish_many(self, records: Iterable[TransactionRecord]) -> int:
        """Upsert records in a single transaction."""

        rows = [_to_row(record) for record in {r.hash: r for r in records}.values()]
        if not rows:
            return 0

        stmt = insert(Transaction).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Transaction.hash],
            set_={column: stmt.excluded[column] for column in rows[0] if column != "hash"},
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise IndexUnavailableError(f"publish failed: {exc}") from exc

        return len(rows)

    async def check(self) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            raise IndexUnavailableError(str(exc)) from exc

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()


def get_transaction_index(request: Request) -> TransactionIndex:
    """FastAPI dependency returning the index bound to the application."""

    return request.app.state.index
