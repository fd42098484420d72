"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterable

import pytest
from fastapi.testclient import TestClient

from txindex.errors import IndexUnavailableError
from txindex.main import create_app
from txindex.schemas import TransactionRecord, TxStatus
from txindex.services.index import InMemoryTransactionIndex


class BrokenIndex:
    """Index whose storage is unreachable."""

    name = "broken"

    def __init__(self) -> None:
        self.lookups = 0

    async def lookup(self, tx_hash: str) -> TransactionRecord | None:
        self.lookups += 1
        raise IndexUnavailableError("connection refused")

    async def publish(self, record: TransactionRecord) -> None:
        raise IndexUnavailableError("connection refused")

    async def publish_many(self, records: Iterable[TransactionRecord]) -> int:
        raise IndexUnavailableError("connection refused")

    async def check(self) -> None:
        raise IndexUnavailableError("connection refused")

    async def close(self) -> None:
        return None


@pytest.fixture
def sample_record() -> TransactionRecord:
    return TransactionRecord(
        hash="abc123",
        status=TxStatus.DONE,
        sender="bnb1sender",
        receiver="bnb1pool",
        amount=10,
        asset="BNB",
        memo="SWAP:BNB.RUNE",
        block_height=42,
        num_outs=1,
        out_hashes=["def456"],
        signers=["thor1observer"],
    )


@pytest.fixture
def index(sample_record: TransactionRecord) -> InMemoryTransactionIndex:
    return InMemoryTransactionIndex([sample_record])


@pytest.fixture
def client(index: InMemoryTransactionIndex) -> TestClient:
    return TestClient(create_app(index=index))


@pytest.fixture
def broken_index() -> BrokenIndex:
    return BrokenIndex()


@pytest.fixture
def broken_client(broken_index: BrokenIndex) -> TestClient:
    return TestClient(create_app(index=broken_index))
