"""Load fixture transactions into an index at startup."""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from txindex.schemas import TransactionRecord
from txindex.services.index import TransactionIndex

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[TransactionRecord])


def read_seed_file(path: Path) -> list[TransactionRecord]:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ValueError(f"cannot read seed file {path}: {exc}") from exc

    try:
        return _records_adapter.validate_json(raw)
    except ValidationError as exc:
        raise ValueError(f"invalid seed file {path}: {exc}") from exc


async def load_seed_file(index: TransactionIndex, path: Path) -> int:
    """Publish every record in ``path`` to ``index`` and return how many were stored."""

    records = read_seed_file(path)
    count = await index.publish_many(records)
    logger.info("Seeded %s transactions from %s into %s index", count, path, index.name)
    return count
