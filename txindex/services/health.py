"""Health check helpers."""
from __future__ import annotations

from typing import Any, Dict

from txindex.errors import IndexUnavailableError
from txindex.services.index import TransactionIndex


async def index_health(index: TransactionIndex) -> Dict[str, Any]:
    """Ask the index backend to verify it can serve lookups."""

    try:
        await index.check()
    except IndexUnavailableError as exc:
        return {"status": "error", "detail": str(exc)}

    return {"status": "ok", "detail": f"backend={index.name}"}


async def combined_health(index: TransactionIndex) -> Dict[str, Any]:
    """Aggregate all component health checks."""

    index_result = await index_health(index)
    overall = "ok" if index_result["status"] == "ok" else "degraded"

    return {
        "status": overall,
        "components": {
            "index": index_result,
        },
    }
