"""Liveness and readiness endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from txindex.schemas import HealthResponse, PingResponse
from txindex.services.health import combined_health
from txindex.services.index import TransactionIndex, get_transaction_index

router = APIRouter(tags=["health"])


@router.get("/ping", response_model=PingResponse, summary="Liveness probe")
async def ping() -> PingResponse:
    """Report that the process is up. Never consults the index."""

    return PingResponse()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health(index: TransactionIndex = Depends(get_transaction_index)) -> dict[str, object]:
    """Return aggregated component health information."""

    return await combined_health(index)
