"""Transaction lookup API."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from txindex.schemas import ErrorResponse, TransactionRecord
from txindex.services.index import TransactionIndex, get_transaction_index

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tx", tags=["transactions"])


@router.get(
    "/{tx_hash}",
    response_model=TransactionRecord,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def get_transaction(
        tx_hash: str,
        index: TransactionIndex = Depends(get_transaction_index),
) -> TransactionRecord:
    """Return the transaction stored under ``tx_hash``.

    Any string is accepted as a hash; unknown and malformed hashes both yield 404.
    """

    record = await index.lookup(tx_hash)
    if record is None:
        logger.debug("Transaction %s not found", tx_hash)
        raise HTTPException(status_code=404, detail="transaction not found")
    return record
