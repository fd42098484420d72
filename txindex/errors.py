"""Error types raised by the index and their HTTP translation."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class IndexUnavailableError(Exception):
    """The transaction index backend could not answer.

    Distinct from a missing transaction, which is reported as ``None``.
    """


async def index_unavailable_handler(request: Request, exc: IndexUnavailableError) -> JSONResponse:
    logger.error("Index unavailable while serving %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "transaction index unavailable"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IndexUnavailableError, index_unavailable_handler)
