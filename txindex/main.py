"""Application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from txindex.api.health import router as health_router
from txindex.api.transactions import router as transactions_router
from txindex.config import Settings, get_settings
from txindex.db import create_engine, create_session_factory, init_models
from txindex.errors import register_exception_handlers
from txindex.services.index import InMemoryTransactionIndex, SqlTransactionIndex, TransactionIndex
from txindex.services.seed import load_seed_file

logger = logging.getLogger(__name__)


async def build_index(settings: Settings) -> TransactionIndex:
    """Construct the backend selected by ``INDEX_BACKEND``."""

    if settings.index_backend == "postgres":
        engine = create_engine(settings)
        await init_models(engine)
        index: TransactionIndex = SqlTransactionIndex(create_session_factory(engine), engine=engine)
    else:
        index = InMemoryTransactionIndex()

    logger.info("Using %s transaction index", index.name)
    return index


def create_app(index: TransactionIndex | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the API.

    When ``index`` is given it is served as-is and left open on shutdown;
    otherwise one is built from settings during startup and closed afterwards.
    """

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = index is None
        app.state.index = await build_index(settings) if owned else index
        try:
            if settings.seed_file is not None:
                await load_seed_file(app.state.index, settings.seed_file)
            yield
        finally:
            if owned:
                await app.state.index.close()

    app = FastAPI(title="Transaction Index", version="0.1.0", lifespan=lifespan)
    if index is not None:
        app.state.index = index
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(transactions_router)
    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="[%(asctime)s] %(levelname)s %(name)s %(message)s")
    uvicorn.run(create_app(settings=settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
