"""Application factory for the netpaste servers.

This module exposes `create_app(config, store) -> FastAPI` for the HTTP
retrieval side and `create_ingest_server(config, store)` for the raw TCP
upload side. Both take the paste store as an explicit dependency so the
two transports can share one instance and tests can use fresh ones.

To run both against one store:

    from netpaste_lib.main import create_app, create_ingest_server, Config
    from netpaste_lib.storage import create_store

    config = Config()
    store = create_store(key_max_attempts=config.key_max_attempts)
    create_ingest_server(config, store).start()
    app = create_app(config, store)

Note: we intentionally do not create a global `app` at import time.
"""
from typing import Optional

from fastapi import FastAPI

from netpaste_lib import __version__
from netpaste_lib.config import Config
from netpaste_lib.ingest import IngestionHandler, IngestServer
from netpaste_lib.logging_config import configure_logging
from netpaste_lib.storage import PasteStore, create_store

__all__ = ["Config", "create_app", "create_ingest_server"]


def create_app(config: Config, store: Optional[PasteStore] = None) -> FastAPI:
    """Create and return a configured FastAPI application.

    When `store` is None a fresh in-memory store is composed here.
    """
    logger = configure_logging(config.log_level)

    if store is None:
        store = create_store(key_max_attempts=config.key_max_attempts)

    # Expose the store through the container; routes resolve it per request.
    from netpaste_lib.services import ServiceContainer

    container = ServiceContainer()
    container.register_singleton("paste_store", store)

    app = FastAPI(title="netpaste", version=__version__)
    app.state.container = container

    # Router registration: the catch-all paste route goes last so it does
    # not shadow the health endpoint.
    from netpaste_lib.server.api import router as server_router
    from netpaste_lib.retrieval.api import router as retrieval_router

    app.include_router(server_router)
    app.include_router(retrieval_router)

    logger.info("HTTP retrieval app ready")
    return app


def create_ingest_server(config: Config, store: PasteStore) -> IngestServer:
    """Create (but do not start) the raw TCP ingestion server."""
    handler = IngestionHandler(
        store,
        max_size=config.max_paste_size,
        chunk_size=config.read_chunk_size,
    )
    return IngestServer(
        handler,
        host=config.tcp_host,
        port=config.tcp_port,
        idle_timeout=config.tcp_idle_timeout,
    )
