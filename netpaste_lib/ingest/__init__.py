"""Raw TCP ingestion: the accept loop and the per-connection handler."""
from .handler import (
    EMPTY_MSG,
    MAX_PASTE_SIZE,
    READ_CHUNK_SIZE,
    TOO_LARGE_MSG,
    IngestionHandler,
    IngestResult,
)
from .server import IngestServer

__all__ = [
    "IngestionHandler",
    "IngestResult",
    "IngestServer",
    "MAX_PASTE_SIZE",
    "READ_CHUNK_SIZE",
    "TOO_LARGE_MSG",
    "EMPTY_MSG",
]
