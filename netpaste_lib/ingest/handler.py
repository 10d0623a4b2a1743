"""Raw-stream paste ingestion.

One handler call consumes one client connection: read until the peer
half-closes (or the size cap is hit), store the bytes, answer with a
single line and close. The size cap is checked per chunk so a client can
never make the server buffer more than `max_size` bytes.
"""
from __future__ import annotations
import enum
import logging
import socket
from typing import Optional, Tuple

from netpaste_lib.storage.base import PasteStore
from netpaste_lib.storage.keygen import KeyGenerationExhausted

logger = logging.getLogger(__name__)

MAX_PASTE_SIZE = 2 * 1024 * 1024
READ_CHUNK_SIZE = 1024 * 50

TOO_LARGE_MSG = b"Input too large\n"
EMPTY_MSG = b"Don't send empty spaces!"
STORE_FULL_MSG = b"Store is full\n"

# Unicode White_Space: str.strip() would also drop the \x1c-\x1f separators.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


class IngestResult(enum.Enum):
    STORED = "stored"
    TOO_LARGE = "too_large"
    EMPTY = "empty"
    ABANDONED = "abandoned"
    STORE_FULL = "store_full"


def is_blank(content: bytes) -> bool:
    """True when `content` holds nothing but whitespace."""
    return not content.decode("utf-8", errors="replace").strip(WHITESPACE)


class IngestionHandler:
    def __init__(self, store: PasteStore, max_size: int = MAX_PASTE_SIZE, chunk_size: int = READ_CHUNK_SIZE):
        if max_size < 1 or chunk_size < 1:
            raise ValueError("max_size and chunk_size must be positive")
        self.store = store
        self.max_size = max_size
        self.chunk_size = chunk_size

    def handle(self, conn: socket.socket, addr=None) -> IngestResult:
        """Consume `conn` and file at most one paste. Always closes `conn`."""
        with conn:
            content, result = self._read_bounded(conn)
            if result is IngestResult.TOO_LARGE:
                logger.info("Rejected oversized paste from %s", addr)
                self._reply(conn, TOO_LARGE_MSG, addr)
                return result
            if result is IngestResult.ABANDONED:
                return result

            if is_blank(content):
                logger.debug("Rejected blank paste from %s", addr)
                self._reply(conn, EMPTY_MSG, addr)
                return IngestResult.EMPTY

            try:
                key = self.store.set(content)
            except KeyGenerationExhausted as e:
                logger.error("Could not store paste from %s: %s", addr, e)
                self._reply(conn, STORE_FULL_MSG, addr)
                return IngestResult.STORE_FULL

            logger.info("Stored paste %s (%d bytes) from %s", key, len(content), addr)
            self._reply(conn, f"key is {key}\n".encode("ascii"), addr)
            return IngestResult.STORED

    def _read_bounded(self, conn: socket.socket) -> Tuple[Optional[bytes], Optional[IngestResult]]:
        buf = bytearray()
        while True:
            try:
                chunk = conn.recv(self.chunk_size)
            except OSError as e:
                # Covers resets and idle timeouts; the peer gets no answer.
                logger.debug("Abandoning connection after read error: %s", e)
                return None, IngestResult.ABANDONED
            if not chunk:
                return bytes(buf), None
            if len(buf) + len(chunk) > self.max_size:
                return None, IngestResult.TOO_LARGE
            buf += chunk

    def _reply(self, conn: socket.socket, message: bytes, addr) -> None:
        try:
            conn.sendall(message)
        except OSError as e:
            logger.debug("Could not answer %s: %s", addr, e)
