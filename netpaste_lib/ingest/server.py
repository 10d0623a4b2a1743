"""TCP accept loop for raw-stream uploads.

Every accepted connection gets its own daemon thread running the
IngestionHandler, so a slow client only ever blocks itself.
"""
from __future__ import annotations
import logging
import socket
import threading
from typing import Optional, Tuple

from .handler import IngestionHandler

logger = logging.getLogger(__name__)


class IngestServer:
    """Accept raw TCP connections and hand each one to the handler.

    Usage:
        server = IngestServer(handler, host="0.0.0.0", port=1337)
        server.start()      # background thread
        ...
        server.shutdown()
    """

    def __init__(
        self,
        handler: IngestionHandler,
        host: str = "0.0.0.0",
        port: int = 1337,
        idle_timeout: Optional[float] = None,
        backlog: int = 128,
    ):
        self.handler = handler
        self.host = host
        self.port = port
        self.idle_timeout = idle_timeout
        self.backlog = backlog
        self._sock: Optional[socket.socket] = None
        self._lock = threading.Lock()
        self._shutdown_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> Tuple[str, int]:
        sock = self._sock
        if sock is None:
            raise RuntimeError("server is not bound")
        return sock.getsockname()[:2]

    def bind(self) -> Tuple[str, int]:
        """Open the listening socket and return the bound (host, port)."""
        sock = self._listener()
        if sock is None:
            raise RuntimeError("server has been shut down")
        return sock.getsockname()[:2]

    def _listener(self) -> Optional[socket.socket]:
        # None once shutdown() has run; a closed server is never reopened.
        with self._lock:
            if self._shutdown_event.is_set():
                return None
            if self._sock is None:
                sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
                try:
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                    sock.bind((self.host, self.port))
                    sock.listen(self.backlog)
                except OSError:
                    sock.close()
                    raise
                self._sock = sock
                logger.info("Listening for raw pastes on %s:%d", *sock.getsockname()[:2])
            return self._sock

    def serve_forever(self) -> None:
        sock = self._listener()
        if sock is None:
            return
        while not self._shutdown_event.is_set():
            try:
                conn, addr = sock.accept()
            except OSError as e:
                if self._shutdown_event.is_set():
                    break
                # A failed accept must not take the listener down.
                logger.warning("Failed to accept connection: %s", e)
                continue
            logger.debug("New connection from %s", addr)
            if self.idle_timeout is not None:
                conn.settimeout(self.idle_timeout)
            client_thread = threading.Thread(
                target=self._handle_client,
                args=(conn, addr),
                daemon=True,
            )
            client_thread.start()
        logger.info("Raw paste listener stopped")

    def start(self) -> threading.Thread:
        """Bind and run `serve_forever` on a background daemon thread."""
        self.bind()
        self._thread = threading.Thread(target=self.serve_forever, name="ingest-accept", daemon=True)
        self._thread.start()
        return self._thread

    def shutdown(self) -> None:
        with self._lock:
            self._shutdown_event.set()
            sock, self._sock = self._sock, None
        if sock is not None:
            try:
                # Wake a thread blocked in accept() before closing.
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=5)

    def _handle_client(self, conn: socket.socket, addr) -> None:
        try:
            self.handler.handle(conn, addr)
        except Exception:
            logger.exception("Unexpected error while handling %s", addr)
            conn.close()
