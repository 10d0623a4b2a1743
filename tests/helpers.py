import socket
import threading
from typing import Any, Iterable, List, Optional
from starlette.testclient import TestClient
from netpaste_lib.services.container import ServiceContainer


def register_service_on_client(client: TestClient, name: str, instance: Any) -> None:
    """Register a service instance into the app's DI container for tests.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, 'paste_store', fake_store)
    """
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ServiceContainer()
        client.app.state.container = container

    container.register_singleton(name, instance)


class FakeConn:
    """Socket stand-in that replays scripted `recv` results.

    Items in `chunks` are returned in order; an exception instance is
    raised instead. Once exhausted, `recv` returns b'' (end of input).
    """

    def __init__(self, chunks: Iterable[Any], fail_send: bool = False):
        self._chunks = list(chunks)
        self.fail_send = fail_send
        self.sent: List[bytes] = []
        self.recv_sizes: List[int] = []
        self.closed = False

    def recv(self, size: int) -> bytes:
        self.recv_sizes.append(size)
        if not self._chunks:
            return b''
        item = self._chunks.pop(0)
        if isinstance(item, BaseException):
            raise item
        assert len(item) <= size
        return item

    def sendall(self, data: bytes) -> None:
        if self.fail_send:
            raise BrokenPipeError("peer went away")
        self.sent.append(data)

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def recv_all(sock: socket.socket) -> bytes:
    """Read until EOF; a reset after the reply counts as EOF."""
    data = b''
    while True:
        try:
            chunk = sock.recv(65536)
        except ConnectionResetError:
            return data
        if not chunk:
            return data
        data += chunk


def run_handler(handler, payload: bytes, half_close: bool = True):
    """Feed `payload` to `handler` over a socketpair.

    Returns (IngestResult, reply bytes).
    """
    client, server = socket.socketpair()
    results: List[Optional[Any]] = []
    t = threading.Thread(target=lambda: results.append(handler.handle(server)))
    t.start()
    try:
        try:
            client.sendall(payload)
            if half_close:
                client.shutdown(socket.SHUT_WR)
        except OSError:
            # The handler may hang up mid-upload (size cap).
            pass
        reply = recv_all(client)
    finally:
        client.close()
        t.join(timeout=10)
    assert not t.is_alive()
    return results[0], reply


def send_paste(address, payload: bytes, timeout: float = 10.0) -> bytes:
    """Upload `payload` to a running IngestServer and return its reply."""
    with socket.create_connection(address, timeout=timeout) as sock:
        sock.sendall(payload)
        sock.shutdown(socket.SHUT_WR)
        return recv_all(sock)
