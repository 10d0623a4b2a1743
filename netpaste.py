"""netpaste server entry point.

Runs the raw TCP upload listener in the background and the HTTP
retrieval app in the foreground, both sharing one in-memory store.

    python3 netpaste.py [--config data/config/server_config.yml]
    echo hello | nc -N localhost 1337
    curl http://localhost:8080/<key>
"""
import logging
import sys

import uvicorn

from netpaste_lib.main import create_app, create_ingest_server
from netpaste_lib.setup import setup
from netpaste_lib.storage import create_store

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    rc, config = setup(sys.argv[1:] if argv is None else argv)
    if config is None:
        return rc

    store = create_store(key_max_attempts=config.key_max_attempts)
    app = create_app(config, store)

    ingest = create_ingest_server(config, store)
    try:
        ingest.start()
    except OSError as e:
        logger.error("Could not listen on %s:%d: %s", config.tcp_host, config.tcp_port, e)
        return 1

    logger.warning("Raw uploads on %s:%d, retrieval on http://%s:%d/<key>",
                   config.tcp_host, config.tcp_port, config.http_host, config.http_port)
    try:
        uvicorn.run(
            app,
            host=config.http_host,
            port=config.http_port,
            timeout_keep_alive=config.http_timeout_keep_alive,
            h11_max_incomplete_event_size=config.http_max_header_size,
            log_level=config.log_level.lower(),
        )
    finally:
        ingest.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
