"""Server health utilities.

Provides a simple `get_health` function returning server status,
start time, uptime in seconds and the number of stored pastes.
"""
from datetime import datetime, timezone
import time

from netpaste_lib import __version__

# record process start time at import
_START_TIME = time.time()

def get_health(store=None) -> dict:
    """Return a dict representing server health.

    Fields:
    - status: 'ok'
    - start_time: ISO 8601 UTC timestamp when the process started
    - uptime_seconds: integer seconds since start
    - version: package version
    - pastes: number of stored pastes, or None without a store
    """
    now = time.time()
    uptime = int(now - _START_TIME)
    start_dt = datetime.fromtimestamp(_START_TIME, tz=timezone.utc)

    return {
        "status": "ok",
        "start_time": start_dt.isoformat(),
        "uptime_seconds": uptime,
        "version": __version__,
        "pastes": store.count() if store is not None else None,
    }
