from __future__ import annotations
import logging
from typing import Union


def configure_logging(level: Union[str, int] = logging.WARNING) -> logging.Logger:
    """Configure root logging for the application.

    Drops any handlers installed by earlier imports, applies the selected
    level and format, and returns a module logger for the caller.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logging.log(100, f'[netpaste]: Log level set to: {logging.getLevelName(level)}')

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)

    # Keep known noisy libraries quiet by default
    logging.getLogger('uvicorn.access').setLevel(max(level, logging.WARNING))
    logging.getLogger('httpx').setLevel(logging.WARNING)

    return logger
