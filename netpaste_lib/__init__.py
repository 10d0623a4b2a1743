"""netpaste: an in-memory paste bin fed over raw TCP and read over HTTP."""

__version__ = "0.1.0"
