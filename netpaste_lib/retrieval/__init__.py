from .api import extract_key, router

__all__ = ["extract_key", "router"]
