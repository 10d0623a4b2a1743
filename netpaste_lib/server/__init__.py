from .health import get_health

__all__ = ["get_health"]
