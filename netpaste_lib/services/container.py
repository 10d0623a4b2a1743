from typing import Any, Dict


class ServiceContainer:
    """Named singletons shared between the app factory and request handlers.

    `create_app` registers the paste store here; routes look it up per
    request through `resolve_service`, so an app never reaches for a
    module-level store.
    """

    def __init__(self) -> None:
        self._services: Dict[str, Any] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._services[key] = instance

    def get(self, key: str) -> Any:
        try:
            return self._services[key]
        except KeyError:
            raise KeyError(f"No service registered for key '{key}'") from None
