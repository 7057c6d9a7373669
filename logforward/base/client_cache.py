"""Process-wide pool of boto3 clients, one per service and credential set."""

from __future__ import annotations

import threading
from typing import Any, Callable


class ClientCache:
    """Thread-safe map of ``(service, credentials)`` to SDK client."""

    def __init__(self) -> None:
        self._clients: dict[tuple, Any] = {}
        self._lock = threading.Lock()

    def get_or_create(
        self,
        service_name: str,
        config: dict[str, Any],
        factory: Callable[[str, dict[str, Any]], Any],
    ) -> Any:
        """Return the client for *service_name*/*config*, building it on first use."""
        key = (service_name, tuple(sorted(config.items())))
        with self._lock:
            if key not in self._clients:
                self._clients[key] = factory(service_name, config)
            return self._clients[key]

    def clear(self) -> None:
        with self._lock:
            self._clients.clear()


client_cache = ClientCache()
