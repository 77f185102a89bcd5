"""
Garden CRM API - List Cache
Cache TTL por proceso para listados, con invalidación explícita al escribir
"""

import time
from collections import OrderedDict
from threading import Lock
from typing import Any, Callable, Hashable, Optional


class ListCache:
    """
    Cache de listados por (owner_id, recurso).
    Cualquier escritura correcta invalida el listado afectado para que
    la siguiente lectura vuelva a la BD.
    """

    def __init__(self, enabled: bool = True, ttl_seconds: int = 60, maxsize: int = 256):
        self.enabled = enabled and ttl_seconds > 0 and maxsize > 0
        self.ttl = ttl_seconds
        self.maxsize = maxsize
        self._store: "OrderedDict[Hashable, tuple]" = OrderedDict()
        self._lock = Lock()

    def get(self, key: Hashable, loader: Optional[Callable[[], Any]] = None) -> Any:
        if self.enabled:
            now = time.monotonic()
            with self._lock:
                entry = self._store.get(key)
                if entry:
                    expires_at, value = entry
                    if expires_at > now:
                        self._store.move_to_end(key)
                        return value
                    self._store.pop(key, None)

        if loader is None:
            return None

        value = loader()
        self.set(key, value)
        return value

    def set(self, key: Hashable, value: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._store[key] = (time.monotonic() + self.ttl, value)
            self._store.move_to_end(key)
            if len(self._store) > self.maxsize:
                self._store.popitem(last=False)

    def invalidate(self, owner_id: Any, *resources: str) -> None:
        """Invalida los listados indicados del owner"""
        with self._lock:
            for resource in resources:
                self._store.pop((str(owner_id), resource), None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    @staticmethod
    def key(owner_id: Any, resource: str) -> tuple:
        return (str(owner_id), resource)
