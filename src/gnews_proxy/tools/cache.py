import time
from typing import Any, Callable, Dict, Tuple


DEFAULT_TTL_SECONDS = 600
DEFAULT_SWEEP_EVERY = 100


class TTLCache:
    """In-memory key/value store with per-entry expiry.

    Expired entries are treated as absent and dropped lazily on read. Every
    ``sweep_every`` puts the whole store is swept with ``purge_expired`` so
    keys that are never read again do not pile up. No locking: concurrent
    writers of the same key simply overwrite each other.
    """

    def __init__(
        self,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = DEFAULT_SWEEP_EVERY,
    ) -> None:
        self.default_ttl = default_ttl_seconds
        self.sweep_every = max(1, sweep_every)
        self._clock = clock
        self._store: Dict[str, Tuple[float, Any]] = {}
        self._puts_since_sweep = 0

    def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        self._puts_since_sweep += 1
        if self._puts_since_sweep >= self.sweep_every:
            self._puts_since_sweep = 0
            self.purge_expired()

        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        self._store[key] = (self._clock() + ttl, value)

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            self._store.pop(key, None)
            return None
        return value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        # snapshot: other request threads may write while we scan
        expired = [
            key for key, (expires_at, _) in list(self._store.items()) if now >= expires_at
        ]
        for key in expired:
            self._store.pop(key, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._store)
