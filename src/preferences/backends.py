"""
Key-value backends for user preference storage.

Both backends expose the same two calls, ``get(key)`` and ``set(key, value)``,
with JSON-serializable values:

1. InMemoryKeyValueBackend: process-local, lost on restart
2. RedisKeyValueBackend: durable, shared across workers

Backend failures surface as StorageUnavailableError so callers only need to
handle one exception type.
"""

import json
from threading import Lock
from typing import Any, Dict, Optional

import redis
from redis.exceptions import RedisError

from core.logging import get_logger

logger = get_logger(__name__)


class StorageUnavailableError(Exception):
    """Raised when a key-value backend cannot serve a request."""
    pass


# =============================================================================
# In-Memory Backend
# =============================================================================

class InMemoryKeyValueBackend:
    """
    Process-local key-value storage.

    Values are stored as JSON text so readers never share mutable objects
    with writers, matching what a round trip through Redis would give them.
    """

    name = "memory"

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        raw = json.dumps(value)
        with self._lock:
            self._data[key] = raw

    def get_stats(self) -> Dict[str, Any]:
        return {"backend": self.name, "keys": len(self._data)}


# =============================================================================
# Redis Backend
# =============================================================================

class RedisKeyValueBackend:
    """
    Redis-based key-value storage.

    The connection is checked with PING at construction, so an unreachable
    server is reported immediately rather than on the first request.
    """

    name = "redis"

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        socket_timeout: float = 2.0,
        client: Optional["redis.Redis"] = None,
    ):
        """
        Args:
            redis_url: Redis connection URL
            socket_timeout: Per-command socket timeout in seconds
            client: Pre-built client (tests pass a mock here)
        """
        self._redis_url = redis_url
        try:
            self._redis = client or redis.from_url(
                redis_url,
                decode_responses=True,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
            )
            self._redis.ping()
        except (RedisError, OSError) as e:
            raise StorageUnavailableError(f"Redis unreachable: {e}") from e

        logger.info("Connected to Redis", url=redis_url.split("@")[-1])

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self._redis.get(key)
        except (RedisError, OSError) as e:
            raise StorageUnavailableError(f"Redis GET failed: {e}") from e
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageUnavailableError(f"Undecodable value under {key}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            self._redis.set(key, json.dumps(value))
        except (RedisError, OSError) as e:
            raise StorageUnavailableError(f"Redis SET failed: {e}") from e

    def get_stats(self) -> Dict[str, Any]:
        return {"backend": self.name, "url": self._redis_url.split("@")[-1]}
