"""
Preference Store.

Holds per-user liked / disliked / saved product id sets under the key
``user:{user_id}:prefs``.

Storage lifecycle:
- A durable backend (Redis) is used when one could be created at startup.
- The first failure against it switches the store to the injected in-memory
  fallback for the rest of the process. There is no promotion back.
- While the durable backend is healthy every value read from or written to it
  is mirrored into the fallback, so preferences recorded before a failure are
  still visible after it.

Callers never see backend errors from get/update/wishlist.

update() is a plain read-modify-write with no lock or compare-and-set:
two concurrent updates for the same user race and the last full write wins.
"""

from dataclasses import dataclass, field
from enum import Enum
from threading import Lock
from typing import Any, Dict, Optional, Set

from config.settings import Settings
from core.logging import get_logger
from preferences.backends import (
    InMemoryKeyValueBackend,
    RedisKeyValueBackend,
    StorageUnavailableError,
)

logger = get_logger(__name__)


# =============================================================================
# Data Model
# =============================================================================

class PreferenceAction(str, Enum):
    """User actions that mutate preferences."""
    LIKE = "like"
    DISLIKE = "dislike"
    SAVE = "save"


_ACTION_FIELDS = {
    PreferenceAction.LIKE: "liked",
    PreferenceAction.DISLIKE: "disliked",
    PreferenceAction.SAVE: "saved",
}


@dataclass
class UserPreferences:
    """Liked, disliked and saved product ids for one user."""
    liked: Set[str] = field(default_factory=set)
    disliked: Set[str] = field(default_factory=set)
    saved: Set[str] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with sorted lists so the stored JSON is stable."""
        return {
            "liked": sorted(self.liked),
            "disliked": sorted(self.disliked),
            "saved": sorted(self.saved),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserPreferences":
        return cls(
            liked=_id_set(data.get("liked")),
            disliked=_id_set(data.get("disliked")),
            saved=_id_set(data.get("saved")),
        )


def _id_set(value: Any) -> Set[str]:
    # Anything but a list of ids counts as empty.
    if not isinstance(value, list):
        return set()
    return {str(v) for v in value}


def preferences_key(user_id: str) -> str:
    return f"user:{user_id}:prefs"


# =============================================================================
# Store
# =============================================================================

class PreferenceStore:
    """
    Durable-with-fallback preference storage.

    Usage:
        store = PreferenceStore(durable=RedisKeyValueBackend(url))
        store.update("guest", "p001", "save")
        store.wishlist("guest")  # {"p001"}
    """

    def __init__(
        self,
        durable: Optional[Any] = None,
        fallback: Optional[InMemoryKeyValueBackend] = None,
    ):
        """
        Args:
            durable: Backend with get/set raising StorageUnavailableError,
                     or None to start directly on the fallback
            fallback: Process-local backend used after degradation
        """
        self._durable = durable
        self._fallback = fallback if fallback is not None else InMemoryKeyValueBackend()
        self._degraded = durable is None
        self._state_lock = Lock()

    # =========================================================
    # Backend State
    # =========================================================

    @property
    def is_degraded(self) -> bool:
        return self._degraded

    @property
    def backend_name(self) -> str:
        if self._degraded:
            return self._fallback.name
        return getattr(self._durable, "name", type(self._durable).__name__)

    def _degrade(self, error: Exception) -> None:
        with self._state_lock:
            if self._degraded:
                return
            self._degraded = True
        logger.warning(
            "Preference store degraded to in-memory fallback",
            error=str(error),
        )

    def _read(self, key: str) -> Optional[Any]:
        if not self._degraded:
            try:
                value = self._durable.get(key)
            except StorageUnavailableError as e:
                self._degrade(e)
            else:
                if value is not None:
                    self._fallback.set(key, value)
                return value
        return self._fallback.get(key)

    def _write(self, key: str, value: Any) -> None:
        if not self._degraded:
            try:
                self._durable.set(key, value)
            except StorageUnavailableError as e:
                self._degrade(e)
        self._fallback.set(key, value)

    # =========================================================
    # Public API
    # =========================================================

    def get(self, user_id: str) -> UserPreferences:
        """Stored preferences for ``user_id``, or empty sets if none exist."""
        data = self._read(preferences_key(user_id))
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Ignoring malformed preferences record", user_id=user_id)
            return UserPreferences()
        return UserPreferences.from_dict(data)

    def update(self, user_id: str, product_id: str, action: str) -> UserPreferences:
        """
        Add ``product_id`` to the set named by ``action`` and persist.

        Adding an id that is already present is a no-op apart from the
        write-back.

        Raises:
            ValueError: If action is not like, dislike or save
        """
        field_name = _ACTION_FIELDS[PreferenceAction(action)]

        prefs = self.get(user_id)
        getattr(prefs, field_name).add(product_id)
        self._write(preferences_key(user_id), prefs.to_dict())

        logger.info(
            "Preference updated",
            user_id=user_id,
            product_id=product_id,
            action=field_name,
            backend=self.backend_name,
        )
        return prefs

    def wishlist(self, user_id: str) -> Set[str]:
        """Saved product ids for ``user_id``."""
        return set(self.get(user_id).saved)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "backend": self.backend_name,
            "degraded": self._degraded,
            "fallback": self._fallback.get_stats(),
        }


def create_preference_store(settings: Settings) -> PreferenceStore:
    """
    Build a store from settings.

    Tries Redis when enabled; if it cannot be reached the store starts on
    the in-memory fallback.
    """
    durable = None
    if settings.redis_enabled:
        try:
            durable = RedisKeyValueBackend(
                redis_url=settings.redis_url,
                socket_timeout=settings.redis_socket_timeout_seconds,
            )
        except StorageUnavailableError as e:
            logger.warning("Redis connection failed, using in-memory fallback", error=str(e))
    else:
        logger.info("Redis disabled, using in-memory preference store")

    return PreferenceStore(durable=durable)
