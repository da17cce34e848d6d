"""
User preference storage (likes, dislikes, wishlist).
"""

from preferences.backends import (
    InMemoryKeyValueBackend,
    RedisKeyValueBackend,
    StorageUnavailableError,
)
from preferences.store import (
    PreferenceAction,
    PreferenceStore,
    UserPreferences,
    create_preference_store,
    preferences_key,
)

__all__ = [
    "InMemoryKeyValueBackend",
    "PreferenceAction",
    "PreferenceStore",
    "RedisKeyValueBackend",
    "StorageUnavailableError",
    "UserPreferences",
    "create_preference_store",
    "preferences_key",
]
