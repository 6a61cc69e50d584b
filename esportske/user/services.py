"""Service layer for reading and listing user profiles."""

from __future__ import annotations

from esportske.core.constants import USER_PREFIX
from esportske.core.keys import user_key
from esportske.core.kv_store import KVStore
from esportske.core.types import UserProfile
from esportske.errors import NotFoundError


class UserService:
    """Handles data access for user profiles."""

    @staticmethod
    def get_profile(user_id: str, store: KVStore | None = None) -> UserProfile:
        """Fetch a profile, raising NotFoundError if there is none."""
        store = store or KVStore()
        profile = store.get(user_key(user_id))
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    @staticmethod
    def list_profiles(store: KVStore | None = None) -> list[UserProfile]:
        """Fetch every profile, most recently joined first."""
        store = store or KVStore()
        profiles = [p for p in store.get_by_prefix(USER_PREFIX) if p]
        profiles.sort(key=lambda p: p.get("joinedAt") or "", reverse=True)
        return profiles
