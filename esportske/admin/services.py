"""Service layer for admin-related operations."""

from __future__ import annotations

import logging
from typing import Any

from firebase_admin import auth

from esportske.core.constants import (
    ADMIN_CLAIM,
    APP_CONFIG_KEY,
    DEFAULT_GAME_OPTIONS,
    DEFAULT_LOCATION_OPTIONS,
    ROLE_ADMIN,
    ROLES,
    TOURNAMENT_PREFIX,
)
from esportske.core.keys import parse_participant_key, user_key
from esportske.core.kv_store import KVStore
from esportske.core.types import AppConfig, UserProfile
from esportske.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


class AdminService:
    """Service class for admin-related operations."""

    @staticmethod
    def update_role(user_id: str, role: str, store: KVStore | None = None) -> UserProfile:
        """Set a user's role and mirror it into the admin custom claim."""
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
        store = store or KVStore()
        profile = store.get(user_key(user_id))
        if not profile:
            raise NotFoundError("User not found")

        updated = {**profile, "role": role}
        store.set(user_key(user_id), updated)
        try:
            auth.set_custom_user_claims(user_id, {ADMIN_CLAIM: role == ROLE_ADMIN})
            # Tokens minted before the change still carry the old claim.
            auth.revoke_refresh_tokens(user_id)
        except auth.UserNotFoundError:
            logger.warning(f"No auth account for {user_id}; role stored on profile only")
        logger.info(f"Set role of {user_id} to {role}")
        return updated

    @staticmethod
    def delete_user(user_id: str, store: KVStore | None = None) -> int:
        """Delete a user's rosters entries, profile and auth account.

        Every key under ``tournament:`` is scanned to find the user's
        participant records. Returns the number of records removed.
        """
        store = store or KVStore()
        if not store.get(user_key(user_id)):
            raise NotFoundError("User not found")

        participant_keys = []
        for key, _ in store.scan(TOURNAMENT_PREFIX):
            parsed = parse_participant_key(key)
            if parsed and parsed[1] == user_id:
                participant_keys.append(key)

        removed = store.delete_many(participant_keys)
        store.delete(user_key(user_id))
        try:
            auth.delete_user(user_id)
        except auth.UserNotFoundError:
            logger.info(f"Auth account for {user_id} was already gone")
        logger.info(f"Deleted user {user_id} and {removed} participant records")
        return removed

    @staticmethod
    def get_config(store: KVStore | None = None) -> AppConfig:
        """Fetch the app configuration, storing the defaults on first use."""
        store = store or KVStore()
        config = store.get(APP_CONFIG_KEY)
        if config is None:
            config = {
                "locationOptions": list(DEFAULT_LOCATION_OPTIONS),
                "gameOptions": list(DEFAULT_GAME_OPTIONS),
            }
            store.set(APP_CONFIG_KEY, config)
        return config

    @staticmethod
    def update_config(data: Any, store: KVStore | None = None) -> AppConfig:
        """Replace the app configuration. The last write wins."""
        if not isinstance(data, dict):
            raise ValidationError("Config must be a JSON object")
        location_options = data.get("locationOptions")
        game_options = data.get("gameOptions")
        if not _is_string_list(location_options) or not _is_string_list(game_options):
            raise ValidationError(
                "locationOptions and gameOptions must both be lists of strings"
            )

        store = store or KVStore()
        config: AppConfig = {
            "locationOptions": location_options,
            "gameOptions": game_options,
        }
        store.set(APP_CONFIG_KEY, config)
        return config
