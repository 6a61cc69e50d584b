"""Shared setup for API tests backed by mockfirestore."""

from __future__ import annotations

import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from firebase_admin import auth

from esportske import create_app
from esportske.core.keys import participant_key, tournament_key, user_key
from esportske.core.kv_store import KVStore
from tests.mock_utils import EnhancedMockFirestore, patch_mockfirestore

patch_mockfirestore()

USER_ID = "user1"
USER_TOKEN = "user-token"  # nosec
ADMIN_ID = "admin1"
ADMIN_TOKEN = "admin-token"  # nosec
CLAIM_ADMIN_ID = "claim-admin"
CLAIM_ADMIN_TOKEN = "claim-admin-token"  # nosec

TOKENS = {
    USER_TOKEN: {"uid": USER_ID, "email": "user1@example.com"},
    ADMIN_TOKEN: {"uid": ADMIN_ID, "email": "admin1@example.com"},
    CLAIM_ADMIN_TOKEN: {
        "uid": CLAIM_ADMIN_ID,
        "email": "claim@example.com",
        "is_admin": True,
    },
}


class MockFieldFilter:
    def __init__(self, field_path, op_string, value):
        self.field_path = field_path
        self.op_string = op_string
        self.value = value


def verify_token(token, check_revoked=False):
    if token not in TOKENS:
        raise auth.InvalidIdTokenError("Invalid ID token")
    return dict(TOKENS[token])


def make_profile(user_id: str, **overrides: Any) -> dict[str, Any]:
    profile = {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "name": user_id.title(),
        "location": "Westlands",
        "favoriteGame": "FIFA 24",
        "role": "user",
        "joinedAt": "2024-01-01T00:00:00+00:00",
        "registeredTournaments": [],
        "registrationHistory": {},
        "gameStats": {},
    }
    profile.update(overrides)
    return profile


class ApiTestCase(unittest.TestCase):
    """Base test case with a mock Firestore, mocked Firebase Auth and a client."""

    def setUp(self) -> None:
        self.mock_db = EnhancedMockFirestore()

        self.mock_firestore_module = MagicMock()
        self.mock_firestore_module.client.return_value = self.mock_db
        self.mock_firestore_module.FieldFilter = MockFieldFilter

        patchers = {
            "init_app": patch("firebase_admin.initialize_app"),
            "firestore": patch(
                "esportske.core.kv_store.firestore", new=self.mock_firestore_module
            ),
            "verify_id_token": patch(
                "firebase_admin.auth.verify_id_token", side_effect=verify_token
            ),
            "create_user": patch("firebase_admin.auth.create_user"),
            "delete_user": patch("firebase_admin.auth.delete_user"),
            "set_custom_user_claims": patch("firebase_admin.auth.set_custom_user_claims"),
            "revoke_refresh_tokens": patch("firebase_admin.auth.revoke_refresh_tokens"),
        }

        self.mocks = {name: p.start() for name, p in patchers.items()}
        for p in patchers.values():
            self.addCleanup(p.stop)

        self.app = create_app({"TESTING": True, "SECRET_KEY": "test"})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()
        self.store = KVStore()

    def tearDown(self) -> None:
        self.app_context.pop()

    def auth_headers(self, token: str = USER_TOKEN) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def create_profile(self, user_id: str = USER_ID, **overrides: Any) -> dict[str, Any]:
        profile = make_profile(user_id, **overrides)
        self.store.set(user_key(user_id), profile)
        return profile

    def create_admin(self) -> dict[str, Any]:
        return self.create_profile(ADMIN_ID, role="admin", name="Admin")

    def create_tournament(self, tournament_id: str = "t1", **overrides: Any) -> dict[str, Any]:
        tournament = {
            "id": tournament_id,
            "title": f"Tournament {tournament_id}",
            "type": "tournament",
            "game": "FIFA 24",
            "tags": [],
            "createdAt": "2024-01-01T00:00:00+00:00",
            "updatedAt": "2024-01-01T00:00:00+00:00",
        }
        tournament.update(overrides)
        self.store.set(tournament_key(tournament_id), tournament)
        return tournament

    def add_participant(self, tournament_id: str, user_id: str) -> None:
        self.store.set(
            participant_key(tournament_id, user_id),
            {
                "userId": user_id,
                "userName": user_id.title(),
                "userEmail": f"{user_id}@example.com",
                "location": "Westlands",
                "favoriteGame": "FIFA 24",
                "registeredAt": "2024-01-02T00:00:00+00:00",
            },
        )
