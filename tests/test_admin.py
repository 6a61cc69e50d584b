"""Tests for the admin blueprint."""

from __future__ import annotations

from firebase_admin import auth

from esportske.core.constants import DEFAULT_GAME_OPTIONS, DEFAULT_LOCATION_OPTIONS
from esportske.core.keys import participant_key
from tests.helpers import (
    ADMIN_TOKEN,
    CLAIM_ADMIN_ID,
    CLAIM_ADMIN_TOKEN,
    USER_ID,
    USER_TOKEN,
    ApiTestCase,
    verify_token,
)

ADMIN_ROUTES = [
    ("post", "/api/admin/tournaments"),
    ("put", "/api/admin/tournaments/t1"),
    ("delete", "/api/admin/tournaments/t1"),
    ("delete", "/api/admin/tournament/t1/participant/user1"),
    ("get", "/api/admin/users"),
    ("patch", "/api/admin/users/user1/role"),
    ("delete", "/api/admin/users/user1"),
    ("get", "/api/admin/config"),
    ("put", "/api/admin/config"),
    ("get", "/api/admin/blog-posts"),
    ("post", "/api/admin/blog-posts"),
    ("get", "/api/admin/blog-posts/p1"),
    ("put", "/api/admin/blog-posts/p1"),
    ("delete", "/api/admin/blog-posts/p1"),
    ("get", "/api/admin/leaderboard/FIFA%2024"),
    ("post", "/api/admin/update-player-stats"),
    ("post", "/api/admin/recalculate-ranks"),
]


class AdminAccessTestCase(ApiTestCase):
    """Every admin route rejects regular users before doing any work."""

    def test_admin_routes_forbidden_for_regular_user(self) -> None:
        self.create_profile()
        self.create_tournament("t1")
        for method, url in ADMIN_ROUTES:
            with self.subTest(method=method, url=url):
                response = getattr(self.client, method)(
                    url,
                    json={"title": "Cup", "role": "admin"},
                    headers=self.auth_headers(USER_TOKEN),
                )
                self.assertEqual(response.status_code, 403)
        self.assertIsNotNone(self.store.get("tournament:data:t1"))
        self.assertEqual(self.store.get(f"user:{USER_ID}")["role"], "user")

    def test_admin_routes_require_token(self) -> None:
        for method, url in ADMIN_ROUTES:
            with self.subTest(method=method, url=url):
                response = getattr(self.client, method)(url, json={})
                self.assertEqual(response.status_code, 401)


class AdminTournamentScenarioTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.create_admin()

    def test_create_list_and_update(self) -> None:
        response = self.client.post(
            "/api/admin/tournaments",
            json={"title": "Cup", "game": "FIFA 24", "type": "tournament"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 201)
        created = response.json["tournament"]
        self.assertTrue(created["id"])

        listed = self.client.get("/api/tournaments").json["tournaments"]
        self.assertIn(created["id"], [t["id"] for t in listed])

        response = self.client.put(
            f"/api/admin/tournaments/{created['id']}",
            json={"location": "Karen"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 200)

        fetched = self.store.get(f"tournament:data:{created['id']}")
        self.assertEqual(fetched["location"], "Karen")
        self.assertEqual(fetched["title"], "Cup")
        self.assertEqual(fetched["id"], created["id"])
        self.assertEqual(fetched["createdAt"], created["createdAt"])

    def test_invalid_body(self) -> None:
        response = self.client.post(
            "/api/admin/tournaments",
            data="not json",
            content_type="text/plain",
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["error"], "Request body must be a JSON object")


class AdminUsersTestCase(ApiTestCase):
    """Test case for user management."""

    def setUp(self) -> None:
        super().setUp()
        self.create_admin()
        self.create_profile(joinedAt="2024-05-01T00:00:00+00:00")

    def test_list_users_newest_first(self) -> None:
        response = self.client.get("/api/admin/users", headers=self.auth_headers(ADMIN_TOKEN))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([u["id"] for u in response.json["users"]], [USER_ID, "admin1"])

    def test_promote_user(self) -> None:
        response = self.client.patch(
            f"/api/admin/users/{USER_ID}/role",
            json={"role": "admin"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["user"]["role"], "admin")
        self.assertEqual(self.store.get(f"user:{USER_ID}")["role"], "admin")
        self.mocks["set_custom_user_claims"].assert_called_once_with(
            USER_ID, {"is_admin": True}
        )

        response = self.client.get("/api/admin/users", headers=self.auth_headers(USER_TOKEN))
        self.assertEqual(response.status_code, 200)

    def test_demoted_admin_keeps_user_role(self) -> None:
        self.create_profile(CLAIM_ADMIN_ID, role="admin")
        revoked: set[str] = set()
        self.mocks["revoke_refresh_tokens"].side_effect = revoked.add

        def verify(token, check_revoked=False):
            claims = verify_token(token, check_revoked)
            if check_revoked and claims["uid"] in revoked:
                raise auth.RevokedIdTokenError("The Firebase ID token has been revoked.")
            return claims

        self.mocks["verify_id_token"].side_effect = verify

        response = self.client.patch(
            f"/api/admin/users/{CLAIM_ADMIN_ID}/role",
            json={"role": "user"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 200)
        self.mocks["set_custom_user_claims"].assert_called_once_with(
            CLAIM_ADMIN_ID, {"is_admin": False}
        )
        self.mocks["revoke_refresh_tokens"].assert_called_once_with(CLAIM_ADMIN_ID)

        response = self.client.get(
            "/api/profile", headers=self.auth_headers(CLAIM_ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 401)
        response = self.client.get(
            "/api/admin/users", headers=self.auth_headers(CLAIM_ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.store.get(f"user:{CLAIM_ADMIN_ID}")["role"], "user")

    def test_demote_user_without_auth_account(self) -> None:
        self.mocks["set_custom_user_claims"].side_effect = auth.UserNotFoundError(
            "No user record found"
        )
        response = self.client.patch(
            f"/api/admin/users/{USER_ID}/role",
            json={"role": "user"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 200)

    def test_invalid_role(self) -> None:
        response = self.client.patch(
            f"/api/admin/users/{USER_ID}/role",
            json={"role": "owner"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.store.get(f"user:{USER_ID}")["role"], "user")

    def test_role_for_missing_user(self) -> None:
        response = self.client.patch(
            "/api/admin/users/ghost/role",
            json={"role": "admin"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json["error"], "User not found")

    def test_delete_user_removes_participants_and_account(self) -> None:
        self.create_tournament("t1")
        self.create_tournament("t2")
        self.add_participant("t1", USER_ID)
        self.add_participant("t2", USER_ID)
        self.add_participant("t1", "other")

        response = self.client.delete(
            f"/api/admin/users/{USER_ID}", headers=self.auth_headers(ADMIN_TOKEN)
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["removedParticipants"], 2)
        self.assertIsNone(self.store.get(f"user:{USER_ID}"))
        self.assertIsNone(self.store.get(participant_key("t1", USER_ID)))
        self.assertIsNone(self.store.get(participant_key("t2", USER_ID)))
        self.assertIsNotNone(self.store.get(participant_key("t1", "other")))
        self.assertIsNotNone(self.store.get("tournament:data:t1"))
        self.mocks["delete_user"].assert_called_once_with(USER_ID)

    def test_delete_user_tolerates_missing_auth_account(self) -> None:
        self.mocks["delete_user"].side_effect = auth.UserNotFoundError("No user record found")
        response = self.client.delete(
            f"/api/admin/users/{USER_ID}", headers=self.auth_headers(ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(self.store.get(f"user:{USER_ID}"))

    def test_delete_missing_user(self) -> None:
        response = self.client.delete(
            "/api/admin/users/ghost", headers=self.auth_headers(ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 404)


class AdminConfigTestCase(ApiTestCase):
    """Test case for the app configuration record."""

    def setUp(self) -> None:
        super().setUp()
        self.create_admin()

    def test_defaults(self) -> None:
        response = self.client.get("/api/admin/config", headers=self.auth_headers(ADMIN_TOKEN))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json["config"],
            {"locationOptions": DEFAULT_LOCATION_OPTIONS, "gameOptions": DEFAULT_GAME_OPTIONS},
        )

    def test_round_trip(self) -> None:
        payload = {"locationOptions": ["A"], "gameOptions": ["B"]}
        response = self.client.put(
            "/api/admin/config", json=payload, headers=self.auth_headers(ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.get("/api/admin/config", headers=self.auth_headers(ADMIN_TOKEN))
        self.assertEqual(response.json["config"], payload)

    def test_replaces_without_merge(self) -> None:
        self.client.put(
            "/api/admin/config",
            json={"locationOptions": ["A", "B"], "gameOptions": ["C"], "extra": 1},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.client.put(
            "/api/admin/config",
            json={"locationOptions": ["Z"], "gameOptions": []},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(
            self.store.get("app:config"), {"locationOptions": ["Z"], "gameOptions": []}
        )

    def test_rejects_malformed_config(self) -> None:
        for body in ({"locationOptions": "A", "gameOptions": ["B"]}, {"gameOptions": ["B"]}, [1]):
            with self.subTest(body=body):
                response = self.client.put(
                    "/api/admin/config", json=body, headers=self.auth_headers(ADMIN_TOKEN)
                )
                self.assertEqual(response.status_code, 400)


class AdminBlogTestCase(ApiTestCase):
    """Test case for blog management."""

    def setUp(self) -> None:
        super().setUp()
        self.create_admin()

    def _create(self, **data):
        body = {"title": "Launch", "content": "We are live", **data}
        return self.client.post(
            "/api/admin/blog-posts", json=body, headers=self.auth_headers(ADMIN_TOKEN)
        )

    def test_create_and_list(self) -> None:
        response = self._create(category="News", date="2024-03-01")
        self.assertEqual(response.status_code, 201)
        post = response.json["post"]
        self.assertEqual(post["excerpt"], "")

        self._create(title="Older", date="2024-01-01", category="Guides")

        response = self.client.get("/api/blog-posts")
        self.assertEqual([p["title"] for p in response.json["posts"]], ["Launch", "Older"])

        response = self.client.get("/api/blog-posts?category=Guides")
        self.assertEqual([p["title"] for p in response.json["posts"]], ["Older"])

        response = self.client.get(
            f"/api/admin/blog-posts/{post['id']}", headers=self.auth_headers(ADMIN_TOKEN)
        )
        self.assertEqual(response.json["post"]["title"], "Launch")

    def test_create_requires_title_and_content(self) -> None:
        response = self.client.post(
            "/api/admin/blog-posts",
            json={"title": "Only a title"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["error"], "Title and content are required")

    def test_update_and_delete(self) -> None:
        post = self._create().json["post"]

        response = self.client.put(
            f"/api/admin/blog-posts/{post['id']}",
            json={"content": "Updated", "id": "other"},
            headers=self.auth_headers(ADMIN_TOKEN),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["post"]["content"], "Updated")
        self.assertEqual(response.json["post"]["id"], post["id"])
        self.assertEqual(response.json["post"]["title"], "Launch")

        response = self.client.delete(
            f"/api/admin/blog-posts/{post['id']}", headers=self.auth_headers(ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/blog-posts").json["posts"], [])

        response = self.client.delete(
            f"/api/admin/blog-posts/{post['id']}", headers=self.auth_headers(ADMIN_TOKEN)
        )
        self.assertEqual(response.status_code, 404)
