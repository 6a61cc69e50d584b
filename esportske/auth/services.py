"""Service layer for identity, authorization and signup."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from firebase_admin import auth, exceptions

from esportske.core.constants import ADMIN_CLAIM, ROLE_ADMIN, ROLE_USER
from esportske.core.keys import user_key
from esportske.core.kv_store import KVStore
from esportske.core.types import Account, UserProfile
from esportske.core.utils import utcnow_iso
from esportske.errors import UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)


class AdminStatus(NamedTuple):
    """Outcome of an admin authorization check."""

    is_admin: bool
    user_id: str | None = None
    profile: UserProfile | None = None
    account: Account | None = None


def extract_bearer_token(header: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        raise UnauthorizedError("Unauthorized - no access token provided")
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Unauthorized - malformed authorization header")
    return token


def resolve_role(account: Account | None, profile: UserProfile | None) -> str:
    """Combine the provider's admin claim with the stored profile role."""
    if account and account.get("is_admin"):
        return ROLE_ADMIN
    if profile and profile.get("role") == ROLE_ADMIN:
        return ROLE_ADMIN
    return ROLE_USER


class AuthService:
    """Handles token verification, admin checks and account creation."""

    @staticmethod
    def resolve_account(token: str) -> Account:
        """Verify a bearer token with Firebase Auth and return the account.

        Raises:
            UnauthorizedError: If the token is empty, malformed, expired,
                revoked or belongs to a disabled or deleted account.
        """
        if not token:
            raise UnauthorizedError("Unauthorized - no access token provided")
        try:
            claims = auth.verify_id_token(token, check_revoked=True)
        except (
            ValueError,
            auth.InvalidIdTokenError,
            auth.UserDisabledError,
            auth.UserNotFoundError,
        ) as e:
            logger.info(f"Rejected access token: {e}")
            raise UnauthorizedError("Unauthorized - invalid access token") from e

        return {
            "id": claims["uid"],
            "email": claims.get("email"),
            "is_admin": bool(claims.get(ADMIN_CLAIM, False)),
        }

    @staticmethod
    def check_admin(token: str | None, store: KVStore | None = None) -> AdminStatus:
        """Decide whether the caller may use admin-only operations.

        An empty or invalid credential yields a not-admin status with no
        ``user_id`` instead of raising.
        """
        if not token:
            return AdminStatus(is_admin=False)
        try:
            account = AuthService.resolve_account(token)
        except UnauthorizedError:
            return AdminStatus(is_admin=False)

        store = store or KVStore()
        profile = store.get(user_key(account["id"]))
        role = resolve_role(account, profile)
        return AdminStatus(
            is_admin=role == ROLE_ADMIN,
            user_id=account["id"],
            profile=profile,
            account=account,
        )

    @staticmethod
    def sync_role_if_stale(
        account: Account, profile: UserProfile, store: KVStore | None = None
    ) -> UserProfile:
        """Write ``role: admin`` into a profile whose account carries the admin claim."""
        if not account.get("is_admin") or profile.get("role") == ROLE_ADMIN:
            return profile
        store = store or KVStore()
        updated = {**profile, "role": ROLE_ADMIN}
        store.set(user_key(account["id"]), updated)
        logger.info(f"Synced admin role into profile {account['id']}")
        return updated

    @staticmethod
    def signup(data: dict[str, Any], store: KVStore | None = None) -> UserProfile:
        """Create a Firebase account with a confirmed email and its profile.

        Raises:
            ValidationError: If Firebase rejects the account details.
        """
        store = store or KVStore()
        email = data["email"]
        name = data["name"]

        try:
            user_record = auth.create_user(
                email=email,
                password=data["password"],
                display_name=name,
                email_verified=True,
            )
        except auth.EmailAlreadyExistsError as e:
            raise ValidationError(str(e) or "Email address is already registered.") from e
        except (ValueError, exceptions.InvalidArgumentError) as e:
            raise ValidationError(str(e)) from e

        profile: UserProfile = {
            "id": user_record.uid,
            "email": email,
            "name": name,
            "location": data.get("location") or "",
            "favoriteGame": data.get("favoriteGame") or "",
            "role": ROLE_USER,
            "joinedAt": utcnow_iso(),
            "registeredTournaments": [],
            "registrationHistory": {},
            "gameStats": {},
        }
        if data.get("birthday"):
            profile["birthday"] = data["birthday"]

        try:
            store.set(user_key(user_record.uid), profile)
        except Exception:
            logger.error(f"Profile write failed for {user_record.uid}; removing account")
            try:
                auth.delete_user(user_record.uid)
            except exceptions.FirebaseError as cleanup_error:
                logger.error(f"Could not remove orphaned account {user_record.uid}: {cleanup_error}")
            raise

        return profile
