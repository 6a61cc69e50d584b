"""Service layer for tournaments, rosters and registration."""

from __future__ import annotations

import logging
from typing import Any

from esportske.core.constants import (
    MAX_REGISTRATION_ATTEMPTS,
    TOURNAMENT_DATA_PREFIX,
    TOURNAMENT_TYPE_TOURNAMENT,
    TOURNAMENT_TYPES,
)
from esportske.core.keys import (
    participant_key,
    participant_prefix,
    tournament_key,
    user_key,
)
from esportske.core.kv_store import KVStore
from esportske.core.types import Participant, RegisteredTournament, Tournament, UserProfile
from esportske.core.utils import generate_id, utcnow_iso
from esportske.errors import (
    AlreadyRegisteredError,
    LimitReachedError,
    NotFoundError,
    NotRegisteredError,
    ValidationError,
)

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("id", "createdAt")


def _validate_tournament_fields(data: dict[str, Any]) -> None:
    if "type" in data and data["type"] not in TOURNAMENT_TYPES:
        raise ValidationError(
            f"Tournament type must be one of: {', '.join(TOURNAMENT_TYPES)}"
        )
    if "tags" in data and not isinstance(data["tags"], list):
        raise ValidationError("Tags must be a list.")


def _without_registration(
    profile: UserProfile, tournament_id: str
) -> UserProfile:
    """Return a copy of ``profile`` with the tournament entry removed.

    The attempt counter is kept; only ``isRegistered`` is cleared.
    """
    registered = [
        t
        for t in profile.get("registeredTournaments") or []
        if t.get("tournamentId") != tournament_id
    ]
    history = dict(profile.get("registrationHistory") or {})
    entry = history.get(tournament_id, {"count": 0, "isRegistered": False})
    history[tournament_id] = {"count": entry.get("count", 0), "isRegistered": False}
    return {**profile, "registeredTournaments": registered, "registrationHistory": history}


class TournamentService:
    """Handles business logic and data access for tournaments."""

    @staticmethod
    def list_tournaments(
        tournament_type: str | None = None, store: KVStore | None = None
    ) -> list[Tournament]:
        """Fetch all tournaments, newest first, optionally of one type."""
        store = store or KVStore()
        tournaments = [t for t in store.get_by_prefix(TOURNAMENT_DATA_PREFIX) if t]
        if tournament_type:
            tournaments = [t for t in tournaments if t.get("type") == tournament_type]
        tournaments.sort(key=lambda t: t.get("createdAt") or "", reverse=True)
        return tournaments

    @staticmethod
    def get_tournament(tournament_id: str, store: KVStore | None = None) -> Tournament:
        """Fetch a tournament, raising NotFoundError if it does not exist."""
        store = store or KVStore()
        tournament = store.get(tournament_key(tournament_id))
        if not tournament:
            raise NotFoundError("Tournament not found")
        return tournament

    @staticmethod
    def create_tournament(
        data: dict[str, Any], store: KVStore | None = None
    ) -> Tournament:
        """Create a tournament with a server-generated id."""
        store = store or KVStore()
        if not str(data.get("title") or "").strip():
            raise ValidationError("Tournament title is required")
        _validate_tournament_fields(data)

        now = utcnow_iso()
        tournament: Tournament = {
            "type": TOURNAMENT_TYPE_TOURNAMENT,
            "tags": [],
            **data,
            "id": generate_id(),
            "createdAt": now,
            "updatedAt": now,
        }
        store.set(tournament_key(tournament["id"]), tournament)
        logger.info(f"Created tournament {tournament['id']}")
        return tournament

    @staticmethod
    def update_tournament(
        tournament_id: str, data: dict[str, Any], store: KVStore | None = None
    ) -> Tournament:
        """Merge ``data`` over a tournament, keeping its id and creation time."""
        store = store or KVStore()
        existing = TournamentService.get_tournament(tournament_id, store)
        _validate_tournament_fields(data)

        updated: Tournament = {**existing, **data}
        for field in IMMUTABLE_FIELDS:
            if field in existing:
                updated[field] = existing[field]
        updated["updatedAt"] = utcnow_iso()
        store.set(tournament_key(tournament_id), updated)
        return updated

    @staticmethod
    def delete_tournament(tournament_id: str, store: KVStore | None = None) -> int:
        """Delete a tournament and its roster. Returns the participants removed."""
        store = store or KVStore()
        TournamentService.get_tournament(tournament_id, store)

        keys = [key for key, _ in store.scan(participant_prefix(tournament_id))]
        removed = store.delete_many(keys)
        store.delete(tournament_key(tournament_id))
        logger.info(f"Deleted tournament {tournament_id} with {removed} participants")
        return removed

    @staticmethod
    def get_participants(
        tournament_id: str, store: KVStore | None = None
    ) -> list[Participant]:
        """Fetch a tournament's roster in registration order."""
        store = store or KVStore()
        participants = [p for p in store.get_by_prefix(participant_prefix(tournament_id)) if p]
        participants.sort(key=lambda p: p.get("registeredAt") or "")
        return participants

    @staticmethod
    def register(
        user_id: str,
        tournament_id: str,
        tournament_title: str,
        gamertag: str | None = None,
        store: KVStore | None = None,
    ) -> list[RegisteredTournament]:
        """Enter a user in a tournament.

        Each registration counts against a cap of three attempts per
        tournament; unregistering does not give the attempt back.

        Raises:
            NotFoundError: If the user has no profile.
            AlreadyRegisteredError: If the user is already entered.
            LimitReachedError: If the attempt cap has been used up.
        """
        store = store or KVStore()
        profile = store.get(user_key(user_id))
        if not profile:
            raise NotFoundError("User profile not found")

        registered = list(profile.get("registeredTournaments") or [])
        if any(t.get("tournamentId") == tournament_id for t in registered):
            raise AlreadyRegisteredError()

        history = dict(profile.get("registrationHistory") or {})
        count = history.get(tournament_id, {}).get("count", 0)
        if count >= MAX_REGISTRATION_ATTEMPTS:
            raise LimitReachedError(
                f"Registration limit reached ({MAX_REGISTRATION_ATTEMPTS} attempts) "
                "for this tournament"
            )

        now = utcnow_iso()
        entry: RegisteredTournament = {
            "tournamentId": tournament_id,
            "tournamentTitle": tournament_title,
            "registeredAt": now,
        }
        participant: Participant = {
            "userId": user_id,
            "userName": profile.get("name", ""),
            "userEmail": profile.get("email", ""),
            "location": profile.get("location", ""),
            "favoriteGame": profile.get("favoriteGame", ""),
            "registeredAt": now,
        }
        if gamertag:
            entry["gamertag"] = gamertag
            participant["gamertag"] = gamertag

        registered.append(entry)
        history[tournament_id] = {"count": count + 1, "isRegistered": True}
        updated = {
            **profile,
            "registeredTournaments": registered,
            "registrationHistory": history,
        }

        store.apply(
            sets={
                user_key(user_id): updated,
                participant_key(tournament_id, user_id): participant,
            }
        )
        logger.info(f"User {user_id} registered for {tournament_id} (attempt {count + 1})")
        return registered

    @staticmethod
    def unregister(
        user_id: str, tournament_id: str, store: KVStore | None = None
    ) -> list[RegisteredTournament]:
        """Withdraw a user from a tournament without resetting the attempt cap."""
        store = store or KVStore()
        profile = store.get(user_key(user_id))
        if not profile:
            raise NotFoundError("User profile not found")

        registered = profile.get("registeredTournaments") or []
        if not any(t.get("tournamentId") == tournament_id for t in registered):
            raise NotRegisteredError()

        updated = _without_registration(profile, tournament_id)
        store.apply(
            sets={user_key(user_id): updated},
            deletes=[participant_key(tournament_id, user_id)],
        )
        logger.info(f"User {user_id} unregistered from {tournament_id}")
        return updated["registeredTournaments"]

    @staticmethod
    def remove_participant(
        tournament_id: str, user_id: str, store: KVStore | None = None
    ) -> None:
        """Remove a user from a roster on an admin's behalf."""
        store = store or KVStore()
        key = participant_key(tournament_id, user_id)
        if store.get(key) is None:
            raise NotFoundError("Participant not found")

        sets = {}
        profile = store.get(user_key(user_id))
        if profile:
            sets[user_key(user_id)] = _without_registration(profile, tournament_id)
        store.apply(sets=sets, deletes=[key])
        logger.info(f"Removed participant {user_id} from {tournament_id}")
