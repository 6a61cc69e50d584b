"""Service for leaderboards, top games and player stats.

Nothing here is persisted as its own record: leaderboards and game rankings
are recomputed from profiles and rosters on every call.
"""

from __future__ import annotations

import logging
from typing import Any

from esportske.core.constants import (
    FIRESTORE_BATCH_LIMIT,
    TOURNAMENT_DATA_PREFIX,
    TREND_DOWN,
    TREND_SAME,
    TREND_UP,
    USER_PREFIX,
)
from esportske.core.keys import participant_prefix, user_key
from esportske.core.kv_store import KVStore
from esportske.core.types import GameStats, LeaderboardEntry, UserProfile
from esportske.core.utils import utcnow_iso
from esportske.errors import NotFoundError

logger = logging.getLogger(__name__)


def _trend(rank: int, previous_rank: int | None) -> str:
    if previous_rank is None:
        return TREND_SAME
    if rank < previous_rank:
        return TREND_UP
    if rank > previous_rank:
        return TREND_DOWN
    return TREND_SAME


def _game_stats(profile: UserProfile, game: str) -> GameStats:
    stats = (profile.get("gameStats") or {}).get(game) or {}
    return {
        "wins": stats.get("wins", 0),
        "points": stats.get("points", 0),
        "rank": stats.get("rank"),
        "previousRank": stats.get("previousRank"),
    }


def _ranked_rows(
    profiles: list[UserProfile], game: str, include_zero: bool
) -> list[dict[str, Any]]:
    """Sort profiles by their points in ``game``."""
    rows = []
    for profile in profiles:
        stats = _game_stats(profile, game)
        if not include_zero and stats["points"] <= 0:
            continue
        rows.append({"profile": profile, "stats": stats})
    rows.sort(
        key=lambda r: (
            -r["stats"]["points"],
            -r["stats"]["wins"],
            (r["profile"].get("name") or "").lower(),
        )
    )
    return rows


class LeaderboardService:
    """Handles leaderboard aggregation and stat maintenance."""

    @staticmethod
    def _profiles(store: KVStore) -> list[UserProfile]:
        return [p for p in store.get_by_prefix(USER_PREFIX) if p]

    @staticmethod
    def leaderboard(
        game: str, include_zero: bool = False, store: KVStore | None = None
    ) -> list[LeaderboardEntry]:
        """Rank players of ``game`` by points.

        Players without points are left out unless ``include_zero`` is set,
        which the admin roster view uses.
        """
        store = store or KVStore()
        rows = _ranked_rows(LeaderboardService._profiles(store), game, include_zero)

        leaderboard: list[LeaderboardEntry] = []
        for position, row in enumerate(rows, start=1):
            profile, stats = row["profile"], row["stats"]
            leaderboard.append(
                {
                    "userId": profile.get("id", ""),
                    "name": profile.get("name", ""),
                    "location": profile.get("location", ""),
                    "wins": stats["wins"],
                    "points": stats["points"],
                    "rank": position,
                    "previousRank": stats["previousRank"],
                    "trend": _trend(position, stats["previousRank"]),
                }
            )
        return leaderboard

    @staticmethod
    def top_games(store: KVStore | None = None) -> list[dict[str, Any]]:
        """Rank games by the number of distinct players registered for them."""
        store = store or KVStore()
        players_by_game: dict[str, set[str]] = {}
        for tournament in store.get_by_prefix(TOURNAMENT_DATA_PREFIX):
            if not tournament or not tournament.get("game") or not tournament.get("id"):
                continue
            players = players_by_game.setdefault(tournament["game"], set())
            for participant in store.get_by_prefix(participant_prefix(tournament["id"])):
                if participant and participant.get("userId"):
                    players.add(participant["userId"])

        games = [
            {"game": game, "players": len(players)}
            for game, players in players_by_game.items()
            if players
        ]
        games.sort(key=lambda g: (-g["players"], g["game"]))
        return games

    @staticmethod
    def update_player_stats(
        user_id: str,
        game: str,
        wins: int,
        points: int,
        store: KVStore | None = None,
    ) -> GameStats:
        """Set a player's wins and points for a game.

        ``rank`` and ``previousRank`` keep their values until the next
        rank recalculation.
        """
        store = store or KVStore()
        profile = store.get(user_key(user_id))
        if not profile:
            raise NotFoundError("User not found")

        game_stats = dict(profile.get("gameStats") or {})
        stats = {
            **(game_stats.get(game) or {}),
            "wins": wins,
            "points": points,
            "updatedAt": utcnow_iso(),
        }
        game_stats[game] = stats
        store.set(user_key(user_id), {**profile, "gameStats": game_stats})
        logger.info(f"Updated {game} stats for {user_id}: {wins} wins, {points} points")
        return stats

    @staticmethod
    def recalculate_ranks(game: str | None = None, store: KVStore | None = None) -> int:
        """Store fresh ranks, moving each player's old rank to ``previousRank``.

        Recalculates every game found in any profile when ``game`` is None.
        Returns the number of profiles written.
        """
        store = store or KVStore()
        profiles = {p["id"]: p for p in LeaderboardService._profiles(store) if p.get("id")}
        if game is None:
            games = sorted(
                {g for p in profiles.values() for g in (p.get("gameStats") or {})}
            )
        else:
            games = [game]

        changed: dict[str, UserProfile] = {}
        now = utcnow_iso()
        for current_game in games:
            ranked = _ranked_rows(list(profiles.values()), current_game, include_zero=False)
            new_ranks = {
                row["profile"]["id"]: position for position, row in enumerate(ranked, start=1)
            }
            for user_id, profile in list(profiles.items()):
                game_stats = profile.get("gameStats") or {}
                if current_game not in game_stats:
                    continue
                old = game_stats[current_game]
                stats = {
                    **old,
                    "previousRank": old.get("rank"),
                    "rank": new_ranks.get(user_id),
                    "updatedAt": now,
                }
                profile = {**profile, "gameStats": {**game_stats, current_game: stats}}
                profiles[user_id] = profile
                changed[user_id] = profile

        items = [(user_key(uid), profile) for uid, profile in changed.items()]
        for start in range(0, len(items), FIRESTORE_BATCH_LIMIT):
            store.apply(sets=dict(items[start : start + FIRESTORE_BATCH_LIMIT]))
        logger.info(f"Recalculated ranks for {len(games)} games, {len(changed)} profiles")
        return len(changed)
