"""Key builders for the records kept in the key-value store."""

from __future__ import annotations

from .constants import BLOG_POST_PREFIX, TOURNAMENT_DATA_PREFIX, USER_PREFIX


def user_key(user_id: str) -> str:
    return f"{USER_PREFIX}{user_id}"


def tournament_key(tournament_id: str) -> str:
    return f"{TOURNAMENT_DATA_PREFIX}{tournament_id}"


def participant_prefix(tournament_id: str) -> str:
    return f"tournament:{tournament_id}:participant:"


def participant_key(tournament_id: str, user_id: str) -> str:
    return f"{participant_prefix(tournament_id)}{user_id}"


def parse_participant_key(key: str) -> tuple[str, str] | None:
    """Split ``tournament:<tid>:participant:<uid>`` into ``(tid, uid)``.

    Returns None for any other key under the ``tournament:`` namespace.
    """
    parts = key.split(":")
    if len(parts) != 4 or parts[0] != "tournament" or parts[2] != "participant":
        return None
    return parts[1], parts[3]


def blog_post_key(post_id: str) -> str:
    return f"{BLOG_POST_PREFIX}{post_id}"
