"""Core module for the esportske application."""

from .kv_store import KVStore
from .types import (
    Account,
    AppConfig,
    BlogPost,
    Participant,
    Tournament,
    UserProfile,
)

__all__ = [
    "KVStore",
    "Account",
    "AppConfig",
    "BlogPost",
    "Participant",
    "Tournament",
    "UserProfile",
]
