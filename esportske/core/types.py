"""Core data types for the esportske application."""

from typing import Dict, List, Optional, TypedDict  # noqa: UP035


class RegisteredTournament(TypedDict, total=False):
    """An entry in a profile's ``registeredTournaments`` list."""

    tournamentId: str
    tournamentTitle: str
    registeredAt: str
    gamertag: str


class RegistrationHistory(TypedDict):
    """Per-tournament registration attempt counter."""

    count: int
    isRegistered: bool


class GameStats(TypedDict, total=False):
    """A player's standing in a single game."""

    wins: int
    points: int
    rank: Optional[int]
    previousRank: Optional[int]
    updatedAt: str


class UserProfile(TypedDict, total=False):
    """A user profile stored under ``user:<id>``."""

    id: str
    email: str
    name: str
    location: str
    favoriteGame: str
    birthday: str
    role: str
    joinedAt: str
    registeredTournaments: List[RegisteredTournament]  # noqa: UP006
    registrationHistory: Dict[str, RegistrationHistory]  # noqa: UP006
    gameStats: Dict[str, GameStats]  # noqa: UP006


class Tournament(TypedDict, total=False):
    """A tournament or scrim stored under ``tournament:data:<id>``."""

    id: str
    title: str
    game: str
    host: str
    location: str
    area: str
    fullDate: str
    date: str
    time: str
    duration: str
    format: str
    type: str
    prizePool: str
    skillLevel: str
    maxAttendees: int
    image: str
    tags: List[str]  # noqa: UP006
    description: str
    requirements: str
    createdAt: str
    updatedAt: str


class Participant(TypedDict, total=False):
    """A roster entry stored under ``tournament:<tid>:participant:<uid>``."""

    userId: str
    userName: str
    userEmail: str
    location: str
    favoriteGame: str
    gamertag: str
    registeredAt: str


class AppConfig(TypedDict):
    """Option lists offered by the client forms."""

    locationOptions: List[str]  # noqa: UP006
    gameOptions: List[str]  # noqa: UP006


class BlogPost(TypedDict, total=False):
    """A blog post stored under ``blog:post:<id>``."""

    id: str
    title: str
    excerpt: str
    content: str
    author: str
    date: str
    category: str
    readTime: str
    imageUrl: str
    createdAt: str
    updatedAt: str


class Account(TypedDict):
    """The identity provider's view of a caller."""

    id: str
    email: Optional[str]
    is_admin: bool


class LeaderboardEntry(TypedDict):
    """A row of a computed leaderboard."""

    userId: str
    name: str
    location: str
    wins: int
    points: int
    rank: int
    previousRank: Optional[int]
    trend: str
