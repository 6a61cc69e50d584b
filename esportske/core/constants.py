"""Global constants for the esportske application."""

# Storage
KV_COLLECTION = "kv_store"
FIRESTORE_BATCH_LIMIT = 400

# Key namespaces
USER_PREFIX = "user:"
TOURNAMENT_PREFIX = "tournament:"
TOURNAMENT_DATA_PREFIX = "tournament:data:"
BLOG_POST_PREFIX = "blog:post:"
APP_CONFIG_KEY = "app:config"

# Roles
ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

# Firebase custom claim carrying the admin flag
ADMIN_CLAIM = "is_admin"

# Tournament types
TOURNAMENT_TYPE_TOURNAMENT = "tournament"
TOURNAMENT_TYPE_SCRIM = "scrim"
TOURNAMENT_TYPES = (TOURNAMENT_TYPE_TOURNAMENT, TOURNAMENT_TYPE_SCRIM)

# Registration
MAX_REGISTRATION_ATTEMPTS = 3

# Leaderboard trends
TREND_UP = "up"
TREND_DOWN = "down"
TREND_SAME = "same"

DEFAULT_LOCATION_OPTIONS = [
    "Westlands",
    "Karen",
    "CBD",
    "Kileleshwa",
    "Kilimani",
    "Lavington",
    "Parklands",
    "Other",
]

DEFAULT_GAME_OPTIONS = [
    "FIFA 24",
    "Valorant",
    "Call of Duty",
    "CS:GO",
    "League of Legends",
    "Rocket League",
    "Tekken 8",
    "Apex Legends",
    "Other",
]
