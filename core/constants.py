# core/constants.py

# --- Roles ---
ROLE_MANAGEMENT = "management"
ROLE_TEAM_MEMBER = "team_member"

ROLE_CHOICES = (
    (ROLE_MANAGEMENT, "Management"),
    (ROLE_TEAM_MEMBER, "Team Member"),
)

ALLOWED_ROLES = frozenset(role for role, _ in ROLE_CHOICES)

# Legacy accounts were stored without a role
DEFAULT_ROLE = ROLE_TEAM_MEMBER

# --- Passwords ---
MIN_PASSWORD_LENGTH = 6

# --- Sessions ---
SESSION_LIFETIME_DAYS = 7

UNKNOWN_ACTOR = "Unknown User"
