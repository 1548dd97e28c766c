"""Constants for the template cache."""

# Storage key prefixes; the active key is "<prefix>_<user_id>"
TEMPLATE_CACHE_PREFIX = "notasai_template_cache"
TEMPLATE_USAGE_PREFIX = "notasai_template_usage"

# Cache defaults
DEFAULT_CACHE_MAX_SIZE = 50
DEFAULT_CACHE_MAX_AGE_SECONDS = 30 * 60
# Bump to invalidate every stored cache of every user on next cold start
DEFAULT_CACHE_VERSION = 2
DEFAULT_MOST_USED_LIMIT = 5

# Stats labels
STATS_NOT_AVAILABLE = "N/A"
STATS_ERROR = "Error"
STATS_NONE_USED = "none used yet"
EMPTY_CACHE_SIZE = "0 KB"
BYTES_PER_KB = 1024

# Supported storage types
STORAGE_MEMORY = "memory"
STORAGE_FILE = "file"
STORAGE_SQLITE = "sqlite"
STORAGE_NONE = "none"

# Auth state change events
AUTH_EVENT_INITIAL_SESSION = "INITIAL_SESSION"
AUTH_EVENT_SIGNED_IN = "SIGNED_IN"
AUTH_EVENT_SIGNED_OUT = "SIGNED_OUT"
AUTH_EVENT_TOKEN_REFRESHED = "TOKEN_REFRESHED"
AUTH_EVENT_USER_UPDATED = "USER_UPDATED"

# SQLite pragmas for the key-value store
PRAGMA_JOURNAL_MODE = "PRAGMA journal_mode=WAL"
PRAGMA_SYNCHRONOUS = "PRAGMA synchronous=NORMAL"
