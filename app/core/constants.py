"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache and session key structure (DRY).
"""

# Cache key prefixes
CACHE_PREFIX_SESSION = "session"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Session payload fields (mirrors what sign-in stores)
SESSION_FIELD_USERNAME = "username"
SESSION_FIELD_TOKEN = "token"

# Recipe list snapshot: counter bumped by every write, and the snapshot fields
CACHE_SUFFIX_GENERATION = "generation"
SNAPSHOT_FIELD_GENERATION = "generation"
SNAPSHOT_FIELD_RECIPES = "recipes"
