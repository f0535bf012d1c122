from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Physical expiry applied by the persistent backend when a paste has no TTL (24 hours)
    DEFAULT = 86_400  # 60 * 60 * 24
    # Longest TTL a writer may request (1 year)
    MAX = 31_536_000  # 60 * 60 * 24 * 365


class Limits:
    """Input limits for paste creation."""

    MAX_CONTENT_LENGTH = 1_000_000  # characters
    MAX_VIEWS = 1_000_000


class PasteId:
    """Paste identifier shape."""

    NUM_BYTES = 4  # 32 bits of entropy
    LENGTH = 8  # hex characters


class RedisSettings:
    """Persistent backend client settings."""

    DEFAULT_URL = 'redis://localhost:6379/0'
    CONNECT_TIMEOUT = 5  # seconds
    RETRIES = 3
    BACKOFF_BASE = 0.05  # 50 ms per failed attempt
    BACKOFF_CAP = 0.5  # 500 ms
    LOCK_TIMEOUT = 10  # seconds a per-paste lock may be held
    LOCK_BLOCKING_TIMEOUT = 5  # seconds to wait for a per-paste lock


class Backend(StrEnum):
    REDIS = 'redis'
    MEMORY = 'memory'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'
        TEST_MODE = 'TEST_MODE'

    class Store(StrEnum):
        BACKEND = 'PASTE_BACKEND'
        USE_MEMORY_STORE = 'USE_MEMORY_STORE'
        DEFAULT_TTL_SECONDS = 'DEFAULT_TTL_SECONDS'

    class Redis(StrEnum):
        URL = 'REDIS_URL'


# Request header carrying a deterministic reference time (epoch milliseconds) in test mode
TEST_NOW_HEADER = 'x-test-now-ms'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
