"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, DATABASE_URL for
postgres) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, and database_url when the backend is
    postgres).
    """

    # App
    app_name: str = "recipes-api"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: "postgres" (SQLAlchemy async) or "memory" (process-local stores)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    database_create_tables: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    # Memory backend only: "user:password,user2:password2" created at startup.
    memory_seed_users: SecretStr | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 10
    refresh_token_expire_minutes: int = 5
    refresh_window_seconds: int = 30

    # Auth strategy: "jwt" (Authorization header) or "session" (cookie + Redis)
    auth_strategy: str = "jwt"
    session_cookie_name: str = "recipes_session"
    session_ttl_seconds: int = 3600
    session_cookie_secure: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"
    rate_limit_enabled: bool = True

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    recipes_cache_key: str = "recipes"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env, database backend and auth strategy.

        - Postgres: DATABASE_URL required.
        - Memory: nothing else required.
        """
        if self.database_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'postgres' or 'memory', got: {self.database_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        origins = [o.strip() for o in self.allowed_origins.split(",")]
        if "*" in origins:
            raise ValueError(
                "allowed_origins must list explicit origins; '*' is not allowed "
                "because CORS is configured with credentials."
            )
        if self.auth_strategy not in ("jwt", "session"):
            raise ValueError(
                f"auth_strategy must be 'jwt' or 'session', got: {self.auth_strategy!r}"
            )
        return self

    def parsed_seed_users(self) -> dict[str, str]:
        """Return memory_seed_users as {username: password}; malformed entries are skipped."""
        if self.memory_seed_users is None:
            return {}
        users: dict[str, str] = {}
        for entry in self.memory_seed_users.get_secret_value().split(","):
            username, sep, password = entry.strip().partition(":")
            if sep and username and password:
                users[username] = password
        return users


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
