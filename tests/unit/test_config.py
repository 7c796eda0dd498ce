"""Settings validation and parsing."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

BASE = {"secret_key": "s", "database_backend": "memory"}


def test_defaults() -> None:
    settings = Settings(**BASE)
    assert settings.access_token_expire_minutes == 10
    assert settings.refresh_token_expire_minutes == 5
    assert settings.refresh_window_seconds == 30
    assert settings.auth_strategy == "jwt"
    assert settings.recipes_cache_key == "recipes"


def test_secret_key_required() -> None:
    with pytest.raises(ValidationError):
        Settings(secret_key="", database_backend="memory")


def test_postgres_requires_url() -> None:
    with pytest.raises(ValidationError):
        Settings(secret_key="s", database_backend="postgres", database_url="")


@pytest.mark.parametrize(
    "overrides",
    [
        {"database_backend": "mongo"},
        {"auth_strategy": "oauth"},
        {"allowed_origins": "http://a.example,*"},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**{**BASE, **overrides})


def test_parsed_seed_users_skips_malformed_entries() -> None:
    settings = Settings(**BASE, memory_seed_users="admin:passadmin, broken ,:x,y:,khhini:p:q")
    assert settings.parsed_seed_users() == {"admin": "passadmin", "khhini": "p:q"}


def test_parsed_seed_users_empty() -> None:
    assert Settings(**BASE).parsed_seed_users() == {}
