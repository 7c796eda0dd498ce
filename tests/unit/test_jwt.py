"""Tests for JWTService (sign, verify, expiry)."""

from datetime import timedelta

import pytest
from jose import jwt

from app.infrastructure.security.jwt import JWTService
from app.shared.utils.datetime import utc_now

SECRET = "unit-test-secret"


@pytest.fixture
def service() -> JWTService:
    return JWTService(SECRET)


def test_empty_secret_rejected() -> None:
    with pytest.raises(ValueError):
        JWTService("")


def test_round_trip_claims_and_expiry(service: JWTService) -> None:
    token, expires = service.create_access_token(
        {"sub": "admin", "username": "admin"}, expires_delta=timedelta(minutes=10)
    )
    payload = service.verify_token(token)
    assert payload["sub"] == "admin"
    assert payload["username"] == "admin"
    assert JWTService.expires_at(payload) == expires
    assert expires.microsecond == 0


def test_expiry_is_relative_to_now(service: JWTService) -> None:
    before = utc_now()
    _, expires = service.create_access_token({"sub": "a"}, expires_delta=timedelta(minutes=5))
    assert before + timedelta(minutes=4, seconds=58) <= expires <= utc_now() + timedelta(minutes=5)


def test_existing_exp_claim_is_replaced(service: JWTService) -> None:
    _, expires = service.create_access_token(
        {"sub": "a", "exp": 1}, expires_delta=timedelta(minutes=1)
    )
    assert expires > utc_now()


def test_expired_token_rejected(service: JWTService) -> None:
    token, _ = service.create_access_token({"sub": "a"}, expires_delta=timedelta(seconds=-10))
    with pytest.raises(ValueError):
        service.verify_token(token)


def test_wrong_secret_rejected(service: JWTService) -> None:
    token, _ = JWTService("other-secret").create_access_token(
        {"sub": "a"}, expires_delta=timedelta(minutes=1)
    )
    with pytest.raises(ValueError):
        service.verify_token(token)


def test_missing_sub_rejected(service: JWTService) -> None:
    token = jwt.encode(
        {"username": "a", "exp": utc_now() + timedelta(minutes=1)}, SECRET, algorithm="HS256"
    )
    with pytest.raises(ValueError):
        service.verify_token(token)


@pytest.mark.parametrize("token", ["", "not.a.jwt", "garbage"])
def test_malformed_tokens_rejected(service: JWTService, token: str) -> None:
    with pytest.raises(ValueError):
        service.verify_token(token)
