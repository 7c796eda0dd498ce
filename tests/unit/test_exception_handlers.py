"""Tests for the exception-to-response mapping."""

import json
from unittest.mock import patch

import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import exception_handlers
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
    RecipesException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)
from app.infrastructure.exceptions import StorageException


class FakeRequest:
    """Handlers never read the request; a placeholder is enough."""


def _body(response) -> dict:
    return json.loads(response.body)


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("bad"), 400),
        (BadRequestException("early"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ResourceNotFoundException("recipe", "x"), 404),
        (UserAlreadyExistsException("admin"), 409),
        (StorageException("down"), 500),
        (RecipesException("unmapped", error_code="SOMETHING_ELSE"), 400),
    ],
)
def test_domain_exception_status(exc: RecipesException, status: int) -> None:
    response = exception_handlers._recipes_exception_handler(FakeRequest(), exc)
    assert response.status_code == status
    assert _body(response) == {"error": exc.message}


def test_validation_error_is_400_with_readable_message() -> None:
    exc = RequestValidationError(
        [{"loc": ("body", "name"), "msg": "Field required", "type": "missing"}]
    )
    response = exception_handlers._validation_exception_handler(FakeRequest(), exc)
    assert response.status_code == 400
    assert _body(response) == {"error": "name: Field required"}


def test_validation_error_without_details() -> None:
    assert exception_handlers._format_validation_errors([]) == "Request validation failed"


def test_http_exception_keeps_status_and_detail() -> None:
    exc = StarletteHTTPException(status_code=405, detail="Method Not Allowed")
    response = exception_handlers._http_exception_handler(FakeRequest(), exc)
    assert response.status_code == 405
    assert _body(response) == {"error": "Method Not Allowed"}


def test_generic_exception_hides_detail_unless_debug() -> None:
    class _Settings:
        debug = False

    with patch.object(exception_handlers, "get_settings", return_value=_Settings()):
        response = exception_handlers._generic_exception_handler(
            FakeRequest(), RuntimeError("secret internals")
        )
    assert response.status_code == 500
    assert _body(response) == {"error": "Internal server error"}


def test_generic_exception_shows_detail_in_debug() -> None:
    class _Settings:
        debug = True

    with patch.object(exception_handlers, "get_settings", return_value=_Settings()):
        response = exception_handlers._generic_exception_handler(
            FakeRequest(), RuntimeError("boom")
        )
    assert _body(response) == {"error": "boom"}


def test_json_decode_error_has_plain_message() -> None:
    errors = [
        {"loc": ("body", 1), "msg": "JSON decode error", "type": "json_invalid"}
    ]
    assert exception_handlers._format_validation_errors(errors) == "Invalid JSON body"


def test_list_index_kept_in_location() -> None:
    errors = [{"loc": ("body", "tags", 0), "msg": "Input should be a valid string"}]
    assert (
        exception_handlers._format_validation_errors(errors)
        == "tags.0: Input should be a valid string"
    )
