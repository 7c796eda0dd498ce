"""Auth API: sign in, refresh, sign out.

/signin issues a JWT or starts a cookie session depending on AUTH_STRATEGY.
/refresh lives on token_router, which is mounted in jwt mode only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import authorization_header, extract_token, get_auth_service
from app.application.services.auth_service import AuthService
from app.core.config import get_settings
from app.core.limiter import limit_auth
from app.schemas.auth import SignInRequest, TokenResponse
from app.schemas.common import ErrorResponse, MessageResponse

router = APIRouter()
token_router = APIRouter()


@router.post(
    "/signin",
    response_model=TokenResponse | MessageResponse,
    responses={401: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
)
@limit_auth
async def sign_in(
    request: Request,
    response: Response,
    body: SignInRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Check credentials. jwt: return {token, expires}. session: set the session cookie."""
    settings = get_settings()
    if settings.auth_strategy == "session":
        login = await auth_service.sign_in_session(body.username, body.password)
        response.set_cookie(
            key=settings.session_cookie_name,
            value=login.session_id,
            max_age=settings.session_ttl_seconds,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )
        return MessageResponse(message="User signed in")
    issued = await auth_service.sign_in(body.username, body.password)
    return TokenResponse(token=issued.token, expires=issued.expires)


@token_router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
)
@limit_auth
async def refresh(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[str | None, Depends(authorization_header)],
):
    """Re-issue a token that is within the refresh window of its expiry.

    Requires Authorization: <token> (a Bearer prefix is accepted).
    """
    issued = auth_service.refresh(extract_token(authorization))
    return TokenResponse(token=issued.token, expires=issued.expires)


@router.post("/signout", response_model=MessageResponse)
async def sign_out(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Always 200. In session mode also clears the stored session and the cookie."""
    settings = get_settings()
    if settings.auth_strategy == "session":
        await auth_service.sign_out(request.cookies.get(settings.session_cookie_name))
        response.delete_cookie(
            key=settings.session_cookie_name,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )
    return MessageResponse(message="Signed out...")
