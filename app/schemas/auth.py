"""Auth API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    """Request body for POST /signin."""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password")


class TokenResponse(BaseModel):
    """Signed token and its expiry (POST /signin in jwt mode, POST /refresh)."""

    token: str
    expires: datetime
