"""Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. {"message": "Recipe has been deleted"}."""

    message: str


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers."""

    error: str
