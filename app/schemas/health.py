"""Health check API schemas."""

from pydantic import BaseModel, Field


class PingResponse(BaseModel):
    """Response for GET / and GET /healthz (liveness)."""

    ping: str = Field(default="ping", description="Always 'ping'")
