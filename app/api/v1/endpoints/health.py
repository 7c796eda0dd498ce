"""Health check endpoints. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from app.schemas.health import PingResponse

router = APIRouter()


@router.get("/", response_model=PingResponse)
def index() -> PingResponse:
    """Index: {"ping": "ping"}."""
    return PingResponse()


@router.get("/healthz", response_model=PingResponse)
def health_check() -> PingResponse:
    """Liveness: {"ping": "ping"}."""
    return PingResponse()
