"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import ensure_utc, from_timestamp_utc, utc_now
from app.shared.utils.generators import generate_cuid, generate_session_id

__all__ = [
    "generate_cuid",
    "generate_session_id",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
