"""Shared telemetry: logging setup and OpenTelemetry config."""

from app.shared.telemetry.logging import get_logger, setup_logging
from app.shared.telemetry.telemetry import (
    Telemetry,
    get_telemetry,
    set_telemetry,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "Telemetry",
    "get_telemetry",
    "set_telemetry",
]
