"""OpenTelemetry tracing for the recipes API (off unless TELEMETRY_ENABLED).

create_app() builds a Telemetry from settings and instruments FastAPI; the
lifespan adds SQLAlchemy (postgres backend) and Redis (when enabled) once
their clients exist. Failures here are logged and never stop the app.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Liveness probe is not traced
UNTRACED_URLS = "/healthz"


def build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for TELEMETRY_EXPORTER ("console", "otlp" or "none")."""
    if kind == "none":
        return None
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("TELEMETRY_EXPORTER=otlp without endpoint; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


class Telemetry:
    """Owns the tracer provider and the instrumentation hooks."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> Telemetry:
        telemetry = cls(
            settings.app_name, settings.app_version, settings.telemetry_environment
        )
        telemetry.start(
            settings.telemetry_exporter,
            settings.telemetry_otlp_endpoint,
            settings.telemetry_sample_rate,
        )
        return telemetry

    @property
    def active(self) -> bool:
        return self.provider is not None

    def start(
        self,
        exporter_kind: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        """Create the provider and make it the global one."""
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
        )
        try:
            exporter = build_exporter(exporter_kind, otlp_endpoint)
        except Exception:
            logger.exception("Could not create span exporter; tracing disabled")
            return
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.provider = provider
        logger.info(
            "Tracing started for %s %s (exporter=%s, sample_rate=%s)",
            self.service_name,
            self.service_version,
            exporter_kind,
            sample_rate,
        )

    def _instrument(self, what: str, hook: Callable[[], None]) -> None:
        if not self.active:
            return
        try:
            hook()
        except Exception:
            logger.exception("Failed to instrument %s", what)
            return
        logger.info("%s instrumentation enabled", what)

    def instrument_fastapi(self, app: FastAPI) -> None:
        self._instrument(
            "FastAPI",
            lambda: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.provider, excluded_urls=UNTRACED_URLS
            ),
        )

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        self._instrument(
            "SQLAlchemy",
            lambda: SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=self.provider
            ),
        )

    def instrument_redis(self) -> None:
        self._instrument(
            "Redis",
            lambda: RedisInstrumentor().instrument(tracer_provider=self.provider),
        )

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.provider is None:
            return
        try:
            self.provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.provider = None


_telemetry: Telemetry | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> Telemetry | None:
    """The process-wide Telemetry set by create_app(), if tracing is on."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: Telemetry | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
