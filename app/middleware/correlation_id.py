"""Correlation ID middleware.

Propagates X-Correlation-ID (forwarded from the client, else the request id).
Must sit inside RequestIDMiddleware so the request id is already on scope state.
"""

import uuid
from typing import Callable

from app.middleware._asgi import get_header, send_with_headers
from app.middleware.request_id import sanitize_request_id
from app.shared.context import set_correlation_id


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward the correlation id; fall back to request_id. Raw ASGI."""
    header_b = header_name.encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = get_header(scope, header_name)
        if raw:
            correlation_id = sanitize_request_id(raw)
        else:
            correlation_id = scope.get("state", {}).get("request_id") or uuid.uuid4().hex
        scope.setdefault("state", {})["correlation_id"] = correlation_id
        set_correlation_id(correlation_id)
        try:
            await app(
                scope, receive, send_with_headers(send, [(header_b, correlation_id.encode())])
            )
        finally:
            set_correlation_id(None)

    return asgi_app
