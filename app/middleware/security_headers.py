"""Security headers middleware.

Adds security-related response headers to every response. The API serves JSON
only, so the CSP forbids everything except the interactive docs' own assets.
"""

from typing import Callable

from app.middleware._asgi import send_with_headers

DEFAULT_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

# Docs pages load Swagger UI from a CDN; give them a looser policy.
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")
API_CSP = "default-src 'none'; frame-ancestors 'none'"


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None, hsts: bool = False
) -> Callable:
    """Set security headers on all responses. HSTS only when hsts is True. Raw ASGI."""
    resolved = dict(headers if headers is not None else DEFAULT_HEADERS)
    if hsts:
        resolved["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    base = [(k.encode(), v.encode()) for k, v in resolved.items()]
    with_csp = base + [(b"Content-Security-Policy", API_CSP.encode())]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        path = scope.get("path", "")
        extra = base if path.startswith(DOCS_PATHS) else with_csp
        await app(scope, receive, send_with_headers(send, extra))

    return asgi_app
