"""Cross-cutting HTTP middleware: rate limiting and security headers."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.api.deps import client_address, resolve
from app.core.ratelimit import RETRY_AFTER_SECONDS, get_rate_limiter
from app.models.base import iso_timestamp

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Muitas requisições. Tente novamente em 15 minutos."

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Admit or reject every request before it reaches routing."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter = resolve(request, get_rate_limiter)
        client = client_address(request)
        decision = limiter.hit(client)

        headers = {
            "RateLimit-Limit": str(decision.limit),
            "RateLimit-Remaining": str(decision.remaining),
            "RateLimit-Reset": str(decision.reset_after),
        }

        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s (%d requests)", client, decision.count)
            headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
            return JSONResponse(
                status_code=429,
                content={
                    "error": RATE_LIMIT_MESSAGE,
                    "retryAfter": RETRY_AFTER_SECONDS,
                    "timestamp": iso_timestamp(),
                },
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach conservative security headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """Turn any exception escaping a route into the generic 500 envelope.

    Runs inside the CORS and security-header layers so error responses carry
    the same headers as successful ones.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=500,
                content={"error": "Erro interno do servidor", "timestamp": iso_timestamp()},
            )
