"""FastAPI application serving the redirect endpoint.

Key Responsibilities:
    - Application initialization and configuration
    - Middleware setup (request lifecycle, security headers)
    - Health and metrics endpoints
    - Catch-all redirect route delegating to :class:`RedirectService`

Collaborators:
    - Upstream: ASGI server (Uvicorn)
    - Downstream: :mod:`.services`, :mod:`.presentation`, observability

Side Effects:
    - Configures logging and registers Prometheus routes
    - Schedules a heartbeat after every redirect request

Example:
    >>> from pxy_redirect.gateway.app import create_app
    >>> app = create_app()
    >>> # Run with: uvicorn pxy_redirect.gateway.app:create_app --factory
"""

# ==============================================================================
# IMPORTS
# ==============================================================================

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from .. import __version__
from ..config.settings import AppSettings, get_settings
from ..observability import setup_observability
from ..utils.logging import get_logger
from .context import RequestContext
from .presentation.lifecycle import RequestLifecycleMiddleware
from .presentation.responses import to_starlette
from .services import RedirectService, build_service

logger = get_logger(__name__)


# ==============================================================================
# MIDDLEWARE IMPLEMENTATION
# ==============================================================================


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        return response


# ==============================================================================
# HELPERS
# ==============================================================================


def raw_request_path(request: Request) -> str:
    """Return the undecoded request path; decoding is the resolver's job."""
    raw = request.scope.get("raw_path")
    if raw:
        # Invalid UTF-8 survives as lone surrogates and is rejected downstream
        return raw.decode("utf-8", errors="surrogateescape")
    return request.scope.get("path", "")


# ==============================================================================
# APPLICATION FACTORY
# ==============================================================================


def create_app(
    settings: AppSettings | None = None,
    service: RedirectService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="pxy-redirect",
        version=__version__,
        debug=settings.debug,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.service = service or build_service(settings)
    app.state.started_at = datetime.now(UTC)

    setup_observability(app, settings)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RequestLifecycleMiddleware,
        request_id_header=settings.observability.logging.request_id_header,
    )

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, object]:
        delta = datetime.now(UTC) - app.state.started_at
        return {
            "status": "ok",
            "version": app.version,
            "uptime_seconds": round(delta.total_seconds(), 3),
            "version_rules": len(app.state.service.resolver.rules),
            "heartbeat": settings.heartbeat.enabled,
        }

    @app.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
    def redirect(request: Request, background: BackgroundTasks) -> Response:
        redirect_service: RedirectService = request.app.state.service
        context = getattr(request.state, "request_context", None) or RequestContext.from_headers(
            request.headers
        )
        result = redirect_service.handle(raw_request_path(request), context)
        background.add_task(redirect_service.heartbeat)
        return to_starlette(result)

    logger.debug("gateway.app.created", environment=settings.environment.value)
    return app


__all__ = ["create_app", "raw_request_path"]
