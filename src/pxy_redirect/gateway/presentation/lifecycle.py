"""Request lifecycle tracking helpers and middleware.

Key Responsibilities:
    - Build the :class:`RequestContext` for each inbound request
    - Bind the context into log context variables for the request duration
    - Echo the request id and response time as response headers
    - Count requests per status code

Collaborators:
    - Upstream: FastAPI middleware stack
    - Downstream: :mod:`pxy_redirect.utils.logging`, Prometheus counters

Thread Safety:
    - Thread-safe: Uses context variables for request isolation
"""

# ==============================================================================
# IMPORTS
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from pxy_redirect.observability.metrics import REQUEST_COUNTER
from pxy_redirect.utils.logging import bind_request_context, get_logger, reset_request_context

from ..context import RequestContext

logger = get_logger(__name__)


# ==============================================================================
# LIFECYCLE MODELS
# ==============================================================================


@dataclass(slots=True)
class RequestLifecycle:
    """Tracks request timing and the response status."""

    method: str
    path: str
    context: RequestContext
    started_at: float = field(default_factory=perf_counter)
    finished_at: float | None = None
    status_code: int | None = None

    def complete(self, status_code: int) -> None:
        """Record the response status if not already completed."""
        if self.status_code is not None:
            return
        self.status_code = status_code
        self.finished_at = perf_counter()
        REQUEST_COUNTER.labels(self.method, str(status_code)).inc()

    @property
    def duration_ms(self) -> float:
        end = self.finished_at or perf_counter()
        return max(end - self.started_at, 0.0) * 1000

    def apply(self, response: Response, *, request_id_header: str) -> None:
        response.headers.setdefault(request_id_header, self.context.request_id)
        response.headers.setdefault("X-Response-Time-Ms", f"{self.duration_ms:.2f}")


# ==============================================================================
# MIDDLEWARE IMPLEMENTATION
# ==============================================================================


class RequestLifecycleMiddleware(BaseHTTPMiddleware):
    """Binds request context and timing information to each request."""

    def __init__(self, app, *, request_id_header: str | None = None):  # type: ignore[override]
        super().__init__(app)
        self._request_id_header = request_id_header or "X-Request-ID"

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        context = RequestContext.from_headers(
            request.headers,
            client_host=request.client.host if request.client else None,
            request_id_header=self._request_id_header,
        )
        lifecycle = RequestLifecycle(
            method=request.method,
            path=request.url.path,
            context=context,
        )
        request.state.request_context = context
        request.state.lifecycle = lifecycle
        token = bind_request_context(context.as_log_fields())

        try:
            response = await call_next(request)
        except Exception:
            lifecycle.complete(500)
            logger.exception(
                "gateway.request.error",
                method=request.method,
                path=request.url.path,
                duration_ms=round(lifecycle.duration_ms, 2),
            )
            reset_request_context(token)
            raise

        lifecycle.complete(response.status_code)
        lifecycle.apply(response, request_id_header=self._request_id_header)
        logger.debug(
            "gateway.response",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(lifecycle.duration_ms, 2),
        )
        reset_request_context(token)
        return response


__all__ = ["RequestLifecycle", "RequestLifecycleMiddleware"]
