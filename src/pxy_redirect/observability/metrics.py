"""Prometheus metrics for the redirect gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

if TYPE_CHECKING:  # pragma: no cover - import hints only
    from fastapi import FastAPI

    from pxy_redirect.config.settings import AppSettings

# ==============================================================================
# METRIC DEFINITIONS
# ==============================================================================

REQUEST_COUNTER = Counter(
    "pxy_redirect_requests_total",
    "Total number of HTTP requests",
    ["method", "status"],
)

OUTCOME_COUNTER = Counter(
    "pxy_redirect_outcomes_total",
    "Resolution outcomes by kind",
    ["outcome"],
)

HEARTBEAT_COUNTER = Counter(
    "pxy_redirect_heartbeats_total",
    "Heartbeat attempts by result",
    ["result"],
)

# ==============================================================================
# REGISTRATION
# ==============================================================================


def register_metrics(app: FastAPI, settings: AppSettings) -> None:
    """Expose the default registry on the configured metrics path."""
    metrics = settings.observability.metrics
    if not metrics.enabled:
        return

    @app.get(metrics.path, include_in_schema=False)
    async def prometheus_metrics() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = ["HEARTBEAT_COUNTER", "OUTCOME_COUNTER", "REQUEST_COUNTER", "register_metrics"]
