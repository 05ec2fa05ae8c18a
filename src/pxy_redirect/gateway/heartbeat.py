"""Fire-and-forget liveness reporting to an uptime monitor.

Key Responsibilities:
    - Define the :class:`LivenessReporter` capability injected into the gateway
    - Ping ``target + token`` with a bounded timeout

Collaborators:
    - Upstream: :class:`~pxy_redirect.gateway.services.RedirectService`
    - Downstream: Wraps an ``httpx`` client

Side Effects:
    - Opens network connections via ``httpx``
    - Logs and counts failures; never raises them

Thread Safety:
    - Reporters hold only immutable configuration; a fresh client is used per ping
"""

from __future__ import annotations

from typing import Protocol

import httpx

from ..config.settings import HeartbeatSettings
from ..observability.metrics import HEARTBEAT_COUNTER
from ..utils.logging import get_logger

logger = get_logger(__name__)


class LivenessReporter(Protocol):
    """Capability emitting a liveness signal; implementations must not raise."""

    def emit(self) -> None: ...


class NullReporter:
    """Reporter used when no heartbeat target is configured."""

    def emit(self) -> None:
        logger.debug("heartbeat.disabled")


class HeartbeatReporter:
    """Sends a GET to the configured monitor for every handled request."""

    def __init__(
        self,
        settings: HeartbeatSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def timeout_seconds(self) -> float:
        return self._settings.timeout_seconds

    def emit(self) -> None:
        if not self._settings.enabled:
            logger.debug("heartbeat.skipped", reason="no_token")
            HEARTBEAT_COUNTER.labels("skipped").inc()
            return

        # The URL embeds the token, only the target is logged
        target = self._settings.target
        logger.debug("heartbeat.emit", target=target, timeout=self.timeout_seconds)
        try:
            with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = client.get(self._settings.url())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            HEARTBEAT_COUNTER.labels("error").inc()
            logger.error("heartbeat.failed", target=target, error=type(exc).__name__)
            return

        if response.status_code != 200:
            HEARTBEAT_COUNTER.labels("error").inc()
            logger.error(
                "heartbeat.rejected",
                target=target,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            return
        HEARTBEAT_COUNTER.labels("ok").inc()


def build_reporter(
    settings: HeartbeatSettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> LivenessReporter:
    """Return an HTTP reporter when a token is configured, else a no-op."""
    if settings.enabled:
        return HeartbeatReporter(settings, transport=transport)
    return NullReporter()


__all__ = ["HeartbeatReporter", "LivenessReporter", "NullReporter", "build_reporter"]
