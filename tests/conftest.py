from __future__ import annotations

import logging
import os

import pytest
import structlog

from pxy_redirect.config.settings import get_settings
from pxy_redirect.gateway.services import get_redirect_service

_LEGACY_VARIABLES = ("LOG_LEVEL", "HEARTBEAT_TARGET", "HEARTBEAT_TOKEN", "HEARTBEAT_TARGET_TIMEOUT")


class RecordingReporter:
    """Liveness reporter that only counts emissions."""

    def __init__(self) -> None:
        self.calls = 0

    def emit(self) -> None:
        self.calls += 1


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    for name in list(os.environ):
        if name.startswith("PXY_") or name in _LEGACY_VARIABLES:
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_redirect_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_redirect_service.cache_clear()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if not type(handler).__module__.startswith("_pytest."):
            root.removeHandler(handler)
    structlog.reset_defaults()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
