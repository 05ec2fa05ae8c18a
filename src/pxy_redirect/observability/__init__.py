"""Observability helpers for the FastAPI gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..utils.logging import configure_logging, get_logger
from .metrics import register_metrics

if TYPE_CHECKING:  # pragma: no cover - import hints only
    from fastapi import FastAPI

    from pxy_redirect.config.settings import AppSettings

__all__ = ["setup_observability"]

logger = get_logger(__name__)


def setup_observability(app: FastAPI, settings: AppSettings) -> None:
    """Configure logging and metrics for the app."""
    configure_logging(settings=settings.observability.logging)
    register_metrics(app, settings)
    logger.debug(
        "observability.configured",
        level=settings.observability.logging.level,
        metrics=settings.observability.metrics.enabled,
    )
