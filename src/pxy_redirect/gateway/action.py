"""Serverless function entry point (OpenWhisk / DigitalOcean Functions web action).

The platform calls :func:`main` with the request path in ``__ow_path`` and the
lower-cased request headers in ``__ow_headers`` and expects a dictionary with
``statusCode``, ``headers`` and ``body``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config.settings import get_settings
from ..utils.logging import configure_logging, get_logger
from .context import RequestContext
from .services import RedirectService, get_redirect_service

logger = get_logger(__name__)


def _headers(args: Mapping[str, Any]) -> dict[str, str]:
    raw = args.get("__ow_headers")
    if not isinstance(raw, Mapping):
        return {}
    return {str(key).lower(): str(value) for key, value in raw.items() if value is not None}


def handle(
    args: Mapping[str, Any],
    service: RedirectService,
    *,
    request_id_header: str = "x-request-id",
) -> dict[str, Any]:
    path = args.get("__ow_path") or ""
    if not isinstance(path, str):
        path = str(path)
    context = RequestContext.from_headers(_headers(args), request_id_header=request_id_header)

    service.heartbeat()
    response = service.handle(path, context)
    return {
        "statusCode": response.status_code,
        "headers": dict(response.headers),
        "body": response.body,
    }


def main(args: dict[str, Any]) -> dict[str, Any]:
    settings = get_settings()
    configure_logging(settings=settings.observability.logging)
    logger.debug("action.invoked", level=settings.observability.logging.level)
    return handle(
        args,
        get_redirect_service(),
        request_id_header=settings.observability.logging.request_id_header,
    )


__all__ = ["handle", "main"]
