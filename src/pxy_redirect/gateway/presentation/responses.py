"""Mapping of resolution outcomes onto HTTP responses.

The mapping is transport neutral: the FastAPI app converts the result into a
Starlette response and the serverless action serialises it into the function
result dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi.responses import Response

from pxy_redirect.resolver import Home, Redirect, ResolveOutcome, ValidationError

from .pages import HOME_MESSAGE, render_page

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class GatewayResponse:
    """Status, headers and body produced for a single request."""

    status_code: int
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def location(self) -> str | None:
        return self.headers.get("location")


def present(outcome: ResolveOutcome, *, redirect_status: int = 308) -> GatewayResponse:
    """Translate an outcome into the response sent to the client."""
    if isinstance(outcome, Redirect):
        return GatewayResponse(
            status_code=redirect_status,
            body="redirecting...",
            headers={"location": outcome.target, "content-type": TEXT_CONTENT_TYPE},
        )
    if isinstance(outcome, Home):
        return GatewayResponse(
            status_code=200,
            body=render_page(HOME_MESSAGE, "info"),
            headers={"content-type": HTML_CONTENT_TYPE},
        )
    if isinstance(outcome, ValidationError):
        return GatewayResponse(
            status_code=outcome.status,
            body=render_page(outcome.message, "error"),
            headers={"content-type": HTML_CONTENT_TYPE},
        )
    raise TypeError(f"Unsupported outcome: {outcome!r}")


def to_starlette(response: GatewayResponse) -> Response:
    """Convert a :class:`GatewayResponse` into a Starlette response."""
    headers = dict(response.headers)
    media_type = headers.pop("content-type", None)
    return Response(
        content=response.body,
        status_code=response.status_code,
        headers=headers,
        media_type=media_type,
    )


__all__ = [
    "HTML_CONTENT_TYPE",
    "TEXT_CONTENT_TYPE",
    "GatewayResponse",
    "present",
    "to_starlette",
]
