"""Opaque request metadata carried alongside a path for observability."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import uuid4


def _new_request_id() -> str:
    return uuid4().hex


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Client details used only as structured log fields."""

    ip: str = ""
    user_agent: str = ""
    referer: str = ""
    request_id: str = field(default_factory=_new_request_id)

    @classmethod
    def from_headers(
        cls,
        headers: Mapping[str, str],
        *,
        client_host: str | None = None,
        request_id_header: str = "x-request-id",
    ) -> RequestContext:
        """Build a context from lower-case or case-insensitive request headers."""
        ip = headers.get("do-connecting-ip", "")
        if not ip:
            forwarded = headers.get("x-forwarded-for", "")
            ip = forwarded.split(",", 1)[0].strip()
        return cls(
            ip=ip or client_host or "",
            user_agent=headers.get("user-agent", ""),
            referer=headers.get("referer", ""),
            request_id=headers.get(request_id_header.lower(), "") or _new_request_id(),
        )

    def as_log_fields(self) -> dict[str, str]:
        return {
            "ip": self.ip,
            "user-agent": self.user_agent,
            "referer": self.referer,
            "request-id": self.request_id,
        }


__all__ = ["RequestContext"]
