"""HTML explanations for rejected request paths.

Key Responsibilities:
    - Hold one fixed template per :class:`ErrorKind`
    - Escape every user supplied substring before it is embedded

Collaborators:
    - Upstream: :class:`~pxy_redirect.resolver.resolver.PathResolver`
    - Downstream: the gateway page renderer inserts the result verbatim

Thread Safety:
    - Catalog instances are immutable and safe to share
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from .models import ErrorKind

DEFAULT_PUBLIC_BASE_URL = "https://pxy.fi"
DEFAULT_DOCUMENTATION_URL = "https://github.com/jonasbn/pxy-redirect-ow-function"
DEFAULT_EXAMPLE_PATH = "/13/wall"

# ==============================================================================
# TEMPLATES
# ==============================================================================

_HINT = "<p>In order to get the redirect to work, please specify both a version and a fragment</p>"
_FOOTER = (
    '<p>Example: <a href="{example_url}">{example_url}</a></p>'
    '<p>See more information at: <a href="{documentation_url}">GitHub</a></p>'
)

_TEMPLATES: dict[ErrorKind, str] = {
    ErrorKind.MALFORMED_INPUT: (
        "<p>Unable to parse received URL: &gt;{path}&lt;</p>"
        "<p>The URL could not be understood, please check the documentation for proper usage</p>"
        + _FOOTER
    ),
    ErrorKind.INSUFFICIENT_PARTS: (
        "<p>You only made it this far, because the specified URL has insufficient parts "
        "to redirect to the documentation</p>"
        '<p>{base_url}/<span class="my-times">{version}</span></p>' + _HINT + _FOOTER
    ),
    ErrorKind.INVALID_VERSION: (
        "<p>You only made it this far, because the specified URL requires a version number "
        "as the first part to redirect to the documentation</p>"
        '<p>{base_url}/<span class="my-times">{version}</span>/{fragment}</p>' + _HINT + _FOOTER
    ),
    ErrorKind.INVALID_FRAGMENT: (
        "<p>You only made it this far, because the specified URL requires a valid fragment "
        "as the second part to redirect to the documentation</p>"
        '<p>{base_url}/{version}/<span class="my-times">{fragment}</span></p>' + _HINT + _FOOTER
    ),
}


def escape(value: str) -> str:
    """Escape ``< > & " '`` for safe embedding in HTML text and attributes."""
    return html.escape(value, quote=True)


# ==============================================================================
# CATALOG
# ==============================================================================


@dataclass(frozen=True, slots=True)
class MessageCatalog:
    """Builds the HTML explanation attached to a validation error."""

    public_base_url: str = DEFAULT_PUBLIC_BASE_URL
    documentation_url: str = DEFAULT_DOCUMENTATION_URL
    example_path: str = DEFAULT_EXAMPLE_PATH

    def render(
        self,
        kind: ErrorKind,
        *,
        version: str = "",
        fragment: str = "",
        path: str = "",
    ) -> str:
        base_url = self.public_base_url.rstrip("/")
        return _TEMPLATES[kind].format(
            base_url=escape(base_url),
            version=escape(version),
            fragment=escape(fragment),
            path=escape(path),
            example_url=escape(base_url + self.example_path),
            documentation_url=escape(self.documentation_url),
        )


__all__ = [
    "DEFAULT_DOCUMENTATION_URL",
    "DEFAULT_EXAMPLE_PATH",
    "DEFAULT_PUBLIC_BASE_URL",
    "MessageCatalog",
    "escape",
]
