"""Redirect service shared by the HTTP gateway, the serverless action and the CLI.

Key Responsibilities:
    - Build the resolver, rule table and liveness reporter from settings
    - Log every resolution with the request context fields
    - Present outcomes as transport neutral responses

Collaborators:
    - Upstream: :mod:`.app`, :mod:`.action`, :mod:`pxy_redirect.cli`
    - Downstream: :class:`~pxy_redirect.resolver.PathResolver`,
      :mod:`.heartbeat`, :mod:`.presentation.responses`

Thread Safety:
    - Thread-safe: the resolver is pure and reporters hold no mutable state
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from ..config.rules import build_rule_table
from ..config.settings import AppSettings, get_settings
from ..observability.metrics import OUTCOME_COUNTER
from ..resolver import (
    Home,
    MessageCatalog,
    PathResolver,
    Redirect,
    ResolveOutcome,
    ValidationError,
)
from ..utils.logging import get_logger
from .context import RequestContext
from .heartbeat import LivenessReporter, NullReporter, build_reporter
from .presentation.responses import GatewayResponse, present

logger = get_logger(__name__)


@dataclass
class RedirectService:
    """Resolves request paths and turns the outcome into a response."""

    resolver: PathResolver = field(default_factory=PathResolver)
    reporter: LivenessReporter = field(default_factory=NullReporter)
    redirect_status: int = 308

    def resolve(self, path: str, context: RequestContext | None = None) -> ResolveOutcome:
        log = logger.bind(**context.as_log_fields()) if context is not None else logger
        referer = context.referer if context is not None else ""
        log.info("redirect.received", path=path, via=referer)

        outcome = self.resolver.resolve(path)
        if isinstance(outcome, Redirect):
            OUTCOME_COUNTER.labels("redirect").inc()
            log.info("redirect.resolved", target=outcome.target, version=str(outcome.version))
        elif isinstance(outcome, Home):
            OUTCOME_COUNTER.labels("home").inc()
            log.info("redirect.home", path=outcome.path)
        elif isinstance(outcome, ValidationError):
            OUTCOME_COUNTER.labels(outcome.kind.value).inc()
            log.error(
                "redirect.rejected",
                kind=outcome.kind.value,
                status=outcome.status,
                version=outcome.version,
                fragment=outcome.fragment,
            )
        return outcome

    def handle(self, path: str, context: RequestContext | None = None) -> GatewayResponse:
        return present(self.resolve(path, context), redirect_status=self.redirect_status)

    def heartbeat(self) -> None:
        self.reporter.emit()


def build_service(settings: AppSettings) -> RedirectService:
    """Construct a :class:`RedirectService` from application settings."""
    redirect = settings.redirect
    resolver = PathResolver(
        rules=build_rule_table(redirect),
        messages=MessageCatalog(
            public_base_url=redirect.public_base_url,
            documentation_url=redirect.documentation_url,
            example_path=redirect.example_path,
        ),
        target_template=redirect.target_template,
    )
    return RedirectService(
        resolver=resolver,
        reporter=build_reporter(settings.heartbeat),
        redirect_status=redirect.status_code,
    )


@lru_cache(maxsize=1)
def get_redirect_service() -> RedirectService:
    """Cached accessor used by production entry points."""
    return build_service(get_settings())


__all__ = ["RedirectService", "build_service", "get_redirect_service"]
