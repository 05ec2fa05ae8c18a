from __future__ import annotations

import json

from pxy_redirect.config.settings import load_settings
from pxy_redirect.gateway.context import RequestContext
from pxy_redirect.gateway.heartbeat import HeartbeatReporter, NullReporter
from pxy_redirect.gateway.services import build_service, get_redirect_service
from pxy_redirect.resolver import Redirect, ValidationError
from pxy_redirect.utils.logging import configure_logging


def test_build_service_from_settings(monkeypatch):
    monkeypatch.setenv("PXY_REDIRECT__PUBLIC_BASE_URL", "https://short.example")
    monkeypatch.setenv("PXY_HEARTBEAT__TOKEN", "abc")
    service = build_service(load_settings("prod"))
    assert isinstance(service.reporter, HeartbeatReporter)
    assert service.redirect_status == 308
    outcome = service.resolve("/x/wall")
    assert isinstance(outcome, ValidationError)
    assert "https://short.example/" in outcome.message


def test_cached_service():
    service = get_redirect_service()
    assert service is get_redirect_service()
    assert isinstance(service.reporter, NullReporter)


def test_resolution_is_logged_with_context(capsys):
    configure_logging(level="INFO")
    service = build_service(load_settings("prod"))
    context = RequestContext(ip="10.0.0.1", user_agent="curl/8", referer="", request_id="r-1")

    assert isinstance(service.resolve("/13/wall", context), Redirect)
    assert isinstance(service.resolve("/13/", context), ValidationError)

    events = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
    by_name = {event["event"]: event for event in events}
    assert by_name["redirect.received"]["request-id"] == "r-1"
    assert by_name["redirect.resolved"]["target"].endswith("13.0.0/tools/clang/docs/DiagnosticsReference.html#wall")
    rejected = by_name["redirect.rejected"]
    assert rejected["kind"] == "invalid_fragment"
    assert rejected["level"] == "error"
    assert rejected["ip"] == "10.0.0.1"
