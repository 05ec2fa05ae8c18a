from __future__ import annotations

import httpx

from pxy_redirect.config.settings import HeartbeatSettings, LoggingSettings
from pxy_redirect.gateway.heartbeat import HeartbeatReporter, NullReporter, build_reporter
from pxy_redirect.utils.logging import configure_logging


def _settings(**overrides) -> HeartbeatSettings:
    values = {"target": "https://uptime.example/api/push/", "token": "tok", "timeout_seconds": 2}
    values.update(overrides)
    return HeartbeatSettings(**values)


def test_emits_get_to_target_with_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    HeartbeatReporter(_settings(), transport=httpx.MockTransport(handler)).emit()
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://uptime.example/api/push/tok"


def test_missing_token_skips_request():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(200)

    HeartbeatReporter(_settings(token=None), transport=httpx.MockTransport(handler)).emit()
    assert calls["count"] == 0


def test_transport_errors_are_swallowed(capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    HeartbeatReporter(_settings(), transport=httpx.MockTransport(handler)).emit()
    out = capsys.readouterr().out
    assert "heartbeat.failed" in out
    assert "/push/tok" not in out


def test_rejected_status_is_logged(capsys):
    reporter = HeartbeatReporter(
        _settings(), transport=httpx.MockTransport(lambda request: httpx.Response(503))
    )
    reporter.emit()
    assert "heartbeat.rejected" in capsys.readouterr().out


def test_invalid_target_is_swallowed():
    HeartbeatReporter(_settings(target="")).emit()


def test_build_reporter_selects_implementation():
    assert isinstance(build_reporter(_settings(token=None)), NullReporter)
    reporter = build_reporter(_settings())
    assert isinstance(reporter, HeartbeatReporter)
    assert reporter.timeout_seconds == 2


def test_successful_heartbeat_does_not_log_token(capsys):
    configure_logging(settings=LoggingSettings(level="DEBUG"))
    reporter = HeartbeatReporter(
        _settings(token="s3cretTOKEN"),
        transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )
    reporter.emit()
    out = capsys.readouterr().out
    assert "heartbeat" in out
    assert "s3cretTOKEN" not in out
