from __future__ import annotations

import json

from pxy_redirect.gateway import action
from pxy_redirect.gateway.action import handle
from pxy_redirect.gateway.services import RedirectService

HEADERS = {
    "user-agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_14_6)",
    "do-connecting-ip": "192.168.1.2",
    "referer": "https://pxy.fi/6/wc++98-c++11-compat-binary-literal",
    "x-request-id": "4d84db433a35256e7fdd395f430a9121",
}


def test_redirect_result(reporter):
    service = RedirectService(reporter=reporter)
    result = handle(
        {"__ow_path": "/6/wc++98-c++11-compat-binary-literal", "__ow_headers": HEADERS},
        service,
    )
    assert result["statusCode"] == 308
    assert result["headers"]["location"] == (
        "https://releases.llvm.org/6.0.0/tools/clang/docs/DiagnosticsReference.html"
        "#wc-98-c-11-compat-binary-literal"
    )
    assert result["body"] == "redirecting..."
    assert reporter.calls == 1


def test_missing_arguments_are_tolerated(reporter):
    result = handle({}, RedirectService(reporter=reporter))
    assert result["statusCode"] == 400
    assert result["headers"]["content-type"].startswith("text/html")


def test_error_result_is_html(reporter):
    result = handle({"__ow_path": "/x/wall", "__ow_headers": None}, RedirectService(reporter=reporter))
    assert result["statusCode"] == 400
    assert "requires a version number" in result["body"]


def test_main_uses_environment_configuration(monkeypatch):
    monkeypatch.setenv("PXY_ENV", "prod")
    monkeypatch.setenv("PXY_REDIRECT__STATUS_CODE", "307")
    result = action.main({"__ow_path": "/index.html", "__ow_headers": HEADERS})
    assert result["statusCode"] == 200
    result = action.main({"__ow_path": "/18/wall", "__ow_headers": HEADERS})
    assert result["statusCode"] == 307
    assert result["headers"]["location"].startswith("https://releases.llvm.org/18.1.0/")


def test_main_reads_configured_request_id_header(monkeypatch, capsys):
    monkeypatch.setenv("PXY_ENV", "prod")
    monkeypatch.setenv("PXY_OBSERVABILITY__LOGGING__REQUEST_ID_HEADER", "X-Correlation-ID")
    headers = {**HEADERS, "x-correlation-id": "corr-42"}
    action.main({"__ow_path": "/13/wall", "__ow_headers": headers})
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
    received = next(event for event in events if event.get("event") == "redirect.received")
    assert received["request-id"] == "corr-42"
