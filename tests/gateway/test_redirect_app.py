from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pxy_redirect.config.settings import load_settings
from pxy_redirect.gateway.app import create_app
from pxy_redirect.gateway.services import RedirectService, build_service

LLVM = "https://releases.llvm.org"


@pytest.fixture
def service(reporter) -> RedirectService:
    service = build_service(load_settings("prod"))
    service.reporter = reporter
    return service


@pytest.fixture
def client(service: RedirectService) -> TestClient:
    app = create_app(settings=load_settings("prod"), service=service)
    return TestClient(app, follow_redirects=False)


def test_redirects_with_permanent_status(client: TestClient, reporter):
    response = client.get("/13/wall")
    assert response.status_code == 308
    assert response.headers["location"] == f"{LLVM}/13.0.0/tools/clang/docs/DiagnosticsReference.html#wall"
    assert reporter.calls == 1


@pytest.mark.parametrize(
    ("path", "location"),
    [
        ("/17/some-flag", "17.0.1/tools/clang/docs/DiagnosticsReference.html#some-flag"),
        ("/18/some-flag", "18.1.0/tools/clang/docs/DiagnosticsReference.html#some-flag"),
        (
            "/6/wc++98-c++11-compat-binary-literal",
            "6.0.0/tools/clang/docs/DiagnosticsReference.html#wc-98-c-11-compat-binary-literal",
        ),
    ],
)
def test_version_exceptions_over_http(client: TestClient, path: str, location: str):
    response = client.get(path)
    assert response.status_code == 308
    assert response.headers["location"] == f"{LLVM}/{location}"


def test_head_requests_redirect(client: TestClient):
    response = client.head("/13/wall")
    assert response.status_code == 308
    assert response.headers["location"].endswith("#wall")


@pytest.mark.parametrize("path", ["/", "/index.html"])
def test_home_page(client: TestClient, path: str):
    response = client.get(path)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Welcome" in response.text


@pytest.mark.parametrize("path", ["/x/wall", "/13", "/13/", "/13/bad frag!"])
def test_invalid_paths_render_error_page(client: TestClient, path: str, reporter):
    response = client.get(path)
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/html")
    assert "alert-danger" in response.text
    assert "https://pxy.fi/13/wall" in response.text
    assert "location" not in response.headers
    assert reporter.calls == 1


def test_malformed_path_is_internal_error(client: TestClient):
    response = client.get("/13/%C3%28")
    assert response.status_code == 500
    assert "Unable to parse received URL" in response.text


def test_user_input_is_escaped_in_error_page(client: TestClient):
    response = client.get("/<script>/wall")
    assert response.status_code == 400
    assert "<script>" not in response.text
    assert "&lt;script&gt;" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/13/wall", headers={"X-Request-ID": "req-42"})
    assert response.headers["x-request-id"] == "req-42"
    assert "x-response-time-ms" in response.headers
    assert response.headers["x-content-type-options"] == "nosniff"

    generated = client.get("/13/wall")
    assert len(generated.headers["x-request-id"]) == 32


def test_health_endpoint(client: TestClient, reporter):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["version_rules"] == 3
    assert payload["heartbeat"] is False
    assert "uptime_seconds" in payload
    assert reporter.calls == 0


def test_metrics_endpoint(client: TestClient):
    client.get("/13/wall")
    client.get("/x/wall")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert 'pxy_redirect_outcomes_total{outcome="redirect"}' in response.text
    assert 'pxy_redirect_outcomes_total{outcome="invalid_version"}' in response.text


def test_metrics_can_be_disabled(monkeypatch, service: RedirectService):
    monkeypatch.setenv("PXY_OBSERVABILITY__METRICS__ENABLED", "false")
    client = TestClient(create_app(settings=load_settings("prod"), service=service))
    assert client.get("/metrics").status_code == 400


def test_configured_status_code(monkeypatch, reporter):
    monkeypatch.setenv("PXY_REDIRECT__STATUS_CODE", "302")
    settings = load_settings("prod")
    client = TestClient(create_app(settings=settings), follow_redirects=False)
    assert client.get("/13/wall").status_code == 302


def test_debug_flag_follows_environment(service: RedirectService):
    assert create_app(settings=load_settings("dev"), service=service).debug is True
    assert create_app(settings=load_settings("prod"), service=service).debug is False
