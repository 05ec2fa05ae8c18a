from __future__ import annotations

import pytest

from pxy_redirect.gateway.presentation import GatewayResponse, present, render_page, to_starlette
from pxy_redirect.resolver import ErrorKind, Home, PathResolver, Redirect, VersionSpec


def test_present_redirect():
    outcome = Redirect(target="https://docs/x#y", version=VersionSpec(1), fragment="y")
    response = present(outcome)
    assert response.status_code == 308
    assert response.location == "https://docs/x#y"
    assert present(outcome, redirect_status=302).status_code == 302


def test_present_home():
    response = present(Home(path="/"))
    assert response.status_code == 200
    assert "pxy-redirect" in response.body
    assert response.location is None


def test_present_validation_error():
    outcome = PathResolver().resolve("/13/%zz")
    assert outcome.kind is ErrorKind.MALFORMED_INPUT
    response = present(outcome)
    assert response.status_code == 500
    assert outcome.message in response.body


def test_present_rejects_unknown_outcomes():
    with pytest.raises(TypeError):
        present("nope")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("page_type", "marker"),
    [("error", "alert-danger"), ("warning", "alert-warning"), ("info", "alert-info")],
)
def test_render_page_types(page_type, marker):
    page = render_page("<p>hello</p>", page_type)
    assert marker in page
    assert "<p>hello</p>" in page
    assert page.startswith("<!DOCTYPE html>")


def test_to_starlette_preserves_headers():
    response = to_starlette(
        GatewayResponse(
            status_code=308,
            body="redirecting...",
            headers={"location": "https://docs/", "content-type": "text/plain; charset=utf-8"},
        )
    )
    assert response.status_code == 308
    assert response.headers["location"] == "https://docs/"
    assert response.headers["content-type"] == "text/plain; charset=utf-8"
    assert response.body == b"redirecting..."
