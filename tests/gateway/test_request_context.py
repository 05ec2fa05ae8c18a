from pxy_redirect.gateway.context import RequestContext


def test_context_from_function_headers():
    context = RequestContext.from_headers(
        {
            "user-agent": "curl/8",
            "do-connecting-ip": "10.0.0.1",
            "x-forwarded-for": "10.9.9.9",
            "referer": "https://example.test/",
            "x-request-id": "abc",
        }
    )
    assert context == RequestContext(
        ip="10.0.0.1", user_agent="curl/8", referer="https://example.test/", request_id="abc"
    )
    assert context.as_log_fields() == {
        "ip": "10.0.0.1",
        "user-agent": "curl/8",
        "referer": "https://example.test/",
        "request-id": "abc",
    }


def test_context_falls_back_to_forwarded_for_and_peer():
    forwarded = RequestContext.from_headers({"x-forwarded-for": "1.1.1.1, 2.2.2.2"})
    assert forwarded.ip == "1.1.1.1"

    peer = RequestContext.from_headers({}, client_host="127.0.0.1")
    assert peer.ip == "127.0.0.1"
    assert peer.user_agent == ""
    assert len(peer.request_id) == 32


def test_custom_request_id_header():
    context = RequestContext.from_headers({"x-correlation-id": "c-1"}, request_id_header="X-Correlation-ID")
    assert context.request_id == "c-1"
