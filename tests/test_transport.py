from __future__ import annotations

from gurutvapay.transport import FormBody, RawBody, RequestSpec, build_url


def test_params_merge_into_existing_query() -> None:
    request = RequestSpec(
        method="post",
        url="https://hooks.example.org/echo?x=1",
        params={"y": 2, "flag": False},
    ).to_httpx()

    assert request.method == "POST"
    assert request.url.params["x"] == "1"
    assert request.url.params["y"] == "2"
    assert request.url.params["flag"] == "false"
    assert str(request.url).startswith("https://hooks.example.org/echo?x=1&")


def test_url_without_params_is_untouched() -> None:
    request = RequestSpec(method="GET", url="https://api.example.com/live/transaction-list?limit=5").to_httpx()
    assert str(request.url) == "https://api.example.com/live/transaction-list?limit=5"


def test_caller_content_type_overrides_body_default() -> None:
    request = RequestSpec(
        method="POST",
        url="https://api.example.com/notify",
        headers={"content-type": "text/plain"},
        body=RawBody("hello"),
    ).to_httpx()
    assert request.headers.get_list("Content-Type") == ["text/plain"]
    assert request.content == b"hello"


def test_form_body_encoding() -> None:
    request = RequestSpec(
        method="POST",
        url="https://api.example.com/uat_mode/transaction-status",
        body=FormBody({"merchantOrderId": "ORD 1"}),
    ).to_httpx()
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.content == b"merchantOrderId=ORD+1"


def test_build_url() -> None:
    root = "https://api.example.com"
    assert build_url(root, "/refunds") == "https://api.example.com/refunds"
    assert build_url(root, "refunds") == "https://api.example.com/refunds"
    assert build_url(root, "HTTPS://other.example.org/x") == "HTTPS://other.example.org/x"
