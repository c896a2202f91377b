from __future__ import annotations

import json

import pytest
import requests

from core.errors import ErrorCode, TransportError
from core.gateways.http_transport import HttpTransport, JsonResponseParser
from core.gateways.types import GatewayConfig


class _Response:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        self.closed = False

    def close(self) -> None:
        self.closed = True


class _Session:
    def __init__(self, response: _Response | None = None, error: Exception | None = None) -> None:
        self.auth = None
        self.response = response
        self.error = error
        self.posts: list[dict] = []

    def post(self, url, *, data, headers, auth, timeout):
        self.posts.append({"url": url, "data": data, "headers": headers, "auth": auth, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        pass


def _config(*, test_mode: bool = True) -> GatewayConfig:
    return GatewayConfig(
        name="adyen",
        test_url="https://pal-test.example.com/pal/servlet/Payment/v18/",
        live_url="https://pal-live.example.com/pal/servlet/Payment/v18",
        username="ws@Company.Example",
        password="secret",
        test_mode=test_mode,
        timeout_seconds=7.5,
    )


def test_dispatch_posts_json_with_basic_auth_and_releases_response():
    response = _Response(200, '{"resultCode": "Authorised"}')
    session = _Session(response=response)
    transport = HttpTransport(_config(), session=session)  # type: ignore[arg-type]

    with transport.dispatch("authorise", {"reference": "order-1"}) as raw:
        assert raw.status_code == 200
        assert raw.body == '{"resultCode": "Authorised"}'
        assert response.closed is False

    assert response.closed is True
    post = session.posts[0]
    assert post["auth"] == ("ws@Company.Example", "secret")
    assert post["url"] == "https://pal-test.example.com/pal/servlet/Payment/v18/authorise"
    assert json.loads(post["data"]) == {"reference": "order-1"}
    assert post["headers"]["Content-Type"] == "application/json"
    assert post["timeout"] == 7.5


def test_caller_supplied_session_keeps_its_own_auth():
    session = _Session(response=_Response(200, "{}"))
    session.auth = ("proxy-user", "proxy-pass")
    transport = HttpTransport(_config(), session=session)  # type: ignore[arg-type]

    with transport.dispatch("authorise", {}):
        pass

    assert session.auth == ("proxy-user", "proxy-pass")
    assert session.posts[0]["auth"] == ("ws@Company.Example", "secret")


def test_dispatch_uses_live_url_outside_test_mode():
    session = _Session(response=_Response(200, "{}"))
    transport = HttpTransport(_config(test_mode=False), session=session)  # type: ignore[arg-type]

    with transport.dispatch("capture", {}):
        pass

    assert session.posts[0]["url"] == "https://pal-live.example.com/pal/servlet/Payment/v18/capture"


def test_dispatch_returns_error_status_without_raising():
    response = _Response(422, '{"errorCode": "101"}')
    transport = HttpTransport(_config(), session=_Session(response=response))  # type: ignore[arg-type]

    with transport.dispatch("authorise", {}) as raw:
        assert raw.ok is False
        assert raw.status_code == 422

    assert response.closed is True


def test_dispatch_releases_response_when_caller_fails():
    response = _Response(200, "not json")
    transport = HttpTransport(_config(), session=_Session(response=response))  # type: ignore[arg-type]

    with pytest.raises(TransportError):
        with transport.dispatch("authorise", {}) as raw:
            JsonResponseParser().parse(raw.body)

    assert response.closed is True


@pytest.mark.parametrize("error", [requests.ConnectionError("refused"), requests.Timeout("read timed out")])
def test_dispatch_wraps_request_errors(error: Exception):
    transport = HttpTransport(_config(), session=_Session(error=error))  # type: ignore[arg-type]

    with pytest.raises(TransportError) as exc_info:
        with transport.dispatch("authorise", {}):
            pass

    assert exc_info.value.code == ErrorCode.GATEWAY_TRANSPORT_ERROR
    assert exc_info.value.details["endpoint"] == "authorise"
    assert exc_info.value.__cause__ is error


def test_parser_treats_blank_body_as_empty_mapping():
    parser = JsonResponseParser()

    assert parser.parse("") == {}
    assert parser.parse("   \n") == {}


@pytest.mark.parametrize("body", ["{broken", "[1, 2]", '"Authorised"'])
def test_parser_rejects_malformed_bodies(body: str):
    with pytest.raises(TransportError) as exc_info:
        JsonResponseParser().parse(body)

    assert exc_info.value.code == ErrorCode.GATEWAY_RESPONSE_MALFORMED
