from unittest.mock import MagicMock

import pytest
import requests

from cursorpager.exceptions import TransportError
from cursorpager.transport import RequestsTransport


def make_response(status_code=200, content=b"", url="https://example.com"):
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.url = url
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def transport(session):
    return RequestsTransport(session=session)


def test_get_returns_parsed_json(transport, session):
    session.get.return_value = make_response(content=b'[{"tid": 1, "ok": true}]')

    assert transport.get("https://testing.com?tid=0") == [{"tid": 1, "ok": True}]
    # deadlines are enforced by TimedCaller, not by requests
    session.get.assert_called_once_with("https://testing.com?tid=0", timeout=None)


def test_backstop_timeout_is_passed_to_requests(session):
    session.get.return_value = make_response(content=b"[]")
    transport = RequestsTransport(session=session, timeout=60)

    transport.get("https://testing.com")

    session.get.assert_called_once_with("https://testing.com", timeout=60)


def test_response_raise_for_status(transport, session):
    """Test that response.raise_for_status() is called."""
    response = MagicMock()
    response.json.return_value = []
    session.get.return_value = response

    transport.get("https://testing.com")

    response.raise_for_status.assert_called_once()


def test_http_error_becomes_transport_error(transport, session):
    session.get.return_value = make_response(
        status_code=503, content=b"unavailable", url="https://testing.com"
    )

    with pytest.raises(TransportError) as excinfo:
        transport.get("https://testing.com")

    assert isinstance(excinfo.value.__cause__, requests.HTTPError)
    assert excinfo.value.url == "https://testing.com"


def test_connection_error_becomes_transport_error(transport, session):
    session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(TransportError, match="connection refused"):
        transport.get("https://testing.com")


def test_empty_body_is_a_parse_failure(transport, session):
    session.get.return_value = make_response(content=b"")

    with pytest.raises(TransportError, match="invalid JSON body"):
        transport.get("https://testing.com")


def test_malformed_body_is_a_parse_failure(transport, session):
    session.get.return_value = make_response(content=b'{"ok": ')

    with pytest.raises(TransportError, match="invalid JSON body"):
        transport.get("https://testing.com")


def test_context_manager_closes_session(session):
    with RequestsTransport(session=session):
        pass

    session.close.assert_called_once()
