from __future__ import annotations

import httpx
import pytest

from dashboard.features.gateway import (
    CORS_MARKER,
    EnvironmentSnapshot,
    NetworkError,
    RequestContext,
    RequestSetupError,
    ServerError,
    assess_cors,
    classify_failure,
    format_diagnostic,
)

CONTEXT = RequestContext(
    operation="start_agent",
    method="POST",
    url="http://agents.test/start-agent",
    payload={"user_id": "user-1", "agent_type": "voice"},
)
ENVIRONMENT = EnvironmentSnapshot(
    environment="test",
    document_api_url="http://docs.test",
    agent_manager_api_url="http://agents.test",
    use_mock_data=False,
)


def _status_error(status: int, **response_kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", CONTEXT.url)
    response = httpx.Response(status, request=request, **response_kwargs)
    return httpx.HTTPStatusError("failed", request=request, response=response)


@pytest.mark.parametrize(
    ("status", "texts", "expected"),
    [
        (0, (), "suspected"),
        (403, (), "ambiguous"),
        (403, ("Blocked by CORS policy",), "suspected"),
        (500, ("No 'Access-Control-Allow-Origin' header is present",), "suspected"),
        (500, ("internal error",), "not_indicated"),
        (404, (), "not_indicated"),
    ],
)
def test_assess_cors(status, texts, expected):
    assert assess_cors(status=status, texts=texts) == expected


def test_status_error_becomes_server_error_with_body():
    error = classify_failure(
        _status_error(404, json={"detail": "Collection not found"}),
        context=CONTEXT,
        environment=ENVIRONMENT,
    )

    assert isinstance(error, ServerError)
    assert error.kind == "server"
    assert error.status == 404
    assert error.status_text == "Not Found"
    assert error.body == {"detail": "Collection not found"}
    assert error.context == CONTEXT
    assert error.environment == ENVIRONMENT


def test_status_error_with_text_body():
    error = classify_failure(_status_error(502, text="Bad gateway"), context=CONTEXT)

    assert isinstance(error, ServerError)
    assert error.body == "Bad gateway"
    assert error.detail == "Bad gateway"


def test_failure_with_request_but_no_response_is_network_error():
    request = httpx.Request("GET", "http://agents.test/agents")

    error = classify_failure(httpx.ReadTimeout("timed out", request=request), context=CONTEXT)

    assert isinstance(error, NetworkError)
    assert error.kind == "network"
    assert "no response" in error.message


def test_failure_without_request_is_setup_error():
    error = classify_failure(httpx.ConnectError("unreachable"), context=CONTEXT)

    assert isinstance(error, RequestSetupError)


def test_unsupported_scheme_is_setup_error():
    request = httpx.Request("GET", "ftp://agents.test/agents")

    error = classify_failure(httpx.UnsupportedProtocol("ftp", request=request), context=CONTEXT)

    assert isinstance(error, RequestSetupError)


def test_client_side_exception_is_setup_error():
    error = classify_failure(TypeError("Object of type bytes is not JSON serializable"), context=CONTEXT)

    assert isinstance(error, RequestSetupError)
    assert error.kind == "request_setup"
    assert "TypeError" in error.message


def test_existing_gateway_error_passes_through_with_context():
    original = RequestSetupError("Using mock data")

    error = classify_failure(original, context=CONTEXT, environment=ENVIRONMENT)

    assert error is original
    assert error.context == CONTEXT
    assert error.environment == ENVIRONMENT


def test_diagnostic_for_server_error_lists_sections():
    error = classify_failure(
        _status_error(500, json={"detail": "boom"}),
        context=CONTEXT,
        environment=ENVIRONMENT,
    )

    text = format_diagnostic(error)

    assert text.splitlines()[0] == "start_agent failed: server responded with 500 Internal Server Error"
    assert "Connection Details:\nOperation: start_agent" in text
    assert "URL: http://agents.test/start-agent" in text
    assert '"agent_type": "voice"' in text
    assert "Server Response:\nStatus: 500 Internal Server Error" in text
    assert "Environment Info:\nenvironment: test" in text
    assert CORS_MARKER not in text


def test_diagnostic_distinguishes_suspected_from_possible_cors():
    suspected = ServerError("Network request blocked", status=0, context=CONTEXT)
    possible = ServerError("Forbidden", status=403, context=CONTEXT)

    assert f"{CORS_MARKER} SUSPECTED" in format_diagnostic(suspected)
    assert f"{CORS_MARKER} POSSIBLE" in format_diagnostic(possible)


def test_diagnostic_for_network_and_setup_errors():
    network = NetworkError("Request sent but no response received", context=CONTEXT)
    setup = RequestSetupError("Invalid URL", context=CONTEXT)

    network_text = format_diagnostic(network)
    setup_text = format_diagnostic(setup)

    assert "Network Error:\nRequest sent but no response received" in network_text
    assert "Request Setup Error:" not in network_text
    assert "Request Setup Error:\nInvalid URL" in setup_text
    assert "Environment Info:\n(unavailable)" in setup_text
