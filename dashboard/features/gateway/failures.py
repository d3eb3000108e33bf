from __future__ import annotations

from typing import Any

import httpx

from .errors import (
    EnvironmentSnapshot,
    GatewayError,
    NetworkError,
    RequestContext,
    RequestSetupError,
    ServerError,
)

# Transport errors raised before anything is written to the wire.
_LOCAL_TRANSPORT_ERRORS = (httpx.UnsupportedProtocol, httpx.LocalProtocolError)


def response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _attached_request(exc: httpx.RequestError) -> httpx.Request | None:
    try:
        return exc.request
    except RuntimeError:
        return None


def classify_failure(
    exc: BaseException,
    *,
    context: RequestContext,
    environment: EnvironmentSnapshot | None = None,
) -> GatewayError:
    """Map an exception raised by an httpx call onto the gateway error taxonomy."""
    if isinstance(exc, GatewayError):
        return exc.bind(context=context, environment=environment)

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return ServerError(
            f"Server responded with status {response.status_code}",
            status=response.status_code,
            status_text=response.reason_phrase,
            body=response_body(response),
            context=context,
            environment=environment,
        )

    if isinstance(exc, _LOCAL_TRANSPORT_ERRORS):
        return RequestSetupError(
            str(exc) or type(exc).__name__,
            context=context,
            environment=environment,
        )

    if isinstance(exc, httpx.RequestError):
        message = str(exc) or type(exc).__name__
        if _attached_request(exc) is None:
            return RequestSetupError(message, context=context, environment=environment)
        return NetworkError(
            f"Request sent but no response received ({type(exc).__name__}: {message})",
            context=context,
            environment=environment,
        )

    return RequestSetupError(
        f"{type(exc).__name__}: {exc}",
        context=context,
        environment=environment,
    )
