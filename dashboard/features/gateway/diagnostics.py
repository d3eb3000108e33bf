from __future__ import annotations

import json
from typing import Any

from .errors import GatewayError, NetworkError, RequestSetupError, ServerError

CORS_MARKER = "CORS POLICY ERROR"
SECTION_CONNECTION = "Connection Details:"
SECTION_RESPONSE = "Server Response:"
SECTION_NETWORK = "Network Error:"
SECTION_SETUP = "Request Setup Error:"
SECTION_ENVIRONMENT = "Environment Info:"


def _pretty(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, indent=2, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(value)


def headline(error: GatewayError) -> str:
    operation = error.context.operation if error.context else "request"
    if isinstance(error, ServerError):
        status_text = f" {error.status_text}" if error.status_text else ""
        return f"{operation} failed: server responded with {error.status}{status_text}"
    if isinstance(error, NetworkError):
        return f"{operation} failed: no response from server"
    return f"{operation} failed: request could not be sent"


def connection_details(error: GatewayError) -> str:
    if error.context is None:
        return "(no request context)"
    lines = [
        f"Operation: {error.context.operation}",
        f"Method: {error.context.method}",
        f"URL: {error.context.url}",
    ]
    if error.context.payload is not None:
        lines.append(f"Payload: {_pretty(error.context.payload)}")
    return "\n".join(lines)


def cors_section(error: ServerError) -> str:
    if error.cors == "suspected":
        title = f"{CORS_MARKER} SUSPECTED"
        body = "The response looks like a cross-origin policy rejection."
    else:
        title = f"{CORS_MARKER} POSSIBLE"
        body = (
            f"Status {error.status} is returned for cross-origin rejections but also "
            "for ordinary authorization failures."
        )
    return f"{title}\n{body}"


def environment_details(error: GatewayError) -> str:
    if error.environment is None:
        return "(unavailable)"
    return "\n".join(f"{key}: {value}" for key, value in error.environment.as_dict().items())


def diagnostic_sections(error: GatewayError) -> list[tuple[str, str]]:
    sections = [(SECTION_CONNECTION, connection_details(error))]
    if isinstance(error, ServerError):
        sections.append(
            (
                SECTION_RESPONSE,
                f"Status: {error.status} {error.status_text}".rstrip()
                + f"\nBody: {_pretty(error.body)}",
            )
        )
        if error.cors_suspected:
            title, _, body = cors_section(error).partition("\n")
            sections.append((title, body))
    elif isinstance(error, NetworkError):
        sections.append((SECTION_NETWORK, error.message))
    elif isinstance(error, RequestSetupError):
        sections.append((SECTION_SETUP, error.message))
    sections.append((SECTION_ENVIRONMENT, environment_details(error)))
    return sections


def format_diagnostic(error: GatewayError) -> str:
    """Render a gateway error as the multi-section text shown to operators."""
    parts = [headline(error)]
    parts.extend(f"{title}\n{body}" for title, body in diagnostic_sections(error))
    return "\n\n".join(parts)
