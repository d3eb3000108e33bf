from __future__ import annotations

from dashboard.features.gateway import (
    GatewayError,
    NetworkError,
    ServerError,
    diagnostic_sections,
    format_diagnostic,
    headline,
)

from .types import ErrorPanel, PanelKind, PanelSection

_NETWORK_CAUSES = [
    "The API server is down or unreachable",
    "There's a network connectivity issue",
    "The API URL configuration is incorrect",
]


def _panel_kind(error: GatewayError) -> PanelKind:
    if isinstance(error, ServerError):
        return "cors" if error.cors_suspected else "server"
    return error.kind


def build_error_panel(
    error: GatewayError,
    *,
    context: str = "API Error",
    origin: str | None = None,
) -> ErrorPanel:
    """Lay out a gateway error for display, reading its fields directly."""
    kind = _panel_kind(error)
    help_lines: list[str] = []

    if kind == "cors":
        message = "CORS Policy Error: The API server is not allowing requests from this website."
        help_lines.append("This is a CORS configuration issue:")
        if origin:
            help_lines.append(f"The server needs to be configured to allow requests from: {origin}")
        if isinstance(error, ServerError) and error.cors == "ambiguous":
            help_lines.append(
                f"Status {error.status} can also mean the request was not authorized."
            )
    elif isinstance(error, NetworkError):
        message = "Network Error: Cannot connect to the API server."
        help_lines.append("Possible causes:")
        help_lines.extend(_NETWORK_CAUSES)
    else:
        message = headline(error)

    return ErrorPanel(
        kind=kind,
        title=context,
        headline=message,
        help=help_lines,
        sections=[PanelSection(title=title.rstrip(":"), body=body) for title, body in diagnostic_sections(error)],
        full_text=format_diagnostic(error),
    )
