from __future__ import annotations


class WidgetValidationError(Exception):
    """Form input rejected before any backend call is made."""
