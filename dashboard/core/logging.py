from __future__ import annotations

import logging

_ROOT_LOGGER = "dashboard"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again only adjusts the level, so app reloads and test
    lifespans do not stack handlers.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(handler, "_dashboard_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._dashboard_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
