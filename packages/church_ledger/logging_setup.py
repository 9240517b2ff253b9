"""Centralized logging configuration for the ``church_ledger`` package.

Importer modules log through ``get_logger("church_ledger.<module>")`` and
never attach handlers. Output is switched on by the entrypoint (the CLI, or a
host application embedding the importer) through :func:`configure_logging`,
which owns exactly one ``StreamHandler`` on the ``"church_ledger"`` logger.

Level precedence: explicit argument, then ``CHURCH_LEDGER_LOG_LEVEL``, then
``INFO``. The format can be overridden with ``CHURCH_LEDGER_LOG_FORMAT``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "church_ledger"
_LEVEL_ENV_VAR = "CHURCH_LEDGER_LOG_LEVEL"
_FORMAT_ENV_VAR = "CHURCH_LEDGER_LOG_FORMAT"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# The handler installed by configure_logging(); None until configured.
_handler: logging.Handler | None = None


def _level_from(value: int | str | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name)


def resolve_level(level: int | str | None = None) -> int:
    """Apply the level precedence; unknown names fall through to the next source."""

    for candidate in (level, os.getenv(_LEVEL_ENV_VAR)):
        resolved = _level_from(candidate)
        if resolved is not None:
            return resolved
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
    force: bool = False,
) -> None:
    """Attach the package handler.

    Parameters
    ----------
    level:
        ``int`` or level name (``"DEBUG"``); see :func:`resolve_level`.
    fmt:
        Format string; defaults to ``CHURCH_LEDGER_LOG_FORMAT`` or
        ``"%(asctime)s %(name)s %(levelname)s %(message)s"``.
    stream:
        Destination of the ``StreamHandler``.
    force:
        Replace an earlier configuration instead of keeping it. Without it,
        repeated calls are no-ops.
    """

    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    if _handler is not None:
        if not force:
            return
        logger.removeHandler(_handler)
        _handler = None

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or os.getenv(_FORMAT_ENV_VAR) or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Records stop here; the root logger would print them twice.
    logger.propagate = False
    _handler = handler


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``; library use stays silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
