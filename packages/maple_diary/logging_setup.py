"""Package logging for ``maple_diary``.

Every module logs through ``get_logger("maple_diary.<module>")``. Until a host
calls :func:`configure_logging` the ``maple_diary`` logger carries only a
``NullHandler``, so importing the library prints nothing. The ``maple-diary``
CLI configures it once per process; the level comes from the argument, then
``MAPLE_DIARY_LOG_LEVEL``, then WARNING.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "maple_diary"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from(value: int | str) -> int | None:
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else None


def _resolve_level(level: int | str | None) -> int:
    for candidate in (level, os.getenv("MAPLE_DIARY_LOG_LEVEL")):
        if candidate is None or candidate == "":
            continue
        resolved = _level_from(candidate)
        if resolved is not None:
            return resolved
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send ``maple_diary`` records to ``stream``; later calls are no-ops.

    Parameters
    ----------
    level:
        ``int`` or level name such as ``"debug"``. Unknown names fall back
        to ``MAPLE_DIARY_LOG_LEVEL`` and then WARNING.
    fmt:
        ``logging.Formatter`` format string.
    stream:
        Destination; ``sys.stderr`` at call time when omitted.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    pkg.setLevel(resolved)
    pkg.addHandler(handler)
    pkg.propagate = False
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def _reset_for_tests() -> None:
    """Undo :func:`configure_logging` so each test starts unconfigured."""

    global _CONFIGURED
    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.propagate = True
    pkg.setLevel(logging.NOTSET)
    _CONFIGURED = False
