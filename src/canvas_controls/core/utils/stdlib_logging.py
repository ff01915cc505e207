from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_INSTALLED_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else default


def configure_stdlib_logging(*, level: str = "WARNING", stream: Optional[IO[str]] = None) -> None:
    """Send stdlib logging to ``stream`` (stderr by default) at ``level``.

    Idempotent per-process: the handler installed by a previous call is
    replaced rather than stacked.
    """
    global _INSTALLED_HANDLER

    root = logging.getLogger()
    root.setLevel(level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        root.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _INSTALLED_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: drop the handler installed by ``configure_stdlib_logging``."""
    global _INSTALLED_HANDLER, _JSON_MODE_NULL_HANDLER
    root = logging.getLogger()
    for handler in (_INSTALLED_HANDLER, _JSON_MODE_NULL_HANDLER):
        if handler is not None:
            root.removeHandler(handler)
            handler.close()
    _INSTALLED_HANDLER = None
    _JSON_MODE_NULL_HANDLER = None
    root.setLevel(logging.WARNING)


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib's implicit ``lastResort`` handler away from ``--json`` output.

    With no handlers configured, WARNING records would be printed to stderr
    by ``logging.lastResort``. A ``NullHandler`` on the root logger prevents
    that without changing any levels.
    """
    global _JSON_MODE_NULL_HANDLER

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER is not None:
        return
    _JSON_MODE_NULL_HANDLER = logging.NullHandler()
    root.addHandler(_JSON_MODE_NULL_HANDLER)


__all__ = [
    "LOG_FORMAT",
    "level_from_name",
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
