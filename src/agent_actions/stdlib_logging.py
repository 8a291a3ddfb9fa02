from __future__ import annotations

import contextlib
import logging
import sys
import threading
from pathlib import Path
from typing import Iterator

PACKAGE_LOGGER = "agent_actions"

_CONFIGURED_TARGET: str | None = None
_PACKAGE_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

_DEBUG_LOCK = threading.Lock()
_DEBUG_DEPTH = 0
_DEBUG_SAVED_LEVEL = logging.NOTSET


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Path | None = None) -> None:
    """Attach one handler to the ``agent_actions`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr. Idempotent
    per-process: configuring the same target twice only updates the level.
    """
    global _CONFIGURED_TARGET, _PACKAGE_HANDLER

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _PACKAGE_HANDLER is not None:
        _PACKAGE_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the handler installed by a previous call when switching targets.
    if _PACKAGE_HANDLER is not None:
        logger.removeHandler(_PACKAGE_HANDLER)
        _PACKAGE_HANDLER.close()
        _PACKAGE_HANDLER = None

    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)

    _PACKAGE_HANDLER = handler
    _CONFIGURED_TARGET = target


@contextlib.contextmanager
def debug_logging(enabled: bool) -> Iterator[None]:
    """Temporarily lower the package logger to DEBUG when ``enabled``.

    Nested and concurrent uses share one counter: the level saved by the
    first entry is restored only when the last one exits. This changes the
    logger level only; records still need a handler from
    :func:`configure_logging` to be printed.
    """
    global _DEBUG_DEPTH, _DEBUG_SAVED_LEVEL
    if not enabled:
        yield
        return
    logger = logging.getLogger(PACKAGE_LOGGER)
    with _DEBUG_LOCK:
        if _DEBUG_DEPTH == 0:
            _DEBUG_SAVED_LEVEL = logger.level
            logger.setLevel(logging.DEBUG)
        _DEBUG_DEPTH += 1
    try:
        yield
    finally:
        with _DEBUG_LOCK:
            _DEBUG_DEPTH -= 1
            if _DEBUG_DEPTH == 0:
                logger.setLevel(_DEBUG_SAVED_LEVEL)


def reset_logging_for_tests() -> None:
    """Test-only: remove the package handler and restore the default level."""
    global _CONFIGURED_TARGET, _PACKAGE_HANDLER, _DEBUG_DEPTH
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _PACKAGE_HANDLER is not None:
        logger.removeHandler(_PACKAGE_HANDLER)
        _PACKAGE_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _PACKAGE_HANDLER = None
    _DEBUG_DEPTH = 0


def suppress_lastresort_in_json_mode() -> None:
    """Prevent stdlib logging's lastResort handler from polluting JSON output.

    Python's logging module emits WARNING+ records to stderr via the implicit
    ``lastResort`` handler when no handlers are configured. Installing a
    NullHandler on the root logger keeps ``--json`` output machine-readable.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "debug_logging",
    "reset_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
