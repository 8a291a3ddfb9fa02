from __future__ import annotations

import logging
from pathlib import Path

from agent_actions.stdlib_logging import (
    PACKAGE_LOGGER,
    configure_logging,
    debug_logging,
    suppress_lastresort_in_json_mode,
)


def _package_handlers():
    return [h for h in logging.getLogger(PACKAGE_LOGGER).handlers if not h.__class__.__name__.startswith("LogCapture")]


def test_configure_logging_is_idempotent() -> None:
    configure_logging(level="INFO")
    configure_logging(level="DEBUG")

    handlers = _package_handlers()
    assert len(handlers) == 1
    assert handlers[0].level == logging.DEBUG


def test_configure_logging_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "actions.log"
    configure_logging(level="INFO", log_path=log_path)

    logging.getLogger("agent_actions.loader").info("hello file")
    for h in _package_handlers():
        h.flush()

    assert "hello file" in log_path.read_text(encoding="utf-8")


def test_switching_targets_replaces_handler(tmp_path: Path) -> None:
    configure_logging(level="INFO", log_path=tmp_path / "a.log")
    configure_logging(level="INFO")

    handlers = _package_handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert not isinstance(handlers[0], logging.FileHandler)


def test_debug_logging_restores_level() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.WARNING)

    with debug_logging(True):
        assert logger.level == logging.DEBUG
    assert logger.level == logging.WARNING

    with debug_logging(False):
        assert logger.level == logging.WARNING


def test_suppress_lastresort_installs_null_handler(monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr("agent_actions.stdlib_logging._JSON_MODE_NULL_HANDLER_INSTALLED", False)

    suppress_lastresort_in_json_mode()

    assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


def test_overlapping_debug_scopes_restore_once_all_exit() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.WARNING)

    first = debug_logging(True)
    second = debug_logging(True)
    first.__enter__()
    second.__enter__()
    first.__exit__(None, None, None)
    assert logger.level == logging.DEBUG

    second.__exit__(None, None, None)
    assert logger.level == logging.WARNING
