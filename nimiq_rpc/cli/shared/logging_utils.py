"""Loguru helpers for consistent file logging in CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from nimiq_rpc.config.loader import get_data_dir

_SINK_IDS: dict[str, int] = {}


def get_log_dir() -> Path:
    return get_data_dir() / "logs"


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Ensure a rotating log sink for the given command name."""
    log_path = get_log_dir() / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def configure_cli_logging(name: str, *, debug: bool = False, logs: bool = False, level: str = "INFO") -> Path | None:
    """
    Route library logs for a CLI command.

    Quiet by default; ``logs`` adds the rotating file sink and ``debug``
    additionally prints DEBUG records to stderr.
    """
    if debug:
        logger.remove()
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>",
        )
        logger.enable("nimiq_rpc")
        return ensure_rotating_log_file(name, level="DEBUG")
    if logs:
        logger.enable("nimiq_rpc")
        return ensure_rotating_log_file(name, level=level)
    logger.disable("nimiq_rpc")
    return None
