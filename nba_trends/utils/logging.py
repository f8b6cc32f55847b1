"""Structured logging configuration.

structlog events are routed through the stdlib root logger to two handlers:
stdout (console or JSON renderer, per ``log_format``) and one JSON-lines file
per run in ``log_dir``. Season builds bind ``dataset`` and ``unit`` as
context variables, so every line of the run file can be filtered by season.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from nba_trends.utils.config import Settings, get_settings

_active_log_file: Path | None = None


def get_active_log_file() -> Path | None:
    """Return the path of the log file opened by the current process, if any."""
    return _active_log_file


def _open_run_log(log_dir: Path, level: int) -> tuple[logging.FileHandler | None, Path | None]:
    """Open ``nba_trends_YYYYMMDD_HHMMSS.log`` in ``log_dir``; (None, None) if impossible."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(
            f"Warning: Could not create log directory '{log_dir}': {e}. "
            "Falling back to stdout-only logging.",
            file=sys.stderr,
        )

    log_file = log_dir / f"nba_trends_{datetime.now():%Y%m%d_%H%M%S}.log"
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        print(
            f"Warning: Could not open log file '{log_file}': {e}. File logging disabled.",
            file=sys.stderr,
        )
        return None, None

    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
    )
    return handler, log_file


def _console_handler(log_format: str, level: int) -> logging.Handler:
    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))
    return handler


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        settings: Logging settings. If None, uses get_settings().
    """
    global _active_log_file  # noqa: PLW0603

    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    # Replace handlers from any earlier call
    for h in root.handlers[:]:
        root.removeHandler(h)

    root.addHandler(_console_handler(settings.log_format, level))
    file_handler, _active_log_file = _open_run_log(Path(settings.log_dir), level)
    if file_handler is not None:
        root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        # Before wrap_for_formatter so stdlib doesn't render the traceback twice
        structlog.processors.ExceptionRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _active_log_file is not None:
        structlog.get_logger(__name__).info("logging_initialized", log_file=str(_active_log_file))
