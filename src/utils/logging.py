from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import structlog


DEFAULT_LOG_FILE = "logs/read_api.jsonl"


def _build_handlers(lvl: str, file_path: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path))

    formatter = logging.Formatter("%(message)s")
    for h in handlers:
        h.setLevel(lvl)
        h.setFormatter(formatter)
    return handlers


def setup_logging(
    *,
    level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Structured logging for the read API.

    Every event is one JSON object, written to the console and, unless
    LOG_FILE is set to an empty string, appended to a JSON-lines file.
    Request context bound with `bind_request_context` is merged into every
    event logged while that request is handled.
    """
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    file_path = log_file if log_file is not None else os.getenv("LOG_FILE", DEFAULT_LOG_FILE)

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers.clear()
    for h in _build_handlers(lvl, file_path):
        root.addHandler(h)

    # Upstream request lines are noise at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, lvl, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(**kwargs: Any) -> None:
    """Replace the per-request context (method, path...) for the current task."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(**kwargs: Any):
    # Lazy proxy: module-level loggers are created at import, before setup_logging() runs.
    return structlog.get_logger(**kwargs)
