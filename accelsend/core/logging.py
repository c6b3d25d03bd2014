"""Structured logging configuration for accelsend."""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    log_file: str | Path | None = None,
    configure_uvicorn: bool = True,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog and the stdlib root logger.

    stdlib records (uvicorn, fastapi) go through the same processor chain
    as structlog events so the whole process emits one format.

    Args:
        json_logs: Render JSON lines instead of the console format
        log_level_name: Logging level name (DEBUG, INFO, WARNING, ...)
        log_file: Optional path; when set, events are also written there as JSON
        configure_uvicorn: Route uvicorn loggers through the root handler

    Returns:
        A logger bound to the ``accelsend`` namespace
    """
    level = getattr(logging, log_level_name.upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_logs),
            ],
        )
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    if configure_uvicorn:
        for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            uvicorn_logger = logging.getLogger(logger_name)
            uvicorn_logger.handlers = []
            uvicorn_logger.propagate = True
            uvicorn_logger.setLevel(level)

    return get_logger("accelsend")


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)
        **initial_values: Context bound to every event of this logger

    Returns:
        Structlog logger proxy
    """
    return structlog.get_logger(name, **initial_values)
