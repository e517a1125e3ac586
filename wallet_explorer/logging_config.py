"""
Logging for the API and the CLI.

Everything goes through structlog. Module loggers created with
``logging.getLogger(__name__)`` are rendered by the same formatter, and the
``extra=`` fields they pass (provider, page, count...) become structured keys.
"""

import logging
import sys
from typing import Iterable, List, Optional

import structlog

from .config import settings

# Per-request HTTP lines from these libraries duplicate our provider logs
NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def _processors(json_output: bool) -> List[structlog.types.Processor]:
    processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    return processors


def setup_logging(
    log_level: Optional[str] = None,
    json_output: Optional[bool] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Install a single stdout handler rendering structlog and stdlib records.

    Args:
        log_level: Override for ``settings.log_level``.
        json_output: JSON lines when true, colored console otherwise. Defaults
            to ``settings.log_json``, or console output at DEBUG when unset.
        quiet: Logger names capped at WARNING.
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    if json_output is None:
        json_output = settings.log_json if settings.log_json is not None else level != logging.DEBUG

    processors = _processors(json_output)
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*processors, structlog.stdlib.ExtraAdder()],
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
