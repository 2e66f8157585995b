"""
structlog setup shared by the CLI and library users that want the same output.
"""
import logging as py_logging
from typing import Optional

import structlog

from .config import LoggingConfig


def configure_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """Configures stdlib logging and structlog from a LoggingConfig."""
    logging_config = logging_config or LoggingConfig()

    handlers = None
    if logging_config.file:
        handlers = [py_logging.FileHandler(logging_config.file, encoding="utf-8")]

    py_logging.basicConfig(
        level=getattr(py_logging, logging_config.level.upper(), py_logging.INFO),
        format="%(message)s",
        handlers=handlers,
        force=True
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=True) if logging_config.format.lower() == "console"
            else structlog.processors.JSONRenderer(sort_keys=True)
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.get_logger(__name__).debug("Logging configured.", logging_level=logging_config.level, logging_format=logging_config.format)
