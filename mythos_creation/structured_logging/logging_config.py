"""
Structlog-based logging configuration for the creation rules engine.

The engine is a library: it never installs handlers on import. Callers that
want structured output call configure_structlog() once at start-up (or
setup_logging() with an AppConfig). Until then structlog's defaults apply.

CORRECT USAGE:
    from mythos_creation.structured_logging.logging_config import get_logger
    logger = get_logger(__name__)
    logger.debug("Formula evaluated", formula=formula, total=total)

INCORRECT USAGE:
    import logging
    logger = logging.getLogger(__name__)
    logger.debug("Formula evaluated", formula=formula)  # TypeError on keyword context
"""

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.stdlib import BoundLogger, LoggerFactory

if TYPE_CHECKING:
    from mythos_creation.config.models import AppConfig

VALID_ENVIRONMENTS = ("local", "unit_test", "production")
VALID_FORMATS = ("json", "human", "colored")


class _LoggingState:  # pylint: disable=too-few-public-methods  # Reason: State container, no behaviour
    """State container for logging initialization to avoid global statements."""

    signature: str | None = None


_logging_state = _LoggingState()


def detect_environment() -> str:
    """
    Detect the current environment based on various indicators.

    Returns:
        Environment name: "unit_test", "local", or "production"
    """
    if "pytest" in sys.modules or "pytest" in sys.argv[0]:
        return "unit_test"

    env = os.getenv("MYTHOS_CREATION_ENV")
    if env in VALID_ENVIRONMENTS:
        return env

    return "local"


def _select_renderer(log_format: str) -> Any:
    """Pick the final structlog renderer for the requested format."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=log_format == "colored")


def configure_structlog(
    environment: str | None = None,
    log_level: str = "INFO",
    log_format: str = "colored",
) -> None:
    """
    Configure Structlog based on environment.

    Calling this again with the same arguments is a no-op.

    Args:
        environment: Environment name (auto-detected if None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Renderer to use ("json", "human", "colored")
    """
    if environment is None:
        environment = detect_environment()

    signature = f"{environment}:{log_level.upper()}:{log_format}"
    if _logging_state.signature == signature:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _select_renderer("json" if environment == "production" else log_format),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )
    _logging_state.signature = signature


def get_logger(name: str) -> BoundLogger:
    """
    Get a Structlog logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured Structlog logger instance
    """
    return structlog.get_logger(name)


def setup_logging(config: "AppConfig") -> None:
    """
    Set up logging from the application configuration.

    Args:
        config: Application configuration
    """
    logging_config = config.logging
    if logging_config.disable_logging:
        logging.disable(logging.CRITICAL)
        return

    configure_structlog(logging_config.environment, logging_config.level, logging_config.format)


def reset_logging_state() -> None:
    """Forget the last applied configuration so the next configure call re-applies it."""
    _logging_state.signature = None
    logging.disable(logging.NOTSET)
