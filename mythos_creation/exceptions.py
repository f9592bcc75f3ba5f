"""
Exception hierarchy for the investigator creation rules engine.

Validation findings about a player's draft are never raised: they are returned
as severity-tagged Issues. The exceptions defined here signal defects in the
engine's own inputs (a malformed formula, an unknown attribute token, a catalog
that references something it does not define) and are surfaced as hard failures.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from mythos_creation.structured_logging.logging_config import get_logger

if TYPE_CHECKING:
    from mythos_creation.models.issues import Issue

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """
    Contextual information for error handling.

    Carries the identifiers a caller needs to correlate a failure with the
    draft and step that produced it.
    """

    draft_id: str | None = None
    step: int | None = None
    operation: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "draft_id": self.draft_id,
            "step": self.step,
            "operation": self.operation,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class RulesEngineError(Exception):
    """
    Base exception for all rules engine errors.

    Provides structured error handling with context and metadata
    for proper error categorization and debugging.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
        user_friendly: str | None = None,
    ):
        """
        Initialize rules engine error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
            user_friendly: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.user_friendly = user_friendly or message
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self) -> None:
        """Log the error with structured context."""
        logger.error(
            "Rules engine error occurred",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
            details=self.details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for collaborators that render errors."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_friendly": self.user_friendly,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(RulesEngineError):
    """Catalog or caller data that the engine cannot interpret."""

    def __init__(self, message: str, context: ErrorContext | None = None, config_key: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class FormulaResolutionError(ConfigurationError):
    """An occupation point formula could not be parsed or resolved."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        formula: str | None = None,
        group_index: int | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.formula = formula
        self.group_index = group_index
        if formula is not None:
            self.details["formula"] = formula
        if group_index is not None:
            self.details["group_index"] = group_index


class DiceNotationError(ConfigurationError):
    """A dice notation string is not supported."""

    def __init__(self, message: str, context: ErrorContext | None = None, notation: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.notation = notation
        if notation is not None:
            self.details["notation"] = notation


class UnknownOccupationError(ConfigurationError):
    """An occupation name is not present in the catalog."""

    def __init__(self, message: str, context: ErrorContext | None = None, occupation: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.occupation = occupation
        if occupation is not None:
            self.details["occupation"] = occupation


class DraftIncompleteError(RulesEngineError):
    """A draft was finalized while still holding error-severity issues."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        issues: "list[Issue] | None" = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.issues = list(issues or [])
        self.details["issue_codes"] = [issue.code for issue in self.issues]


def create_error_context(**kwargs) -> ErrorContext:
    """
    Create an error context with the given parameters.

    Args:
        **kwargs: Context parameters

    Returns:
        ErrorContext object
    """
    return ErrorContext(**kwargs)


def log_and_raise(
    exception_class: type[RulesEngineError],
    message: str,
    context: ErrorContext | None = None,
    details: dict[str, Any] | None = None,
    user_friendly: str | None = None,
    **kwargs: Any,
) -> None:
    """
    Log an error and raise a rules engine exception.

    Args:
        exception_class: The exception class to raise
        message: Technical error message
        context: Error context information
        details: Additional error details
        user_friendly: User-friendly error message
        **kwargs: Extra keyword arguments forwarded to the exception class

    Raises:
        The specified rules engine exception
    """
    if context is None:
        context = create_error_context()

    logger.debug(
        "Raising rules engine exception",
        error_type=exception_class.__name__,
        message=message,
        details=details or {},
    )

    raise exception_class(
        message,
        context=context,
        details=details,
        user_friendly=user_friendly,
        **kwargs,
    )
