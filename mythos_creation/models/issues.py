"""
Validation issue model.

Validation outcomes are returned as ordered lists of Issues. An error blocks
progression past the wizard step that produced it; a warning is informational.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["error", "warning"]


class Issue(BaseModel):
    """A single validation finding about a draft."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str = Field(description="Stable machine-readable issue code")
    severity: Severity
    message: str
    field: str | None = Field(default=None, description="Dotted path of the draft field the issue refers to")

    @classmethod
    def error(cls, code: str, message: str, field: str | None = None) -> "Issue":
        return cls(code=code, severity="error", message=message, field=field)

    @classmethod
    def warning(cls, code: str, message: str, field: str | None = None) -> "Issue":
        return cls(code=code, severity="warning", message=message, field=field)

    @property
    def is_error(self) -> bool:
        return self.severity == "error"


def has_errors(issues: list[Issue]) -> bool:
    """Return True when any issue has error severity."""
    return any(issue.is_error for issue in issues)


def issue_codes(issues: list[Issue]) -> list[str]:
    """Return the issue codes in order."""
    return [issue.code for issue in issues]
