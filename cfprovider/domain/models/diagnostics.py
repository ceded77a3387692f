"""Structured diagnostics returned to the host orchestration layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One problem found while configuring the provider.

    Attributes:
        severity: ERROR stops configuration, WARNING is informational.
        fields: Configuration attribute names the problem concerns.
        summary: Short human-readable message.
        detail: Longer explanation, defaults to the summary.
    """
    severity: Severity
    fields: Tuple[str, ...]
    summary: str
    detail: str = ""

    def __post_init__(self):
        if not self.detail:
            object.__setattr__(self, "detail", self.summary)

    @classmethod
    def error(cls, fields: Tuple[str, ...], summary: str, detail: str = "") -> "Diagnostic":
        return cls(Severity.ERROR, tuple(fields), summary, detail)
