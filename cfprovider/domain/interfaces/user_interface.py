"""Interface for reporting configuration results to the user.

Defines the contract for displaying diagnostics, summaries and messages,
allowing different UI implementations (e.g., console, plain logs).
"""

import abc
from typing import Any, Mapping, Sequence

from cfprovider.domain.models.diagnostics import Diagnostic


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Displays configuration diagnostics.

        Args:
            diagnostics: The diagnostics produced by a configure call.
        """
        pass

    @abc.abstractmethod
    def display_summary(self, title: str, rows: Mapping[str, Any]) -> None:
        """Displays a two-column key/value summary.

        Args:
            title: Heading for the summary.
            rows: Ordered mapping of labels to values.
        """
        pass

    @abc.abstractmethod
    def display_table(self, title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        """Displays a table with the given columns."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass
