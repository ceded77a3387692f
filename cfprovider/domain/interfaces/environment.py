"""Interface for reading configuration values from the process environment.

The resolver depends on this contract rather than on `os.environ`, so tests
can supply an environment without touching the real one.
"""

import abc


class EnvironmentLookup(abc.ABC):
    """Abstract Base Class for read-only environment lookups."""

    @abc.abstractmethod
    def get(self, name: str, default: str) -> str:
        """Gets an environment value.

        Args:
            name: The environment variable name (e.g., 'CLOUDFLARE_API_TOKEN').
            default: The value to return when the variable is unset or empty.

        Returns:
            The variable's value if present and non-empty, otherwise `default`.
        """
        pass
