"""Exceptions raised while resolving provider configuration and building the client."""

from typing import List, Optional, Sequence

from cfprovider.domain.models.diagnostics import Diagnostic


class ConfigurationError(Exception):
    """Base class for failures that stop provider configuration.

    Carries the diagnostics the host tool should surface to the user.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic]):
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        super().__init__("; ".join(d.summary for d in self.diagnostics))


class ValidationError(ConfigurationError):
    """A resolved value violates a bound, a format or a credential invariant."""

    def __init__(self, fields: Sequence[str], summary: str, detail: Optional[str] = None):
        super().__init__([Diagnostic.error(tuple(fields), summary, detail or summary)])


class ConstructionError(ConfigurationError):
    """The API client could not be assembled from a valid configuration."""

    def __init__(self, summary: str, detail: Optional[str] = None, fields: Sequence[str] = ()):
        super().__init__([Diagnostic.error(tuple(fields), summary, detail or summary)])
