"""The validated, immutable result of provider configuration resolution."""

from dataclasses import dataclass, field
from typing import Optional

from cfprovider.domain.models.common import CredentialMode


@dataclass(frozen=True)
class ResolvedConfig:
    """Provider configuration after precedence, defaulting and validation.

    Exactly the credential fields of `credential_mode` are populated; the
    others are None. Secrets are left out of the repr so the value can be
    logged safely.
    """
    credential_mode: CredentialMode
    base_hostname: str
    base_path: str
    rps: int
    retries: int
    min_backoff: int
    max_backoff: int
    user_agent: str
    api_client_logging: bool = False
    account_id: Optional[str] = None
    email: Optional[str] = None
    api_key: Optional[str] = field(default=None, repr=False)
    api_token: Optional[str] = field(default=None, repr=False)
    api_user_service_key: Optional[str] = field(default=None, repr=False)

    @property
    def base_url(self) -> str:
        # No slash normalisation: hostname and path must already fit together.
        return f"https://{self.base_hostname}{self.base_path}"
