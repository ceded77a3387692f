"""Provider schema field descriptors and their Markdown descriptions.

`describe_field` is a pure function: it renders a descriptor into the text
shown in generated documentation, appending default values and the
relationships a field has with its siblings.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from cfprovider.domain.models.common import (
    ACCOUNT_ID_ENV_VAR, ACCOUNT_ID_SCHEMA_KEY,
    API_BASE_PATH_ENV_VAR, API_BASE_PATH_SCHEMA_KEY,
    API_CLIENT_LOGGING_ENV_VAR, API_CLIENT_LOGGING_SCHEMA_KEY,
    API_HOSTNAME_ENV_VAR, API_HOSTNAME_SCHEMA_KEY,
    API_KEY_ENV_VAR, API_KEY_SCHEMA_KEY,
    API_TOKEN_ENV_VAR, API_TOKEN_SCHEMA_KEY,
    API_USER_SERVICE_KEY_ENV_VAR, API_USER_SERVICE_KEY_SCHEMA_KEY,
    CREDENTIAL_FIELDS,
    EMAIL_ENV_VAR, EMAIL_SCHEMA_KEY,
    MAX_BACKOFF_ENV_VAR, MAX_BACKOFF_SCHEMA_KEY,
    MIN_BACKOFF_ENV_VAR, MIN_BACKOFF_SCHEMA_KEY,
    RETRIES_ENV_VAR, RETRIES_SCHEMA_KEY,
    RPS_ENV_VAR, RPS_SCHEMA_KEY,
)

# Distinguishes "no default" from a default of None.
_NO_DEFAULT = object()


@dataclass(frozen=True)
class FieldDescriptor:
    """Static description of one provider configuration attribute."""
    name: str
    type: str
    description: str = ""
    env_var: Optional[str] = None
    default: Any = _NO_DEFAULT
    required_with: Tuple[str, ...] = ()
    conflicts_with: Tuple[str, ...] = ()
    exactly_one_of: Tuple[str, ...] = ()
    at_least_one_of: Tuple[str, ...] = ()
    force_new: bool = False
    deprecated: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT and self.default is not None


def _quoted(names: Sequence[str]) -> str:
    return ", ".join(f"`{name}`" for name in names)


def describe_field(descriptor: FieldDescriptor) -> str:
    """Renders the Markdown description of a schema field.

    Relationship clauses that the base description already spells out for the
    credential fields are not repeated.
    """
    desc = descriptor.description.strip()
    if descriptor.description and not descriptor.description.endswith("."):
        desc += "."

    if descriptor.has_default:
        if descriptor.default == "":
            desc += ' Defaults to `""`.'
        else:
            desc += f" Defaults to `{descriptor.default}`."

    if descriptor.required_with and API_KEY_SCHEMA_KEY not in descriptor.required_with:
        desc += f" Required when using {_quoted(descriptor.required_with)}."

    if descriptor.conflicts_with and API_TOKEN_SCHEMA_KEY not in descriptor.conflicts_with:
        desc += f" Conflicts with {_quoted(descriptor.conflicts_with)}."

    if descriptor.exactly_one_of and not all(key in descriptor.exactly_one_of for key in CREDENTIAL_FIELDS):
        desc += f" Must provide only one of {_quoted(descriptor.exactly_one_of)}."

    if descriptor.at_least_one_of:
        desc += f" Must provide at least one of {_quoted(descriptor.at_least_one_of)}."

    if descriptor.force_new:
        desc += " **Modifying this attribute will force creation of a new resource.**"

    return desc.strip()


_ONLY_ONE_CREDENTIAL = "Must provide only one of `api_key`, `api_token`, `api_user_service_key`."

PROVIDER_SCHEMA: Tuple[FieldDescriptor, ...] = (
    FieldDescriptor(
        name=EMAIL_SCHEMA_KEY, type="string", env_var=EMAIL_ENV_VAR,
        description=f"A registered Cloudflare email address. Alternatively, can be configured using the `{EMAIL_ENV_VAR}` environment variable. Required when using `api_key`. Conflicts with `api_token`.",
        required_with=(API_KEY_SCHEMA_KEY,), conflicts_with=(API_TOKEN_SCHEMA_KEY,),
    ),
    FieldDescriptor(
        name=API_KEY_SCHEMA_KEY, type="string", env_var=API_KEY_ENV_VAR,
        description=f"The API key for operations. Alternatively, can be configured using the `{API_KEY_ENV_VAR}` environment variable. API keys are [now considered legacy by Cloudflare](https://developers.cloudflare.com/api/keys/#limitations), API tokens should be used instead. {_ONLY_ONE_CREDENTIAL}",
        exactly_one_of=CREDENTIAL_FIELDS,
    ),
    FieldDescriptor(
        name=API_TOKEN_SCHEMA_KEY, type="string", env_var=API_TOKEN_ENV_VAR,
        description=f"The API Token for operations. Alternatively, can be configured using the `{API_TOKEN_ENV_VAR}` environment variable. {_ONLY_ONE_CREDENTIAL}",
        exactly_one_of=CREDENTIAL_FIELDS,
    ),
    FieldDescriptor(
        name=API_USER_SERVICE_KEY_SCHEMA_KEY, type="string", env_var=API_USER_SERVICE_KEY_ENV_VAR,
        description=f"A special Cloudflare API key good for a restricted set of endpoints. Alternatively, can be configured using the `{API_USER_SERVICE_KEY_ENV_VAR}` environment variable. {_ONLY_ONE_CREDENTIAL}",
        exactly_one_of=CREDENTIAL_FIELDS,
    ),
    FieldDescriptor(
        name=RPS_SCHEMA_KEY, type="int", env_var=RPS_ENV_VAR,
        description=f"RPS limit to apply when making calls to the API. Alternatively, can be configured using the `{RPS_ENV_VAR}` environment variable.",
    ),
    FieldDescriptor(
        name=RETRIES_SCHEMA_KEY, type="int", env_var=RETRIES_ENV_VAR,
        description=f"Maximum number of retries to perform when an API request fails. Alternatively, can be configured using the `{RETRIES_ENV_VAR}` environment variable.",
    ),
    FieldDescriptor(
        name=MIN_BACKOFF_SCHEMA_KEY, type="int", env_var=MIN_BACKOFF_ENV_VAR,
        description=f"Minimum backoff period in seconds after failed API calls. Alternatively, can be configured using the `{MIN_BACKOFF_ENV_VAR}` environment variable.",
    ),
    FieldDescriptor(
        name=MAX_BACKOFF_SCHEMA_KEY, type="int", env_var=MAX_BACKOFF_ENV_VAR,
        description=f"Maximum backoff period in seconds after failed API calls. Alternatively, can be configured using the `{MAX_BACKOFF_ENV_VAR}` environment variable.",
    ),
    FieldDescriptor(
        name=API_CLIENT_LOGGING_SCHEMA_KEY, type="bool", env_var=API_CLIENT_LOGGING_ENV_VAR,
        description=f"Whether to print logs from the API client (using the default log library logger). Alternatively, can be configured using the `{API_CLIENT_LOGGING_ENV_VAR}` environment variable.",
    ),
    FieldDescriptor(
        name=ACCOUNT_ID_SCHEMA_KEY, type="string", env_var=ACCOUNT_ID_ENV_VAR,
        description=f"Configure API client to always use a specific account. Alternatively, can be configured using the `{ACCOUNT_ID_ENV_VAR}` environment variable.",
        deprecated="Use resource specific `account_id` attributes instead.",
    ),
    FieldDescriptor(
        name=API_HOSTNAME_SCHEMA_KEY, type="string", env_var=API_HOSTNAME_ENV_VAR,
        description=f"Configure the hostname used by the API client. Alternatively, can be configured using the `{API_HOSTNAME_ENV_VAR}` environment variable.",
    ),
    FieldDescriptor(
        name=API_BASE_PATH_SCHEMA_KEY, type="string", env_var=API_BASE_PATH_ENV_VAR,
        description=f"Configure the base path used by the API client. Alternatively, can be configured using the `{API_BASE_PATH_ENV_VAR}` environment variable.",
    ),
)
