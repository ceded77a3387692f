"""Resolves raw provider input into a validated ResolvedConfig.

Each field is resolved on its own (explicit value, then environment, then
built-in default) and checked for per-field problems. Only once every field
is resolved are the cross-field rules applied, so their messages can refer
to fully resolved siblings. Any failure stops resolution with a
ValidationError; nothing is ever partially resolved.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Pattern, Tuple

import httpx

from cfprovider.core.exceptions import ValidationError
from cfprovider.domain.interfaces.environment import EnvironmentLookup
from cfprovider.domain.models.common import (
    ACCOUNT_ID_ENV_VAR, ACCOUNT_ID_SCHEMA_KEY,
    API_BASE_PATH_DEFAULT, API_BASE_PATH_ENV_VAR, API_BASE_PATH_SCHEMA_KEY,
    API_CLIENT_LOGGING_ENV_VAR, API_CLIENT_LOGGING_SCHEMA_KEY,
    API_HOSTNAME_DEFAULT, API_HOSTNAME_ENV_VAR, API_HOSTNAME_SCHEMA_KEY,
    API_KEY_ENV_VAR, API_KEY_SCHEMA_KEY,
    API_TOKEN_ENV_VAR, API_TOKEN_SCHEMA_KEY,
    API_USER_SERVICE_KEY_ENV_VAR, API_USER_SERVICE_KEY_SCHEMA_KEY,
    CREDENTIAL_FIELDS, CredentialMode,
    EMAIL_ENV_VAR, EMAIL_SCHEMA_KEY,
    MAX_BACKOFF_DEFAULT, MAX_BACKOFF_ENV_VAR, MAX_BACKOFF_SCHEMA_KEY,
    MIN_BACKOFF_DEFAULT, MIN_BACKOFF_ENV_VAR, MIN_BACKOFF_SCHEMA_KEY,
    NATIVE_INT_WIDTH,
    RETRIES_DEFAULT, RETRIES_ENV_VAR, RETRIES_SCHEMA_KEY,
    RPS_DEFAULT, RPS_ENV_VAR, RPS_SCHEMA_KEY,
    USER_AGENT_TEMPLATE,
)
from cfprovider.domain.models.resolved_config import ResolvedConfig
from cfprovider.domain.models.settings import Present, RawInput

logger = logging.getLogger(__name__)

TRUTHY_STRINGS = ("true", "1", "yes", "on")
FALSY_STRINGS = ("false", "0", "no", "off")


@dataclass(frozen=True)
class FieldSpec:
    """How one field is looked up: its environment variable, default and type."""
    key: str
    env_var: str
    default: str
    kind: type = str
    pattern: Optional[Pattern[str]] = None
    pattern_message: str = ""


FIELD_SPECS: Tuple[FieldSpec, ...] = (
    FieldSpec(API_HOSTNAME_SCHEMA_KEY, API_HOSTNAME_ENV_VAR, API_HOSTNAME_DEFAULT),
    FieldSpec(API_BASE_PATH_SCHEMA_KEY, API_BASE_PATH_ENV_VAR, API_BASE_PATH_DEFAULT),
    FieldSpec(RPS_SCHEMA_KEY, RPS_ENV_VAR, RPS_DEFAULT, int),
    FieldSpec(RETRIES_SCHEMA_KEY, RETRIES_ENV_VAR, RETRIES_DEFAULT, int),
    FieldSpec(MIN_BACKOFF_SCHEMA_KEY, MIN_BACKOFF_ENV_VAR, MIN_BACKOFF_DEFAULT, int),
    FieldSpec(MAX_BACKOFF_SCHEMA_KEY, MAX_BACKOFF_ENV_VAR, MAX_BACKOFF_DEFAULT, int),
    FieldSpec(API_CLIENT_LOGGING_SCHEMA_KEY, API_CLIENT_LOGGING_ENV_VAR, "false", bool),
    FieldSpec(
        API_TOKEN_SCHEMA_KEY, API_TOKEN_ENV_VAR, "",
        pattern=re.compile(r"[A-Za-z0-9-_]{40}"),
        pattern_message="API tokens must be 40 characters long and only contain characters a-z, A-Z, 0-9, hyphens and underscores",
    ),
    FieldSpec(
        API_KEY_SCHEMA_KEY, API_KEY_ENV_VAR, "",
        pattern=re.compile(r"[0-9a-f]{37}"),
        pattern_message="API key must be 37 characters long and only contain characters 0-9 and a-f (all lowercased)",
    ),
    FieldSpec(EMAIL_SCHEMA_KEY, EMAIL_ENV_VAR, ""),
    FieldSpec(API_USER_SERVICE_KEY_SCHEMA_KEY, API_USER_SERVICE_KEY_ENV_VAR, ""),
    FieldSpec(ACCOUNT_ID_SCHEMA_KEY, ACCOUNT_ID_ENV_VAR, ""),
)


# --- Cross-field rule tables ---

@dataclass(frozen=True)
class BoundRule:
    """An integer field that must not exceed `maximum`."""
    field: str
    maximum: int
    template: str = "{field} value of {value} is too large, try a smaller value."

    def check(self, values: Mapping[str, Any]) -> Optional[ValidationError]:
        value = values[self.field]
        if value > self.maximum:
            return ValidationError((self.field,), self.template.format(field=self.field, value=value))
        return None


BOUND_RULES: Tuple[BoundRule, ...] = (
    BoundRule(RETRIES_SCHEMA_KEY, NATIVE_INT_WIDTH),
    BoundRule(MIN_BACKOFF_SCHEMA_KEY, NATIVE_INT_WIDTH),
    BoundRule(MAX_BACKOFF_SCHEMA_KEY, NATIVE_INT_WIDTH),
)


class Arity(Enum):
    EXACTLY_ONE = "exactly_one"
    AT_LEAST_ONE = "at_least_one"
    CO_REQUIRES = "co_requires"   # fields[0] set requires every other field set


def _quote_list(names) -> str:
    quoted = [f'"{name}"' for name in names]
    if len(quoted) < 2:
        return "".join(quoted)
    return ", ".join(quoted[:-1]) + " or " + quoted[-1]


@dataclass(frozen=True)
class CredentialRule:
    """A relationship between credential fields and the message for breaking it.

    Templates may use `{fields}`, `{provided}`, `{count}`, `{trigger}` and
    `{missing}`.
    """
    arity: Arity
    fields: Tuple[str, ...]
    template: str

    def check(self, values: Mapping[str, Any]) -> Optional[ValidationError]:
        provided = [name for name in self.fields if values.get(name)]
        if self.arity is Arity.EXACTLY_ONE:
            broken = len(provided) != 1
        elif self.arity is Arity.AT_LEAST_ONE:
            broken = len(provided) == 0
        else:
            trigger, required = self.fields[0], self.fields[1:]
            broken = bool(values.get(trigger)) and any(not values.get(name) for name in required)

        if not broken:
            return None

        missing = [name for name in self.fields[1:] if not values.get(name)]
        summary = self.template.format(
            fields=_quote_list(self.fields),
            provided=", ".join(f'"{name}"' for name in provided) or "none",
            count=len(provided),
            trigger=f'"{self.fields[0]}"',
            missing=_quote_list(missing),
        )
        return ValidationError(self.fields, summary)


CREDENTIAL_RULES: Tuple[CredentialRule, ...] = (
    CredentialRule(
        Arity.EXACTLY_ONE,
        CREDENTIAL_FIELDS,
        "must provide exactly one of {fields}; found {count} ({provided}).",
    ),
    CredentialRule(
        Arity.CO_REQUIRES,
        (API_KEY_SCHEMA_KEY, EMAIL_SCHEMA_KEY),
        "{missing} is required with {trigger} and was not configured.",
    ),
)


class ConfigResolver:
    """Turns a RawInput plus the environment into a ResolvedConfig.

    The resolver keeps no state between calls; resolving equal inputs against
    an equal environment always yields equal configurations.
    """

    def __init__(self, environment: EnvironmentLookup, provider_version: str):
        """Initializes the resolver.

        Args:
            environment: Source of environment-variable fallbacks.
            provider_version: Version of this provider, embedded in the user agent.
        """
        self.environment = environment
        self.provider_version = provider_version

    def resolve(self, raw: RawInput, tool_version: str) -> ResolvedConfig:
        """Resolves and validates every provider field.

        Args:
            raw: Explicit configuration from the host tool.
            tool_version: Version of the orchestrating tool, for the user agent.

        Returns:
            The validated configuration.

        Raises:
            ValidationError: On the first per-field or cross-field violation.
        """
        values: Dict[str, Any] = {}
        for spec in FIELD_SPECS:
            values[spec.key] = self._resolve_field(spec, getattr(raw, spec.key))

        for rule in BOUND_RULES:
            error = rule.check(values)
            if error:
                logger.debug(f"Bound check failed: {error}")
                raise error

        for rule in CREDENTIAL_RULES:
            error = rule.check(values)
            if error:
                logger.debug(f"Credential check failed: {error}")
                raise error

        mode = CredentialMode(next(name for name in CREDENTIAL_FIELDS if values[name]))
        logger.debug(f"Resolved credential mode: {mode}")

        return ResolvedConfig(
            credential_mode=mode,
            base_hostname=values[API_HOSTNAME_SCHEMA_KEY],
            base_path=values[API_BASE_PATH_SCHEMA_KEY],
            rps=values[RPS_SCHEMA_KEY],
            retries=values[RETRIES_SCHEMA_KEY],
            min_backoff=values[MIN_BACKOFF_SCHEMA_KEY],
            max_backoff=values[MAX_BACKOFF_SCHEMA_KEY],
            user_agent=self.user_agent(tool_version),
            api_client_logging=values[API_CLIENT_LOGGING_SCHEMA_KEY],
            account_id=values[ACCOUNT_ID_SCHEMA_KEY] or None,
            email=values[EMAIL_SCHEMA_KEY] if mode == API_KEY_SCHEMA_KEY else None,
            api_key=values[API_KEY_SCHEMA_KEY] if mode == API_KEY_SCHEMA_KEY else None,
            api_token=values[API_TOKEN_SCHEMA_KEY] if mode == API_TOKEN_SCHEMA_KEY else None,
            api_user_service_key=values[API_USER_SERVICE_KEY_SCHEMA_KEY] if mode == API_USER_SERVICE_KEY_SCHEMA_KEY else None,
        )

    def user_agent(self, tool_version: str) -> str:
        return USER_AGENT_TEMPLATE.format(
            tool_version=tool_version,
            httpx_version=httpx.__version__,
            provider_version=self.provider_version,
        )

    # --- Per-field resolution ---

    def _resolve_field(self, spec: FieldSpec, explicit: Any) -> Any:
        if isinstance(explicit, Present) and self._is_meaningful(explicit.value):
            if spec.pattern is not None and not spec.pattern.search(str(explicit.value)):
                raise ValidationError((spec.key,), f"invalid value for {spec.key}: {spec.pattern_message}")
            logger.debug(f"{spec.key}: using explicit configuration")
            return self._coerce(spec, explicit.value, source=spec.key)

        value = self.environment.get(spec.env_var, spec.default)
        logger.debug(f"{spec.key}: explicit value absent, resolved from {spec.env_var} or default")
        return self._coerce(spec, value, source=spec.env_var)

    @staticmethod
    def _is_meaningful(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value != ""
        return True

    @staticmethod
    def _coerce(spec: FieldSpec, value: Any, source: str) -> Any:
        if spec.kind is bool:
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in TRUTHY_STRINGS:
                return True
            if text in FALSY_STRINGS or text == "":
                return False
            raise ValidationError((spec.key,), f"{source} must be a boolean, got: {value!r}")

        if spec.kind is int:
            # Only ints and integer text; floats are never truncated.
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                raise ValidationError((spec.key,), f"{source} must be an integer, got: {value!r}")
            try:
                number = int(value)
            except ValueError:
                raise ValidationError((spec.key,), f"{source} must be an integer, got: {value!r}")
            if number < 0:
                raise ValidationError((spec.key,), f"{spec.key} must be non-negative, got: {number}")
            return number

        if not isinstance(value, str):
            raise ValidationError((spec.key,), f"{source} must be a string, got: {value!r}")
        return value
