"""Raw, unresolved provider input.

Every configurable field is an explicit two-way sum type: `Absent` when the
caller never configured it, `Present(value)` when it did. An empty string or
a zero is still `Present`, which keeps "unset" observable apart from "set to
empty" when precedence is decided.
"""

from dataclasses import dataclass, fields
from typing import Any, Generic, Mapping, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Present(Generic[T]):
    """A field the caller configured explicitly."""
    value: T


@dataclass(frozen=True)
class Absent:
    """A field the caller left unconfigured."""


ABSENT = Absent()

Setting = Union[Present[T], Absent]


def setting(value: Any) -> "Setting[Any]":
    """Wraps a plain value, mapping `None` to `ABSENT`."""
    if isinstance(value, (Present, Absent)):
        return value
    return ABSENT if value is None else Present(value)


@dataclass(frozen=True)
class RawInput:
    """Sparse provider configuration as supplied by the host tool."""
    email: Setting[str] = ABSENT
    api_key: Setting[str] = ABSENT
    api_token: Setting[str] = ABSENT
    api_user_service_key: Setting[str] = ABSENT
    rps: Setting[int] = ABSENT
    retries: Setting[int] = ABSENT
    min_backoff: Setting[int] = ABSENT
    max_backoff: Setting[int] = ABSENT
    account_id: Setting[str] = ABSENT
    api_hostname: Setting[str] = ABSENT
    api_base_path: Setting[str] = ABSENT
    api_client_logging: Setting[bool] = ABSENT

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RawInput":
        """Builds a RawInput from a plain mapping such as a parsed YAML block.

        Keys that are missing or mapped to None become `ABSENT`.

        Raises:
            ValueError: If the mapping contains a key that is not a provider field.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown provider configuration keys: {', '.join(unknown)}")
        return cls(**{key: setting(value) for key, value in values.items()})
