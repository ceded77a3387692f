import httpx
import pytest

from cfprovider.core.config_resolver import (
    BOUND_RULES, CREDENTIAL_RULES, Arity, ConfigResolver, CredentialRule,
)
from cfprovider.core.exceptions import ConfigurationError, ValidationError
from cfprovider.domain.models.common import NATIVE_INT_WIDTH
from cfprovider.domain.models.diagnostics import Severity
from cfprovider.domain.models.settings import ABSENT, Present, RawInput


def resolve(env, raw=None, tool_version="1.5.0"):
    return ConfigResolver(env, provider_version="test").resolve(raw or RawInput(), tool_version)


def error_summary(excinfo) -> str:
    assert len(excinfo.value.diagnostics) == 1
    return excinfo.value.diagnostics[0].summary


# --- Defaults and precedence ---

def test_defaults_apply_when_only_a_token_is_configured(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token))

    assert config.credential_mode == "api_token"
    assert config.api_token == valid_token
    assert config.base_hostname == "api.cloudflare.com"
    assert config.base_path == "/client/v4"
    assert config.base_url == "https://api.cloudflare.com/client/v4"
    assert (config.rps, config.retries, config.min_backoff, config.max_backoff) == (4, 3, 1, 30)
    assert config.api_client_logging is False
    assert config.account_id is None


def test_explicit_value_wins_over_environment(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RPS="2", CLOUDFLARE_API_HOSTNAME="env.example.com")
    raw = RawInput(rps=Present(10), api_hostname=Present("explicit.example.com"))

    config = resolve(env, raw)

    assert config.rps == 10
    assert config.base_hostname == "explicit.example.com"


def test_environment_wins_over_default(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RETRIES="7", CLOUDFLARE_API_BASE_PATH="/client/v5")

    config = resolve(env)

    assert config.retries == 7
    assert config.base_path == "/client/v5"


def test_explicit_empty_string_falls_through_to_environment(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_API_HOSTNAME="env.example.com")

    config = resolve(env, RawInput(api_hostname=Present("")))

    assert config.base_hostname == "env.example.com"


def test_explicit_empty_string_falls_through_to_default(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), RawInput(api_base_path=Present("")))
    assert config.base_path == "/client/v4"


def test_explicit_zero_is_honored(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RETRIES="5", CLOUDFLARE_RPS="9")

    config = resolve(env, RawInput(retries=Present(0), rps=Present(0)))

    assert config.retries == 0
    assert config.rps == 0


def test_empty_environment_variable_is_treated_as_unset(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RPS=""))
    assert config.rps == 4


def test_min_and_max_backoff_resolve_independently(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_MAX_BACKOFF="45")

    config = resolve(env, RawInput(min_backoff=Present(2)))

    assert config.min_backoff == 2
    assert config.max_backoff == 45


def test_account_id_from_environment(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_ACCOUNT_ID="abc123"))
    assert config.account_id == "abc123"


def test_resolution_is_deterministic(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RPS="12")
    raw = RawInput(retries=Present(2))

    assert resolve(env, raw) == resolve(env, raw)


def test_user_agent_embeds_tool_and_provider_versions(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), tool_version="1.7.2")

    assert config.user_agent == (
        f"terraform/1.7.2 python-httpx/{httpx.__version__} terraform-provider-cloudflare/test"
    )


# --- Integer fields ---

def test_non_integer_environment_value_names_the_variable(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RPS="fast")

    with pytest.raises(ValidationError) as excinfo:
        resolve(env)

    assert "CLOUDFLARE_RPS" in error_summary(excinfo)
    assert excinfo.value.diagnostics[0].fields == ("rps",)


def test_negative_integer_is_rejected(make_env, valid_token):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), RawInput(min_backoff=Present(-1)))

    assert error_summary(excinfo) == "min_backoff must be non-negative, got: -1"


def test_boolean_is_not_accepted_as_integer(make_env, valid_token):
    with pytest.raises(ValidationError):
        resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), RawInput(retries=Present(True)))


def test_fractional_float_is_rejected_not_truncated(make_env, valid_token):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), RawInput(retries=Present(2.9)))

    assert error_summary(excinfo) == "retries must be an integer, got: 2.9"
    assert excinfo.value.diagnostics[0].fields == ("retries",)


def test_infinite_float_is_a_validation_error(make_env, valid_token):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), RawInput(max_backoff=Present(float("inf"))))

    assert error_summary(excinfo) == "max_backoff must be an integer, got: inf"


def test_infinite_text_in_environment_is_a_validation_error(make_env, valid_token):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_RETRIES="inf"))

    assert "CLOUDFLARE_RETRIES" in error_summary(excinfo)


@pytest.mark.parametrize("field", ["retries", "min_backoff", "max_backoff"])
def test_value_above_native_int_width_is_too_large(make_env, valid_token, field):
    raw = RawInput(**{field: Present(NATIVE_INT_WIDTH + 1)})

    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), raw)

    assert error_summary(excinfo) == f"{field} value of {NATIVE_INT_WIDTH + 1} is too large, try a smaller value."
    assert excinfo.value.diagnostics[0].fields == (field,)


def test_value_at_native_int_width_is_accepted(make_env, valid_token):
    raw = RawInput(retries=Present(NATIVE_INT_WIDTH), max_backoff=Present(NATIVE_INT_WIDTH))

    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), raw)

    assert config.retries == NATIVE_INT_WIDTH
    assert config.max_backoff == NATIVE_INT_WIDTH


def test_bound_applies_to_environment_values(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_MAX_BACKOFF="1000")

    with pytest.raises(ValidationError) as excinfo:
        resolve(env)

    assert "max_backoff value of 1000 is too large" in error_summary(excinfo)


def test_rps_has_no_upper_bound(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token), RawInput(rps=Present(10_000)))
    assert config.rps == 10_000


def test_bound_rules_cover_retry_tuning_fields():
    assert {rule.field for rule in BOUND_RULES} == {"retries", "min_backoff", "max_backoff"}
    assert all(rule.maximum == NATIVE_INT_WIDTH for rule in BOUND_RULES)


# --- Boolean field ---

@pytest.mark.parametrize("text, expected", [("true", True), ("1", True), ("FALSE", False), ("off", False)])
def test_api_client_logging_from_environment(make_env, valid_token, text, expected):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_API_CLIENT_LOGGING=text))
    assert config.api_client_logging is expected


def test_api_client_logging_explicit_false_is_honored(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_API_CLIENT_LOGGING="true")

    config = resolve(env, RawInput(api_client_logging=Present(False)))

    assert config.api_client_logging is False


def test_api_client_logging_rejects_unknown_text(make_env, valid_token):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_API_CLIENT_LOGGING="maybe")

    with pytest.raises(ValidationError) as excinfo:
        resolve(env)

    assert "CLOUDFLARE_API_CLIENT_LOGGING" in error_summary(excinfo)


# --- Credential formats ---

def test_explicit_token_with_bad_format_is_rejected(make_env):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(), RawInput(api_token=Present("too-short")))

    summary = error_summary(excinfo)
    assert summary.startswith("invalid value for api_token:")
    assert "40 characters" in summary


def test_explicit_api_key_with_bad_format_is_rejected(make_env):
    raw = RawInput(api_key=Present("F" * 37), email=Present("user@example.com"))

    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(), raw)

    assert error_summary(excinfo).startswith("invalid value for api_key:")


def test_format_check_is_a_substring_search(make_env, valid_token):
    config = resolve(make_env(), RawInput(api_token=Present(valid_token + "!")))
    assert config.api_token == valid_token + "!"


def test_environment_credentials_skip_format_check(make_env):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN="short"))
    assert config.api_token == "short"


# --- Credential cross-field rules ---

def test_no_credentials_is_rejected(make_env):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env())

    assert error_summary(excinfo) == (
        'must provide exactly one of "api_key", "api_token" or "api_user_service_key"; found 0 (none).'
    )
    assert excinfo.value.diagnostics[0].fields == ("api_key", "api_token", "api_user_service_key")


def test_two_credentials_are_rejected(make_env, valid_token, valid_api_key):
    env = make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_API_KEY=valid_api_key, CLOUDFLARE_EMAIL="a@b.c")

    with pytest.raises(ValidationError) as excinfo:
        resolve(env)

    assert 'found 2 ("api_key", "api_token")' in error_summary(excinfo)


def test_api_key_requires_email(make_env, valid_api_key):
    with pytest.raises(ValidationError) as excinfo:
        resolve(make_env(), RawInput(api_key=Present(valid_api_key)))

    assert error_summary(excinfo) == '"email" is required with "api_key" and was not configured.'
    assert excinfo.value.diagnostics[0].fields == ("api_key", "email")


def test_api_key_with_email_from_environment(make_env, valid_api_key):
    env = make_env(CLOUDFLARE_EMAIL="user@example.com")

    config = resolve(env, RawInput(api_key=Present(valid_api_key)))

    assert config.credential_mode == "api_key"
    assert config.api_key == valid_api_key
    assert config.email == "user@example.com"
    assert config.api_token is None
    assert config.api_user_service_key is None


def test_email_is_dropped_outside_api_key_mode(make_env, valid_token):
    config = resolve(make_env(CLOUDFLARE_API_TOKEN=valid_token, CLOUDFLARE_EMAIL="user@example.com"))
    assert config.email is None


def test_user_service_key_mode(make_env):
    config = resolve(make_env(), RawInput(api_user_service_key=Present("v1.0-service-key")))

    assert config.credential_mode == "api_user_service_key"
    assert config.api_user_service_key == "v1.0-service-key"
    assert config.api_key is None


def test_validation_error_carries_one_error_diagnostic(make_env):
    with pytest.raises(ConfigurationError) as excinfo:
        resolve(make_env())

    (diagnostic,) = excinfo.value.diagnostics
    assert diagnostic.severity is Severity.ERROR
    assert diagnostic.detail == diagnostic.summary


def test_at_least_one_rule():
    rule = CredentialRule(Arity.AT_LEAST_ONE, ("a", "b"), "need one of {fields}")

    assert rule.check({"a": "", "b": "x"}) is None
    error = rule.check({"a": "", "b": ""})
    assert error.diagnostics[0].summary == 'need one of "a" or "b"'


def test_credential_rules_are_ordered_exactly_one_first():
    assert [rule.arity for rule in CREDENTIAL_RULES] == [Arity.EXACTLY_ONE, Arity.CO_REQUIRES]


def test_absent_fields_never_reach_the_resolved_config(make_env, valid_token):
    raw = RawInput(api_token=Present(valid_token), account_id=ABSENT)
    assert resolve(make_env(), raw).account_id is None
