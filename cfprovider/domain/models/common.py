"""Defines common Value Objects and constants shared by the provider core.

These objects name the provider's configuration fields, the environment
variables that back them and their built-in defaults.
"""

import struct
from typing import NewType

# === Core Value Objects ===

SchemaKey = NewType("SchemaKey", str)      # Provider configuration attribute name
EnvVarName = NewType("EnvVarName", str)    # Environment variable backing a field
CredentialMode = NewType("CredentialMode", str)

# === Schema Keys ===
EMAIL_SCHEMA_KEY = SchemaKey("email")
API_KEY_SCHEMA_KEY = SchemaKey("api_key")
API_TOKEN_SCHEMA_KEY = SchemaKey("api_token")
API_USER_SERVICE_KEY_SCHEMA_KEY = SchemaKey("api_user_service_key")
RPS_SCHEMA_KEY = SchemaKey("rps")
RETRIES_SCHEMA_KEY = SchemaKey("retries")
MIN_BACKOFF_SCHEMA_KEY = SchemaKey("min_backoff")
MAX_BACKOFF_SCHEMA_KEY = SchemaKey("max_backoff")
API_CLIENT_LOGGING_SCHEMA_KEY = SchemaKey("api_client_logging")
ACCOUNT_ID_SCHEMA_KEY = SchemaKey("account_id")
API_HOSTNAME_SCHEMA_KEY = SchemaKey("api_hostname")
API_BASE_PATH_SCHEMA_KEY = SchemaKey("api_base_path")

# === Environment Variables ===
EMAIL_ENV_VAR = EnvVarName("CLOUDFLARE_EMAIL")
API_KEY_ENV_VAR = EnvVarName("CLOUDFLARE_API_KEY")
API_TOKEN_ENV_VAR = EnvVarName("CLOUDFLARE_API_TOKEN")
API_USER_SERVICE_KEY_ENV_VAR = EnvVarName("CLOUDFLARE_API_USER_SERVICE_KEY")
RPS_ENV_VAR = EnvVarName("CLOUDFLARE_RPS")
RETRIES_ENV_VAR = EnvVarName("CLOUDFLARE_RETRIES")
MIN_BACKOFF_ENV_VAR = EnvVarName("CLOUDFLARE_MIN_BACKOFF")
MAX_BACKOFF_ENV_VAR = EnvVarName("CLOUDFLARE_MAX_BACKOFF")
API_CLIENT_LOGGING_ENV_VAR = EnvVarName("CLOUDFLARE_API_CLIENT_LOGGING")
ACCOUNT_ID_ENV_VAR = EnvVarName("CLOUDFLARE_ACCOUNT_ID")
API_HOSTNAME_ENV_VAR = EnvVarName("CLOUDFLARE_API_HOSTNAME")
API_BASE_PATH_ENV_VAR = EnvVarName("CLOUDFLARE_API_BASE_PATH")

# === Defaults (kept as strings, the way they arrive from the environment) ===
RPS_DEFAULT = "4"
RETRIES_DEFAULT = "3"
MIN_BACKOFF_DEFAULT = "1"
MAX_BACKOFF_DEFAULT = "30"
API_HOSTNAME_DEFAULT = "api.cloudflare.com"
API_BASE_PATH_DEFAULT = "/client/v4"

# Bit width of the interpreter's native int, the ceiling for retry tuning values.
NATIVE_INT_WIDTH = struct.calcsize("P") * 8

# === Credential Modes ===
CREDENTIAL_FIELDS = (API_KEY_SCHEMA_KEY, API_TOKEN_SCHEMA_KEY, API_USER_SERVICE_KEY_SCHEMA_KEY)
API_KEY_MODE = CredentialMode(API_KEY_SCHEMA_KEY)
API_TOKEN_MODE = CredentialMode(API_TOKEN_SCHEMA_KEY)
API_USER_SERVICE_KEY_MODE = CredentialMode(API_USER_SERVICE_KEY_SCHEMA_KEY)

USER_AGENT_TEMPLATE = "terraform/{tool_version} python-httpx/{httpx_version} terraform-provider-cloudflare/{provider_version}"
