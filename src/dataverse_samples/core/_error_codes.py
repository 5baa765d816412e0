# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Status codes treated as transient when reporting HttpError
TRANSIENT_STATUS = {429, 502, 503, 504}

# Network-level failure (no HTTP status available)
HTTP_NETWORK_ERROR = "http_network_error"
HTTP_INVALID_RESPONSE = "http_invalid_response"

# Configuration subcodes
CONFIG_MISSING_ARGUMENT = "config_missing_argument"
CONFIG_MISSING_ENV = "config_missing_env"
CONFIG_MISSING_SETTING = "config_missing_setting"
CONFIG_INVALID_CONNECTION_STRING = "config_invalid_connection_string"
CONFIG_SETTINGS_NOT_FOUND = "config_settings_not_found"

# Validation subcodes
VALIDATION_MISSING_FIELD = "validation_missing_field"
VALIDATION_INVALID_TYPE = "validation_invalid_type"
VALIDATION_UNSUPPORTED_FIELD_TYPE = "validation_unsupported_field_type"
VALIDATION_UNSUPPORTED_RELATIONSHIP_TYPE = "validation_unsupported_relationship_type"

# Authentication subcodes
AUTH_TOKEN_REQUEST_FAILED = "auth_token_request_failed"
AUTH_TENANT_DISCOVERY_FAILED = "auth_tenant_discovery_failed"


def http_subcode(status: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status}"
