# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Dataverse samples.

This module contains the foundational components including authentication,
configuration, the HTTP client, and error handling.
"""

from ._auth import AuthToken, Authenticator, discover_tenant_id
from .config import AppSettings, ConnectionString, DataverseConfig, QuickStartSettings
from .errors import (
    AuthError,
    ConfigError,
    DataverseError,
    HttpError,
    MissingFieldError,
    UnsupportedTypeError,
    ValidationError,
)
from .http import HttpClient

__all__ = [
    "AuthToken",
    "Authenticator",
    "discover_tenant_id",
    "AppSettings",
    "ConnectionString",
    "DataverseConfig",
    "QuickStartSettings",
    "AuthError",
    "ConfigError",
    "DataverseError",
    "HttpError",
    "MissingFieldError",
    "UnsupportedTypeError",
    "ValidationError",
    "HttpClient",
]
