# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Configuration objects for the Dataverse samples.

Nothing in this module reads process-wide state on its own; callers pass the
settings path and an environment mapping explicitly.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from . import _error_codes as ec
from .errors import ConfigError
from ..common.constants import (
    DEFAULT_APPSETTINGS_PATH,
    DEFAULT_AUTHORITY_HOST,
    DEFAULT_CONNECTION_STRING_NAME,
    ENV_APPSETTINGS,
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_TENANT_ID,
    ENV_URL,
)


@dataclass(frozen=True)
class DataverseConfig:
    """
    Configuration settings for Dataverse metadata calls.

    :param language_code: LCID (Locale ID) for localized labels. Default is 1033 (English - United States).
    :type language_code: int
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    """

    language_code: int = 1033
    http_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "DataverseConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~dataverse_samples.core.config.DataverseConfig
        """
        return cls(
            language_code=1033,
            http_timeout=None,  # method-dependent defaults in HttpClient
        )


# Key=Value with an optional single- or double-quoted value; a doubled quote inside
# quotes is a literal quote character.
_SEGMENT = re.compile(
    r"""(?P<key>[^=;]+?)\s*=\s*
        (?P<value>"(?:[^"]|"")*"|'(?:[^']|'')*'|[^;]*?)
        \s*(?:;|$)""",
    re.VERBOSE,
)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        quote = value[0]
        return value[1:-1].replace(quote * 2, quote)
    return value


@dataclass(frozen=True)
class ConnectionString:
    """
    A parsed Dataverse connection string.

    Only the ``ClientSecret`` authentication type is supported, which maps onto the
    OAuth client-credentials grant::

        AuthType=ClientSecret;Url=https://org.crm.dynamics.com;ClientId=...;ClientSecret=...;TenantId=...

    ``TenantId`` is optional; without it the tenant is discovered from the environment.
    Values may be wrapped in single or double quotes to carry ``;`` or ``=``.
    """

    url: str
    client_id: str
    tenant_id: Optional[str] = None
    client_secret: Optional[str] = None
    auth_type: str = "ClientSecret"

    def __repr__(self) -> str:
        return (
            f"ConnectionString(url={self.url!r}, client_id={self.client_id!r}, "
            f"tenant_id={self.tenant_id!r}, auth_type={self.auth_type!r})"
        )

    @staticmethod
    def _split(raw: str) -> Dict[str, str]:
        parts: Dict[str, str] = {}
        pos, end = 0, len(raw)
        while True:
            while pos < end and (raw[pos] == ";" or raw[pos].isspace()):
                pos += 1
            if pos >= end:
                return parts
            match = _SEGMENT.match(raw, pos)
            if match is None:
                segment = raw[pos:].split(";", 1)[0].strip()
                raise ConfigError(
                    f"Malformed connection string segment '{segment}' (expected Key=Value).",
                    subcode=ec.CONFIG_INVALID_CONNECTION_STRING,
                )
            parts[match.group("key").strip().lower()] = _unquote(match.group("value").strip())
            pos = match.end()

    @classmethod
    def parse(cls, raw: str) -> "ConnectionString":
        """
        Parse a ``Key=Value;...`` connection string. Keys are case-insensitive.

        ``ServiceUri`` is accepted as an alias for ``Url`` and ``AppId`` for ``ClientId``.

        :raises ~dataverse_samples.core.errors.ConfigError: If the string is malformed,
            uses an unsupported ``AuthType``, or lacks ``Url`` or ``ClientId``.
        """
        if not isinstance(raw, str) or not raw.strip():
            raise ConfigError("Connection string is empty.", subcode=ec.CONFIG_INVALID_CONNECTION_STRING)
        parts = cls._split(raw)

        auth_type = parts.get("authtype", "ClientSecret")
        if auth_type.lower() != "clientsecret":
            raise ConfigError(
                f"Unsupported AuthType '{auth_type}'; only ClientSecret is supported.",
                subcode=ec.CONFIG_INVALID_CONNECTION_STRING,
            )

        url = parts.get("url") or parts.get("serviceuri")
        client_id = parts.get("clientid") or parts.get("appid")
        for key, value in (("Url", url), ("ClientId", client_id)):
            if not value:
                raise ConfigError(
                    f"Connection string is missing '{key}'.",
                    subcode=ec.CONFIG_INVALID_CONNECTION_STRING,
                    details={"key": key},
                )

        return cls(
            url=url.rstrip("/"),
            client_id=client_id,
            tenant_id=parts.get("tenantid") or None,
            client_secret=parts.get("clientsecret") or None,
            auth_type="ClientSecret",
        )


@dataclass(frozen=True)
class AppSettings:
    """
    Contents of an ``appsettings.json`` file.

    Expected shape::

        {"ConnectionStrings": {"default": "AuthType=ClientSecret;Url=..."}}
    """

    connection_strings: Mapping[str, str]
    path: Optional[str] = None

    @staticmethod
    def resolve_path(environ: Optional[Mapping[str, str]] = None) -> str:
        """Return ``DATAVERSE_APPSETTINGS`` from ``environ`` or the default ``appsettings.json``."""
        env = environ if environ is not None else {}
        return env.get(ENV_APPSETTINGS) or DEFAULT_APPSETTINGS_PATH

    @classmethod
    def load(cls, path: str) -> "AppSettings":
        """
        Load settings from a JSON file.

        :raises ~dataverse_samples.core.errors.ConfigError: If the file does not exist or is
            not a JSON object with a ``ConnectionStrings`` object.
        :raises json.JSONDecodeError: If the file is not valid JSON.
        """
        if not os.path.isfile(path):
            raise ConfigError(
                f"Settings file '{path}' was not found.",
                subcode=ec.CONFIG_SETTINGS_NOT_FOUND,
                details={"path": path},
            )
        with open(path, encoding="utf-8-sig") as fh:
            data: Any = json.load(fh)
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file '{path}' must contain a JSON object.", subcode=ec.CONFIG_MISSING_SETTING)
        conn = data.get("ConnectionStrings") or {}
        if not isinstance(conn, dict):
            raise ConfigError("'ConnectionStrings' must be a JSON object.", subcode=ec.CONFIG_MISSING_SETTING)
        # null or non-string entries count as undefined
        return cls(connection_strings={str(k): v for k, v in conn.items() if isinstance(v, str)}, path=path)

    def connection_string(self, name: str = DEFAULT_CONNECTION_STRING_NAME) -> ConnectionString:
        """
        Return the named connection string, parsed.

        :raises ~dataverse_samples.core.errors.ConfigError: If no connection string has that name.
        """
        raw = self.connection_strings.get(name)
        if not raw:
            raise ConfigError(
                f"Connection string '{name}' is not defined in the settings.",
                subcode=ec.CONFIG_MISSING_SETTING,
                details={"name": name, "path": self.path},
            )
        return ConnectionString.parse(raw)


@dataclass(frozen=True)
class QuickStartSettings:
    """Inputs for the authenticate-and-call flow."""

    resource: str
    client_id: str
    tenant_id: str
    client_secret: str
    authority_host: str = DEFAULT_AUTHORITY_HOST

    def __repr__(self) -> str:
        return (
            f"QuickStartSettings(resource={self.resource!r}, client_id={self.client_id!r}, "
            f"tenant_id={self.tenant_id!r})"
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str],
        *,
        resource: Optional[str] = None,
        client_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> "QuickStartSettings":
        """
        Build settings from explicit values, falling back to ``environ``.

        The client secret is only ever read from ``DATAVERSE_CLIENT_SECRET``.

        :raises ~dataverse_samples.core.errors.ConfigError: If any value is missing.
        """
        secret = (environ.get(ENV_CLIENT_SECRET) or "").strip()
        if not secret:
            raise ConfigError(
                "Client secret not found in environment variables.",
                subcode=ec.CONFIG_MISSING_ENV,
                details={"variable": ENV_CLIENT_SECRET},
            )
        values = {
            "resource": (resource or environ.get(ENV_URL) or "").strip(),
            "client_id": (client_id or environ.get(ENV_CLIENT_ID) or "").strip(),
            "tenant_id": (tenant_id or environ.get(ENV_TENANT_ID) or "").strip(),
        }
        env_names = {"resource": ENV_URL, "client_id": ENV_CLIENT_ID, "tenant_id": ENV_TENANT_ID}
        for key, value in values.items():
            if not value:
                raise ConfigError(
                    f"'{key}' is required (pass --{key.replace('_', '-')} or set {env_names[key]}).",
                    subcode=ec.CONFIG_MISSING_ARGUMENT,
                    details={"setting": key},
                )
        return cls(
            resource=values["resource"].rstrip("/"),
            client_id=values["client_id"],
            tenant_id=values["tenant_id"],
            client_secret=secret,
        )


__all__ = ["DataverseConfig", "ConnectionString", "AppSettings", "QuickStartSettings"]
