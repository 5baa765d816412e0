# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Metadata service client for the Dataverse Web API.

:class:`MetadataServiceClient` is the remote-service handle used by the table
builder: it creates tables, columns and relationships, one blocking request per
call, and turns non-success responses into :class:`~dataverse_samples.core.errors.HttpError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import requests

from ..common.constants import ODATA_VERSION, WEB_API_VERSION
from ..core import _error_codes as ec
from ..core._auth import Authenticator, discover_tenant_id
from ..core.config import ConnectionString, DataverseConfig
from ..core.errors import ConfigError, HttpError
from ..core.http import HttpClient
from ..models.metadata import (
    AttributeMetadata,
    EntityMetadata,
    LookupAttributeMetadata,
    ManyToManyRelationshipMetadata,
    OneToManyRelationshipMetadata,
)
from ._relationships import _RelationshipOperationsMixin

_logger = logging.getLogger(__name__)


@runtime_checkable
class MetadataService(Protocol):
    """The remote operations the table builder depends on."""

    def create_entity(self, entity: EntityMetadata) -> Dict[str, Any]:
        ...

    def create_attribute(self, table: str, attribute: AttributeMetadata) -> Dict[str, Any]:
        ...

    def create_one_to_many_relationship(
        self, relationship: OneToManyRelationshipMetadata, lookup: LookupAttributeMetadata
    ) -> Dict[str, Any]:
        ...

    def create_many_to_many_relationship(self, relationship: ManyToManyRelationshipMetadata) -> Dict[str, Any]:
        ...


class MetadataServiceClient(_RelationshipOperationsMixin):
    """
    Dataverse Web API client for table, column and relationship creation.

    :param auth: Object exposing ``acquire_token(scope)`` that returns a value with an
        ``access_token`` attribute, typically an :class:`~dataverse_samples.core._auth.Authenticator`.
    :param base_url: Environment URL, e.g. ``"https://org.crm.dynamics.com"``.
    :type base_url: str
    :param config: Optional HTTP and language configuration.
    :type config: ~dataverse_samples.core.config.DataverseConfig or None
    :param http: Optional pre-built HTTP client, the seam for custom transport behavior.
    :type http: ~dataverse_samples.core.http.HttpClient or None
    """

    def __init__(
        self,
        auth,
        base_url: str,
        config: Optional[DataverseConfig] = None,
        *,
        http: Optional[HttpClient] = None,
    ) -> None:
        self.auth = auth
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.api = f"{self.base_url}/api/data/{WEB_API_VERSION}"
        self.config = config or DataverseConfig.from_env()
        self._http = http or HttpClient(timeout=self.config.http_timeout, session=requests.Session())

    @classmethod
    def from_connection_string(
        cls,
        connection: ConnectionString,
        *,
        client_secret: Optional[str] = None,
        config: Optional[DataverseConfig] = None,
        http: Optional[HttpClient] = None,
    ) -> "MetadataServiceClient":
        """
        Build a client authenticated with the connection string's app registration.

        When the connection string has no ``TenantId`` the tenant is discovered from the
        environment before any token is requested.

        :param client_secret: Used when the connection string carries no ``ClientSecret``.
        :param http: Optional HTTP client, used for tenant discovery and metadata requests.
        :raises ~dataverse_samples.core.errors.ConfigError: If no client secret is available.
        :raises ~dataverse_samples.core.errors.AuthError: If tenant discovery fails.
        """
        secret = connection.client_secret or client_secret
        if not secret:
            raise ConfigError(
                "Connection string has no ClientSecret and no fallback secret was supplied.",
                subcode=ec.CONFIG_INVALID_CONNECTION_STRING,
            )
        auth = Authenticator(
            client_id=connection.client_id,
            client_secret=secret,
            tenant_id=connection.tenant_id or discover_tenant_id(connection.url, http=http),
            resource=connection.url,
        )
        return cls(auth, connection.url, config, http=http)

    def _headers(self) -> Dict[str, str]:
        """Build standard OData headers with bearer auth."""
        scope = f"{self.base_url}/.default"
        token = self.auth.acquire_token(scope).access_token
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json; charset=utf-8",
            "OData-MaxVersion": ODATA_VERSION,
            "OData-Version": ODATA_VERSION,
        }

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        r = self._http.request(method, url, **kwargs)
        if not 200 <= r.status_code < 300:
            raise self._http_error(method, url, r)
        return r

    @staticmethod
    def _http_error(method: str, url: str, r: requests.Response) -> HttpError:
        """Map a non-success response to a structured HttpError."""
        service_code = None
        message = None
        try:
            body = r.json()
        except ValueError:
            body = None
        reason = r.reason if isinstance(getattr(r, "reason", None), str) else ""
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            service_code = body["error"].get("code")
            message = body["error"].get("message")
        text = r.text if isinstance(getattr(r, "text", None), str) else ""
        retry_after = None
        raw_retry = r.headers.get("Retry-After")
        if raw_retry is not None:
            try:
                retry_after = int(raw_retry)
            except (TypeError, ValueError):
                retry_after = None
        return HttpError(
            f"{method.upper()} {url} failed with status {r.status_code}: {message or reason or 'no detail'}",
            status_code=r.status_code,
            is_transient=r.status_code in ec.TRANSIENT_STATUS,
            subcode=ec.http_subcode(r.status_code),
            service_error_code=service_code,
            correlation_id=r.headers.get("x-ms-correlation-request-id"),
            request_id=r.headers.get("x-ms-service-request-id") or r.headers.get("REQ_ID"),
            body_excerpt=text[:200] if text else None,
            retry_after=retry_after,
        )

    # ---------------------------------------------------------------- entities

    def create_entity(self, entity: EntityMetadata) -> Dict[str, Any]:
        """
        Create a custom table. Posts to /EntityDefinitions.

        :return: Dictionary with ``metadata_id`` and ``schema_name``.
        :raises HttpError: If the Web API request fails.
        """
        url = f"{self.api}/EntityDefinitions"
        _logger.info("Creating table %s", entity.schema_name)
        r = self._request("post", url, headers=self._headers(), json=entity.to_dict())
        return {
            "metadata_id": self._extract_id_from_header(r.headers.get("OData-EntityId")),
            "schema_name": entity.schema_name,
        }

    # -------------------------------------------------------------- attributes

    def create_attribute(self, table: str, attribute: AttributeMetadata) -> Dict[str, Any]:
        """
        Create a column on ``table``. Posts to /EntityDefinitions(LogicalName='<table>')/Attributes.

        :param table: Schema or logical name of the table; lowercased to its logical name.
        :return: Dictionary with ``attribute_id``, ``schema_name`` and ``table``.
        :raises HttpError: If the Web API request fails.
        """
        logical = table.lower().replace("'", "''")
        url = f"{self.api}/EntityDefinitions(LogicalName='{logical}')/Attributes"
        _logger.info("Creating column %s on %s", attribute.schema_name, table)
        r = self._request("post", url, headers=self._headers(), json=attribute.to_dict())
        return {
            "attribute_id": self._extract_id_from_header(r.headers.get("OData-EntityId")),
            "schema_name": attribute.schema_name,
            "table": table,
        }

    def close(self) -> None:
        self._http.close()
        close = getattr(self.auth, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "MetadataServiceClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["MetadataService", "MetadataServiceClient"]
