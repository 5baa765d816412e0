# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Client-credentials authentication for Dataverse.

:class:`Authenticator` builds an Azure Identity ``ClientSecretCredential`` for an
app registration and exchanges it for bearer tokens scoped to a Dataverse
environment (``<resource>/.default``). When a connection string omits the tenant,
:func:`discover_tenant_id` reads it from the environment's authentication challenge.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

import requests
from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError
from azure.identity import ClientSecretCredential

from . import _error_codes as ec
from .errors import AuthError
from .http import HttpClient
from ..common.constants import DEFAULT_AUTHORITY_HOST, WEB_API_VERSION

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthToken:
    """
    A bearer token issued for one scope.

    :param scope: The scope the token was requested for.
    :type scope: str
    :param access_token: The opaque bearer credential. Excluded from ``repr``.
    :type access_token: str
    :param expires_on: Expiry as seconds since the epoch.
    :type expires_on: int
    """

    scope: str
    access_token: str = field(repr=False)
    expires_on: int = 0


class Authenticator:
    """
    Acquire tokens for a Dataverse environment using the client-credentials grant.

    :param client_id: Application (client) id of the app registration.
    :type client_id: str
    :param client_secret: Client secret of the app registration.
    :type client_secret: str
    :param tenant_id: Directory (tenant) id.
    :type tenant_id: str
    :param resource: Dataverse environment URL, e.g. ``"https://org.crm.dynamics.com"``.
    :type resource: str
    :param authority_host: Identity platform host. Defaults to ``https://login.microsoftonline.com``.
    :type authority_host: str
    :param credential: Optional pre-built credential; when given, ``client_secret`` is not used.
    :type credential: ~azure.core.credentials.TokenCredential or None
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        tenant_id: str,
        resource: str,
        *,
        authority_host: str = DEFAULT_AUTHORITY_HOST,
        credential: Optional[TokenCredential] = None,
    ) -> None:
        self.client_id = client_id
        self.tenant_id = tenant_id
        self.resource = (resource or "").rstrip("/")
        if not self.resource:
            raise ValueError("resource is required.")
        self.authority_host = authority_host.rstrip("/")
        self._client_secret = client_secret
        self._credential: Optional[TokenCredential] = credential

    @property
    def authority(self) -> str:
        """The OAuth authority URL, ``<authority_host>/<tenant_id>``."""
        return f"{self.authority_host}/{self.tenant_id}"

    @property
    def default_scope(self) -> str:
        return f"{self.resource}/.default"

    def _get_credential(self) -> TokenCredential:
        if self._credential is None:
            try:
                self._credential = ClientSecretCredential(
                    tenant_id=self.tenant_id,
                    client_id=self.client_id,
                    client_secret=self._client_secret,
                    authority=self.authority_host,
                )
            except ValueError as exc:
                # azure-identity validates tenant ids locally
                raise AuthError(f"Invalid authentication settings: {exc}") from exc
        return self._credential

    def acquire_token(self, scope: Optional[str] = None) -> AuthToken:
        """
        Request a token for ``scope`` (default ``<resource>/.default``).

        :return: The issued token.
        :rtype: ~dataverse_samples.core._auth.AuthToken
        :raises ~dataverse_samples.core.errors.AuthError: If the identity platform rejects the
            request (invalid credentials, tenant mismatch) or cannot be reached.
        """
        scope = scope or self.default_scope
        credential = self._get_credential()
        _logger.debug("Requesting token for scope %s from %s", scope, self.authority)
        try:
            token = credential.get_token(scope)
        except AzureError as exc:
            raise AuthError(
                str(exc) or exc.__class__.__name__,
                details={"authority": self.authority, "scope": scope},
            ) from exc
        return AuthToken(scope=scope, access_token=token.token, expires_on=int(token.expires_on))

    def close(self) -> None:
        """Release the credential's transport, if it holds one."""
        close = getattr(self._credential, "close", None)
        if callable(close):
            close()


_AUTHORIZATION_URI = re.compile(r'authorization_uri\s*=\s*"?([^",\s]+)', re.IGNORECASE)


def discover_tenant_id(resource: str, *, http: Optional[HttpClient] = None) -> str:
    """
    Find the tenant that owns a Dataverse environment.

    Sends an anonymous ``GET <resource>/api/data/v9.2/`` and reads the tenant id from the
    ``authorization_uri`` of the ``WWW-Authenticate`` challenge, e.g.
    ``Bearer authorization_uri=https://login.microsoftonline.com/<tenant>/oauth2/authorize``.

    :param resource: Environment URL, e.g. ``"https://org.crm.dynamics.com"``.
    :type resource: str
    :param http: Optional HTTP client; a single-attempt client is used by default.
    :type http: ~dataverse_samples.core.http.HttpClient or None
    :return: The tenant id.
    :rtype: str
    :raises ~dataverse_samples.core.errors.AuthError: If the environment cannot be reached or
        its response carries no usable challenge.
    """
    url = f"{resource.rstrip('/')}/api/data/{WEB_API_VERSION}/"
    client = http or HttpClient()
    try:
        response = client.request("get", url)
    except requests.exceptions.RequestException as exc:
        raise AuthError(
            f"Could not reach {url} to discover the tenant: {exc}",
            subcode=ec.AUTH_TENANT_DISCOVERY_FAILED,
            details={"url": url},
        ) from exc

    challenge = response.headers.get("WWW-Authenticate") or ""
    match = _AUTHORIZATION_URI.search(challenge)
    tenant = urlparse(match.group(1)).path.strip("/").split("/")[0] if match else ""
    if not tenant:
        raise AuthError(
            f"No authorization_uri in the authentication challenge from {url} (status {response.status_code}).",
            subcode=ec.AUTH_TENANT_DISCOVERY_FAILED,
            details={"url": url, "status_code": response.status_code},
        )
    _logger.info("Discovered tenant %s for %s", tenant, resource)
    return tenant


__all__ = ["AuthToken", "Authenticator", "discover_tenant_id"]
