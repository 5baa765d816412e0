# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
The WhoAmI diagnostic call.

:class:`ApiCaller` invokes the Web API ``WhoAmI`` unbound function with a bearer
token and reports the caller's user id. It never raises for HTTP or network
problems; those are printed and the call returns ``None``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from ..common.constants import ODATA_VERSION, WEB_API_VERSION, WHOAMI_TIMEOUT_SECONDS
from ..core import _error_codes as ec
from ..core._auth import AuthToken
from ..core.errors import HttpError
from ..core.http import HttpClient

_logger = logging.getLogger(__name__)

__all__ = ["ApiCaller", "WhoAmIResult"]


def _guid(body: Dict[str, Any], key: str) -> Optional[uuid.UUID]:
    value = body.get(key)
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class WhoAmIResult:
    """
    Response of the ``WhoAmI`` function.

    See: https://learn.microsoft.com/power-apps/developer/data-platform/webapi/reference/whoamiresponse
    """

    user_id: uuid.UUID
    business_unit_id: Optional[uuid.UUID] = None
    organization_id: Optional[uuid.UUID] = None

    @classmethod
    def from_dict(cls, body: Any) -> "WhoAmIResult":
        if not isinstance(body, dict):
            raise HttpError("WhoAmI response is not a JSON object.", subcode=ec.HTTP_INVALID_RESPONSE)
        user_id = _guid(body, "UserId")
        if user_id is None:
            raise HttpError("WhoAmI response has no valid 'UserId'.", subcode=ec.HTTP_INVALID_RESPONSE)
        return cls(
            user_id=user_id,
            business_unit_id=_guid(body, "BusinessUnitId"),
            organization_id=_guid(body, "OrganizationId"),
        )


class ApiCaller:
    """
    Performs the WhoAmI call against a Dataverse environment.

    :param resource: Environment URL, e.g. ``"https://org.crm.dynamics.com"``.
    :type resource: str
    :param http: Optional HTTP client; by default a single-attempt client with a two-minute timeout.
    :type http: ~dataverse_samples.core.http.HttpClient or None
    :param out: Receives the user-facing lines. Defaults to ``print``.
    :type out: Callable[[str], None]
    """

    def __init__(
        self,
        resource: str,
        *,
        http: Optional[HttpClient] = None,
        out: Callable[[str], None] = print,
    ) -> None:
        self.resource = (resource or "").rstrip("/")
        if not self.resource:
            raise ValueError("resource is required.")
        self.base_address = f"{self.resource}/api/data/{WEB_API_VERSION}/"
        self._http = http or HttpClient(timeout=WHOAMI_TIMEOUT_SECONDS, session=requests.Session())
        self._out = out

    @staticmethod
    def headers(token: AuthToken) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token.access_token}",
            "OData-MaxVersion": ODATA_VERSION,
            "OData-Version": ODATA_VERSION,
            "Accept": "application/json",
        }

    def call(self, token: AuthToken) -> Optional[WhoAmIResult]:
        """
        Invoke ``WhoAmI`` and print the result.

        :return: The parsed response on success, ``None`` on a non-success status or a failure.
        :rtype: ~dataverse_samples.operations.whoami.WhoAmIResult or None
        """
        try:
            return self._call(token)
        except HttpError as exc:
            _logger.debug("WhoAmI failed: %s", exc.to_dict())
            self._out(f"HTTP error: {exc.message}")
            return None

    def _call(self, token: AuthToken) -> Optional[WhoAmIResult]:
        url = f"{self.base_address}WhoAmI"
        try:
            response = self._http.request("get", url, headers=self.headers(token))
        except requests.exceptions.RequestException as exc:
            raise HttpError(str(exc), subcode=ec.HTTP_NETWORK_ERROR) from exc

        if not 200 <= response.status_code < 300:
            self._out(f"Web API call failed: {response.status_code} - {response.reason}")
            return None

        try:
            body = response.json()
        except ValueError as exc:
            raise HttpError(
                "WhoAmI response is not valid JSON.",
                status_code=response.status_code,
                subcode=ec.HTTP_INVALID_RESPONSE,
            ) from exc
        result = WhoAmIResult.from_dict(body)
        self._out(f"Your user ID is {result.user_id}")
        return result

    def close(self) -> None:
        self._http.close()
