# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client used for every remote call the samples issue.

This module provides :class:`HttpClient`, a wrapper around the requests library
that applies default timeouts per HTTP method and issues each request exactly
once. Callers that need different transport behavior inject their own client.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

_logger = logging.getLogger(__name__)


class HttpClient:
    """
    HTTP client with default timeouts and optional session reuse.

    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: float or None
    :param session: Optional requests.Session for connection reuse.
    :type session: requests.Session or None
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        Applies default timeouts based on HTTP method (120s for POST/DELETE, 10s for others)
        unless a client-wide timeout was configured or ``timeout`` is passed explicitly.

        :param method: HTTP method (GET, POST, PUT, DELETE, etc.).
        :type method: str
        :param url: Target URL for the request.
        :type url: str
        :param kwargs: Additional arguments passed to ``requests.request()``, including headers, json, etc.
        :return: HTTP response object.
        :rtype: requests.Response
        :raises requests.exceptions.RequestException: If the request fails at the network level.
        """
        if "timeout" not in kwargs:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "delete") else 10

        _logger.debug("%s %s", method.upper(), url)
        if self._session is not None:
            return self._session.request(method, url, **kwargs)
        return requests.request(method, url, **kwargs)

    def close(self) -> None:
        """
        Close the underlying session, if any. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
