# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types raised by the Dataverse samples.

Every error derives from :class:`DataverseError`, which carries a stable ``code``,
an optional ``subcode`` (see :mod:`~dataverse_samples.core._error_codes`) and a
``details`` dictionary suitable for logging.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from . import _error_codes as ec


class DataverseError(Exception):
    """Base structured error for the Dataverse samples."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ConfigError(DataverseError):
    """Missing or invalid configuration: command-line arguments, environment, settings file."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="config_error", subcode=subcode, details=details, source="client")


class ValidationError(DataverseError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class MissingFieldError(ValidationError):
    """
    A required field is absent from a definition document.

    :param field: Name of the missing JSON key, e.g. ``"TableName"``.
    :type field: str
    :param context: Optional description of where the key was expected, e.g. ``"Fields[2]"``.
    :type context: str or None
    """

    def __init__(self, field: str, *, context: Optional[str] = None):
        where = f" in {context}" if context else ""
        super().__init__(
            f"Required field '{field}' is missing{where}.",
            subcode=ec.VALIDATION_MISSING_FIELD,
            details={"field": field, "context": context},
        )
        self.field = field


class UnsupportedTypeError(ValidationError):
    """
    A field or relationship type tag is not one of the supported values.

    :param type_tag: The tag found in the document.
    :type type_tag: str
    :param kind: ``"Field"`` or ``"Relationship"``.
    :type kind: str
    """

    def __init__(self, type_tag: Any, *, kind: str = "Field"):
        subcode = (
            ec.VALIDATION_UNSUPPORTED_RELATIONSHIP_TYPE
            if kind == "Relationship"
            else ec.VALIDATION_UNSUPPORTED_FIELD_TYPE
        )
        super().__init__(
            f"{kind} type '{type_tag}' is not supported.",
            subcode=subcode,
            details={"type": type_tag, "kind": kind},
        )
        self.type_tag = type_tag
        self.kind = kind


class AuthError(DataverseError):
    """Token acquisition was rejected by the identity platform or could not reach it."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            code="auth_error",
            subcode=subcode or ec.AUTH_TOKEN_REQUEST_FAILED,
            details=details,
            source="server",
        )


class HttpError(DataverseError):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        is_transient: bool = False,
        subcode: Optional[str] = None,
        service_error_code: Optional[str] = None,
        correlation_id: Optional[str] = None,
        request_id: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if correlation_id is not None:
            d["correlation_id"] = correlation_id
        if request_id is not None:
            d["request_id"] = request_id
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if retry_after is not None:
            d["retry_after"] = retry_after
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


__all__ = [
    "DataverseError",
    "ConfigError",
    "ValidationError",
    "MissingFieldError",
    "UnsupportedTypeError",
    "AuthError",
    "HttpError",
]
