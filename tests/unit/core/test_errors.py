# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from dataverse_samples.core import _error_codes as ec
from dataverse_samples.core.errors import (
    AuthError,
    ConfigError,
    DataverseError,
    HttpError,
    MissingFieldError,
    UnsupportedTypeError,
    ValidationError,
)


def test_missing_field_error_names_field():
    err = MissingFieldError("TableName")
    assert isinstance(err, ValidationError)
    assert err.field == "TableName"
    assert err.code == "validation_error"
    assert err.subcode == ec.VALIDATION_MISSING_FIELD
    assert "TableName" in str(err)


def test_missing_field_error_includes_context():
    err = MissingFieldError("Value", context="Fields[1].Options[0]")
    assert "Fields[1].Options[0]" in err.message
    assert err.details == {"field": "Value", "context": "Fields[1].Options[0]"}


def test_unsupported_type_error_field_and_relationship():
    field_err = UnsupportedTypeError("Currency")
    rel_err = UnsupportedTypeError("OneToOne", kind="Relationship")

    assert field_err.type_tag == "Currency"
    assert field_err.subcode == ec.VALIDATION_UNSUPPORTED_FIELD_TYPE
    assert str(field_err) == "Field type 'Currency' is not supported."
    assert rel_err.subcode == ec.VALIDATION_UNSUPPORTED_RELATIONSHIP_TYPE
    assert str(rel_err) == "Relationship type 'OneToOne' is not supported."


def test_config_and_auth_error_codes():
    cfg = ConfigError("no secret", subcode=ec.CONFIG_MISSING_ENV)
    auth = AuthError("AADSTS7000215: Invalid client secret")

    assert cfg.code == "config_error"
    assert cfg.source == "client"
    assert auth.code == "auth_error"
    assert auth.source == "server"
    assert auth.subcode == ec.AUTH_TOKEN_REQUEST_FAILED


def test_http_error_details_collected():
    err = HttpError(
        "failed",
        status_code=429,
        is_transient=True,
        subcode=ec.http_subcode(429),
        service_error_code="0x80072321",
        correlation_id="cid",
        retry_after=5,
    )
    assert err.subcode == "http_429"
    assert err.is_transient is True
    assert err.details == {"service_error_code": "0x80072321", "correlation_id": "cid", "retry_after": 5}


def test_to_dict_round_trips_core_fields():
    err = DataverseError("boom", code="x", subcode="y", status_code=500)
    d = err.to_dict()
    assert d["message"] == "boom"
    assert d["code"] == "x"
    assert d["subcode"] == "y"
    assert d["status_code"] == 500
    assert d["timestamp"].endswith("Z")


def test_http_subcode_helper():
    assert ec.http_subcode(404) == "http_404"
