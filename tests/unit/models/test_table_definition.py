# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import json

import pytest

from dataverse_samples.core.errors import ConfigError, MissingFieldError, UnsupportedTypeError, ValidationError
from dataverse_samples.models.table_definition import (
    FieldType,
    PicklistOption,
    RelationshipType,
    TableDefinition,
    load_table_definition,
)


def test_parse_full_document(table_document):
    definition = TableDefinition.from_dict(table_document)

    assert definition.name == "new_Project"
    assert definition.display_collection_name == "Projects"
    assert [f.type for f in definition.fields] == [FieldType.STRING, FieldType.PICKLIST, FieldType.LOOKUP]
    assert definition.fields[1].options == (
        PicklistOption("Draft", 100000000),
        PicklistOption("Active", 100000001),
    )
    assert definition.fields[2].target_entity == "account"
    assert [r.type for r in definition.relationships] == [RelationshipType.ONE_TO_MANY, RelationshipType.MANY_TO_MANY]


def test_absent_or_null_arrays_are_empty(table_document):
    del table_document["Fields"]
    table_document["Relationships"] = None

    definition = TableDefinition.from_dict(table_document)

    assert definition.fields == ()
    assert definition.relationships == ()


@pytest.mark.parametrize("key", ["TableName", "TableDisplayName", "TableDisplayCollectionName", "TableDescription"])
def test_missing_table_key(table_document, key):
    del table_document[key]
    with pytest.raises(MissingFieldError) as exc:
        TableDefinition.from_dict(table_document)
    assert exc.value.field == key


def test_blank_table_name_is_missing(table_document):
    table_document["TableName"] = "   "
    with pytest.raises(MissingFieldError):
        TableDefinition.from_dict(table_document)


def test_unsupported_field_type(table_document):
    table_document["Fields"].append({"FieldName": "new_Price", "FieldDisplayName": "Price", "FieldType": "Currency"})
    with pytest.raises(UnsupportedTypeError) as exc:
        TableDefinition.from_dict(table_document)
    assert exc.value.type_tag == "Currency"
    assert exc.value.kind == "Field"


def test_field_type_is_case_sensitive(table_document):
    table_document["Fields"][0]["FieldType"] = "string"
    with pytest.raises(UnsupportedTypeError):
        TableDefinition.from_dict(table_document)


def test_numeric_field_type_is_rejected(table_document):
    table_document["Fields"][0]["FieldType"] = 5
    with pytest.raises(ValidationError) as exc:
        TableDefinition.from_dict(table_document)
    assert not isinstance(exc.value, UnsupportedTypeError)


def test_unsupported_relationship_type(table_document):
    table_document["Relationships"][0]["RelationshipType"] = "OneToOne"
    with pytest.raises(UnsupportedTypeError) as exc:
        TableDefinition.from_dict(table_document)
    assert exc.value.kind == "Relationship"


def test_option_without_value(table_document):
    del table_document["Fields"][1]["Options"][0]["Value"]
    with pytest.raises(MissingFieldError) as exc:
        TableDefinition.from_dict(table_document)
    assert exc.value.field == "Value"
    assert "Fields[1].Options[0]" in str(exc.value)


def test_option_value_must_be_integer(table_document):
    table_document["Fields"][1]["Options"][0]["Value"] = True
    with pytest.raises(ValidationError):
        TableDefinition.from_dict(table_document)


def test_picklist_without_options_is_empty(table_document):
    del table_document["Fields"][1]["Options"]
    assert TableDefinition.from_dict(table_document).fields[1].options == ()


def test_lookup_requires_target_entity(table_document):
    del table_document["Fields"][2]["TargetEntity"]
    with pytest.raises(MissingFieldError) as exc:
        TableDefinition.from_dict(table_document)
    assert exc.value.field == "TargetEntity"


def test_fields_must_be_array(table_document):
    table_document["Fields"] = {"FieldName": "x"}
    with pytest.raises(ValidationError):
        TableDefinition.from_dict(table_document)


def test_document_must_be_object():
    with pytest.raises(ValidationError):
        TableDefinition.from_dict([])


def test_load_from_file(table_document, write_json):
    definition = load_table_definition(write_json(table_document))
    assert definition.name == "new_Project"
    assert len(definition.fields) == 3


def test_load_tolerates_byte_order_mark(table_document, tmp_path):
    path = tmp_path / "bom.json"
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps(table_document).encode("utf-8"))
    definition = load_table_definition(str(path))
    assert definition.name == "new_Project"


def test_load_without_path():
    with pytest.raises(ConfigError) as exc:
        load_table_definition("")
    assert str(exc.value) == "Please provide the path to the JSON file."


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_table_definition(str(tmp_path / "missing.json"))


def test_load_malformed_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_table_definition(str(path))
