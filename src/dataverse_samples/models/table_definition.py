# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Table definition documents.

A table definition is a JSON file describing one custom table, its columns and
its relationships::

    {
      "TableName": "new_Project",
      "TableDisplayName": "Project",
      "TableDisplayCollectionName": "Projects",
      "TableDescription": "Tracks projects.",
      "Fields": [
        {"FieldName": "new_Code", "FieldDisplayName": "Code", "FieldType": "String"}
      ],
      "Relationships": [
        {"RelationshipName": "new_Project_Tasks", "RelatedTableName": "new_task",
         "RelationshipType": "OneToMany"}
      ]
    }

Documents are validated completely when parsed, so type tags and required keys
are rejected before any request reaches the service.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core import _error_codes as ec
from ..core.errors import ConfigError, MissingFieldError, UnsupportedTypeError, ValidationError


class FieldType(str, Enum):
    STRING = "String"
    PICKLIST = "Picklist"
    LOOKUP = "Lookup"

    @classmethod
    def parse(cls, tag: Any) -> "FieldType":
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedTypeError(tag, kind="Field") from None


class RelationshipType(str, Enum):
    ONE_TO_MANY = "OneToMany"
    MANY_TO_MANY = "ManyToMany"

    @classmethod
    def parse(cls, tag: Any) -> "RelationshipType":
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedTypeError(tag, kind="Relationship") from None


def _require_str(doc: Mapping[str, Any], key: str, context: Optional[str] = None) -> str:
    value = doc.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(key, context=context)
    if not isinstance(value, str):
        where = f" in {context}" if context else ""
        raise ValidationError(
            f"Field '{key}'{where} must be a string, got {type(value).__name__}.",
            subcode=ec.VALIDATION_INVALID_TYPE,
            details={"field": key, "context": context},
        )
    return value


def _require_int(doc: Mapping[str, Any], key: str, context: Optional[str] = None) -> int:
    value = doc.get(key)
    if value is None:
        raise MissingFieldError(key, context=context)
    # bool is an int subclass; JSON true/false is not a valid option value
    if isinstance(value, bool) or not isinstance(value, int):
        where = f" in {context}" if context else ""
        raise ValidationError(
            f"Field '{key}'{where} must be an integer, got {type(value).__name__}.",
            subcode=ec.VALIDATION_INVALID_TYPE,
            details={"field": key, "context": context},
        )
    return value


def _object(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(
            f"{context} must be a JSON object.",
            subcode=ec.VALIDATION_INVALID_TYPE,
            details={"context": context},
        )
    return value


def _optional_array(doc: Mapping[str, Any], key: str) -> List[Any]:
    value = doc.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(
            f"'{key}' must be a JSON array.",
            subcode=ec.VALIDATION_INVALID_TYPE,
            details={"field": key},
        )
    return value


@dataclass(frozen=True)
class PicklistOption:
    label: str
    value: int


@dataclass(frozen=True)
class FieldDefinition:
    """
    One column of a table definition.

    ``options`` is only populated for picklists and ``target_entity`` only for lookups.
    """

    name: str
    display_name: str
    type: FieldType
    options: Tuple[PicklistOption, ...] = ()
    target_entity: Optional[str] = None

    @classmethod
    def from_dict(cls, doc: Any, context: str = "Fields") -> "FieldDefinition":
        doc = _object(doc, context)
        name = _require_str(doc, "FieldName", context)
        display_name = _require_str(doc, "FieldDisplayName", context)
        field_type = FieldType.parse(_require_str(doc, "FieldType", context))

        options: Tuple[PicklistOption, ...] = ()
        target_entity = None
        if field_type is FieldType.PICKLIST:
            parsed = []
            for i, raw in enumerate(_optional_array(doc, "Options")):
                where = f"{context}.Options[{i}]"
                raw = _object(raw, where)
                parsed.append(
                    PicklistOption(
                        label=_require_str(raw, "Label", where),
                        value=_require_int(raw, "Value", where),
                    )
                )
            options = tuple(parsed)
        elif field_type is FieldType.LOOKUP:
            target_entity = _require_str(doc, "TargetEntity", context)

        return cls(
            name=name,
            display_name=display_name,
            type=field_type,
            options=options,
            target_entity=target_entity,
        )


@dataclass(frozen=True)
class RelationshipDefinition:
    name: str
    related_table_name: str
    type: RelationshipType

    @classmethod
    def from_dict(cls, doc: Any, context: str = "Relationships") -> "RelationshipDefinition":
        doc = _object(doc, context)
        return cls(
            name=_require_str(doc, "RelationshipName", context),
            related_table_name=_require_str(doc, "RelatedTableName", context),
            type=RelationshipType.parse(_require_str(doc, "RelationshipType", context)),
        )


@dataclass(frozen=True)
class TableDefinition:
    """
    A complete, validated table definition.

    Absent or ``null`` ``Fields``/``Relationships`` are treated as empty.
    """

    name: str
    display_name: str
    display_collection_name: str
    description: str
    fields: Tuple[FieldDefinition, ...] = ()
    relationships: Tuple[RelationshipDefinition, ...] = ()

    @classmethod
    def from_dict(cls, doc: Any) -> "TableDefinition":
        """
        Validate and convert a parsed JSON document.

        :raises ~dataverse_samples.core.errors.MissingFieldError: If a required key is absent or empty.
        :raises ~dataverse_samples.core.errors.UnsupportedTypeError: If a type tag is not recognized.
        :raises ~dataverse_samples.core.errors.ValidationError: If a value has the wrong JSON type.
        """
        doc = _object(doc, "Table definition")
        return cls(
            name=_require_str(doc, "TableName"),
            display_name=_require_str(doc, "TableDisplayName"),
            display_collection_name=_require_str(doc, "TableDisplayCollectionName"),
            description=_require_str(doc, "TableDescription"),
            fields=tuple(
                FieldDefinition.from_dict(f, f"Fields[{i}]")
                for i, f in enumerate(_optional_array(doc, "Fields"))
            ),
            relationships=tuple(
                RelationshipDefinition.from_dict(r, f"Relationships[{i}]")
                for i, r in enumerate(_optional_array(doc, "Relationships"))
            ),
        )


def read_document(path: Optional[str]) -> Dict[str, Any]:
    """
    Read a JSON file into a generic document.

    :raises ~dataverse_samples.core.errors.ConfigError: If no path is given.
    :raises FileNotFoundError: If the file does not exist.
    :raises json.JSONDecodeError: If the file is not valid JSON.
    """
    if not path:
        raise ConfigError(
            "Please provide the path to the JSON file.",
            subcode=ec.CONFIG_MISSING_ARGUMENT,
        )
    with open(path, encoding="utf-8-sig") as fh:
        return json.load(fh)


def load_table_definition(path: Optional[str]) -> TableDefinition:
    """Read and validate the table definition at ``path``."""
    return TableDefinition.from_dict(read_document(path))


__all__ = [
    "FieldType",
    "RelationshipType",
    "PicklistOption",
    "FieldDefinition",
    "RelationshipDefinition",
    "TableDefinition",
    "read_document",
    "load_table_definition",
]
