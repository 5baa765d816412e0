# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for the Dataverse samples.

Provides the Web API metadata payload types and the table definition document model.
"""

from .metadata import (
    AssociatedMenuConfiguration,
    CascadeConfiguration,
    EntityMetadata,
    Label,
    LocalizedLabel,
    LookupAttributeMetadata,
    ManyToManyRelationshipMetadata,
    OneToManyRelationshipMetadata,
    OptionMetadata,
    OptionSetMetadata,
    PicklistAttributeMetadata,
    StringAttributeMetadata,
)
from .table_definition import (
    FieldDefinition,
    FieldType,
    PicklistOption,
    RelationshipDefinition,
    RelationshipType,
    TableDefinition,
    load_table_definition,
)

__all__ = [
    "AssociatedMenuConfiguration",
    "CascadeConfiguration",
    "EntityMetadata",
    "Label",
    "LocalizedLabel",
    "LookupAttributeMetadata",
    "ManyToManyRelationshipMetadata",
    "OneToManyRelationshipMetadata",
    "OptionMetadata",
    "OptionSetMetadata",
    "PicklistAttributeMetadata",
    "StringAttributeMetadata",
    "FieldDefinition",
    "FieldType",
    "PicklistOption",
    "RelationshipDefinition",
    "RelationshipType",
    "TableDefinition",
    "load_table_definition",
]
