# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Metadata entity types for Microsoft Dataverse.

These classes represent the metadata payloads posted to the Dataverse Web API
when creating tables, columns and relationships. Each type serializes itself
with ``to_dict()``.

See: https://learn.microsoft.com/en-us/power-apps/developer/data-platform/webapi/reference/metadataentitytypes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..common.constants import (
    CASCADE_BEHAVIOR_NO_CASCADE,
    CASCADE_BEHAVIOR_REMOVE_LINK,
    MENU_BEHAVIOR_USE_LABEL,
    MENU_GROUP_DETAILS,
    MENU_ORDER_DEFAULT,
    ODATA_TYPE_ENTITY,
    ODATA_TYPE_LABEL,
    ODATA_TYPE_LOCALIZED_LABEL,
    ODATA_TYPE_LOOKUP_ATTRIBUTE,
    ODATA_TYPE_MANY_TO_MANY_RELATIONSHIP,
    ODATA_TYPE_ONE_TO_MANY_RELATIONSHIP,
    ODATA_TYPE_OPTION_SET,
    ODATA_TYPE_PICKLIST_ATTRIBUTE,
    ODATA_TYPE_STRING_ATTRIBUTE,
    STRING_MAX_LENGTH,
)


@dataclass
class LocalizedLabel:
    """
    A label text in one language.

    :param label: The text of the label.
    :type label: str
    :param language_code: The language code (LCID), e.g., 1033 for English.
    :type language_code: int
    """

    label: str
    language_code: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        return {
            "@odata.type": ODATA_TYPE_LOCALIZED_LABEL,
            "Label": self.label,
            "LanguageCode": self.language_code,
        }


@dataclass
class Label:
    """
    A label that can have multiple localized versions.

    :param localized_labels: List of LocalizedLabel instances.
    :type localized_labels: List[LocalizedLabel]
    """

    localized_labels: List[LocalizedLabel]

    @classmethod
    def of(cls, text: str, language_code: int = 1033) -> "Label":
        """Build a single-language label."""
        return cls(localized_labels=[LocalizedLabel(label=text, language_code=language_code)])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        result: Dict[str, Any] = {
            "@odata.type": ODATA_TYPE_LABEL,
            "LocalizedLabels": [ll.to_dict() for ll in self.localized_labels],
        }
        if self.localized_labels:
            result["UserLocalizedLabel"] = self.localized_labels[0].to_dict()
        return result


def _required_level(value: str) -> Dict[str, Any]:
    return {
        "Value": value,
        "CanBeChanged": True,
        "ManagedPropertyLogicalName": "canmodifyrequirementlevelsettings",
    }


@dataclass
class AttributeMetadata:
    """
    Properties shared by every column type.

    :param schema_name: Schema name for the attribute (e.g., "new_Code").
    :type schema_name: str
    :param display_name: Display name for the attribute.
    :type display_name: Label
    :param description: Optional description of the attribute.
    :type description: Optional[Label]
    :param required_level: ``"None"``, ``"Recommended"`` or ``"ApplicationRequired"``.
    :type required_level: str
    """

    schema_name: str
    display_name: Label
    description: Optional[Label] = None
    required_level: str = "None"

    odata_type = ""
    attribute_type = ""
    attribute_type_name = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        result: Dict[str, Any] = {
            "@odata.type": self.odata_type,
            "SchemaName": self.schema_name,
            "AttributeType": self.attribute_type,
            "AttributeTypeName": {"Value": self.attribute_type_name},
            "DisplayName": self.display_name.to_dict(),
            "RequiredLevel": _required_level(self.required_level),
        }
        if self.description:
            result["Description"] = self.description.to_dict()
        return result


@dataclass
class StringAttributeMetadata(AttributeMetadata):
    """
    A single-line text column.

    :param max_length: Maximum number of characters. Default is 100.
    :type max_length: int
    :param format_name: Text format, e.g. ``"Text"`` or ``"Email"``.
    :type format_name: str
    :param is_primary_name: Whether this is the table's primary name column.
    :type is_primary_name: bool
    """

    max_length: int = STRING_MAX_LENGTH
    format_name: str = "Text"
    is_primary_name: bool = False

    odata_type = ODATA_TYPE_STRING_ATTRIBUTE
    attribute_type = "String"
    attribute_type_name = "StringType"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["MaxLength"] = self.max_length
        result["FormatName"] = {"Value": self.format_name}
        if self.is_primary_name:
            result["IsPrimaryName"] = True
        return result


@dataclass
class OptionMetadata:
    """One choice in an option set."""

    label: Label
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"Value": self.value, "Label": self.label.to_dict()}


@dataclass
class OptionSetMetadata:
    """
    The set of choices behind a picklist column.

    :param options: Choices in display order.
    :type options: List[OptionMetadata]
    :param is_global: Local option sets belong to one column; global ones are shared.
    :type is_global: bool
    """

    options: List[OptionMetadata] = field(default_factory=list)
    is_global: bool = False
    option_set_type: str = "Picklist"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@odata.type": ODATA_TYPE_OPTION_SET,
            "IsGlobal": self.is_global,
            "OptionSetType": self.option_set_type,
            "Options": [o.to_dict() for o in self.options],
        }


@dataclass
class PicklistAttributeMetadata(AttributeMetadata):
    """A choice column backed by an option set."""

    option_set: OptionSetMetadata = field(default_factory=OptionSetMetadata)

    odata_type = ODATA_TYPE_PICKLIST_ATTRIBUTE
    attribute_type = "Picklist"
    attribute_type_name = "PicklistType"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["OptionSet"] = self.option_set.to_dict()
        return result


@dataclass
class LookupAttributeMetadata(AttributeMetadata):
    """
    A lookup column.

    :param targets: Logical names of the tables the lookup can reference. Left empty
        when the lookup is created as part of a one-to-many relationship, where the
        referenced entity determines the target.
    :type targets: List[str]
    """

    targets: List[str] = field(default_factory=list)

    odata_type = ODATA_TYPE_LOOKUP_ATTRIBUTE
    attribute_type = "Lookup"
    attribute_type_name = "LookupType"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.targets:
            result["Targets"] = list(self.targets)
        return result


@dataclass
class EntityMetadata:
    """
    A custom table definition.

    :param schema_name: Schema name with customization prefix, e.g. ``"new_Project"``.
    :type schema_name: str
    :param display_name: Singular display name.
    :type display_name: Label
    :param display_collection_name: Plural display name.
    :type display_collection_name: Label
    :param description: Table description.
    :type description: Optional[Label]
    :param ownership_type: ``"UserOwned"`` or ``"OrganizationOwned"``.
    :type ownership_type: str
    :param attributes: Columns created with the table; must include the primary name column.
    :type attributes: List[AttributeMetadata]
    """

    schema_name: str
    display_name: Label
    display_collection_name: Label
    description: Optional[Label] = None
    ownership_type: str = "UserOwned"
    has_activities: bool = False
    has_notes: bool = False
    attributes: List[AttributeMetadata] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        result: Dict[str, Any] = {
            "@odata.type": ODATA_TYPE_ENTITY,
            "SchemaName": self.schema_name,
            "DisplayName": self.display_name.to_dict(),
            "DisplayCollectionName": self.display_collection_name.to_dict(),
            "OwnershipType": self.ownership_type,
            "HasActivities": self.has_activities,
            "HasNotes": self.has_notes,
            "IsActivity": False,
            "Attributes": [a.to_dict() for a in self.attributes],
        }
        if self.description:
            result["Description"] = self.description.to_dict()
        return result


@dataclass
class CascadeConfiguration:
    """
    Defines cascade behavior for relationship operations.

    Valid values for each operation:
        - "Cascade": Perform the operation on all related records
        - "NoCascade": Do not perform the operation on related records
        - "RemoveLink": Remove the relationship link but keep the records
        - "Restrict": Prevent the operation if related records exist
    """

    assign: str = CASCADE_BEHAVIOR_NO_CASCADE
    delete: str = CASCADE_BEHAVIOR_REMOVE_LINK
    merge: str = CASCADE_BEHAVIOR_NO_CASCADE
    reparent: str = CASCADE_BEHAVIOR_NO_CASCADE
    share: str = CASCADE_BEHAVIOR_NO_CASCADE
    unshare: str = CASCADE_BEHAVIOR_NO_CASCADE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        return {
            "Assign": self.assign,
            "Delete": self.delete,
            "Merge": self.merge,
            "Reparent": self.reparent,
            "Share": self.share,
            "Unshare": self.unshare,
        }


@dataclass
class AssociatedMenuConfiguration:
    """
    How the relationship appears in the associated menu of a record form.

    Valid behavior values:
        - "UseCollectionName": Use the collection name
        - "UseLabel": Use the specified label
        - "DoNotDisplay": Do not display in the menu
    """

    behavior: str = MENU_BEHAVIOR_USE_LABEL
    group: str = MENU_GROUP_DETAILS
    label: Optional[Label] = None
    order: int = MENU_ORDER_DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        result: Dict[str, Any] = {
            "Behavior": self.behavior,
            "Group": self.group,
            "Order": self.order,
        }
        if self.label:
            result["Label"] = self.label.to_dict()
        return result


@dataclass
class OneToManyRelationshipMetadata:
    """
    Metadata for a one-to-many entity relationship.

    :param schema_name: Schema name for the relationship (e.g., "new_Account_Orders").
    :type schema_name: str
    :param referenced_entity: Logical name of the referenced (parent) entity.
    :type referenced_entity: str
    :param referencing_entity: Logical name of the referencing (child) entity.
    :type referencing_entity: str
    :param referenced_attribute: Attribute on the referenced entity (typically the primary key).
    :type referenced_attribute: str
    :param cascade_configuration: Cascade behavior configuration.
    :type cascade_configuration: CascadeConfiguration
    :param associated_menu_configuration: Optional menu display configuration.
    :type associated_menu_configuration: Optional[AssociatedMenuConfiguration]
    """

    schema_name: str
    referenced_entity: str
    referencing_entity: str
    referenced_attribute: str
    cascade_configuration: CascadeConfiguration = field(default_factory=CascadeConfiguration)
    associated_menu_configuration: Optional[AssociatedMenuConfiguration] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        result: Dict[str, Any] = {
            "@odata.type": ODATA_TYPE_ONE_TO_MANY_RELATIONSHIP,
            "SchemaName": self.schema_name,
            "ReferencedEntity": self.referenced_entity,
            "ReferencingEntity": self.referencing_entity,
            "ReferencedAttribute": self.referenced_attribute,
            "CascadeConfiguration": self.cascade_configuration.to_dict(),
        }
        if self.associated_menu_configuration:
            result["AssociatedMenuConfiguration"] = self.associated_menu_configuration.to_dict()
        return result


@dataclass
class ManyToManyRelationshipMetadata:
    """
    Metadata for a many-to-many entity relationship.

    :param schema_name: Schema name for the relationship.
    :type schema_name: str
    :param entity1_logical_name: Logical name of the first entity.
    :type entity1_logical_name: str
    :param entity2_logical_name: Logical name of the second entity.
    :type entity2_logical_name: str
    :param intersect_entity_name: Name for the intersect table (defaults to schema_name if not provided).
    :type intersect_entity_name: Optional[str]
    """

    schema_name: str
    entity1_logical_name: str
    entity2_logical_name: str
    intersect_entity_name: Optional[str] = None
    entity1_associated_menu_configuration: Optional[AssociatedMenuConfiguration] = None
    entity2_associated_menu_configuration: Optional[AssociatedMenuConfiguration] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Web API JSON format."""
        result: Dict[str, Any] = {
            "@odata.type": ODATA_TYPE_MANY_TO_MANY_RELATIONSHIP,
            "SchemaName": self.schema_name,
            "Entity1LogicalName": self.entity1_logical_name,
            "Entity2LogicalName": self.entity2_logical_name,
            "IntersectEntityName": self.intersect_entity_name or self.schema_name,
        }
        if self.entity1_associated_menu_configuration:
            result["Entity1AssociatedMenuConfiguration"] = self.entity1_associated_menu_configuration.to_dict()
        if self.entity2_associated_menu_configuration:
            result["Entity2AssociatedMenuConfiguration"] = self.entity2_associated_menu_configuration.to_dict()
        return result


__all__ = [
    "LocalizedLabel",
    "Label",
    "AttributeMetadata",
    "StringAttributeMetadata",
    "OptionMetadata",
    "OptionSetMetadata",
    "PicklistAttributeMetadata",
    "LookupAttributeMetadata",
    "EntityMetadata",
    "CascadeConfiguration",
    "AssociatedMenuConfiguration",
    "OneToManyRelationshipMetadata",
    "ManyToManyRelationshipMetadata",
]
