# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Relationship creation for table definitions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict

from ..common.constants import (
    CASCADE_BEHAVIOR_NO_CASCADE,
    CASCADE_BEHAVIOR_REMOVE_LINK,
    MENU_BEHAVIOR_USE_LABEL,
    MENU_GROUP_DETAILS,
    MENU_ORDER_DEFAULT,
    RELATIONSHIP_LOOKUP_DESCRIPTION,
    RELATIONSHIP_LOOKUP_DISPLAY_NAME,
)
from ..core.errors import UnsupportedTypeError
from ..models.metadata import (
    AssociatedMenuConfiguration,
    CascadeConfiguration,
    Label,
    LookupAttributeMetadata,
    ManyToManyRelationshipMetadata,
    OneToManyRelationshipMetadata,
)
from ..models.table_definition import RelationshipDefinition, RelationshipType

if TYPE_CHECKING:
    from ..data._metadata import MetadataService

_logger = logging.getLogger(__name__)

__all__ = ["RelationshipCreator", "lookup_schema_name"]


def lookup_schema_name(table: str) -> str:
    """Schema name of the lookup derived for a one-to-many relationship from ``table``."""
    return f"new_{table.lower()}_id"


class RelationshipCreator:
    """
    Creates one relationship per :class:`~dataverse_samples.models.table_definition.RelationshipDefinition`.

    :param service: The remote metadata service.
    :param language_code: LCID used for labels.
    :type language_code: int
    :param notify: Receives a confirmation line after each relationship is created. Defaults to ``print``.
    :type notify: Callable[[str], None]
    """

    def __init__(
        self,
        service: "MetadataService",
        *,
        language_code: int = 1033,
        notify: Callable[[str], None] = print,
    ) -> None:
        self._service = service
        self._language_code = language_code
        self._notify = notify

    def _menu(self, text: str) -> AssociatedMenuConfiguration:
        return AssociatedMenuConfiguration(
            behavior=MENU_BEHAVIOR_USE_LABEL,
            group=MENU_GROUP_DETAILS,
            label=Label.of(text, self._language_code),
            order=MENU_ORDER_DEFAULT,
        )

    def build_one_to_many(self, table: str, relationship: RelationshipDefinition):
        """Return the ``(relationship, lookup)`` pair for a one-to-many definition."""
        referenced = table.lower()
        lookup = LookupAttributeMetadata(
            schema_name=lookup_schema_name(table),
            display_name=Label.of(RELATIONSHIP_LOOKUP_DISPLAY_NAME, self._language_code),
            description=Label.of(RELATIONSHIP_LOOKUP_DESCRIPTION, self._language_code),
        )
        metadata = OneToManyRelationshipMetadata(
            schema_name=relationship.name,
            referenced_entity=referenced,
            referencing_entity=relationship.related_table_name.lower(),
            referenced_attribute=f"{referenced}id",
            cascade_configuration=CascadeConfiguration(
                assign=CASCADE_BEHAVIOR_NO_CASCADE,
                delete=CASCADE_BEHAVIOR_REMOVE_LINK,
                merge=CASCADE_BEHAVIOR_NO_CASCADE,
                reparent=CASCADE_BEHAVIOR_NO_CASCADE,
                share=CASCADE_BEHAVIOR_NO_CASCADE,
                unshare=CASCADE_BEHAVIOR_NO_CASCADE,
            ),
            associated_menu_configuration=self._menu(table),
        )
        return metadata, lookup

    def build_many_to_many(self, table: str, relationship: RelationshipDefinition) -> ManyToManyRelationshipMetadata:
        related = relationship.related_table_name
        return ManyToManyRelationshipMetadata(
            schema_name=relationship.name,
            entity1_logical_name=table.lower(),
            entity2_logical_name=related.lower(),
            intersect_entity_name=relationship.name,
            # each side's menu names the other side
            entity1_associated_menu_configuration=self._menu(related),
            entity2_associated_menu_configuration=self._menu(table),
        )

    def create(self, table: str, relationship: RelationshipDefinition) -> Dict[str, Any]:
        """
        Issue one create-relationship request and announce it.

        :raises ~dataverse_samples.core.errors.UnsupportedTypeError: If the relationship type is not supported.
        :raises ~dataverse_samples.core.errors.HttpError: If the service rejects the request.
        """
        if relationship.type is RelationshipType.ONE_TO_MANY:
            metadata, lookup = self.build_one_to_many(table, relationship)
            result = self._service.create_one_to_many_relationship(metadata, lookup)
        elif relationship.type is RelationshipType.MANY_TO_MANY:
            result = self._service.create_many_to_many_relationship(self.build_many_to_many(table, relationship))
        else:
            raise UnsupportedTypeError(relationship.type, kind="Relationship")

        message = (
            f"Relationship '{relationship.name}' created between '{table}' and "
            f"'{relationship.related_table_name}' ({relationship.type.value})."
        )
        _logger.info(message)
        self._notify(message)
        return result
