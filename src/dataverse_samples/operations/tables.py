# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Table creation from a table definition document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from ..common.constants import (
    PRIMARY_ATTRIBUTE_DESCRIPTION,
    PRIMARY_ATTRIBUTE_DISPLAY_NAME,
    PRIMARY_ATTRIBUTE_SCHEMA_NAME,
    STRING_MAX_LENGTH,
)
from ..models.metadata import EntityMetadata, Label, StringAttributeMetadata
from ..models.table_definition import TableDefinition
from .fields import FieldCreator
from .relationships import RelationshipCreator

if TYPE_CHECKING:
    from ..data._metadata import MetadataService

_logger = logging.getLogger(__name__)

__all__ = ["TableBuilder", "TableBuildResult"]


@dataclass
class TableBuildResult:
    """What a :meth:`TableBuilder.build` call created, in request order."""

    table: Dict[str, Any]
    fields: List[Dict[str, Any]] = field(default_factory=list)
    relationships: List[Dict[str, Any]] = field(default_factory=list)


class TableBuilder:
    """
    Creates a table, its columns and its relationships from a
    :class:`~dataverse_samples.models.table_definition.TableDefinition`.

    Requests are issued one at a time: the table first, then every field in
    document order, then every relationship in document order. There is no
    rollback; if a request fails, whatever was already created stays in place
    and the error propagates to the caller.

    :param service: The remote metadata service.
    :param language_code: LCID used for every label. Default is 1033.
    :type language_code: int
    :param notify: Receives relationship confirmation lines. Defaults to ``print``.
    :type notify: Callable[[str], None] or None

    Example::

        with MetadataServiceClient.from_connection_string(conn) as service:
            TableBuilder(service).build(load_table_definition("project.json"))
    """

    def __init__(
        self,
        service: "MetadataService",
        *,
        language_code: int = 1033,
        notify: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._service = service
        self._language_code = language_code
        self._fields = FieldCreator(service, language_code=language_code)
        self._relationships = RelationshipCreator(
            service,
            language_code=language_code,
            notify=notify if notify is not None else print,
        )

    def build_entity(self, definition: TableDefinition) -> EntityMetadata:
        """Return the create-entity payload: a user-owned table with a ``new_name`` primary column."""
        lcid = self._language_code
        primary = StringAttributeMetadata(
            schema_name=PRIMARY_ATTRIBUTE_SCHEMA_NAME,
            display_name=Label.of(PRIMARY_ATTRIBUTE_DISPLAY_NAME, lcid),
            description=Label.of(PRIMARY_ATTRIBUTE_DESCRIPTION, lcid),
            required_level="None",
            max_length=STRING_MAX_LENGTH,
            format_name="Text",
            is_primary_name=True,
        )
        return EntityMetadata(
            schema_name=definition.name,
            display_name=Label.of(definition.display_name, lcid),
            display_collection_name=Label.of(definition.display_collection_name, lcid),
            description=Label.of(definition.description, lcid),
            ownership_type="UserOwned",
            attributes=[primary],
        )

    def build(self, definition: TableDefinition) -> TableBuildResult:
        """
        Create everything ``definition`` describes.

        :raises ~dataverse_samples.core.errors.HttpError: If any request is rejected.
        """
        _logger.info(
            "Building table %s (%d fields, %d relationships)",
            definition.name,
            len(definition.fields),
            len(definition.relationships),
        )
        result = TableBuildResult(table=self._service.create_entity(self.build_entity(definition)))

        for f in definition.fields:
            result.fields.append(self._fields.create(definition.name, f))

        for r in definition.relationships:
            result.relationships.append(self._relationships.create(definition.name, r))

        _logger.info("Table %s built", definition.name)
        return result
