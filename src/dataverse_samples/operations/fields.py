# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Column creation for table definitions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..common.constants import STRING_MAX_LENGTH
from ..core.errors import UnsupportedTypeError
from ..models.metadata import (
    AttributeMetadata,
    Label,
    LookupAttributeMetadata,
    OptionMetadata,
    OptionSetMetadata,
    PicklistAttributeMetadata,
    StringAttributeMetadata,
)
from ..models.table_definition import FieldDefinition, FieldType

if TYPE_CHECKING:
    from ..data._metadata import MetadataService

_logger = logging.getLogger(__name__)

__all__ = ["FieldCreator"]


class FieldCreator:
    """
    Creates one column per :class:`~dataverse_samples.models.table_definition.FieldDefinition`.

    :param service: The remote metadata service.
    :param language_code: LCID used for display labels.
    :type language_code: int
    """

    def __init__(self, service: "MetadataService", *, language_code: int = 1033) -> None:
        self._service = service
        self._language_code = language_code

    def build_attribute(self, field: FieldDefinition) -> AttributeMetadata:
        """
        Translate a field definition into its attribute metadata payload.

        :raises ~dataverse_samples.core.errors.UnsupportedTypeError: If the field type has no mapping.
        """
        lcid = self._language_code
        display_name = Label.of(field.display_name, lcid)

        if field.type is FieldType.STRING:
            return StringAttributeMetadata(
                schema_name=field.name,
                display_name=display_name,
                max_length=STRING_MAX_LENGTH,
            )
        if field.type is FieldType.PICKLIST:
            return PicklistAttributeMetadata(
                schema_name=field.name,
                display_name=display_name,
                option_set=OptionSetMetadata(
                    options=[OptionMetadata(label=Label.of(o.label, lcid), value=o.value) for o in field.options],
                    is_global=False,
                ),
            )
        if field.type is FieldType.LOOKUP:
            return LookupAttributeMetadata(
                schema_name=field.name,
                display_name=display_name,
                targets=[field.target_entity],
            )
        raise UnsupportedTypeError(field.type, kind="Field")

    def create(self, table: str, field: FieldDefinition) -> Dict[str, Any]:
        """
        Issue one create-attribute request for ``field`` on ``table``.

        :raises ~dataverse_samples.core.errors.HttpError: If the service rejects the request.
        """
        attribute = self.build_attribute(field)
        _logger.debug("Field %s (%s) on %s", field.name, field.type.value, table)
        return self._service.create_attribute(table, attribute)
