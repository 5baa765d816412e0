# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Relationship metadata requests for the Dataverse Web API.

This module provides mixin functionality for creating relationships.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from ..models.metadata import (
    LookupAttributeMetadata,
    ManyToManyRelationshipMetadata,
    OneToManyRelationshipMetadata,
)


class _RelationshipOperationsMixin:
    """
    Mixin providing relationship creation.

    Depends on:
    - self.api: The API base URL
    - self._headers(): Method to get auth headers
    - self._request(): Method to make HTTP requests (raises HttpError on non-2xx)
    """

    def create_one_to_many_relationship(
        self,
        relationship: OneToManyRelationshipMetadata,
        lookup: LookupAttributeMetadata,
    ) -> Dict[str, Any]:
        """
        Create a one-to-many relationship together with its lookup attribute.

        Posts to /RelationshipDefinitions with OneToManyRelationshipMetadata.

        :return: Dictionary with relationship_id and schema names.
        :rtype: ``dict[str, Any]``

        :raises HttpError: If the Web API request fails.
        """
        url = f"{self.api}/RelationshipDefinitions"

        payload = relationship.to_dict()
        payload["Lookup"] = lookup.to_dict()

        r = self._request("post", url, headers=self._headers(), json=payload)

        return {
            "relationship_id": self._extract_id_from_header(r.headers.get("OData-EntityId")),
            "relationship_schema_name": relationship.schema_name,
            "lookup_schema_name": lookup.schema_name,
            "referenced_entity": relationship.referenced_entity,
            "referencing_entity": relationship.referencing_entity,
        }

    def create_many_to_many_relationship(self, relationship: ManyToManyRelationshipMetadata) -> Dict[str, Any]:
        """
        Create a many-to-many relationship.

        Posts to /RelationshipDefinitions with ManyToManyRelationshipMetadata.

        :raises HttpError: If the Web API request fails.
        """
        url = f"{self.api}/RelationshipDefinitions"

        r = self._request("post", url, headers=self._headers(), json=relationship.to_dict())

        return {
            "relationship_id": self._extract_id_from_header(r.headers.get("OData-EntityId")),
            "relationship_schema_name": relationship.schema_name,
            "entity1_logical_name": relationship.entity1_logical_name,
            "entity2_logical_name": relationship.entity2_logical_name,
        }

    @staticmethod
    def _extract_id_from_header(header_value: Optional[str]) -> Optional[str]:
        """
        Extract a GUID from an OData-EntityId header value.

        :return: Extracted GUID or None if not found.
        :rtype: ``str`` | ``None``
        """
        if not header_value:
            return None
        match = re.search(r"\(([0-9a-fA-F-]{36})\)", header_value)
        return match.group(1) if match else None
