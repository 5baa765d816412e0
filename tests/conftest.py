# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for the Dataverse samples tests.

This module provides common test fixtures, fake collaborators, and sample
documents that can be used across all test modules.
"""

import json

import pytest

from dataverse_samples.core.config import DataverseConfig


class RecordingService:
    """In-memory MetadataService that records every call in order."""

    def __init__(self, fail_on=None):
        self.calls = []
        self._fail_on = fail_on

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self._fail_on is not None and len(self.calls) == self._fail_on:
            raise RuntimeError(f"call {self._fail_on} failed")
        return {"call": name, "index": len(self.calls)}

    def create_entity(self, entity):
        return self._record("create_entity", entity)

    def create_attribute(self, table, attribute):
        return self._record("create_attribute", table, attribute)

    def create_one_to_many_relationship(self, relationship, lookup):
        return self._record("create_one_to_many_relationship", relationship, lookup)

    def create_many_to_many_relationship(self, relationship):
        return self._record("create_many_to_many_relationship", relationship)

    @property
    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def dummy_auth():
    """Mock authentication object for testing."""
    class DummyAuth:
        def __init__(self):
            self.scopes = []

        def acquire_token(self, scope):
            self.scopes.append(scope)

            class Token:
                access_token = "test_token_12345"
            return Token()
    return DummyAuth()


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return DataverseConfig(
        language_code=1033,
        http_timeout=5,
    )


@pytest.fixture
def recording_service():
    return RecordingService()


@pytest.fixture
def failing_service():
    """Factory for a RecordingService whose n-th call (1-based) raises."""
    def _make(n):
        return RecordingService(fail_on=n)
    return _make


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "https://org.example.com"


@pytest.fixture
def sample_guid():
    """Sample GUID for testing."""
    return "11111111-2222-3333-4444-555555555555"


@pytest.fixture
def table_document():
    """A table definition covering every field and relationship type."""
    return {
        "TableName": "new_Project",
        "TableDisplayName": "Project",
        "TableDisplayCollectionName": "Projects",
        "TableDescription": "Tracks projects.",
        "Fields": [
            {"FieldName": "new_Code", "FieldDisplayName": "Code", "FieldType": "String"},
            {
                "FieldName": "new_Stage",
                "FieldDisplayName": "Stage",
                "FieldType": "Picklist",
                "Options": [
                    {"Label": "Draft", "Value": 100000000},
                    {"Label": "Active", "Value": 100000001},
                ],
            },
            {
                "FieldName": "new_AccountId",
                "FieldDisplayName": "Account",
                "FieldType": "Lookup",
                "TargetEntity": "account",
            },
        ],
        "Relationships": [
            {"RelationshipName": "new_Project_Tasks", "RelatedTableName": "new_Task", "RelationshipType": "OneToMany"},
            {"RelationshipName": "new_project_contact", "RelatedTableName": "contact", "RelationshipType": "ManyToMany"},
        ],
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a temporary file and return its path as str."""
    def _write(doc, name="table.json"):
        path = tmp_path / name
        path.write_text(json.dumps(doc), encoding="utf-8")
        return str(path)
    return _write
