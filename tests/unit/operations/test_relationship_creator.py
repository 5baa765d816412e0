# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from dataverse_samples.models.metadata import ManyToManyRelationshipMetadata, OneToManyRelationshipMetadata
from dataverse_samples.models.table_definition import RelationshipDefinition, RelationshipType
from dataverse_samples.operations.relationships import RelationshipCreator, lookup_schema_name


def _creator(service, lines=None):
    return RelationshipCreator(service, notify=(lines.append if lines is not None else lambda _: None))


def test_lookup_schema_name():
    assert lookup_schema_name("Contact") == "new_contact_id"


def test_one_to_many(recording_service):
    lines = []
    rel = RelationshipDefinition("Contact_Orders", "new_Order", RelationshipType.ONE_TO_MANY)

    _creator(recording_service, lines).create("Contact", rel)

    name, metadata, lookup = recording_service.calls[0]
    assert name == "create_one_to_many_relationship"
    assert isinstance(metadata, OneToManyRelationshipMetadata)
    assert metadata.schema_name == "Contact_Orders"
    assert metadata.referenced_entity == "contact"
    assert metadata.referencing_entity == "new_order"
    assert metadata.referenced_attribute == "contactid"
    assert lookup.schema_name == "new_contact_id"
    assert lookup.display_name.localized_labels[0].label == "Lookup"

    payload = metadata.to_dict()
    assert payload["CascadeConfiguration"] == {
        "Assign": "NoCascade",
        "Delete": "RemoveLink",
        "Merge": "NoCascade",
        "Reparent": "NoCascade",
        "Share": "NoCascade",
        "Unshare": "NoCascade",
    }
    menu = payload["AssociatedMenuConfiguration"]
    assert menu["Behavior"] == "UseLabel"
    assert menu["Group"] == "Details"
    assert menu["Order"] == 10000
    assert menu["Label"]["LocalizedLabels"][0]["Label"] == "Contact"

    assert lines == ["Relationship 'Contact_Orders' created between 'Contact' and 'new_Order' (OneToMany)."]


def test_many_to_many(recording_service):
    lines = []
    rel = RelationshipDefinition("new_project_contact", "contact", RelationshipType.MANY_TO_MANY)

    _creator(recording_service, lines).create("new_Project", rel)

    name, metadata = recording_service.calls[0]
    assert name == "create_many_to_many_relationship"
    assert isinstance(metadata, ManyToManyRelationshipMetadata)
    payload = metadata.to_dict()
    assert payload["Entity1LogicalName"] == "new_project"
    assert payload["Entity2LogicalName"] == "contact"
    assert payload["IntersectEntityName"] == "new_project_contact"
    assert payload["Entity1AssociatedMenuConfiguration"]["Label"]["LocalizedLabels"][0]["Label"] == "contact"
    assert payload["Entity2AssociatedMenuConfiguration"]["Label"]["LocalizedLabels"][0]["Label"] == "new_Project"
    assert lines == [
        "Relationship 'new_project_contact' created between 'new_Project' and 'contact' (ManyToMany)."
    ]


def test_default_notify_prints(recording_service, capsys):
    RelationshipCreator(recording_service).create(
        "Contact", RelationshipDefinition("Contact_Orders", "new_Order", RelationshipType.ONE_TO_MANY)
    )
    assert "Relationship 'Contact_Orders' created" in capsys.readouterr().out


def test_no_notification_when_service_fails(failing_service):
    lines = []
    service = failing_service(1)
    rel = RelationshipDefinition("Contact_Orders", "new_Order", RelationshipType.ONE_TO_MANY)

    with pytest.raises(RuntimeError):
        _creator(service, lines).create("Contact", rel)

    assert lines == []
