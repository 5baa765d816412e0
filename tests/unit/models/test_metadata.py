# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for metadata entity serialization."""

from dataverse_samples.models.metadata import (
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


class TestLabel:
    def test_localized_label(self):
        assert LocalizedLabel(label="Test", language_code=1033).to_dict() == {
            "@odata.type": "Microsoft.Dynamics.CRM.LocalizedLabel",
            "Label": "Test",
            "LanguageCode": 1033,
        }

    def test_label_sets_user_localized_label_to_first(self):
        label = Label(
            localized_labels=[
                LocalizedLabel(label="English", language_code=1033),
                LocalizedLabel(label="Français", language_code=1036),
            ]
        )
        result = label.to_dict()
        assert result["@odata.type"] == "Microsoft.Dynamics.CRM.Label"
        assert len(result["LocalizedLabels"]) == 2
        assert result["UserLocalizedLabel"]["Label"] == "English"

    def test_of(self):
        assert Label.of("Project", 1036).localized_labels == [LocalizedLabel("Project", 1036)]


class TestAttributes:
    def test_string_attribute(self):
        result = StringAttributeMetadata(
            schema_name="new_Code",
            display_name=Label.of("Code"),
        ).to_dict()
        assert result["@odata.type"] == "Microsoft.Dynamics.CRM.StringAttributeMetadata"
        assert result["SchemaName"] == "new_Code"
        assert result["AttributeType"] == "String"
        assert result["AttributeTypeName"] == {"Value": "StringType"}
        assert result["MaxLength"] == 100
        assert result["RequiredLevel"]["Value"] == "None"
        assert "IsPrimaryName" not in result
        assert "Description" not in result

    def test_primary_name_flag(self):
        result = StringAttributeMetadata(
            schema_name="new_name",
            display_name=Label.of("Name"),
            description=Label.of("The primary attribute for the table."),
            required_level="ApplicationRequired",
            is_primary_name=True,
        ).to_dict()
        assert result["IsPrimaryName"] is True
        assert result["RequiredLevel"]["Value"] == "ApplicationRequired"
        assert result["Description"]["LocalizedLabels"][0]["Label"] == "The primary attribute for the table."

    def test_picklist_attribute(self):
        option_set = OptionSetMetadata(
            options=[OptionMetadata(label=Label.of("Draft"), value=100000000)]
        )
        result = PicklistAttributeMetadata(
            schema_name="new_Stage",
            display_name=Label.of("Stage"),
            option_set=option_set,
        ).to_dict()
        assert result["AttributeType"] == "Picklist"
        assert result["OptionSet"]["IsGlobal"] is False
        assert result["OptionSet"]["OptionSetType"] == "Picklist"
        assert result["OptionSet"]["Options"][0]["Value"] == 100000000
        assert result["OptionSet"]["Options"][0]["Label"]["LocalizedLabels"][0]["Label"] == "Draft"

    def test_lookup_attribute_targets_only_when_given(self):
        with_targets = LookupAttributeMetadata("new_AccountId", Label.of("Account"), targets=["account"]).to_dict()
        without = LookupAttributeMetadata("new_AccountId", Label.of("Account")).to_dict()
        assert with_targets["Targets"] == ["account"]
        assert with_targets["@odata.type"] == "Microsoft.Dynamics.CRM.LookupAttributeMetadata"
        assert "Targets" not in without


class TestEntityMetadata:
    def test_to_dict(self):
        entity = EntityMetadata(
            schema_name="new_Project",
            display_name=Label.of("Project"),
            display_collection_name=Label.of("Projects"),
            description=Label.of("Tracks projects."),
            attributes=[StringAttributeMetadata("new_name", Label.of("Name"), is_primary_name=True)],
        )
        result = entity.to_dict()
        assert result["@odata.type"] == "Microsoft.Dynamics.CRM.EntityMetadata"
        assert result["OwnershipType"] == "UserOwned"
        assert result["HasActivities"] is False
        assert result["HasNotes"] is False
        assert result["IsActivity"] is False
        assert result["Attributes"][0]["IsPrimaryName"] is True
        assert result["Description"]["UserLocalizedLabel"]["Label"] == "Tracks projects."


class TestRelationships:
    def test_cascade_defaults(self):
        assert CascadeConfiguration().to_dict() == {
            "Assign": "NoCascade",
            "Delete": "RemoveLink",
            "Merge": "NoCascade",
            "Reparent": "NoCascade",
            "Share": "NoCascade",
            "Unshare": "NoCascade",
        }

    def test_menu_configuration(self):
        result = AssociatedMenuConfiguration(label=Label.of("Contact")).to_dict()
        assert result["Behavior"] == "UseLabel"
        assert result["Group"] == "Details"
        assert result["Order"] == 10000
        assert result["Label"]["LocalizedLabels"][0]["Label"] == "Contact"

    def test_one_to_many(self):
        result = OneToManyRelationshipMetadata(
            schema_name="new_Contact_Orders",
            referenced_entity="contact",
            referencing_entity="new_order",
            referenced_attribute="contactid",
        ).to_dict()
        assert result["@odata.type"] == "Microsoft.Dynamics.CRM.OneToManyRelationshipMetadata"
        assert result["ReferencedAttribute"] == "contactid"
        assert result["CascadeConfiguration"]["Delete"] == "RemoveLink"
        assert "AssociatedMenuConfiguration" not in result

    def test_many_to_many_intersect_defaults_to_schema_name(self):
        result = ManyToManyRelationshipMetadata(
            schema_name="new_project_contact",
            entity1_logical_name="new_project",
            entity2_logical_name="contact",
        ).to_dict()
        assert result["@odata.type"] == "Microsoft.Dynamics.CRM.ManyToManyRelationshipMetadata"
        assert result["IntersectEntityName"] == "new_project_contact"
        assert "Entity1AssociatedMenuConfiguration" not in result
