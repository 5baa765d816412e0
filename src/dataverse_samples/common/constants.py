# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for Dataverse Web API metadata types and sample defaults.

These constants define the OData type identifiers used in Web API payloads
for metadata operations, plus the fixed values the sample programs rely on.
"""

# OData type identifiers for metadata entities
ODATA_TYPE_LOCALIZED_LABEL = "Microsoft.Dynamics.CRM.LocalizedLabel"
ODATA_TYPE_LABEL = "Microsoft.Dynamics.CRM.Label"
ODATA_TYPE_ENTITY = "Microsoft.Dynamics.CRM.EntityMetadata"
ODATA_TYPE_STRING_ATTRIBUTE = "Microsoft.Dynamics.CRM.StringAttributeMetadata"
ODATA_TYPE_PICKLIST_ATTRIBUTE = "Microsoft.Dynamics.CRM.PicklistAttributeMetadata"
ODATA_TYPE_LOOKUP_ATTRIBUTE = "Microsoft.Dynamics.CRM.LookupAttributeMetadata"
ODATA_TYPE_OPTION_SET = "Microsoft.Dynamics.CRM.OptionSetMetadata"
ODATA_TYPE_ONE_TO_MANY_RELATIONSHIP = "Microsoft.Dynamics.CRM.OneToManyRelationshipMetadata"
ODATA_TYPE_MANY_TO_MANY_RELATIONSHIP = "Microsoft.Dynamics.CRM.ManyToManyRelationshipMetadata"

# Cascade behavior values for relationship operations
# See: https://learn.microsoft.com/en-us/power-apps/developer/data-platform/configure-entity-relationship-cascading-behavior

CASCADE_BEHAVIOR_NO_CASCADE = "NoCascade"
"""Do not apply the action to any referencing table records associated with the referenced table record."""

CASCADE_BEHAVIOR_REMOVE_LINK = "RemoveLink"
"""Remove the value of the referencing column for all referencing table records when the referenced record is deleted."""

# Associated menu behavior values
MENU_BEHAVIOR_USE_LABEL = "UseLabel"
MENU_GROUP_DETAILS = "Details"
MENU_ORDER_DEFAULT = 10000

# Web API
WEB_API_VERSION = "v9.2"
ODATA_VERSION = "4.0"
DEFAULT_AUTHORITY_HOST = "https://login.microsoftonline.com"

# Primary name attribute created with every table
PRIMARY_ATTRIBUTE_SCHEMA_NAME = "new_name"
PRIMARY_ATTRIBUTE_DISPLAY_NAME = "Name"
PRIMARY_ATTRIBUTE_DESCRIPTION = "The primary attribute for the table."
STRING_MAX_LENGTH = 100

# Lookup attribute derived for one-to-many relationships
RELATIONSHIP_LOOKUP_DISPLAY_NAME = "Lookup"
RELATIONSHIP_LOOKUP_DESCRIPTION = "Lookup attribute created for the relationship."

# WhoAmI diagnostic call uses the standard two minute timeout
WHOAMI_TIMEOUT_SECONDS = 120.0

# Environment variables read by the command-line entry points
ENV_APPSETTINGS = "DATAVERSE_APPSETTINGS"
ENV_CLIENT_SECRET = "DATAVERSE_CLIENT_SECRET"
ENV_URL = "DATAVERSE_URL"
ENV_CLIENT_ID = "DATAVERSE_CLIENT_ID"
ENV_TENANT_ID = "DATAVERSE_TENANT_ID"

DEFAULT_APPSETTINGS_PATH = "appsettings.json"
DEFAULT_CONNECTION_STRING_NAME = "default"
