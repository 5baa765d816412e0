# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Dataverse sample programs.

* ``dataverse-tablecreator`` creates a table, its columns and relationships from a
  JSON definition through the Web API metadata endpoints.
* ``dataverse-quickstart`` authenticates with client credentials and calls ``WhoAmI``.
"""

from .core._auth import AuthToken, Authenticator
from .core.config import AppSettings, ConnectionString, DataverseConfig, QuickStartSettings
from .data._metadata import MetadataServiceClient
from .models.table_definition import TableDefinition, load_table_definition
from .operations.tables import TableBuilder
from .operations.whoami import ApiCaller

__version__ = "0.1.0"

__all__ = [
    "AuthToken",
    "Authenticator",
    "AppSettings",
    "ConnectionString",
    "DataverseConfig",
    "QuickStartSettings",
    "MetadataServiceClient",
    "TableDefinition",
    "load_table_definition",
    "TableBuilder",
    "ApiCaller",
    "__version__",
]
