# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Dataverse samples.

This module contains the Web API client that issues metadata requests.
"""

from ._metadata import MetadataService, MetadataServiceClient

__all__ = ["MetadataService", "MetadataServiceClient"]
