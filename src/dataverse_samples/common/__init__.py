# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Common constants for the Dataverse samples.

This module contains shared constants used across the package.
"""

__all__ = []
