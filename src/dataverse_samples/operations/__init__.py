# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Operations issued by the sample programs."""

from .fields import FieldCreator
from .relationships import RelationshipCreator
from .tables import TableBuilder, TableBuildResult
from .whoami import ApiCaller, WhoAmIResult

__all__ = [
    "FieldCreator",
    "RelationshipCreator",
    "TableBuilder",
    "TableBuildResult",
    "ApiCaller",
    "WhoAmIResult",
]
