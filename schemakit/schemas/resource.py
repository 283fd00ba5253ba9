"""Descriptors shared by REST-style resources.

Usage:
    User = RESOURCE.extend("User").attribute("email", str, required=True)
    UserList = resource_list_of(User)

    page = UserList.new({"data": [{"id": 1, "email": "a@b.c"}], "page": 1})
"""
from __future__ import annotations

from datetime import datetime
from functools import lru_cache

from schemakit.validation.schema import Schema

from .array_of import array_of

RESOURCE = (
    Schema("Resource")
    .attribute("id", int, coerce=True)
    .attribute("created_at", datetime, coerce=True)
    .attribute("updated_at", datetime, coerce=True)
)


@lru_cache(maxsize=None)
def resource_list_of(element: Schema) -> Schema:
    """Paginated list of ``element`` resources. One schema per element type."""
    return (
        Schema(f"ResourceListOf{element.name}")
        .attribute("data", array_of(element), required=True)
        .attribute("page", int, coerce=True)
        .attribute("page_size", int, coerce=True)
        .attribute("count", int, coerce=True)
    )
