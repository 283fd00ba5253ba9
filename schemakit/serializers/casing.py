"""Key casing helpers for wire data."""
from __future__ import annotations

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(key: str) -> str:
    """snake_case a camelCase, PascalCase or kebab-case key.

    >>> underscore("pageSize")
    'page_size'
    >>> underscore("HTTPCode")
    'http_code'
    """
    key = key.replace("::", "/")
    key = _ACRONYM_BOUNDARY.sub(r"\1_\2", key)
    key = _CAMEL_BOUNDARY.sub(r"\1_\2", key)
    return key.replace("-", "_").lower()
