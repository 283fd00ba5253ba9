"""Shared pytest fixtures for schemakit tests."""

from __future__ import annotations

import pytest

from schemakit.config import get_settings
from schemakit.validation import Schema


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    """Settings are cached; each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person() -> Schema:
    return Schema("Person").attribute("name", str, required=True).attribute("age", int)


@pytest.fixture
def address() -> Schema:
    return Schema("Address").attribute("city", str, required=True).attribute("zip", str)


@pytest.fixture
def resident(person: Schema, address: Schema) -> Schema:
    """Person with a nested address."""
    return person.extend("Resident").attribute("address", address)


@pytest.fixture
def dog() -> Schema:
    return Schema("Dog").attribute("name", str, required=True).attribute("barks", bool, required=True)


@pytest.fixture
def cat() -> Schema:
    return Schema("Cat").attribute("name", str, required=True).attribute("meows", bool, required=True)


@pytest.fixture
def cow() -> Schema:
    return Schema("Cow").attribute("name", str, required=True).attribute("moos", bool, required=True)
