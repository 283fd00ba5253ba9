"""Tests for data/payload conversion."""

import pytest

from schemakit.config import get_settings
from schemakit.errors import NoAttributeError
from schemakit.serializers import (
    convert_data,
    data_to_payload,
    hash_to_payload,
    payload_to_data,
    payload_to_hash,
)
from schemakit.validation import Schema


@pytest.fixture
def page() -> Schema:
    return Schema("Page").attribute("page_size", int).attribute("total_count", int)


class TestConvertData:
    def test_nested_keys_rewritten(self) -> None:
        data = {"pageSize": 1, "items": [{"itemId": 2}], "meta": {"HTTPCode": 200}}
        assert convert_data(data) == {"page_size": 1, "items": [{"item_id": 2}], "meta": {"http_code": 200}}

    def test_scalars_untouched(self) -> None:
        assert convert_data(5) == 5
        assert convert_data("camelCase") == "camelCase"

    def test_disabled_by_setting(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCHEMAKIT_NORMALIZE_KEYS", "false")
        get_settings.cache_clear()
        assert convert_data({"pageSize": 1}) == {"pageSize": 1}

    def test_explicit_flag_wins(self) -> None:
        assert convert_data({"pageSize": 1}, normalize_keys=False) == {"pageSize": 1}


class TestDataToPayload:
    def test_camel_case_keys_accepted(self, page: Schema) -> None:
        payload = data_to_payload({"pageSize": 10, "totalCount": 30}, page)
        assert payload.get("page_size") == 10
        assert payload.get("total_count") == 30

    def test_unknown_key_propagates(self, page: Schema) -> None:
        with pytest.raises(NoAttributeError):
            data_to_payload({"pageNumber": 1}, page)


class TestPayloadToData:
    def test_valid_payload(self, person: Schema) -> None:
        assert payload_to_data(person.new({"name": "Al"})) == {"name": "Al", "age": None}

    def test_invalid_payload_serializes_to_none(self, person: Schema) -> None:
        assert payload_to_data(person.new()) is None

    def test_round_trip(self, resident: Schema) -> None:
        payload = resident.new({"name": "Al", "age": 3, "address": {"city": "Oslo"}})
        assert data_to_payload(payload_to_data(payload), resident) == payload


class TestDeprecatedAliases:
    def test_hash_to_payload_warns(self, person: Schema) -> None:
        with pytest.warns(DeprecationWarning, match="data_to_payload"):
            payload = hash_to_payload({"name": "Al"}, person)
        assert payload.get("name") == "Al"

    def test_payload_to_hash_warns(self, person: Schema) -> None:
        with pytest.warns(DeprecationWarning, match="payload_to_data"):
            data = payload_to_hash(person.new({"name": "Al"}))
        assert data == {"name": "Al", "age": None}
