"""Tests for key casing normalization."""

import pytest

from schemakit.serializers import underscore


class TestUnderscore:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("pageSize", "page_size"),
            ("PageSize", "page_size"),
            ("HTTPCode", "http_code"),
            ("page-size", "page_size"),
            ("Admin::User", "admin/user"),
            ("already_snake", "already_snake"),
            ("version2Id", "version2_id"),
        ],
    )
    def test_conversions(self, key: str, expected: str) -> None:
        assert underscore(key) == expected
