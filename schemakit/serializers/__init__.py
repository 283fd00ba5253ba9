"""Serializers between wire formats and payloads.

Usage:
    from schemakit.serializers import from_json, to_json

    payload = from_json('{"pageSize": 10}', Page)
    payload.get("page_size")   # 10
    to_json(payload)           # '{"page_size": 10}'
"""
from .base import convert_data, data_to_payload, hash_to_payload, payload_to_data, payload_to_hash
from .casing import underscore
from .json import from_json, to_json

__all__ = [
    "convert_data",
    "data_to_payload",
    "payload_to_data",
    "hash_to_payload",
    "payload_to_hash",
    "underscore",
    "from_json",
    "to_json",
]
