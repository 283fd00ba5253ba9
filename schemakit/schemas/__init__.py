"""Schema combinators and shared descriptors."""
from .any import ANY, EMPTY, AnyPayload, AnySchema
from .any_of import UnionPayload, UnionSchema, any_of
from .array_of import CollectionPayload, CollectionSchema, array_of
from .resource import RESOURCE, resource_list_of

__all__ = [
    "ANY",
    "EMPTY",
    "AnySchema",
    "AnyPayload",
    "any_of",
    "UnionSchema",
    "UnionPayload",
    "array_of",
    "CollectionSchema",
    "CollectionPayload",
    "RESOURCE",
    "resource_list_of",
]
