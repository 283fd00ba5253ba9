"""Tests for union schemas."""

import pytest

from schemakit.errors import NoAttributeError
from schemakit.schemas import UnionPayload, UnionSchema, any_of
from schemakit.validation import Schema


class TestUnionSchema:
    def test_name(self, dog: Schema, cat: Schema) -> None:
        assert any_of(dog, cat).name == "AnyOfDogOrCat"

    def test_requires_schemas(self) -> None:
        with pytest.raises(ValueError):
            any_of()
        with pytest.raises(TypeError):
            any_of(str)  # type: ignore[arg-type]

    def test_extend_keeps_allowed_schemas(self, dog: Schema, cat: Schema) -> None:
        pet = any_of(dog, cat).extend("Pet")
        assert pet.allowed_schemas == (dog, cat)
        assert len(pet.validators) == 1


class TestUnionConstruction:
    def test_mapping_matches_first_valid_candidate(self, dog: Schema, cat: Schema) -> None:
        pet = any_of(dog, cat).new({"name": "Tom", "meows": True})
        assert pet.is_valid()
        assert pet.is_a(cat)
        assert not pet.is_a(dog)

    def test_declared_order_breaks_ties(self) -> None:
        first = Schema("First").attribute("name", str)
        second = Schema("Second").attribute("name", str)
        payload = any_of(first, second).new({"name": "x"})
        assert payload.is_a(first)
        assert not payload.is_a(second)

    def test_invalid_candidate_skipped(self, dog: Schema) -> None:
        loose = Schema("Loose").attribute("name", str).attribute("barks", bool)
        payload = any_of(dog, loose).new({"name": "Rex"})
        assert payload.is_a(loose)

    def test_no_match_is_invalid(self, dog: Schema, cat: Schema) -> None:
        payload = any_of(dog, cat).new({"name": "Bessie", "moos": True})
        assert payload.payload is None
        assert payload.errors == ["Payload does not match any allowed schema"]

    def test_allowed_payload_held_directly(self, dog: Schema, cat: Schema) -> None:
        rex = dog.new({"name": "Rex", "barks": True})
        payload = any_of(dog, cat).new(rex)
        assert payload.payload is rex
        assert payload.is_valid()

    def test_disallowed_payload_ignored(self, dog: Schema, cat: Schema, cow: Schema) -> None:
        payload = any_of(dog, cat).new(cow.new({"name": "Bessie", "moos": True}))
        assert payload.payload is None

    def test_union_payload_member(self, dog: Schema, cat: Schema) -> None:
        pets = any_of(dog, cat)
        assert pets.is_schema_of(pets.new({"name": "Rex", "barks": True}))


class TestUnionAccess:
    def test_get_and_set_delegate(self, dog: Schema, cat: Schema) -> None:
        pet = any_of(dog, cat).new({"name": "Rex", "barks": True})
        assert pet.get("name") == "Rex"
        pet["name"] = "Max"
        assert pet.payload.get("name") == "Max"

    def test_inner_mutation_invalidates_union(self, dog: Schema, cat: Schema) -> None:
        pet = any_of(dog, cat).new({"name": "Rex", "barks": True})
        assert pet.is_valid()
        pet.set("barks", "loudly")
        assert not pet.is_valid()

    def test_unknown_field_raises(self, dog: Schema, cat: Schema) -> None:
        pet = any_of(dog, cat).new({"name": "Rex", "barks": True})
        with pytest.raises(NoAttributeError):
            pet.get("meows")

    def test_empty_union_has_no_fields(self, dog: Schema, cat: Schema) -> None:
        with pytest.raises(NoAttributeError):
            any_of(dog, cat).new().get("name")

    def test_to_data(self, dog: Schema, cat: Schema) -> None:
        pets = any_of(dog, cat)
        assert pets.new({"name": "Rex", "barks": True}).to_data() == {"name": "Rex", "barks": True}
        assert pets.new().to_data() is None


class TestUnionImport:
    def test_foreign_payload_matching_nothing(self, dog: Schema, cat: Schema, cow: Schema) -> None:
        bessie = cow.new({"name": "Bessie", "moos": True})
        assert bessie.is_valid()

        payload = any_of(dog, cat).import_from(bessie)
        assert not payload.is_valid()
        assert not payload.is_a(dog)
        assert not payload.is_a(cat)

    def test_object_import(self, dog: Schema, cat: Schema) -> None:
        class Kitten:
            name = "Tom"
            meows = True

        payload = any_of(dog, cat).import_from(Kitten())
        assert payload.is_a(cat)
        assert payload.get("name") == "Tom"


class TestUnionAsField:
    def test_mapping_assigned_to_union_field(self, dog: Schema, cat: Schema) -> None:
        owner = Schema("Owner").attribute("pet", any_of(dog, cat), required=True)
        payload = owner.new({"pet": {"name": "Rex", "barks": True}})
        assert isinstance(payload.get("pet"), UnionPayload)
        assert payload.is_valid()
        assert payload.to_data() == {"pet": {"name": "Rex", "barks": True}}

    def test_invalid_union_field_reported(self, dog: Schema, cat: Schema) -> None:
        owner = Schema("Owner").attribute("pet", any_of(dog, cat))
        payload = owner.new({"pet": {"name": "Rex"}})
        assert payload.errors == ["pet: Payload does not match any allowed schema"]

    def test_copy(self, dog: Schema, cat: Schema) -> None:
        pet = any_of(dog, cat).new({"name": "Rex", "barks": True})
        clone = pet.copy()
        assert clone == pet
        clone.set("name", "Max")
        assert pet.get("name") == "Rex"

    def test_copy_keeps_payload_class(self, dog: Schema, cat: Schema) -> None:
        class PetPayload(UnionPayload):
            __slots__ = ()

        class PetSchema(UnionSchema):
            payload_class = PetPayload

        pet = PetSchema(allowed_schemas=(dog, cat)).new({"name": "Rex", "barks": True})
        assert isinstance(pet, PetPayload)
        assert isinstance(pet.copy(), PetPayload)

    def test_owned_payload_is_copied_into_union(self, dog: Schema, cat: Schema) -> None:
        owner = Schema("Owner").attribute("pet", dog)
        kennel = owner.new({"pet": {"name": "Rex", "barks": True}})
        pet = any_of(dog, cat).new(kennel.get("pet"))
        assert pet.payload is not kennel.get("pet")
        assert pet.payload == kennel.get("pet")
