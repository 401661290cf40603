"""Filter descriptors, predicates and their cache-key form."""

import pytest

from kindgraph.type_server.resolver import (
    SymbolMetadata,
    TypeFilterDescriptor,
    create_symbol_filter,
    default_filter,
    serialize_filter,
)

THEME_COLOR = SymbolMetadata(
    name="color",
    is_in_node_modules=True,
    file_path="/project/node_modules/ui/index.d.ts",
    owner_name="Theme",
)
THEME_SIZE = SymbolMetadata(
    name="size",
    is_in_node_modules=True,
    file_path="/project/node_modules/ui/index.d.ts",
    owner_name="Theme",
)
LOCAL_PROP = SymbolMetadata(name="label", file_path="/project/src/button.ts", owner_name="ButtonProps")


class TestTypeFilterDescriptor:
    def test_from_dict_accepts_names_and_entries(self):
        descriptor = TypeFilterDescriptor.from_dict(
            {"moduleSpecifier": "ui", "types": ["Theme", {"name": "Palette", "properties": ["primary"]}]}
        )

        assert descriptor.module_specifier == "ui"
        assert [entry.name for entry in descriptor.types] == ["Theme", "Palette"]
        assert descriptor.types[0].properties is None
        assert descriptor.types[1].properties == ["primary"]

    def test_from_dict_rejects_nameless_entries(self):
        with pytest.raises(ValueError, match="need a name"):
            TypeFilterDescriptor.from_dict({"types": [{"properties": ["a"]}]})

    def test_from_dict_rejects_non_objects(self):
        with pytest.raises(ValueError, match="must be an object"):
            TypeFilterDescriptor.from_dict(["Theme"])

    def test_to_dict_is_sorted(self):
        descriptor = TypeFilterDescriptor.from_dict(
            {"types": [{"name": "Theme", "properties": ["size", "color"]}, "Palette"]}
        )

        assert descriptor.to_dict() == {
            "types": [{"name": "Palette"}, {"name": "Theme", "properties": ["color", "size"]}]
        }

    def test_matches_listed_property(self):
        descriptor = TypeFilterDescriptor.from_dict({"types": [{"name": "Theme", "properties": ["color"]}]})

        assert descriptor.matches(THEME_COLOR) is True
        assert descriptor.matches(THEME_SIZE) is False

    def test_matches_every_property_when_unrestricted(self):
        descriptor = TypeFilterDescriptor.from_dict({"types": ["Theme"]})

        assert descriptor.matches(THEME_SIZE) is True

    def test_module_specifier_restricts_package(self):
        descriptor = TypeFilterDescriptor.from_dict({"moduleSpecifier": "other", "types": ["Theme"]})

        assert descriptor.matches(THEME_COLOR) is False


class TestCreateSymbolFilter:
    def test_default_filter_drops_private_and_dependency_members(self):
        assert default_filter(LOCAL_PROP) is True
        assert default_filter(THEME_COLOR) is False
        assert default_filter(SymbolMetadata(name="_hidden", is_private=True)) is False

    def test_none_means_default(self):
        assert create_symbol_filter(None) is default_filter

    def test_callable_is_used_as_is(self):
        def predicate(metadata):
            return metadata.name == "label"

        assert create_symbol_filter(predicate) is predicate

    def test_descriptor_keeps_local_members_and_listed_dependency_members(self):
        predicate = create_symbol_filter({"types": [{"name": "Theme", "properties": ["color"]}]})

        assert predicate(LOCAL_PROP) is True
        assert predicate(THEME_COLOR) is True
        assert predicate(THEME_SIZE) is False

    def test_any_descriptor_in_a_list_may_match(self):
        predicate = create_symbol_filter([{"types": ["Palette"]}, {"types": ["Theme"]}])

        assert predicate(THEME_SIZE) is True

    def test_private_members_never_pass(self):
        predicate = create_symbol_filter({"types": ["Theme"]})

        assert predicate(SymbolMetadata(name="_secret", is_private=True, owner_name="Theme")) is False


class TestSerializeFilter:
    def test_none(self):
        assert serialize_filter(None) == "none"

    def test_descriptor_order_does_not_matter(self):
        first = [{"types": ["Theme", "Palette"]}, {"moduleSpecifier": "ui", "types": ["Button"]}]
        second = [{"moduleSpecifier": "ui", "types": ["Button"]}, {"types": ["Palette", "Theme"]}]

        assert serialize_filter(first) == serialize_filter(second)

    def test_different_properties_differ(self):
        assert serialize_filter({"types": [{"name": "Theme", "properties": ["a"]}]}) != serialize_filter(
            {"types": [{"name": "Theme", "properties": ["b"]}]}
        )

    def test_single_descriptor_equals_one_element_list(self):
        assert serialize_filter({"types": ["Theme"]}) == serialize_filter([{"types": ["Theme"]}])
