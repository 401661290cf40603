"""Tests for the semantic model: union construction, printing, lookup and modules."""

import pytest

from kindgraph.type_server.semantic import SignatureKind


@pytest.fixture
def checker_for(make_project):
    def factory(files: dict[str, str]):
        return make_project(files).get_type_checker()

    return factory


class TestUnionConstruction:
    def test_nested_unions_flatten_and_dedupe(self, checker_for):
        checker = checker_for({"test.ts": "export {};"})
        inner = checker.get_union_type([checker.string_type, checker.number_type])

        union = checker.get_union_type([inner, checker.string_type, checker.undefined_type])

        assert union.types == [checker.string_type, checker.number_type, checker.undefined_type]

    def test_single_member_is_returned_as_is(self, checker_for):
        checker = checker_for({"test.ts": "export {};"})

        assert checker.get_union_type([checker.string_type, checker.string_type]) is checker.string_type

    def test_literals_are_absorbed_by_their_primitive(self, checker_for):
        checker = checker_for({"test.ts": "export {};"})
        literal = checker.get_string_literal_type("a")

        assert checker.get_union_type([literal, checker.string_type]) is checker.string_type

    def test_true_and_false_make_boolean(self, checker_for):
        checker = checker_for({"test.ts": "export {};"})

        union = checker.get_union_type([checker.get_boolean_literal_type(True), checker.get_boolean_literal_type(False)])

        assert union is checker.boolean_type

    def test_remove_undefined(self, checker_for):
        checker = checker_for({"test.ts": "export {};"})
        optional = checker.get_union_type([checker.string_type, checker.undefined_type])

        assert checker.remove_undefined(optional) is checker.string_type


class TestTypeLookup:
    def test_tuple_alias_prints_its_elements(self, locate):
        checker, _, type_ = locate({"test.ts": "type Pair = [string, number?];"}, "Pair")

        assert checker.type_to_string(type_) == "[string, number?]"

    def test_inferred_variable_types(self, locate):
        checker, _, type_ = locate({"test.ts": "const items = [1, 2, 3];"}, "items")

        assert checker.type_to_string(type_) == "number[]"

    def test_const_literal_keeps_literal_type(self, locate):
        checker, _, type_ = locate({"test.ts": 'const mode = "dark";'}, "mode")

        assert type_.is_string_literal()
        assert type_.value == "dark"

    def test_type_at_location_of_declaration_name(self, locate):
        checker, declaration, _ = locate({"test.ts": "interface Point { x: number }"}, "Point")

        type_ = checker.get_type_at_location(declaration.child("name"))

        assert checker.type_to_string(type_) == "Point"

    def test_properties_keep_declaration_order(self, locate):
        checker, _, type_ = locate({"test.ts": "interface Point { y: number; x: number; label?: string }"}, "Point")

        properties = checker.get_properties_of_type(type_)

        assert [p.name for p in properties] == ["y", "x", "label"]
        assert properties[2].is_optional is True

    def test_call_signatures(self, locate):
        checker, _, type_ = locate({"test.ts": "function add(a: number, b: number): number { return a + b; }"}, "add")

        signatures = checker.get_signatures_of_type(type_, SignatureKind.CALL)

        assert len(signatures) == 1
        assert checker.type_to_string(checker.get_return_type_of_signature(signatures[0])) == "number"

    def test_inherited_interface_members(self, locate):
        source = """
interface Base { id: string }
interface Derived extends Base { name: string }
"""
        checker, _, type_ = locate({"test.ts": source}, "Derived")

        assert [p.name for p in checker.get_properties_of_type(type_)] == ["name", "id"]


class TestAssignability:
    def test_literal_assignable_to_primitive(self, checker_for):
        checker = checker_for({"test.ts": "export {};"})

        assert checker.is_type_assignable_to(checker.get_number_literal_type(1), checker.number_type)
        assert not checker.is_type_assignable_to(checker.string_type, checker.number_type)


class TestModules:
    def test_relative_import_resolves(self, locate):
        files = {
            "types.ts": "export interface Theme { color: string }",
            "test.ts": 'import { Theme } from "./types";\ntype Local = { theme: Theme };',
        }
        checker, _, type_ = locate(files, "Local")

        theme = checker.get_type_of_symbol(checker.get_property_of_type(type_, "theme"))

        assert checker.type_to_string(theme) == "Theme"
        assert [p.name for p in checker.get_properties_of_type(theme)] == ["color"]

    def test_package_import_resolves_from_node_modules(self, locate):
        files = {
            "node_modules/ui/index.d.ts": "export type Size = 'sm' | 'lg';",
            "test.ts": 'import { Size } from "ui";\nlet size: Size;',
        }
        checker, _, type_ = locate(files, "size")

        assert checker.type_to_string(type_) == "Size"
        assert type_.alias_symbol.declarations[0].source_file.is_in_node_modules
