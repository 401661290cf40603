"""
Core resolution properties: primitives, unions, optionality, intersections,
reference policy and cycle termination.
"""

import pytest

from kindgraph.type_server.models import UnionTypeKind
from kindgraph.type_server.resolver import resolve_type


class TestPrimitives:
    """Every primitive annotation resolves to its own kind."""

    @pytest.mark.parametrize(
        "annotation, expected_kind",
        [
            ("string", "String"),
            ("number", "Number"),
            ("boolean", "Boolean"),
            ("bigint", "BigInt"),
            ("symbol", "Symbol"),
            ("null", "Null"),
            ("undefined", "Undefined"),
            ("void", "Void"),
            ("any", "Any"),
            ("unknown", "Unknown"),
            ("never", "Never"),
        ],
    )
    def test_annotation_resolves_to_primitive_kind(self, resolve, annotation, expected_kind):
        resolved = resolve(f"let value: {annotation};", "value")

        assert resolved.kind == "Variable"
        assert resolved.name == "value"
        assert resolved.type.kind == expected_kind
        assert resolved.type.text == annotation

    def test_string_literal_keeps_value(self, resolve):
        resolved = resolve('const greeting = "hello";', "greeting")

        assert resolved.type.kind == "String"
        assert resolved.type.value == "hello"

    def test_number_literal_keeps_value(self, resolve):
        resolved = resolve("const answer = 42;", "answer")

        assert resolved.type.kind == "Number"
        assert resolved.type.value == 42

    def test_serialized_form_uses_camel_case_and_omits_empty_fields(self, resolve):
        data = resolve("let value: string;", "value").to_dict()

        assert data["kind"] == "Variable"
        assert data["type"] == {"kind": "String", "text": "string"}
        assert "description" not in data
        assert data["path"] == "test.ts"
        assert data["position"]["start"]["line"] == 1


class TestUnions:
    """Union member resolution, boolean collapse and deduplication."""

    def test_string_or_number(self, resolve):
        resolved = resolve("type Value = string | number;", "Value")

        assert resolved.kind == "TypeAlias"
        assert isinstance(resolved.type, UnionTypeKind)
        assert resolved.type.text == "string | number"
        assert [member.kind for member in resolved.type.types] == ["String", "Number"]
        assert [member.text for member in resolved.type.types] == ["string", "number"]

    def test_true_or_false_collapses_to_boolean(self, resolve):
        resolved = resolve("type Flag = true | false;", "Flag")

        assert resolved.type.kind == "Boolean"
        assert resolved.type.text == "boolean"

    def test_boolean_member_stays_single(self, resolve):
        resolved = resolve("type Value = string | boolean;", "Value")

        assert [member.kind for member in resolved.type.types] == ["String", "Boolean"]

    def test_duplicate_members_resolve_once(self, resolve):
        source = """
type Point = { x: number };
type Pair = Point | Point;
"""
        resolved = resolve(source, "Pair")

        assert resolved.type.kind == "TypeLiteral"

    def test_literal_union(self, resolve):
        resolved = resolve('type Size = "sm" | "md" | "lg";', "Size")

        assert [member.value for member in resolved.type.types] == ["sm", "md", "lg"]


class TestOptionalProperties:
    """``undefined`` moves into ``is_optional`` unless it is the whole type."""

    SOURCE = """
type Props = {
  label?: string;
  hint?: string | undefined;
  nothing: undefined;
  count: number;
};
"""

    def test_optional_property_drops_undefined(self, resolve, member):
        resolved = resolve(self.SOURCE, "Props")

        label = member(resolved.type, "label")
        assert label.kind == "PropertySignature"
        assert label.is_optional is True
        assert label.type.kind == "String"

    def test_explicit_undefined_in_optional_union_is_dropped(self, resolve, member):
        resolved = resolve(self.SOURCE, "Props")

        assert member(resolved.type, "hint").type.kind == "String"

    def test_property_typed_undefined_stays_undefined(self, resolve, member):
        resolved = resolve(self.SOURCE, "Props")

        nothing = member(resolved.type, "nothing")
        assert nothing.type.kind == "Undefined"
        assert nothing.is_optional is None

    def test_required_property_is_not_optional(self, resolve, member):
        resolved = resolve(self.SOURCE, "Props")

        assert member(resolved.type, "count").is_optional is None


class TestIntersections:
    def test_object_literals_merge_into_one_type_literal(self, resolve):
        resolved = resolve("type AB = { a: string } & { b: number };", "AB")

        assert resolved.type.kind == "TypeLiteral"
        assert [m.name for m in resolved.type.members] == ["a", "b"]
        assert [m.type.kind for m in resolved.type.members] == ["String", "Number"]

    def test_intersection_with_function_type_is_kept(self, resolve):
        resolved = resolve("type Callable = { a: string } & ((x: number) => void);", "Callable")

        assert resolved.type.kind == "IntersectionType"
        assert len(resolved.type.types) == 2


class TestReferencePolicy:
    """Local non-exported types expand; exported and dependency types stay references."""

    def test_non_exported_alias_parameter_expands(self, resolve, member):
        source = """
type Options = { verbose: boolean };
export function run(options: Options): void {}
"""
        resolved = resolve(source, "run")

        parameter = resolved.signatures[0].parameters[0]
        assert parameter.name == "options"
        assert parameter.type.kind == "TypeLiteral"
        assert member(parameter.type, "verbose").type.kind == "Boolean"

    def test_exported_alias_parameter_is_a_reference(self, resolve):
        source = """
export type Options = { verbose: boolean };
export function run(options: Options): void {}
"""
        resolved = resolve(source, "run")

        parameter_type = resolved.signatures[0].parameters[0].type
        assert parameter_type.kind == "TypeReference"
        assert parameter_type.name == "Options"
        assert parameter_type.path == "test.ts"

    def test_dependency_type_keeps_module_specifier(self, resolve, member):
        files = {"node_modules/ui/index.d.ts": "export interface Theme { color: string; }"}
        source = """
import { Theme } from "ui";
type Settings = { theme: Theme };
"""
        resolved = resolve(source, "Settings", files=files)

        theme = member(resolved.type, "theme").type
        assert theme.kind == "TypeReference"
        assert theme.name == "Theme"
        assert theme.module_specifier == "ui"

    def test_readonly_utility_marks_properties(self, resolve, member):
        resolved = resolve("type Frozen = Readonly<{ a: number }>;", "Frozen")

        a = member(resolved.type, "a")
        assert a.type.kind == "Number"
        assert a.is_readonly is True

    def test_readonly_modifier(self, resolve, member):
        resolved = resolve("type Point = { readonly x: number; y: number };", "Point")

        assert member(resolved.type, "x").is_readonly is True
        assert member(resolved.type, "y").is_readonly is None


class TestCycles:
    """Recursive types expand once and refer back to themselves shallowly."""

    def test_self_referencing_alias(self, resolve, member):
        resolved = resolve("type Node = { value: number; next: Node };", "Node")

        next_ = member(resolved.type, "next")
        assert next_.type.kind == "TypeReference"
        assert next_.type.text == "Node"
        assert next_.type.name == "Node"

    def test_self_referencing_interface_array(self, resolve, member):
        resolved = resolve("interface Tree { children: Tree[] }", "Tree")

        assert resolved.kind == "Interface"
        children = member(resolved, "children")
        assert children.type.kind == "Array"
        assert children.type.element.kind == "TypeReference"
        assert children.type.element.text == "Tree"

    def test_mutually_recursive_local_aliases(self, resolve, member):
        source = """
type Parent = { child: Child };
type Child = { parent: Parent };
"""
        resolved = resolve(source, "Parent")

        child = member(resolved.type, "child").type
        assert child.kind == "TypeLiteral"
        parent = member(child, "parent").type
        assert parent.kind == "TypeReference"
        assert parent.text == "Parent"


class TestIdempotence:
    def test_repeated_resolution_is_identical(self, locate):
        source = """
type Node = { next: Node; tags: string[] };
export function walk(node: Node, depth?: number): Node[] { return []; }
"""
        checker, declaration, type_ = locate({"test.ts": source}, "walk")

        first = resolve_type(checker, type_, declaration).to_dict()
        second = resolve_type(checker, type_, declaration).to_dict()

        assert first == second
