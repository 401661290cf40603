"""Classes, interfaces, enums, namespaces and type aliases."""

import pytest


class TestClasses:
    SOURCE = """
export class Counter {
  /** Current count */
  count: number = 0;
  private secret = "hidden";
  #internal = 1;
  static instances = 0;
  readonly label: string;

  constructor(start: number, label: string) {
    this.count = start;
    this.label = label;
  }

  get value(): number {
    return this.count;
  }

  set value(next: number) {
    this.count = next;
  }

  increment(by = 1): void {
    this.count += by;
  }

  protected reset(): void {
    this.count = 0;
  }
}
"""

    @pytest.fixture
    def counter(self, resolve):
        return resolve(self.SOURCE, "Counter")

    def test_class_kind(self, counter):
        assert counter.kind == "Class"
        assert counter.name == "Counter"
        assert counter.path == "test.ts"

    def test_constructor(self, counter):
        constructor = counter.constructor
        assert constructor.text == "constructor(start: number, label: string)"
        assert [p.name for p in constructor.signatures[0].parameters] == ["start", "label"]

    def test_private_members_are_skipped(self, counter):
        names = [p.name for p in counter.properties]
        assert "secret" not in names
        assert "#internal" not in names
        assert names == ["count", "instances", "label"]

    def test_property_details(self, counter):
        count, instances, label = counter.properties
        assert count.type.kind == "Number"
        assert count.initializer == 0
        assert count.description == "Current count"
        assert instances.scope == "static"
        assert label.is_readonly is True
        assert label.type.kind == "String"

    def test_accessors(self, counter):
        getter, setter = counter.accessors
        assert getter.kind == "ClassGetAccessor"
        assert getter.name == "value"
        assert getter.return_type.kind == "Number"
        assert setter.kind == "ClassSetAccessor"
        assert setter.parameter.name == "next"

    def test_methods(self, counter):
        increment, reset = counter.methods
        assert increment.name == "increment"
        assert increment.signatures[0].parameters[0].initializer == 1
        assert reset.visibility == "protected"

    def test_extends_and_implements(self, resolve):
        source = """
export interface Disposable { dispose(): void }
class Base { id: string = ""; }
export class Resource extends Base implements Disposable {
  dispose(): void {}
}
"""
        resolved = resolve(source, "Resource")

        assert resolved.extends.kind == "TypeReference"
        assert resolved.extends.name == "Base"
        assert [reference.name for reference in resolved.implements] == ["Disposable"]

    def test_self_reference_in_member_stays_shallow(self, resolve):
        resolved = resolve("export class Link { next: Link | null = null; }", "Link")

        next_type = resolved.properties[0].type
        assert next_type.kind == "UnionType"
        assert next_type.types[0].kind == "TypeReference"
        assert next_type.types[0].text == "Link"


class TestInterfaces:
    def test_members_in_declaration_order(self, resolve):
        source = """
export interface Api {
  name: string;
  fetch(id: number): Promise<string>;
  new (input: string): Api;
  [key: string]: unknown;
}
"""
        resolved = resolve(source, "Api")

        assert resolved.kind == "Interface"
        assert [member.kind for member in resolved.members] == [
            "PropertySignature",
            "MethodSignature",
            "ConstructSignature",
            "IndexSignature",
        ]

    def test_callable_interface_is_a_function(self, resolve):
        resolved = resolve("export interface Handler { (input: string): void; name: string }", "Handler")

        assert resolved.kind == "Function"

    def test_method_signature(self, resolve):
        resolved = resolve("export interface Store { get(key: string): number; }", "Store")

        method = resolved.members[0]
        assert method.name == "get"
        assert method.parameters[0].type.kind == "String"
        assert method.return_type.kind == "Number"

    def test_index_signature(self, resolve):
        resolved = resolve("export interface Dictionary { readonly [key: string]: number }", "Dictionary")

        index = resolved.members[0]
        assert index.parameter.name == "key"
        assert index.parameter.type.kind == "String"
        assert index.type.kind == "Number"
        assert index.is_readonly is True

    def test_generic_interface(self, resolve):
        resolved = resolve("export interface Box<T = string> { value: T }", "Box")

        type_parameter = resolved.type_parameters[0]
        assert type_parameter.name == "T"
        assert type_parameter.default_type.kind == "String"
        assert resolved.members[0].type.kind == "TypeReference"

    def test_merged_declarations(self, resolve):
        source = """
export interface Settings { theme: string }
export interface Settings { size: number }
"""
        resolved = resolve(source, "Settings")

        assert [member.name for member in resolved.members] == ["theme", "size"]

    def test_jsdoc_on_members(self, resolve):
        source = """
export interface User {
  /**
   * Display name
   * @deprecated use fullName
   */
  name: string;
}
"""
        name = resolve(source, "User").members[0]

        assert name.description == "Display name"
        assert name.tags[0].name == "deprecated"
        assert name.tags[0].text == "use fullName"


class TestEnums:
    def test_member_values(self, resolve):
        resolved = resolve('export enum Color { Red, Green = 5, Blue, Name = "name" }', "Color")

        assert resolved.kind == "Enum"
        assert [member.name for member in resolved.members] == ["Red", "Green", "Blue", "Name"]
        assert [member.value for member in resolved.members] == [0, 5, 6, "name"]

    def test_enum_parameter_is_a_reference(self, resolve):
        source = """
export enum Mode { On, Off }
export function toggle(mode: Mode): void {}
"""
        parameter_type = resolve(source, "toggle").signatures[0].parameters[0].type

        assert parameter_type.kind == "TypeReference"
        assert parameter_type.name == "Mode"


class TestTypeAliases:
    def test_generic_alias(self, resolve):
        resolved = resolve("type Pair<A, B = number> = [A, B];", "Pair")

        assert [p.name for p in resolved.type_parameters] == ["A", "B"]
        assert resolved.type.kind == "Tuple"
        assert [element.type.kind for element in resolved.type.elements] == ["TypeReference", "TypeReference"]

    def test_labeled_tuple(self, resolve):
        resolved = resolve("type Range = [start: number, end?: number];", "Range")

        start, end = resolved.type.elements
        assert start.name == "start"
        assert end.is_optional is True
        assert end.text == "end?: number"

    def test_keyof(self, resolve):
        source = """
export interface Point { x: number; y: number }
type Axis = keyof Point;
"""
        resolved = resolve(source, "Axis")

        assert resolved.type.kind == "TypeOperator"
        assert resolved.type.operator == "keyof"
        assert resolved.type.type.kind == "TypeReference"

    def test_conditional(self, resolve):
        resolved = resolve("type IsString<T> = T extends string ? true : false;", "IsString")

        conditional = resolved.type
        assert conditional.kind == "ConditionalType"
        assert conditional.check_type.name == "T"
        assert conditional.extends_type.kind == "String"
        assert conditional.is_distributive is True

    @pytest.mark.parametrize(
        "check, extends",
        [("[T]", "[string]"), ("{ a: T }", "{ a: string }"), ("T[]", "string[]")],
    )
    def test_wrapped_check_type_stays_conditional(self, resolve, check, extends):
        resolved = resolve(f"type IsStr<T> = {check} extends {extends} ? 1 : 2;", "IsStr")

        conditional = resolved.type
        assert conditional.kind == "ConditionalType"
        assert conditional.is_distributive is False
        assert conditional.true_type.kind == "Number"
        assert conditional.false_type.kind == "Number"

    def test_instantiated_property_text(self, resolve):
        source = """
type W<T> = { readonly v: T; label: string };
type X = W<number>;
"""
        resolved = resolve(source, "X")

        value, label = resolved.type.members
        assert value.type.kind == "Number"
        assert value.text == "readonly v: number"
        assert label.text == "label: string"

    def test_wrapped_check_type_evaluates_once_instantiated(self, resolve):
        source = """
type IsStr<T> = [T] extends [string] ? "yes" : "no";
type Answer = IsStr<"a">;
"""
        resolved = resolve(source, "Answer")

        assert resolved.type.kind == "String"
        assert resolved.type.value == "yes"

    def test_indexed_access(self, resolve):
        source = """
export interface Point { x: number; y: string }
type X = Point["x"];
"""
        resolved = resolve(source, "X")

        assert resolved.type.kind == "IndexedAccessType"
        assert resolved.type.object_type.kind == "TypeReference"
        assert resolved.type.index_type.kind == "String"

    def test_generic_mapped_type(self, resolve):
        resolved = resolve("type Flags<T> = { [K in keyof T]: boolean };", "Flags")

        mapped = resolved.type
        assert mapped.kind == "MappedType"
        assert mapped.parameter.name == "K"
        assert mapped.type.kind == "Boolean"

    def test_documentation(self, resolve):
        source = """
/** Shape of a point */
export type Point = { x: number };
"""
        assert resolve(source, "Point").description == "Shape of a point"


class TestNamespaces:
    def test_exports_are_resolved(self, resolve):
        source = """
export namespace Shapes {
  export type Point = { x: number };
  export function area(size: number): number { return size; }
}
"""
        resolved = resolve(source, "Shapes")

        assert resolved.kind == "Namespace"
        assert sorted((kind.kind, kind.name) for kind in resolved.types) == [("Function", "area"), ("TypeAlias", "Point")]
