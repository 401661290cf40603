"""Functions, components, generics and signature metadata."""

import pytest

from kindgraph.type_server.resolver import resolve_signature, resolve_type


class TestGenericSignatures:
    """``identity<T>`` keeps ``T`` at its declaration and substitutes it at a call site."""

    SOURCE = """
export function identity<T>(x: T): T {
  return x;
}
const result = identity(5);
"""

    def test_declaration_keeps_type_parameter(self, resolve):
        resolved = resolve(self.SOURCE, "identity")

        assert resolved.kind == "Function"
        signature = resolved.signatures[0]
        assert [parameter.name for parameter in signature.type_parameters] == ["T"]
        assert signature.parameters[0].type.kind == "TypeReference"
        assert signature.parameters[0].type.name == "T"
        assert signature.return_type.kind == "TypeReference"
        assert signature.return_type.name == "T"

    def test_call_site_substitutes_type_argument(self, make_project):
        project = make_project({"test.ts": self.SOURCE})
        checker = project.get_type_checker()
        source_file = project.get_source_file("test.ts")
        call = next(node for node in source_file.root.walk() if node.kind == "call_expression")

        signature = checker.get_resolved_signature(call)
        resolved = resolve_signature(checker, signature, call)

        assert resolved.parameters[0].type.kind == "Number"
        assert resolved.return_type.kind == "Number"

    def test_call_result_variable(self, resolve):
        resolved = resolve(self.SOURCE, "result")

        assert resolved.kind == "Variable"
        assert resolved.type.kind == "Number"

    def test_constrained_type_parameter(self, resolve):
        resolved = resolve("export function keys<T extends object>(value: T): string[] { return []; }", "keys")

        type_parameter = resolved.signatures[0].type_parameters[0]
        assert type_parameter.kind == "TypeParameter"
        assert type_parameter.constraint_type.kind == "Object"
        assert type_parameter.text == "T extends object"


class TestFunctions:
    def test_parameter_defaults_and_optionality(self, resolve):
        resolved = resolve('export function greet(name = "world", times?: number): string { return name; }', "greet")

        name, times = resolved.signatures[0].parameters
        assert name.initializer == "world"
        assert name.is_optional is True
        assert name.type.kind == "String"
        assert times.is_optional is True
        assert times.initializer is None
        assert times.type.kind == "Number"

    def test_rest_parameter(self, resolve):
        resolved = resolve("export function sum(...values: number[]): number { return 0; }", "sum")

        values = resolved.signatures[0].parameters[0]
        assert values.is_rest is True
        assert values.type.kind == "Array"

    def test_signature_text(self, resolve):
        resolved = resolve("export function add(a: number, b: number): number { return a + b; }", "add")

        assert resolved.signatures[0].text == "function add(a: number, b: number): number"

    def test_jsdoc_description_and_parameter_descriptions(self, resolve):
        source = """
/**
 * Adds two numbers.
 * @param a - The first operand
 * @returns The sum
 */
export function add(a: number, b: number): number {
  return a + b;
}
"""
        resolved = resolve(source, "add")

        assert resolved.description == "Adds two numbers."
        assert [tag.name for tag in resolved.tags] == ["param", "returns"]
        a, b = resolved.signatures[0].parameters
        assert a.description == "The first operand"
        assert b.description is None

    def test_overloads_resolve_every_signature(self, resolve):
        source = """
export function parse(value: string): number;
export function parse(value: number): string;
export function parse(value: any): any { return value; }
"""
        resolved = resolve(source, "parse")

        assert [s.parameters[0].type.kind for s in resolved.signatures] == ["String", "Number"]


class TestAsyncAndGenerators:
    def test_async_keyword(self, resolve):
        resolved = resolve('export async function load(): Promise<string> { return ""; }', "load")

        signature = resolved.signatures[0]
        assert signature.is_async is True
        assert signature.return_type.kind == "TypeReference"
        assert signature.return_type.name == "Promise"

    def test_promise_return_without_async_keyword(self, resolve):
        resolved = resolve("export function later(): Promise<number> { return Promise.resolve(1); }", "later")

        assert resolved.signatures[0].is_async is True

    def test_plain_function_is_not_async(self, resolve):
        resolved = resolve("export function now(): number { return 0; }", "now")

        assert resolved.signatures[0].is_async is None

    def test_generator(self, resolve):
        resolved = resolve("export function* count(): Generator<number> { yield 1; }", "count")

        assert resolved.signatures[0].is_generator is True


class TestComponents:
    """Capitalized functions taking nothing or one props object are components."""

    def test_function_component(self, resolve, member):
        source = """
type ButtonProps = { label: string; disabled?: boolean };
export function Button(props: ButtonProps) {
  return null;
}
"""
        resolved = resolve(source, "Button")

        assert resolved.kind == "Component"
        assert resolved.name == "Button"
        parameter = resolved.signatures[0].parameter
        assert parameter.name == "props"
        assert parameter.type.kind == "TypeLiteral"
        assert member(parameter.type, "disabled").is_optional is True

    def test_arrow_function_component(self, resolve):
        resolved = resolve("export const Card = (props: { title: string }) => null;", "Card")

        assert resolved.kind == "Component"
        assert resolved.name == "Card"

    def test_component_without_props(self, resolve):
        resolved = resolve("export function Spinner() { return null; }", "Spinner")

        assert resolved.kind == "Component"
        assert resolved.signatures[0].parameter is None

    def test_primitive_parameter_is_a_function(self, resolve):
        resolved = resolve("export function Format(value: string): string { return value; }", "Format")

        assert resolved.kind == "Function"

    def test_lowercase_name_is_a_function(self, resolve):
        resolved = resolve("export function render(props: { title: string }) { return null; }", "render")

        assert resolved.kind == "Function"

    def test_component_function_type_property(self, resolve, member):
        resolved = resolve("type Slots = { Header: (props: { title: string }) => null };", "Slots")

        assert member(resolved.type, "Header").type.kind == "ComponentType"


class TestFunctionTypes:
    def test_function_type_alias(self, resolve):
        resolved = resolve("type Handler = (event: string, count: number) => void;", "Handler")

        assert resolved.kind == "TypeAlias"
        assert resolved.type.kind == "FunctionType"
        assert [p.name for p in resolved.type.parameters] == ["event", "count"]
        assert resolved.type.return_type.kind == "Void"

    def test_function_type_property(self, resolve, member):
        resolved = resolve("type Props = { onChange: (value: number) => void };", "Props")

        on_change = member(resolved.type, "onChange")
        assert on_change.type.kind == "FunctionType"
        assert on_change.type.parameters[0].type.kind == "Number"

    def test_independent_resolutions_do_not_share_state(self, locate):
        checker, declaration, type_ = locate({"test.ts": "type Node = { next: Node };"}, "Node")

        first = resolve_type(checker, type_, declaration)
        second = resolve_type(checker, type_, declaration)

        assert first is not second
        assert first.to_dict() == second.to_dict()


def test_generator_component_is_rejected(resolve):
    with pytest.raises(ValueError, match="cannot be a generator"):
        resolve("export function* Steps() { yield 1; }", "Steps")
