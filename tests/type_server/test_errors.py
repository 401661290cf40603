"""Resolution errors and the expansion policy hook."""

import pytest

from kindgraph.type_server.resolver import (
    MissingDeclarationError,
    ResolutionError,
    ResolutionPolicy,
    UnresolvedTypeExpressionError,
    resolve_type,
)
from kindgraph.type_server.resolver.expressions import resolve_type_expression
from kindgraph.type_server.resolver.type_resolver import create_context
from kindgraph.type_server.semantic.types import Type, TypeFlags

BOX_PACKAGE = {"node_modules/ui/index.d.ts": "export interface Box<T> { value: T }"}


class TestErrors:
    def test_unresolvable_type_reports_its_text(self, make_project):
        checker = make_project({"test.ts": "export {};"}).get_type_checker()

        with pytest.raises(UnresolvedTypeExpressionError) as exc_info:
            resolve_type_expression(Type(TypeFlags(0)), None, create_context(checker))

        assert str(exc_info.value).startswith('Could not resolve "unknown"')
        assert exc_info.value.declaration_text is None
        assert exc_info.value.enclosing_text is None

    def test_unresolvable_type_describes_enclosing_node(self, make_project):
        project = make_project({"test.ts": "type Broken = string;"})
        checker = project.get_type_checker()
        node = project.get_source_file("test.ts").root.first_named_child

        with pytest.raises(UnresolvedTypeExpressionError) as exc_info:
            resolve_type_expression(Type(TypeFlags(0)), node, create_context(checker))

        assert "Kind: type_alias_declaration" in exc_info.value.enclosing_text
        assert "Name: Broken" in exc_info.value.enclosing_text
        assert "File: test.ts" in exc_info.value.enclosing_text

    def test_missing_declaration_message(self):
        error = MissingDeclarationError("label", "pass the enclosing node")

        assert isinstance(error, ResolutionError)
        assert error.symbol_name == "label"
        assert str(error) == 'No declaration found for "label": pass the enclosing node'


class TestResolutionPolicy:
    """Dependency generics expand around local type arguments unless those are trivial."""

    def test_local_type_argument_expands_dependency_generic(self, resolve, member):
        source = """
import { Box } from "ui";
type Local = { a: number };
type Holder = { box: Box<Local> };
"""
        resolved = resolve(source, "Holder", files=BOX_PACKAGE)

        assert member(resolved.type, "box").type.kind != "TypeReference"

    def test_trivial_type_argument_keeps_reference(self, resolve, member):
        source = """
import { Box } from "ui";
type Empty = {};
type Holder = { box: Box<Empty> };
"""
        resolved = resolve(source, "Holder", files=BOX_PACKAGE)

        box = member(resolved.type, "box").type
        assert box.kind == "TypeReference"
        assert box.name == "Box"

    def test_custom_policy_overrides_triviality(self, locate, member):
        source = """
import { Box } from "ui";
type Local = { a: number };
type Holder = { box: Box<Local> };
"""
        checker, declaration, type_ = locate({**BOX_PACKAGE, "test.ts": source}, "Holder")
        policy = ResolutionPolicy(is_trivial_type=lambda checker, type_: True)

        resolved = resolve_type(checker, type_, declaration, policy=policy)

        box = member(resolved.type, "box").type
        assert box.kind == "TypeReference"
        assert box.module_specifier == "ui"

    def test_expanded_dependency_generic_keeps_sibling_members(self, resolve):
        source = """
import { Box } from "ui";
type Local = { a: number };
type Holder = { n: number; box: Box<Local> };
"""
        resolved = resolve(source, "Holder", files=BOX_PACKAGE)

        assert [m.name for m in resolved.type.members] == ["n", "box"]
        box = resolved.type.members[1].type
        assert box.kind == "TypeLiteral"
        assert [m.name for m in box.members] == ["value"]
        assert box.members[0].type.kind == "TypeLiteral"

    def test_empty_expansion_falls_back_to_reference(self, resolve, member):
        package = {"node_modules/ui/index.d.ts": "export interface Marker<T> {}"}
        source = """
import { Marker } from "ui";
type Local = { a: number };
type Holder = { n: number; tag: Marker<Local> };
"""
        resolved = resolve(source, "Holder", files=package)

        tag = member(resolved.type, "tag").type
        assert tag.kind == "TypeReference"
        assert tag.name == "Marker"


class TestCycleGuard:
    def test_guard_entries_are_released_when_resolution_raises(self, locate):
        checker, _, type_ = locate({"test.ts": "type Point = { x: number };"}, "Point")
        context = create_context(checker)

        with pytest.raises(RuntimeError):
            with context.guard(type_):
                assert context.is_resolving(type_)
                raise RuntimeError("boom")

        assert context.resolving_types == set()
        assert context.resolving_aliases == set()
        assert not context.is_resolving(type_)

    def test_nested_guard_keeps_outer_entry(self, locate):
        checker, _, type_ = locate({"test.ts": "type Point = { x: number };"}, "Point")
        context = create_context(checker)

        with context.guard(type_):
            with context.guard(type_):
                pass
            assert context.is_resolving(type_)

        assert not context.is_resolving(type_)

    def test_failed_resolution_leaves_context_clean(self, make_project):
        project = make_project({"test.ts": "type Broken = string;"})
        context = create_context(project.get_type_checker())
        outer = project.get_type_checker().string_type

        with pytest.raises(UnresolvedTypeExpressionError):
            with context.guard(outer):
                resolve_type_expression(Type(TypeFlags(0)), None, context)

        assert context.resolving_types == set()
