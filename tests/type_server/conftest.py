"""Shared fixtures for type server tests: in-memory projects and declaration lookup."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from kindgraph.type_server.resolver import resolve_type
from kindgraph.type_server.semantic.project import Project

DECLARATION_KINDS = (
    "type_alias_declaration",
    "interface_declaration",
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
    "internal_module",
    "variable_declarator",
)

TYPE_ONLY_KINDS = ("type_alias_declaration", "interface_declaration")


def find_declaration(project: Project, name: str, file_name: str = "test.ts"):
    """First declaration named ``name`` in ``file_name``, in source order."""
    source_file = project.get_source_file(file_name)
    assert source_file is not None, f"{file_name} is not part of the project"
    for node in source_file.root.walk():
        if node.kind not in DECLARATION_KINDS:
            continue
        name_node = node.child("name")
        if name_node is not None and name_node.text == name:
            return node
    raise AssertionError(f"No declaration named {name} in {file_name}")


def find_node(project: Project, kind: str, file_name: str = "test.ts"):
    source_file = project.get_source_file(file_name)
    for node in source_file.root.walk():
        if node.kind == kind:
            return node
    raise AssertionError(f"No {kind} node in {file_name}")


def declaration_type(checker, declaration):
    symbol = checker.get_symbol_of_declaration(declaration)
    if declaration.kind in TYPE_ONLY_KINDS:
        return checker.get_declared_type_of_symbol(symbol)
    return checker.get_type_of_symbol(symbol)


@pytest.fixture
def make_project(tmp_path):
    """Build an in-memory project from ``{relative_path: source}``."""

    def factory(files: dict[str, str]) -> Project:
        project = Project(root_dir=str(tmp_path))
        for path, source in files.items():
            project.add_source_file(path, source)
        return project

    return factory


@pytest.fixture
def resolve(make_project):
    """Resolve the declaration ``name`` declared in ``source`` (saved as test.ts)."""

    def resolver(source: str, name: str, filter_=None, files: dict[str, str] | None = None):
        project = make_project({**(files or {}), "test.ts": source})
        checker = project.get_type_checker()
        declaration = find_declaration(project, name)
        return resolve_type(checker, declaration_type(checker, declaration), declaration, filter_)

    return resolver


def find_member(kind, name: str):
    """Member called ``name`` of a TypeLiteral or Interface kind."""
    for member in kind.members:
        if getattr(member, "name", None) == name:
            return member
    raise AssertionError(f"No member {name} in {[getattr(m, 'name', None) for m in kind.members]}")


@pytest.fixture
def member():
    return find_member


@pytest.fixture
def resolve_project(make_project):
    """Resolve a declaration in a multi-file project; returns the kind and the checker."""

    def resolver(files: dict[str, str], name: str, file_name: str = "test.ts", filter_=None):
        project = make_project(files)
        checker = project.get_type_checker()
        declaration = find_declaration(project, name, file_name)
        return resolve_type(checker, declaration_type(checker, declaration), declaration, filter_), checker

    return resolver


@pytest.fixture
def locate(make_project):
    """Checker, declaration node and declaration type of ``name`` without resolving it."""

    def locator(files: dict[str, str], name: str, file_name: str = "test.ts"):
        project = make_project(files)
        checker = project.get_type_checker()
        declaration = find_declaration(project, name, file_name)
        return checker, declaration, declaration_type(checker, declaration)

    return locator


@pytest.fixture
def syntax_node(make_project):
    """Project checker and the first node of ``kind`` in test.ts."""

    def finder(source: str, kind: str):
        project = make_project({"test.ts": source})
        return project.get_type_checker(), find_node(project, kind)

    return finder


@pytest.fixture
def initializer(make_project):
    """Checker and initializer node of ``const value = <expression>``."""

    def factory(expression: str, prelude: str = ""):
        project = make_project({"test.ts": f"{prelude}\nconst value = {expression};"})
        declaration = find_declaration(project, "value")
        return project.get_type_checker(), declaration.child("value")

    return factory
