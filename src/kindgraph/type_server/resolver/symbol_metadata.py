"""Facts about a symbol that filters and the reference policy decide on."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..semantic.binder import Symbol
from ..semantic.syntax import SyntaxNode
from .declarations import is_dependency_file

if TYPE_CHECKING:
    from ..semantic.checker import TypeChecker

# Enclosing declarations whose own name describes the symbol being resolved
NAMED_DECLARATIONS = (
    "type_alias_declaration",
    "interface_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
    "function_declaration",
    "generator_function_declaration",
    "variable_declarator",
)

# Declarations that own members, used to name the type a property belongs to
MEMBER_OWNERS = (
    "interface_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "type_alias_declaration",
    "enum_declaration",
)


@dataclass
class SymbolMetadata:
    name: str | None = None
    is_exported: bool = False
    is_external: bool = False  # Declared in another file than the enclosing node
    is_in_node_modules: bool = False
    is_global: bool = False
    is_virtual: bool = False  # No symbol at all, e.g. an anonymous literal type
    is_private: bool = False
    file_path: str | None = None
    owner_name: str | None = None  # Name of the type declaring this member


def is_declaration_exported(checker: "TypeChecker", declaration: SyntaxNode, enclosing_node: SyntaxNode | None) -> bool:
    """Exported, unless the declaration is the enclosing node itself."""
    if enclosing_node is not None and declaration == enclosing_node:
        return False
    return checker.is_declaration_exported(declaration)


def get_owner_name(declaration: SyntaxNode) -> str | None:
    owner = declaration.find_ancestor(*MEMBER_OWNERS)
    if owner is None:
        return None
    name = owner.child("name")
    return name.text if name is not None else None


def get_symbol_metadata(
    checker: "TypeChecker", symbol: Symbol | None, enclosing_node: SyntaxNode | None = None
) -> SymbolMetadata:
    name: str | None = None
    if enclosing_node is not None and enclosing_node.kind in NAMED_DECLARATIONS:
        name_node = enclosing_node.child("name")
        if name_node is not None and name_node.kind in ("identifier", "type_identifier"):
            name = name_node.text

    if symbol is None:
        return SymbolMetadata(name=name, is_virtual=True)
    if not symbol.declarations:
        return SymbolMetadata(name=name)

    declaration = symbol.declarations[0]
    if name is None:
        name = symbol.name
    if name.startswith("__"):
        name = None

    is_exported = is_declaration_exported(checker, declaration, enclosing_node)
    is_external = False
    if enclosing_node is not None and not is_dependency_file(enclosing_node):
        is_external = enclosing_node.source_file is not declaration.source_file
    is_in_node_modules = is_dependency_file(declaration)

    return SymbolMetadata(
        name=name,
        is_exported=is_exported,
        is_external=is_external,
        is_in_node_modules=is_in_node_modules,
        is_global=is_in_node_modules and not is_exported,
        is_private=bool(name) and name.startswith(("#", "_")),
        file_path=declaration.source_file.path,
        owner_name=get_owner_name(declaration),
    )
