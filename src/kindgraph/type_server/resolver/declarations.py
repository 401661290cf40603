"""
Locate declarations: the primary declaration of a symbol, the declaration a
host request points at, and where a declaration sits in the project.
"""

from ..models.kind_models import Location, Position
from ..semantic.binder import Symbol
from ..semantic.project import Project
from ..semantic.syntax import SyntaxNode

TYPE_LIKE_DECLARATIONS = (
    "type_alias_declaration",
    "interface_declaration",
    "enum_declaration",
    "class_declaration",
    "abstract_class_declaration",
)

BODIED_DECLARATIONS = (
    "function_declaration",
    "generator_function_declaration",
    "method_definition",
    "function_expression",
    "function",
    "arrow_function",
)

# Declarations whose written type annotation lives in a ``type`` or ``value`` field
TYPE_NODE_OWNERS = (
    "required_parameter",
    "optional_parameter",
    "public_field_definition",
    "property_signature",
    "variable_declarator",
    "type_alias_declaration",
)


def get_primary_declaration(symbol: Symbol | None) -> SyntaxNode | None:
    """
    Pick the declaration that best describes a symbol.

    Type-like declarations win, then the first function-like declaration with a
    body (the implementation rather than an overload), then the first declaration.
    """
    if symbol is None or not symbol.declarations:
        return None
    for declaration in symbol.declarations:
        if declaration.kind in TYPE_LIKE_DECLARATIONS:
            return declaration
        if declaration.kind in BODIED_DECLARATIONS and declaration.child("body") is not None:
            return declaration
    return symbol.declarations[0]


def get_type_node(declaration: SyntaxNode | None) -> SyntaxNode | None:
    """Written type of a declaration: its annotation, or the value of a type alias."""
    if declaration is None or declaration.kind not in TYPE_NODE_OWNERS:
        return None
    field_name = "value" if declaration.kind == "type_alias_declaration" else "type"
    node = declaration.child(field_name)
    while node is not None and node.kind in ("type_annotation", "parenthesized_type"):
        node = node.first_named_child
    return node


def is_dependency_file(node: SyntaxNode) -> bool:
    source_file = node.source_file
    return source_file.is_lib or source_file.is_in_node_modules


def get_declaration_location(declaration: SyntaxNode, project: Project) -> tuple[str, Location]:
    """Project-relative path and 1-based span of a declaration."""
    start_line, start_column = declaration.start_position
    end_line, end_column = declaration.end_position
    location = Location(start=Position(start_line, start_column), end=Position(end_line, end_column))
    return project.relative_path(declaration.source_file.path), location


def find_declaration_at(root: SyntaxNode, position: int, kind: str) -> SyntaxNode | None:
    """
    The declaration of ``kind`` at a 0-based byte offset: the node itself when
    it matches, otherwise its nearest ancestor of that kind.
    """
    node = root.descendant_at(position)
    if node.kind == kind:
        return node
    return node.find_ancestor(kind)
