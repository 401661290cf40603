"""Errors raised while building a kind graph."""

from typing import TYPE_CHECKING

from ..semantic.syntax import SyntaxNode
from ..semantic.types import Type

if TYPE_CHECKING:
    from ..semantic.checker import TypeChecker


def print_node(node: SyntaxNode, relative_path=None) -> str:
    """Kind, text, file and position of a node, for error messages."""
    output = f"Kind: {node.kind}\n"
    name = node.child("name")
    if name is not None:
        output += f"Name: {name.text}\n"
    output += f"Text: {node.text}\n"
    path = node.source_file.path
    output += f"File: {relative_path(path) if relative_path else path}\n"
    start_line, start_column = node.start_position
    end_line, end_column = node.end_position
    output += f"Position: {start_line}:{start_column} - {end_line}:{end_column}\n"
    return output


class ResolutionError(Exception):
    """Base class for failures while resolving a type into kinds."""


class UnresolvedTypeExpressionError(ResolutionError):
    """No handler could describe the type."""

    def __init__(self, checker: "TypeChecker", type_: Type, enclosing_node: SyntaxNode | None = None):
        self.type = type_
        self.enclosing_node = enclosing_node
        self.flags = type_.flags

        symbol = type_.alias_symbol or type_.symbol
        declaration = symbol.declarations[0] if symbol is not None and symbol.declarations else None
        relative_path = checker.project.relative_path
        self.declaration_text = print_node(declaration, relative_path) if declaration is not None else None
        self.enclosing_text = print_node(enclosing_node, relative_path) if enclosing_node is not None else None

        message = f'Could not resolve "{checker.type_to_string(type_)}" (flags: {type_.flags!r})'
        if self.declaration_text:
            message += f"\n\nSymbol Declaration\n\n{self.declaration_text}"
        if self.enclosing_text:
            message += f"\n\nEnclosing Node\n\n{self.enclosing_text}"
        super().__init__(message)


class MissingDeclarationError(ResolutionError):
    """A symbol has no declaration and nothing encloses it."""

    def __init__(self, symbol_name: str, context: str = ""):
        self.symbol_name = symbol_name
        message = f'No declaration found for "{symbol_name}"'
        if context:
            message += f": {context}"
        super().__init__(message)
