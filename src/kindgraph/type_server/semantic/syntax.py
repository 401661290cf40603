"""
Syntax node wrapper used throughout the semantic model.

tree-sitter hands out a fresh ``Node`` object on every traversal, so wrappers
compare and hash by (file, byte span, node type). That lets declarations be used
as dictionary keys and lets two lookups of the same declaration agree.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from tree_sitter import Node

if TYPE_CHECKING:
    from .project import SourceFile

# Node types that only carry trivia
TRIVIA_TYPES = frozenset({"comment", "html_comment"})


class SyntaxNode:
    """A tree-sitter node bound to the source file it came from."""

    __slots__ = ("node", "source_file")

    def __init__(self, node: Node, source_file: "SourceFile"):
        self.node = node
        self.source_file = source_file

    def _wrap(self, node: Node | None) -> "SyntaxNode | None":
        return SyntaxNode(node, self.source_file) if node is not None else None

    @property
    def kind(self) -> str:
        return self.node.type

    @property
    def key(self) -> tuple[str, int, int, str]:
        return (self.source_file.path, self.node.start_byte, self.node.end_byte, self.node.type)

    @property
    def text(self) -> str:
        return self.source_file.source[self.node.start_byte : self.node.end_byte].decode("utf-8", errors="replace")

    @property
    def is_named(self) -> bool:
        return self.node.is_named

    @property
    def start_byte(self) -> int:
        return self.node.start_byte

    @property
    def end_byte(self) -> int:
        return self.node.end_byte

    @property
    def start_position(self) -> tuple[int, int]:
        """1-based (line, column) of the first character."""
        row, column = self.node.start_point
        return row + 1, column + 1

    @property
    def end_position(self) -> tuple[int, int]:
        """1-based (line, column) just past the last character."""
        row, column = self.node.end_point
        return row + 1, column + 1

    @property
    def parent(self) -> "SyntaxNode | None":
        return self._wrap(self.node.parent)

    @property
    def children(self) -> list["SyntaxNode"]:
        return [SyntaxNode(child, self.source_file) for child in self.node.children]

    @property
    def named_children(self) -> list["SyntaxNode"]:
        return [
            SyntaxNode(child, self.source_file)
            for child in self.node.named_children
            if child.type not in TRIVIA_TYPES
        ]

    @property
    def first_named_child(self) -> "SyntaxNode | None":
        named = self.named_children
        return named[0] if named else None

    @property
    def previous_sibling(self) -> "SyntaxNode | None":
        return self._wrap(self.node.prev_sibling)

    @property
    def next_sibling(self) -> "SyntaxNode | None":
        return self._wrap(self.node.next_sibling)

    def child(self, field_name: str) -> "SyntaxNode | None":
        return self._wrap(self.node.child_by_field_name(field_name))

    def child_of_kind(self, *kinds: str) -> "SyntaxNode | None":
        for child in self.node.children:
            if child.type in kinds:
                return SyntaxNode(child, self.source_file)
        return None

    def children_of_kind(self, *kinds: str) -> list["SyntaxNode"]:
        return [SyntaxNode(child, self.source_file) for child in self.node.children if child.type in kinds]

    def has_token(self, *tokens: str) -> bool:
        """Whether a direct child is one of the given tokens, e.g. ``?`` or ``readonly``."""
        return any(child.type in tokens for child in self.node.children)

    def ancestors(self) -> Iterator["SyntaxNode"]:
        node = self.node.parent
        while node is not None:
            yield SyntaxNode(node, self.source_file)
            node = node.parent

    def find_ancestor(self, *kinds: str) -> "SyntaxNode | None":
        for ancestor in self.ancestors():
            if ancestor.kind in kinds:
                return ancestor
        return None

    def walk(self) -> Iterator["SyntaxNode"]:
        """Pre-order traversal of named descendants, including this node."""
        stack = [self.node]
        while stack:
            node = stack.pop()
            if node.type in TRIVIA_TYPES:
                continue
            yield SyntaxNode(node, self.source_file)
            stack.extend(reversed(node.named_children))

    def descendant_at(self, offset: int) -> "SyntaxNode":
        """Smallest named node spanning ``offset``."""
        node = self.node.named_descendant_for_byte_range(offset, offset)
        return SyntaxNode(node, self.source_file) if node is not None else self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SyntaxNode) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        line, column = self.start_position
        return f"SyntaxNode({self.kind} @ {self.source_file.path}:{line}:{column})"


def unwrap_type_node(node: "SyntaxNode | None") -> "SyntaxNode | None":
    """Step through ``type_annotation``-style wrappers and parentheses to the type itself."""
    while node is not None and node.kind in TYPE_WRAPPER_KINDS:
        inner = node.first_named_child
        if inner is None:
            return node
        node = inner
    return node


TYPE_WRAPPER_KINDS = frozenset(
    {
        "type_annotation",
        "opting_type_annotation",
        "omitting_type_annotation",
        "adding_type_annotation",
        "parenthesized_type",
        "constraint",
        "default_type",
    }
)

# Node types that denote a type rather than a value
TYPE_NODE_KINDS = frozenset(
    {
        "predefined_type",
        "type_identifier",
        "nested_type_identifier",
        "generic_type",
        "array_type",
        "readonly_type",
        "tuple_type",
        "union_type",
        "intersection_type",
        "object_type",
        "function_type",
        "constructor_type",
        "conditional_type",
        "infer_type",
        "lookup_type",
        "index_type_query",
        "type_query",
        "template_literal_type",
        "literal_type",
        "this_type",
        "type_predicate",
        "optional_type",
        "rest_type",
    }
) | TYPE_WRAPPER_KINDS
