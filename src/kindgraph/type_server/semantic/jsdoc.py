"""
JSDoc extraction for declarations.

Reads the ``/** ... */`` block immediately preceding a declaration. For
exported declarations and variable declarators the comment sits before the
enclosing statement, so the lookup climbs to that statement first.
"""

import re
from dataclasses import dataclass, field

from ..models.kind_models import JSDocTag
from .syntax import SyntaxNode

_TAG_PATTERN = re.compile(r"^@(\w+)\s*(.*)$", re.DOTALL)
_PARAM_PATTERN = re.compile(r"^(?:\{[^}]*\}\s*)?\[?([\w$.]+)(?:=[^\]]*)?\]?\s*(?:-\s*)?(.*)$", re.DOTALL)

# Statements a documentation comment attaches to instead of the inner declaration
_STATEMENT_WRAPPERS = ("export_statement", "lexical_declaration", "variable_declaration", "ambient_declaration")


@dataclass
class JSDocMetadata:
    """Description and tags of a documentation comment."""

    description: str | None = None
    tags: list[JSDocTag] = field(default_factory=list)

    def parameter_description(self, name: str) -> str | None:
        for tag in self.tags:
            if tag.name not in ("param", "arg", "argument") or not tag.text:
                continue
            match = _PARAM_PATTERN.match(tag.text)
            if match and match.group(1) == name:
                return match.group(2).strip() or None
        return None


def parse_jsdoc(comment: str) -> JSDocMetadata:
    """Split a raw ``/** */`` comment into a description and ``@tag`` entries."""
    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]

    lines = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:]
            if stripped.startswith(" "):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())

    description_lines: list[str] = []
    tags: list[JSDocTag] = []
    current: list[str] | None = None
    current_name = ""
    for line in lines:
        match = _TAG_PATTERN.match(line)
        if match:
            if current is not None:
                tags.append(_make_tag(current_name, current))
            current_name = match.group(1)
            current = [match.group(2)]
        elif current is not None:
            current.append(line)
        else:
            description_lines.append(line)
    if current is not None:
        tags.append(_make_tag(current_name, current))

    description = "\n".join(description_lines).strip()
    return JSDocMetadata(description=description or None, tags=tags)


def _make_tag(name: str, lines: list[str]) -> JSDocTag:
    text = "\n".join(lines).strip()
    return JSDocTag(name=name, text=text or None)


def _get_documented_node(node: SyntaxNode) -> SyntaxNode:
    current = node
    if current.kind == "variable_declarator" and current.parent is not None:
        current = current.parent
    while current.parent is not None and current.parent.kind in _STATEMENT_WRAPPERS:
        current = current.parent
    return current


def get_jsdoc_comment(node: SyntaxNode) -> str | None:
    """Raw text of the documentation comment attached to ``node``."""
    target = _get_documented_node(node)
    previous = target.previous_sibling
    if previous is None or previous.kind != "comment":
        return None
    text = previous.text
    return text if text.startswith("/**") else None


def get_jsdoc_metadata(node: SyntaxNode | None) -> JSDocMetadata:
    if node is None:
        return JSDocMetadata()
    comment = get_jsdoc_comment(node)
    if comment is None:
        return JSDocMetadata()
    return parse_jsdoc(comment)


def get_parameter_description(parameter: SyntaxNode, name: str | None) -> str | None:
    """Description from the owning function's ``@param`` tag."""
    if name is None:
        return None
    function = parameter.parent.parent if parameter.parent is not None else None
    if function is None:
        return None
    owner = function
    if function.kind in ("arrow_function", "function_expression", "function") and function.parent is not None:
        owner = function.parent
    return get_jsdoc_metadata(owner).parameter_description(name)
