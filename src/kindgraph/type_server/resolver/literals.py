"""
Static evaluation of initializer expressions.

Default values of parameters and properties are reported as plain JSON values
when they can be read off the syntax: literals, array and object literals,
references to ``const`` variables and simple arithmetic over those.
"""

import json
import logging
from typing import TYPE_CHECKING, Any

from ..semantic.binder import SymbolFlags
from ..semantic.syntax import SyntaxNode

if TYPE_CHECKING:
    from ..semantic.checker import TypeChecker

logger = logging.getLogger(__name__)

# Returned when an expression has no static value
UNRESOLVED = object()

MAX_DEPTH = 32

_TRANSPARENT_EXPRESSIONS = ("parenthesized_expression", "as_expression", "satisfies_expression", "non_null_expression")


def decode_string(node: SyntaxNode) -> str:
    """Value of a ``string`` or substitution-free ``template_string`` node."""
    parts: list[str] = []
    for child in node.named_children:
        if child.kind == "string_fragment":
            parts.append(child.text)
        elif child.kind == "escape_sequence":
            parts.append(_decode_escape(child.text))
    if not node.named_children and len(node.text) >= 2:
        return node.text[1:-1]
    return "".join(parts)


def _decode_escape(text: str) -> str:
    if text in ("\\'", "\\`", "\\$"):
        return text[1:]
    try:
        return json.loads(f'"{text}"')
    except ValueError:
        return text[1:]


def parse_number(text: str) -> int | float | str:
    cleaned = text.replace("_", "")
    if cleaned.endswith("n"):
        return cleaned
    lowered = cleaned.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(cleaned, 0)
    try:
        return int(cleaned)
    except ValueError:
        return float(cleaned)


class LiteralEvaluator:
    """Evaluates one initializer; ``checker`` resolves identifiers to their ``const`` values."""

    def __init__(self, checker: "TypeChecker | None" = None):
        self.checker = checker
        self.depth = 0

    def evaluate(self, node: SyntaxNode | None) -> Any:
        if node is None or self.depth > MAX_DEPTH:
            return UNRESOLVED
        self.depth += 1
        try:
            return self._evaluate(node)
        finally:
            self.depth -= 1

    def _evaluate(self, node: SyntaxNode) -> Any:
        kind = node.kind
        if kind == "null":
            return None
        if kind == "true":
            return True
        if kind == "false":
            return False
        if kind == "number":
            return parse_number(node.text)
        if kind == "string":
            return decode_string(node)
        if kind == "template_string":
            return self._evaluate_template(node)
        if kind in _TRANSPARENT_EXPRESSIONS:
            return self.evaluate(node.first_named_child)
        if kind == "array":
            return self._evaluate_array(node)
        if kind == "object":
            return self._evaluate_object(node)
        if kind == "unary_expression":
            return self._evaluate_unary(node)
        if kind == "binary_expression":
            return self._evaluate_binary(node)
        if kind == "ternary_expression":
            condition = self.evaluate(node.child("condition"))
            if isinstance(condition, bool):
                return self.evaluate(node.child("consequence") if condition else node.child("alternative"))
            return UNRESOLVED
        if kind == "identifier":
            return self._evaluate_identifier(node)
        return UNRESOLVED

    def _evaluate_template(self, node: SyntaxNode) -> Any:
        parts: list[str] = []
        for child in node.named_children:
            if child.kind == "string_fragment":
                parts.append(child.text)
            elif child.kind == "escape_sequence":
                parts.append(_decode_escape(child.text))
            elif child.kind == "template_substitution":
                value = self.evaluate(child.first_named_child)
                if value is UNRESOLVED or isinstance(value, (list, dict)):
                    return UNRESOLVED
                parts.append(_to_template_text(value))
        return "".join(parts)

    def _evaluate_array(self, node: SyntaxNode) -> Any:
        values: list[Any] = []
        for element in node.named_children:
            if element.kind == "comment":
                continue
            if element.kind == "spread_element":
                spread = self.evaluate(element.first_named_child)
                if not isinstance(spread, list):
                    return UNRESOLVED
                values.extend(spread)
                continue
            value = self.evaluate(element)
            if value is UNRESOLVED:
                return UNRESOLVED
            values.append(value)
        return values

    def _evaluate_object(self, node: SyntaxNode) -> Any:
        values: dict[str, Any] = {}
        for member in node.named_children:
            if member.kind == "pair":
                key = self._property_key(member.child("key"))
                value = self.evaluate(member.child("value"))
                if key is None or value is UNRESOLVED:
                    return UNRESOLVED
                values[key] = value
            elif member.kind == "shorthand_property_identifier":
                value = self._evaluate_identifier(member)
                if value is UNRESOLVED:
                    return UNRESOLVED
                values[member.text] = value
            elif member.kind == "spread_element":
                spread = self.evaluate(member.first_named_child)
                if not isinstance(spread, dict):
                    return UNRESOLVED
                values.update(spread)
            elif member.kind != "comment":
                return UNRESOLVED
        return values

    def _property_key(self, key: SyntaxNode | None) -> str | None:
        if key is None:
            return None
        if key.kind == "string":
            return decode_string(key)
        if key.kind == "computed_property_name":
            value = self.evaluate(key.first_named_child)
            return str(value) if isinstance(value, (str, int, float)) else None
        return key.text

    def _evaluate_unary(self, node: SyntaxNode) -> Any:
        operator = node.child("operator")
        value = self.evaluate(node.child("argument"))
        if value is UNRESOLVED or operator is None:
            return UNRESOLVED
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if operator.text == "-" and is_number:
            return -value
        if operator.text == "+" and is_number:
            return value
        if operator.text == "!" and isinstance(value, bool):
            return not value
        return UNRESOLVED

    def _evaluate_binary(self, node: SyntaxNode) -> Any:
        operator = node.child("operator")
        left = self.evaluate(node.child("left"))
        right = self.evaluate(node.child("right"))
        if operator is None or left is UNRESOLVED or right is UNRESOLVED:
            return UNRESOLVED
        op = operator.text
        if op == "??":
            return right if left is None else left
        numbers = all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in (left, right))
        if op == "+":
            if numbers:
                return left + right
            if isinstance(left, str) or isinstance(right, str):
                if all(isinstance(v, (str, int, float)) for v in (left, right)):
                    return f"{_to_template_text(left)}{_to_template_text(right)}"
            return UNRESOLVED
        if not numbers:
            return UNRESOLVED
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/" and right != 0:
            return left / right
        return UNRESOLVED

    def _evaluate_identifier(self, node: SyntaxNode) -> Any:
        if node.text == "undefined":
            return UNRESOLVED
        if self.checker is None:
            return UNRESOLVED
        symbol = self.checker.binder.resolve_name(node, node.text, SymbolFlags.VALUE)
        declaration = symbol.value_declaration if symbol is not None else None
        if declaration is None or declaration.kind != "variable_declarator":
            return UNRESOLVED
        statement = declaration.parent
        if statement is None or statement.kind != "lexical_declaration" or not statement.has_token("const"):
            return UNRESOLVED
        return self.evaluate(declaration.child("value"))


def _to_template_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_initializer_value(node: SyntaxNode | None, checker: "TypeChecker | None" = None) -> Any:
    """
    Static value of an initializer expression.

    Falls back to the expression's source text when it has no literal value,
    and returns ``None`` when there is no initializer at all.
    """
    if node is None:
        return None
    value = LiteralEvaluator(checker).evaluate(node)
    if value is UNRESOLVED:
        logger.debug("Initializer has no static value: %s", node.text[:60])
        return node.text
    return value


def get_binding_pattern_defaults(pattern: SyntaxNode | None, checker: "TypeChecker | None" = None) -> dict[str, Any] | None:
    """Defaults written inside an object destructuring pattern, keyed by property name."""
    if pattern is None or pattern.kind != "object_pattern":
        return None
    defaults: dict[str, Any] = {}
    for element in pattern.named_children:
        if element.kind == "object_assignment_pattern":
            left = element.child("left")
            if left is not None:
                defaults[left.text] = get_initializer_value(element.child("right"), checker)
        elif element.kind == "pair_pattern":
            key = element.child("key")
            value = element.child("value")
            if key is not None and value is not None and value.kind == "assignment_pattern":
                defaults[key.text] = get_initializer_value(value.child("right"), checker)
    return defaults or None
