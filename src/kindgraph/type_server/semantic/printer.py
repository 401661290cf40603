"""
Print semantic types back as TypeScript type text.

Output follows the compiler's ``typeToString`` conventions closely enough for
display in kinds and error messages: ``T[]`` for arrays, ``typeof X`` for the
static side of classes and namespaces, and ``{ a: string; b?: number; }`` for
object literals.
"""

import json
import math
from typing import TYPE_CHECKING

from .binder import SymbolFlags
from .types import (
    AnonymousType,
    ConditionalType,
    IndexedAccessType,
    IndexType,
    InterfaceType,
    LiteralType,
    MappedType,
    Signature,
    TemplateLiteralType,
    TupleElementFlags,
    TupleType,
    Type,
    TypeFlags,
    TypeParameter,
    TypeReference,
)

if TYPE_CHECKING:
    from .checker import TypeChecker

MAX_DEPTH = 6


def format_number(value: int | float) -> str:
    """Number text the way JavaScript's ``String(n)`` writes it."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


class TypePrinter:
    """Single-use printer; tracks depth to cut off recursive object types."""

    def __init__(self, checker: "TypeChecker"):
        self.checker = checker
        self.depth = 0
        self.visiting: set[int] = set()

    def type_to_string(self, type_: Type) -> str:
        if self.depth > MAX_DEPTH or type_.id in self.visiting:
            return "..."
        self.depth += 1
        self.visiting.add(type_.id)
        try:
            return self._print(type_)
        finally:
            self.depth -= 1
            self.visiting.discard(type_.id)

    def _print(self, type_: Type) -> str:
        if type_.alias_symbol is not None:
            return self._with_arguments(type_.alias_symbol.name, type_.alias_type_arguments)
        if isinstance(type_, LiteralType):
            return self._print_literal(type_)
        if type_.is_boolean():
            return "boolean"
        if type_.flags & TypeFlags.ENUM and type_.symbol is not None:
            return self.checker.get_fully_qualified_name(type_.symbol)
        if type_.is_union():
            return self._print_union(type_.types)
        if type_.is_intersection():
            return " & ".join(self._print_operand(t) for t in type_.types)
        if isinstance(type_, TypeParameter):
            return type_.name
        if isinstance(type_, IndexType):
            return f"keyof {self._print_operand(type_.target)}"
        if isinstance(type_, IndexedAccessType):
            return f"{self._print_operand(type_.object_type)}[{self.type_to_string(type_.index_type)}]"
        if isinstance(type_, ConditionalType):
            return self._print_conditional(type_)
        if isinstance(type_, TemplateLiteralType):
            parts = [type_.texts[0]]
            for span, text in zip(type_.span_types, type_.texts[1:]):
                parts.append("${" + self.type_to_string(span) + "}" + text)
            return "`" + "".join(parts) + "`"
        if isinstance(type_, TupleType):
            return self._print_tuple(type_)
        if isinstance(type_, TypeReference):
            return self._print_reference(type_)
        if isinstance(type_, InterfaceType):
            return self._with_arguments(type_.symbol.name, type_.type_parameters)
        if isinstance(type_, MappedType):
            return self._print_mapped(type_)
        if isinstance(type_, AnonymousType):
            return self._print_anonymous(type_)
        name = getattr(type_, "intrinsic_name", None)
        return name if name is not None else "unknown"

    def _print_literal(self, type_: LiteralType) -> str:
        if type_.flags & TypeFlags.ENUM_LITERAL and type_.symbol is not None:
            return self.checker.get_fully_qualified_name(type_.symbol)
        if type_.flags & TypeFlags.STRING_LITERAL:
            return json.dumps(type_.value, ensure_ascii=False)
        if type_.flags & TypeFlags.NUMBER_LITERAL:
            return format_number(type_.value)
        if type_.flags & TypeFlags.BIGINT_LITERAL:
            return f"{type_.value}n"
        return "true" if type_.value else "false"

    def _print_union(self, members: list[Type]) -> str:
        parts: list[str] = []
        has_boolean = any(m is self.checker.true_type for m in members) and any(m is self.checker.false_type for m in members)
        for member in members:
            if has_boolean and member.flags & TypeFlags.BOOLEAN_LITERAL:
                if "boolean" not in parts:
                    parts.append("boolean")
                continue
            parts.append(self._print_operand(member))
        return " | ".join(parts)

    def _print_operand(self, type_: Type) -> str:
        text = self.type_to_string(type_)
        needs_parens = (
            (type_.is_union() and not type_.is_boolean() and not type_.flags & TypeFlags.ENUM and type_.alias_symbol is None)
            or (type_.is_intersection() and type_.alias_symbol is None)
            or isinstance(type_, ConditionalType)
            or (isinstance(type_, AnonymousType) and text.startswith(("(", "<", "new ")))
        )
        return f"({text})" if needs_parens else text

    def _with_arguments(self, name: str, arguments: list[Type]) -> str:
        if not arguments:
            return name
        return f"{name}<{', '.join(self.type_to_string(a) for a in arguments)}>"

    def _print_reference(self, type_: TypeReference) -> str:
        arguments = type_.type_arguments
        if type_.is_array() and arguments:
            return f"{self._print_operand(arguments[0])}[]"
        if type_.is_readonly_array() and arguments:
            return f"readonly {self._print_operand(arguments[0])}[]"
        return self._with_arguments(self.checker.get_fully_qualified_name(type_.target.symbol), arguments)

    def _print_tuple(self, type_: TupleType) -> str:
        elements: list[str] = []
        for element, info in zip(type_.element_types, type_.element_infos):
            text = self.type_to_string(element)
            if info.flags & TupleElementFlags.REST:
                text = f"...{text}"
            if info.label is not None:
                marker = "?" if info.flags & TupleElementFlags.OPTIONAL else ""
                text = f"{info.label}{marker}: {text}" if not info.flags & TupleElementFlags.REST else f"...{info.label}: {text[3:]}"
            elif info.flags & TupleElementFlags.OPTIONAL:
                text = f"{text}?"
            elements.append(text)
        text = f"[{', '.join(elements)}]"
        return f"readonly {text}" if type_.readonly else text

    def _print_conditional(self, type_: ConditionalType) -> str:
        check = self.checker.instantiate(type_.root.check_type, type_.mapper)
        extends = self.checker.instantiate(type_.root.extends_type, type_.mapper)
        true_type, false_type = self.checker.get_conditional_branch_types(type_)
        return (
            f"{self._print_operand(check)} extends {self.type_to_string(extends)} "
            f"? {self.type_to_string(true_type)} : {self.type_to_string(false_type)}"
        )

    def _print_mapped(self, type_: MappedType) -> str:
        constraint = self.checker.get_constraint_type_from_mapped_type(type_)
        template = self.checker.get_template_type_from_mapped_type(type_)
        readonly = {"+": "+readonly ", "-": "-readonly "}.get(type_.readonly_modifier or "", "readonly " if type_.has_readonly else "")
        optional = {"+": "+?", "-": "-?"}.get(type_.optional_modifier or "", "?" if type_.has_optional else "")
        return (
            f"{{ {readonly}[{type_.type_parameter.name} in {self.type_to_string(constraint)}]{optional}: "
            f"{self.type_to_string(template)}; }}"
        )

    def _print_anonymous(self, type_: AnonymousType) -> str:
        symbol = type_.symbol
        if symbol is not None and symbol.flags & (SymbolFlags.CLASS | SymbolFlags.ENUM | SymbolFlags.VALUE_MODULE) and not symbol.name.startswith("__"):
            return f"typeof {self.checker.get_fully_qualified_name(symbol)}"
        resolved = self.checker.get_resolved_members(type_)
        if not resolved.properties and not resolved.index_infos:
            if len(resolved.call_signatures) == 1 and not resolved.construct_signatures:
                return self.signature_to_string(resolved.call_signatures[0], arrow=True)
            if len(resolved.construct_signatures) == 1 and not resolved.call_signatures:
                return "new " + self.signature_to_string(resolved.construct_signatures[0], arrow=True)
        members: list[str] = []
        for signature in resolved.call_signatures:
            members.append(self.signature_to_string(signature))
        for signature in resolved.construct_signatures:
            members.append("new " + self.signature_to_string(signature))
        for info in resolved.index_infos:
            prefix = "readonly " if info.is_readonly else ""
            members.append(
                f"{prefix}[{info.parameter_name}: {self.type_to_string(info.key_type)}]: {self.type_to_string(info.type)}"
            )
        for name, property_ in resolved.properties.items():
            prefix = "readonly " if self.checker.is_readonly_symbol(property_) else ""
            marker = "?" if property_.is_optional else ""
            property_type = self.checker.get_type_of_symbol(property_)
            if property_.is_optional:
                property_type = self.checker.remove_undefined(property_type)
            members.append(f"{prefix}{self._property_name(name)}{marker}: {self.type_to_string(property_type)}")
        if not members:
            return "{}"
        return "{ " + " ".join(f"{m};" for m in members) + " }"

    @staticmethod
    def _property_name(name: str) -> str:
        if name.isidentifier() or name.startswith("#"):
            return name
        return json.dumps(name)

    def signature_to_string(self, signature: Signature, arrow: bool = False) -> str:
        """``<T>(a: T, b?: string) => R`` or, inside object literals, ``(a: T): R``."""
        type_parameters = ""
        if signature.type_parameters:
            type_parameters = "<" + ", ".join(p.name for p in signature.type_parameters) + ">"
        parameters: list[str] = []
        if signature.this_parameter is not None:
            parameters.append(f"this: {self.type_to_string(self.checker.get_type_of_symbol(signature.this_parameter))}")
        for parameter in signature.parameters:
            parameter_type = self.checker.get_type_of_symbol(parameter)
            if parameter.is_rest:
                parameters.append(f"...{parameter.name}: {self.type_to_string(parameter_type)}")
            elif parameter.is_optional:
                parameters.append(f"{parameter.name}?: {self.type_to_string(self.checker.remove_undefined(parameter_type))}")
            else:
                parameters.append(f"{parameter.name}: {self.type_to_string(parameter_type)}")
        return_type = self.type_to_string(self.checker.get_return_type_of_signature(signature))
        separator = " => " if arrow else ": "
        return f"{type_parameters}({', '.join(parameters)}){separator}{return_type}"

