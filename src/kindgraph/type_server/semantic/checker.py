"""
TypeChecker: the semantic model the kind resolver queries.

The checker turns declarations and type nodes into interned ``Type`` objects,
resolves structured members (properties, signatures, index infos) of object
types, instantiates generics through type mappers, evaluates indexed access,
``keyof``, mapped and conditional types, infers type arguments at call sites
and return types from function bodies, and prints types back as TypeScript
text. Everything is computed on demand and cached on the checker.
"""

import logging
import re
from typing import TYPE_CHECKING

from .binder import (
    CLASS_KINDS,
    FUNCTION_LIKE_KINDS,
    NAMESPACE_KINDS,
    TYPE_PARAMETER_OWNER_KINDS,
    Binder,
    Symbol,
    SymbolFlags,
    get_property_name,
    strip_quotes,
    unwrap_namespace,
)
from .printer import TypePrinter
from .relations import AssignabilityChecker, InferenceContext
from .syntax import TYPE_NODE_KINDS, SyntaxNode, unwrap_type_node
from .types import (
    AnonymousType,
    CompositeTypeMapper,
    ConditionalRoot,
    ConditionalType,
    IndexedAccessType,
    IndexInfo,
    IndexType,
    InterfaceType,
    IntersectionType,
    IntrinsicType,
    LiteralType,
    MappedType,
    ObjectFlags,
    ObjectType,
    ResolvedMembers,
    Signature,
    SignatureKind,
    TemplateLiteralType,
    TupleElementFlags,
    TupleElementInfo,
    TupleType,
    Type,
    TypeFlags,
    TypeMapper,
    TypeParameter,
    TypeReference,
    UnionType,
)

if TYPE_CHECKING:
    from .project import Project, SourceFile

logger = logging.getLogger(__name__)

INTRINSIC_KEYWORDS = {
    "any": TypeFlags.ANY,
    "unknown": TypeFlags.UNKNOWN,
    "string": TypeFlags.STRING,
    "number": TypeFlags.NUMBER,
    "bigint": TypeFlags.BIGINT,
    "symbol": TypeFlags.ES_SYMBOL,
    "void": TypeFlags.VOID,
    "undefined": TypeFlags.UNDEFINED,
    "null": TypeFlags.NULL,
    "never": TypeFlags.NEVER,
    "object": TypeFlags.NON_PRIMITIVE,
}

TYPE_DECLARATION_KINDS = frozenset(
    {
        "interface_declaration",
        "type_alias_declaration",
        "class_declaration",
        "abstract_class_declaration",
        "enum_declaration",
        "type_parameter",
    }
)

DECLARATION_KINDS = TYPE_DECLARATION_KINDS | FUNCTION_LIKE_KINDS | {
    "variable_declarator",
    "public_field_definition",
    "property_signature",
    "required_parameter",
    "optional_parameter",
    "enum_assignment",
    "internal_module",
    "module",
    "pair",
    "class",
}

# Expression-level nodes whose children never declare return statements of the outer function
_NESTED_FUNCTION_KINDS = FUNCTION_LIKE_KINDS | CLASS_KINDS

_NUMERIC_PATTERN = re.compile(r"^[+-]?(\d[\d_]*)?(\.[\d_]*)?([eE][+-]?\d+)?$")


def parse_number_literal(text: str) -> int | float | None:
    """Numeric value of a TypeScript number literal, or None when it cannot be parsed."""
    cleaned = text.replace("_", "")
    lowered = cleaned.lower()
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            return int(lowered, 0)
        if _NUMERIC_PATTERN.match(cleaned) and any(ch.isdigit() for ch in cleaned):
            value = float(cleaned)
            return int(value) if value.is_integer() and "e" not in lowered and "." not in cleaned else value
        if lowered in ("infinity", "+infinity"):
            return float("inf")
    except ValueError:
        return None
    return None


def _normalize_number(value: int | float) -> int | float:
    if isinstance(value, float) and value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


class TypeChecker:
    """Semantic queries over a bound ``Project``."""

    def __init__(self, project: "Project"):
        self.project = project
        self.binder = Binder(project)
        self.binder.bind_all()
        self.relations = AssignabilityChecker(self)

        self.any_type = IntrinsicType(TypeFlags.ANY, "any")
        self.error_type = IntrinsicType(TypeFlags.ANY, "any")
        self.unknown_type = IntrinsicType(TypeFlags.UNKNOWN, "unknown")
        self.string_type = IntrinsicType(TypeFlags.STRING, "string")
        self.number_type = IntrinsicType(TypeFlags.NUMBER, "number")
        self.bigint_type = IntrinsicType(TypeFlags.BIGINT, "bigint")
        self.es_symbol_type = IntrinsicType(TypeFlags.ES_SYMBOL, "symbol")
        self.void_type = IntrinsicType(TypeFlags.VOID, "void")
        self.undefined_type = IntrinsicType(TypeFlags.UNDEFINED, "undefined")
        self.null_type = IntrinsicType(TypeFlags.NULL, "null")
        self.never_type = IntrinsicType(TypeFlags.NEVER, "never")
        self.non_primitive_type = IntrinsicType(TypeFlags.NON_PRIMITIVE, "object")
        self.false_type = LiteralType(TypeFlags.BOOLEAN_LITERAL, False)
        self.true_type = LiteralType(TypeFlags.BOOLEAN_LITERAL, True)
        self.boolean_type = UnionType(TypeFlags.BOOLEAN | TypeFlags.UNION, [self.false_type, self.true_type])
        self._intrinsics = {
            "any": self.any_type,
            "unknown": self.unknown_type,
            "string": self.string_type,
            "number": self.number_type,
            "bigint": self.bigint_type,
            "symbol": self.es_symbol_type,
            "void": self.void_type,
            "undefined": self.undefined_type,
            "null": self.null_type,
            "never": self.never_type,
            "object": self.non_primitive_type,
            "boolean": self.boolean_type,
        }

        empty_symbol = Symbol("__type", SymbolFlags.TYPE_LITERAL)
        self.empty_object_type = AnonymousType(empty_symbol)
        self.empty_object_type.resolved = ResolvedMembers()

        self._literal_types: dict[tuple, LiteralType] = {}
        self._union_types: dict[tuple, Type] = {}
        self._intersection_types: dict[tuple, Type] = {}
        self._references: dict[tuple, TypeReference] = {}
        self._tuples: dict[tuple, TupleType] = {}
        self._index_types: dict[int, IndexType] = {}
        self._indexed_access_types: dict[tuple[int, int], IndexedAccessType] = {}
        self._template_types: dict[tuple, TemplateLiteralType] = {}
        self._instantiations: dict[tuple, Type] = {}
        self._alias_instantiations: dict[tuple, Type] = {}
        self._conditional_roots: dict[tuple, ConditionalRoot] = {}
        self._conditional_types: dict[tuple, Type] = {}
        self._node_types: dict[tuple, Type] = {}
        self._expression_types: dict[tuple, Type] = {}
        self._signatures: dict[tuple, Signature] = {}
        self._signature_instantiations: dict[tuple, Signature] = {}
        self._erased_signatures: dict[int, Signature] = {}
        self._resolved_signatures: dict[tuple, Signature | None] = {}
        self._alias_targets: dict[int, Symbol | None] = {}
        self._alias_type_parameters: dict[int, list[TypeParameter]] = {}
        self._outer_type_parameters: dict[tuple, list[TypeParameter]] = {}
        self._enum_values: dict[tuple, object] = {}
        self._global_types: dict[str, Type | None] = {}
        self._resolving_symbols: set[int] = set()
        self._resolving_aliases: set[int] = set()
        self._resolving_return_types: set[int] = set()
        self._resolving_bases: set[int] = set()

    # Modules and aliases

    def get_source_file_symbol(self, source_file: "SourceFile") -> Symbol | None:
        self.binder.bind_file(source_file)
        return source_file.symbol

    def resolve_external_module(self, specifier: str, containing_file: "SourceFile") -> Symbol | None:
        """Module symbol for an import specifier: a file, else an ambient ``declare module``."""
        source_file = self.project.resolve_module(specifier, containing_file)
        if source_file is not None:
            return self.get_source_file_symbol(source_file)
        return self.binder.ambient_modules.get(specifier)

    def get_exports_of_module(self, module_symbol: Symbol) -> dict[str, Symbol]:
        """Own exports plus everything re-exported through ``export *``."""
        exports = dict(module_symbol.exports)
        visited = {module_symbol.id}
        pending = list(module_symbol.star_exports)
        while pending:
            specifier, containing_file = pending.pop(0)
            target = self.resolve_external_module(specifier, containing_file)
            if target is None or target.id in visited:
                continue
            visited.add(target.id)
            for name, symbol in target.exports.items():
                if name != "default" and name not in exports:
                    exports[name] = symbol
            pending.extend(target.star_exports)
        return exports

    def get_export_of_module(self, module_symbol: Symbol, name: str) -> Symbol | None:
        symbol = module_symbol.exports.get(name)
        if symbol is not None:
            return symbol
        if name == "default":
            return None
        return self.get_exports_of_module(module_symbol).get(name)

    def resolve_alias(self, symbol: Symbol | None) -> Symbol | None:
        """Follow import and re-export aliases to the declaring symbol; None when unresolved."""
        if symbol is None or not symbol.flags & SymbolFlags.ALIAS:
            return symbol
        if symbol.id in self._alias_targets:
            return self._alias_targets[symbol.id]
        self._alias_targets[symbol.id] = None
        target: Symbol | None = None
        if symbol.alias_module is not None and symbol.alias_file is not None:
            module_symbol = self.resolve_external_module(symbol.alias_module, symbol.alias_file)
            if module_symbol is None:
                logger.debug("Unresolved module %r imported from %s", symbol.alias_module, symbol.alias_file.path)
            elif symbol.alias_name == "*":
                target = module_symbol
            else:
                target = self.resolve_alias(self.get_export_of_module(module_symbol, symbol.alias_name or symbol.name))
        self._alias_targets[symbol.id] = target
        return target

    def get_exports_of_symbol(self, symbol: Symbol) -> dict[str, Symbol]:
        if symbol.flags & SymbolFlags.VALUE_MODULE and symbol.declarations and symbol.declarations[0].kind == "program":
            return self.get_exports_of_module(symbol)
        if symbol.flags & SymbolFlags.VALUE_MODULE and symbol.name.startswith('"'):
            return self.get_exports_of_module(symbol)
        if symbol.flags & (SymbolFlags.CLASS | SymbolFlags.ENUM):
            self.binder.get_members(symbol)
        return symbol.exports

    # Name resolution

    def resolve_entity_name(self, node: SyntaxNode, meaning: SymbolFlags) -> Symbol | None:
        """
        Resolve an identifier or a dotted name (``A.B.C``) to its declaring symbol.

        Qualifiers are looked up as namespaces (which includes namespace imports
        and enums); the right-most name is looked up with ``meaning``.
        """
        kind = node.kind
        if kind in ("identifier", "type_identifier", "property_identifier", "this"):
            symbol = self.binder.resolve_name(node, node.text, meaning)
            return self.resolve_alias(symbol)
        if kind in ("nested_type_identifier", "nested_identifier", "member_expression"):
            parts = node.named_children
            if len(parts) < 2:
                return None
            left = self.resolve_entity_name(parts[0], SymbolFlags.NAMESPACE | SymbolFlags.VALUE)
            if left is None:
                return None
            member = self.get_exports_of_symbol(left).get(parts[-1].text)
            if member is None and left.flags & SymbolFlags.CLASS:
                member = left.exports.get(parts[-1].text)
            return self.resolve_alias(member)
        if kind == "generic_type":
            name = node.child("name")
            return self.resolve_entity_name(name, meaning) if name is not None else None
        return None

    def get_symbol_of_declaration(self, node: SyntaxNode) -> Symbol | None:
        return self.binder.get_symbol_of_declaration(node)

    def get_symbol_at_declaration(self, node: SyntaxNode) -> Symbol | None:
        """Symbol of a declaration, following import aliases."""
        return self.resolve_alias(self.binder.get_symbol_of_declaration(node))

    def get_symbol_at_location(self, node: SyntaxNode) -> Symbol | None:
        """Symbol a name refers to, or the symbol a declaration declares."""
        if node.kind in DECLARATION_KINDS:
            return self.get_symbol_at_declaration(node)
        parent = node.parent
        if parent is not None and parent.child("name") == node and parent.kind in DECLARATION_KINDS:
            return self.get_symbol_at_declaration(parent)
        if node.kind in ("type_identifier", "nested_type_identifier"):
            return self.resolve_entity_name(node, SymbolFlags.TYPE | SymbolFlags.NAMESPACE)
        if node.kind in ("identifier", "member_expression", "nested_identifier"):
            return self.resolve_entity_name(node, SymbolFlags.VALUE | SymbolFlags.NAMESPACE)
        return None

    def get_global_symbol(self, name: str, meaning: SymbolFlags) -> Symbol | None:
        symbol = self.binder.globals.get(name)
        if symbol is not None and symbol.flags & meaning:
            return symbol
        return None

    def get_global_type(self, name: str) -> Type | None:
        if name not in self._global_types:
            symbol = self.get_global_symbol(name, SymbolFlags.TYPE)
            self._global_types[name] = self.get_declared_type_of_symbol(symbol) if symbol is not None else None
        return self._global_types[name]

    def get_fully_qualified_name(self, symbol: Symbol) -> str:
        """``Namespace.Name`` for namespace members; plain names otherwise."""
        parts = [symbol.name]
        parent = symbol.parent
        while parent is not None and parent.flags & (SymbolFlags.NAMESPACE_MODULE | SymbolFlags.ENUM) and not parent.name.startswith('"'):
            parts.append(parent.name)
            parent = parent.parent
        return ".".join(reversed(parts))

    # Declared types

    def get_declared_type_of_symbol(self, symbol: Symbol | None) -> Type:
        """The type a symbol denotes in a type position."""
        symbol = self.resolve_alias(symbol)
        if symbol is None:
            return self.error_type
        if symbol.declared_type is not None:
            return symbol.declared_type
        flags = symbol.flags
        if flags & (SymbolFlags.CLASS | SymbolFlags.INTERFACE):
            return self._get_declared_type_of_class_or_interface(symbol)
        if flags & SymbolFlags.TYPE_ALIAS:
            return self._get_declared_type_of_type_alias(symbol)
        if flags & SymbolFlags.TYPE_PARAMETER:
            return self._get_declared_type_of_type_parameter(symbol)
        if flags & SymbolFlags.ENUM:
            return self._get_declared_type_of_enum(symbol)
        if flags & SymbolFlags.ENUM_MEMBER:
            return self._get_declared_type_of_enum_member(symbol)
        if flags & SymbolFlags.TYPE_LITERAL:
            return self.get_type_of_symbol(symbol)
        return self.error_type

    def _get_declared_type_of_class_or_interface(self, symbol: Symbol) -> Type:
        object_flags = ObjectFlags.CLASS if symbol.flags & SymbolFlags.CLASS else ObjectFlags.INTERFACE
        owners = [d for d in symbol.declarations if d.kind in CLASS_KINDS or d.kind == "interface_declaration"]
        type_parameters = self._get_type_parameters_of_declaration(owners[0]) if owners else []
        declared = InterfaceType(object_flags, symbol, type_parameters)
        symbol.declared_type = declared
        # Merged declarations share the type parameters of the first declaration
        for owner in owners[1:]:
            node = owner.child("type_parameters")
            if node is None:
                continue
            for index, parameter_node in enumerate(node.children_of_kind("type_parameter")):
                if index < len(type_parameters):
                    parameter_symbol = self.binder.get_symbol_of_declaration(parameter_node)
                    if parameter_symbol is not None:
                        parameter_symbol.declared_type = type_parameters[index]
        return declared

    def _get_type_parameters_of_declaration(self, node: SyntaxNode | None) -> list[TypeParameter]:
        if node is None:
            return []
        parameters_node = node.child("type_parameters")
        if parameters_node is None:
            return []
        parameters = []
        for parameter_node in parameters_node.children_of_kind("type_parameter"):
            symbol = self.binder.get_symbol_of_declaration(parameter_node)
            if symbol is not None:
                parameters.append(self.get_declared_type_of_symbol(symbol))
        return parameters

    def get_type_parameters_of_alias(self, symbol: Symbol) -> list[TypeParameter]:
        if symbol.id not in self._alias_type_parameters:
            declaration = next((d for d in symbol.declarations if d.kind == "type_alias_declaration"), None)
            self._alias_type_parameters[symbol.id] = self._get_type_parameters_of_declaration(declaration)
        return self._alias_type_parameters[symbol.id]

    def _get_declared_type_of_type_alias(self, symbol: Symbol) -> Type:
        declaration = next((d for d in symbol.declarations if d.kind == "type_alias_declaration"), None)
        value = declaration.child("value") if declaration is not None else None
        if value is None:
            return self.error_type
        if symbol.id in self._resolving_aliases:
            logger.debug("Circular type alias %s", symbol.name)
            return self.error_type
        self._resolving_aliases.add(symbol.id)
        try:
            type_parameters = self.get_type_parameters_of_alias(symbol)
            declared = self._get_type_from_type_node_worker(unwrap_type_node(value), symbol, list(type_parameters))
        finally:
            self._resolving_aliases.discard(symbol.id)
        if symbol.declared_type is None:
            symbol.declared_type = declared
        return symbol.declared_type

    def _get_declared_type_of_type_parameter(self, symbol: Symbol) -> TypeParameter:
        declaration = symbol.declarations[0] if symbol.declarations else None
        parameter = TypeParameter(symbol, declaration)
        symbol.declared_type = parameter
        return parameter

    def _get_declared_type_of_enum(self, symbol: Symbol) -> Type:
        members = self.get_exports_of_symbol(symbol)
        literals = [self.get_declared_type_of_symbol(member) for member in members.values() if member.flags & SymbolFlags.ENUM_MEMBER]
        enum_type = UnionType(TypeFlags.ENUM | TypeFlags.UNION, literals)
        enum_type.symbol = symbol
        symbol.declared_type = enum_type
        return enum_type

    def _get_declared_type_of_enum_member(self, symbol: Symbol) -> Type:
        declaration = symbol.declarations[0] if symbol.declarations else None
        value = self.get_enum_member_value(declaration) if declaration is not None else None
        flags = TypeFlags.ENUM_LITERAL | (TypeFlags.STRING_LITERAL if isinstance(value, str) else TypeFlags.NUMBER_LITERAL)
        literal = LiteralType(flags, value, symbol)
        symbol.declared_type = literal
        return literal

    def get_enum_member_value(self, node: SyntaxNode) -> str | int | float | None:
        """Constant value of an enum member; auto-incremented members follow the previous numeric value."""
        if node.key in self._enum_values:
            return self._enum_values[node.key]
        body = node.parent
        if body is None:
            return None
        previous: object = -1
        known: dict[str, object] = {}
        for member in body.named_children:
            if member.kind == "enum_assignment":
                name = get_property_name(member.child("name"))
                initializer = member.child("value")
                value = self._evaluate_constant(initializer, known) if initializer is not None else None
            elif member.kind in ("property_identifier", "string", "identifier"):
                name = get_property_name(member)
                value = previous + 1 if isinstance(previous, (int, float)) and not isinstance(previous, bool) else None
            else:
                continue
            if isinstance(value, (int, float)):
                value = _normalize_number(value)
            self._enum_values[member.key] = value
            if name is not None:
                known[name] = value
            previous = value
        return self._enum_values.get(node.key)

    def _evaluate_constant(self, node: SyntaxNode, known: dict[str, object]) -> object:
        kind = node.kind
        if kind == "number":
            return parse_number_literal(node.text)
        if kind == "string":
            return strip_quotes(node.text)
        if kind == "template_string":
            if node.child_of_kind("template_substitution") is None:
                return node.text[1:-1]
            return None
        if kind == "parenthesized_expression":
            inner = node.first_named_child
            return self._evaluate_constant(inner, known) if inner is not None else None
        if kind == "identifier":
            return known.get(node.text)
        if kind == "member_expression":
            property_node = node.child("property")
            return known.get(property_node.text) if property_node is not None else None
        if kind == "unary_expression":
            operand = node.child("argument")
            operator = node.child("operator")
            value = self._evaluate_constant(operand, known) if operand is not None else None
            if not isinstance(value, (int, float)):
                return None
            op = operator.text if operator is not None else node.text[0]
            if op == "-":
                return -value
            if op == "+":
                return value
            if op == "~" and isinstance(value, int):
                return ~value
            return None
        if kind == "binary_expression":
            left_node = node.child("left")
            right_node = node.child("right")
            operator = node.child("operator")
            if left_node is None or right_node is None or operator is None:
                return None
            left = self._evaluate_constant(left_node, known)
            right = self._evaluate_constant(right_node, known)
            return self._fold_binary(operator.text, left, right)
        return None

    @staticmethod
    def _fold_binary(op: str, left: object, right: object) -> object:
        if op == "+" and (isinstance(left, str) or isinstance(right, str)):
            if left is None or right is None:
                return None
            return f"{left}{right}"
        if not isinstance(left, (int, float)) or not isinstance(right, (int, float)):
            return None
        try:
            if op == "+":
                return left + right
            if op == "-":
                return left - right
            if op == "*":
                return left * right
            if op == "/":
                return left / right
            if op == "%":
                return left % right
            if op == "**":
                return left**right
            if op in ("<<", ">>", "|", "&", "^"):
                a, b = int(left), int(right)
                return {"<<": a << b, ">>": a >> b, "|": a | b, "&": a & b, "^": a ^ b}[op]
        except (ZeroDivisionError, OverflowError):
            return None
        return None

    # Literal, union and intersection construction

    def get_string_literal_type(self, value: str) -> LiteralType:
        return self._get_literal_type(TypeFlags.STRING_LITERAL, value)

    def get_number_literal_type(self, value: int | float) -> LiteralType:
        return self._get_literal_type(TypeFlags.NUMBER_LITERAL, _normalize_number(value))

    def get_bigint_literal_type(self, text: str) -> LiteralType:
        return self._get_literal_type(TypeFlags.BIGINT_LITERAL, text)

    def get_boolean_literal_type(self, value: bool) -> LiteralType:
        return self.true_type if value else self.false_type

    def _get_literal_type(self, flags: TypeFlags, value) -> LiteralType:
        key = (int(flags), type(value).__name__, value)
        literal = self._literal_types.get(key)
        if literal is None:
            literal = LiteralType(flags, value)
            self._literal_types[key] = literal
        return literal

    def get_union_type(
        self,
        types: list[Type],
        alias_symbol: Symbol | None = None,
        alias_type_arguments: list[Type] | None = None,
    ) -> Type:
        """Flattened, deduplicated union; literals are absorbed by their primitive base type."""
        members: list[Type] = []
        seen: set[int] = set()

        def add(member: Type) -> None:
            if member.is_union():
                for inner in member.types:
                    add(inner)
                return
            if member.is_never() or member.id in seen:
                return
            seen.add(member.id)
            members.append(member)

        for type_ in types:
            add(type_)
        if any(member.is_any() for member in members):
            return next(member for member in members if member.is_any())
        if any(member.is_unknown() for member in members):
            return self.unknown_type
        if not members:
            return self.never_type
        present = TypeFlags(0)
        for member in members:
            present |= member.flags
        if present & (TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.BIGINT):
            members = [m for m in members if not self._is_absorbed_literal(m, present)]
        if len(members) == 1:
            return members[0]
        ids = tuple(sorted(member.id for member in members))
        if ids == tuple(sorted((self.false_type.id, self.true_type.id))) and alias_symbol is None:
            return self.boolean_type
        key = (ids, alias_symbol.id if alias_symbol is not None else 0, tuple(t.id for t in alias_type_arguments or []))
        union = self._union_types.get(key)
        if union is None:
            union = UnionType(TypeFlags.UNION, members)
            union.alias_symbol = alias_symbol
            union.alias_type_arguments = list(alias_type_arguments or [])
            self._union_types[key] = union
        return union

    @staticmethod
    def _is_absorbed_literal(member: Type, present: TypeFlags) -> bool:
        if member.is_enum_literal():
            return False
        if member.is_string_literal() or member.is_template_literal():
            return bool(present & TypeFlags.STRING)
        if member.is_number_literal():
            return bool(present & TypeFlags.NUMBER)
        if member.is_bigint_literal():
            return bool(present & TypeFlags.BIGINT)
        return False

    def get_intersection_type(
        self,
        types: list[Type],
        alias_symbol: Symbol | None = None,
        alias_type_arguments: list[Type] | None = None,
    ) -> Type:
        members: list[Type] = []
        seen: set[int] = set()

        def add(member: Type) -> None:
            if member.is_intersection():
                for inner in member.types:
                    add(inner)
                return
            if member.is_unknown() or member.id in seen:
                return
            seen.add(member.id)
            members.append(member)

        for type_ in types:
            add(type_)
        if any(member.is_never() for member in members):
            return self.never_type
        if any(member.is_any() for member in members):
            return self.any_type
        if not members:
            return self.unknown_type
        if self._has_disjoint_primitives(members):
            return self.never_type
        if any(member.is_union() and not member.is_enum_literal() for member in members):
            # Distribute over union members
            index = next(i for i, member in enumerate(members) if member.is_union())
            union_members = members[index].types
            if len(union_members) <= 64:
                return self.get_union_type(
                    [self.get_intersection_type(members[:index] + [m] + members[index + 1 :]) for m in union_members],
                    alias_symbol,
                    alias_type_arguments,
                )
        if len(members) == 1:
            return members[0]
        key = (tuple(m.id for m in members), alias_symbol.id if alias_symbol is not None else 0, tuple(t.id for t in alias_type_arguments or []))
        intersection = self._intersection_types.get(key)
        if intersection is None:
            intersection = IntersectionType(TypeFlags.INTERSECTION, members)
            intersection.alias_symbol = alias_symbol
            intersection.alias_type_arguments = list(alias_type_arguments or [])
            self._intersection_types[key] = intersection
        return intersection

    @staticmethod
    def _has_disjoint_primitives(members: list[Type]) -> bool:
        categories = set()
        literals: dict[str, object] = {}
        for member in members:
            if member.flags & TypeFlags.STRING_LIKE:
                category = "string"
            elif member.flags & (TypeFlags.NUMBER_LIKE | TypeFlags.ENUM_LITERAL):
                category = "number"
            elif member.flags & (TypeFlags.BIGINT | TypeFlags.BIGINT_LITERAL):
                category = "bigint"
            elif member.flags & TypeFlags.BOOLEAN_LITERAL:
                category = "boolean"
            elif member.is_es_symbol():
                category = "symbol"
            elif member.is_null():
                category = "null"
            elif member.flags & (TypeFlags.UNDEFINED | TypeFlags.VOID):
                category = "undefined"
            else:
                continue
            categories.add(category)
            if member.is_literal():
                if category in literals and literals[category] != member.value:
                    return True
                literals[category] = member.value
        if len(categories) > 1:
            return True
        if categories & {"null", "undefined"} and any(m.is_object() for m in members):
            return True
        return False

    # Object type construction

    def create_type_reference(self, target: InterfaceType, type_arguments: list[Type]) -> Type:
        if not target.type_parameters:
            return target
        key = (target.id, tuple(t.id for t in type_arguments))
        reference = self._references.get(key)
        if reference is None:
            reference = TypeReference(target, list(type_arguments))
            self._references[key] = reference
        return reference

    def _create_deferred_reference(self, target: InterfaceType, node: SyntaxNode | None, resolve) -> TypeReference:
        reference = TypeReference(target, None, node)

        def resolve_arguments(ref: TypeReference) -> list[Type]:
            arguments = resolve(ref)
            # Later instantiations with the same arguments share this reference
            self._references.setdefault((target.id, tuple(t.id for t in arguments)), ref)
            return arguments

        reference.resolve_arguments = resolve_arguments
        return reference

    def get_global_array_target(self, readonly: bool = False) -> InterfaceType | None:
        target = self.get_global_type("ReadonlyArray" if readonly else "Array")
        return target if isinstance(target, InterfaceType) else None

    def create_array_type(self, element_type: Type, readonly: bool = False) -> Type:
        target = self.get_global_array_target(readonly)
        if target is None:
            return self.any_type
        return self.create_type_reference(target, [element_type])

    def create_promise_type(self, value_type: Type) -> Type:
        target = self.get_global_type("Promise")
        if not isinstance(target, InterfaceType):
            return self.any_type
        return self.create_type_reference(target, [value_type])

    def create_tuple_type(
        self,
        element_types: list[Type],
        element_infos: list[TupleElementInfo] | None = None,
        readonly: bool = False,
        labels: list[str] | None = None,
    ) -> TupleType:
        if element_infos is None:
            element_infos = [TupleElementInfo(label=labels[i] if labels else None) for i in range(len(element_types))]
        key = (
            tuple(t.id for t in element_types),
            tuple((int(info.flags), info.label) for info in element_infos),
            readonly,
        )
        tuple_type = self._tuples.get(key)
        if tuple_type is None:
            tuple_type = TupleType(list(element_types), element_infos, readonly)
            self._tuples[key] = tuple_type
        return tuple_type

    def get_template_literal_type(self, texts: list[str], span_types: list[Type]) -> Type:
        """Fold literal spans into the texts; all-literal templates become string literals."""
        if any(span.is_never() for span in span_types):
            return self.never_type
        for index, span in enumerate(span_types):
            if span.is_union():
                return self.get_union_type(
                    [
                        self.get_template_literal_type(texts, span_types[:index] + [member] + span_types[index + 1 :])
                        for member in span.types
                    ]
                )
        new_texts = [texts[0]]
        new_spans: list[Type] = []
        for index, span in enumerate(span_types):
            if span.is_literal() or span.is_enum_literal():
                value = span.value
                text = ("true" if value else "false") if isinstance(value, bool) else str(value)
                if span.is_bigint_literal():
                    text = str(value)
                new_texts[-1] += text + texts[index + 1]
            elif span.is_any() or span.is_string() or span.is_number() or span.is_bigint() or span.flags & TypeFlags.INSTANTIABLE or span.is_template_literal():
                new_spans.append(span)
                new_texts.append(texts[index + 1])
            else:
                return self.string_type
        if not new_spans:
            return self.get_string_literal_type(new_texts[0])
        if len(new_spans) == 1 and new_texts == ["", ""] and new_spans[0].is_string():
            return self.string_type
        key = (tuple(new_texts), tuple(s.id for s in new_spans))
        template = self._template_types.get(key)
        if template is None:
            template = TemplateLiteralType(new_texts, new_spans)
            self._template_types[key] = template
        return template

    # Types from type nodes

    def get_type_from_type_node(self, node: SyntaxNode | None) -> Type:
        """Type denoted by a type node; alias values map to the alias's declared type."""
        node = unwrap_type_node(node)
        if node is None:
            return self.error_type
        alias_declaration = self._get_alias_declaration_of_value(node)
        if alias_declaration is not None:
            symbol = self.binder.get_symbol_of_declaration(alias_declaration)
            if symbol is not None:
                return self.get_declared_type_of_symbol(symbol)
        return self._get_type_from_type_node_worker(node)

    @staticmethod
    def _get_alias_declaration_of_value(node: SyntaxNode) -> SyntaxNode | None:
        current = node
        parent = current.parent
        while parent is not None and parent.kind == "parenthesized_type":
            current = parent
            parent = current.parent
        if parent is not None and parent.kind == "type_alias_declaration" and parent.child("value") == current:
            return parent
        return None

    def _get_type_from_type_node_worker(
        self,
        node: SyntaxNode,
        alias_symbol: Symbol | None = None,
        alias_type_arguments: list[Type] | None = None,
    ) -> Type:
        node = unwrap_type_node(node)
        cached = self._node_types.get(node.key)
        if cached is not None:
            return cached
        type_ = self._compute_type_from_type_node(node, alias_symbol, alias_type_arguments)
        self._node_types[node.key] = type_
        return type_

    def _compute_type_from_type_node(
        self,
        node: SyntaxNode,
        alias_symbol: Symbol | None,
        alias_type_arguments: list[Type] | None,
    ) -> Type:
        kind = node.kind
        if kind == "predefined_type":
            text = node.text
            if text.startswith("unique"):
                return self.es_symbol_type
            return self._intrinsics.get(text, self.error_type)
        if kind == "literal_type":
            return self._get_type_from_literal_type_node(node)
        if kind in ("type_identifier", "nested_type_identifier", "identifier"):
            return self._get_type_from_type_reference(node, node, None)
        if kind == "generic_type":
            return self._get_type_from_type_reference(node, node.child("name") or node.first_named_child, node.child("type_arguments"))
        if kind == "array_type":
            return self._get_array_type_from_node(node, readonly=False)
        if kind == "readonly_type":
            inner = unwrap_type_node(node.first_named_child)
            if inner is not None and inner.kind == "array_type":
                return self._get_array_type_from_node(inner, readonly=True, outer=node)
            if inner is not None and inner.kind == "tuple_type":
                return self._get_tuple_type_from_node(inner, readonly=True, outer=node)
            return self.get_type_from_type_node(inner)
        if kind == "tuple_type":
            return self._get_tuple_type_from_node(node, readonly=False)
        if kind == "union_type":
            return self.get_union_type(
                [self.get_type_from_type_node(operand) for operand in self._flatten_type_operands(node, "union_type")],
                alias_symbol,
                alias_type_arguments,
            )
        if kind == "intersection_type":
            return self.get_intersection_type(
                [self.get_type_from_type_node(operand) for operand in self._flatten_type_operands(node, "intersection_type")],
                alias_symbol,
                alias_type_arguments,
            )
        if kind == "object_type":
            mapped_member = self.get_mapped_type_member(node)
            if mapped_member is not None:
                return self._get_mapped_type_from_node(node, mapped_member, alias_symbol, alias_type_arguments)
            return self._get_anonymous_type_from_node(node, alias_symbol, alias_type_arguments)
        if kind in ("function_type", "constructor_type"):
            return self._get_anonymous_type_from_node(node, alias_symbol, alias_type_arguments)
        if kind == "conditional_type":
            return self._get_conditional_type_from_node(node, alias_symbol, alias_type_arguments)
        if kind == "infer_type":
            symbol = self.binder.get_symbol_of_declaration(node)
            return self.get_declared_type_of_symbol(symbol) if symbol is not None else self.error_type
        if kind == "lookup_type":
            parts = node.named_children
            if len(parts) < 2:
                return self.error_type
            return self.get_indexed_access_type(self.get_type_from_type_node(parts[0]), self.get_type_from_type_node(parts[1]))
        if kind == "index_type_query":
            operand = node.first_named_child
            return self.get_index_type(self.get_type_from_type_node(operand))
        if kind == "type_query":
            return self._get_type_from_type_query(node)
        if kind == "template_literal_type":
            return self._get_template_type_from_node(node)
        if kind == "this_type":
            return self._get_this_type(node)
        if kind in ("type_predicate", "type_predicate_annotation"):
            return self.boolean_type
        if kind in ("asserts", "asserts_annotation"):
            return self.void_type
        if kind in ("optional_type", "rest_type"):
            return self.get_type_from_type_node(node.first_named_child)
        logger.debug("Unsupported type node %s: %s", kind, node.text)
        return self.error_type

    @staticmethod
    def _flatten_type_operands(node: SyntaxNode, kind: str) -> list[SyntaxNode]:
        operands: list[SyntaxNode] = []
        for child in node.named_children:
            if child.kind == kind:
                operands.extend(TypeChecker._flatten_type_operands(child, kind))
            else:
                operands.append(child)
        return operands

    def _get_type_from_literal_type_node(self, node: SyntaxNode) -> Type:
        inner = node.first_named_child
        if inner is None:
            return self.error_type
        kind = inner.kind
        if kind == "string":
            return self.get_string_literal_type(strip_quotes(inner.text))
        if kind == "number":
            value = parse_number_literal(inner.text)
            if value is None and inner.text.endswith("n"):
                return self.get_bigint_literal_type(inner.text[:-1])
            return self.get_number_literal_type(value) if value is not None else self.number_type
        if kind == "unary_expression":
            operand = inner.child("argument")
            value = parse_number_literal(operand.text) if operand is not None else None
            if value is None:
                if operand is not None and operand.text.endswith("n"):
                    return self.get_bigint_literal_type("-" + operand.text[:-1])
                return self.number_type
            return self.get_number_literal_type(-value)
        if kind == "true":
            return self.true_type
        if kind == "false":
            return self.false_type
        if kind == "null":
            return self.null_type
        if kind == "undefined":
            return self.undefined_type
        if kind == "template_string":
            return self.get_string_literal_type(inner.text[1:-1])
        return self.error_type

    def _get_type_from_type_reference(self, node: SyntaxNode, name_node: SyntaxNode, arguments_node: SyntaxNode | None) -> Type:
        symbol = self.resolve_entity_name(name_node, SymbolFlags.TYPE)
        argument_nodes = arguments_node.named_children if arguments_node is not None else []
        if symbol is None:
            intrinsic = self._intrinsics.get(name_node.text)
            if intrinsic is not None:
                return intrinsic
            logger.debug("Unresolved type name %s in %s", name_node.text, node.source_file.path)
            return self.error_type
        flags = symbol.flags
        if flags & (SymbolFlags.CLASS | SymbolFlags.INTERFACE):
            target = self.get_declared_type_of_symbol(symbol)
            if not isinstance(target, InterfaceType) or not target.type_parameters:
                return target

            def resolve(ref: TypeReference, nodes=argument_nodes, target=target) -> list[Type]:
                return self.fill_missing_type_arguments(
                    [self.get_type_from_type_node(n) for n in nodes], target.type_parameters
                )

            return self._create_deferred_reference(target, node, resolve)
        if flags & SymbolFlags.TYPE_ALIAS:
            type_parameters = self.get_type_parameters_of_alias(symbol)
            if not type_parameters:
                return self.get_declared_type_of_symbol(symbol)
            arguments = self.fill_missing_type_arguments([self.get_type_from_type_node(n) for n in argument_nodes], type_parameters)
            return self.get_type_alias_instantiation(symbol, arguments)
        if flags & (SymbolFlags.TYPE_PARAMETER | SymbolFlags.ENUM | SymbolFlags.ENUM_MEMBER | SymbolFlags.TYPE_LITERAL):
            return self.get_declared_type_of_symbol(symbol)
        return self.error_type

    def fill_missing_type_arguments(self, arguments: list[Type], type_parameters: list[TypeParameter]) -> list[Type]:
        """Pad explicit type arguments with defaults (instantiated with earlier arguments) or ``unknown``."""
        result = list(arguments[: len(type_parameters)])
        for index in range(len(result), len(type_parameters)):
            default = self.get_default_from_type_parameter(type_parameters[index])
            if default is None:
                result.append(self.unknown_type)
                continue
            mapper = TypeMapper(type_parameters[:index], result[:index])
            result.append(self.instantiate(default, mapper))
        return result

    def get_type_alias_instantiation(self, symbol: Symbol, arguments: list[Type]) -> Type:
        declared = self.get_declared_type_of_symbol(symbol)
        type_parameters = self.get_type_parameters_of_alias(symbol)
        key = (symbol.id, tuple(t.id for t in arguments))
        cached = self._alias_instantiations.get(key)
        if cached is not None:
            return cached
        if all(a is p for a, p in zip(arguments, type_parameters)):
            return declared
        instantiated = self.instantiate(declared, TypeMapper(type_parameters, arguments))
        self._alias_instantiations[key] = instantiated
        return instantiated

    def _get_array_type_from_node(self, node: SyntaxNode, readonly: bool, outer: SyntaxNode | None = None) -> Type:
        target = self.get_global_array_target(readonly)
        if target is None:
            return self.error_type
        element_node = node.first_named_child
        return self._create_deferred_reference(
            target, outer or node, lambda ref: [self.get_type_from_type_node(element_node)]
        )

    def _get_tuple_type_from_node(self, node: SyntaxNode, readonly: bool, outer: SyntaxNode | None = None) -> Type:
        infos: list[TupleElementInfo] = []
        element_nodes: list[SyntaxNode] = []
        for element in node.named_children:
            flags = TupleElementFlags.REQUIRED
            label = None
            type_node: SyntaxNode | None = element
            if element.kind == "optional_type":
                flags = TupleElementFlags.OPTIONAL
                type_node = element.first_named_child
            elif element.kind == "rest_type":
                flags = TupleElementFlags.REST
                type_node = element.first_named_child
            elif element.kind in ("required_parameter", "optional_parameter"):
                pattern = element.child("pattern") or element.child("name")
                if pattern is not None and pattern.kind == "rest_pattern":
                    flags = TupleElementFlags.REST
                    inner = pattern.first_named_child
                    label = inner.text if inner is not None else None
                else:
                    label = pattern.text if pattern is not None else None
                if element.kind == "optional_parameter" or element.has_token("?"):
                    flags = TupleElementFlags.OPTIONAL
                type_node = element.child("type")
            infos.append(TupleElementInfo(flags=flags, label=label, declaration=element))
            element_nodes.append(type_node)
        tuple_type = TupleType(None, infos, readonly, outer or node)
        tuple_type.resolve_elements = lambda t: [self.get_type_from_type_node(n) for n in element_nodes]
        return tuple_type

    def get_tuple_element_type(self, tuple_type: TupleType, index: int) -> Type:
        """Element type at ``index``; rest positions yield their array element type."""
        elements = tuple_type.element_types
        if not elements:
            return self.never_type
        index = min(index, len(elements) - 1)
        element = elements[index]
        if tuple_type.element_infos[index].flags & TupleElementFlags.REST:
            if isinstance(element, TypeReference) and element.is_array() and element.type_arguments:
                return element.type_arguments[0]
        return element

    def _get_anonymous_type_from_node(
        self,
        node: SyntaxNode,
        alias_symbol: Symbol | None,
        alias_type_arguments: list[Type] | None,
    ) -> Type:
        symbol = self.binder.get_symbol_of_declaration(node)
        if symbol is None:
            return self.error_type
        anonymous = AnonymousType(symbol)
        anonymous.alias_symbol = alias_symbol
        anonymous.alias_type_arguments = list(alias_type_arguments or [])
        return anonymous

    @staticmethod
    def get_mapped_type_member(node: SyntaxNode) -> SyntaxNode | None:
        """The ``[K in C]: X`` member when an object type node is a mapped type."""
        members = node.named_children
        if len(members) != 1:
            return None
        member = members[0]
        if member.kind == "index_signature" and member.child_of_kind("mapped_type_clause") is not None:
            return member
        return None

    def _get_mapped_type_from_node(
        self,
        node: SyntaxNode,
        member: SyntaxNode,
        alias_symbol: Symbol | None,
        alias_type_arguments: list[Type] | None,
    ) -> Type:
        clause = member.child_of_kind("mapped_type_clause")
        parameter_symbol = self.binder.get_symbol_of_declaration(clause)
        parameter = self.get_declared_type_of_symbol(parameter_symbol)
        symbol = self.binder.get_literal_symbol(node, "__type", SymbolFlags.TYPE_LITERAL)
        mapped = MappedType(symbol, member, parameter)
        sign = None
        for child in member.children:
            if child.kind in ("-", "+"):
                sign = child.kind
            elif child.kind == "readonly":
                mapped.readonly_modifier = sign or "+"
                break
            elif child.kind == "[":
                break
        annotation = member.child_of_kind("opting_type_annotation", "omitting_type_annotation", "adding_type_annotation")
        if annotation is not None:
            mapped.optional_modifier = "-" if annotation.kind == "omitting_type_annotation" else "+"
        elif member.has_token("?"):
            mapped.optional_modifier = "+"
        mapped.has_readonly = mapped.readonly_modifier is not None
        mapped.has_optional = mapped.optional_modifier is not None
        mapped.alias_symbol = alias_symbol
        mapped.alias_type_arguments = list(alias_type_arguments or [])
        return mapped

    def get_mapped_type_template_node(self, mapped: MappedType) -> SyntaxNode | None:
        member = mapped.declaration
        annotation = member.child_of_kind(
            "type_annotation", "opting_type_annotation", "omitting_type_annotation", "adding_type_annotation"
        )
        return unwrap_type_node(annotation) if annotation is not None else member.child("type")

    @staticmethod
    def get_mapped_type_name_node(mapped: MappedType) -> SyntaxNode | None:
        clause = mapped.declaration.child_of_kind("mapped_type_clause")
        return clause.child("alias") if clause is not None else None

    def _get_conditional_type_from_node(
        self,
        node: SyntaxNode,
        alias_symbol: Symbol | None,
        alias_type_arguments: list[Type] | None,
    ) -> Type:
        root = self._conditional_roots.get(node.key)
        if root is None:
            check_node = node.child("left")
            extends_node = node.child("right")
            check_type = self.get_type_from_type_node(check_node)
            infer_parameters = []
            if extends_node is not None:
                for candidate in extends_node.walk():
                    if candidate.kind == "infer_type":
                        symbol = self.binder.get_symbol_of_declaration(candidate)
                        if symbol is not None:
                            infer_parameters.append(self.get_declared_type_of_symbol(symbol))
            root = ConditionalRoot(
                node=node,
                check_type=check_type,
                extends_type=self.get_type_from_type_node(extends_node),
                is_distributive=check_type.is_type_parameter(),
                infer_type_parameters=infer_parameters,
                outer_type_parameters=self.get_outer_type_parameters(node),
                alias_symbol=alias_symbol,
                alias_type_arguments=list(alias_type_arguments or []),
            )
            self._conditional_roots[node.key] = root
        return self.get_conditional_type(root, None)

    def _get_type_from_type_query(self, node: SyntaxNode) -> Type:
        expression = node.first_named_child
        if expression is None:
            return self.error_type
        if expression.kind in ("identifier", "member_expression", "nested_identifier", "this"):
            symbol = self.resolve_entity_name(expression, SymbolFlags.VALUE | SymbolFlags.NAMESPACE)
            if symbol is not None:
                return self.get_type_of_symbol(symbol)
        if expression.kind == "generic_type":
            return self._get_type_from_type_query(expression)
        return self.get_type_of_expression(expression)

    def _get_template_type_from_node(self, node: SyntaxNode) -> Type:
        texts = [""]
        spans: list[Type] = []
        for child in node.children:
            if child.kind == "template_type":
                spans.append(self.get_type_from_type_node(child.first_named_child))
                texts.append("")
            elif child.kind == "string_fragment" or (not child.is_named and child.kind not in ("`", "${", "}")):
                texts[-1] += child.text
            elif child.kind == "escape_sequence":
                texts[-1] += child.text
        return self.get_template_literal_type(texts, spans)

    def _get_this_type(self, node: SyntaxNode) -> Type:
        owner = node.find_ancestor("class_declaration", "abstract_class_declaration", "class", "interface_declaration")
        if owner is None:
            return self.error_type
        symbol = self.binder.get_symbol_of_declaration(owner)
        return self.get_declared_type_of_symbol(symbol) if symbol is not None else self.error_type

    def get_outer_type_parameters(self, node: SyntaxNode) -> list[TypeParameter]:
        """Type parameters in scope at ``node`` that its subtree actually mentions."""
        cached = self._outer_type_parameters.get(node.key)
        if cached is not None:
            return cached
        referenced = {n.text for n in node.walk() if n.kind == "type_identifier"}
        result: list[TypeParameter] = []
        seen: set[int] = set()
        previous = node
        for ancestor in node.ancestors():
            declared: list[SyntaxNode] = []
            if ancestor.kind in TYPE_PARAMETER_OWNER_KINDS:
                parameters_node = ancestor.child("type_parameters")
                if parameters_node is not None:
                    declared.extend(parameters_node.children_of_kind("type_parameter"))
            elif ancestor.kind == "conditional_type" and previous == ancestor.child("consequence"):
                extends_node = ancestor.child("right")
                if extends_node is not None:
                    declared.extend(n for n in extends_node.walk() if n.kind == "infer_type")
            elif ancestor.kind == "index_signature":
                clause = ancestor.child_of_kind("mapped_type_clause")
                if clause is not None:
                    declared.append(clause)
            for declaration in declared:
                symbol = self.binder.get_symbol_of_declaration(declaration)
                if symbol is None or symbol.name not in referenced:
                    continue
                parameter = self.get_declared_type_of_symbol(symbol)
                if isinstance(parameter, TypeParameter) and parameter.id not in seen:
                    seen.add(parameter.id)
                    result.append(parameter)
            previous = ancestor
        self._outer_type_parameters[node.key] = result
        return result

    # Type parameters

    def get_constraint_of_type_parameter(self, parameter: TypeParameter) -> Type | None:
        if parameter.constraint_resolved:
            return parameter.resolved_constraint
        parameter.constraint_resolved = True
        constraint: Type | None = None
        if parameter.target is not None:
            base = self.get_constraint_of_type_parameter(parameter.target)
            constraint = self.instantiate(base, parameter.mapper) if base is not None else None
        elif parameter.declaration is not None:
            declaration = parameter.declaration
            if declaration.kind == "type_parameter":
                node = declaration.child("constraint")
                if node is not None:
                    constraint = self.get_type_from_type_node(node)
            elif declaration.kind == "mapped_type_clause":
                node = declaration.child("type")
                if node is not None:
                    constraint = self.get_type_from_type_node(node)
            elif declaration.kind == "infer_type":
                named = declaration.named_children
                if len(named) > 1:
                    constraint = self.get_type_from_type_node(named[-1])
        parameter.resolved_constraint = constraint
        return constraint

    def get_default_from_type_parameter(self, parameter: TypeParameter) -> Type | None:
        if parameter.default_resolved:
            return parameter.resolved_default
        parameter.default_resolved = True
        default: Type | None = None
        declaration = parameter.declaration
        if declaration is not None and declaration.kind == "type_parameter":
            node = declaration.child("value")
            if node is not None:
                default = self.get_type_from_type_node(node)
        parameter.resolved_default = default
        return default

    # Instantiation

    def combine_mappers(self, first: TypeMapper | None, second: TypeMapper | None) -> TypeMapper | None:
        if first is None:
            return second
        if second is None:
            return first
        return CompositeTypeMapper(first, second, self.instantiate)

    def instantiate(self, type_: Type, mapper: TypeMapper | None) -> Type:
        """Substitute type parameters in ``type_`` according to ``mapper``."""
        if mapper is None:
            return type_
        flags = type_.flags
        if flags & TypeFlags.TYPE_PARAMETER:
            return mapper.map(type_)
        if flags & TypeFlags.UNION:
            if type_ is self.boolean_type or flags & TypeFlags.ENUM:
                return type_
            members = [self.instantiate(member, mapper) for member in type_.types]
            alias_arguments = [self.instantiate(a, mapper) for a in type_.alias_type_arguments]
            if all(m is o for m, o in zip(members, type_.types)) and all(
                a is o for a, o in zip(alias_arguments, type_.alias_type_arguments)
            ):
                return type_
            return self.get_union_type(members, type_.alias_symbol, alias_arguments)
        if flags & TypeFlags.INTERSECTION:
            members = [self.instantiate(member, mapper) for member in type_.types]
            alias_arguments = [self.instantiate(a, mapper) for a in type_.alias_type_arguments]
            if all(m is o for m, o in zip(members, type_.types)) and all(
                a is o for a, o in zip(alias_arguments, type_.alias_type_arguments)
            ):
                return type_
            return self.get_intersection_type(members, type_.alias_symbol, alias_arguments)
        if flags & TypeFlags.OBJECT:
            return self._instantiate_object_type(type_, mapper)
        if flags & TypeFlags.INDEX:
            return self.get_index_type(self.instantiate(type_.target, mapper))
        if flags & TypeFlags.INDEXED_ACCESS:
            return self.get_indexed_access_type(
                self.instantiate(type_.object_type, mapper), self.instantiate(type_.index_type, mapper)
            )
        if flags & TypeFlags.CONDITIONAL:
            return self.get_conditional_type(type_.root, self.combine_mappers(type_.mapper, mapper))
        if flags & TypeFlags.TEMPLATE_LITERAL:
            return self.get_template_literal_type(type_.texts, [self.instantiate(s, mapper) for s in type_.span_types])
        return type_

    def _instantiate_object_type(self, type_: Type, mapper: TypeMapper) -> Type:
        if isinstance(type_, TupleType):
            if type_.node is not None:
                outer = self.get_outer_type_parameters(type_.node)
                if not outer:
                    return type_
                key = ("tuple", type_.id, mapper.key(outer))
                cached = self._instantiations.get(key)
                if cached is None:
                    cached = TupleType(None, type_.element_infos, type_.readonly, type_.node)
                    cached.resolve_elements = lambda t, source=type_: [self.instantiate(e, mapper) for e in source.element_types]
                    self._instantiations[key] = cached
                return cached
            elements = [self.instantiate(e, mapper) for e in type_.element_types]
            if all(e is o for e, o in zip(elements, type_.element_types)):
                return type_
            return self.create_tuple_type(elements, type_.element_infos, type_.readonly)
        if isinstance(type_, TypeReference):
            if type_.node is not None:
                outer = self.get_outer_type_parameters(type_.node)
                if not outer:
                    return type_
                key = ("reference", type_.id, mapper.key(outer))
                cached = self._instantiations.get(key)
                if cached is None:
                    cached = self._create_deferred_reference(
                        type_.target,
                        type_.node,
                        lambda ref, source=type_: [self.instantiate(a, mapper) for a in source.type_arguments],
                    )
                    self._instantiations[key] = cached
                return cached
            arguments = [self.instantiate(a, mapper) for a in type_.type_arguments]
            if all(a is o for a, o in zip(arguments, type_.type_arguments)):
                return type_
            return self.create_type_reference(type_.target, arguments)
        if isinstance(type_, InterfaceType):
            if not type_.type_parameters:
                return type_
            arguments = [mapper.map(p) for p in type_.type_parameters]
            if all(a is p for a, p in zip(arguments, type_.type_parameters)):
                return type_
            return self.create_type_reference(type_, arguments)
        if isinstance(type_, (AnonymousType, MappedType)):
            return self._get_object_type_instantiation(type_, mapper)
        return type_

    def _get_instantiation_declaration(self, type_: Type) -> SyntaxNode | None:
        if isinstance(type_, MappedType):
            return type_.declaration
        symbol = type_.symbol
        if symbol is not None and symbol.declarations:
            return symbol.declarations[0]
        return None

    def _get_object_type_instantiation(self, type_: Type, mapper: TypeMapper) -> Type:
        target = type_.target if type_.target is not None else type_
        declaration = self._get_instantiation_declaration(target)
        outer = self.get_outer_type_parameters(declaration) if declaration is not None else []
        if not outer:
            return type_
        if type_.mapper is not None:
            values = [self.instantiate(type_.mapper.map(p), mapper) for p in outer]
        else:
            values = [mapper.map(p) for p in outer]
        if all(v is p for v, p in zip(values, outer)):
            return target
        key = ("object", target.id, tuple(v.id for v in values))
        cached = self._instantiations.get(key)
        if cached is not None:
            return cached
        new_mapper = TypeMapper(outer, values)
        if isinstance(target, MappedType):
            result: ObjectType = MappedType(target.symbol, target.declaration, target.type_parameter, new_mapper, target)
            result.readonly_modifier = target.readonly_modifier
            result.optional_modifier = target.optional_modifier
            result.has_readonly = target.has_readonly
            result.has_optional = target.has_optional
        else:
            result = AnonymousType(target.symbol, target.object_flags | ObjectFlags.INSTANTIATED, new_mapper, target)
        result.alias_symbol = target.alias_symbol
        result.alias_type_arguments = [self.instantiate(a, new_mapper) for a in target.alias_type_arguments]
        self._instantiations[key] = result
        return result

    def instantiate_symbol(self, symbol: Symbol, mapper: TypeMapper) -> Symbol:
        """Transient copy of a member or parameter whose type is instantiated lazily."""
        if symbol.flags & SymbolFlags.TRANSIENT and symbol.target is not None and symbol.origin is None:
            source = symbol.target
            mapper = self.combine_mappers(symbol.mapper, mapper)
        else:
            source = symbol
        result = Symbol(symbol.name, symbol.flags | SymbolFlags.TRANSIENT, symbol.parent)
        result.declarations = list(symbol.declarations)
        result.value_declaration = symbol.value_declaration
        result.is_exported = symbol.is_exported
        result.readonly = symbol.readonly
        result.key_type = symbol.key_type
        result.members_bound = True
        result.target = source
        result.mapper = mapper
        if symbol.origin is not None:
            result.origin = lambda: self.instantiate(self.get_type_of_symbol(symbol), mapper)
        return result

    def instantiate_signature(self, signature: Signature, mapper: TypeMapper, erase_type_parameters: bool = False) -> Signature:
        result = Signature(
            signature.kind,
            signature.declaration,
            [] if erase_type_parameters else list(signature.type_parameters),
            [self.instantiate_symbol(p, mapper) for p in signature.parameters],
            self.instantiate_symbol(signature.this_parameter, mapper) if signature.this_parameter is not None else None,
        )
        result.target = signature
        result.mapper = mapper
        return result

    def get_signature_instantiation(self, signature: Signature, type_arguments: list[Type]) -> Signature:
        key = (id(signature), tuple(t.id for t in type_arguments))
        cached = self._signature_instantiations.get(key)
        if cached is None:
            mapper = TypeMapper(signature.type_parameters, type_arguments)
            cached = self.instantiate_signature(signature, mapper, erase_type_parameters=True)
            self._signature_instantiations[key] = cached
        return cached

    def get_erased_signature(self, signature: Signature) -> Signature:
        """The signature with its own type parameters replaced by ``any``."""
        cached = self._erased_signatures.get(id(signature))
        if cached is None:
            cached = self.get_signature_instantiation(signature, [self.any_type] * len(signature.type_parameters))
            self._erased_signatures[id(signature)] = cached
        return cached

    # keyof, T[K], conditional and mapped types

    def is_generic_type(self, type_: Type) -> bool:
        """Whether evaluation of ``type_`` must wait for type arguments."""
        if type_.is_template_literal():
            return any(self.is_generic_type(span) for span in type_.span_types)
        if type_.flags & TypeFlags.INSTANTIABLE:
            return True
        if type_.is_union() or type_.is_intersection():
            return any(self.is_generic_type(member) for member in type_.types)
        if isinstance(type_, MappedType):
            return self.is_generic_type(self.get_constraint_type_from_mapped_type(type_))
        return False

    def get_index_type(self, type_: Type) -> Type:
        if type_.is_any():
            return self.get_union_type([self.string_type, self.number_type, self.es_symbol_type])
        if type_.is_union() and not type_.is_boolean() and not type_.flags & TypeFlags.ENUM:
            return self.get_intersection_type([self.get_index_type(member) for member in type_.types])
        if type_.is_intersection():
            return self.get_union_type([self.get_index_type(member) for member in type_.types])
        if self.is_generic_type(type_):
            index = self._index_types.get(type_.id)
            if index is None:
                index = IndexType(type_)
                self._index_types[type_.id] = index
            return index
        if isinstance(type_, MappedType):
            name_node = self.get_mapped_type_name_node(type_)
            if name_node is None:
                return self.get_constraint_type_from_mapped_type(type_)
        apparent = self.get_apparent_type(type_)
        keys: list[Type] = []
        if isinstance(apparent, TupleType):
            keys.extend(self.get_string_literal_type(str(i)) for i in range(len(apparent.element_types)))
        for property_ in self.get_properties_of_type(apparent):
            keys.append(self.get_string_literal_type(property_.name))
        for info in self.get_index_infos_of_type(apparent):
            if info.key_type.is_string():
                keys.extend([self.string_type, self.number_type])
            else:
                keys.append(info.key_type)
        return self.get_union_type(keys)

    def get_indexed_access_type(self, object_type: Type, index_type: Type) -> Type:
        if object_type.is_any():
            return self.any_type
        if self.is_generic_type(index_type) or self.is_generic_type(object_type):
            key = (object_type.id, index_type.id)
            access = self._indexed_access_types.get(key)
            if access is None:
                access = IndexedAccessType(object_type, index_type)
                self._indexed_access_types[key] = access
            return access
        if index_type.is_union() and not index_type.is_boolean():
            return self.get_union_type([self.get_indexed_access_type(object_type, member) for member in index_type.types])
        return self._get_property_type_for_index_type(object_type, index_type)

    def _get_property_type_for_index_type(self, object_type: Type, index_type: Type) -> Type:
        apparent = self.get_apparent_type(object_type)
        if index_type.is_any():
            return self.any_type
        if index_type.is_literal() or index_type.is_enum_literal():
            value = index_type.value
            name = str(_normalize_number(value)) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
            if isinstance(apparent, TupleType) and name.isdigit():
                position = int(name)
                if position < len(apparent.element_types):
                    return self.get_tuple_element_type(apparent, position)
                if any(info.flags & TupleElementFlags.REST for info in apparent.element_infos):
                    return self.get_tuple_element_type(apparent, position)
                return self.undefined_type
            property_ = self.get_property_of_type(apparent, name)
            if property_ is not None:
                return self.get_type_of_symbol(property_)
            key_type = self.number_type if name.lstrip("-").replace(".", "", 1).isdigit() else self.string_type
            info = self.get_applicable_index_info(apparent, key_type)
            if info is not None:
                return info.type
            logger.debug("Property %r does not exist on %s", name, self.type_to_string(object_type))
            return self.error_type
        if index_type.flags & (TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.ES_SYMBOL):
            if isinstance(apparent, TupleType) and index_type.is_number():
                return self.get_union_type(
                    [self.get_tuple_element_type(apparent, i) for i in range(len(apparent.element_types))]
                )
            info = self.get_applicable_index_info(apparent, index_type)
            if info is not None:
                return info.type
        return self.error_type

    def get_conditional_type(self, root: ConditionalRoot, mapper: TypeMapper | None) -> Type:
        check = self.instantiate(root.check_type, mapper)
        if root.is_distributive and check.is_union() and not check.flags & TypeFlags.ENUM:
            return self.get_union_type(
                [self.get_conditional_type(root, self._conditional_mapper(root, mapper, root.check_type, member)) for member in check.types]
            )
        if root.is_distributive and check.is_never():
            return self.never_type
        key = (root.node.key, tuple(mapper.map(p).id for p in root.outer_type_parameters) if mapper is not None else ())
        cached = self._conditional_types.get(key)
        if cached is not None:
            return cached
        result = self._resolve_conditional_type(root, mapper, check)
        self._conditional_types[key] = result
        return result

    def _conditional_mapper(self, root: ConditionalRoot, mapper: TypeMapper | None, parameter: Type, value: Type) -> TypeMapper:
        sources = list(root.outer_type_parameters)
        if parameter not in sources:
            sources.append(parameter)
        targets = [value if p is parameter else (mapper.map(p) if mapper is not None else p) for p in sources]
        return TypeMapper(sources, targets)

    def _resolve_conditional_type(self, root: ConditionalRoot, mapper: TypeMapper | None, check: Type) -> Type:
        raw_extends = root.extends_type
        if self.is_generic_type(check) or (raw_extends.is_type_parameter() and not raw_extends.is_infer and self.is_generic_type(self.instantiate(raw_extends, mapper))):
            return self._defer_conditional(root, mapper)
        combined = mapper
        if root.infer_type_parameters:
            context = InferenceContext(self, root.infer_type_parameters)
            context.infer(check, self.instantiate(raw_extends, mapper))
            inferred = context.get_inferred_types(keep_literals={p.id for p in root.infer_type_parameters})
            combined = self.combine_mappers(TypeMapper(root.infer_type_parameters, inferred), mapper)
        extends = self.instantiate(raw_extends, combined)
        true_node = root.node.child("consequence")
        false_node = root.node.child("alternative")
        if check.is_any():
            return self.get_union_type(
                [self.instantiate(self.get_type_from_type_node(true_node), combined), self.instantiate(self.get_type_from_type_node(false_node), mapper)]
            )
        if self.contains_type_parameter(check, deep=True) or self.contains_type_parameter(extends, deep=True):
            permissive = self._permissive_mapper(root, mapper)
            if not self.is_type_assignable_to(self.instantiate(check, permissive), self.instantiate(extends, permissive)):
                return self.instantiate(self.get_type_from_type_node(false_node), mapper)
            if self.is_type_assignable_to(check, extends):
                return self.instantiate(self.get_type_from_type_node(true_node), combined)
            return self._defer_conditional(root, mapper)
        if self.is_type_assignable_to(check, extends):
            return self.instantiate(self.get_type_from_type_node(true_node), combined)
        return self.instantiate(self.get_type_from_type_node(false_node), mapper)

    def _defer_conditional(self, root: ConditionalRoot, mapper: TypeMapper | None) -> ConditionalType:
        deferred = ConditionalType(root, mapper)
        deferred.alias_symbol = root.alias_symbol
        deferred.alias_type_arguments = [self.instantiate(a, mapper) for a in root.alias_type_arguments]
        return deferred

    def _permissive_mapper(self, root: ConditionalRoot, mapper: TypeMapper | None) -> TypeMapper:
        """Maps every type parameter still free after ``mapper`` to ``any``."""
        free = list(root.outer_type_parameters) + list(root.infer_type_parameters)
        if mapper is not None:
            free += [t for t in (mapper.map(p) for p in root.outer_type_parameters) if t.is_type_parameter() and t not in free]
        return TypeMapper(free, [self.any_type] * len(free))

    def get_conditional_branch_types(self, conditional: ConditionalType) -> tuple[Type, Type]:
        root = conditional.root
        return (
            self.instantiate(self.get_type_from_type_node(root.node.child("consequence")), conditional.mapper),
            self.instantiate(self.get_type_from_type_node(root.node.child("alternative")), conditional.mapper),
        )

    def get_constraint_type_from_mapped_type(self, mapped: MappedType) -> Type:
        constraint = self.get_constraint_of_type_parameter(mapped.type_parameter)
        if constraint is None:
            return self.unknown_type
        return self.instantiate(constraint, mapped.mapper)

    def get_template_type_from_mapped_type(self, mapped: MappedType) -> Type:
        node = self.get_mapped_type_template_node(mapped)
        if node is None:
            return self.any_type
        return self.instantiate(self.get_type_from_type_node(node), mapped.mapper)

    def get_modifiers_type_from_mapped_type(self, mapped: MappedType) -> Type | None:
        """``T`` of a homomorphic ``{ [P in keyof T]: ... }``."""
        constraint = self.get_constraint_of_type_parameter(mapped.type_parameter)
        if constraint is not None and constraint.is_index():
            return self.instantiate(constraint.target, mapped.mapper)
        return None

    def get_base_constraint_of_type(self, type_: Type, depth: int = 0) -> Type | None:
        if depth > 10:
            return None
        if type_.is_type_parameter():
            constraint = self.get_constraint_of_type_parameter(type_)
            return self.get_base_constraint_of_type(constraint, depth + 1) if constraint is not None else None
        if type_.is_index():
            return self.get_union_type([self.string_type, self.number_type, self.es_symbol_type])
        if type_.is_template_literal():
            return self.string_type
        if type_.is_indexed_access():
            object_constraint = self.get_base_constraint_of_type(type_.object_type, depth + 1) or type_.object_type
            index_constraint = self.get_base_constraint_of_type(type_.index_type, depth + 1) or type_.index_type
            if self.is_generic_type(object_constraint) or self.is_generic_type(index_constraint):
                return None
            return self.get_indexed_access_type(object_constraint, index_constraint)
        if type_.is_conditional():
            true_type, false_type = self.get_conditional_branch_types(type_)
            parts = [self.get_base_constraint_of_type(t, depth + 1) or t for t in (true_type, false_type)]
            return self.get_union_type(parts)
        if (type_.is_union() or type_.is_intersection()) and self.is_generic_type(type_):
            parts = [self.get_base_constraint_of_type(m, depth + 1) or self.unknown_type for m in type_.types]
            return self.get_union_type(parts) if type_.is_union() else self.get_intersection_type(parts)
        return type_

    def get_apparent_type(self, type_: Type) -> Type:
        """The object type whose members a value of ``type_`` exposes."""
        if type_.flags & TypeFlags.INSTANTIABLE:
            type_ = self.get_base_constraint_of_type(type_) or self.empty_object_type
        if type_.is_unknown() or type_.is_non_primitive():
            return self.empty_object_type
        if type_.flags & TypeFlags.STRING_LIKE:
            return self.get_global_type("String") or type_
        if type_.is_boolean() or type_.is_boolean_literal():
            return self.get_global_type("Boolean") or type_
        if type_.flags & (TypeFlags.NUMBER | TypeFlags.NUMBER_LITERAL) or type_.is_enum_literal():
            return self.get_global_type("Number") or type_
        if type_.flags & (TypeFlags.BIGINT | TypeFlags.BIGINT_LITERAL):
            return self.get_global_type("BigInt") or type_
        if type_.is_es_symbol():
            return self.get_global_type("Symbol") or type_
        return type_

    # Structured members

    def get_resolved_members(self, type_: Type) -> ResolvedMembers:
        """Properties, signatures and index infos of an object, union or intersection type."""
        if type_.is_union() or type_.is_intersection():
            if type_.resolved is None:
                type_.resolved = ResolvedMembers()
                type_.resolved = (
                    self._resolve_union_members(type_) if type_.is_union() else self._resolve_intersection_members(type_)
                )
            return type_.resolved
        if not isinstance(type_, ObjectType):
            return ResolvedMembers()
        if type_.resolved is not None:
            return type_.resolved
        type_.resolved = ResolvedMembers()
        if isinstance(type_, TupleType):
            resolved = self._resolve_tuple_members(type_)
        elif isinstance(type_, TypeReference):
            resolved = self._resolve_reference_members(type_)
        elif isinstance(type_, InterfaceType):
            resolved = self._resolve_declared_members(type_)
        elif isinstance(type_, MappedType):
            resolved = self._resolve_mapped_type_members(type_)
        elif isinstance(type_, AnonymousType):
            resolved = self._resolve_anonymous_type_members(type_)
        else:
            resolved = ResolvedMembers()
        type_.resolved = resolved
        return resolved

    def _collect_symbol_members(self, members: dict[str, Symbol], resolved: ResolvedMembers) -> None:
        for name, member in members.items():
            if member.flags & (SymbolFlags.SIGNATURE | SymbolFlags.CONSTRUCTOR):
                continue
            resolved.properties[name] = member
        call = members.get("__call")
        if call is not None:
            resolved.call_signatures.extend(self.get_signature_from_declaration(d) for d in call.declarations)
        construct = members.get("__new")
        if construct is not None:
            resolved.construct_signatures.extend(self.get_signature_from_declaration(d) for d in construct.declarations)
        index = members.get("__index")
        if index is not None:
            resolved.index_infos.extend(self.get_index_info_of_declaration(d) for d in index.declarations)

    def get_index_info_of_declaration(self, declaration: SyntaxNode) -> IndexInfo:
        name_node = declaration.child("name")
        key_node = declaration.child("index_type")
        if key_node is None:
            named = [c for c in declaration.named_children if c.kind not in ("type_annotation", "identifier")]
            key_node = named[0] if named else None
        annotation = declaration.child_of_kind("type_annotation") or declaration.child("type")
        return IndexInfo(
            key_type=self.get_type_from_type_node(key_node) if key_node is not None else self.string_type,
            type=self.get_type_from_type_node(annotation) if annotation is not None else self.any_type,
            is_readonly=declaration.has_token("readonly"),
            declaration=declaration,
            parameter_name=name_node.text if name_node is not None else "key",
        )

    def _resolve_declared_members(self, type_: InterfaceType) -> ResolvedMembers:
        resolved = ResolvedMembers()
        self._collect_symbol_members(self.binder.get_members(type_.symbol), resolved)
        is_interface = bool(type_.object_flags & ObjectFlags.INTERFACE)
        for base in self.get_base_types(type_):
            base_members = self.get_resolved_members(base)
            for name, property_ in base_members.properties.items():
                resolved.properties.setdefault(name, property_)
            for info in base_members.index_infos:
                if not any(self._same_key_kind(info.key_type, own.key_type) for own in resolved.index_infos):
                    resolved.index_infos.append(info)
            if is_interface:
                if not resolved.call_signatures:
                    resolved.call_signatures.extend(base_members.call_signatures)
                if not resolved.construct_signatures:
                    resolved.construct_signatures.extend(base_members.construct_signatures)
        return resolved

    @staticmethod
    def _same_key_kind(a: Type, b: Type) -> bool:
        return (a.flags & (TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.ES_SYMBOL)) == (
            b.flags & (TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.ES_SYMBOL)
        )

    def _instantiate_members(self, members: ResolvedMembers, mapper: TypeMapper) -> ResolvedMembers:
        return ResolvedMembers(
            properties={name: self.instantiate_symbol(p, mapper) for name, p in members.properties.items()},
            call_signatures=[self.instantiate_signature(s, mapper) for s in members.call_signatures],
            construct_signatures=[self.instantiate_signature(s, mapper) for s in members.construct_signatures],
            index_infos=[
                IndexInfo(
                    key_type=self.instantiate(info.key_type, mapper),
                    type=self.instantiate(info.type, mapper),
                    is_readonly=info.is_readonly,
                    declaration=info.declaration,
                    parameter_name=info.parameter_name,
                )
                for info in members.index_infos
            ],
        )

    def _get_reference_mapper(self, reference: TypeReference) -> TypeMapper:
        target = reference.target
        arguments = self.fill_missing_type_arguments(reference.type_arguments, target.type_parameters)
        return TypeMapper(target.type_parameters, arguments)

    def _resolve_reference_members(self, type_: TypeReference) -> ResolvedMembers:
        declared = self.get_resolved_members(type_.target)
        return self._instantiate_members(declared, self._get_reference_mapper(type_))

    def _resolve_tuple_members(self, type_: TupleType) -> ResolvedMembers:
        elements = type_.element_types
        element_union = self.get_union_type([self.get_tuple_element_type(type_, i) for i in range(len(elements))]) if elements else self.never_type
        array_members = self.get_resolved_members(self.create_array_type(element_union, readonly=type_.readonly))
        resolved = ResolvedMembers(
            properties=dict(array_members.properties),
            call_signatures=list(array_members.call_signatures),
            construct_signatures=list(array_members.construct_signatures),
            index_infos=list(array_members.index_infos),
        )
        fixed_length = True
        for index, element in enumerate(elements):
            info = type_.element_infos[index]
            if info.flags & TupleElementFlags.REST:
                fixed_length = False
                break
            flags = SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT
            if info.flags & TupleElementFlags.OPTIONAL:
                flags |= SymbolFlags.OPTIONAL
                fixed_length = False
            property_ = Symbol(str(index), flags)
            if info.declaration is not None:
                property_.declarations = [info.declaration]
            property_.type = element
            property_.readonly = type_.readonly
            resolved.properties[property_.name] = property_
        if fixed_length:
            length = Symbol("length", SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT)
            length.type = self.get_number_literal_type(len(elements))
            length.readonly = True
            resolved.properties["length"] = length
        return resolved

    def _resolve_anonymous_type_members(self, type_: AnonymousType) -> ResolvedMembers:
        if type_.target is not None:
            return self._instantiate_members(self.get_resolved_members(type_.target), type_.mapper)
        symbol = type_.symbol
        flags = symbol.flags
        resolved = ResolvedMembers()
        if flags & (SymbolFlags.TYPE_LITERAL | SymbolFlags.OBJECT_LITERAL):
            self._collect_symbol_members(self.binder.get_members(symbol), resolved)
            return resolved
        if flags & (SymbolFlags.FUNCTION | SymbolFlags.METHOD):
            resolved.call_signatures.extend(self.get_signatures_of_symbol(symbol))
        if flags & SymbolFlags.CLASS:
            resolved.construct_signatures.extend(self.get_construct_signatures_of_class(symbol))
            for name, member in self.get_exports_of_symbol(symbol).items():
                if not member.flags & SymbolFlags.SIGNATURE:
                    resolved.properties[name] = member
        elif flags & (SymbolFlags.ENUM | SymbolFlags.VALUE_MODULE):
            for name, member in self.get_exports_of_symbol(symbol).items():
                target = self.resolve_alias(member)
                if target is not None and target.flags & SymbolFlags.VALUE:
                    resolved.properties[name] = member
        return resolved

    def _resolve_mapped_type_members(self, mapped: MappedType) -> ResolvedMembers:
        resolved = ResolvedMembers()
        constraint = self.get_constraint_type_from_mapped_type(mapped)
        modifiers_type = self.get_modifiers_type_from_mapped_type(mapped)
        if modifiers_type is not None and self.is_generic_type(modifiers_type):
            return resolved
        keys = constraint.types if constraint.is_union() else [constraint]
        for key in keys:
            self._add_mapped_member(mapped, key, modifiers_type, resolved)
        return resolved

    def _add_mapped_member(self, mapped: MappedType, key: Type, modifiers_type: Type | None, resolved: ResolvedMembers) -> None:
        property_mapper = self.combine_mappers(TypeMapper([mapped.type_parameter], [key]), mapped.mapper)
        name_node = self.get_mapped_type_name_node(mapped)
        name_type = self.instantiate(self.get_type_from_type_node(name_node), property_mapper) if name_node is not None else key
        template_node = self.get_mapped_type_template_node(mapped)
        template = self.get_type_from_type_node(template_node) if template_node is not None else self.any_type

        if name_type.is_union() and not name_type.is_boolean():
            for member in name_type.types:
                self._add_mapped_property(mapped, member, property_mapper, template, modifiers_type, resolved)
            return
        self._add_mapped_property(mapped, name_type, property_mapper, template, modifiers_type, resolved)

    def _add_mapped_property(
        self,
        mapped: MappedType,
        name_type: Type,
        property_mapper: TypeMapper,
        template: Type,
        modifiers_type: Type | None,
        resolved: ResolvedMembers,
    ) -> None:
        if name_type.is_string_literal() or name_type.is_number_literal() or name_type.is_enum_literal():
            name = str(name_type.value)
            modifiers_property = self.get_property_of_type(modifiers_type, name) if modifiers_type is not None else None
            if mapped.optional_modifier is not None:
                optional = mapped.optional_modifier == "+"
            else:
                optional = modifiers_property is not None and modifiers_property.is_optional
            if mapped.readonly_modifier is not None:
                readonly = mapped.readonly_modifier == "+"
            else:
                readonly = modifiers_property is not None and self.is_readonly_symbol(modifiers_property)
            flags = SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT
            if optional:
                flags |= SymbolFlags.OPTIONAL
            property_ = Symbol(name, flags, mapped.symbol)
            if modifiers_property is not None:
                property_.declarations = list(modifiers_property.declarations)
                property_.value_declaration = modifiers_property.value_declaration
            property_.readonly = readonly
            property_.key_type = name_type
            modifier = mapped.optional_modifier

            def compute_type() -> Type:
                type_ = self.instantiate(template, property_mapper)
                if modifier == "-":
                    return self.remove_undefined(type_)
                if optional and modifier == "+":
                    return self.get_union_type([type_, self.undefined_type])
                return type_

            property_.origin = compute_type
            resolved.properties[name] = property_
        elif name_type.flags & (TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.ES_SYMBOL):
            resolved.index_infos.append(
                IndexInfo(
                    key_type=name_type,
                    type=self.instantiate(template, property_mapper),
                    is_readonly=mapped.readonly_modifier == "+",
                    declaration=mapped.declaration,
                    parameter_name=mapped.type_parameter.name,
                )
            )

    def _resolve_union_members(self, type_: Type) -> ResolvedMembers:
        resolved = ResolvedMembers()
        member_types = [self.get_resolved_members(self.get_apparent_type(m)) for m in type_.types]
        if not member_types:
            return resolved
        first = member_types[0]
        for name, property_ in first.properties.items():
            others = [members.properties.get(name) for members in member_types[1:]]
            if any(other is None for other in others):
                continue
            candidates = [property_] + others
            if all(candidate is property_ for candidate in candidates):
                resolved.properties[name] = property_
                continue
            resolved.properties[name] = self._create_synthetic_property(name, candidates, union=True)
        call_signatures = [members.call_signatures for members in member_types]
        if call_signatures and all(len(s) == 1 and s[0] is call_signatures[0][0] for s in call_signatures):
            resolved.call_signatures = list(call_signatures[0])
        string_infos = [self.get_applicable_index_info_of_members(m, self.string_type) for m in member_types]
        if string_infos and all(info is not None for info in string_infos):
            resolved.index_infos.append(
                IndexInfo(self.string_type, self.get_union_type([info.type for info in string_infos]), any(i.is_readonly for i in string_infos))
            )
        return resolved

    def _resolve_intersection_members(self, type_: Type) -> ResolvedMembers:
        resolved = ResolvedMembers()
        grouped: dict[str, list[Symbol]] = {}
        for member in type_.types:
            members = self.get_resolved_members(self.get_apparent_type(member))
            for name, property_ in members.properties.items():
                grouped.setdefault(name, []).append(property_)
            resolved.call_signatures.extend(members.call_signatures)
            resolved.construct_signatures.extend(members.construct_signatures)
            for info in members.index_infos:
                existing = next((i for i in resolved.index_infos if self._same_key_kind(i.key_type, info.key_type)), None)
                if existing is None:
                    resolved.index_infos.append(info)
                else:
                    resolved.index_infos[resolved.index_infos.index(existing)] = IndexInfo(
                        existing.key_type,
                        self.get_intersection_type([existing.type, info.type]),
                        existing.is_readonly and info.is_readonly,
                        existing.declaration,
                        existing.parameter_name,
                    )
        for name, candidates in grouped.items():
            if len(candidates) == 1:
                resolved.properties[name] = candidates[0]
            else:
                resolved.properties[name] = self._create_synthetic_property(name, candidates, union=False)
        return resolved

    def _create_synthetic_property(self, name: str, candidates: list[Symbol], union: bool) -> Symbol:
        optional = any(c.is_optional for c in candidates) if union else all(c.is_optional for c in candidates)
        flags = SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT
        for candidate in candidates:
            flags |= candidate.flags & (SymbolFlags.METHOD | SymbolFlags.ACCESSOR)
        if optional:
            flags |= SymbolFlags.OPTIONAL
        else:
            flags &= ~SymbolFlags.OPTIONAL
        synthetic = Symbol(name, flags, candidates[0].parent)
        for candidate in candidates:
            for declaration in candidate.declarations:
                if declaration not in synthetic.declarations:
                    synthetic.declarations.append(declaration)
        synthetic.value_declaration = candidates[0].value_declaration
        readonly_flags = [self.is_readonly_symbol(c) for c in candidates]
        synthetic.readonly = any(readonly_flags) if union else all(readonly_flags)
        if union:
            synthetic.origin = lambda: self.get_union_type([self.get_type_of_symbol(c) for c in candidates])
        else:
            synthetic.origin = lambda: self.get_intersection_type([self.get_type_of_symbol(c) for c in candidates])
        return synthetic

    def get_base_types(self, type_: Type) -> list[Type]:
        """Direct base types of a class or interface (``extends`` only)."""
        if isinstance(type_, TypeReference) and not type_.is_tuple():
            mapper = self._get_reference_mapper(type_)
            return [self.instantiate(base, mapper) for base in self.get_base_types(type_.target)]
        if not isinstance(type_, InterfaceType):
            return []
        if type_.resolved_base_types is not None:
            return type_.resolved_base_types
        if type_.id in self._resolving_bases:
            logger.debug("Circular base types for %s", type_.symbol.name)
            return []
        self._resolving_bases.add(type_.id)
        bases: list[Type] = []
        try:
            for declaration in type_.symbol.declarations:
                if declaration.kind == "interface_declaration":
                    clause = declaration.child_of_kind("extends_type_clause")
                    if clause is not None:
                        bases.extend(self.get_type_from_type_node(node) for node in clause.named_children)
                elif declaration.kind in CLASS_KINDS:
                    heritage = declaration.child_of_kind("class_heritage")
                    clause = heritage.child_of_kind("extends_clause") if heritage is not None else None
                    if clause is not None:
                        bases.extend(self._get_base_types_of_extends_clause(clause))
        finally:
            self._resolving_bases.discard(type_.id)
        type_.resolved_base_types = [b for b in bases if b.is_object() and b is not type_]
        return type_.resolved_base_types

    def _get_base_types_of_extends_clause(self, clause: SyntaxNode) -> list[Type]:
        bases: list[Type] = []
        children = clause.named_children
        for index, child in enumerate(children):
            if child.kind == "type_arguments":
                continue
            arguments_node = children[index + 1] if index + 1 < len(children) and children[index + 1].kind == "type_arguments" else None
            bases.append(self.get_base_type_of_expression(child, arguments_node))
        return bases

    def get_base_type_of_expression(self, expression: SyntaxNode, arguments_node: SyntaxNode | None) -> Type:
        """Instance type produced by a class heritage expression such as ``Base<T>``."""
        symbol = self.resolve_entity_name(expression, SymbolFlags.VALUE | SymbolFlags.CLASS)
        arguments = [self.get_type_from_type_node(n) for n in arguments_node.named_children] if arguments_node is not None else []
        if symbol is not None and symbol.flags & SymbolFlags.CLASS:
            target = self.get_declared_type_of_symbol(symbol)
            if isinstance(target, InterfaceType) and target.type_parameters:
                return self.create_type_reference(target, self.fill_missing_type_arguments(arguments, target.type_parameters))
            return target
        constructor_type = self.get_type_of_expression(expression)
        signatures = self.get_signatures_of_type(constructor_type, SignatureKind.CONSTRUCT)
        if signatures:
            return self.get_return_type_of_signature(signatures[0])
        return self.error_type

    # Member queries

    def get_properties_of_type(self, type_: Type) -> list[Symbol]:
        """Apparent properties, including inherited ones."""
        return list(self.get_resolved_members(self.get_apparent_type(type_)).properties.values())

    def get_property_of_type(self, type_: Type, name: str) -> Symbol | None:
        apparent = self.get_apparent_type(type_)
        resolved = self.get_resolved_members(apparent)
        property_ = resolved.properties.get(name)
        if property_ is None and apparent.is_object() and (resolved.call_signatures or resolved.construct_signatures):
            function_type = self.get_global_type("Function")
            if function_type is not None and function_type is not apparent:
                property_ = self.get_resolved_members(function_type).properties.get(name)
        return property_

    def get_signatures_of_type(self, type_: Type, kind: SignatureKind) -> list[Signature]:
        resolved = self.get_resolved_members(self.get_apparent_type(type_))
        return list(resolved.call_signatures if kind is SignatureKind.CALL else resolved.construct_signatures)

    def get_index_infos_of_type(self, type_: Type) -> list[IndexInfo]:
        return list(self.get_resolved_members(self.get_apparent_type(type_)).index_infos)

    def get_index_info_of_type(self, type_: Type, key_type: Type) -> IndexInfo | None:
        for info in self.get_index_infos_of_type(type_):
            if self._same_key_kind(info.key_type, key_type):
                return info
        return None

    def get_applicable_index_info(self, type_: Type, key_type: Type) -> IndexInfo | None:
        return self.get_applicable_index_info_of_members(self.get_resolved_members(self.get_apparent_type(type_)), key_type)

    def get_applicable_index_info_of_members(self, members: ResolvedMembers, key_type: Type) -> IndexInfo | None:
        infos = members.index_infos
        if key_type.flags & (TypeFlags.NUMBER | TypeFlags.NUMBER_LITERAL):
            for info in infos:
                if info.key_type.is_number():
                    return info
        if key_type.flags & (TypeFlags.STRING_LIKE | TypeFlags.NUMBER | TypeFlags.NUMBER_LITERAL):
            for info in infos:
                if info.key_type.is_string():
                    return info
            for info in infos:
                if info.key_type.is_template_literal() and key_type.is_string_literal():
                    if self.is_type_assignable_to(key_type, info.key_type):
                        return info
        if key_type.is_es_symbol():
            for info in infos:
                if info.key_type.is_es_symbol():
                    return info
        return None

    def is_readonly_symbol(self, symbol: Symbol) -> bool:
        if symbol.readonly is not None:
            return symbol.readonly
        if symbol.flags & SymbolFlags.TRANSIENT and symbol.target is not None:
            return self.is_readonly_symbol(symbol.target)
        for declaration in symbol.declarations:
            if declaration.kind in (
                "property_signature",
                "public_field_definition",
                "index_signature",
                "required_parameter",
                "optional_parameter",
            ) and declaration.has_token("readonly"):
                return True
        if symbol.flags & SymbolFlags.GET_ACCESSOR and not symbol.flags & SymbolFlags.SET_ACCESSOR:
            return True
        return False

    # Types of values

    def get_type_of_symbol(self, symbol: Symbol | None) -> Type:
        """The type of the value a symbol declares."""
        if symbol is None:
            return self.error_type
        if symbol.flags & SymbolFlags.ALIAS:
            target = self.resolve_alias(symbol)
            return self.get_type_of_symbol(target) if target is not None else self.error_type
        if symbol.type is not None:
            return symbol.type
        if symbol.flags & SymbolFlags.TRANSIENT:
            if symbol.origin is not None:
                type_ = symbol.origin()
            elif symbol.target is not None:
                type_ = self.instantiate(self.get_type_of_symbol(symbol.target), symbol.mapper)
            else:
                type_ = self.error_type
            symbol.type = type_
            return type_
        if symbol.id in self._resolving_symbols:
            logger.debug("Circular reference to the type of %s", symbol.name)
            return self.error_type
        self._resolving_symbols.add(symbol.id)
        try:
            type_ = self._compute_type_of_symbol(symbol)
        finally:
            self._resolving_symbols.discard(symbol.id)
        if symbol.type is None:
            symbol.type = type_
        return symbol.type

    def _compute_type_of_symbol(self, symbol: Symbol) -> Type:
        flags = symbol.flags
        declaration = symbol.value_declaration or (symbol.declarations[0] if symbol.declarations else None)
        if flags & SymbolFlags.ENUM_MEMBER:
            return self.get_declared_type_of_symbol(symbol)
        if flags & SymbolFlags.PARAMETER:
            return self._get_type_of_parameter_declaration(declaration) if declaration is not None else self.any_type
        if flags & SymbolFlags.VARIABLE:
            return self._get_type_of_variable(declaration) if declaration is not None else self.any_type
        if flags & SymbolFlags.PROPERTY:
            type_ = self._get_type_of_property(declaration) if declaration is not None else self.any_type
            if symbol.is_optional and declaration is not None and declaration.kind != "optional_parameter":
                type_ = self.get_union_type([type_, self.undefined_type])
            return type_
        if flags & SymbolFlags.ACCESSOR:
            return self._get_type_of_accessor(symbol)
        if flags & SymbolFlags.OBJECT_LITERAL:
            return AnonymousType(symbol, ObjectFlags.OBJECT_LITERAL)
        if flags & (SymbolFlags.FUNCTION | SymbolFlags.METHOD | SymbolFlags.CLASS | SymbolFlags.ENUM | SymbolFlags.VALUE_MODULE):
            return AnonymousType(symbol)
        if flags & SymbolFlags.TYPE_LITERAL:
            return self._get_anonymous_type_from_node(symbol.declarations[0], None, None) if symbol.declarations else self.empty_object_type
        return self.any_type

    def _get_type_of_parameter_declaration(self, declaration: SyntaxNode) -> Type:
        if declaration.kind not in ("required_parameter", "optional_parameter"):
            contextual = self._get_contextual_parameter_type(declaration)
            return contextual if contextual is not None else self.any_type
        annotation = declaration.child("type")
        pattern = declaration.child("pattern")
        is_rest = pattern is not None and pattern.kind == "rest_pattern"
        if annotation is not None:
            type_ = self.get_type_from_type_node(annotation)
        else:
            contextual = self._get_contextual_parameter_type(declaration)
            initializer = declaration.child("value")
            if contextual is not None:
                type_ = contextual
            elif initializer is not None:
                type_ = self.get_widened_literal_type(self.get_type_of_expression(initializer))
            elif is_rest:
                type_ = self.create_array_type(self.any_type)
            else:
                type_ = self.any_type
        if declaration.kind == "optional_parameter":
            type_ = self.get_union_type([type_, self.undefined_type])
        return type_

    def _get_contextual_parameter_type(self, parameter: SyntaxNode) -> Type | None:
        """Parameter type implied by where an unannotated function expression appears."""
        function = parameter if parameter.kind in FUNCTION_LIKE_KINDS else None
        if function is None:
            for ancestor in parameter.ancestors():
                if ancestor.kind in FUNCTION_LIKE_KINDS:
                    function = ancestor
                    break
        if function is None or function.kind not in ("arrow_function", "function_expression", "function", "generator_function"):
            return None
        signature = self._get_contextual_signature(function)
        if signature is None:
            return None
        if function.child("parameter") is not None:
            index = 0
        else:
            parameters = [p for p in (function.child("parameters").named_children if function.child("parameters") else [])
                          if p.kind in ("required_parameter", "optional_parameter")]
            parameters = [p for p in parameters if (p.child("pattern") is None or p.child("pattern").text != "this")]
            if parameter not in parameters:
                return None
            index = parameters.index(parameter)
        type_ = self.get_parameter_type_at(signature, index)
        if type_ is None or self.contains_type_parameter(type_, deep=True):
            return None
        return type_

    def _get_contextual_signature(self, function: SyntaxNode) -> Signature | None:
        contextual_type = self._get_contextual_type(function)
        if contextual_type is None:
            return None
        signatures = self.get_signatures_of_type(self.get_non_nullable_type(contextual_type), SignatureKind.CALL)
        return signatures[0] if len(signatures) == 1 else None

    def _get_contextual_type(self, expression: SyntaxNode) -> Type | None:
        parent = expression.parent
        while parent is not None and parent.kind == "parenthesized_expression":
            expression = parent
            parent = parent.parent
        if parent is None:
            return None
        if parent.kind in ("variable_declarator", "public_field_definition") and parent.child("value") == expression:
            annotation = parent.child("type")
            return self.get_type_from_type_node(annotation) if annotation is not None else None
        if parent.kind in ("as_expression", "satisfies_expression", "type_assertion"):
            type_node = next((c for c in parent.named_children if c != expression), None)
            return self.get_type_from_type_node(type_node) if type_node is not None else None
        if parent.kind == "arguments":
            call = parent.parent
            if call is None or call.kind not in ("call_expression", "new_expression"):
                return None
            callee = call.child("constructor") if call.kind == "new_expression" else call.child("function")
            if callee is None:
                return None
            kind = SignatureKind.CONSTRUCT if call.kind == "new_expression" else SignatureKind.CALL
            signatures = self.get_signatures_of_type(self.get_type_of_expression(callee), kind)
            if len(signatures) != 1:
                return None
            index = parent.named_children.index(expression)
            return self.get_parameter_type_at(signatures[0], index)
        if parent.kind == "pair" and parent.child("value") == expression:
            owner = parent.parent
            contextual = self._get_contextual_type(owner) if owner is not None else None
            key = get_property_name(parent.child("key"))
            if contextual is None or key is None:
                return None
            property_ = self.get_property_of_type(contextual, key)
            return self.get_type_of_symbol(property_) if property_ is not None else None
        if parent.kind == "return_statement" or (parent.kind == "arrow_function" and parent.child("body") == expression):
            function = parent if parent.kind == "arrow_function" else next(
                (a for a in parent.ancestors() if a.kind in FUNCTION_LIKE_KINDS), None
            )
            if function is not None and function.child("return_type") is not None:
                return self.get_type_from_type_node(function.child("return_type"))
        return None

    def get_parameter_type_at(self, signature: Signature, index: int) -> Type | None:
        parameters = signature.parameters
        if not parameters:
            return None
        if index < len(parameters) and not parameters[index].is_rest:
            return self.get_type_of_symbol(parameters[index])
        last = parameters[-1]
        if not last.is_rest:
            return None
        rest_type = self.get_type_of_symbol(last)
        if isinstance(rest_type, TypeReference) and rest_type.is_array():
            return rest_type.type_arguments[0] if rest_type.type_arguments else self.any_type
        if isinstance(rest_type, TupleType):
            offset = index - (len(parameters) - 1)
            return self.get_tuple_element_type(rest_type, offset) if rest_type.element_types else None
        return self.any_type

    def _get_type_of_variable(self, declaration: SyntaxNode) -> Type:
        if declaration.kind == "variable_declarator":
            annotation = declaration.child("type")
            if annotation is not None:
                return self.get_type_from_type_node(annotation)
            value = declaration.child("value")
            if value is None:
                return self.any_type
            type_ = self.get_type_of_expression(value)
            statement = declaration.parent
            is_const = statement is not None and statement.kind == "lexical_declaration" and statement.has_token("const")
            return type_ if is_const else self.get_widened_literal_type(type_)
        if declaration.kind in ("identifier", "shorthand_property_identifier_pattern"):
            return self._get_type_of_binding_element(declaration)
        if declaration.kind == "export_statement":
            value = declaration.child("value")
            return self.get_type_of_expression(value) if value is not None else self.any_type
        return self.any_type

    def _get_type_of_binding_element(self, node: SyntaxNode) -> Type:
        parent = node.parent
        if parent is None:
            return self.any_type
        if parent.kind in ("object_assignment_pattern", "assignment_pattern"):
            return self._get_type_of_binding_element(parent)
        if parent.kind == "object_pattern":
            name = node.text if node.kind != "object_assignment_pattern" else (node.first_named_child.text if node.first_named_child else "")
            return self._get_property_type_of_pattern(parent, name)
        if parent.kind == "pair_pattern":
            key = get_property_name(parent.child("key"))
            owner = parent.parent
            if key is None or owner is None:
                return self.any_type
            return self._get_property_type_of_pattern(owner, key)
        if parent.kind == "array_pattern":
            index = parent.named_children.index(node)
            pattern_type = self._get_type_of_binding_pattern(parent)
            return self._get_property_type_for_index_type(pattern_type, self.get_number_literal_type(index))
        return self.any_type

    def _get_property_type_of_pattern(self, pattern: SyntaxNode, name: str) -> Type:
        pattern_type = self._get_type_of_binding_pattern(pattern)
        if pattern_type.is_any():
            return pattern_type
        property_ = self.get_property_of_type(pattern_type, name)
        if property_ is not None:
            return self.get_type_of_symbol(property_)
        info = self.get_applicable_index_info(pattern_type, self.string_type)
        return info.type if info is not None else self.any_type

    def _get_type_of_binding_pattern(self, pattern: SyntaxNode) -> Type:
        parent = pattern.parent
        if parent is None:
            return self.any_type
        if parent.kind == "variable_declarator":
            annotation = parent.child("type")
            if annotation is not None:
                return self.get_type_from_type_node(annotation)
            value = parent.child("value")
            return self.get_type_of_expression(value) if value is not None else self.any_type
        if parent.kind in ("required_parameter", "optional_parameter"):
            return self._get_type_of_parameter_declaration(parent)
        return self._get_type_of_binding_element(pattern)

    def _get_type_of_property(self, declaration: SyntaxNode) -> Type:
        kind = declaration.kind
        if kind in ("property_signature", "public_field_definition"):
            annotation = declaration.child("type")
            if annotation is not None:
                return self.get_type_from_type_node(annotation)
            value = declaration.child("value")
            if value is not None:
                type_ = self.get_type_of_expression(value)
                return type_ if declaration.has_token("readonly") else self.get_widened_literal_type(type_)
            return self.any_type
        if kind == "pair":
            value = declaration.child("value")
            if value is None:
                return self.any_type
            type_ = self.get_type_of_expression(value)
            return type_ if self._is_const_context(declaration) else self.get_widened_literal_type(type_)
        if kind == "shorthand_property_identifier":
            symbol = self.resolve_alias(self.binder.resolve_name(declaration, declaration.text, SymbolFlags.VALUE))
            return self.get_type_of_symbol(symbol) if symbol is not None else self.any_type
        if kind in ("required_parameter", "optional_parameter"):
            return self._get_type_of_parameter_declaration(declaration)
        if kind in ("method_signature", "method_definition"):
            symbol = self.binder.get_symbol_of_declaration(declaration)
            return AnonymousType(symbol) if symbol is not None else self.any_type
        return self.any_type

    def _get_type_of_accessor(self, symbol: Symbol) -> Type:
        getter = next((d for d in symbol.declarations if d.has_token("get")), None)
        if getter is not None:
            return_type = getter.child("return_type")
            if return_type is not None:
                return self.get_type_from_type_node(return_type)
            return self._infer_return_type(getter)
        setter = next((d for d in symbol.declarations if d.has_token("set")), None)
        if setter is not None:
            parameters = setter.child("parameters")
            first = parameters.named_children[0] if parameters is not None and parameters.named_children else None
            if first is not None:
                return self._get_type_of_parameter_declaration(first)
        return self.any_type

    def _is_const_context(self, node: SyntaxNode) -> bool:
        for ancestor in node.ancestors():
            if ancestor.kind == "as_expression":
                return ancestor.has_token("const") and len(ancestor.named_children) == 1
            if ancestor.kind not in ("object", "array", "pair", "parenthesized_expression", "spread_element"):
                return False
        return False

    # Signatures

    def get_signature_from_declaration(self, declaration: SyntaxNode) -> Signature:
        cached = self._signatures.get(declaration.key)
        if cached is not None:
            return cached
        kind = SignatureKind.CONSTRUCT if declaration.kind in ("construct_signature", "constructor_type") else SignatureKind.CALL
        type_parameters = self._get_type_parameters_of_declaration(declaration)
        parameters: list[Symbol] = []
        this_parameter: Symbol | None = None
        single = declaration.child("parameter")
        if single is not None:
            symbol = self.binder.resolve_name(single, single.text, SymbolFlags.VALUE)
            if symbol is not None:
                parameters.append(symbol)
        parameters_node = declaration.child("parameters")
        if parameters_node is not None:
            for parameter in parameters_node.named_children:
                if parameter.kind not in ("required_parameter", "optional_parameter"):
                    continue
                symbol = self.binder.get_symbol_of_declaration(parameter)
                if symbol is None:
                    continue
                if symbol.name == "this":
                    this_parameter = symbol
                else:
                    parameters.append(symbol)
        signature = Signature(kind, declaration, type_parameters, parameters, this_parameter)
        self._signatures[declaration.key] = signature
        return signature

    def get_signatures_of_symbol(self, symbol: Symbol) -> list[Signature]:
        """Call signatures of a function or method; overloads hide the implementation."""
        declarations = [d for d in symbol.declarations if d.kind in FUNCTION_LIKE_KINDS]
        with_body = [d for d in declarations if d.child("body") is not None]
        without_body = [d for d in declarations if d.child("body") is None]
        if with_body and without_body:
            declarations = without_body
        return [self.get_signature_from_declaration(d) for d in declarations]

    def get_construct_signatures_of_class(self, symbol: Symbol) -> list[Signature]:
        instance = self.get_declared_type_of_symbol(symbol)
        if not isinstance(instance, InterfaceType):
            return []
        key = ("construct", symbol.id)
        cached = self._signatures.get(key)
        if cached is not None:
            return cached
        self._signatures[key] = []
        type_parameters = list(instance.type_parameters)
        instance_type = instance
        constructor = self.binder.get_members(symbol).get("__constructor")
        signatures: list[Signature] = []
        if constructor is not None:
            declarations = constructor.declarations
            with_body = [d for d in declarations if d.child("body") is not None]
            without_body = [d for d in declarations if d.child("body") is None]
            if with_body and without_body:
                declarations = without_body
            for declaration in declarations:
                base = self.get_signature_from_declaration(declaration)
                signature = Signature(SignatureKind.CONSTRUCT, declaration, type_parameters, base.parameters, base.this_parameter)
                signature.fixed_return_type = instance_type
                signatures.append(signature)
        else:
            bases = self.get_base_types(instance)
            base = bases[0] if bases else None
            base_target = getattr(base, "target", None) if base is not None else None
            if base_target is not None and base_target.symbol is not None and base_target.symbol.flags & SymbolFlags.CLASS:
                mapper = self._get_reference_mapper(base) if isinstance(base, TypeReference) else None
                for base_signature in self.get_construct_signatures_of_class(base_target.symbol):
                    parameters = [self.instantiate_symbol(p, mapper) for p in base_signature.parameters] if mapper else list(base_signature.parameters)
                    signature = Signature(SignatureKind.CONSTRUCT, base_signature.declaration, type_parameters, parameters)
                    signature.fixed_return_type = instance_type
                    signatures.append(signature)
            if not signatures:
                declaration = next((d for d in symbol.declarations if d.kind in CLASS_KINDS), None)
                signature = Signature(SignatureKind.CONSTRUCT, declaration, type_parameters, [])
                signature.fixed_return_type = instance_type
                signatures.append(signature)
        self._signatures[key] = signatures
        return signatures

    def get_return_type_of_signature(self, signature: Signature) -> Type:
        if signature.resolved_return_type is not None:
            return signature.resolved_return_type
        if signature.fixed_return_type is not None:
            type_ = signature.fixed_return_type
        elif signature.target is not None:
            type_ = self.instantiate(self.get_return_type_of_signature(signature.target), signature.mapper)
        else:
            type_ = self._get_return_type_from_declaration(signature)
        signature.resolved_return_type = type_
        return type_

    def _get_return_type_from_declaration(self, signature: Signature) -> Type:
        declaration = signature.declaration
        if declaration is None:
            return self.any_type
        annotation = declaration.child("return_type")
        if annotation is None and declaration.kind in ("construct_signature", "constructor_type"):
            annotation = declaration.child("type")
        if annotation is not None:
            return self.get_type_from_type_node(annotation)
        if id(signature) in self._resolving_return_types:
            logger.debug("Return type of %s references itself", declaration.text[:40])
            return self.any_type
        self._resolving_return_types.add(id(signature))
        try:
            return self._infer_return_type(declaration)
        finally:
            self._resolving_return_types.discard(id(signature))

    def _infer_return_type(self, declaration: SyntaxNode) -> Type:
        """Return type from the body: the widened union of returned expressions."""
        body = declaration.child("body")
        if body is None:
            return self.any_type
        is_async = declaration.has_token("async")
        is_generator = declaration.kind in ("generator_function_declaration", "generator_function") or declaration.has_token("*")
        yields: list[Type] = []
        if body.kind != "statement_block":
            return_type = self.get_widened_literal_type(self.get_type_of_expression(body))
        else:
            returned: list[Type] = []
            has_bare_return = False
            for node in self._iter_function_body(body):
                if node.kind == "return_statement":
                    expression = node.first_named_child
                    if expression is None:
                        has_bare_return = True
                    else:
                        returned.append(self.get_widened_literal_type(self.get_type_of_expression(expression)))
                elif node.kind == "yield_expression" and is_generator:
                    operand = node.first_named_child
                    yields.append(self.get_widened_literal_type(self.get_type_of_expression(operand)) if operand is not None else self.undefined_type)
            if not returned:
                return_type = self.void_type
            else:
                if has_bare_return:
                    returned.append(self.undefined_type)
                return_type = self.get_union_type(returned)
        if is_generator:
            target = self.get_global_type("AsyncGenerator" if is_async else "Generator")
            if isinstance(target, InterfaceType):
                yield_type = self.get_union_type(yields) if yields else self.never_type
                if is_async:
                    return_type = self.get_awaited_type(return_type)
                return self.create_type_reference(target, [yield_type, return_type, self.unknown_type])
            return self.any_type
        if is_async:
            return self.create_promise_type(self.get_awaited_type(return_type))
        return return_type

    def _iter_function_body(self, body: SyntaxNode):
        stack = list(reversed(body.named_children))
        while stack:
            node = stack.pop()
            yield node
            if node.kind in _NESTED_FUNCTION_KINDS:
                continue
            stack.extend(reversed(node.named_children))

    def get_awaited_type(self, type_: Type) -> Type:
        if type_.is_union() and not type_.is_boolean():
            return self.get_union_type([self.get_awaited_type(member) for member in type_.types])
        if isinstance(type_, TypeReference) and type_.target.symbol is not None and type_.target.symbol.name in ("Promise", "PromiseLike"):
            arguments = type_.type_arguments
            return self.get_awaited_type(arguments[0]) if arguments else self.unknown_type
        return type_

    # Call resolution

    def get_resolved_signature(self, call: SyntaxNode) -> Signature | None:
        """The signature a call or ``new`` expression selects, instantiated with inferred type arguments."""
        if call.key in self._resolved_signatures:
            return self._resolved_signatures[call.key]
        self._resolved_signatures[call.key] = None
        signature = self._resolve_call(call)
        self._resolved_signatures[call.key] = signature
        return signature

    def _resolve_call(self, call: SyntaxNode) -> Signature | None:
        is_new = call.kind == "new_expression"
        callee = call.child("constructor") if is_new else call.child("function")
        if callee is None or callee.kind in ("super", "import"):
            return None
        arguments_node = call.child("arguments")
        arguments = arguments_node.named_children if arguments_node is not None and arguments_node.kind == "arguments" else []
        callee_type = self.get_type_of_expression(callee)
        if callee_type.is_any():
            return None
        kind = SignatureKind.CONSTRUCT if is_new else SignatureKind.CALL
        signatures = self.get_signatures_of_type(self.get_non_nullable_type(callee_type), kind)
        if not signatures:
            return None
        candidates = [s for s in signatures if self._has_correct_arity(s, len(arguments))] or signatures
        type_arguments_node = call.child("type_arguments")
        explicit = [self.get_type_from_type_node(n) for n in type_arguments_node.named_children] if type_arguments_node is not None else None
        fallback: Signature | None = None
        for candidate in candidates:
            instantiated = self._instantiate_candidate(candidate, arguments, explicit)
            if fallback is None:
                fallback = instantiated
            if len(candidates) == 1 or self._arguments_assignable(instantiated, arguments):
                return instantiated
        return fallback

    @staticmethod
    def _has_correct_arity(signature: Signature, argument_count: int) -> bool:
        if argument_count < signature.min_argument_count:
            return False
        return signature.has_rest_parameter or argument_count <= len(signature.parameters)

    def _instantiate_candidate(self, signature: Signature, arguments: list[SyntaxNode], explicit: list[Type] | None) -> Signature:
        if not signature.type_parameters:
            return signature
        if explicit is not None:
            return self.get_signature_instantiation(
                signature, self.fill_missing_type_arguments(explicit, signature.type_parameters)
            )
        context = InferenceContext(self, signature.type_parameters)
        for index, argument in enumerate(arguments):
            if argument.kind == "spread_element":
                break
            parameter_type = self.get_parameter_type_at(signature, index)
            if parameter_type is None:
                break
            context.infer(self.get_type_of_expression(argument), parameter_type)
        keep = self._get_literal_preserving_parameters(signature)
        return self.get_signature_instantiation(signature, context.get_inferred_types(keep))

    def _get_literal_preserving_parameters(self, signature: Signature) -> set[int]:
        """Type parameters whose literal inferences survive: returned directly, or constrained to primitives."""
        return_type = self.get_return_type_of_signature(signature)
        top_level = return_type.types if return_type.is_union() else [return_type]
        keep = {t.id for t in top_level if t.is_type_parameter()}
        for parameter in signature.type_parameters:
            constraint = self.get_constraint_of_type_parameter(parameter)
            if constraint is not None and any(
                m.is_primitive() for m in (constraint.types if constraint.is_union() else [constraint])
            ):
                keep.add(parameter.id)
        return keep

    def _arguments_assignable(self, signature: Signature, arguments: list[SyntaxNode]) -> bool:
        for index, argument in enumerate(arguments):
            if argument.kind == "spread_element":
                return True
            parameter_type = self.get_parameter_type_at(signature, index)
            if parameter_type is None:
                return False
            if not self.is_type_assignable_to(self.get_type_of_expression(argument), parameter_type):
                return False
        return True

    # Types of expressions

    def get_type_of_expression(self, node: SyntaxNode) -> Type:
        cached = self._expression_types.get(node.key)
        if cached is not None:
            return cached
        type_ = self._compute_type_of_expression(node)
        self._expression_types[node.key] = type_
        return type_

    def _compute_type_of_expression(self, node: SyntaxNode) -> Type:
        kind = node.kind
        if kind in ("parenthesized_expression", "spread_element", "satisfies_expression"):
            inner = node.first_named_child
            return self.get_type_of_expression(inner) if inner is not None else self.any_type
        if kind == "string":
            return self.get_string_literal_type(strip_quotes(node.text))
        if kind == "template_string":
            if any(child.kind == "template_substitution" for child in node.named_children):
                return self.string_type
            return self.get_string_literal_type(node.text[1:-1])
        if kind == "number":
            value = parse_number_literal(node.text)
            if value is None:
                return self.get_bigint_literal_type(node.text[:-1]) if node.text.endswith("n") else self.number_type
            return self.get_number_literal_type(value)
        if kind == "true":
            return self.true_type
        if kind == "false":
            return self.false_type
        if kind == "null":
            return self.null_type
        if kind == "undefined":
            return self.undefined_type
        if kind == "regex":
            return self.get_global_type("RegExp") or self.any_type
        if kind in ("identifier", "shorthand_property_identifier"):
            return self._get_type_of_identifier(node)
        if kind == "this":
            return self._get_this_type(node)
        if kind == "object":
            symbol = self.binder.get_symbol_of_declaration(node)
            return AnonymousType(symbol, ObjectFlags.OBJECT_LITERAL) if symbol is not None else self.empty_object_type
        if kind == "array":
            return self._get_type_of_array_literal(node)
        if kind in ("arrow_function", "function_expression", "function", "generator_function", "class"):
            symbol = self.binder.get_symbol_of_declaration(node)
            return self.get_type_of_symbol(symbol) if symbol is not None else self.any_type
        if kind in ("call_expression", "new_expression"):
            signature = self.get_resolved_signature(node)
            if signature is None:
                return self.any_type
            type_ = self.get_return_type_of_signature(signature)
            if kind == "call_expression" and node.child("optional_chain") is not None:
                type_ = self.get_union_type([type_, self.undefined_type])
            return type_
        if kind == "member_expression":
            return self._get_type_of_member_expression(node)
        if kind == "subscript_expression":
            object_type = self.get_non_nullable_type(self.get_type_of_expression(node.child("object")))
            index = node.child("index")
            if index is None or object_type.is_any():
                return self.any_type
            type_ = self._get_property_type_for_index_type(object_type, self.get_type_of_expression(index))
            return self.any_type if type_ is self.error_type else type_
        if kind == "as_expression":
            named = node.named_children
            if len(named) == 1 and node.has_token("const"):
                return self._get_const_type(named[0])
            return self.get_type_from_type_node(named[-1]) if len(named) > 1 else self.any_type
        if kind == "type_assertion":
            named = node.named_children
            type_node = next((c for c in named if c.kind == "type_arguments"), None)
            if type_node is not None and type_node.first_named_child is not None:
                return self.get_type_from_type_node(type_node.first_named_child)
            return self.any_type
        if kind == "non_null_expression":
            inner = node.first_named_child
            return self.get_non_nullable_type(self.get_type_of_expression(inner)) if inner is not None else self.any_type
        if kind == "await_expression":
            inner = node.first_named_child
            return self.get_awaited_type(self.get_type_of_expression(inner)) if inner is not None else self.any_type
        if kind == "ternary_expression":
            branches = [node.child("consequence"), node.child("alternative")]
            return self.get_union_type([self.get_type_of_expression(b) for b in branches if b is not None])
        if kind == "binary_expression":
            return self._get_type_of_binary_expression(node)
        if kind == "unary_expression":
            operator = node.child("operator")
            op = operator.text if operator is not None else ""
            if op in ("!", "delete"):
                return self.boolean_type
            if op == "typeof":
                return self.string_type
            if op == "void":
                return self.undefined_type
            argument = node.child("argument")
            if op == "-" and argument is not None and argument.kind == "number":
                value = parse_number_literal(argument.text)
                if value is not None:
                    return self.get_number_literal_type(-value)
            return self.number_type
        if kind == "update_expression":
            return self.number_type
        if kind in ("assignment_expression", "augmented_assignment_expression"):
            right = node.child("right")
            return self.get_type_of_expression(right) if right is not None else self.any_type
        if kind == "sequence_expression":
            named = node.named_children
            return self.get_type_of_expression(named[-1]) if named else self.any_type
        if kind in ("jsx_element", "jsx_self_closing_element", "jsx_fragment"):
            return self._get_jsx_element_type()
        return self.any_type

    def _get_type_of_identifier(self, node: SyntaxNode) -> Type:
        symbol = self.binder.resolve_name(node, node.text, SymbolFlags.VALUE | SymbolFlags.ALIAS)
        if symbol is None:
            return self.undefined_type if node.text == "undefined" else self.any_type
        return self.get_type_of_symbol(symbol)

    def _get_type_of_member_expression(self, node: SyntaxNode) -> Type:
        object_node = node.child("object")
        property_node = node.child("property")
        if object_node is None or property_node is None:
            return self.any_type
        object_type = self.get_type_of_expression(object_node)
        optional = node.child("optional_chain") is not None
        object_type = self.get_non_nullable_type(object_type)
        if object_type.is_any():
            return object_type
        property_ = self.get_property_of_type(object_type, property_node.text)
        if property_ is not None:
            type_ = self.get_type_of_symbol(property_)
        else:
            info = self.get_applicable_index_info(object_type, self.get_string_literal_type(property_node.text))
            type_ = info.type if info is not None else self.any_type
        return self.get_union_type([type_, self.undefined_type]) if optional else type_

    def _get_type_of_binary_expression(self, node: SyntaxNode) -> Type:
        operator = node.child("operator")
        op = operator.text if operator is not None else ""
        left = node.child("left")
        right = node.child("right")
        if op in ("==", "!=", "===", "!==", "<", ">", "<=", ">=", "instanceof", "in"):
            return self.boolean_type
        if left is None or right is None:
            return self.any_type
        left_type = self.get_type_of_expression(left)
        right_type = self.get_type_of_expression(right)
        if op in ("&&",):
            return right_type if left_type.is_any() else self.get_union_type([right_type, self._get_falsy_part(left_type)])
        if op in ("||", "??"):
            narrowed = self.get_non_nullable_type(left_type)
            return self.get_union_type([narrowed, right_type])
        if op == "+":
            if left_type.flags & TypeFlags.STRING_LIKE or right_type.flags & TypeFlags.STRING_LIKE:
                return self.string_type
            if left_type.is_any() or right_type.is_any():
                return self.any_type
            if left_type.flags & (TypeFlags.BIGINT | TypeFlags.BIGINT_LITERAL):
                return self.bigint_type
            return self.number_type
        if left_type.flags & (TypeFlags.BIGINT | TypeFlags.BIGINT_LITERAL):
            return self.bigint_type
        return self.number_type

    def _get_falsy_part(self, type_: Type) -> Type:
        members = type_.types if type_.is_union() else [type_]
        falsy = [
            m for m in members
            if m.flags & (TypeFlags.NULL | TypeFlags.UNDEFINED | TypeFlags.VOID)
            or (isinstance(m, LiteralType) and not m.value and not m.flags & TypeFlags.ENUM_LITERAL)
        ]
        return self.get_union_type(falsy) if falsy else self.never_type

    def _get_type_of_array_literal(self, node: SyntaxNode) -> Type:
        if self._is_const_context(node):
            return self._get_const_type(node)
        element_types: list[Type] = []
        for element in node.named_children:
            if element.kind == "spread_element":
                inner = element.first_named_child
                spread = self.get_type_of_expression(inner) if inner is not None else self.any_type
                if isinstance(spread, TypeReference) and spread.is_array():
                    element_types.extend(spread.type_arguments[:1])
                elif isinstance(spread, TupleType):
                    element_types.extend(spread.element_types)
                else:
                    element_types.append(self.any_type)
            else:
                element_types.append(self.get_widened_literal_type(self.get_type_of_expression(element)))
        if not element_types:
            return self.create_array_type(self.any_type)
        return self.create_array_type(self.get_union_type(element_types))

    def _get_const_type(self, node: SyntaxNode) -> Type:
        """Type of an expression under ``as const``: literals kept, arrays become readonly tuples."""
        if node.kind == "parenthesized_expression" and node.first_named_child is not None:
            return self._get_const_type(node.first_named_child)
        if node.kind == "array":
            elements = [self._get_const_type(e) for e in node.named_children if e.kind != "spread_element"]
            return self.create_tuple_type(elements, readonly=True)
        return self.get_type_of_expression(node)

    def _get_jsx_element_type(self) -> Type:
        namespace = self.get_global_symbol("JSX", SymbolFlags.NAMESPACE)
        if namespace is not None:
            element = self.get_exports_of_symbol(namespace).get("Element")
            if element is not None:
                return self.get_declared_type_of_symbol(element)
        return self.any_type

    def get_type_at_location(self, node: SyntaxNode) -> Type:
        """Type of a declaration, type node or expression, whichever ``node`` is."""
        kind = node.kind
        if kind in ("interface_declaration", "type_alias_declaration", "type_parameter"):
            symbol = self.get_symbol_of_declaration(node)
            return self.get_declared_type_of_symbol(symbol) if symbol is not None else self.error_type
        if kind in TYPE_NODE_KINDS:
            return self.get_type_from_type_node(node)
        if kind in DECLARATION_KINDS or kind in ("method_signature", "method_definition", "abstract_method_signature"):
            symbol = self.get_symbol_of_declaration(node)
            if symbol is not None:
                if symbol.flags & SymbolFlags.TYPE and not symbol.flags & SymbolFlags.VALUE:
                    return self.get_declared_type_of_symbol(symbol)
                return self.get_type_of_symbol(symbol)
        parent = node.parent
        if parent is not None and parent.child("name") == node and parent.kind in DECLARATION_KINDS:
            return self.get_type_at_location(parent)
        return self.get_type_of_expression(node)

    # Utilities

    def is_type_assignable_to(self, source: Type, target: Type) -> bool:
        return self.relations.is_assignable(source, target)

    def get_widened_literal_type(self, type_: Type) -> Type:
        if type_.flags & TypeFlags.ENUM_LITERAL and type_.symbol is not None and type_.symbol.parent is not None:
            return self.get_declared_type_of_symbol(type_.symbol.parent)
        if type_.flags & TypeFlags.STRING_LITERAL:
            return self.string_type
        if type_.flags & TypeFlags.NUMBER_LITERAL:
            return self.number_type
        if type_.flags & TypeFlags.BIGINT_LITERAL:
            return self.bigint_type
        if type_.flags & TypeFlags.BOOLEAN_LITERAL:
            return self.boolean_type
        if type_.is_union() and not type_.is_boolean() and not type_.flags & TypeFlags.ENUM:
            return self.get_union_type([self.get_widened_literal_type(t) for t in type_.types])
        return type_

    def remove_undefined(self, type_: Type) -> Type:
        if type_.is_union():
            return self.get_union_type([t for t in type_.types if not t.is_undefined()])
        return type_

    def get_non_nullable_type(self, type_: Type) -> Type:
        if type_.is_union():
            return self.get_union_type([t for t in type_.types if not t.flags & TypeFlags.NULLABLE])
        if type_.flags & TypeFlags.NULLABLE:
            return self.never_type
        return type_

    def contains_type_parameter(self, type_: Type, deep: bool = False, _seen: set[int] | None = None) -> bool:
        """Whether ``type_`` mentions a free type parameter; ``deep`` also looks through object literals."""
        seen = _seen if _seen is not None else set()
        if type_.id in seen:
            return False
        seen.add(type_.id)
        if type_.is_type_parameter():
            return True
        if isinstance(type_, TemplateLiteralType):
            return any(self.contains_type_parameter(t, deep, seen) for t in type_.span_types)
        if type_.flags & TypeFlags.INSTANTIABLE:
            return True
        if type_.alias_type_arguments and any(self.contains_type_parameter(t, deep, seen) for t in type_.alias_type_arguments):
            return True
        if type_.is_union() or type_.is_intersection():
            return any(self.contains_type_parameter(t, deep, seen) for t in type_.types)
        if isinstance(type_, (TypeReference, TupleType, InterfaceType)):
            return any(self.contains_type_parameter(t, deep, seen) for t in type_.type_arguments)
        if deep and isinstance(type_, (AnonymousType, MappedType)):
            target = type_.target or type_
            declaration = self._get_instantiation_declaration(target)
            outer = self.get_outer_type_parameters(declaration) if declaration is not None else []
            if type_.mapper is not None:
                return any(self.contains_type_parameter(type_.mapper.map(p), deep, seen) for p in outer)
            return bool(outer)
        return False

    def is_declaration_exported(self, declaration: SyntaxNode) -> bool:
        """Whether the declaration is reachable as an export of its module or namespace."""
        if declaration.kind in ("identifier", "shorthand_property_identifier_pattern"):
            declarator = declaration.find_ancestor("variable_declarator")
            return declarator is not None and self.is_declaration_exported(declarator)
        if declaration.parent is not None and declaration.parent.kind == "export_statement":
            return True
        symbol = self.binder.get_symbol_of_declaration(declaration)
        return bool(symbol is not None and symbol.is_exported)

    def type_to_string(self, type_: Type) -> str:
        return TypePrinter(self).type_to_string(type_)

    def signature_to_string(self, signature: Signature) -> str:
        return TypePrinter(self).signature_to_string(signature)
