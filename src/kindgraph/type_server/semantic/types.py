"""
Type objects of the semantic model.

The classes mirror the shapes a TypeScript checker works with: intrinsic and
literal types, unions and intersections, type parameters, object types
(interfaces, generic references, anonymous literals, mapped types, tuples) and
the deferred type-level operators. Types are created and interned by the
TypeChecker; structural questions (properties, signatures, index infos) are
answered by the checker, not by the type objects themselves.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .binder import Symbol
    from .syntax import SyntaxNode

_type_ids = itertools.count(1)


class TypeFlags(IntFlag):
    ANY = 1 << 0
    UNKNOWN = 1 << 1
    STRING = 1 << 2
    NUMBER = 1 << 3
    BOOLEAN = 1 << 4
    ENUM = 1 << 5
    BIGINT = 1 << 6
    STRING_LITERAL = 1 << 7
    NUMBER_LITERAL = 1 << 8
    BOOLEAN_LITERAL = 1 << 9
    ENUM_LITERAL = 1 << 10
    BIGINT_LITERAL = 1 << 11
    ES_SYMBOL = 1 << 12
    UNIQUE_ES_SYMBOL = 1 << 13
    VOID = 1 << 14
    UNDEFINED = 1 << 15
    NULL = 1 << 16
    NEVER = 1 << 17
    TYPE_PARAMETER = 1 << 18
    OBJECT = 1 << 19
    UNION = 1 << 20
    INTERSECTION = 1 << 21
    INDEX = 1 << 22
    INDEXED_ACCESS = 1 << 23
    CONDITIONAL = 1 << 24
    TEMPLATE_LITERAL = 1 << 25
    NON_PRIMITIVE = 1 << 26

    LITERAL = STRING_LITERAL | NUMBER_LITERAL | BIGINT_LITERAL | BOOLEAN_LITERAL
    STRING_LIKE = STRING | STRING_LITERAL | TEMPLATE_LITERAL
    NUMBER_LIKE = NUMBER | NUMBER_LITERAL | ENUM
    NULLABLE = UNDEFINED | NULL
    PRIMITIVE = (
        STRING
        | NUMBER
        | BIGINT
        | BOOLEAN
        | ENUM
        | ENUM_LITERAL
        | ES_SYMBOL
        | VOID
        | UNDEFINED
        | NULL
        | LITERAL
        | UNIQUE_ES_SYMBOL
        | TEMPLATE_LITERAL
    )
    TYPE_VARIABLE = TYPE_PARAMETER | INDEXED_ACCESS
    INSTANTIABLE = TYPE_VARIABLE | INDEX | CONDITIONAL | TEMPLATE_LITERAL


class ObjectFlags(IntFlag):
    CLASS = 1 << 0
    INTERFACE = 1 << 1
    REFERENCE = 1 << 2
    TUPLE = 1 << 3
    ANONYMOUS = 1 << 4
    MAPPED = 1 << 5
    INSTANTIATED = 1 << 6
    OBJECT_LITERAL = 1 << 7
    ARRAY_LITERAL = 1 << 8


class SignatureKind(Enum):
    CALL = "call"
    CONSTRUCT = "construct"


class Type:
    """Base semantic type."""

    def __init__(self, flags: TypeFlags, symbol: "Symbol | None" = None):
        self.id = next(_type_ids)
        self.flags = flags
        self.symbol = symbol
        self.alias_symbol: "Symbol | None" = None
        self.alias_type_arguments: list[Type] = []

    object_flags = ObjectFlags(0)

    # Classification predicates

    def is_any(self) -> bool:
        return bool(self.flags & TypeFlags.ANY)

    def is_unknown(self) -> bool:
        return bool(self.flags & TypeFlags.UNKNOWN)

    def is_string(self) -> bool:
        return bool(self.flags & TypeFlags.STRING)

    def is_string_literal(self) -> bool:
        return bool(self.flags & TypeFlags.STRING_LITERAL)

    def is_template_literal(self) -> bool:
        return bool(self.flags & TypeFlags.TEMPLATE_LITERAL)

    def is_number(self) -> bool:
        return bool(self.flags & TypeFlags.NUMBER)

    def is_number_literal(self) -> bool:
        return bool(self.flags & TypeFlags.NUMBER_LITERAL)

    def is_bigint(self) -> bool:
        return bool(self.flags & TypeFlags.BIGINT)

    def is_bigint_literal(self) -> bool:
        return bool(self.flags & TypeFlags.BIGINT_LITERAL)

    def is_boolean(self) -> bool:
        return bool(self.flags & TypeFlags.BOOLEAN)

    def is_boolean_literal(self) -> bool:
        return bool(self.flags & TypeFlags.BOOLEAN_LITERAL)

    def is_enum_literal(self) -> bool:
        return bool(self.flags & TypeFlags.ENUM_LITERAL) and not self.is_union()

    def is_es_symbol(self) -> bool:
        return bool(self.flags & (TypeFlags.ES_SYMBOL | TypeFlags.UNIQUE_ES_SYMBOL))

    def is_void(self) -> bool:
        return bool(self.flags & TypeFlags.VOID)

    def is_undefined(self) -> bool:
        return bool(self.flags & TypeFlags.UNDEFINED)

    def is_null(self) -> bool:
        return bool(self.flags & TypeFlags.NULL)

    def is_never(self) -> bool:
        return bool(self.flags & TypeFlags.NEVER)

    def is_type_parameter(self) -> bool:
        return bool(self.flags & TypeFlags.TYPE_PARAMETER)

    def is_object(self) -> bool:
        return bool(self.flags & TypeFlags.OBJECT)

    def is_non_primitive(self) -> bool:
        return bool(self.flags & TypeFlags.NON_PRIMITIVE)

    def is_union(self) -> bool:
        return bool(self.flags & TypeFlags.UNION)

    def is_intersection(self) -> bool:
        return bool(self.flags & TypeFlags.INTERSECTION)

    def is_index(self) -> bool:
        return bool(self.flags & TypeFlags.INDEX)

    def is_indexed_access(self) -> bool:
        return bool(self.flags & TypeFlags.INDEXED_ACCESS)

    def is_conditional(self) -> bool:
        return bool(self.flags & TypeFlags.CONDITIONAL)

    def is_literal(self) -> bool:
        return bool(self.flags & TypeFlags.LITERAL)

    def is_primitive(self) -> bool:
        return bool(self.flags & TypeFlags.PRIMITIVE)

    def is_tuple(self) -> bool:
        return bool(self.object_flags & ObjectFlags.TUPLE)

    def is_array(self) -> bool:
        return False

    def is_reference(self) -> bool:
        return bool(self.object_flags & ObjectFlags.REFERENCE)

    def is_mapped(self) -> bool:
        return bool(self.object_flags & ObjectFlags.MAPPED)

    def is_class_or_interface(self) -> bool:
        return bool(self.object_flags & (ObjectFlags.CLASS | ObjectFlags.INTERFACE))

    @property
    def types(self) -> list["Type"]:
        """Constituents of a union or intersection; empty otherwise."""
        return []

    @property
    def type_arguments(self) -> list["Type"]:
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}#{self.id}"


class IntrinsicType(Type):
    """Keyword types: any, unknown, string, number, ..., object."""

    def __init__(self, flags: TypeFlags, intrinsic_name: str):
        super().__init__(flags)
        self.intrinsic_name = intrinsic_name


class LiteralType(Type):
    """String, number, bigint, boolean and enum literal types."""

    def __init__(self, flags: TypeFlags, value: Any, symbol: "Symbol | None" = None):
        super().__init__(flags, symbol)
        self.value = value
        self.regular_type: LiteralType = self
        self.fresh_type: LiteralType | None = None


class UnionOrIntersectionType(Type):
    def __init__(self, flags: TypeFlags, members: list[Type]):
        super().__init__(flags)
        self._members = members
        self.resolved: "ResolvedMembers | None" = None

    @property
    def types(self) -> list[Type]:
        return self._members


class UnionType(UnionOrIntersectionType):
    pass


class IntersectionType(UnionOrIntersectionType):
    pass


class TypeParameter(Type):
    """A generic type parameter, including ``infer`` declarations."""

    def __init__(self, symbol: "Symbol | None", declaration: "SyntaxNode | None" = None):
        super().__init__(TypeFlags.TYPE_PARAMETER, symbol)
        self.declaration = declaration
        self.is_infer = declaration is not None and declaration.kind == "infer_type"
        self.is_this_type = False
        # Filled lazily by the checker
        self.resolved_constraint: Type | None = None
        self.resolved_default: Type | None = None
        self.constraint_resolved = False
        self.default_resolved = False
        # Mapper applied to the declared constraint of an instantiated parameter
        self.mapper: "TypeMapper | None" = None
        self.target: "TypeParameter | None" = None

    @property
    def name(self) -> str:
        return self.symbol.name if self.symbol is not None else "T"


class IndexType(Type):
    """Deferred ``keyof T``."""

    def __init__(self, target: Type):
        super().__init__(TypeFlags.INDEX)
        self.target = target


class IndexedAccessType(Type):
    """Deferred ``T[K]``."""

    def __init__(self, object_type: Type, index_type: Type):
        super().__init__(TypeFlags.INDEXED_ACCESS)
        self.object_type = object_type
        self.index_type = index_type


@dataclass
class ConditionalRoot:
    """Shared, uninstantiated part of a conditional type."""

    node: "SyntaxNode"
    check_type: Type
    extends_type: Type
    is_distributive: bool
    infer_type_parameters: list[TypeParameter]
    outer_type_parameters: list[TypeParameter]
    alias_symbol: "Symbol | None" = None
    alias_type_arguments: list[Type] = field(default_factory=list)


class ConditionalType(Type):
    """A conditional type whose check type is still generic."""

    def __init__(self, root: ConditionalRoot, mapper: "TypeMapper | None"):
        super().__init__(TypeFlags.CONDITIONAL)
        self.root = root
        self.mapper = mapper
        self.check_type = root.check_type
        self.extends_type = root.extends_type


class TemplateLiteralType(Type):
    """``head${A}middle${B}tail`` with at least one non-literal span."""

    def __init__(self, texts: list[str], span_types: list[Type]):
        super().__init__(TypeFlags.TEMPLATE_LITERAL)
        self.texts = texts
        self.span_types = span_types


class ObjectType(Type):
    """Base for every object-shaped type. Members are resolved by the checker."""

    def __init__(self, object_flags: ObjectFlags, symbol: "Symbol | None" = None):
        super().__init__(TypeFlags.OBJECT, symbol)
        self.object_flags = object_flags
        self.resolved: "ResolvedMembers | None" = None


class InterfaceType(ObjectType):
    """Declared type of a class or interface. Generic declarations double as their own reference target."""

    def __init__(self, object_flags: ObjectFlags, symbol: "Symbol", type_parameters: list[TypeParameter]):
        if type_parameters:
            object_flags |= ObjectFlags.REFERENCE
        super().__init__(object_flags, symbol)
        self.type_parameters = type_parameters
        self.target: InterfaceType = self
        self.resolved_base_types: list[Type] | None = None

    @property
    def type_arguments(self) -> list[Type]:
        return list(self.type_parameters)


class TypeReference(ObjectType):
    """Instantiation of a generic class or interface, e.g. ``Array<string>``."""

    def __init__(self, target: InterfaceType, type_arguments: list[Type] | None, node: "SyntaxNode | None" = None):
        super().__init__(ObjectFlags.REFERENCE, target.symbol)
        self.target = target
        self._type_arguments = type_arguments
        # Deferred references resolve their arguments from this node on first access
        self.node = node
        self.resolve_arguments = None

    @property
    def type_arguments(self) -> list[Type]:
        if self._type_arguments is None:
            self._type_arguments = self.resolve_arguments(self) if self.resolve_arguments else []
        return self._type_arguments

    def is_array(self) -> bool:
        return self.target.symbol is not None and self.target.symbol.name in ("Array", "ReadonlyArray")

    def is_readonly_array(self) -> bool:
        return self.target.symbol is not None and self.target.symbol.name == "ReadonlyArray"


class TupleElementFlags(IntFlag):
    REQUIRED = 1 << 0
    OPTIONAL = 1 << 1
    REST = 1 << 2


@dataclass
class TupleElementInfo:
    """Syntactic metadata recorded for one tuple position."""

    flags: TupleElementFlags = TupleElementFlags.REQUIRED
    label: str | None = None
    declaration: "SyntaxNode | None" = None


class TupleType(ObjectType):
    """A tuple; element types are its type arguments."""

    def __init__(
        self,
        element_types: list[Type] | None,
        element_infos: list[TupleElementInfo],
        readonly: bool = False,
        node: "SyntaxNode | None" = None,
    ):
        super().__init__(ObjectFlags.TUPLE | ObjectFlags.REFERENCE)
        self._element_types = element_types
        self.element_infos = element_infos
        self.readonly = readonly
        self.node = node
        self.resolve_elements = None

    @property
    def type_arguments(self) -> list[Type]:
        if self._element_types is None:
            self._element_types = self.resolve_elements(self) if self.resolve_elements else []
        return self._element_types

    @property
    def element_types(self) -> list[Type]:
        return self.type_arguments


class AnonymousType(ObjectType):
    """
    Object type introduced by a declaration node: type literals, function types,
    object literal expressions, functions and the static side of classes.
    """

    def __init__(
        self,
        symbol: "Symbol",
        object_flags: ObjectFlags = ObjectFlags.ANONYMOUS,
        mapper: "TypeMapper | None" = None,
        target: "AnonymousType | None" = None,
    ):
        super().__init__(object_flags | ObjectFlags.ANONYMOUS, symbol)
        self.mapper = mapper
        self.target = target


class MappedType(ObjectType):
    """``{ [K in C]: X }``; members are materialized only when C is concrete."""

    def __init__(
        self,
        symbol: "Symbol",
        declaration: "SyntaxNode",
        type_parameter: TypeParameter,
        mapper: "TypeMapper | None" = None,
        target: "MappedType | None" = None,
    ):
        super().__init__(ObjectFlags.MAPPED | ObjectFlags.ANONYMOUS, symbol)
        self.declaration = declaration
        self.type_parameter = type_parameter
        self.mapper = mapper
        self.target = target
        self.readonly_modifier: str | None = None  # "+", "-" or None
        self.optional_modifier: str | None = None  # "+", "-" or None
        self.has_readonly = False
        self.has_optional = False


class TypeMapper:
    """Maps type parameters to types during instantiation."""

    def __init__(self, sources: list[TypeParameter], targets: list[Type]):
        self.sources = sources
        self.targets = targets
        self._index = {source.id: target for source, target in zip(sources, targets)}

    def map(self, type_: Type) -> Type:
        return self._index.get(type_.id, type_)

    def key(self, type_parameters: list[TypeParameter]) -> tuple[int, ...]:
        return tuple(self.map(parameter).id for parameter in type_parameters)


class CompositeTypeMapper(TypeMapper):
    """Applies ``first`` and then instantiates the result with ``second``."""

    def __init__(self, first: TypeMapper, second: TypeMapper, instantiate):
        self.first = first
        self.second = second
        self._instantiate = instantiate
        self.sources = first.sources + second.sources
        self.targets = []

    def map(self, type_: Type) -> Type:
        mapped = self.first.map(type_)
        if mapped is type_:
            return self.second.map(type_)
        return self._instantiate(mapped, self.second)


@dataclass
class IndexInfo:
    """An index signature of an object type."""

    key_type: Type
    type: Type
    is_readonly: bool = False
    declaration: "SyntaxNode | None" = None
    parameter_name: str = "key"


class Signature:
    """A call or construct signature."""

    def __init__(
        self,
        kind: SignatureKind,
        declaration: "SyntaxNode | None",
        type_parameters: list[TypeParameter],
        parameters: list["Symbol"],
        this_parameter: "Symbol | None" = None,
    ):
        self.kind = kind
        self.declaration = declaration
        self.type_parameters = type_parameters
        self.parameters = parameters
        self.this_parameter = this_parameter
        self.mapper: TypeMapper | None = None
        self.target: Signature | None = None
        self.resolved_return_type: Type | None = None
        # Return type supplied directly, e.g. the instance type of a default constructor
        self.fixed_return_type: Type | None = None

    @property
    def min_argument_count(self) -> int:
        count = 0
        for index, parameter in enumerate(self.parameters):
            if not (parameter.is_optional or parameter.is_rest or parameter.has_initializer):
                count = index + 1
        return count

    @property
    def has_rest_parameter(self) -> bool:
        return bool(self.parameters) and self.parameters[-1].is_rest

    def __repr__(self) -> str:
        return f"Signature({self.kind.value}, {self.declaration!r})"


@dataclass
class ResolvedMembers:
    """Structured members of an object type."""

    properties: dict[str, "Symbol"] = field(default_factory=dict)
    call_signatures: list[Signature] = field(default_factory=list)
    construct_signatures: list[Signature] = field(default_factory=list)
    index_infos: list[IndexInfo] = field(default_factory=list)
