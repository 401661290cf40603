"""
Kind graph models produced by the type resolver.

Every resolved node is a dataclass carrying a ``kind`` tag plus the shared
``text``/``path``/``position`` fields. ``to_dict`` produces the JSON wire form
consumed by documentation renderers: camelCase keys, ``kind`` first and unset
(``None``) fields omitted.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _serialize(value: Any) -> Any:
    if isinstance(value, (Kind, Position, Location, JSDocTag)):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    return value


@dataclass
class Position:
    """1-based line and column of a point in a source file."""

    line: int
    column: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass
class Location:
    """Start and end of a declaration."""

    start: Position
    end: Position

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass
class JSDocTag:
    """A single ``@tag text`` entry from a documentation comment."""

    name: str
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.text is not None:
            data["text"] = self.text
        return data


@dataclass(kw_only=True)
class Kind:
    """Shared metadata present on every resolved node."""

    kind: ClassVar[str] = "Kind"

    text: str  # Stringified representation of the type
    path: str | None = None  # File of the declaration, relative to the project
    position: Location | None = None  # Declaration span

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind}
        for model_field in fields(self):
            value = getattr(self, model_field.name)
            if value is None:
                continue
            data[_camel_case(model_field.name)] = _serialize(value)
        return data


@dataclass(kw_only=True)
class DocumentableKind(Kind):
    """Shared metadata present on every declaration-like node."""

    name: str | None = None  # Implicit names (e.g. ``__type``) stay None
    description: str | None = None  # JSDoc description
    tags: list[JSDocTag] | None = None  # JSDoc tags


@dataclass(kw_only=True)
class CallableKind(Kind):
    """Fields shared by call-like nodes."""

    type_parameters: list["TypeParameterKind"] | None = None
    this_type: "TypeExpression | None" = None
    return_type: "TypeExpression | None" = None
    is_async: bool | None = None
    is_generator: bool | None = None


# Primitive kinds


@dataclass(kw_only=True)
class StringKind(Kind):
    kind: ClassVar[str] = "String"

    value: str | None = None  # Literal value, e.g. ``"a"``


@dataclass(kw_only=True)
class NumberKind(Kind):
    kind: ClassVar[str] = "Number"

    value: int | float | None = None


@dataclass(kw_only=True)
class BigIntKind(Kind):
    kind: ClassVar[str] = "BigInt"

    value: str | None = None  # Kept as text to stay JSON-safe


@dataclass(kw_only=True)
class BooleanKind(Kind):
    kind: ClassVar[str] = "Boolean"


@dataclass(kw_only=True)
class SymbolKind(Kind):
    kind: ClassVar[str] = "Symbol"


@dataclass(kw_only=True)
class NullKind(Kind):
    kind: ClassVar[str] = "Null"


@dataclass(kw_only=True)
class UndefinedKind(Kind):
    kind: ClassVar[str] = "Undefined"


@dataclass(kw_only=True)
class VoidKind(Kind):
    kind: ClassVar[str] = "Void"


@dataclass(kw_only=True)
class AnyKind(Kind):
    kind: ClassVar[str] = "Any"


@dataclass(kw_only=True)
class UnknownKind(Kind):
    kind: ClassVar[str] = "Unknown"


@dataclass(kw_only=True)
class NeverKind(Kind):
    kind: ClassVar[str] = "Never"


@dataclass(kw_only=True)
class ObjectKind(Kind):
    """The ``object`` keyword."""

    kind: ClassVar[str] = "Object"


# Structural kinds


@dataclass(kw_only=True)
class ArrayKind(Kind):
    kind: ClassVar[str] = "Array"

    element: "TypeExpression"
    is_readonly: bool | None = None


@dataclass(kw_only=True)
class TupleElementKind(Kind):
    kind: ClassVar[str] = "TupleElement"

    type: "TypeExpression"
    name: str | None = None  # Label, e.g. ``x`` in ``[x: number]``
    is_rest: bool | None = None
    is_optional: bool | None = None
    is_readonly: bool | None = None


@dataclass(kw_only=True)
class TupleKind(Kind):
    kind: ClassVar[str] = "Tuple"

    elements: list[TupleElementKind] = field(default_factory=list)
    is_readonly: bool | None = None


@dataclass(kw_only=True)
class TypeLiteralKind(Kind):
    kind: ClassVar[str] = "TypeLiteral"

    members: list["MemberKind"] = field(default_factory=list)


@dataclass(kw_only=True)
class UnionTypeKind(Kind):
    kind: ClassVar[str] = "UnionType"

    types: list["TypeExpression"] = field(default_factory=list)


@dataclass(kw_only=True)
class IntersectionTypeKind(Kind):
    kind: ClassVar[str] = "IntersectionType"

    types: list["TypeExpression"] = field(default_factory=list)


@dataclass(kw_only=True)
class TypeParameterKind(DocumentableKind):
    kind: ClassVar[str] = "TypeParameter"

    constraint_type: "TypeExpression | None" = None
    default_type: "TypeExpression | None" = None
    is_inferred: bool | None = None


@dataclass(kw_only=True)
class MappedTypeKind(Kind):
    kind: ClassVar[str] = "MappedType"

    parameter: TypeParameterKind  # ``Key in keyof Type``
    type: "TypeExpression"  # ``Type[Key]``
    is_readonly: bool | None = None
    is_optional: bool | None = None


@dataclass(kw_only=True)
class ConditionalTypeKind(Kind):
    kind: ClassVar[str] = "ConditionalType"

    check_type: "TypeExpression"
    extends_type: "TypeExpression"
    true_type: "TypeExpression"
    false_type: "TypeExpression"
    is_distributive: bool | None = None  # Check operand is a naked type parameter


@dataclass(kw_only=True)
class InferTypeKind(Kind):
    kind: ClassVar[str] = "InferType"

    parameter: TypeParameterKind


@dataclass(kw_only=True)
class TypeOperatorKind(Kind):
    kind: ClassVar[str] = "TypeOperator"

    operator: str  # "keyof", "readonly" or "unique"
    type: "TypeExpression"


@dataclass(kw_only=True)
class IndexedAccessTypeKind(Kind):
    kind: ClassVar[str] = "IndexedAccessType"

    object_type: "TypeExpression"
    index_type: "TypeExpression"


@dataclass(kw_only=True)
class TypeReferenceKind(Kind):
    """Shallow pointer to a type that was intentionally not expanded."""

    kind: ClassVar[str] = "TypeReference"

    name: str | None = None
    type_arguments: list["TypeExpression"] | None = None
    module_specifier: str | None = None  # e.g. "react" for imported references


# Members and parameters


@dataclass(kw_only=True)
class ParameterKind(DocumentableKind):
    kind: ClassVar[str] = "Parameter"

    type: "TypeExpression"
    initializer: Any = None  # Literal default value when statically known
    is_optional: bool | None = None
    is_rest: bool | None = None


@dataclass(kw_only=True)
class PropertySignatureKind(DocumentableKind):
    kind: ClassVar[str] = "PropertySignature"

    type: "TypeExpression"
    is_optional: bool | None = None
    is_readonly: bool | None = None


@dataclass(kw_only=True)
class MethodSignatureKind(DocumentableKind, CallableKind):
    kind: ClassVar[str] = "MethodSignature"

    parameters: list[ParameterKind] = field(default_factory=list)


@dataclass(kw_only=True)
class GetAccessorSignatureKind(DocumentableKind, CallableKind):
    kind: ClassVar[str] = "GetAccessorSignature"


@dataclass(kw_only=True)
class SetAccessorSignatureKind(DocumentableKind, CallableKind):
    kind: ClassVar[str] = "SetAccessorSignature"

    parameter: ParameterKind | None = None


@dataclass(kw_only=True)
class IndexSignatureParameterKind(Kind):
    kind: ClassVar[str] = "IndexSignatureParameter"

    name: str
    type: "TypeExpression"


@dataclass(kw_only=True)
class IndexSignatureKind(DocumentableKind):
    kind: ClassVar[str] = "IndexSignature"

    parameter: IndexSignatureParameterKind
    type: "TypeExpression"
    is_readonly: bool | None = None


@dataclass(kw_only=True)
class CallSignatureKind(DocumentableKind, CallableKind):
    kind: ClassVar[str] = "CallSignature"

    parameters: list[ParameterKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ConstructSignatureKind(DocumentableKind, CallableKind):
    kind: ClassVar[str] = "ConstructSignature"

    parameters: list[ParameterKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ComponentSignatureKind(DocumentableKind, CallableKind):
    kind: ClassVar[str] = "ComponentSignature"

    parameter: "TypeExpression | ParameterKind | None" = None


@dataclass(kw_only=True)
class FunctionTypeKind(CallableKind):
    kind: ClassVar[str] = "FunctionType"

    parameters: list[ParameterKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ComponentTypeKind(CallableKind):
    kind: ClassVar[str] = "ComponentType"

    parameter: ParameterKind | None = None


# Declarations


@dataclass(kw_only=True)
class FunctionKind(DocumentableKind):
    kind: ClassVar[str] = "Function"

    signatures: list[CallSignatureKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ComponentKind(DocumentableKind):
    kind: ClassVar[str] = "Component"

    signatures: list[ComponentSignatureKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ClassMemberKind(DocumentableKind):
    """Modifiers shared by class members."""

    scope: str | None = None  # "abstract" or "static"; instance members stay None
    visibility: str | None = None  # "public", "protected" or "private"
    is_override: bool | None = None


@dataclass(kw_only=True)
class ClassConstructorKind(DocumentableKind):
    kind: ClassVar[str] = "ClassConstructor"

    signatures: list[CallSignatureKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ClassGetAccessorKind(ClassMemberKind):
    kind: ClassVar[str] = "ClassGetAccessor"

    return_type: "TypeExpression"


@dataclass(kw_only=True)
class ClassSetAccessorKind(ClassMemberKind):
    kind: ClassVar[str] = "ClassSetAccessor"

    parameter: ParameterKind


@dataclass(kw_only=True)
class ClassMethodKind(ClassMemberKind):
    kind: ClassVar[str] = "ClassMethod"

    signatures: list[CallSignatureKind] = field(default_factory=list)


@dataclass(kw_only=True)
class ClassPropertyKind(ClassMemberKind):
    kind: ClassVar[str] = "ClassProperty"

    type: "TypeExpression"
    initializer: Any = None
    is_optional: bool | None = None
    is_readonly: bool | None = None


@dataclass(kw_only=True)
class ClassKind(DocumentableKind):
    kind: ClassVar[str] = "Class"

    constructor: ClassConstructorKind | None = None
    accessors: list[ClassGetAccessorKind | ClassSetAccessorKind] | None = None
    methods: list[ClassMethodKind] | None = None
    properties: list[ClassPropertyKind] | None = None
    extends: TypeReferenceKind | None = None
    implements: list[TypeReferenceKind] | None = None


@dataclass(kw_only=True)
class InterfaceKind(DocumentableKind):
    kind: ClassVar[str] = "Interface"

    type_parameters: list[TypeParameterKind] = field(default_factory=list)
    members: list["MemberKind"] = field(default_factory=list)


@dataclass(kw_only=True)
class TypeAliasKind(DocumentableKind):
    kind: ClassVar[str] = "TypeAlias"

    type_parameters: list[TypeParameterKind] = field(default_factory=list)
    type: "TypeExpression"


@dataclass(kw_only=True)
class EnumMemberKind(DocumentableKind):
    kind: ClassVar[str] = "EnumMember"

    value: str | int | float | None = None


@dataclass(kw_only=True)
class EnumKind(DocumentableKind):
    kind: ClassVar[str] = "Enum"

    members: list[EnumMemberKind] = field(default_factory=list)


@dataclass(kw_only=True)
class VariableKind(DocumentableKind):
    kind: ClassVar[str] = "Variable"

    type: "TypeExpression"


@dataclass(kw_only=True)
class NamespaceKind(DocumentableKind):
    kind: ClassVar[str] = "Namespace"

    types: list[Kind] = field(default_factory=list)


TypeExpression = (
    StringKind
    | NumberKind
    | BigIntKind
    | BooleanKind
    | SymbolKind
    | NullKind
    | UndefinedKind
    | VoidKind
    | AnyKind
    | UnknownKind
    | NeverKind
    | ObjectKind
    | ArrayKind
    | TupleKind
    | TypeLiteralKind
    | UnionTypeKind
    | IntersectionTypeKind
    | MappedTypeKind
    | ConditionalTypeKind
    | InferTypeKind
    | TypeOperatorKind
    | IndexedAccessTypeKind
    | TypeReferenceKind
    | FunctionTypeKind
    | ComponentTypeKind
)

MemberKind = (
    PropertySignatureKind
    | MethodSignatureKind
    | GetAccessorSignatureKind
    | SetAccessorSignatureKind
    | IndexSignatureKind
    | CallSignatureKind
    | ConstructSignatureKind
)

PRIMITIVE_KINDS = frozenset(
    {"String", "Number", "Boolean", "Symbol", "BigInt", "Null", "Undefined", "Void", "Never", "Any"}
)
