"""Type server models."""

from .kind_models import (
    AnyKind,
    ArrayKind,
    BigIntKind,
    BooleanKind,
    CallSignatureKind,
    ClassConstructorKind,
    ClassGetAccessorKind,
    ClassKind,
    ClassMethodKind,
    ClassPropertyKind,
    ClassSetAccessorKind,
    ComponentKind,
    ComponentSignatureKind,
    ComponentTypeKind,
    ConditionalTypeKind,
    ConstructSignatureKind,
    EnumKind,
    EnumMemberKind,
    FunctionKind,
    FunctionTypeKind,
    GetAccessorSignatureKind,
    IndexedAccessTypeKind,
    IndexSignatureKind,
    IndexSignatureParameterKind,
    InferTypeKind,
    InterfaceKind,
    IntersectionTypeKind,
    JSDocTag,
    Kind,
    Location,
    MappedTypeKind,
    MethodSignatureKind,
    NamespaceKind,
    NeverKind,
    NullKind,
    NumberKind,
    ObjectKind,
    ParameterKind,
    Position,
    PropertySignatureKind,
    SetAccessorSignatureKind,
    StringKind,
    SymbolKind,
    TupleElementKind,
    TupleKind,
    TypeAliasKind,
    TypeLiteralKind,
    TypeOperatorKind,
    TypeParameterKind,
    TypeReferenceKind,
    UndefinedKind,
    UnionTypeKind,
    UnknownKind,
    VariableKind,
    VoidKind,
)
from .typescript_models import (
    AnalysisError,
    CacheEntry,
    ParserStats,
    ParseResult,
    ResolveTypeResponse,
)

__all__ = [
    # Parser and tool responses
    "AnalysisError",
    "CacheEntry",
    "ParseResult",
    "ParserStats",
    "ResolveTypeResponse",
    # Kind graph
    "Kind",
    "JSDocTag",
    "Location",
    "Position",
    "AnyKind",
    "ArrayKind",
    "BigIntKind",
    "BooleanKind",
    "CallSignatureKind",
    "ClassConstructorKind",
    "ClassGetAccessorKind",
    "ClassKind",
    "ClassMethodKind",
    "ClassPropertyKind",
    "ClassSetAccessorKind",
    "ComponentKind",
    "ComponentSignatureKind",
    "ComponentTypeKind",
    "ConditionalTypeKind",
    "ConstructSignatureKind",
    "EnumKind",
    "EnumMemberKind",
    "FunctionKind",
    "FunctionTypeKind",
    "GetAccessorSignatureKind",
    "IndexedAccessTypeKind",
    "IndexSignatureKind",
    "IndexSignatureParameterKind",
    "InferTypeKind",
    "InterfaceKind",
    "IntersectionTypeKind",
    "MappedTypeKind",
    "MethodSignatureKind",
    "NamespaceKind",
    "NeverKind",
    "NullKind",
    "NumberKind",
    "ObjectKind",
    "ParameterKind",
    "PropertySignatureKind",
    "SetAccessorSignatureKind",
    "StringKind",
    "SymbolKind",
    "TupleElementKind",
    "TupleKind",
    "TypeAliasKind",
    "TypeLiteralKind",
    "TypeOperatorKind",
    "TypeParameterKind",
    "TypeReferenceKind",
    "UndefinedKind",
    "UnionTypeKind",
    "UnknownKind",
    "VariableKind",
    "VoidKind",
]
