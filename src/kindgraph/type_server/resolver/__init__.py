"""Kind graph resolver: turns types of the semantic model into serializable kinds."""

from .context import ResolutionContext, ResolutionPolicy, default_is_trivial_type
from .errors import MissingDeclarationError, ResolutionError, UnresolvedTypeExpressionError
from .symbol_metadata import SymbolMetadata
from .type_filter import (
    SymbolFilter,
    TypeFilter,
    TypeFilterDescriptor,
    TypeFilterEntry,
    create_symbol_filter,
    default_filter,
    serialize_filter,
)
from .type_resolver import resolve_signature, resolve_type

__all__ = [
    "MissingDeclarationError",
    "ResolutionContext",
    "ResolutionError",
    "ResolutionPolicy",
    "SymbolFilter",
    "SymbolMetadata",
    "TypeFilter",
    "TypeFilterDescriptor",
    "TypeFilterEntry",
    "UnresolvedTypeExpressionError",
    "create_symbol_filter",
    "default_filter",
    "default_is_trivial_type",
    "resolve_signature",
    "resolve_type",
    "serialize_filter",
]
