"""Semantic model of TypeScript projects built on tree-sitter syntax trees."""

from .binder import Symbol, SymbolFlags
from .project import Project, SourceFile
from .types import Signature, SignatureKind, Type, TypeFlags
from .typescript_parser import TypeScriptParser

__all__ = [
    "Project",
    "Signature",
    "SignatureKind",
    "SourceFile",
    "Symbol",
    "SymbolFlags",
    "Type",
    "TypeFlags",
    "TypeScriptParser",
]
