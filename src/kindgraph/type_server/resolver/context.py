"""
Per-call resolution state.

A ``ResolutionContext`` is created for every top-level resolution and threaded
through every recursive call. It carries the semantic model, the active filter,
the expansion policy and the cycle guard: the ids of types and alias symbols
currently being expanded.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..semantic.types import Type
from .type_filter import SymbolFilter

if TYPE_CHECKING:
    from ..semantic.binder import Symbol
    from ..semantic.checker import TypeChecker


def default_is_trivial_type(checker: "TypeChecker", type_: Type) -> bool:
    """An object type with no properties, signatures or index signatures."""
    if not type_.is_object():
        return False
    resolved = checker.get_resolved_members(type_)
    return not (
        resolved.properties or resolved.call_signatures or resolved.construct_signatures or resolved.index_infos
    )


@dataclass
class ResolutionPolicy:
    """Tunable judgment calls of the expansion heuristics."""

    is_trivial_type: Callable[["TypeChecker", Type], bool] = default_is_trivial_type


@dataclass
class ResolutionContext:
    checker: "TypeChecker"
    filter: SymbolFilter
    policy: ResolutionPolicy = field(default_factory=ResolutionPolicy)
    resolving_types: set[int] = field(default_factory=set)
    resolving_aliases: set[int] = field(default_factory=set)
    # Absolute paths of project files that contributed declarations
    dependencies: set[str] = field(default_factory=set)
    # Dependency generics whose members are judged where they are instantiated
    instantiation_sites: set[int] = field(default_factory=set)

    def is_resolving(self, type_: Type) -> bool:
        if type_.id in self.resolving_types:
            return True
        return type_.alias_symbol is not None and type_.alias_symbol.id in self.resolving_aliases

    @contextmanager
    def guard(self, type_: Type) -> Iterator[None]:
        """Mark ``type_`` (and its alias) as being expanded for the duration of the block."""
        added_type = type_.id not in self.resolving_types
        alias = type_.alias_symbol
        added_alias = alias is not None and alias.id not in self.resolving_aliases
        if added_type:
            self.resolving_types.add(type_.id)
        if added_alias:
            self.resolving_aliases.add(alias.id)
        try:
            yield
        finally:
            if added_type:
                self.resolving_types.discard(type_.id)
            if added_alias:
                self.resolving_aliases.discard(alias.id)

    @contextmanager
    def instantiation_site(self, symbol: "Symbol | None") -> Iterator[None]:
        """Treat the members of ``symbol`` as local for the duration of the block."""
        added = symbol is not None and symbol.id not in self.instantiation_sites
        if added:
            self.instantiation_sites.add(symbol.id)
        try:
            yield
        finally:
            if added:
                self.instantiation_sites.discard(symbol.id)

    def is_instantiation_site(self, symbol: "Symbol | None") -> bool:
        return symbol is not None and symbol.id in self.instantiation_sites

    def record_dependency(self, path: str) -> None:
        self.dependencies.add(path)
