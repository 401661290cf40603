"""
Symbol filters.

A filter decides which members make it into the kind graph. Callers pass either
a predicate over ``SymbolMetadata`` or one or more ``TypeFilterDescriptor``
values naming the dependency types (and optionally the properties of those
types) that should be kept. Descriptors arrive as plain dicts from MCP clients.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .symbol_metadata import SymbolMetadata

SymbolFilter = Callable[[SymbolMetadata], bool]


@dataclass
class TypeFilterEntry:
    name: str
    properties: list[str] | None = None  # None keeps every property


@dataclass
class TypeFilterDescriptor:
    """Dependency types to keep, optionally restricted to one package."""

    types: list[TypeFilterEntry] = field(default_factory=list)
    module_specifier: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypeFilterDescriptor":
        if not isinstance(data, dict):
            raise ValueError(f"Filter descriptor must be an object, got {type(data).__name__}")
        types = []
        for entry in data.get("types") or []:
            if isinstance(entry, str):
                types.append(TypeFilterEntry(name=entry))
                continue
            if not isinstance(entry, dict) or "name" not in entry:
                raise ValueError(f"Filter type entries need a name: {entry!r}")
            properties = entry.get("properties")
            types.append(TypeFilterEntry(name=entry["name"], properties=list(properties) if properties is not None else None))
        module_specifier = data.get("moduleSpecifier", data.get("module_specifier"))
        return cls(types=types, module_specifier=module_specifier)

    def to_dict(self) -> dict[str, Any]:
        types = []
        for entry in sorted(self.types, key=lambda e: e.name):
            item: dict[str, Any] = {"name": entry.name}
            if entry.properties is not None:
                item["properties"] = sorted(entry.properties)
            types.append(item)
        data: dict[str, Any] = {"types": types}
        if self.module_specifier is not None:
            data["moduleSpecifier"] = self.module_specifier
        return data

    def matches(self, metadata: SymbolMetadata) -> bool:
        if self.module_specifier is not None:
            path = (metadata.file_path or "").replace("\\", "/")
            if f"node_modules/{self.module_specifier}" not in path:
                return False
        for entry in self.types:
            if metadata.owner_name == entry.name:
                return entry.properties is None or metadata.name in entry.properties
            # A top-level declaration listed by its own name
            if metadata.owner_name is None and metadata.name == entry.name:
                return True
        return False


TypeFilter = SymbolFilter | TypeFilterDescriptor | list[TypeFilterDescriptor] | dict | list[dict]


def default_filter(metadata: SymbolMetadata) -> bool:
    return not metadata.is_private and not metadata.is_in_node_modules


def normalize_descriptors(filter_: Any) -> list[TypeFilterDescriptor]:
    items = filter_ if isinstance(filter_, list) else [filter_]
    return [item if isinstance(item, TypeFilterDescriptor) else TypeFilterDescriptor.from_dict(item) for item in items]


def create_symbol_filter(filter_: TypeFilter | None) -> SymbolFilter:
    """Turn any accepted filter form into a predicate."""
    if filter_ is None:
        return default_filter
    if callable(filter_):
        return filter_
    descriptors = normalize_descriptors(filter_)

    def descriptor_filter(metadata: SymbolMetadata) -> bool:
        if metadata.is_private:
            return False
        if not metadata.is_in_node_modules:
            return True
        return any(descriptor.matches(metadata) for descriptor in descriptors)

    return descriptor_filter


def serialize_filter(filter_: TypeFilter | None) -> str:
    """Stable cache-key form of a filter; descriptor order does not matter."""
    if filter_ is None:
        return "none"
    if callable(filter_):
        return f"callable:{id(filter_)}"
    descriptors = [d.to_dict() for d in normalize_descriptors(filter_)]
    descriptors.sort(key=lambda d: (d.get("moduleSpecifier") or "", json.dumps(d["types"], sort_keys=True)))
    return json.dumps(descriptors, sort_keys=True)
