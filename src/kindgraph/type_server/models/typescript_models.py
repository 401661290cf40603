"""
Parser and tool response models for FastMCP integration.

These dataclasses define the parse bookkeeping of the TypeScript parser and the
response structure of the type resolution tool.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AnalysisError:
    """Standard error information for analysis operations."""

    code: str  # Error code like "PARSE_ERROR", "NOT_FOUND", etc.
    message: str  # Human-readable error message
    file: str | None = None  # File path where error occurred
    line: int | None = None  # Line number where error occurred


@dataclass
class ParseResult:
    """Result of parsing a TypeScript file."""

    success: bool
    tree: Any | None = None  # tree_sitter.Tree object
    source: bytes | None = None  # Exact bytes the tree was parsed from
    errors: list[AnalysisError] = field(default_factory=list)
    parse_time_ms: float = 0.0


@dataclass
class CacheEntry:
    """Entry in the AST cache."""

    tree: Any  # tree_sitter.Tree object
    source: bytes  # Parsed bytes, kept so nodes can be sliced without re-reading
    file_hash: str  # Hash of file content for validation
    modification_time: float  # File modification timestamp
    parse_time_ms: float  # Time taken to parse
    access_count: int = 0  # For LRU eviction


@dataclass
class ParserStats:
    """Statistics about parser performance."""

    files_parsed: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    total_parse_time_ms: float = 0.0
    average_parse_time_ms: float = 0.0

    @property
    def cache_hit_rate(self) -> float:
        """Calculate cache hit rate as percentage."""
        total_requests = self.cache_hits + self.cache_misses
        return (self.cache_hits / total_requests * 100.0) if total_requests > 0 else 0.0


@dataclass
class ResolveTypeResponse:
    """Response for resolve_type_at_location tool."""

    type: dict[str, Any] | None  # Serialized Kind graph, None when nothing resolved
    errors: list[AnalysisError]
    success: bool = True
    dependencies: list[str] = field(default_factory=list)  # Local files the result was built from
    cached: bool = False  # Served from the in-process memo
    resolve_time_ms: float = 0.0
