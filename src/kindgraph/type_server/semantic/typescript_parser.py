"""
Core TypeScript parser with tree-sitter integration and caching.

This module provides the parsing layer underneath the semantic model. Files read
from disk are kept in an LRU cache that is invalidated when the file's
modification time moves forward; in-memory sources are parsed directly.
"""

import hashlib
import logging
import os
import time
from collections import OrderedDict
from typing import Any

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from ..models.typescript_models import (
    AnalysisError,
    CacheEntry,
    ParseResult,
    ParserStats,
)

logger = logging.getLogger(__name__)


class TypeScriptParser:
    """
    TypeScript parser with tree-sitter integration and caching.

    Features:
    - Separate parsers for TypeScript (.ts) and TSX (.tsx) files
    - LRU cache keyed by file path with a configurable entry limit
    - Performance statistics
    - Syntax errors reported as AnalysisError entries instead of exceptions
    """

    def __init__(self, max_cached_files: int = 512, max_file_size_mb: int = 5):
        """
        Initialize TypeScript parser with configuration.

        Args:
            max_cached_files: Maximum number of parsed files kept in the cache
            max_file_size_mb: Maximum individual file size to parse
        """
        self.max_cached_files = max_cached_files
        self.max_file_size_mb = max_file_size_mb
        self.max_file_size_bytes = max_file_size_mb * 1024 * 1024

        self._ts_parser = Parser()
        self._tsx_parser = Parser()
        self._ts_parser.language = Language(ts_typescript.language_typescript())
        self._tsx_parser.language = Language(ts_typescript.language_tsx())

        # LRU cache for parsed ASTs
        self._ast_cache: OrderedDict[str, CacheEntry] = OrderedDict()

        # Statistics tracking
        self._stats = ParserStats()

    def parse_source(self, source: str | bytes, file_path: str) -> ParseResult:
        """
        Parse TypeScript source that is not backed by a file on disk.

        Args:
            source: Source text or its UTF-8 bytes
            file_path: Virtual path, used to choose the TSX grammar and for error reports

        Returns:
            ParseResult with the tree and any syntax errors
        """
        start_time = time.perf_counter()
        content_bytes = source.encode("utf-8") if isinstance(source, str) else source
        result = self._parse_content(content_bytes, file_path)
        result.parse_time_ms = (time.perf_counter() - start_time) * 1000
        self._record_parse(result.parse_time_ms)
        return result

    def parse_file(self, file_path: str) -> ParseResult:
        """
        Parse a TypeScript or TSX file from disk.

        Args:
            file_path: Path to the TypeScript/TSX file

        Returns:
            ParseResult with success status, AST tree, and any errors
        """
        start_time = time.perf_counter()

        cache_entry = self._get_cached_entry(file_path)
        if cache_entry is not None:
            self._stats.cache_hits += 1
            cache_entry.access_count += 1
            self._ast_cache.move_to_end(file_path)
            return ParseResult(success=True, tree=cache_entry.tree, source=cache_entry.source, parse_time_ms=0.0)

        if not os.path.exists(file_path):
            error = AnalysisError(code="NOT_FOUND", message=f"File not found: {file_path}", file=file_path)
            return ParseResult(success=False, errors=[error])

        try:
            file_size = os.path.getsize(file_path)
            if file_size > self.max_file_size_bytes:
                error = AnalysisError(
                    code="FILE_TOO_LARGE",
                    message=f"File exceeds size limit ({self.max_file_size_mb}MB): {file_path}",
                    file=file_path,
                )
                return ParseResult(success=False, errors=[error])
            with open(file_path, "rb") as f:
                content_bytes = f.read()
        except OSError as e:
            error = AnalysisError(code="PERMISSION_DENIED", message=f"Cannot read file: {e}", file=file_path)
            return ParseResult(success=False, errors=[error])

        self._stats.cache_misses += 1
        result = self._parse_content(content_bytes, file_path)
        result.parse_time_ms = (time.perf_counter() - start_time) * 1000
        self._record_parse(result.parse_time_ms)

        if result.success and result.tree is not None:
            self._cache_result(file_path, result.tree, content_bytes, result.parse_time_ms)

        return result

    def _parse_content(self, content_bytes: bytes, file_path: str) -> ParseResult:
        """Parse bytes with the grammar matching the file extension."""
        parser = self._tsx_parser if file_path.endswith((".tsx", ".jsx")) else self._ts_parser
        tree = parser.parse(content_bytes)

        errors = []
        if tree.root_node.has_error:
            for node in self._find_error_nodes(tree.root_node):
                errors.append(
                    AnalysisError(
                        code="PARSE_ERROR",
                        message=f"Syntax error at line {node.start_point[0] + 1}",
                        file=file_path,
                        line=node.start_point[0] + 1,
                    )
                )
            logger.debug("Parsed %s with %d syntax errors", file_path, len(errors))

        return ParseResult(success=True, tree=tree, source=content_bytes, errors=errors)

    def _find_error_nodes(self, node: Any) -> list[Any]:
        """Recursively find all error nodes in the AST."""
        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)

        for child in node.children:
            errors.extend(self._find_error_nodes(child))

        return errors

    def _record_parse(self, parse_time_ms: float) -> None:
        self._stats.files_parsed += 1
        self._stats.total_parse_time_ms += parse_time_ms
        self._stats.average_parse_time_ms = self._stats.total_parse_time_ms / self._stats.files_parsed

    def _get_cached_entry(self, file_path: str) -> CacheEntry | None:
        """Return the cache entry for a file if it is still current."""
        cache_entry = self._ast_cache.get(file_path)
        if cache_entry is None:
            return None

        try:
            current_mtime = os.path.getmtime(file_path)
        except OSError:
            # File might have been deleted, invalidate cache
            self.invalidate_cache(file_path)
            return None

        if current_mtime > cache_entry.modification_time:
            self.invalidate_cache(file_path)
            return None

        return cache_entry

    def invalidate_cache(self, file_path: str) -> None:
        """
        Remove a file from the cache.

        Args:
            file_path: Path to the file to remove from cache
        """
        self._ast_cache.pop(file_path, None)

    def clear_cache(self) -> None:
        """Drop every cached tree."""
        self._ast_cache.clear()

    def _cache_result(self, file_path: str, tree: Any, content_bytes: bytes, parse_time_ms: float) -> None:
        """Cache a parse result with LRU eviction."""
        cache_entry = CacheEntry(
            tree=tree,
            source=content_bytes,
            file_hash=hashlib.sha256(content_bytes).hexdigest()[:16],
            modification_time=os.path.getmtime(file_path),
            parse_time_ms=parse_time_ms,
        )
        self._ast_cache[file_path] = cache_entry
        self._ast_cache.move_to_end(file_path)

        while len(self._ast_cache) > self.max_cached_files:
            evicted_path, _ = self._ast_cache.popitem(last=False)
            logger.debug("Evicted %s from parse cache", evicted_path)

    def get_parser_stats(self) -> ParserStats:
        """Return parser statistics."""
        return self._stats

    def get_cache_size(self) -> int:
        """Number of cached files."""
        return len(self._ast_cache)
