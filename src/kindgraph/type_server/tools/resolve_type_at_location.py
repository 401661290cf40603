"""
Resolve the declaration at a file position into a kind graph.

Results are memoized in-process. An entry stays valid while the modification
time of the requested file and of every project file the result was built
from is unchanged.
"""

import copy
import logging
import os
import time
from collections import OrderedDict
from dataclasses import dataclass, field

from .._security import get_project_root, validate_file_path
from ..config import get_config
from ..models.kind_models import Kind
from ..models.typescript_models import AnalysisError, ResolveTypeResponse
from ..resolver import ResolutionError, TypeFilter, resolve_type, serialize_filter
from ..resolver.declarations import find_declaration_at
from ..semantic.project import Project
from ..semantic.typescript_parser import TypeScriptParser

logger = logging.getLogger(__name__)

# Syntax kinds a request may name
DECLARATION_KINDS = (
    "variable_declarator",
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "internal_module",
    "type_parameter",
)

TYPE_ONLY_KINDS = ("interface_declaration", "type_alias_declaration", "type_parameter")


class LocationError(Exception):
    """An expected failure while locating or resolving a declaration."""

    def __init__(self, code: str, message: str, file: str | None = None, line: int | None = None):
        super().__init__(message)
        self.code = code
        self.file = file
        self.line = line

    def to_analysis_error(self) -> AnalysisError:
        return AnalysisError(code=self.code, message=str(self), file=self.file, line=self.line)


@dataclass
class ResolvedLocation:
    kind: Kind | None
    dependencies: list[str] = field(default_factory=list)
    syntax_errors: int = 0
    cached: bool = False


@dataclass
class MemoEntry:
    result: ResolvedLocation
    mtimes: dict[str, float]


def get_mtime(path: str) -> float | None:
    try:
        return os.path.getmtime(path)
    except OSError:
        return None


class ResolutionCache:
    """LRU memo of resolved locations with modification-time invalidation."""

    def __init__(self, max_entries: int = 256):
        self.max_entries = max_entries
        self._entries: OrderedDict[str, MemoEntry] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> ResolvedLocation | None:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None
        for path, mtime in entry.mtimes.items():
            if get_mtime(path) != mtime:
                logger.debug("Invalidating %s: %s changed", key, path)
                del self._entries[key]
                self.misses += 1
                return None
        self._entries.move_to_end(key)
        self.hits += 1
        return entry.result

    def put(self, key: str, result: ResolvedLocation, paths: list[str]) -> None:
        mtimes = {path: mtime for path in paths if (mtime := get_mtime(path)) is not None}
        self._entries[key] = MemoEntry(result=result, mtimes=mtimes)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s", evicted)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


_cache: ResolutionCache | None = None
_parser: TypeScriptParser | None = None


def get_resolution_cache() -> ResolutionCache:
    global _cache
    if _cache is None:
        _cache = ResolutionCache(max_entries=get_config().cache_size)
    return _cache


def get_parser() -> TypeScriptParser:
    """Parser shared across requests so unchanged dependency files are parsed once."""
    global _parser
    if _parser is None:
        _parser = TypeScriptParser(max_file_size_mb=get_config().max_file_size_mb)
    return _parser


def reset_state() -> None:
    """Drop the memo and the shared parser; the next request reads the configuration again."""
    global _cache, _parser
    _cache = None
    _parser = None


def make_cache_key(file_path: str, position: int, kind: str, filter_: TypeFilter | None) -> str:
    return f"{file_path}:{position}:{kind}|{serialize_filter(filter_)}"


def resolve_type_at_location(
    file_path: str,
    position: int,
    kind: str,
    filter: TypeFilter | None = None,
    project_root: str | None = None,
) -> ResolvedLocation:
    """
    Resolve the declaration of syntax kind ``kind`` at a byte offset.

    Args:
        file_path: Absolute path of a TypeScript/TSX file
        position: 0-based byte offset of the declaration's name (any offset inside it works)
        kind: Syntax kind of the declaration, e.g. ``"type_alias_declaration"``
        filter: Symbol filter predicate or type filter descriptors
        project_root: Root used for relative output paths (defaults to the file's directory)

    Raises:
        LocationError: When the file cannot be read or holds no such declaration
        ResolutionError: When the declaration's type cannot be described
    """
    file_path = Project.normalize_path(os.path.abspath(file_path))
    key = make_cache_key(file_path, position, kind, filter)
    cache = get_resolution_cache()
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit for %s", key)
        return ResolvedLocation(copy.deepcopy(cached.kind), list(cached.dependencies), cached.syntax_errors, cached=True)

    start_time = time.perf_counter()
    project = Project(root_dir=project_root or os.path.dirname(file_path), parser=get_parser())
    source_file = project.add_file_from_disk(file_path)
    if source_file is None:
        raise LocationError("NOT_FOUND", f"Could not read file: {file_path}", file=file_path)

    declaration = find_declaration_at(source_file.root, position, kind)
    if declaration is None:
        raise LocationError("NO_DECLARATION", f"No {kind} found at offset {position}", file=file_path)

    checker = project.get_type_checker()
    symbol = checker.get_symbol_of_declaration(declaration)
    if symbol is None:
        line = declaration.start_position[0]
        raise LocationError("NO_DECLARATION", f"Declaration at offset {position} has no symbol", file=file_path, line=line)
    if kind in TYPE_ONLY_KINDS:
        type_ = checker.get_declared_type_of_symbol(symbol)
    else:
        type_ = checker.get_type_of_symbol(symbol)

    dependencies: set[str] = set()
    resolved = resolve_type(checker, type_, declaration, filter, dependencies=dependencies)
    dependencies.discard(file_path)

    result = ResolvedLocation(
        kind=resolved,
        dependencies=sorted(dependencies),
        syntax_errors=source_file.syntax_errors,
    )
    cache.put(key, copy.deepcopy(result), [file_path, *result.dependencies])
    logger.debug("Resolved %s in %.2fms", key, (time.perf_counter() - start_time) * 1000)
    return result


def resolve_type_at_location_impl(
    file_path: str,
    position: int,
    kind: str,
    filter: TypeFilter | None = None,
) -> ResolveTypeResponse:
    """
    Resolve a declaration for MCP clients.

    Args:
        file_path: File to read, absolute or relative to MCP_FILE_ROOT
        position: 0-based byte offset of the declaration
        kind: Syntax kind of the declaration
        filter: Type filter descriptors for dependency types

    Returns:
        ResolveTypeResponse with the serialized kind graph and any errors
    """
    start_time = time.perf_counter()
    errors: list[AnalysisError] = []

    if kind not in DECLARATION_KINDS:
        errors.append(AnalysisError(code="INVALID_INPUT", message=f"Unsupported declaration kind: {kind}"))
        return ResolveTypeResponse(type=None, errors=errors, success=False)

    project_root = get_project_root()
    validation = validate_file_path(file_path, project_root)
    if not validation["valid"]:
        errors.append(AnalysisError(code="INVALID_PATH", message=validation["error"], file=file_path))
        return ResolveTypeResponse(type=None, errors=errors, success=False)

    abs_path = str(validation["abs_path"])
    if not os.path.isfile(abs_path):
        errors.append(AnalysisError(code="NOT_FOUND", message=f"File not found: {file_path}", file=file_path))
        return ResolveTypeResponse(type=None, errors=errors, success=False)

    try:
        result = resolve_type_at_location(abs_path, position, kind, filter, project_root=project_root)
    except LocationError as e:
        errors.append(e.to_analysis_error())
        return ResolveTypeResponse(type=None, errors=errors, success=False)
    except ResolutionError as e:
        logger.debug("Resolution failed for %s:%d", abs_path, position, exc_info=True)
        errors.append(AnalysisError(code="UNRESOLVED_TYPE", message=str(e), file=file_path))
        return ResolveTypeResponse(type=None, errors=errors, success=False)
    except ValueError as e:
        errors.append(AnalysisError(code="INVALID_INPUT", message=str(e), file=file_path))
        return ResolveTypeResponse(type=None, errors=errors, success=False)

    if result.syntax_errors:
        errors.append(
            AnalysisError(
                code="PARSE_ERROR",
                message=f"File has {result.syntax_errors} syntax error(s); the result may be incomplete",
                file=file_path,
            )
        )

    return ResolveTypeResponse(
        type=result.kind.to_dict() if result.kind is not None else None,
        errors=errors,
        dependencies=[os.path.relpath(path, project_root) for path in result.dependencies],
        cached=result.cached,
        resolve_time_ms=(time.perf_counter() - start_time) * 1000,
    )
