"""
Project model: the set of source files the semantic model works over.

Files are added either from memory (tests, editors) or lazily from disk when a
module specifier is resolved. A bundled minimal standard library is always
present so global types such as ``Array`` and ``Promise`` resolve.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .lib import LIB_FILE_PATH, LIB_SOURCE
from .syntax import SyntaxNode
from .typescript_parser import TypeScriptParser

if TYPE_CHECKING:
    from .binder import Symbol
    from .checker import TypeChecker

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".ts", ".tsx", ".d.ts")
INDEX_FILES = ("index.ts", "index.tsx", "index.d.ts")


@dataclass(eq=False)
class SourceFile:
    """A parsed TypeScript file."""

    path: str
    source: bytes
    tree: Any  # tree_sitter.Tree
    is_lib: bool = False
    syntax_errors: int = 0
    # Populated by the binder
    locals: dict[str, "Symbol"] = field(default_factory=dict)
    symbol: "Symbol | None" = None
    is_external_module: bool = False
    bound: bool = False

    @property
    def root(self) -> SyntaxNode:
        return SyntaxNode(self.tree.root_node, self)

    @property
    def is_declaration_file(self) -> bool:
        return self.path.endswith(".d.ts")

    @property
    def is_in_node_modules(self) -> bool:
        return "/node_modules/" in self.path.replace(os.sep, "/")

    def __repr__(self) -> str:
        return f"SourceFile({self.path})"


class Project:
    """
    A collection of source files with module resolution.

    Adding or replacing a file drops the current type checker; the next
    ``get_type_checker`` call binds the project again.
    """

    def __init__(self, root_dir: str | None = None, parser: TypeScriptParser | None = None):
        self.root_dir = os.path.abspath(root_dir) if root_dir else os.getcwd()
        self.parser = parser or TypeScriptParser()
        self._files: dict[str, SourceFile] = {}
        self._checker: TypeChecker | None = None
        self.lib_file = self._add(LIB_FILE_PATH, LIB_SOURCE.encode("utf-8"), is_lib=True)

    @staticmethod
    def normalize_path(path: str) -> str:
        return os.path.normpath(path).replace(os.sep, "/")

    def _add(
        self,
        path: str,
        source: bytes,
        is_lib: bool = False,
        tree: Any = None,
        errors: int = 0,
        invalidate: bool = True,
    ) -> SourceFile:
        path = self.normalize_path(path)
        if tree is None:
            result = self.parser.parse_source(source, path)
            tree = result.tree
            errors = len(result.errors)
        source_file = SourceFile(path=path, source=source, tree=tree, is_lib=is_lib, syntax_errors=errors)
        self._files[path] = source_file
        if invalidate:
            self._checker = None
        return source_file

    def add_source_file(self, path: str, text: str) -> SourceFile:
        """Add or replace an in-memory file. Relative paths are anchored at the project root."""
        if not os.path.isabs(path):
            path = os.path.join(self.root_dir, path)
        return self._add(path, text.encode("utf-8"))

    def add_file_from_disk(self, path: str, invalidate: bool = True) -> SourceFile | None:
        """
        Parse a file from disk, reusing the current entry when the parser cache
        still holds the same tree.

        Files pulled in by module resolution pass ``invalidate=False`` so the
        checker that requested them stays usable; the current checker binds them
        on demand.

        Returns:
            The source file, or None when the file cannot be read
        """
        normalized = self.normalize_path(os.path.abspath(path))
        result = self.parser.parse_file(normalized)
        if not result.success:
            logger.debug("Could not load %s: %s", normalized, [error.message for error in result.errors])
            return None
        existing = self._files.get(normalized)
        if existing is not None and existing.tree is result.tree:
            return existing
        return self._add(normalized, result.source, tree=result.tree, errors=len(result.errors), invalidate=invalidate)

    def get_source_file(self, path: str) -> SourceFile | None:
        if not os.path.isabs(path):
            path = os.path.join(self.root_dir, path)
        return self._files.get(self.normalize_path(path))

    @property
    def source_files(self) -> list[SourceFile]:
        return list(self._files.values())

    def get_type_checker(self) -> "TypeChecker":
        if self._checker is None:
            from .checker import TypeChecker

            self._checker = TypeChecker(self)
        return self._checker

    # Module resolution

    def _lookup(self, path: str) -> SourceFile | None:
        path = self.normalize_path(path)
        source_file = self._files.get(path)
        if source_file is not None:
            return source_file
        if os.path.isfile(path):
            return self.add_file_from_disk(path, invalidate=False)
        return None

    def _resolve_as_file(self, base: str) -> SourceFile | None:
        if base.endswith(SOURCE_EXTENSIONS):
            found = self._lookup(base)
            if found is not None:
                return found
        for suffix in (".js", ".jsx", ".mjs", ".cjs"):
            if base.endswith(suffix):
                stem = base[: -len(suffix)]
                for extension in SOURCE_EXTENSIONS:
                    found = self._lookup(stem + extension)
                    if found is not None:
                        return found
        for extension in SOURCE_EXTENSIONS:
            found = self._lookup(base + extension)
            if found is not None:
                return found
        return None

    def _resolve_as_directory(self, directory: str) -> SourceFile | None:
        package_json = os.path.join(directory, "package.json")
        if os.path.isfile(package_json):
            try:
                with open(package_json, encoding="utf-8") as f:
                    manifest = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.debug("Ignoring unreadable %s: %s", package_json, e)
                manifest = {}
            for key in ("types", "typings"):
                entry = manifest.get(key)
                if isinstance(entry, str):
                    found = self._resolve_as_file(os.path.join(directory, entry))
                    if found is not None:
                        return found
        for index_file in INDEX_FILES:
            found = self._lookup(os.path.join(directory, index_file))
            if found is not None:
                return found
        return None

    def resolve_module(self, specifier: str, containing_file: SourceFile) -> SourceFile | None:
        """
        Resolve an import specifier relative to the importing file.

        Relative specifiers are tried as files and then as directories. Bare
        specifiers walk up through ``node_modules`` folders, checking the package
        itself and then its ``@types`` counterpart.
        """
        directory = os.path.dirname(containing_file.path)
        if specifier.startswith((".", "/")):
            base = os.path.join(directory, specifier)
            return self._resolve_as_file(base) or self._resolve_as_directory(base)

        types_name = specifier[1:].replace("/", "__") if specifier.startswith("@") else specifier
        current = directory
        while True:
            node_modules = os.path.join(current, "node_modules")
            for candidate in (os.path.join(node_modules, specifier), os.path.join(node_modules, "@types", types_name)):
                found = self._resolve_as_file(candidate) or self._resolve_as_directory(candidate)
                if found is not None:
                    return found
            parent = os.path.dirname(current)
            if parent == current:
                return None
            current = parent

    def relative_path(self, path: str) -> str:
        """Path for output: sliced at ``node_modules`` when present, otherwise relative to the root."""
        path = self.normalize_path(path)
        marker = path.rfind("/node_modules/")
        if marker != -1:
            return path[marker + 1 :]
        root = self.normalize_path(self.root_dir)
        if path.startswith(root + "/"):
            return path[len(root) + 1 :]
        return path
