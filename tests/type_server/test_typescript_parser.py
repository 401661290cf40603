"""
Tests for the tree-sitter backed TypeScript parser.
"""

import os
import tempfile
from pathlib import Path

from kindgraph.type_server.semantic.typescript_parser import TypeScriptParser


class TestTypeScriptParser:
    """Test TypeScript parser caching and error reporting."""

    def test_parse_valid_file(self):
        """A valid file parses without errors."""
        with tempfile.TemporaryDirectory() as temp_dir:
            ts_file = Path(temp_dir) / "valid.ts"
            ts_file.write_text("export interface User { id: number; name: string; }")

            parser = TypeScriptParser()
            result = parser.parse_file(str(ts_file))

            assert result.success is True
            assert result.tree is not None
            assert result.errors == []
            assert result.tree.root_node.type == "program"

    def test_parse_tsx_uses_tsx_grammar(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            tsx_file = Path(temp_dir) / "Button.tsx"
            tsx_file.write_text("export const Button = () => <button>Click</button>;")

            result = TypeScriptParser().parse_file(str(tsx_file))

            assert result.success is True
            assert result.errors == []

    def test_syntax_errors_are_reported(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            ts_file = Path(temp_dir) / "broken.ts"
            ts_file.write_text("export interface {\n  id: number\n")

            result = TypeScriptParser().parse_file(str(ts_file))

            assert result.success is True
            assert result.errors
            assert all(error.code == "PARSE_ERROR" for error in result.errors)

    def test_missing_file(self):
        result = TypeScriptParser().parse_file("/nonexistent/file.ts")

        assert result.success is False
        assert result.errors[0].code == "NOT_FOUND"

    def test_file_size_limit(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            ts_file = Path(temp_dir) / "large.ts"
            ts_file.write_text("// padding\n" * 200_000)

            result = TypeScriptParser(max_file_size_mb=1).parse_file(str(ts_file))

            assert result.success is False
            assert result.errors[0].code == "FILE_TOO_LARGE"

    def test_cache_hit_on_second_parse(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            ts_file = Path(temp_dir) / "cached.ts"
            ts_file.write_text("export const x = 1;")

            parser = TypeScriptParser()
            first = parser.parse_file(str(ts_file))
            second = parser.parse_file(str(ts_file))

            assert first.tree is second.tree
            stats = parser.get_parser_stats()
            assert stats.cache_misses == 1
            assert stats.cache_hits == 1
            assert stats.cache_hit_rate == 50.0

    def test_cache_invalidated_when_file_changes(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            ts_file = Path(temp_dir) / "changing.ts"
            ts_file.write_text("export const x = 1;")

            parser = TypeScriptParser()
            first = parser.parse_file(str(ts_file))

            ts_file.write_text("export const y = 2;")
            stat = ts_file.stat()
            os.utime(ts_file, (stat.st_atime, stat.st_mtime + 10))
            second = parser.parse_file(str(ts_file))

            assert first.tree is not second.tree
            assert b"y = 2" in second.source

    def test_lru_eviction(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            parser = TypeScriptParser(max_cached_files=2)
            for index in range(3):
                ts_file = Path(temp_dir) / f"file{index}.ts"
                ts_file.write_text(f"export const v{index} = {index};")
                parser.parse_file(str(ts_file))

            assert parser.get_cache_size() == 2

            parser.clear_cache()
            assert parser.get_cache_size() == 0

    def test_parse_source_is_not_cached(self):
        parser = TypeScriptParser()
        result = parser.parse_source("type A = string;", "virtual.ts")

        assert result.success is True
        assert result.source == b"type A = string;"
        assert parser.get_cache_size() == 0
        assert parser.get_parser_stats().files_parsed == 1
