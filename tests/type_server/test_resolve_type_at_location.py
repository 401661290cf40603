"""
Tests for the resolve_type_at_location tool: request validation, the
in-process memo and its invalidation.
"""

import os

import pytest

from kindgraph.type_server.config import reset_config
from kindgraph.type_server.tools.resolve_type_at_location import (
    LocationError,
    ResolutionCache,
    ResolvedLocation,
    get_resolution_cache,
    resolve_type_at_location,
    resolve_type_at_location_impl,
    reset_state,
)

BUTTON_SOURCE = """import { Wrap } from "./wrap";

type Inner = { a: number };

/** Props of the button */
export type Props = {
  label: string;
  size?: number;
  wrapped: Wrap<Inner>;
};
"""

WRAP_SOURCE = "export type Wrap<T> = { value: T };\n"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Project root with two files, configured as MCP_FILE_ROOT."""
    monkeypatch.setenv("MCP_FILE_ROOT", str(tmp_path))
    reset_config()
    reset_state()
    (tmp_path / "button.ts").write_text(BUTTON_SOURCE)
    (tmp_path / "wrap.ts").write_text(WRAP_SOURCE)
    yield tmp_path
    reset_state()
    reset_config()


def offset_of(source: str, text: str) -> int:
    return source.encode("utf-8").index(text.encode("utf-8"))


def touch(path, seconds: float = 10) -> None:
    stat = os.stat(path)
    os.utime(path, (stat.st_atime, stat.st_mtime + seconds))


class TestResolveTypeAtLocationImpl:
    def test_resolves_type_alias(self, workspace):
        response = resolve_type_at_location_impl("button.ts", offset_of(BUTTON_SOURCE, "Props ="), "type_alias_declaration")

        assert response.success is True
        assert response.errors == []
        assert response.type["kind"] == "TypeAlias"
        assert response.type["name"] == "Props"
        assert response.type["description"] == "Props of the button"
        assert response.type["path"] == "button.ts"
        members = response.type["type"]["members"]
        assert [member["name"] for member in members] == ["label", "size", "wrapped"]
        assert members[1]["isOptional"] is True
        assert response.cached is False

    def test_absolute_path(self, workspace):
        path = str(workspace / "wrap.ts")

        response = resolve_type_at_location_impl(path, offset_of(WRAP_SOURCE, "Wrap"), "type_alias_declaration")

        assert response.success is True
        assert response.type["typeParameters"][0]["name"] == "T"

    def test_records_expanded_dependency_files(self, workspace):
        response = resolve_type_at_location_impl("button.ts", offset_of(BUTTON_SOURCE, "Props ="), "type_alias_declaration")

        assert response.dependencies == ["wrap.ts"]

    def test_second_request_is_cached(self, workspace):
        position = offset_of(BUTTON_SOURCE, "Props =")

        first = resolve_type_at_location_impl("button.ts", position, "type_alias_declaration")
        second = resolve_type_at_location_impl("button.ts", position, "type_alias_declaration")

        assert first.cached is False
        assert second.cached is True
        assert second.type == first.type
        assert get_resolution_cache().hits == 1

    def test_unsupported_kind(self, workspace):
        response = resolve_type_at_location_impl("button.ts", 0, "statement_block")

        assert response.success is False
        assert response.errors[0].code == "INVALID_INPUT"

    def test_path_outside_root(self, workspace):
        response = resolve_type_at_location_impl("../outside.ts", 0, "type_alias_declaration")

        assert response.success is False
        assert response.errors[0].code == "INVALID_PATH"

    def test_empty_path(self, workspace):
        response = resolve_type_at_location_impl("", 0, "type_alias_declaration")

        assert response.errors[0].code == "INVALID_PATH"

    def test_missing_file(self, workspace):
        response = resolve_type_at_location_impl("missing.ts", 0, "type_alias_declaration")

        assert response.success is False
        assert response.errors[0].code == "NOT_FOUND"

    def test_no_declaration_at_position(self, workspace):
        response = resolve_type_at_location_impl("button.ts", offset_of(BUTTON_SOURCE, "Props ="), "interface_declaration")

        assert response.success is False
        assert response.errors[0].code == "NO_DECLARATION"

    def test_invalid_filter(self, workspace):
        response = resolve_type_at_location_impl(
            "button.ts", offset_of(BUTTON_SOURCE, "Props ="), "type_alias_declaration", filter={"types": [{"properties": []}]}
        )

        assert response.success is False
        assert response.errors[0].code == "INVALID_INPUT"

    def test_syntax_errors_become_warnings(self, workspace):
        source = "export type Broken = { a: string };\nconst = ;\n"
        (workspace / "broken.ts").write_text(source)

        response = resolve_type_at_location_impl("broken.ts", offset_of(source, "Broken"), "type_alias_declaration")

        assert response.success is True
        assert response.type["kind"] == "TypeAlias"
        assert response.errors[0].code == "PARSE_ERROR"


class TestResolutionMemo:
    def test_change_to_requested_file_invalidates(self, workspace):
        path = str(workspace / "button.ts")
        position = offset_of(BUTTON_SOURCE, "Props =")
        resolve_type_at_location(path, position, "type_alias_declaration")

        touch(path)
        result = resolve_type_at_location(path, position, "type_alias_declaration")

        assert result.cached is False

    def test_change_to_dependency_invalidates(self, workspace):
        path = str(workspace / "button.ts")
        position = offset_of(BUTTON_SOURCE, "Props =")
        resolve_type_at_location(path, position, "type_alias_declaration")

        touch(workspace / "wrap.ts")
        result = resolve_type_at_location(path, position, "type_alias_declaration")

        assert result.cached is False

    def test_unrelated_change_keeps_entry(self, workspace):
        path = str(workspace / "button.ts")
        position = offset_of(BUTTON_SOURCE, "Props =")
        resolve_type_at_location(path, position, "type_alias_declaration")

        (workspace / "other.ts").write_text("export const x = 1;")
        result = resolve_type_at_location(path, position, "type_alias_declaration")

        assert result.cached is True

    def test_filter_is_part_of_the_key(self, workspace):
        path = str(workspace / "button.ts")
        position = offset_of(BUTTON_SOURCE, "Props =")
        resolve_type_at_location(path, position, "type_alias_declaration")

        result = resolve_type_at_location(path, position, "type_alias_declaration", filter={"types": ["Theme"]})

        assert result.cached is False

    def test_callers_cannot_change_the_memo(self, workspace):
        path = str(workspace / "button.ts")
        position = offset_of(BUTTON_SOURCE, "Props =")
        first = resolve_type_at_location(path, position, "type_alias_declaration")
        first.kind.name = "Changed"

        second = resolve_type_at_location(path, position, "type_alias_declaration")
        second.kind.type.members.clear()
        third = resolve_type_at_location(path, position, "type_alias_declaration")

        assert second.cached is True
        assert second.kind.name == "Props"
        assert [member.name for member in third.kind.type.members] == ["label", "size", "wrapped"]

    def test_no_declaration_raises(self, workspace):
        with pytest.raises(LocationError) as exc_info:
            resolve_type_at_location(str(workspace / "button.ts"), 0, "enum_declaration")

        assert exc_info.value.code == "NO_DECLARATION"
        assert exc_info.value.to_analysis_error().code == "NO_DECLARATION"


class TestResolutionCache:
    def test_lru_eviction(self, tmp_path):
        cache = ResolutionCache(max_entries=2)
        for key in ("a", "b", "c"):
            cache.put(key, ResolvedLocation(kind=None), [])

        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("c") is not None

    def test_deleted_file_invalidates(self, tmp_path):
        path = tmp_path / "gone.ts"
        path.write_text("export {};")
        cache = ResolutionCache()
        cache.put("key", ResolvedLocation(kind=None), [str(path)])

        path.unlink()

        assert cache.get("key") is None
        assert cache.misses == 1

    def test_clear_resets_counters(self):
        cache = ResolutionCache()
        cache.put("key", ResolvedLocation(kind=None), [])
        cache.get("key")

        cache.clear()

        assert len(cache) == 0
        assert cache.hits == 0
