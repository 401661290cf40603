"""Tests for type server configuration."""

import pytest

from kindgraph.type_server.config import KindgraphConfig, get_config, reset_config, set_config


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


class TestKindgraphConfig:
    def test_defaults(self):
        config = KindgraphConfig()

        assert config.file_root == "."
        assert config.cache_size == 256
        assert config.max_file_size_mb == 5
        assert config.effective_log_level == "INFO"

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MCP_FILE_ROOT", str(tmp_path))
        monkeypatch.setenv("KINDGRAPH_CACHE_SIZE", "16")
        monkeypatch.setenv("KINDGRAPH_MAX_FILE_SIZE_MB", "2")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        config = KindgraphConfig.from_environment()

        assert config.file_root == str(tmp_path)
        assert config.cache_size == 16
        assert config.max_file_size_mb == 2
        assert config.log_level == "WARNING"
        assert config.validate() == (True, [])

    def test_debug_mode_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "true")

        assert KindgraphConfig.from_environment().effective_log_level == "DEBUG"

    def test_validate_reports_every_problem(self, tmp_path):
        config = KindgraphConfig(
            file_root=str(tmp_path / "missing"),
            cache_size=0,
            max_file_size_mb=-1,
            log_level="LOUD",
        )

        is_valid, errors = config.validate()

        assert is_valid is False
        assert len(errors) == 4
        assert any("cache_size" in error for error in errors)
        assert any("file_root" in error for error in errors)


class TestGlobalConfig:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        config = KindgraphConfig(cache_size=8)
        set_config(config)

        assert get_config() is config

    def test_reset_rereads_environment(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("KINDGRAPH_CACHE_SIZE", "32")
        reset_config()

        second = get_config()

        assert second is not first
        assert second.cache_size == 32
