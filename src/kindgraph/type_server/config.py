"""Configuration management for the type server."""

import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class KindgraphConfig:
    """Configuration class for the type server."""

    # Project Configuration
    file_root: str = "."

    # Resolution Configuration
    cache_size: int = 256  # memoized resolve_type_at_location results
    max_file_size_mb: int = 5

    # Runtime Configuration
    debug_mode: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "KindgraphConfig":
        """Create configuration from environment variables."""
        return cls(
            file_root=os.getenv("MCP_FILE_ROOT", "."),
            cache_size=int(os.getenv("KINDGRAPH_CACHE_SIZE", "256")),
            max_file_size_mb=int(os.getenv("KINDGRAPH_MAX_FILE_SIZE_MB", "5")),
            debug_mode=os.getenv("DEBUG_MODE", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration settings."""
        errors = []

        if self.cache_size <= 0:
            errors.append("cache_size must be positive")

        if self.max_file_size_mb <= 0:
            errors.append("max_file_size_mb must be positive")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}")

        if not os.path.isdir(self.file_root):
            errors.append(f"file_root does not exist: {self.file_root}")

        return len(errors) == 0, errors

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


# Global configuration instance
_config: KindgraphConfig | None = None


def get_config() -> KindgraphConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = KindgraphConfig.from_environment()
    return _config


def set_config(config: KindgraphConfig) -> None:
    global _config
    _config = config


def reset_config() -> None:
    """Drop the global instance so the next get_config() re-reads the environment."""
    global _config
    _config = None
