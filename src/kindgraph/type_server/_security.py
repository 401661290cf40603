"""Path validation for the type server tools."""

import os
from pathlib import Path
from typing import Any


def get_project_root() -> str:
    """Get project root from environment or default.

    Returns:
        Project root directory path from MCP_FILE_ROOT environment variable,
        or current directory as fallback
    """
    return os.getenv("MCP_FILE_ROOT", ".")


def validate_file_path(file_path: str, project_root: str) -> dict[str, Any]:
    """Resolve a file path and reject anything outside the project root.

    Returns:
        ``{"valid": True, "abs_path": Path}`` or ``{"valid": False, "error": str}``
    """
    if not file_path:
        return {"valid": False, "error": "File path cannot be empty"}
    try:
        project_path = Path(project_root).resolve()
        path = Path(file_path)
        abs_path = path.resolve() if path.is_absolute() else (project_path / path).resolve()
    except (OSError, RuntimeError, ValueError) as e:
        return {"valid": False, "error": f"Invalid file path: {e}"}

    try:
        abs_path.relative_to(project_path)
    except ValueError:
        return {"valid": False, "error": f"File path outside project root: {file_path}"}

    return {"valid": True, "abs_path": abs_path}
