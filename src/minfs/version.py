"""
Version management for the minfs tool.

This module provides version information by:
1. Reading from package metadata when installed
2. Reading from pyproject.toml during development
"""

import tomllib
from functools import lru_cache
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION_NAME = "minfs"


@lru_cache(maxsize=None)
def _get_version_from_pyproject() -> str:
    """Read version from pyproject.toml (for development)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
                return data["project"]["version"]
    return "0.0.0"


@lru_cache(maxsize=None)
def _get_version() -> str:
    """Get version from installed metadata, falling back to pyproject.toml."""
    try:
        return _metadata_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _get_version_from_pyproject()


def get_version() -> str:
    """
    Get the formatted version string with 'v' prefix.

    Returns:
        Version string formatted as 'v<version>' (e.g., 'v0.1.0').
    """
    return f"v{_get_version()}"


__version__ = _get_version()
