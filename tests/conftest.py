"""
Pytest fixtures and configuration for minfs tests.

This file contains shared fixtures for isolating the credential
bootstrap from the real environment and filesystem.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from minfs.access import ENV_ACCESS_KEY, ENV_SECRET_KEY, ENV_SECRET_TOKEN
from minfs.logging import MinFSLogger


@pytest.fixture(autouse=True)
def clean_minfs_environment(monkeypatch):
    """Make sure no MINFS_* variable from the host leaks into a test."""
    for var in (ENV_ACCESS_KEY, ENV_SECRET_KEY, ENV_SECRET_TOKEN):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """Config directory that does not exist yet."""
    return tmp_path / "etc" / "minfs"


@pytest.fixture
def config_file(config_dir) -> Path:
    """Path of the credential file inside config_dir."""
    return config_dir / "config.json"


@pytest.fixture
def write_credentials(config_dir, config_file):
    """Write a credential record, as a previous run would have."""

    def write(record: Dict[str, Any]) -> bytes:
        config_dir.mkdir(parents=True, exist_ok=True)
        data = json.dumps(record).encode("utf-8")
        config_file.write_bytes(data)
        return data

    return write


@pytest.fixture
def logger():
    """Create a logger instance for testing."""
    return MinFSLogger("test_logger", verbose=False)
