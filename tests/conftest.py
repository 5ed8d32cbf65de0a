"""Shared pytest fixtures for json-yaml-bridge tests."""

import pytest
from pathlib import Path
from jyb.config import Configuration


@pytest.fixture
def data_dir():
    """Directory with test data files."""
    return Path(__file__).parent / "data"


@pytest.fixture
def config():
    """Default configuration."""
    return Configuration()


@pytest.fixture
def write_file(tmp_path):
    """Factory for creating text files in temporary directory.

    Usage:
        write_file("users.json", '{"name": "Alice"}')
    """

    def _create(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="UTF-8")
        return path

    return _create
