"""Pytest configuration and shared fixtures."""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent / "src" / "python"))

from bender_config.config import Config, default  # noqa: E402


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_path(temp_dir: Path) -> Path:
    """Path for a config file that does not exist yet."""
    return temp_dir / "bender" / "config.yaml"


@pytest.fixture
def custom_config() -> Config:
    """A config with a value changed in every section."""
    config = default()
    config.server.host = "render-master.local"
    config.server.port = 8080
    config.paths.upload = "/mnt/farm/upload"
    config.limits.max_workers = 16
    config.logging.level = "DEBUG"
    return config


@pytest.fixture(autouse=True)
def clean_bender_env(monkeypatch):
    """Keep BENDER_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("BENDER_"):
            monkeypatch.delenv(key)
