"""
Pytest configuration and fixtures
"""

from datetime import datetime
from unittest.mock import Mock

import pytest
import yaml

from habitwidget.store.memory import MemoryStore


FIXED_NOW = datetime(2024, 1, 15, 8, 30, 0)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant render timestamp"""
    return lambda: FIXED_NOW


@pytest.fixture
def empty_store():
    """Shared store with no widget keys"""
    return MemoryStore(suite="group.com.example.habit")


@pytest.fixture
def full_store():
    """Shared store with both widget keys"""
    return MemoryStore(
        suite="group.com.example.habit",
        values={"widget_title": "3 Left", "widget_content": "Water, Stretch"},
    )


@pytest.fixture
def shared_dir(tmp_path):
    """Directory holding suite documents"""
    directory = tmp_path / "shared"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_config(shared_dir):
    """Sample configuration for testing"""
    return {
        "store": {
            "suite": "group.com.example.habit",
            "directory": str(shared_dir),
        },
        "widget": {
            "families": ["small", "medium"],
            "platform": "android",
        },
        "host_app": {
            "entry_point": "com.example.habit/.MainActivity",
            "command": "habit-app --foreground",
        },
        "host": {
            "refresh_interval": 60,
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    config_path = tmp_path / "widget.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def no_subprocess_calls(monkeypatch):
    """Prevent actual subprocess calls during testing"""
    monkeypatch.setattr("subprocess.Popen", Mock(return_value=Mock(returncode=0)))
    monkeypatch.setattr("subprocess.run", Mock(return_value=Mock(returncode=0)))
