"""Shared pytest fixtures for jsonview tests."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest
import yaml

from jsonview.infrastructure.config_manager import set_global_config
from jsonview.infrastructure.logger import Logger, LogLevel, set_global_logger
from jsonview.infrastructure.visibility_cache import (
    CacheConfig,
    VisibilityCache,
    set_global_visibility_cache,
)


class ListHandler(logging.Handler):
    """Logging handler keeping records in memory."""

    def __init__(self):
        super().__init__()
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> List[str]:
        return [record.getMessage() for record in self.records]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global config, logger and cache between tests."""
    for key in list(os.environ):
        if key.startswith("JSONVIEW_"):
            monkeypatch.delenv(key)
    set_global_config(None)
    set_global_logger(None)
    set_global_visibility_cache(None)
    yield
    set_global_config(None)
    set_global_logger(None)
    set_global_visibility_cache(None)


@pytest.fixture
def log_handler() -> ListHandler:
    return ListHandler()


@pytest.fixture
def logger(log_handler: ListHandler) -> Logger:
    """Debug-level logger writing to an in-memory handler."""
    return Logger(name="jsonview.test", level=LogLevel.DEBUG, handlers=[log_handler])


@pytest.fixture
def cache() -> VisibilityCache:
    """Fresh visibility cache, isolated from the process-wide one."""
    return VisibilityCache(CacheConfig(capacity=1000))


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample jsonview configuration."""
    return {
        "jsonview": {
            "cache": {"capacity": 64},
            "logging": {"level": "DEBUG"},
            "matches": {
                "sample_models:Address": {"excludes": ["zip"]},
            },
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "jsonview.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
