"""Tests for configuration."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from vcscore.config import EngineConfig

_ENV_VARS = [
    "GIT_EXECUTABLE",
    "VCS_DATA_DIR",
    "VCS_LOG_DIR",
    "VCS_LOG_FILENAME",
    "VCS_AUTO_REFRESH_INTERVAL",
    "VCS_LOG_PAGE_SIZE",
    "VCS_DIFF_CONTEXT_LINES",
]


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Isolate from the developer's environment and any .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_engine_config_defaults():
    """Test EngineConfig default values."""
    config = EngineConfig()
    assert config.git_executable is None
    assert config.data_dir == Path(".railroad")
    assert config.log_dir == Path("logs")
    assert config.log_filename == "railroad_vcs.log"
    assert config.auto_refresh_interval == 5.0
    assert config.log_page_size == 50
    assert config.diff_context_lines == 3


def test_engine_config_from_env_all_vars(monkeypatch):
    """Test loading all config values from environment."""
    monkeypatch.setenv("GIT_EXECUTABLE", "/opt/git/bin/git")
    monkeypatch.setenv("VCS_DATA_DIR", "/custom/data")
    monkeypatch.setenv("VCS_LOG_DIR", "/custom/logs")
    monkeypatch.setenv("VCS_LOG_FILENAME", "vcs.log")
    monkeypatch.setenv("VCS_AUTO_REFRESH_INTERVAL", "2.5")
    monkeypatch.setenv("VCS_LOG_PAGE_SIZE", "20")
    monkeypatch.setenv("VCS_DIFF_CONTEXT_LINES", "0")

    config = EngineConfig.from_env()
    assert config.git_executable == Path("/opt/git/bin/git")
    assert config.data_dir == Path("/custom/data")
    assert config.log_dir == Path("/custom/logs")
    assert config.log_filename == "vcs.log"
    assert config.auto_refresh_interval == 2.5
    assert config.log_page_size == 20
    assert config.diff_context_lines == 0


def test_engine_config_from_env_file(tmp_path):
    """Test loading config from .env file in the working directory."""
    (tmp_path / ".env").write_text("VCS_LOG_PAGE_SIZE=7\n")

    try:
        config = EngineConfig.from_env()
        assert config.log_page_size == 7
    finally:
        # load_dotenv writes straight to os.environ
        os.environ.pop("VCS_LOG_PAGE_SIZE", None)


@pytest.mark.parametrize(
    "name,value,field,default",
    [
        ("VCS_AUTO_REFRESH_INTERVAL", "soon", "auto_refresh_interval", 5.0),
        ("VCS_AUTO_REFRESH_INTERVAL", "-1", "auto_refresh_interval", 5.0),
        ("VCS_LOG_PAGE_SIZE", "many", "log_page_size", 50),
        ("VCS_LOG_PAGE_SIZE", "0", "log_page_size", 50),
        ("VCS_DIFF_CONTEXT_LINES", "-3", "diff_context_lines", 3),
    ],
)
def test_engine_config_invalid_values_keep_default(monkeypatch, name, value, field, default):
    """Test invalid numeric environment values fall back to defaults."""
    monkeypatch.setenv(name, value)
    config = EngineConfig.from_env()
    assert getattr(config, field) == default


def test_engine_config_validation():
    """Test direct construction validates ranges."""
    with pytest.raises(ValidationError):
        EngineConfig(auto_refresh_interval=0)
    with pytest.raises(ValidationError):
        EngineConfig(log_page_size=0)
