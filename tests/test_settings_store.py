"""Tests for the JSON settings store."""

from pathlib import Path

from vcscore.models.settings import GitSettings
from vcscore.settings_store import JsonSettingsStore


def test_missing_document_reads_as_none(tmp_path):
    """Test reading a key that was never written."""
    store = JsonSettingsStore(tmp_path)
    assert store.read_json("vcs/git.json", GitSettings) is None


def test_write_then_read(tmp_path):
    """Test a written document is read back and parent directories are created."""
    store = JsonSettingsStore(tmp_path / "data")
    store.write_json(
        "vcs/git.json",
        GitSettings(auto_refresh_interval=2.5, git_executable=Path("/usr/bin/git")),
    )

    assert (tmp_path / "data" / "vcs" / "git.json").exists()
    settings = store.read_json("vcs/git.json", GitSettings)
    assert settings.auto_refresh_interval == 2.5
    assert settings.git_executable == Path("/usr/bin/git")


def test_corrupt_document_reads_as_none(tmp_path):
    """Test invalid JSON is ignored rather than raised."""
    store = JsonSettingsStore(tmp_path)
    path = store.path_for("vcs/git.json")
    path.parent.mkdir(parents=True)
    path.write_text("{not json")

    assert store.read_json("vcs/git.json", GitSettings) is None


def test_wrong_types_read_as_none(tmp_path):
    """Test a document failing validation is ignored."""
    store = JsonSettingsStore(tmp_path)
    path = store.path_for("git.json")
    path.write_text('{"auto_refresh_interval": "often"}')

    assert store.read_json("git.json", GitSettings) is None
