"""
Tests for layered .env loading.
"""

import os

import pytest

from busymango.core.config import load_layered_env


@pytest.fixture
def unset_root(monkeypatch):
    """Make sure MANGO_ROOT is absent now and removed again afterwards."""
    monkeypatch.setenv("MANGO_ROOT", "placeholder")
    monkeypatch.delenv("MANGO_ROOT")


class TestLoadLayeredEnv:
    """Test precedence between OS, project and user env files."""

    def test_user_env_loaded(self, tmp_path, unset_root):
        user_env = tmp_path / "user.env"
        user_env.write_text("MANGO_ROOT=/from/user\n")

        load_layered_env(project_dir=tmp_path, user_env_paths=[user_env], project_env_paths=[])

        assert os.environ["MANGO_ROOT"] == "/from/user"

    def test_project_beats_user(self, tmp_path, unset_root):
        user_env = tmp_path / "user.env"
        user_env.write_text("MANGO_ROOT=/from/user\n")
        (tmp_path / ".env").write_text("MANGO_ROOT=/from/project\n")

        load_layered_env(project_dir=tmp_path, user_env_paths=[user_env])

        assert os.environ["MANGO_ROOT"] == "/from/project"

    def test_os_env_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MANGO_ROOT", "/from/os")
        (tmp_path / ".env").write_text("MANGO_ROOT=/from/project\n")

        load_layered_env(project_dir=tmp_path, user_env_paths=[])

        assert os.environ["MANGO_ROOT"] == "/from/os"

    def test_missing_files_ignored(self, tmp_path, unset_root):
        load_layered_env(project_dir=tmp_path, user_env_paths=[tmp_path / "nope.env"])
        assert "MANGO_ROOT" not in os.environ

    def test_local_beats_dotenv_and_returns_exported(self, tmp_path, unset_root):
        (tmp_path / ".env").write_text("MANGO_ROOT=/from/env\n")
        (tmp_path / ".env.local").write_text("MANGO_ROOT=/from/local\n")

        exported = load_layered_env(project_dir=tmp_path, user_env_paths=[])

        assert exported == {"MANGO_ROOT": "/from/local"}
        assert os.environ["MANGO_ROOT"] == "/from/local"
