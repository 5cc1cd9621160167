"""
Tests for persisted application state.
"""

import json

import pytest

from busymango.core.errors import StateError
from busymango.core.history import AppState, StateStore, get_default_state_path


class TestAppState:
    """Test the state model."""

    def test_defaults(self):
        state = AppState()
        assert state.root_path == ""
        assert state.projects_history == []
        assert state.curr_project is None
        assert state.curr_todo is None
        assert state.curr_todo_name == ""

    def test_camel_case_aliases(self):
        state = AppState.model_validate(
            {"rootPath": "/notes", "projectsHistory": [1, 2], "currTodo": 4}
        )
        assert state.root_path == "/notes"
        assert state.projects_history == [1, 2]
        assert state.curr_todo == 4

    def test_clear_candidate(self):
        state = AppState(curr_project=1, curr_todo=2, curr_todo_name="x", projects_history=[1])
        state.clear_candidate()
        assert (state.curr_project, state.curr_todo, state.curr_todo_name) == (None, None, "")
        assert state.projects_history == [1]


class TestStateStore:
    """Test loading and saving state files."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert StateStore(tmp_path / "state.json").load() == AppState()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("")
        assert StateStore(path).load() == AppState()

    def test_save_writes_camel_case(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        StateStore(path).save(AppState(root_path="/notes", projects_history=[3, 1]))

        data = json.loads(path.read_text())
        assert data["rootPath"] == "/notes"
        assert data["projectsHistory"] == [3, 1]
        assert "currTodoName" in data

    def test_save_then_load(self, tmp_path):
        store = StateStore(tmp_path / "state.json")
        state = AppState(projects_history=[2], curr_project=2, curr_todo=5, curr_todo_name="x")
        store.save(state)
        assert store.load() == state

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        with pytest.raises(StateError, match="Invalid JSON"):
            StateStore(path).load()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"projectsHistory": "three"}))
        with pytest.raises(StateError, match="Invalid state"):
            StateStore(path).load()

    def test_default_path_follows_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        assert get_default_state_path() == tmp_path / "data" / "busymango" / "state.json"
        assert StateStore().path == tmp_path / "data" / "busymango" / "state.json"
