"""
Tests for the candidate/recency history.
"""

import pytest

from busymango.core.history import AppState, History


@pytest.fixture
def projects(make_project):
    """Three projects: alpha (0), beta (1), gamma (2), todo ids 0/10/20."""
    return {
        0: make_project("alpha", 0, ["a1"], first_todo_id=0),
        1: make_project("beta", 1, ["b1"], first_todo_id=10),
        2: make_project("gamma", 2, ["c1"], first_todo_id=20),
    }


@pytest.fixture
def saves():
    return []


@pytest.fixture
def make_history(projects, saves):
    def _make(state: AppState) -> History:
        def todo_by_id(identifier):
            for project in projects.values():
                for todo in project.iter_todos():
                    if todo.id == identifier:
                        return todo
            return None

        return History(
            state,
            get_project_by_id=projects.get,
            get_todo_by_id=todo_by_id,
            save=lambda: saves.append(state.model_copy(deep=True)),
        )

    return _make


class TestCandidate:
    """Test the pending candidate."""

    def test_no_candidate_by_default(self, make_history):
        history = make_history(AppState())
        assert not history.has_candidate()
        assert history.get_candidate_todo() is None

    def test_set_candidate(self, make_history, projects):
        state = AppState()
        history = make_history(state)
        todo = projects[1].boards[0].todos[0]

        history.set_candidate(todo)

        assert history.has_candidate()
        assert (state.curr_project, state.curr_todo, state.curr_todo_name) == (1, 10, "b1")
        assert history.get_candidate_todo() is todo

    def test_label_prefers_live_todo(self, make_history):
        state = AppState(curr_project=1, curr_todo=10, curr_todo_name="old text")
        assert make_history(state).candidate_label() == ("beta", "b1")

    def test_label_falls_back_to_snapshot(self, make_history):
        state = AppState(curr_project=2, curr_todo=99, curr_todo_name="gone todo")
        assert make_history(state).candidate_label() == ("gamma", "gone todo")

    def test_label_unknown_project(self, make_history):
        state = AppState(curr_project=7, curr_todo=99, curr_todo_name="gone todo")
        assert make_history(state).candidate_label() == ("Unknown Project", "gone todo")


class TestAcceptReject:
    """Test resolving the candidate."""

    def test_accept_appends_project(self, make_history):
        state = AppState(projects_history=[0], curr_project=1, curr_todo=10)
        history = make_history(state)

        assert history.accept() == 1

        assert state.projects_history == [0, 1]
        assert not history.has_candidate()
        assert state.curr_project is None
        assert state.curr_todo_name == ""

    def test_accept_moves_project_to_most_recent(self, make_history):
        state = AppState(projects_history=[0, 1, 2], curr_project=0, curr_todo=0)
        make_history(state).accept()
        assert state.projects_history == [1, 2, 0]

    def test_accept_vanished_todo_uses_stored_project(self, make_history):
        state = AppState(curr_project=2, curr_todo=99, curr_todo_name="gone")
        make_history(state).accept()
        assert state.projects_history == [2]

    def test_accept_vanished_project_records_nothing(self, make_history):
        state = AppState(curr_project=7, curr_todo=99)
        make_history(state).accept()
        assert state.projects_history == []

    def test_reject_keeps_log(self, make_history):
        state = AppState(projects_history=[2], curr_project=1, curr_todo=10)
        history = make_history(state)
        history.reject()
        assert state.projects_history == [2]
        assert not history.has_candidate()

    def test_save_uses_callback(self, make_history, saves):
        state = AppState(curr_project=1, curr_todo=10)
        history = make_history(state)
        history.accept()
        history.save()
        assert len(saves) == 1
        assert saves[0].projects_history == [1]

    def test_save_without_callback(self, projects):
        History(AppState(), projects.get, lambda _: None).save()


class TestNormalize:
    """Test recency log normalization."""

    def test_keeps_most_recent_occurrence(self, make_history):
        state = AppState(projects_history=[0, 1, 0, 2])
        assert make_history(state).normalize() == [1, 0, 2]
        assert state.projects_history == [1, 0, 2]

    def test_drops_missing_projects(self, make_history):
        state = AppState(projects_history=[0, 9, 1, 9])
        assert make_history(state).normalize() == [0, 1]

    def test_history_projects_oldest_first(self, make_history, projects):
        state = AppState(projects_history=[2, 0, 2])
        assert make_history(state).history_projects() == [projects[0], projects[2]]

    def test_empty(self, make_history):
        assert make_history(AppState()).history_projects() == []
