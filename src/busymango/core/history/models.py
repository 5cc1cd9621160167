"""
Persisted application state.

Serialized with camelCase keys:

    {
      "rootPath": "/home/me/notes/projects",
      "projectsHistory": [3, 0, 5],
      "currProject": 5,
      "currTodo": 41,
      "currTodoName": "water the plants"
    }
"""

from pydantic import BaseModel, ConfigDict, Field


class AppState(BaseModel):
    """
    Mutable application state shared by reference.

    History mutates the candidate fields and the log in place; the state
    store saves it at explicit points.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
    )

    root_path: str = Field(
        default="",
        alias="rootPath",
        description="Projects folder; empty means use config or the working directory",
    )
    projects_history: list[int] = Field(
        default_factory=list,
        alias="projectsHistory",
        description="Project ids worked on, oldest first",
    )
    curr_project: int | None = Field(
        default=None,
        alias="currProject",
        description="Project id of the pending candidate",
    )
    curr_todo: int | None = Field(
        default=None,
        alias="currTodo",
        description="Todo id of the pending candidate",
    )
    curr_todo_name: str = Field(
        default="",
        alias="currTodoName",
        description="Description snapshot of the pending candidate",
    )

    def clear_candidate(self) -> None:
        self.curr_project = None
        self.curr_todo = None
        self.curr_todo_name = ""
