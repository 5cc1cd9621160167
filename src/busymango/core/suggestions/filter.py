"""
Todo selection filters.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from busymango.core.documents.models import Priority, Todo


class Filter(BaseModel):
    """
    Predicate bundle choosing which todos are eligible for suggestion.

    Precedence: a project name alone decides, else an area name alone
    decides, else the priority switches are OR-ed together. A filter with
    nothing set lets every todo through.

    Example:
        >>> Filter(urgent=True, project_name="Home").matches(todo)  # only project counts
    """

    model_config = ConfigDict(frozen=True)

    ultra_urgent: bool = Field(default=False, description="Urgency is URGENT")
    urgent: bool = Field(default=False, description="Urgency is NORMAL or better")
    strategic: bool = Field(default=False, description="Strategy is NORMAL or better")
    interesting: bool = Field(default=False, description="Interest is NORMAL or better")
    area_name: str = Field(default="", description="Project carries this area tag")
    project_name: str = Field(default="", description="Project has exactly this name")

    def is_empty(self) -> bool:
        return not (
            self.ultra_urgent
            or self.urgent
            or self.strategic
            or self.interesting
            or self.area_name
            or self.project_name
        )

    def matches(self, todo: Todo) -> bool:
        if self.is_empty():
            return True

        project = todo.project
        if self.project_name:
            return project is not None and project.name == self.project_name
        if self.area_name:
            return project is not None and self.area_name in project.areas

        return (
            (self.ultra_urgent and todo.urgency == Priority.URGENT)
            or (self.urgent and todo.urgency.is_considerable)
            or (self.strategic and todo.strategy.is_considerable)
            or (self.interesting and todo.interest.is_considerable)
        )

    def apply(self, todos: Iterable[Todo]) -> list[Todo]:
        """Matching todos, order preserved."""
        return [todo for todo in todos if self.matches(todo)]

    def describe(self) -> str:
        """Short human-readable summary of the active selectors."""
        if self.project_name:
            return f"project '{self.project_name}'"
        if self.area_name:
            return f"area '{self.area_name}'"
        active = [
            name
            for name, enabled in (
                ("ultra urgent", self.ultra_urgent),
                ("urgent", self.urgent),
                ("strategic", self.strategic),
                ("interesting", self.interesting),
            )
            if enabled
        ]
        return " or ".join(active) if active else "any"
