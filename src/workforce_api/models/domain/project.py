"""Project domain model."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from workforce_api.utils.clock import now_millis


class ProjectStatus(StrEnum):
    """Project status enum."""

    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"
    CANCELLED = "CANCELLED"


class ProjectPriority(StrEnum):
    """Project priority enum."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


ACTIVE_PROJECT_STATUSES = frozenset({ProjectStatus.PLANNING, ProjectStatus.IN_PROGRESS})


class Project(BaseModel):
    """Project domain model.

    ``project_manager`` (display name) predates ``project_manager_id`` and is
    still populated on historical records, so both are carried.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: ProjectPriority = ProjectPriority.MEDIUM
    project_manager: str | None = None
    project_manager_id: str | None = None
    department: str | None = None
    budget: float = 0.0
    spent: float = 0.0
    completion_percentage: int = 0
    start_date: int = 0
    end_date: int = 0
    team_member_ids: list[str] = Field(default_factory=list)
    created_at: int = 0
    updated_at: int = 0

    class Config:
        """Pydantic config."""

        from_attributes = True
        validate_assignment = True

    @field_validator("completion_percentage", mode="before")
    @classmethod
    def clamp_completion(cls, value: object) -> int:
        """Clamp completion into [0, 100] on every write."""
        if value is None:
            return 0
        return max(0, min(100, int(value)))

    @field_validator("team_member_ids", mode="before")
    @classmethod
    def drop_missing_members(cls, value: object) -> list:
        """Treat a missing member list as empty and skip null entries."""
        if value is None:
            return []
        return [member for member in value if member is not None]

    @property
    def is_active(self) -> bool:
        """Check if the project is planned or in progress."""
        return self.status in ACTIVE_PROJECT_STATUSES

    @property
    def is_completed(self) -> bool:
        """Check if the project is completed."""
        return self.status == ProjectStatus.COMPLETED

    def is_overdue(self, now: int | None = None) -> bool:
        """Check if the project is past its end date and not completed.

        Args:
            now: Reference time in epoch milliseconds (defaults to current time)

        Returns:
            True if an end date is set, lies strictly before ``now`` and the
            project is not completed
        """
        if now is None:
            now = now_millis()
        return self.end_date > 0 and self.end_date < now and not self.is_completed

    @property
    def remaining_budget(self) -> float:
        """Get budget minus spent."""
        return self.budget - self.spent

    @property
    def team_size(self) -> int:
        """Get the number of team members."""
        return len(self.team_member_ids)

    @property
    def last_touched_at(self) -> int:
        """Get updated_at when set, otherwise created_at."""
        return self.updated_at if self.updated_at > 0 else self.created_at

    @property
    def display_name(self) -> str:
        """Get the project name, or a placeholder for blank names."""
        if not self.name or not self.name.strip():
            return "Untitled Project"
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return self.id == other.id
