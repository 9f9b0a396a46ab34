"""Workspace DTOs."""

from enum import StrEnum

from pydantic import BaseModel, Field


class WorkspaceSection(StrEnum):
    """Sections of the employee workspace."""

    MY_TASKS = "MY_TASKS"
    MY_PROJECTS = "MY_PROJECTS"
    TIME_SHEET = "TIME_SHEET"
    REQUESTS = "REQUESTS"
    DOCUMENTS = "DOCUMENTS"
    TEAM = "TEAM"
    PROFILE = "PROFILE"

    @property
    def display_name(self) -> str:
        """Get the human-readable section name."""
        return SECTION_DISPLAY_NAMES[self]

    @classmethod
    def resolve(cls, value: str | None) -> "WorkspaceSection":
        """Resolve a section name, falling back to MY_TASKS for unknown input."""
        if not value:
            return cls.MY_TASKS
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.MY_TASKS


SECTION_DISPLAY_NAMES = {
    WorkspaceSection.MY_TASKS: "My Tasks",
    WorkspaceSection.MY_PROJECTS: "My Projects",
    WorkspaceSection.TIME_SHEET: "Time Sheet",
    WorkspaceSection.REQUESTS: "Leave Requests",
    WorkspaceSection.DOCUMENTS: "Documents",
    WorkspaceSection.TEAM: "My Team",
    WorkspaceSection.PROFILE: "My Profile",
}


class SummaryCard(BaseModel):
    """Headline figure shown above a section list."""

    title: str
    value: str
    subtitle: str
    style: str


class SectionItem(BaseModel):
    """Row of a section list."""

    title: str
    meta: str
    badge: str


class SectionView(BaseModel):
    """Rendered workspace section."""

    section: WorkspaceSection
    title: str
    subtitle: str
    cards: list[SummaryCard] = Field(default_factory=list)
    items: list[SectionItem] = Field(default_factory=list)
    work_status: str
    status_message: str


class WorkspaceResponse(BaseModel):
    """Workspace response DTO."""

    view: SectionView
    computed_at: int
    cache_state: str
