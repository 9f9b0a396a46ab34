"""Identity domain model."""

from enum import StrEnum

from pydantic import BaseModel


class Role(StrEnum):
    """Roles an authenticated identity can hold."""

    MANAGING_DIRECTOR = "MANAGING_DIRECTOR"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    EMPLOYEE = "EMPLOYEE"


class Identity(BaseModel):
    """The currently authenticated actor.

    Established by the external identity provider; the core only reads it.
    """

    uid: str
    email: str | None = None
    display_name: str | None = None
    role: Role = Role.EMPLOYEE
    photo_url: str | None = None
    email_verified: bool = False

    class Config:
        """Pydantic config."""

        from_attributes = True

    def is_managing_director(self) -> bool:
        """Check if identity has the managing director role."""
        return self.role == Role.MANAGING_DIRECTOR

    def is_project_manager(self) -> bool:
        """Check if identity has the project manager role."""
        return self.role == Role.PROJECT_MANAGER

    def is_employee(self) -> bool:
        """Check if identity has the employee role."""
        return self.role == Role.EMPLOYEE
