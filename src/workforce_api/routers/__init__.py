"""API routers package."""

from workforce_api.routers import dashboard, employees, invoices, projects, session, workspace

__all__ = [
    "dashboard",
    "employees",
    "invoices",
    "projects",
    "session",
    "workspace",
]
