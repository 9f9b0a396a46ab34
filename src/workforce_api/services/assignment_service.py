"""Identity-to-employee and identity-to-project assignment logic.

Matching is deliberately lenient: identifiers are trimmed and compared
case-insensitively, and a blank identity field never matches anything, so two
records that both lack an e-mail are not treated as the same person.

Project assignment by manager *display name* is a legacy fallback kept for
historical records that only carry ``project_manager``. It breaks on renames
and duplicate names; the id-based matches are authoritative.
"""

from collections.abc import Iterable

from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.identity import Identity
from workforce_api.models.domain.project import Project

# Match method constants
MATCH_METHOD_ID = "id"
MATCH_METHOD_EMAIL = "email"
MATCH_METHOD_NAME = "display_name"

ASSIGNMENT_TEAM_MEMBER = "team_member"
ASSIGNMENT_MANAGER_ID = "manager_id"
ASSIGNMENT_MANAGER_NAME = "manager_name"  # legacy fallback


def normalize(value: str | None) -> str:
    """Trim and lowercase a possibly missing identifier."""
    return value.strip().lower() if value else ""


def _matches(needle: str, candidate: str | None) -> bool:
    return bool(needle) and needle == normalize(candidate)


def employee_match_method(identity: Identity, employee: Employee) -> str | None:
    """Determine how an employee record matches an identity.

    Args:
        identity: Current identity
        employee: Employee record to test

    Returns:
        The first matching method (id, email, display name) or None
    """
    if _matches(normalize(identity.uid), employee.id):
        return MATCH_METHOD_ID
    if _matches(normalize(identity.email), employee.email):
        return MATCH_METHOD_EMAIL
    if _matches(normalize(identity.display_name), employee.full_name):
        return MATCH_METHOD_NAME
    return None


def resolve_current_employee(
    identity: Identity | None,
    employees: Iterable[Employee | None],
) -> Employee | None:
    """Find the employee record belonging to an identity.

    Only one record should normally match, so the first match in source order
    wins. No match is a valid outcome (e.g. a director without an employee
    record), not an error.

    Args:
        identity: Current identity, may be None
        employees: All employee records

    Returns:
        Matching employee or None
    """
    if identity is None:
        return None

    for employee in employees:
        if employee is not None and employee_match_method(identity, employee):
            return employee
    return None


def project_assignment_reason(identity: Identity, project: Project) -> str | None:
    """Determine why a project is assigned to an identity.

    Args:
        identity: Current identity
        project: Project to test

    Returns:
        Assignment reason constant or None when not assigned
    """
    uid = normalize(identity.uid)
    if uid and any(normalize(member) == uid for member in project.team_member_ids):
        return ASSIGNMENT_TEAM_MEMBER
    if _matches(uid, project.project_manager_id):
        return ASSIGNMENT_MANAGER_ID
    if _matches(normalize(identity.display_name), project.project_manager):
        return ASSIGNMENT_MANAGER_NAME
    return None


def sort_by_last_touched(projects: Iterable[Project]) -> list[Project]:
    """Sort projects most recently touched first.

    Python's sort is stable, so ties keep their source order.
    """
    return sorted(projects, key=lambda project: project.last_touched_at, reverse=True)


def find_assigned_projects(
    identity: Identity | None,
    projects: Iterable[Project | None],
) -> list[Project]:
    """Find the projects an identity works on or manages.

    Args:
        identity: Current identity, may be None
        projects: All project records

    Returns:
        Assigned projects, most recently touched first
    """
    if identity is None:
        return []

    assigned = [
        project
        for project in projects
        if project is not None and project_assignment_reason(identity, project)
    ]
    return sort_by_last_touched(assigned)
