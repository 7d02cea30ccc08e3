"""Role policy — maps a role to the dashboard capabilities it grants."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


# Roles that may author courses/badges and look at learner data
_STAFF = {Role.ADMIN, Role.SUPER_ADMIN}


def can_manage_admins(role: Role) -> bool:
    return Role(role) is Role.SUPER_ADMIN


def can_manage_content(role: Role) -> bool:
    return Role(role) in _STAFF


def can_view_student_data(role: Role) -> bool:
    return Role(role) in _STAFF


@dataclass(frozen=True)
class Capabilities:
    manage_admins: bool
    manage_content: bool
    view_student_data: bool

    @property
    def has_any(self) -> bool:
        return self.manage_admins or self.manage_content or self.view_student_data


def capabilities_for(role: Role) -> Capabilities:
    """Resolve all three capabilities at once. Unknown role values raise ValueError."""
    return Capabilities(
        manage_admins=can_manage_admins(role),
        manage_content=can_manage_content(role),
        view_student_data=can_view_student_data(role),
    )
