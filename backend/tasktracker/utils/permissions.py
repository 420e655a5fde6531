"""Role definitions and role-based permission helpers."""

from enum import Enum
from typing import Optional, Union


class Role(str, Enum):
    ADMIN = "admin"
    SOFTWARE_ENGINEER = "software-engineer"
    VIEWER = "viewer"
    ROAMING_INSPECTOR = "roaming-quality-inspector"

    @classmethod
    def parse(cls, value: Union[str, "Role", None]) -> Optional["Role"]:
        if isinstance(value, Role):
            return value
        text = str(value or "").strip()
        for role in cls:
            if role.value == text:
                return role
        return None


ADMIN = Role.ADMIN.value
SOFTWARE_ENGINEER = Role.SOFTWARE_ENGINEER.value
VIEWER = Role.VIEWER.value
ROAMING_INSPECTOR = Role.ROAMING_INSPECTOR.value

ALL_ROLES = tuple(r.value for r in Role)
ANALYTICS_ROLES = (ADMIN, VIEWER, SOFTWARE_ENGINEER)


def is_admin(role) -> bool:
    return Role.parse(role) is Role.ADMIN


def is_software_engineer(role) -> bool:
    return Role.parse(role) is Role.SOFTWARE_ENGINEER


def is_roaming_inspector(role) -> bool:
    return Role.parse(role) is Role.ROAMING_INSPECTOR


def can_manage_users(role) -> bool:
    return is_admin(role)


def can_manage_projects(role) -> bool:
    return is_admin(role)


def can_create_task(role) -> bool:
    # software engineers may only self-assign; enforced in task_service
    return Role.parse(role) in (Role.ADMIN, Role.SOFTWARE_ENGINEER)


def can_view_all_tasks(role) -> bool:
    return Role.parse(role) in (Role.ADMIN, Role.VIEWER)


def can_view_analytics(role) -> bool:
    return Role.parse(role) in (Role.ADMIN, Role.VIEWER, Role.SOFTWARE_ENGINEER)


def can_act_for_user(role, acting_user_id: int, target_user_id: int) -> bool:
    return is_admin(role) or acting_user_id == target_user_id
