"""
Authorization decisions for job board actions.

All access rules live in one decision table:

1. Admins may do anything.
2. Ownership actions are allowed only to the resource owner.
3. Role actions are allowed only to the required role.
4. Open actions are allowed to everyone.

`authorize()` is pure and never touches the database. Callers resolve the
resource owner first and pass its id in.
"""
import logging
from enum import Enum
from typing import Optional

from app.core.errors import Forbidden
from app.core.principal import Principal, Role

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Named actions exposed by the core."""

    # Jobs
    LIST_JOBS = "list_jobs"
    GET_JOB = "get_job"
    VIEW_INACTIVE_JOB = "view_inactive_job"
    LIST_ALL_JOBS = "list_all_jobs"
    CREATE_JOB = "create_job"
    UPDATE_JOB = "update_job"
    DELETE_JOB = "delete_job"

    # Applications
    CREATE_APPLICATION = "create_application"
    VIEW_JOB_APPLICATIONS = "view_job_applications"
    UPDATE_APPLICATION_STATUS = "update_application_status"
    LIST_EMPLOYER_APPLICATIONS = "list_employer_applications"
    LIST_ALL_APPLICATIONS = "list_all_applications"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


OWNERSHIP_ACTIONS: frozenset = frozenset({
    Action.VIEW_INACTIVE_JOB,
    Action.UPDATE_JOB,
    Action.DELETE_JOB,
    Action.VIEW_JOB_APPLICATIONS,
    Action.UPDATE_APPLICATION_STATUS,
})

ROLE_ACTIONS: dict[Action, Role] = {
    Action.CREATE_JOB: Role.EMPLOYER,
    Action.LIST_EMPLOYER_APPLICATIONS: Role.EMPLOYER,
    Action.CREATE_APPLICATION: Role.JOB_SEEKER,
    Action.LIST_ALL_JOBS: Role.ADMIN,
    Action.LIST_ALL_APPLICATIONS: Role.ADMIN,
}

OPEN_ACTIONS: frozenset = frozenset({
    Action.LIST_JOBS,
    Action.GET_JOB,
})


def authorize(
    principal: Principal,
    action: Action,
    resource_owner_id: Optional[int] = None,
) -> Decision:
    """
    Decide whether `principal` may perform `action`.

    Args:
        principal: Authenticated actor
        action: Action being attempted
        resource_owner_id: Owner of the target resource, for ownership actions

    Returns:
        Decision.ALLOW or Decision.DENY
    """
    if principal.is_admin:
        return Decision.ALLOW

    if action in OWNERSHIP_ACTIONS:
        if resource_owner_id is not None and principal.subject_id == resource_owner_id:
            return Decision.ALLOW
        return Decision.DENY

    if action in ROLE_ACTIONS:
        if principal.role == ROLE_ACTIONS[action]:
            return Decision.ALLOW
        return Decision.DENY

    if action in OPEN_ACTIONS:
        return Decision.ALLOW

    # Unknown actions are denied
    return Decision.DENY


def require(
    principal: Principal,
    action: Action,
    resource_owner_id: Optional[int] = None,
) -> None:
    """
    Raise Forbidden unless `authorize()` allows the action.
    """
    if authorize(principal, action, resource_owner_id) is Decision.DENY:
        logger.warning(
            f"Access denied: subject_id={principal.subject_id}, role={principal.role.value}, "
            f"action={action.value}, owner_id={resource_owner_id}"
        )
        raise Forbidden(f"Not authorized to {action.value.replace('_', ' ')}")
