from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet, Optional

from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError

if TYPE_CHECKING:
    from .tenancy import Caller


class Action(str, Enum):
    VIEW_RECORDS = "view_records"
    SUBMIT_REQUEST = "submit_request"
    EDIT_REQUEST = "edit_request"
    LOG_TIME = "log_time"
    DECIDE_REQUEST = "decide_request"
    MANAGE_EMPLOYEES = "manage_employees"
    MANAGE_PAYROLL = "manage_payroll"
    MANAGE_PAYMENTS = "manage_payments"
    LINK_EMPLOYEE_ACCOUNT = "link_employee_account"
    MANAGE_ACCOUNTS = "manage_accounts"
    MANAGE_BUSINESS = "manage_business"
    SELF_SERVICE = "self_service"


_EVERYONE = frozenset({Role.OWNER, Role.MANAGER, Role.EMPLOYEE})
_STAFF = frozenset({Role.OWNER, Role.MANAGER})
_OWNER = frozenset({Role.OWNER})

PERMISSIONS: Dict[Action, FrozenSet[Role]] = {
    Action.VIEW_RECORDS: _EVERYONE,
    Action.SUBMIT_REQUEST: _EVERYONE,
    Action.EDIT_REQUEST: _EVERYONE,
    Action.LOG_TIME: _EVERYONE,
    Action.DECIDE_REQUEST: _STAFF,
    Action.MANAGE_EMPLOYEES: _STAFF,
    Action.MANAGE_PAYROLL: _STAFF,
    Action.MANAGE_PAYMENTS: _STAFF,
    Action.LINK_EMPLOYEE_ACCOUNT: _STAFF,
    Action.MANAGE_ACCOUNTS: _OWNER,
    Action.MANAGE_BUSINESS: _OWNER,
    Action.SELF_SERVICE: frozenset({Role.EMPLOYEE}),
}


def is_allowed(role: Role, action: Action) -> bool:
    return role in PERMISSIONS.get(action, frozenset())


def authorize(caller: "Caller", action: Action, *, employee_id: Optional[str] = None) -> None:
    """Fail closed unless ``caller`` may perform ``action``.

    Employees are additionally pinned to their own employee record.
    """

    if not is_allowed(caller.role, action):
        raise AuthorizationError("You do not have permission to perform this action")
    if caller.role == Role.EMPLOYEE and employee_id is not None and employee_id != caller.employee_id:
        raise AuthorizationError("You can only access your own records")


def ensure_request_editable(caller: "Caller", status: RequestStatus) -> None:
    # Owners and managers are never blocked by status.
    if caller.role == Role.EMPLOYEE and status != RequestStatus.PENDING:
        raise AuthorizationError("Only pending requests can be changed")
