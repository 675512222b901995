import pytest

from src.personnel_hub.personnel_hub.core.enums import RequestStatus, Role
from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError
from src.personnel_hub.personnel_hub.security.policy import Action, authorize, ensure_request_editable, is_allowed
from tests.fakes import employee_caller, manager, owner


@pytest.mark.parametrize(
    "role,action,expected",
    [
        (Role.OWNER, Action.MANAGE_ACCOUNTS, True),
        (Role.MANAGER, Action.MANAGE_ACCOUNTS, False),
        (Role.MANAGER, Action.DECIDE_REQUEST, True),
        (Role.EMPLOYEE, Action.DECIDE_REQUEST, False),
        (Role.EMPLOYEE, Action.SUBMIT_REQUEST, True),
        (Role.EMPLOYEE, Action.MANAGE_PAYROLL, False),
        (Role.OWNER, Action.SELF_SERVICE, False),
        (Role.EMPLOYEE, Action.SELF_SERVICE, True),
    ],
)
def test_permission_table(role, action, expected):
    assert is_allowed(role, action) is expected


def test_employee_pinned_to_own_record():
    caller = employee_caller("emp-1")
    authorize(caller, Action.VIEW_RECORDS, employee_id="emp-1")
    with pytest.raises(AuthorizationError):
        authorize(caller, Action.VIEW_RECORDS, employee_id="emp-2")


def test_staff_not_pinned_to_an_employee():
    authorize(owner(), Action.MANAGE_PAYROLL, employee_id="emp-9")
    authorize(manager(), Action.DECIDE_REQUEST, employee_id="emp-9")


def test_only_pending_requests_editable_by_employee():
    ensure_request_editable(employee_caller("emp-1"), RequestStatus.PENDING)
    with pytest.raises(AuthorizationError):
        ensure_request_editable(employee_caller("emp-1"), RequestStatus.APPROVED)
    ensure_request_editable(manager(), RequestStatus.REJECTED)
