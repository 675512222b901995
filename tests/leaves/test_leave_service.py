from datetime import timedelta

import pytest

from src.personnel_hub.personnel_hub.common.datetime_utils import today
from src.personnel_hub.personnel_hub.core.enums import LeaveType, RequestStatus
from src.personnel_hub.personnel_hub.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.personnel_hub.personnel_hub.leaves.model import LeavePatch
from src.personnel_hub.personnel_hub.leaves.schema import parse_leave
from src.personnel_hub.personnel_hub.leaves.service import LeaveService, validate_leave_dates
from src.personnel_hub.personnel_hub.security.tenancy import TenancyResolver
from tests.fakes import InMemoryEmployees, InMemoryLeaves, add_employee, employee_caller, manager, owner


def _service():
    employees = InMemoryEmployees()
    add_employee(employees, "emp-1")
    add_employee(employees, "emp-2")
    leaves = InMemoryLeaves()
    return LeaveService(leaves, TenancyResolver(employees)), leaves


def _patch(days_ahead=1, length=2, leave_type=LeaveType.ANNUAL):
    start = today() + timedelta(days=days_ahead)
    return LeavePatch(type=leave_type, start_date=start, end_date=start + timedelta(days=length - 1), reason="Trip")


def test_create_starts_pending():
    service, _ = _service()
    leave = service.create(owner(), "emp-1", _patch())
    assert leave.status == RequestStatus.PENDING
    assert leave.owner_id == "owner-1"
    assert leave.days == 2


def test_approve_sets_approver_and_second_decision_conflicts():
    service, _ = _service()
    leave = service.create(employee_caller("emp-1"), "emp-1", _patch())

    approved = service.approve(owner(), "emp-1", leave.id, note="Enjoy")

    assert approved.status == RequestStatus.APPROVED
    assert approved.approved_by == "owner-1"
    assert approved.approved_at is not None
    assert approved.approval_note == "Enjoy"
    with pytest.raises(ConflictError):
        service.reject(owner(), "emp-1", leave.id)


def test_reject_pending_leave():
    service, _ = _service()
    leave = service.create(owner(), "emp-1", _patch())
    assert service.reject(owner(), "emp-1", leave.id).status == RequestStatus.REJECTED


def test_employee_cannot_decide():
    service, _ = _service()
    leave = service.create(employee_caller("emp-1"), "emp-1", _patch())
    with pytest.raises(AuthorizationError):
        service.approve(employee_caller("emp-1"), "emp-1", leave.id)


def test_employee_limited_to_own_leaves():
    service, _ = _service()
    service.create(owner(), "emp-2", _patch())

    with pytest.raises(AuthorizationError):
        service.list_leaves(employee_caller("emp-1"), "emp-2")
    assert service.list_leaves(employee_caller("emp-2"), "emp-2")["total"] == 1


def test_employee_cannot_edit_decided_leave_but_owner_can():
    service, _ = _service()
    leave = service.create(employee_caller("emp-1"), "emp-1", _patch())
    service.approve(owner(), "emp-1", leave.id)

    with pytest.raises(AuthorizationError):
        service.update(employee_caller("emp-1"), "emp-1", leave.id, LeavePatch(reason="changed"))
    with pytest.raises(AuthorizationError):
        service.delete(employee_caller("emp-1"), "emp-1", leave.id)

    updated = service.update(owner(), "emp-1", leave.id, LeavePatch(reason="changed"))
    assert updated.reason == "changed"


def test_update_validates_date_order():
    service, _ = _service()
    leave = service.create(owner(), "emp-1", _patch(days_ahead=5))
    with pytest.raises(ValidationError):
        service.update(owner(), "emp-1", leave.id, LeavePatch(end_date=today() + timedelta(days=1)))


def test_unknown_employee_is_not_found():
    service, _ = _service()
    with pytest.raises(NotFoundError):
        service.create(owner(), "ghost", _patch())


def test_other_owner_cannot_see_leave():
    service, _ = _service()
    leave = service.create(owner(), "emp-1", _patch())
    with pytest.raises(NotFoundError):
        service.get(owner("owner-2"), "emp-1", leave.id)


def test_manager_list_filters_by_status():
    employees = InMemoryEmployees()
    add_employee(employees, "emp-1", owner_id="manager-1")
    service = LeaveService(InMemoryLeaves(), TenancyResolver(employees))
    first = service.create(manager(), "emp-1", _patch())
    service.create(manager(), "emp-1", _patch(days_ahead=10))
    service.approve(manager(), "emp-1", first.id)

    page = service.list_leaves(manager(), "emp-1", status=RequestStatus.PENDING)

    assert page["total"] == 1
    assert page["leaves"][0].status == RequestStatus.PENDING


def test_statistics_count_days_for_year():
    service, _ = _service()
    leave = service.create(owner(), "emp-1", _patch(length=3))
    service.approve(owner(), "emp-1", leave.id)

    stats = service.statistics(owner(), "emp-1", year=leave.start_date.year)

    assert stats["total"] == 1
    assert stats["approved"] == 1
    assert stats["approved_days"] == 3
    assert stats["by_type"]["annual"] == 1


def test_validate_leave_dates_rules():
    start = today()
    validate_leave_dates(start, start)
    with pytest.raises(ValidationError, match="past"):
        validate_leave_dates(start - timedelta(days=1), start)
    with pytest.raises(ValidationError, match="before start"):
        validate_leave_dates(start + timedelta(days=2), start + timedelta(days=1))
    validate_leave_dates(start - timedelta(days=3), start, check_past=False)


def test_parse_leave_requires_known_type():
    with pytest.raises(ValidationError):
        parse_leave({"type": "sabbatical", "start_date": "2030-01-01", "end_date": "2030-01-02"})
