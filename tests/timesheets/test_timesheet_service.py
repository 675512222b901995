from datetime import date

import pytest

from src.personnel_hub.personnel_hub.core.enums import TimesheetStatus
from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError, ValidationError
from src.personnel_hub.personnel_hub.security.tenancy import TenancyResolver
from src.personnel_hub.personnel_hub.timesheets.model import TimesheetPatch
from src.personnel_hub.personnel_hub.timesheets.schema import parse_timesheet
from src.personnel_hub.personnel_hub.timesheets.service import TimesheetService
from tests.fakes import InMemoryEmployees, InMemoryTimesheets, add_employee, employee_caller, owner


def _service():
    employees = InMemoryEmployees()
    add_employee(employees, "emp-1")
    add_employee(employees, "emp-2")
    return TimesheetService(InMemoryTimesheets(), TenancyResolver(employees))


def test_create_derives_hours_from_times():
    service = _service()
    ts = service.create(
        owner(), "emp-1", TimesheetPatch(date=date(2025, 3, 3), check_in_time="09:00", check_out_time="17:30")
    )
    assert ts.total_hours_worked == 8.5
    assert ts.status == TimesheetStatus.WORKED


def test_update_recomputes_hours_when_time_changes():
    service = _service()
    ts = service.create(
        owner(), "emp-1", TimesheetPatch(date=date(2025, 3, 3), check_in_time="09:00", check_out_time="17:00")
    )

    updated = service.update(owner(), "emp-1", ts.id, TimesheetPatch(check_out_time="18:00"))

    assert updated.total_hours_worked == 9.0


def test_employee_logs_own_time_only():
    service = _service()
    service.create(employee_caller("emp-1"), "emp-1", TimesheetPatch(date=date(2025, 3, 3)))
    with pytest.raises(AuthorizationError):
        service.create(employee_caller("emp-1"), "emp-2", TimesheetPatch(date=date(2025, 3, 3)))


def test_list_filters_by_month_and_orders_by_date():
    service = _service()
    for day in (date(2025, 3, 3), date(2025, 3, 10), date(2025, 4, 1)):
        service.create(owner(), "emp-1", TimesheetPatch(date=day))

    page = service.list_timesheets(owner(), "emp-1", year=2025, month=3)

    assert page["total"] == 2
    assert [t.date for t in page["timesheets"]] == [date(2025, 3, 10), date(2025, 3, 3)]


def test_statistics_by_status():
    service = _service()
    service.create(owner(), "emp-1", TimesheetPatch(date=date(2025, 3, 3), check_in_time="09:00", check_out_time="17:00"))
    service.create(owner(), "emp-1", TimesheetPatch(date=date(2025, 3, 4), status=TimesheetStatus.ABSENT))
    service.create(owner(), "emp-1", TimesheetPatch(date=date(2025, 3, 5), status=TimesheetStatus.ON_LEAVE))

    stats = service.statistics(owner(), "emp-1", year=2025, month=3)

    assert stats["total_days"] == 3
    assert stats["work_days"] == 1
    assert stats["absent_days"] == 1
    assert stats["leave_days"] == 1
    assert stats["total_hours_worked"] == 8.0


def test_parse_timesheet_rejects_bad_time():
    with pytest.raises(ValidationError):
        parse_timesheet({"date": "2025-03-03", "check_in_time": "9am"})
