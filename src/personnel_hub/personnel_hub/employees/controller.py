from __future__ import annotations

from flask import Flask, request

from ..advances.schema import parse_advance
from ..common.http import created, current_caller, json_body, ok, paging_args, self_employee_id, token_required
from ..common.query import enum_arg
from ..common.validators import optional_text
from ..container import Container
from ..core.enums import LeaveType, RequestStatus
from ..leaves.schema import parse_leave
from .model import Employee
from .schema import parse_employee, parse_profile


def _view(employee: Employee) -> dict:
    return employee.sanitize(mode="employee" if current_caller().is_employee else "full")


def _page_view(page: dict) -> dict:
    return {**page, "employees": [_view(e) for e in page["employees"]]}


def register(app: Flask, container: Container) -> None:
    service = container.employee_service
    login_required = token_required(container.auth_service)

    @app.route("/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def list_employees():
        page = service.list_employees(
            current_caller(),
            search=optional_text(request.args.get("search"), "search"),
            department=optional_text(request.args.get("department"), "department"),
            paging=paging_args(),
        )
        return ok(_page_view(page), "Employees retrieved successfully")

    @app.route("/employees/deleted", methods=["GET"], endpoint="employees_deleted")
    @login_required
    def list_deleted_employees():
        page = service.list_employees(current_caller(), paging=paging_args(), deleted=True)
        return ok(_page_view(page), "Deleted employees retrieved successfully")

    @app.route("/employees/statistics", methods=["GET"], endpoint="employees_statistics")
    @login_required
    def employee_statistics():
        return ok(service.statistics(current_caller()), "Employee statistics retrieved successfully")

    @app.route("/employees/contract-types", methods=["GET"], endpoint="employees_contract_types")
    @login_required
    def contract_types():
        return ok(service.contract_types(), "Contract types retrieved successfully")

    @app.route("/employees/work-modes", methods=["GET"], endpoint="employees_work_modes")
    @login_required
    def work_modes():
        return ok(service.work_modes(), "Work modes retrieved successfully")

    @app.route("/employees", methods=["POST"], endpoint="employees_create")
    @login_required
    def create_employee():
        employee = service.create(current_caller(), parse_employee(json_body()))
        return created(_view(employee), "Employee created successfully")

    # -------- Self-service (employee accounts) --------
    @app.route("/employees/me", methods=["GET"], endpoint="employees_me")
    @login_required
    def get_me():
        return ok(service.get_me(current_caller()).sanitize(mode="employee"), "Profile retrieved successfully")

    @app.route("/employees/me", methods=["PUT"], endpoint="employees_me_update")
    @login_required
    def update_me():
        employee = service.update_me(current_caller(), parse_profile(json_body()))
        return ok(employee.sanitize(mode="employee"), "Profile updated successfully")

    @app.route("/employees/me/leaves", methods=["GET"], endpoint="employees_me_leaves")
    @login_required
    def my_leaves():
        page = container.leave_service.list_leaves(
            current_caller(),
            self_employee_id(),
            status=enum_arg(request.args, "status", RequestStatus),
            leave_type=enum_arg(request.args, "type", LeaveType),
            paging=paging_args(),
        )
        return ok(page, "Leaves retrieved successfully")

    @app.route("/employees/me/leaves", methods=["POST"], endpoint="employees_me_leaves_create")
    @login_required
    def create_my_leave():
        leave = container.leave_service.create(current_caller(), self_employee_id(), parse_leave(json_body()))
        return created(leave, "Leave request created successfully")

    @app.route("/employees/me/advances", methods=["GET"], endpoint="employees_me_advances")
    @login_required
    def my_advances():
        page = container.advance_service.list_advances(
            current_caller(),
            self_employee_id(),
            status=enum_arg(request.args, "status", RequestStatus),
            paging=paging_args(),
        )
        return ok(page, "Advance requests retrieved successfully")

    @app.route("/employees/me/advances", methods=["POST"], endpoint="employees_me_advances_create")
    @login_required
    def create_my_advance():
        advance = container.advance_service.create(current_caller(), self_employee_id(), parse_advance(json_body()))
        return created(advance, "Advance request created successfully")

    # -------- Single employee --------
    @app.route("/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: str):
        return ok(_view(service.get(current_caller(), employee_id)), "Employee retrieved successfully")

    @app.route("/employees/<employee_id>", methods=["PUT"], endpoint="employees_update")
    @login_required
    def update_employee(employee_id: str):
        patch = parse_employee(json_body(), partial=True)
        return ok(_view(service.update(current_caller(), employee_id, patch)), "Employee updated successfully")

    @app.route("/employees/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @login_required
    def delete_employee(employee_id: str):
        return ok(_view(service.delete(current_caller(), employee_id)), "Employee deleted successfully")

    @app.route("/employees/<employee_id>/restore", methods=["POST"], endpoint="employees_restore")
    @login_required
    def restore_employee(employee_id: str):
        return ok(_view(service.restore(current_caller(), employee_id)), "Employee restored successfully")
