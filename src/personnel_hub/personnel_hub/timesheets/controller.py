from __future__ import annotations

from flask import Flask, request

from ..common.http import created, current_caller, json_body, ok, paging_args, token_required
from ..common.query import enum_arg, month_arg, year_arg
from ..container import Container
from ..core.enums import TimesheetStatus
from .schema import parse_timesheet

BASE = "/employees/<employee_id>/timesheets"


def register(app: Flask, container: Container) -> None:
    service = container.timesheet_service
    login_required = token_required(container.auth_service)

    @app.route(BASE, methods=["GET"], endpoint="timesheets_list")
    @login_required
    def list_timesheets(employee_id: str):
        month = month_arg(request.args)
        page = service.list_timesheets(
            current_caller(),
            employee_id,
            year=year_arg(request.args, default_current=month is not None),
            month=month,
            status=enum_arg(request.args, "status", TimesheetStatus),
            paging=paging_args(),
        )
        return ok(page, "Timesheets retrieved successfully")

    @app.route(BASE, methods=["POST"], endpoint="timesheets_create")
    @login_required
    def create_timesheet(employee_id: str):
        ts = service.create(current_caller(), employee_id, parse_timesheet(json_body()))
        return created(ts, "Timesheet created successfully")

    @app.route(f"{BASE}/statistics", methods=["GET"], endpoint="timesheets_statistics")
    @login_required
    def timesheet_statistics(employee_id: str):
        stats = service.statistics(
            current_caller(), employee_id, year=year_arg(request.args), month=month_arg(request.args)
        )
        return ok(stats, "Timesheet statistics retrieved successfully")

    @app.route(f"{BASE}/<timesheet_id>", methods=["GET"], endpoint="timesheets_get")
    @login_required
    def get_timesheet(employee_id: str, timesheet_id: str):
        return ok(service.get(current_caller(), employee_id, timesheet_id), "Timesheet retrieved successfully")

    @app.route(f"{BASE}/<timesheet_id>", methods=["PUT"], endpoint="timesheets_update")
    @login_required
    def update_timesheet(employee_id: str, timesheet_id: str):
        patch = parse_timesheet(json_body(), partial=True)
        return ok(service.update(current_caller(), employee_id, timesheet_id, patch), "Timesheet updated successfully")

    @app.route(f"{BASE}/<timesheet_id>", methods=["DELETE"], endpoint="timesheets_delete")
    @login_required
    def delete_timesheet(employee_id: str, timesheet_id: str):
        service.delete(current_caller(), employee_id, timesheet_id)
        return ok(None, "Timesheet deleted successfully")
