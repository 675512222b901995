from __future__ import annotations

from flask import Flask, request

from ..common.http import created, current_caller, json_body, ok, paging_args, token_required
from ..common.query import enum_arg, year_arg
from ..common.validators import parse_approval_note
from ..container import Container
from ..core.enums import LeaveType, RequestStatus
from .schema import parse_leave

BASE = "/employees/<employee_id>/leaves"


def register(app: Flask, container: Container) -> None:
    service = container.leave_service
    login_required = token_required(container.auth_service)

    @app.route(BASE, methods=["GET"], endpoint="leaves_list")
    @login_required
    def list_leaves(employee_id: str):
        page = service.list_leaves(
            current_caller(),
            employee_id,
            status=enum_arg(request.args, "status", RequestStatus),
            leave_type=enum_arg(request.args, "type", LeaveType),
            paging=paging_args(),
        )
        return ok(page, "Leaves retrieved successfully")

    @app.route(BASE, methods=["POST"], endpoint="leaves_create")
    @login_required
    def create_leave(employee_id: str):
        leave = service.create(current_caller(), employee_id, parse_leave(json_body()))
        return created(leave, "Leave request created successfully")

    @app.route(f"{BASE}/statistics", methods=["GET"], endpoint="leaves_statistics")
    @login_required
    def leave_statistics(employee_id: str):
        stats = service.statistics(current_caller(), employee_id, year=year_arg(request.args))
        return ok(stats, "Leave statistics retrieved successfully")

    @app.route(f"{BASE}/<leave_id>", methods=["GET"], endpoint="leaves_get")
    @login_required
    def get_leave(employee_id: str, leave_id: str):
        return ok(service.get(current_caller(), employee_id, leave_id), "Leave retrieved successfully")

    @app.route(f"{BASE}/<leave_id>", methods=["PUT"], endpoint="leaves_update")
    @login_required
    def update_leave(employee_id: str, leave_id: str):
        patch = parse_leave(json_body(), partial=True)
        return ok(service.update(current_caller(), employee_id, leave_id, patch), "Leave updated successfully")

    @app.route(f"{BASE}/<leave_id>/approve", methods=["PATCH"], endpoint="leaves_approve")
    @login_required
    def approve_leave(employee_id: str, leave_id: str):
        note = parse_approval_note(json_body())
        return ok(service.approve(current_caller(), employee_id, leave_id, note=note), "Leave approved successfully")

    @app.route(f"{BASE}/<leave_id>/reject", methods=["PATCH"], endpoint="leaves_reject")
    @login_required
    def reject_leave(employee_id: str, leave_id: str):
        note = parse_approval_note(json_body())
        return ok(service.reject(current_caller(), employee_id, leave_id, note=note), "Leave rejected successfully")

    @app.route(f"{BASE}/<leave_id>", methods=["DELETE"], endpoint="leaves_delete")
    @login_required
    def delete_leave(employee_id: str, leave_id: str):
        service.delete(current_caller(), employee_id, leave_id)
        return ok(None, "Leave deleted successfully")
