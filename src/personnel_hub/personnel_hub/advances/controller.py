from __future__ import annotations

from flask import Flask, request

from ..common.http import created, current_caller, json_body, ok, paging_args, token_required
from ..common.query import enum_arg, year_arg
from ..common.validators import parse_approval_note, require_non_empty
from ..container import Container
from ..core.enums import RequestStatus
from .schema import parse_advance

NESTED = "/employees/<employee_id>/advances"
ITEM = "/advances/<employee_id>/<advance_id>"


def register(app: Flask, container: Container) -> None:
    service = container.advance_service
    login_required = token_required(container.auth_service)

    @app.route(NESTED, methods=["GET"], endpoint="advances_nested_list")
    @login_required
    def list_employee_advances(employee_id: str):
        page = service.list_advances(
            current_caller(),
            employee_id,
            status=enum_arg(request.args, "status", RequestStatus),
            paging=paging_args(),
        )
        return ok(page, "Advance requests retrieved successfully")

    @app.route(NESTED, methods=["POST"], endpoint="advances_nested_create")
    @login_required
    def create_employee_advance(employee_id: str):
        advance = service.create(current_caller(), employee_id, parse_advance(json_body()))
        return created(advance, "Advance request created successfully")

    @app.route("/advances", methods=["POST"], endpoint="advances_create")
    @login_required
    def create_advance():
        data = json_body()
        employee_id = data.get("employee_id")
        if employee_id is not None:
            employee_id = require_non_empty(employee_id, "Employee ID")
        advance = service.create(current_caller(), employee_id, parse_advance(data))
        return created(advance, "Advance request created successfully")

    @app.route("/advances", methods=["GET"], endpoint="advances_list")
    @login_required
    def list_advances():
        page = service.list_all(
            current_caller(),
            employee_id=request.args.get("employee_id") or None,
            status=enum_arg(request.args, "status", RequestStatus),
            paging=paging_args(),
        )
        return ok(page, "Advance requests retrieved successfully")

    @app.route("/advances/statistics", methods=["GET"], endpoint="advances_statistics")
    @login_required
    def advance_statistics():
        stats = service.statistics_all(current_caller(), year=year_arg(request.args))
        return ok(stats, "Advance request statistics retrieved successfully")

    @app.route("/advances/statistics/<employee_id>", methods=["GET"], endpoint="advances_statistics_employee")
    @login_required
    def employee_advance_statistics(employee_id: str):
        stats = service.statistics(current_caller(), employee_id, year=year_arg(request.args))
        return ok(stats, "Advance request statistics retrieved successfully")

    @app.route(ITEM, methods=["GET"], endpoint="advances_get")
    @login_required
    def get_advance(employee_id: str, advance_id: str):
        return ok(service.get(current_caller(), employee_id, advance_id), "Advance request retrieved successfully")

    @app.route(ITEM, methods=["PUT"], endpoint="advances_update")
    @login_required
    def update_advance(employee_id: str, advance_id: str):
        patch = parse_advance(json_body(), partial=True)
        return ok(service.update(current_caller(), employee_id, advance_id, patch), "Advance request updated successfully")

    @app.route(f"{ITEM}/approve", methods=["PATCH"], endpoint="advances_approve")
    @login_required
    def approve_advance(employee_id: str, advance_id: str):
        note = parse_approval_note(json_body())
        advance = service.approve(current_caller(), employee_id, advance_id, note=note)
        return ok(advance, "Advance request approved successfully")

    @app.route(f"{ITEM}/reject", methods=["PATCH"], endpoint="advances_reject")
    @login_required
    def reject_advance(employee_id: str, advance_id: str):
        note = parse_approval_note(json_body())
        advance = service.reject(current_caller(), employee_id, advance_id, note=note)
        return ok(advance, "Advance request rejected successfully")

    @app.route(ITEM, methods=["DELETE"], endpoint="advances_delete")
    @login_required
    def delete_advance(employee_id: str, advance_id: str):
        service.delete(current_caller(), employee_id, advance_id)
        return ok(None, "Advance request deleted successfully")
