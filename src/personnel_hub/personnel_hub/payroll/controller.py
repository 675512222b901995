from __future__ import annotations

from flask import Flask, request

from ..common.http import created, current_caller, json_body, ok, paging_args, token_required
from ..common.query import enum_arg, year_arg
from ..container import Container
from ..core.enums import PayrollStatus
from .schema import parse_payroll

BASE = "/employees/<employee_id>/payrolls"


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service
    login_required = token_required(container.auth_service)

    @app.route(BASE, methods=["GET"], endpoint="payrolls_list")
    @login_required
    def list_payrolls(employee_id: str):
        page = service.list_payrolls(
            current_caller(),
            employee_id,
            year=year_arg(request.args, default_current=False),
            status=enum_arg(request.args, "status", PayrollStatus),
            paging=paging_args(),
        )
        return ok(page, "Payrolls retrieved successfully")

    @app.route(BASE, methods=["POST"], endpoint="payrolls_create")
    @login_required
    def create_payroll(employee_id: str):
        payroll = service.create(current_caller(), employee_id, parse_payroll(json_body()))
        return created(payroll, "Payroll created successfully")

    @app.route(f"{BASE}/statistics", methods=["GET"], endpoint="payrolls_statistics")
    @login_required
    def payroll_statistics(employee_id: str):
        stats = service.statistics(current_caller(), employee_id, year=year_arg(request.args))
        return ok(stats, "Payroll statistics retrieved successfully")

    @app.route(f"{BASE}/<payroll_id>", methods=["GET"], endpoint="payrolls_get")
    @login_required
    def get_payroll(employee_id: str, payroll_id: str):
        return ok(service.get(current_caller(), employee_id, payroll_id), "Payroll retrieved successfully")

    @app.route(f"{BASE}/<payroll_id>", methods=["PUT"], endpoint="payrolls_update")
    @login_required
    def update_payroll(employee_id: str, payroll_id: str):
        patch = parse_payroll(json_body(), partial=True)
        return ok(service.update(current_caller(), employee_id, payroll_id, patch), "Payroll updated successfully")

    @app.route(f"{BASE}/<payroll_id>/pay", methods=["PATCH"], endpoint="payrolls_pay")
    @login_required
    def mark_payroll_paid(employee_id: str, payroll_id: str):
        return ok(service.mark_paid(current_caller(), employee_id, payroll_id), "Payroll marked as paid")

    @app.route(f"{BASE}/<payroll_id>", methods=["DELETE"], endpoint="payrolls_delete")
    @login_required
    def delete_payroll(employee_id: str, payroll_id: str):
        service.delete(current_caller(), employee_id, payroll_id)
        return ok(None, "Payroll deleted successfully")
