from __future__ import annotations

from flask import Flask, request

from ..common.http import created, current_caller, json_body, ok, paging_args, token_required
from ..common.query import date_arg, enum_arg, year_arg
from ..container import Container
from ..core.enums import PaymentMethod
from .schema import parse_payment

BASE = "/employees/<employee_id>/salary-payments"


def register(app: Flask, container: Container) -> None:
    service = container.payment_service
    login_required = token_required(container.auth_service)

    @app.route(BASE, methods=["GET"], endpoint="payments_list")
    @login_required
    def list_payments(employee_id: str):
        page = service.list_payments(
            current_caller(),
            employee_id,
            payment_method=enum_arg(request.args, "payment_method", PaymentMethod),
            start_date=date_arg(request.args, "start_date"),
            end_date=date_arg(request.args, "end_date"),
            year=year_arg(request.args, default_current=False),
            paging=paging_args(),
        )
        return ok(page, "Salary payments retrieved successfully")

    @app.route(BASE, methods=["POST"], endpoint="payments_create")
    @login_required
    def create_payment(employee_id: str):
        payment = service.create(current_caller(), employee_id, parse_payment(json_body()))
        return created(payment, "Salary payment created successfully")

    @app.route(f"{BASE}/statistics", methods=["GET"], endpoint="payments_statistics")
    @login_required
    def payment_statistics(employee_id: str):
        stats = service.statistics(current_caller(), employee_id, year=year_arg(request.args))
        return ok(stats, "Salary payment statistics retrieved successfully")

    @app.route(f"{BASE}/by-payroll/<payroll_id>", methods=["GET"], endpoint="payments_by_payroll")
    @login_required
    def payments_by_payroll(employee_id: str, payroll_id: str):
        payments = service.list_by_payroll(current_caller(), employee_id, payroll_id)
        return ok({"payments": payments, "count": len(payments)}, "Salary payments retrieved successfully")

    @app.route(f"{BASE}/<payment_id>", methods=["GET"], endpoint="payments_get")
    @login_required
    def get_payment(employee_id: str, payment_id: str):
        return ok(service.get(current_caller(), employee_id, payment_id), "Salary payment retrieved successfully")

    @app.route(f"{BASE}/<payment_id>", methods=["PUT"], endpoint="payments_update")
    @login_required
    def update_payment(employee_id: str, payment_id: str):
        patch = parse_payment(json_body(), partial=True)
        return ok(service.update(current_caller(), employee_id, payment_id, patch), "Salary payment updated successfully")

    @app.route(f"{BASE}/<payment_id>", methods=["DELETE"], endpoint="payments_delete")
    @login_required
    def delete_payment(employee_id: str, payment_id: str):
        service.delete(current_caller(), employee_id, payment_id)
        return ok(None, "Salary payment deleted successfully")
