from __future__ import annotations

from flask import Flask

from ..common.http import current_caller, json_body, ok, token_required
from ..container import Container
from .service import parse_business_patch


def register(app: Flask, container: Container) -> None:
    service = container.business_service
    login_required = token_required(container.auth_service)

    @app.route("/business/my", methods=["GET"], endpoint="business_my")
    @login_required
    def my_business():
        return ok(service.get_my_business(current_caller()), "Business retrieved successfully")

    @app.route("/business/my", methods=["PUT"], endpoint="business_my_update")
    @login_required
    def update_my_business():
        patch = parse_business_patch(json_body())
        return ok(service.update_my_business(current_caller(), patch), "Business updated successfully")

    @app.route("/business/<business_id>", methods=["GET"], endpoint="business_get")
    @login_required
    def get_business(business_id: str):
        return ok(service.get_business(current_caller(), business_id), "Business retrieved successfully")
