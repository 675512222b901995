from __future__ import annotations

from flask import Flask

from ..common.http import created, current_caller, json_body, ok, token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    accounts = container.account_service
    login_required = token_required(auth)

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def register_owner():
        data = json_body()
        result = auth.register_owner(name=data.get("name"), email=data.get("email"), password=data.get("password"))
        return created(
            {"user": result.account.sanitize(), "business": result.business, "token": result.token},
            "User and business created successfully",
        )

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        result = auth.login(email=data.get("email"), password=data.get("password"))
        return ok({"user": result.account.sanitize(), "token": result.token}, "Login successful")

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return ok({"user": auth.get_me(current_caller()).sanitize()}, "User retrieved successfully")

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    @login_required
    def logout():
        # Tokens are stateless; the client just drops it.
        return ok(None, "Logout successful")

    @app.route("/auth/update", methods=["PUT"], endpoint="auth_update")
    @login_required
    def update_profile():
        account = auth.update_profile(current_caller(), name=json_body().get("name"))
        return ok({"user": account.sanitize()}, "Profile updated successfully")

    @app.route("/auth/users", methods=["GET"], endpoint="auth_users")
    @login_required
    def list_users():
        users = [a.sanitize() for a in accounts.list_accounts(current_caller())]
        return ok({"users": users, "count": len(users)}, "Users retrieved successfully")

    @app.route("/auth/users/deleted", methods=["GET"], endpoint="auth_users_deleted")
    @login_required
    def list_deleted_users():
        users = [a.sanitize() for a in accounts.list_accounts(current_caller(), deleted=True)]
        return ok({"users": users, "count": len(users)}, "Deleted users retrieved successfully")

    @app.route("/auth/users/<account_id>", methods=["DELETE"], endpoint="auth_users_delete")
    @login_required
    def delete_user(account_id: str):
        account = accounts.delete_account(current_caller(), account_id)
        return ok({"user": account.sanitize()}, "User deleted successfully")

    @app.route("/auth/users/<account_id>/restore", methods=["PUT"], endpoint="auth_users_restore")
    @login_required
    def restore_user(account_id: str):
        account = accounts.restore_account(current_caller(), account_id)
        return ok({"user": account.sanitize()}, "User restored successfully")

    @app.route("/auth/register-employee", methods=["POST"], endpoint="auth_register_employee")
    @login_required
    def register_employee():
        data = json_body()
        account = auth.register_employee_account(
            current_caller(),
            employee_id=data.get("employee_id"),
            email=data.get("email"),
            password=data.get("password"),
        )
        return created({"user": account.sanitize()}, "Employee account created successfully")
