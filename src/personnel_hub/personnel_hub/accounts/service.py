from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..business.model import Business
from ..business.repository import BusinessRepository
from ..common.datetime_utils import now_utc
from ..common.validators import require_email, require_length, require_min_length, require_non_empty
from ..core.constants import DEFAULT_BUSINESS_LOGO_URL, DEFAULT_BUSINESS_NAME, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..employees.repository import EmployeeRepository
from ..security.policy import Action, authorize
from ..security.tenancy import Caller
from ..security.tokens import TokenService
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Email or password is incorrect"


@dataclass(frozen=True)
class AuthResult:
    account: Account
    token: str
    business: Business | None = None


class AuthService:
    """Use cases: register owner, login, bearer-token authentication, profile."""

    def __init__(
        self,
        accounts: AccountRepository,
        businesses: BusinessRepository,
        employees: EmployeeRepository,
        tokens: TokenService,
    ):
        self._accounts = accounts
        self._businesses = businesses
        self._employees = employees
        self._tokens = tokens

    def _issue(self, account: Account) -> str:
        return self._tokens.issue(account_id=account.id, email=account.email, role=account.role)

    def _ensure_email_free(self, email: str) -> None:
        if self._accounts.get_active_by_email(email):
            raise ConflictError("A user with this email already exists")

    @staticmethod
    def _check_password(password: str) -> str:
        require_non_empty(password, "Password")
        return require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

    def register_owner(self, *, name: str, email: str, password: str) -> AuthResult:
        name = require_length(name, "Name", 2, 100)
        email = require_email(email)
        password = self._check_password(password)
        self._ensure_email_free(email)

        now = now_utc()
        business = self._businesses.create(
            Business(
                id=new_id(),
                name=DEFAULT_BUSINESS_NAME,
                address="",
                phone="",
                email=email,
                logo_url=DEFAULT_BUSINESS_LOGO_URL,
                owner_id=None,
                created_at=now,
                updated_at=now,
            )
        )

        account_id = new_id()
        account = self._accounts.create(
            Account(
                id=account_id,
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=Role.OWNER,
                business_id=business.id,
                owner_account_id=account_id,
                created_at=now,
                updated_at=now,
            )
        )
        business = self._businesses.update(replace(business, owner_id=account.id, updated_at=now))
        logger.info("Registered owner %s with business %s", account.id, business.id)

        return AuthResult(account=account, token=self._issue(account), business=business)

    def login(self, *, email: str, password: str) -> AuthResult:
        email = (email or "").strip().lower()
        account = self._accounts.get_active_by_email(email) if email else None
        if not account or not account.is_active:
            raise AuthenticationError(_INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # unknown hash method stored for this account
            ok = False
        if not ok:
            raise AuthenticationError(_INVALID_CREDENTIALS)

        at = now_utc()
        self._accounts.touch_last_login(account.id, at=at)
        account = replace(account, last_login_at=at)
        return AuthResult(account=account, token=self._issue(account))

    def authenticate_token(self, token: str) -> Caller:
        claims = self._tokens.verify(token)
        account = self._accounts.get_by_id(claims.account_id)
        if not account or not account.is_active:
            raise AuthenticationError("Account is no longer active")
        return Caller.from_account(account)

    def get_me(self, caller: Caller) -> Account:
        account = self._accounts.get_by_id(caller.account_id)
        if not account:
            raise NotFoundError("User does not exist")
        return account

    def update_profile(self, caller: Caller, *, name: str) -> Account:
        name = require_length(name, "Name", 2, 100)
        account = self.get_me(caller)
        return self._accounts.update(replace(account, name=name, updated_at=now_utc()))

    def register_employee_account(self, caller: Caller, *, employee_id: str, email: str, password: str) -> Account:
        """Give an existing employee record a login (owner/manager)."""

        authorize(caller, Action.LINK_EMPLOYEE_ACCOUNT)
        employee_id = require_non_empty(employee_id, "Employee ID")
        email = require_email(email)
        password = self._check_password(password)

        owner_id = caller.namespace
        employee = self._employees.get(owner_id=owner_id, employee_id=employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.user_id:
            raise ConflictError("This employee already has a user account")
        self._ensure_email_free(email)

        now = now_utc()
        account = self._accounts.create(
            Account(
                id=new_id(),
                name=employee.full_name,
                email=email,
                password_hash=generate_password_hash(password),
                role=Role.EMPLOYEE,
                business_id=caller.business_id,
                employee_id=employee.id,
                owner_account_id=owner_id,
                created_at=now,
                updated_at=now,
            )
        )
        self._employees.update(replace(employee, user_id=account.id, email=email, updated_at=now))
        logger.info("Linked account %s to employee %s", account.id, employee.id)
        return account


class AccountService:
    """Owner-side management of the accounts in one business."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def list_accounts(self, caller: Caller, *, deleted: bool = False) -> Sequence[Account]:
        authorize(caller, Action.MANAGE_ACCOUNTS)
        if not caller.business_id:
            return []
        return self._accounts.list_by_business(caller.business_id, is_active=not deleted)

    def _get_in_business(self, caller: Caller, account_id: str) -> Account:
        account = self._accounts.get_by_id(account_id)
        if not account or account.business_id != caller.business_id:
            raise NotFoundError("User not found")
        return account

    def delete_account(self, caller: Caller, account_id: str) -> Account:
        authorize(caller, Action.MANAGE_ACCOUNTS)
        if account_id == caller.account_id:
            raise ValidationError("You cannot delete your own account")
        account = self._get_in_business(caller, account_id)
        if not account.is_active:
            raise ConflictError("User is already deleted")
        now = now_utc()
        return self._accounts.update(replace(account, is_active=False, deleted_at=now, updated_at=now))

    def restore_account(self, caller: Caller, account_id: str) -> Account:
        authorize(caller, Action.MANAGE_ACCOUNTS)
        account = self._get_in_business(caller, account_id)
        if account.is_active:
            raise ConflictError("User is already active")
        if self._accounts.get_active_by_email(account.email):
            raise ConflictError("Another active user already uses this email")
        return self._accounts.update(replace(account, is_active=True, deleted_at=None, updated_at=now_utc()))
