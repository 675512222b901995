import pytest

from src.personnel_hub.personnel_hub.business.service import parse_business_patch
from src.personnel_hub.personnel_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.personnel_hub.personnel_hub.security.tenancy import Caller
from tests.fakes import in_memory_container, manager


def _owner_and_container():
    c = in_memory_container()
    result = c.auth_service.register_owner(name="Olivia", email="o@example.com", password="secret1")
    return c, Caller.from_account(result.account)


def test_owner_updates_own_business():
    c, caller = _owner_and_container()
    business = c.business_service.update_my_business(caller, parse_business_patch({"name": "Acme Ltd", "phone": "555"}))
    assert business.name == "Acme Ltd"
    assert business.phone == "555"


def test_empty_patch_rejected():
    c, caller = _owner_and_container()
    with pytest.raises(ValidationError):
        c.business_service.update_my_business(caller, parse_business_patch({}))


def test_foreign_business_is_not_found():
    c, caller = _owner_and_container()
    with pytest.raises(NotFoundError):
        c.business_service.get_business(caller, "someone-else")


def test_manager_cannot_update_business():
    c, _ = _owner_and_container()
    with pytest.raises(AuthorizationError):
        c.business_service.update_my_business(manager(), parse_business_patch({"name": "Nope Inc"}))
