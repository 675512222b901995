import pytest

from src.personnel_hub.personnel_hub.core.enums import Role
from src.personnel_hub.personnel_hub.core.exceptions import AuthenticationError
from src.personnel_hub.personnel_hub.security.tokens import TokenService


def test_issued_token_verifies_to_same_claims():
    tokens = TokenService("secret-a", ttl_seconds=60)
    token = tokens.issue(account_id="acc-1", email="a@example.com", role=Role.MANAGER)

    claims = tokens.verify(token)

    assert claims.account_id == "acc-1"
    assert claims.email == "a@example.com"
    assert claims.role == Role.MANAGER


def test_token_signed_with_other_secret_rejected():
    token = TokenService("secret-a").issue(account_id="acc-1", email="a@example.com", role=Role.OWNER)
    with pytest.raises(AuthenticationError):
        TokenService("secret-b").verify(token)


def test_tampered_token_rejected():
    tokens = TokenService("secret-a")
    token = tokens.issue(account_id="acc-1", email="a@example.com", role=Role.OWNER)
    with pytest.raises(AuthenticationError):
        tokens.verify(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_expired_token_rejected():
    tokens = TokenService("secret-a", ttl_seconds=-1)
    token = tokens.issue(account_id="acc-1", email="a@example.com", role=Role.OWNER)
    with pytest.raises(AuthenticationError, match="expired"):
        tokens.verify(token)


def test_missing_secret_is_fatal():
    with pytest.raises(RuntimeError, match="TOKEN_SECRET"):
        TokenService("")
