from __future__ import annotations

from dataclasses import dataclass

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_TTL_SECONDS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class TokenClaims:
    account_id: str
    email: str
    role: Role


class TokenService:
    """Signed, timestamped bearer tokens (itsdangerous, same primitive Flask sessions use)."""

    SALT = "personnel-hub-auth"

    def __init__(self, secret: str, *, ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS):
        if not secret:
            raise RuntimeError("Missing required configuration: TOKEN_SECRET")
        self._serializer = URLSafeTimedSerializer(secret, salt=self.SALT)
        self._ttl = int(ttl_seconds)

    def issue(self, *, account_id: str, email: str, role: Role) -> str:
        return self._serializer.dumps({"account_id": account_id, "email": email, "role": role.value})

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = self._serializer.loads(token, max_age=self._ttl)
        except SignatureExpired:
            raise AuthenticationError("Token has expired")
        except BadSignature:
            raise AuthenticationError("Invalid token")

        try:
            return TokenClaims(
                account_id=str(payload["account_id"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
