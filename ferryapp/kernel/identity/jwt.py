"""
Session token management.

Tokens are self-contained HS256 JWTs; nothing is stored server side, so a
token stays valid until it expires.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from ferryapp.config import Settings

# Claim names shared with the existing ferry clients
CLAIM_IDENTITY = "usuario_id"
CLAIM_ROLE = "tipo_usuario"


class SessionClaims(BaseModel):
    """Decoded, verified token payload."""

    identity_key: str
    role: str
    expires_at: datetime


class IssuedToken(BaseModel):
    """A freshly signed token and its expiry instant."""

    token: str
    expires_at: datetime
    token_type: str = "bearer"


class TokenService:
    """
    Signs and verifies session tokens.

    The signing secret is handed in at construction; build one instance at
    startup and share it.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_hours: int = 24,
    ):
        if not secret_key or not secret_key.strip():
            raise ValueError("A signing secret is required to issue tokens")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_delta = timedelta(hours=expire_hours)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expire_hours=settings.access_token_expire_hours,
        )

    def issue(
        self,
        identity_key: str,
        role: str,
        expires_delta: Optional[timedelta] = None,
    ) -> IssuedToken:
        """
        Create a signed token for an identity.

        Args:
            identity_key: Tax id / national id of the account
            role: Account role value
            expires_delta: Override for the default 24h lifetime

        Returns:
            IssuedToken with the encoded token and its expiry
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.expire_delta)

        payload = {
            CLAIM_IDENTITY: identity_key,
            CLAIM_ROLE: role,
            "iat": now,
            "exp": expire,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_at=expire)

    def verify(self, token: str) -> Optional[SessionClaims]:
        """
        Verify signature and expiry of a token.

        Args:
            token: Encoded JWT

        Returns:
            SessionClaims if valid, None otherwise
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
            )
        except JWTError:
            return None

        identity_key = payload.get(CLAIM_IDENTITY)
        role = payload.get(CLAIM_ROLE)
        exp = payload.get("exp")
        if not identity_key or not role or exp is None:
            return None

        return SessionClaims(
            identity_key=identity_key,
            role=role,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
