"""
FastAPI dependencies for authentication, authorization, and database sessions.

The authorization gate runs in two steps per request:
authenticate (a Bearer token that verifies) and then, for restricted routes,
authorize (the claim's role is one of the allowed roles).
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ferryapp.config import Settings, get_settings
from ferryapp.database import get_db
from ferryapp.kernel.errors import Forbidden, Unauthorized
from ferryapp.kernel.identity.identity_service import IdentityService
from ferryapp.kernel.identity.jwt import SessionClaims, TokenService
from ferryapp.kernel.models import AccountRole
from ferryapp.logging_config import get_logger

logger = get_logger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_token_service(request: Request) -> TokenService:
    """The token service built at application start."""
    return request.app.state.token_service


Tokens = Annotated[TokenService, Depends(get_token_service)]


async def get_current_claims(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    tokens: Tokens,
    settings: AppSettings,
    db: DbSession,
) -> SessionClaims:
    """Authenticate the request or raise 401."""
    if not credentials:
        if request.headers.get("Authorization"):
            raise Unauthorized("Formato de token invalido")
        raise Unauthorized("Token de autorizacion requerido")

    claims = tokens.verify(credentials.credentials)
    if claims is None:
        raise Unauthorized("Token invalido o expirado")

    if settings.auth_recheck_active:
        if not await IdentityService(db).is_account_active(claims.identity_key):
            logger.info(
                "Token rejected: account inactive or removed",
                extra={"rif_cedula": claims.identity_key},
            )
            raise Unauthorized("Cuenta inactiva")

    request.state.identity_key = claims.identity_key
    return claims


CurrentClaims = Annotated[SessionClaims, Depends(get_current_claims)]


class RoleChecker:
    """
    Dependency class restricting a route to some roles.

    Usage:
        @router.post("/company/register")
        async def register_company(
            claims: Annotated[SessionClaims, Depends(RoleChecker(AccountRole.ADMINISTRATOR))],
            ...
        ):
            ...
    """

    def __init__(self, *allowed: AccountRole, message: Optional[str] = None):
        self.allowed = {role.value for role in allowed}
        self.message = message or "Acceso restringido a administradores"

    async def __call__(self, claims: CurrentClaims) -> SessionClaims:
        if claims.role not in self.allowed:
            logger.info(
                "Role check failed",
                extra={"rif_cedula": claims.identity_key, "tipo": claims.role},
            )
            raise Forbidden(self.message)
        return claims


require_admin = RoleChecker(AccountRole.ADMINISTRATOR)

AdminClaims = Annotated[SessionClaims, Depends(require_admin)]


def is_admin(claims: SessionClaims) -> bool:
    return claims.role == AccountRole.ADMINISTRATOR.value


def ensure_self_or_admin(claims: SessionClaims, identity_key: str) -> None:
    """Allow the account owner or an administrator; anyone else gets 403."""
    if claims.identity_key != identity_key and not is_admin(claims):
        raise Forbidden("Solo el titular de la cuenta o un administrador puede realizar esta accion")


def get_client_ip(request: Request) -> Optional[str]:
    """Extract client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
