"""
Authentication endpoints.
"""

from fastapi import APIRouter, Request

from ferryapp.api.deps import DbSession, Tokens, get_client_ip
from ferryapp.kernel.identity.identity_service import IdentityService
from ferryapp.logging_config import get_logger
from ferryapp.schemas.auth import LoginRequest, LoginResponse

router = APIRouter()
logger = get_logger(__name__)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    data: LoginRequest,
    db: DbSession,
    tokens: Tokens,
):
    """
    Authenticate with login name and password.

    Unknown login names and wrong passwords get the same 401 message.
    """
    logger.debug("Login attempt", extra={"ip": get_client_ip(request)})
    identity_service = IdentityService(db, tokens)

    result = await identity_service.authenticate(
        login_name=data.usuario,
        password=data.contrasena,
    )

    return LoginResponse(
        token=result.token,
        tipo=result.role,
        rif_cedula=result.identity_key,
        expira=result.expires_at,
    )
