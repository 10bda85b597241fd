"""
Account (credential) endpoints.
"""

from fastapi import APIRouter, status

from ferryapp.api.deps import (
    AdminClaims,
    CurrentClaims,
    DbSession,
    ensure_self_or_admin,
    is_admin,
)
from ferryapp.kernel.errors import ValidationError
from ferryapp.kernel.identity.identity_service import AccountUpdate, IdentityService
from ferryapp.kernel.identity.registration import RegistrationCoordinator
from ferryapp.schemas.auth import (
    AccountResponse,
    AccountUpdateRequest,
    AdministratorCreate,
    PasswordChangeRequest,
)
from ferryapp.schemas.common import StatusChangeResponse, SuccessResponse
from ferryapp.schemas.registration import RegistrationResponse

router = APIRouter()

ACTIONS = {"activar": True, "desactivar": False}


def parse_action(accion: str) -> bool:
    """activar -> True, desactivar -> False, anything else is a 400."""
    if accion not in ACTIONS:
        raise ValidationError("Acción no válida. Use /activar o /desactivar")
    return ACTIONS[accion]


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_administrator(
    data: AdministratorCreate,
    admin: AdminClaims,
    db: DbSession,
):
    """Create another administrator credential."""
    coordinator = RegistrationCoordinator(db)
    identity_key = await coordinator.register_administrator(
        identity_key=data.rif_cedula,
        login_name=data.usuario,
        plaintext_password=data.contrasena,
    )
    return RegistrationResponse(
        mensaje="Usuario registrado exitosamente",
        rif_cedula=identity_key,
        usuario=data.usuario.strip(),
    )


@router.get("/{rif_cedula}", response_model=AccountResponse)
async def get_account(
    rif_cedula: str,
    claims: CurrentClaims,
    db: DbSession,
):
    """Get an account. The owner or an administrator only."""
    ensure_self_or_admin(claims, rif_cedula)
    credential = await IdentityService(db).get_account(rif_cedula)
    return AccountResponse.from_credential(credential)


@router.put("/{rif_cedula}", response_model=SuccessResponse)
async def update_account(
    rif_cedula: str,
    data: AccountUpdateRequest,
    claims: CurrentClaims,
    db: DbSession,
):
    """Change login name and/or password."""
    ensure_self_or_admin(claims, rif_cedula)
    service = IdentityService(db)
    if data.contrasena and not is_admin(claims):
        await service.verify_current_password(rif_cedula, data.contrasena_actual)
    await service.update_account(
        rif_cedula,
        AccountUpdate(login_name=data.usuario, password=data.contrasena),
    )
    return SuccessResponse(mensaje="Usuario actualizado exitosamente")


@router.put("/{rif_cedula}/password", response_model=SuccessResponse)
async def change_password(
    rif_cedula: str,
    data: PasswordChangeRequest,
    claims: CurrentClaims,
    db: DbSession,
):
    """
    Replace the password. The owner or an administrator only.

    The owner must also send the current password; administrators need not.
    """
    ensure_self_or_admin(claims, rif_cedula)
    service = IdentityService(db)
    if not is_admin(claims):
        await service.verify_current_password(rif_cedula, data.contrasena_actual)
    await service.change_password(rif_cedula, data.nueva_contrasena)
    return SuccessResponse(mensaje="Contraseña actualizada exitosamente")


@router.put("/{rif_cedula}/{accion}", response_model=StatusChangeResponse)
async def set_account_status(
    rif_cedula: str,
    accion: str,
    admin: AdminClaims,
    db: DbSession,
):
    """
    Activate or deactivate a credential.

    Existing tokens of a deactivated account stay valid until they expire
    unless AUTH_RECHECK_ACTIVE is enabled.
    """
    active = parse_action(accion)
    await IdentityService(db).set_account_active(rif_cedula, active)
    return StatusChangeResponse(
        mensaje=f"Usuario {rif_cedula} {accion}",
        rif_cedula=rif_cedula,
        estado=active,
        accion=accion,
    )
