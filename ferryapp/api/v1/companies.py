"""
Company endpoints: paired registration and status.
"""

from fastapi import APIRouter, status

from ferryapp.api.deps import AdminClaims, CurrentClaims, DbSession, ensure_self_or_admin
from ferryapp.api.v1.accounts import parse_action
from ferryapp.kernel.identity.entity_service import EntityService
from ferryapp.kernel.identity.registration import EntityKind, RegistrationCoordinator
from ferryapp.schemas.common import StatusChangeResponse
from ferryapp.schemas.registration import (
    CompanyRegistration,
    CompanyResponse,
    RegistrationResponse,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_company(
    data: CompanyRegistration,
    admin: AdminClaims,
    db: DbSession,
):
    """Register a company and its login in one transaction."""
    coordinator = RegistrationCoordinator(db)
    identity_key = await coordinator.register_paired_account(
        EntityKind.COMPANY,
        data.entity_fields(),
        login_name=data.usuario,
        plaintext_password=data.contrasena,
    )
    return RegistrationResponse(rif_cedula=identity_key, usuario=data.usuario.strip())


@router.get("/{rif}", response_model=CompanyResponse)
async def get_company(
    rif: str,
    claims: CurrentClaims,
    db: DbSession,
):
    """Get a company. The company itself or an administrator only."""
    ensure_self_or_admin(claims, rif)
    company = await EntityService(db).get_company(rif)
    return CompanyResponse(
        rif=company.tax_id,
        nombre=company.name,
        email=company.email,
        direccion=company.address,
        estado=company.is_active,
    )


@router.put("/{rif}/{accion}", response_model=StatusChangeResponse)
async def set_company_status(
    rif: str,
    accion: str,
    admin: AdminClaims,
    db: DbSession,
):
    """Activate or deactivate a company. Its credential is left as is."""
    active = parse_action(accion)
    await EntityService(db).set_company_active(rif, active)
    return StatusChangeResponse(
        mensaje=f"Empresa {accion} correctamente",
        rif_cedula=rif,
        estado=active,
        accion=accion,
    )
