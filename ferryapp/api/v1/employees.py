"""
Employee endpoints: paired registration and status.
"""

from fastapi import APIRouter, status

from ferryapp.api.deps import AdminClaims, DbSession
from ferryapp.api.v1.accounts import parse_action
from ferryapp.kernel.identity.entity_service import EntityService
from ferryapp.kernel.identity.registration import EntityKind, RegistrationCoordinator
from ferryapp.schemas.common import StatusChangeResponse
from ferryapp.schemas.registration import EmployeeRegistration, RegistrationResponse

router = APIRouter()


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_employee(
    data: EmployeeRegistration,
    admin: AdminClaims,
    db: DbSession,
):
    """Register an employee of an existing company, with its login."""
    coordinator = RegistrationCoordinator(db)
    identity_key = await coordinator.register_paired_account(
        EntityKind.EMPLOYEE,
        data.entity_fields(),
        login_name=data.usuario,
        plaintext_password=data.contrasena,
    )
    return RegistrationResponse(rif_cedula=identity_key, usuario=data.usuario.strip())


@router.put("/{cedula}/{accion}", response_model=StatusChangeResponse)
async def set_employee_status(
    cedula: str,
    accion: str,
    admin: AdminClaims,
    db: DbSession,
):
    """Activate or deactivate an employee. Its credential is left as is."""
    active = parse_action(accion)
    await EntityService(db).set_employee_active(cedula, active)
    return StatusChangeResponse(
        mensaje=f"Empleado con la cedula {cedula} {accion} correctamente",
        rif_cedula=cedula,
        estado=active,
        accion=accion,
    )
