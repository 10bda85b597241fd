"""
Authentication and account schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ferryapp.kernel.models import Credential


class LoginRequest(BaseModel):
    """Login request. Blank values are reported by the login flow."""

    usuario: str = ""
    contrasena: str = ""


class LoginResponse(BaseModel):
    """Successful login."""

    mensaje: str = "Autenticación exitosa"
    token: str
    tipo: str
    rif_cedula: str
    expira: datetime


class AdministratorCreate(BaseModel):
    """Administrator credential registration request."""

    rif_cedula: str = ""
    usuario: str = ""
    contrasena: str = ""


class AccountResponse(BaseModel):
    """Public view of a credential. The password hash is never included."""

    rif_cedula: str
    usuario: str
    tipo: str
    estado: bool

    @classmethod
    def from_credential(cls, credential: Credential) -> "AccountResponse":
        return cls(
            rif_cedula=credential.identity_key,
            usuario=credential.login_name,
            tipo=credential.role,
            estado=credential.is_active,
        )


class AccountUpdateRequest(BaseModel):
    """
    Login name and/or password change; at least one is required.

    Account holders changing their own password also send the current one.
    """

    model_config = ConfigDict(populate_by_name=True)

    usuario: Optional[str] = None
    contrasena: Optional[str] = None
    contrasena_actual: Optional[str] = Field(None, alias="contrasenaActual")


class PasswordChangeRequest(BaseModel):
    """Password replacement request. Administrators may omit the current password."""

    model_config = ConfigDict(populate_by_name=True)

    nueva_contrasena: str = Field("", alias="nuevaContrasena")
    contrasena_actual: Optional[str] = Field(None, alias="contrasenaActual")
