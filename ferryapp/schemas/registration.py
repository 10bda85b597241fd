"""
Paired registration schemas.

Field presence is checked by the registration coordinator so that every
blank field is reported in one message; only formats are checked here.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr


class CompanyRegistration(BaseModel):
    """Company + credential registration request."""

    rif: Optional[str] = None
    nombre: Optional[str] = None
    email: Optional[EmailStr] = None
    direccion: Optional[str] = None
    usuario: Optional[str] = None
    contrasena: Optional[str] = None

    def entity_fields(self) -> dict[str, Optional[str]]:
        return {
            "rif": self.rif,
            "nombre": self.nombre,
            "email": str(self.email) if self.email else None,
            "direccion": self.direccion,
        }


class EmployeeRegistration(BaseModel):
    """Employee + credential registration request."""

    cedula: Optional[str] = None
    nombres: Optional[str] = None
    apellidos: Optional[str] = None
    rif_empresa: Optional[str] = None
    email: Optional[EmailStr] = None
    cargo: Optional[str] = None
    numero_tlf: Optional[str] = None
    usuario: Optional[str] = None
    contrasena: Optional[str] = None

    def entity_fields(self) -> dict[str, Optional[str]]:
        return {
            "cedula": self.cedula,
            "nombres": self.nombres,
            "apellidos": self.apellidos,
            "rif_empresa": self.rif_empresa,
            "email": str(self.email) if self.email else None,
            "cargo": self.cargo,
            "numero_tlf": self.numero_tlf,
        }


class RegistrationResponse(BaseModel):
    """Successful registration."""

    mensaje: str = "Registro exitoso"
    rif_cedula: str
    usuario: str


class CompanyResponse(BaseModel):
    """Company view."""

    rif: str
    nombre: str
    email: str
    direccion: Optional[str] = None
    estado: bool
