"""
Credential model for account identity.

Table and column names follow the operator's existing ``usuarios`` schema.
"""

from enum import Enum

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from ferryapp.kernel.models.base import Base, TimestampMixin


class AccountRole(str, Enum):
    """Account roles in the system."""
    ADMINISTRATOR = "Administrador"
    COMPANY = "empresa"
    EMPLOYEE = "empleado"


class Credential(Base, TimestampMixin):
    """
    Login credential paired with a company or employee by identity key.

    Administrator credentials are the only ones without a paired entity.
    """

    __tablename__ = "usuarios"

    identity_key: Mapped[str] = mapped_column(
        "rif_cedula",
        String(20),
        primary_key=True,
    )
    login_name: Mapped[str] = mapped_column(
        "usuario",
        String(120),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        "contrasena",
        String(255),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        "tipo",
        String(20),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        "estado",
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Credential {self.identity_key} {self.login_name}>"
