"""
Company and employee models.

Each row's primary key (tax id / national id) is also the identity key of
its credential in ``usuarios``.
"""

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ferryapp.kernel.models.base import Base, TimestampMixin


class Company(Base, TimestampMixin):
    """Ferry operating company."""

    __tablename__ = "empresa"

    tax_id: Mapped[str] = mapped_column(
        "rif",
        String(20),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(
        "nombre",
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    address: Mapped[Optional[str]] = mapped_column(
        "direccion",
        String(500),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        "estado",
        Boolean,
        default=True,
        nullable=False,
    )

    employees: Mapped[List["Employee"]] = relationship(
        "Employee",
        back_populates="company",
    )

    def __repr__(self) -> str:
        return f"<Company {self.tax_id}>"


class Employee(Base, TimestampMixin):
    """Employee of a ferry company."""

    __tablename__ = "empleados"

    national_id: Mapped[str] = mapped_column(
        "cedula",
        String(20),
        primary_key=True,
    )
    first_names: Mapped[str] = mapped_column(
        "nombres",
        String(255),
        nullable=False,
    )
    last_names: Mapped[str] = mapped_column(
        "apellidos",
        String(255),
        nullable=False,
    )
    company_tax_id: Mapped[str] = mapped_column(
        "rif_empresa",
        String(20),
        ForeignKey("empresa.rif"),
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    job_title: Mapped[str] = mapped_column(
        "cargo",
        String(120),
        nullable=False,
    )
    phone: Mapped[str] = mapped_column(
        "numero_tlf",
        String(30),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        "estado",
        Boolean,
        default=True,
        nullable=False,
    )

    company: Mapped["Company"] = relationship(
        "Company",
        back_populates="employees",
    )

    def __repr__(self) -> str:
        return f"<Employee {self.national_id}>"
