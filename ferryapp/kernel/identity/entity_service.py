"""
Status administration for companies and employees.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ferryapp.database import transaction
from ferryapp.kernel.errors import NotFound, PersistenceError
from ferryapp.kernel.identity.stores import CompanyStore, EmployeeStore
from ferryapp.kernel.models import Company
from ferryapp.logging_config import get_logger

logger = get_logger(__name__)


class EntityService:
    """Reads companies and flips the active flag of companies and employees."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.companies = CompanyStore(session)
        self.employees = EmployeeStore(session)

    async def get_company(self, tax_id: str) -> Company:
        try:
            company = await self.companies.get(tax_id)
        except SQLAlchemyError as exc:
            logger.exception("Company lookup failed")
            raise PersistenceError("Error al consultar la base de datos") from exc
        if company is None:
            raise NotFound("Empresa no encontrada")
        return company

    async def set_company_active(self, tax_id: str, active: bool) -> None:
        """Does not touch the company's credential."""
        await self._set_active(self.companies, tax_id, active, "Empresa no encontrada")

    async def set_employee_active(self, national_id: str, active: bool) -> None:
        """Does not touch the employee's credential."""
        await self._set_active(self.employees, national_id, active, "Empleado no encontrado")

    async def _set_active(self, store, identity_key: str, active: bool, missing: str) -> None:
        try:
            async with transaction(self.session):
                if await store.set_active(identity_key, active) == 0:
                    raise NotFound(missing)
        except SQLAlchemyError as exc:
            logger.exception(
                "Status update failed",
                extra={"rif_cedula": identity_key},
            )
            raise PersistenceError("Error actualizando estado") from exc
        logger.info(
            "Entity status changed",
            extra={"rif_cedula": identity_key, "table": store.model.__tablename__, "estado": active},
        )
