"""Unit tests for company and employee status."""

import pytest

from ferryapp.kernel.errors import NotFound
from ferryapp.kernel.identity.entity_service import EntityService
from ferryapp.kernel.identity.registration import EntityKind, RegistrationCoordinator
from ferryapp.kernel.identity.stores import CredentialPatch, CredentialStore, EmployeeStore
from ferryapp.kernel.models import Credential


class TestEntityService:

    @pytest.mark.asyncio
    async def test_get_company(self, company_account, db_session):
        company = await EntityService(db_session).get_company("J-001")

        assert company.name == "Acme Ferries"
        assert company.email == "contacto@acme.com"

    @pytest.mark.asyncio
    async def test_get_missing_company(self, db_session):
        with pytest.raises(NotFound):
            await EntityService(db_session).get_company("J-404")

    @pytest.mark.asyncio
    async def test_company_status_leaves_credential(self, company_account, db_session, session_maker):
        await EntityService(db_session).set_company_active("J-001", False)

        async with session_maker() as session:
            company = await EntityService(session).get_company("J-001")
            credential = await CredentialStore(session).get("J-001")
        assert company.is_active is False
        assert credential.is_active is True

    @pytest.mark.asyncio
    async def test_employee_status(self, company_account, session_maker, employee_fields):
        async with session_maker() as session:
            await RegistrationCoordinator(session).register_paired_account(
                EntityKind.EMPLOYEE,
                employee_fields,
                login_name="ana.perez",
                plaintext_password="marinera1",
            )

        async with session_maker() as session:
            await EntityService(session).set_employee_active("V-2000", False)

        async with session_maker() as session:
            employee = await EmployeeStore(session).get("V-2000")
        assert employee.is_active is False

    @pytest.mark.asyncio
    async def test_missing_entities(self, db_session):
        service = EntityService(db_session)

        with pytest.raises(NotFound) as company_exc:
            await service.set_company_active("J-404", True)
        with pytest.raises(NotFound) as employee_exc:
            await service.set_employee_active("V-404", True)

        assert company_exc.value.message == "Empresa no encontrada"
        assert employee_exc.value.message == "Empleado no encontrado"


class TestCredentialPatch:
    """The patch only ever produces whitelisted columns."""

    def test_only_set_fields_are_written(self):
        values = CredentialPatch(login_name="acme2").to_values()

        assert values == {Credential.login_name: "acme2"}

    def test_false_is_a_value(self):
        values = CredentialPatch(is_active=False).to_values()

        assert values == {Credential.is_active: False}

    def test_empty_patch(self):
        assert CredentialPatch().is_empty() is True
        assert CredentialPatch(password_hash="$2b$...").is_empty() is False
