"""Unit tests for login and credential administration."""

import pytest

from ferryapp.kernel.errors import Conflict, NotFound, Unauthorized, ValidationError
from ferryapp.kernel.identity import identity_service as identity_module
from ferryapp.kernel.identity.identity_service import (
    ACCOUNT_INACTIVE,
    INVALID_CREDENTIALS,
    WRONG_CURRENT_PASSWORD,
    AccountUpdate,
    IdentityService,
)
from ferryapp.kernel.identity.password import verify_password
from ferryapp.kernel.identity.stores import CompanyStore, CredentialStore


class TestAuthenticate:
    """Login outcomes."""

    @pytest.mark.asyncio
    async def test_successful_login(self, company_account, db_session, tokens):
        result = await IdentityService(db_session, tokens).authenticate("acme1", "secretpw")

        assert result.identity_key == "J-001"
        assert result.role == "empresa"
        claims = tokens.verify(result.token)
        assert claims.identity_key == "J-001"
        assert claims.role == "empresa"
        assert claims.expires_at == result.expires_at.replace(microsecond=0)

    @pytest.mark.asyncio
    async def test_unknown_login_and_wrong_password_look_the_same(
        self, company_account, db_session, tokens
    ):
        service = IdentityService(db_session, tokens)

        with pytest.raises(Unauthorized) as unknown:
            await service.authenticate("nobody", "secretpw")
        with pytest.raises(Unauthorized) as wrong:
            await service.authenticate("acme1", "wrongpass")

        assert unknown.value.message == wrong.value.message == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_inactive_account(self, company_account, db_session, tokens):
        service = IdentityService(db_session, tokens)
        await service.set_account_active("J-001", False)

        with pytest.raises(Unauthorized) as exc_info:
            await service.authenticate("acme1", "secretpw")

        assert exc_info.value.message == ACCOUNT_INACTIVE

    @pytest.mark.asyncio
    async def test_blank_fields(self, db_session, tokens):
        with pytest.raises(ValidationError) as exc_info:
            await IdentityService(db_session, tokens).authenticate(" ", "")

        assert exc_info.value.fields == ["usuario", "contrasena"]

    @pytest.mark.asyncio
    async def test_login_name_is_trimmed(self, company_account, db_session, tokens):
        result = await IdentityService(db_session, tokens).authenticate(" acme1 ", "secretpw")

        assert result.identity_key == "J-001"

    @pytest.mark.asyncio
    async def test_unknown_login_still_checks_a_hash(self, db_session, tokens, monkeypatch):
        checked = []
        real_verify = identity_module.verify_password_async

        async def spy(plain, hashed):
            checked.append(hashed)
            return await real_verify(plain, hashed)

        monkeypatch.setattr(identity_module, "verify_password_async", spy)

        with pytest.raises(Unauthorized):
            await IdentityService(db_session, tokens).authenticate("nobody", "secretpw")

        assert len(checked) == 1
        assert checked[0].startswith("$2b$")


class TestAccountAdministration:
    """Activation, password and login name changes."""

    @pytest.mark.asyncio
    async def test_deactivate_leaves_company_flag(self, company_account, db_session, session_maker):
        await IdentityService(db_session).set_account_active("J-001", False)

        async with session_maker() as session:
            credential = await CredentialStore(session).get("J-001")
            company = await CompanyStore(session).get("J-001")
        assert credential.is_active is False
        assert company.is_active is True

    @pytest.mark.asyncio
    async def test_unknown_account(self, db_session):
        service = IdentityService(db_session)

        with pytest.raises(NotFound):
            await service.set_account_active("J-404", True)
        with pytest.raises(NotFound):
            await service.get_account("J-404")
        assert await service.is_account_active("J-404") is False

    @pytest.mark.asyncio
    async def test_change_password(self, company_account, db_session, session_maker, tokens):
        await IdentityService(db_session).change_password("J-001", "newsecret")

        async with session_maker() as session:
            service = IdentityService(session, tokens)
            result = await service.authenticate("acme1", "newsecret")
            assert result.identity_key == "J-001"
            with pytest.raises(Unauthorized):
                await service.authenticate("acme1", "secretpw")

    @pytest.mark.asyncio
    async def test_change_password_floor(self, company_account, db_session):
        with pytest.raises(ValidationError):
            await IdentityService(db_session).change_password("J-001", "short")

    @pytest.mark.asyncio
    async def test_update_login_name_and_password(self, company_account, db_session, session_maker):
        await IdentityService(db_session).update_account(
            "J-001",
            AccountUpdate(login_name="acme_ferries", password="otrosecreto"),
        )

        async with session_maker() as session:
            credential = await CredentialStore(session).get("J-001")
        assert credential.login_name == "acme_ferries"
        assert verify_password("otrosecreto", credential.password_hash)

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, company_account, db_session):
        with pytest.raises(ValidationError):
            await IdentityService(db_session).update_account("J-001", AccountUpdate())

    @pytest.mark.asyncio
    async def test_update_to_taken_login_name(self, company_account, admin_account, db_session):
        with pytest.raises(Conflict):
            await IdentityService(db_session).update_account(
                "J-001", AccountUpdate(login_name="admin")
            )

    @pytest.mark.asyncio
    async def test_update_to_own_login_name_is_allowed(self, company_account, db_session):
        await IdentityService(db_session).update_account(
            "J-001", AccountUpdate(login_name="acme1")
        )

    @pytest.mark.asyncio
    async def test_update_unknown_account(self, db_session):
        with pytest.raises(NotFound):
            await IdentityService(db_session).update_account(
                "J-404", AccountUpdate(login_name="someone")
            )

    @pytest.mark.asyncio
    async def test_verify_current_password(self, company_account, db_session):
        service = IdentityService(db_session)

        await service.verify_current_password("J-001", "secretpw")

        with pytest.raises(Unauthorized) as exc_info:
            await service.verify_current_password("J-001", "equivocada")
        assert exc_info.value.message == WRONG_CURRENT_PASSWORD

        with pytest.raises(ValidationError):
            await service.verify_current_password("J-001", None)

        with pytest.raises(NotFound):
            await service.verify_current_password("J-404", "secretpw")
