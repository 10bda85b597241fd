"""
Identity service: login and credential administration.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ferryapp.database import transaction
from ferryapp.kernel.errors import (
    Conflict,
    NotFound,
    PersistenceError,
    Unauthorized,
    ValidationError,
)
from ferryapp.kernel.identity.jwt import TokenService
from ferryapp.kernel.identity.password import hash_password_async, verify_password_async
from ferryapp.kernel.identity.registration import validate_login_name, validate_password
from ferryapp.kernel.identity.stores import CredentialPatch, CredentialStore
from ferryapp.kernel.models import Credential
from ferryapp.logging_config import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Credenciales invalidas"
ACCOUNT_INACTIVE = "Cuenta inactiva"
WRONG_CURRENT_PASSWORD = "Contraseña actual incorrecta"

# Compared against when the login name is unknown, so both paths cost one bcrypt check
_dummy_hash: Optional[str] = None


async def _get_dummy_hash() -> str:
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = await hash_password_async("ferry-dummy-password")
    return _dummy_hash


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    token: str
    role: str
    identity_key: str
    expires_at: datetime


class AccountUpdate(BaseModel):
    """Requested changes to an account; unset fields stay as they are."""

    login_name: Optional[str] = None
    password: Optional[str] = None


class IdentityService:
    """
    Service for credential operations.

    Handles login, activation, password changes and login-name changes.
    """

    def __init__(self, session: AsyncSession, tokens: Optional[TokenService] = None):
        self.session = session
        self.tokens = tokens
        self.credentials = CredentialStore(session)

    async def authenticate(self, login_name: str, password: str) -> LoginResult:
        """
        Check a login name and password and issue a session token.

        Args:
            login_name: The account's login name
            password: Plain text password

        Returns:
            LoginResult with the token, role and identity key

        Raises:
            ValidationError: Blank login name or password
            Unauthorized: Unknown login, wrong password, or inactive account
            PersistenceError: The credential lookup failed
        """
        if self.tokens is None:
            raise RuntimeError("IdentityService needs a TokenService to authenticate")

        blank = [
            name for name, value in (("usuario", login_name), ("contrasena", password))
            if not value or not value.strip()
        ]
        if blank:
            raise ValidationError("Campos vacíos: " + ", ".join(blank), fields=blank)

        try:
            credential = await self.credentials.get_by_login_name(login_name.strip())
        except SQLAlchemyError as exc:
            logger.exception("Credential lookup failed")
            raise PersistenceError("Error al buscar usuario") from exc

        if credential is None:
            await verify_password_async(password, await _get_dummy_hash())
            logger.info("Login rejected: unknown login name")
            raise Unauthorized(INVALID_CREDENTIALS)

        if not credential.is_active:
            logger.info(
                "Login rejected: inactive account",
                extra={"rif_cedula": credential.identity_key},
            )
            raise Unauthorized(ACCOUNT_INACTIVE)

        if not await verify_password_async(password, credential.password_hash):
            logger.info(
                "Login rejected: wrong password",
                extra={"rif_cedula": credential.identity_key},
            )
            raise Unauthorized(INVALID_CREDENTIALS)

        issued = self.tokens.issue(credential.identity_key, credential.role)
        logger.info(
            "Login succeeded",
            extra={"rif_cedula": credential.identity_key, "tipo": credential.role},
        )
        return LoginResult(
            token=issued.token,
            role=credential.role,
            identity_key=credential.identity_key,
            expires_at=issued.expires_at,
        )

    async def get_account(self, identity_key: str) -> Credential:
        """Get a credential by identity key or raise NotFound."""
        try:
            credential = await self.credentials.get(identity_key)
        except SQLAlchemyError as exc:
            logger.exception("Credential lookup failed")
            raise PersistenceError("Error al consultar la base de datos") from exc
        if credential is None:
            raise NotFound("Usuario no encontrado")
        return credential

    async def is_account_active(self, identity_key: str) -> bool:
        """True when a credential exists for the key and is active."""
        try:
            credential = await self.credentials.get(identity_key)
        except SQLAlchemyError as exc:
            logger.exception("Credential lookup failed")
            raise PersistenceError("Error al consultar la base de datos") from exc
        return credential is not None and credential.is_active

    async def set_account_active(self, identity_key: str, active: bool) -> None:
        """
        Activate or deactivate a credential.

        The paired company or employee keeps its own flag.
        """
        await self._apply(identity_key, CredentialPatch(is_active=active))
        logger.info(
            "Account status changed",
            extra={"rif_cedula": identity_key, "estado": active},
        )

    async def change_password(self, identity_key: str, new_password: str) -> None:
        """Replace the password of a credential (minimum 8 characters)."""
        validate_password(new_password)
        password_hash = await hash_password_async(new_password)
        await self._apply(identity_key, CredentialPatch(password_hash=password_hash))
        logger.info("Password changed", extra={"rif_cedula": identity_key})

    async def verify_current_password(
        self,
        identity_key: str,
        current_password: Optional[str],
    ) -> None:
        """
        Check the account holder's current password before a self-service change.

        Raises:
            ValidationError: No current password given
            NotFound: No credential with that identity key
            Unauthorized: The current password does not match
        """
        if not current_password:
            raise ValidationError("Campos vacíos: contrasenaActual", fields=["contrasenaActual"])
        credential = await self.get_account(identity_key)
        if not await verify_password_async(current_password, credential.password_hash):
            logger.info(
                "Password change rejected: wrong current password",
                extra={"rif_cedula": identity_key},
            )
            raise Unauthorized(WRONG_CURRENT_PASSWORD)

    async def update_account(self, identity_key: str, changes: AccountUpdate) -> None:
        """
        Change the login name and/or password of a credential.

        Raises:
            ValidationError: Nothing to change, or a value fails validation
            Conflict: The new login name belongs to another account
            NotFound: No credential with that identity key
        """
        login_name = changes.login_name if changes.login_name and changes.login_name.strip() else None
        password = changes.password if changes.password else None
        if login_name is None and password is None:
            raise ValidationError("Debe proporcionar al menos un campo para actualizar")

        if login_name is not None:
            login_name = validate_login_name(login_name)
        password_hash = None
        if password is not None:
            validate_password(password)
            password_hash = await hash_password_async(password)

        patch = CredentialPatch(login_name=login_name, password_hash=password_hash)

        if login_name is not None:
            try:
                taken = await self.credentials.login_name_taken(
                    login_name, exclude_identity_key=identity_key
                )
            except SQLAlchemyError as exc:
                logger.exception("Credential lookup failed")
                raise PersistenceError("Error al consultar la base de datos") from exc
            if taken:
                raise Conflict("El nombre de usuario ya existe")

        await self._apply(identity_key, patch)
        logger.info(
            "Account updated",
            extra={
                "rif_cedula": identity_key,
                "fields": [f for f in ("login_name", "password_hash") if getattr(patch, f)],
            },
        )

    async def _apply(self, identity_key: str, patch: CredentialPatch) -> None:
        try:
            async with transaction(self.session):
                updated = await self.credentials.apply_patch(identity_key, patch)
                if updated == 0:
                    raise NotFound("Usuario no encontrado")
        except IntegrityError as exc:
            raise Conflict("El nombre de usuario ya existe") from exc
        except SQLAlchemyError as exc:
            logger.exception(
                "Credential update failed",
                extra={"rif_cedula": identity_key},
            )
            raise PersistenceError("Error actualizando usuario") from exc
