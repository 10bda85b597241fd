"""
Paired registration: one domain entity plus its credential, atomically.

A company or employee and the credential that logs in for it share one
identity key. Both rows are written inside a single transaction; after any
failure neither exists.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ferryapp.database import transaction
from ferryapp.kernel.errors import Conflict, NotFound, PersistenceError, ValidationError
from ferryapp.kernel.identity.password import hash_password_async
from ferryapp.kernel.identity.stores import CompanyStore, CredentialStore, EmployeeStore
from ferryapp.kernel.models import AccountRole, Company, Credential, Employee
from ferryapp.logging_config import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8
MIN_LOGIN_NAME_LENGTH = 4
MAX_LOGIN_NAME_LENGTH = 120


class EntityKind(str, Enum):
    """Domain entities that own a credential."""
    COMPANY = "company"
    EMPLOYEE = "employee"


@dataclass(frozen=True)
class EntityProfile:
    """How one entity kind maps from request fields to its table."""

    model: Any
    role: AccountRole
    key_field: str
    # request field -> model attribute
    required: Mapping[str, str]
    optional: Mapping[str, str]
    duplicate_message: str


ENTITY_KINDS: dict[EntityKind, EntityProfile] = {
    EntityKind.COMPANY: EntityProfile(
        model=Company,
        role=AccountRole.COMPANY,
        key_field="rif",
        required={
            "rif": "tax_id",
            "nombre": "name",
            "email": "email",
        },
        optional={
            "direccion": "address",
        },
        duplicate_message="Este RIF ya esta registrado",
    ),
    EntityKind.EMPLOYEE: EntityProfile(
        model=Employee,
        role=AccountRole.EMPLOYEE,
        key_field="cedula",
        required={
            "cedula": "national_id",
            "nombres": "first_names",
            "apellidos": "last_names",
            "rif_empresa": "company_tax_id",
            "email": "email",
            "cargo": "job_title",
            "numero_tlf": "phone",
        },
        optional={},
        duplicate_message="Esta cedula ya esta registrada",
    ),
}


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def max_length(model: Any, attr: str) -> Optional[int]:
    """Declared length of a string column, None when unbounded."""
    return getattr(model, attr).property.columns[0].type.length


def _reject_too_long(fields: Mapping[str, str], limits: Mapping[str, Optional[int]]) -> None:
    too_long = [
        name for name, value in fields.items()
        if limits[name] is not None and len(value) > limits[name]
    ]
    if too_long:
        raise ValidationError(
            "Campos demasiado largos: " + ", ".join(too_long),
            fields=too_long,
        )


def validate_password(password: Optional[str]) -> str:
    """Apply the password floor used by every path that sets a password."""
    if not password or not password.strip():
        raise ValidationError("Campos vacíos: contrasena", fields=["contrasena"])
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"La contraseña debe tener minimo {MIN_PASSWORD_LENGTH} caracteres",
            fields=["contrasena"],
        )
    return password


def validate_login_name(login_name: Optional[str]) -> str:
    """Trim and length-check a login name."""
    cleaned = _clean(login_name)
    if not cleaned:
        raise ValidationError("Campos vacíos: usuario", fields=["usuario"])
    if not MIN_LOGIN_NAME_LENGTH <= len(cleaned) <= MAX_LOGIN_NAME_LENGTH:
        raise ValidationError(
            f"El usuario debe tener entre {MIN_LOGIN_NAME_LENGTH} y "
            f"{MAX_LOGIN_NAME_LENGTH} caracteres",
            fields=["usuario"],
        )
    return cleaned


class RegistrationCoordinator:
    """
    Creates accounts inside one unit of work.

    Usage:
        coordinator = RegistrationCoordinator(session)
        key = await coordinator.register_paired_account(
            EntityKind.COMPANY,
            {"rif": "J-001", "nombre": "Acme Ferries", "email": "a@acme.com"},
            login_name="acme1",
            plaintext_password="secretpw",
        )
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.credentials = CredentialStore(session)
        self.companies = CompanyStore(session)
        self.employees = EmployeeStore(session)

    def _store_for(self, kind: EntityKind):
        return self.companies if kind is EntityKind.COMPANY else self.employees

    @staticmethod
    def _validate_entity_fields(
        profile: EntityProfile,
        entity_fields: Mapping[str, Optional[str]],
        login_name: Optional[str],
        plaintext_password: Optional[str],
    ) -> dict[str, Optional[str]]:
        """Collect every blank required field before failing, then map to attributes."""
        blank = [
            field for field in profile.required
            if not _clean(entity_fields.get(field))
        ]
        if not _clean(login_name):
            blank.append("usuario")
        if not plaintext_password or not plaintext_password.strip():
            blank.append("contrasena")
        if blank:
            raise ValidationError("Campos vacíos: " + ", ".join(blank), fields=blank)

        values: dict[str, Optional[str]] = {
            attr: _clean(entity_fields.get(field))
            for field, attr in profile.required.items()
        }
        for field, attr in profile.optional.items():
            values[attr] = _clean(entity_fields.get(field)) or None

        mapping = {**profile.required, **profile.optional}
        _reject_too_long(
            {field: _clean(entity_fields.get(field)) for field in mapping},
            {field: max_length(profile.model, attr) for field, attr in mapping.items()},
        )
        return values

    async def register_paired_account(
        self,
        entity_kind: EntityKind,
        entity_fields: Mapping[str, Optional[str]],
        login_name: str,
        plaintext_password: str,
    ) -> str:
        """
        Register a company or employee together with its credential.

        Args:
            entity_kind: Which entity to create
            entity_fields: Request fields for the entity, keyed by wire name
            login_name: Login name for the new credential
            plaintext_password: Initial password (at least 8 characters)

        Returns:
            The shared identity key

        Raises:
            ValidationError: Blank required field or weak password
            Conflict: Identity key or login name already registered
            NotFound: Employee's company does not exist
            PersistenceError: The database failed; nothing was written
            HashingError: bcrypt failed; nothing was written
        """
        profile = ENTITY_KINDS[entity_kind]
        values = self._validate_entity_fields(
            profile, entity_fields, login_name, plaintext_password
        )
        login_name = validate_login_name(login_name)
        validate_password(plaintext_password)

        identity_key = values[profile.required[profile.key_field]]
        store = self._store_for(entity_kind)

        try:
            async with transaction(self.session):
                if entity_kind is EntityKind.EMPLOYEE:
                    if not await self.companies.exists(values["company_tax_id"]):
                        raise NotFound("Empresa no encontrada")

                if await store.exists(identity_key):
                    raise Conflict(profile.duplicate_message)
                await self._ensure_credential_free(identity_key, login_name)

                password_hash = await hash_password_async(plaintext_password)

                await store.add(store.build(values))
                await self.credentials.add(
                    Credential(
                        identity_key=identity_key,
                        login_name=login_name,
                        password_hash=password_hash,
                        role=profile.role.value,
                        is_active=True,
                    )
                )
        except IntegrityError as exc:
            logger.info(
                "Registration lost a uniqueness race",
                extra={"rif_cedula": identity_key, "kind": entity_kind.value},
            )
            raise Conflict("El usuario o identificacion ya existen") from exc
        except SQLAlchemyError as exc:
            logger.exception(
                "Registration failed in the database",
                extra={"rif_cedula": identity_key, "kind": entity_kind.value},
            )
            raise PersistenceError("Error registrando cuenta") from exc

        logger.info(
            "Account registered",
            extra={"rif_cedula": identity_key, "tipo": profile.role.value},
        )
        return identity_key

    async def register_administrator(
        self,
        identity_key: str,
        login_name: str,
        plaintext_password: str,
    ) -> str:
        """
        Register an administrator credential. Administrators have no paired entity.

        Raises:
            ValidationError, Conflict, PersistenceError, HashingError
        """
        blank = [
            name for name, value in (
                ("rif_cedula", identity_key),
                ("usuario", login_name),
                ("contrasena", plaintext_password),
            )
            if not _clean(value)
        ]
        if blank:
            raise ValidationError("Campos vacíos: " + ", ".join(blank), fields=blank)
        identity_key = identity_key.strip()
        _reject_too_long(
            {"rif_cedula": identity_key},
            {"rif_cedula": max_length(Credential, "identity_key")},
        )
        login_name = validate_login_name(login_name)
        validate_password(plaintext_password)

        try:
            async with transaction(self.session):
                if (
                    await self.companies.exists(identity_key)
                    or await self.employees.exists(identity_key)
                ):
                    raise Conflict("La identificacion pertenece a una empresa o empleado")
                await self._ensure_credential_free(identity_key, login_name)

                password_hash = await hash_password_async(plaintext_password)
                await self.credentials.add(
                    Credential(
                        identity_key=identity_key,
                        login_name=login_name,
                        password_hash=password_hash,
                        role=AccountRole.ADMINISTRATOR.value,
                        is_active=True,
                    )
                )
        except IntegrityError as exc:
            raise Conflict("El usuario o identificacion ya existen") from exc
        except SQLAlchemyError as exc:
            logger.exception(
                "Administrator registration failed in the database",
                extra={"rif_cedula": identity_key},
            )
            raise PersistenceError("Error registrando administrador") from exc

        logger.info(
            "Administrator registered",
            extra={"rif_cedula": identity_key},
        )
        return identity_key

    async def _ensure_credential_free(self, identity_key: str, login_name: str) -> None:
        if await self.credentials.get(identity_key) is not None:
            raise Conflict("Esta identificacion ya tiene un usuario")
        if await self.credentials.login_name_taken(login_name):
            raise Conflict("El nombre de usuario ya existe")
