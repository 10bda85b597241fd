"""
Persistence adapters for credentials and the entities they pair with.

The stores only read and stage writes on the caller's session. Committing
and rolling back belong to whoever owns the unit of work.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ferryapp.kernel.models import Company, Credential, Employee


@dataclass(frozen=True)
class CredentialPatch:
    """
    Optional changes to a credential.

    Only the fields listed in FIELD_TO_COLUMN can ever reach the UPDATE.
    ``password_hash`` must already be hashed.
    """

    FIELD_TO_COLUMN = {
        "login_name": Credential.login_name,
        "password_hash": Credential.password_hash,
        "is_active": Credential.is_active,
    }

    login_name: Optional[str] = None
    password_hash: Optional[str] = None
    is_active: Optional[bool] = None

    def is_empty(self) -> bool:
        return not self.to_values()

    def to_values(self) -> dict[Any, Any]:
        """Column -> value for every field that was set."""
        values = {}
        for field_name, column in self.FIELD_TO_COLUMN.items():
            value = getattr(self, field_name)
            if value is not None:
                values[column] = value
        return values


class CredentialStore:
    """Reads and writes rows of ``usuarios``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, identity_key: str) -> Optional[Credential]:
        query = select(Credential).where(Credential.identity_key == identity_key)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_login_name(self, login_name: str) -> Optional[Credential]:
        query = select(Credential).where(Credential.login_name == login_name)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def login_name_taken(
        self,
        login_name: str,
        exclude_identity_key: Optional[str] = None,
    ) -> bool:
        condition = Credential.login_name == login_name
        if exclude_identity_key is not None:
            condition = condition & (Credential.identity_key != exclude_identity_key)
        result = await self.session.execute(select(exists().where(condition)))
        return bool(result.scalar())

    async def add(self, credential: Credential) -> Credential:
        """Stage a new credential and flush so constraint violations surface now."""
        self.session.add(credential)
        await self.session.flush()
        return credential

    async def apply_patch(self, identity_key: str, patch: CredentialPatch) -> int:
        """
        Write the patch to one credential.

        Returns:
            Number of rows updated (0 when the identity key is unknown)
        """
        stmt = (
            update(Credential)
            .where(Credential.identity_key == identity_key)
            .values(patch.to_values())
        )
        result = await self.session.execute(stmt)
        return result.rowcount


class _EntityStore:
    """Shared lookups for tables keyed by an identity key."""

    model: Any
    # primary key attribute on the model
    key_attr: str

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def key_column(self):
        return getattr(self.model, self.key_attr)

    async def get(self, identity_key: str):
        query = select(self.model).where(self.key_column == identity_key)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, identity_key: str) -> bool:
        result = await self.session.execute(
            select(exists().where(self.key_column == identity_key))
        )
        return bool(result.scalar())

    async def add(self, entity):
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def set_active(self, identity_key: str, active: bool) -> int:
        stmt = (
            update(self.model)
            .where(self.key_column == identity_key)
            .values({self.model.is_active: active})
        )
        result = await self.session.execute(stmt)
        return result.rowcount


class CompanyStore(_EntityStore):
    """Reads and writes rows of ``empresa``."""

    model = Company
    key_attr = "tax_id"

    def build(self, values: Mapping[str, Any]) -> Company:
        return Company(is_active=True, **values)


class EmployeeStore(_EntityStore):
    """Reads and writes rows of ``empleados``."""

    model = Employee
    key_attr = "national_id"

    def build(self, values: Mapping[str, Any]) -> Employee:
        return Employee(is_active=True, **values)
