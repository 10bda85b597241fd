"""
Pytest fixtures for the ferry operator API tests.

Every test gets its own SQLite file so tests never share rows.
"""

import os
import tempfile
from typing import AsyncGenerator, Callable

# Settings are read at import time; point them at a scratch database first
_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_tmp.name}")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ferryapp.config import get_settings
from ferryapp.database import build_engine, build_session_maker, get_db, init_db
from ferryapp.kernel.identity import password as password_module
from ferryapp.kernel.identity.jwt import TokenService
from ferryapp.kernel.identity.registration import EntityKind, RegistrationCoordinator
from ferryapp.kernel.models import AccountRole
from ferryapp.main import app

ADMIN_KEY = "V-1000000"
ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "adminpass1"

COMPANY_FIELDS = {
    "rif": "J-001",
    "nombre": "Acme Ferries",
    "email": "contacto@acme.com",
    "direccion": "Puerto La Cruz",
}

EMPLOYEE_FIELDS = {
    "cedula": "V-2000",
    "nombres": "Ana",
    "apellidos": "Perez",
    "rif_empresa": "J-001",
    "email": "ana@acme.com",
    "cargo": "Capitana",
    "numero_tlf": "0414-5550000",
}


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Lowest bcrypt cost so hashing does not dominate the test run."""
    monkeypatch.setattr(password_module, "BCRYPT_ROUNDS", 4)


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine over a fresh SQLite file with the schema created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ferry.db'}")
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(db_engine)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def tokens() -> TokenService:
    """The same signer the application uses."""
    return app.state.token_service


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with get_db pointed at the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_account(session_maker) -> str:
    """An administrator credential; returns its identity key."""
    async with session_maker() as session:
        return await RegistrationCoordinator(session).register_administrator(
            ADMIN_KEY, ADMIN_LOGIN, ADMIN_PASSWORD
        )


@pytest_asyncio.fixture
async def company_account(session_maker) -> str:
    """Company J-001 with login acme1 / secretpw."""
    async with session_maker() as session:
        return await RegistrationCoordinator(session).register_paired_account(
            EntityKind.COMPANY,
            COMPANY_FIELDS,
            login_name="acme1",
            plaintext_password="secretpw",
        )


@pytest.fixture
def bearer(tokens: TokenService) -> Callable[[str, AccountRole], dict]:
    """Build an Authorization header for an identity and role."""

    def _bearer(identity_key: str, role: AccountRole) -> dict:
        token = tokens.issue(identity_key, role.value).token
        return {"Authorization": f"Bearer {token}"}

    return _bearer


@pytest.fixture
def admin_headers(admin_account: str, bearer) -> dict:
    return bearer(admin_account, AccountRole.ADMINISTRATOR)


@pytest.fixture
def count_rows(session_maker):
    """Row count of a model, read through a fresh session."""

    async def _count(model) -> int:
        async with session_maker() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count


@pytest.fixture
def company_fields() -> dict:
    return dict(COMPANY_FIELDS)


@pytest.fixture
def employee_fields() -> dict:
    return dict(EMPLOYEE_FIELDS)


@pytest.fixture
def settings():
    return get_settings()
