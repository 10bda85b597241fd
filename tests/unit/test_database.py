"""Unit tests for the unit-of-work helper."""

import asyncio

import pytest

from ferryapp.database import transaction
from ferryapp.kernel.identity.stores import CompanyStore
from ferryapp.kernel.models import Company


def _company(tax_id: str) -> Company:
    return Company(tax_id=tax_id, name="Acme Ferries", email="contacto@acme.com", is_active=True)


class TestTransaction:

    @pytest.mark.asyncio
    async def test_commits_on_success(self, session_maker, count_rows):
        async with session_maker() as session:
            async with transaction(session):
                await CompanyStore(session).add(_company("J-001"))

        assert await count_rows(Company) == 1

    @pytest.mark.asyncio
    async def test_rolls_back_on_error(self, session_maker, count_rows):
        async with session_maker() as session:
            with pytest.raises(RuntimeError):
                async with transaction(session):
                    await CompanyStore(session).add(_company("J-001"))
                    raise RuntimeError("boom")

        assert await count_rows(Company) == 0

    @pytest.mark.asyncio
    async def test_rolls_back_on_cancellation(self, session_maker, count_rows):
        flushed = asyncio.Event()

        async def slow_registration():
            async with session_maker() as session:
                async with transaction(session):
                    await CompanyStore(session).add(_company("J-001"))
                    flushed.set()
                    await asyncio.sleep(30)

        task = asyncio.create_task(slow_registration())
        await flushed.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert await count_rows(Company) == 0


class TestEntityStores:

    @pytest.mark.asyncio
    async def test_key_column_resolves_on_the_model(self, db_session):
        store = CompanyStore(db_session)

        assert store.key_column is Company.tax_id
        assert await store.exists("J-001") is False

        await store.add(_company("J-001"))

        assert await store.exists("J-001") is True
        assert (await store.get("J-001")).name == "Acme Ferries"
        assert await store.set_active("J-001", False) == 1
