"""Tests for CustomerRepository failure handling against a real session."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import PersistenceError
from storefront.core.roles import Role
from storefront.models.customer import Customer
from storefront.repositories.customer import CustomerRepository
from storefront.services.auth import AuthService


def _raiser(exc: Exception):
    async def _fail(*_args, **_kwargs):
        raise exc

    return _fail


async def _count(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(func.count()).select_from(Customer))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_insert_storage_failure_is_persistence_error(
    customers: CustomerRepository, db_session: AsyncSession, monkeypatch
):
    monkeypatch.setattr(
        db_session, "commit", _raiser(OperationalError("INSERT", {}, Exception("disk I/O error")))
    )
    with pytest.raises(PersistenceError) as exc_info:
        await customers.insert(name="A", email="a@x.com", password_hash="h", salt="s", role=Role.BASIC)
    assert exc_info.value.message == "Failed to create the account."

    monkeypatch.undo()
    assert await _count(db_session) == 0


@pytest.mark.asyncio
async def test_insert_non_unique_integrity_error_is_persistence_error(
    customers: CustomerRepository, db_session: AsyncSession, monkeypatch
):
    monkeypatch.setattr(
        db_session,
        "commit",
        _raiser(IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: customers.salt"))),
    )
    with pytest.raises(PersistenceError):
        await customers.insert(name="A", email="a@x.com", password_hash="h", salt="s", role=Role.BASIC)


@pytest.mark.asyncio
async def test_update_provider_failure_returns_write_result(
    customers: CustomerRepository, db_session: AsyncSession, monkeypatch
):
    created = await customers.insert(
        name="A", email="a@x.com", password_hash="h", salt="s", role=Role.BASIC, provider="google"
    )
    error = OperationalError("UPDATE", {}, Exception("database is locked"))
    monkeypatch.setattr(db_session, "execute", _raiser(error))

    outcome = await customers.update_provider(created.id, "github")

    assert outcome.ok is False
    assert outcome.error is error


@pytest.mark.asyncio
async def test_update_provider_success(customers: CustomerRepository, db_session: AsyncSession):
    created = await customers.insert(name="A", email="a@x.com", password_hash="h", salt="s", role=Role.BASIC)
    outcome = await customers.update_provider(created.id, "apple")

    assert outcome.ok is True
    assert outcome.error is None
    db_session.expire_all()
    assert (await customers.find_by_email("a@x.com")).provider == "apple"


@pytest.mark.asyncio
async def test_provider_login_survives_failed_provider_commit(
    auth_service: AuthService, customers: CustomerRepository, db_session: AsyncSession, monkeypatch
):
    first = await auth_service.provider_login(email="p@x.com", provider="google")

    monkeypatch.setattr(
        db_session, "commit", _raiser(OperationalError("COMMIT", {}, Exception("database is locked")))
    )
    result = await auth_service.provider_login(email="p@x.com", provider="github")

    assert result.ok is True
    assert result.customer.id == first.customer.id
    assert result.customer.provider == "google"

    monkeypatch.undo()
    db_session.expire_all()
    assert (await customers.find_by_email("p@x.com")).provider == "google"
