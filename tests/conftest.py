"""
Shared test fixtures for the Storefront API test suite.

Every test gets its own app instance backed by a fresh in-memory
SQLite database (aiosqlite + AsyncSession).
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
# (storefront.main builds its module-level app from the environment)
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import Settings
from storefront.db.base import Base
from storefront.main import create_app
from storefront.repositories.customer import CustomerRepository
from storefront.services.auth import AuthService

ADMIN_CODE = "Admin-Code-2024"
STAFF_CODE = "staff-pass"
LOYALTY_CODE = "loyal-friends"
SESSION_TTL_HOURS = 24


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        BCRYPT_ROUNDS=4,
        AUTH_SESSION_TTL_HOURS=SESSION_TTL_HOURS,
        AUTH_DEFAULT_ROLE="basic",
        AUTH_DEFAULT_PROVIDER_ROLE="loyalty",
        AUTH_ROLE_CODE_ADMIN=ADMIN_CODE,
        AUTH_ROLE_CODE_STAFF=STAFF_CODE,
        AUTH_ROLE_CODE_LOYALTY=LOYALTY_CODE,
        CORS_ORIGINS=["http://allowed.test"],
        SITE_DEFAULT_MODE="ecommerce",
    )


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """App wired to a fresh database; tables created up front because
    ASGITransport does not run the lifespan."""
    application = create_app(settings)
    engine = application.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield application

    await engine.dispose()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
def customers(db_session: AsyncSession) -> CustomerRepository:
    return CustomerRepository(db_session)


@pytest.fixture
def auth_service(customers: CustomerRepository, settings: Settings) -> AuthService:
    return AuthService(customers, settings.auth)
