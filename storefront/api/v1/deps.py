"""
FastAPI dependencies: database session, repositories and services.

Everything is built from the engine and settings stored on ``app.state``
by the app factory.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import Settings
from storefront.repositories.customer import CustomerRepository
from storefront.services.auth import AuthService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# ── Database session ────────────────────────────────────────────────
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Services ────────────────────────────────────────────────────────
def get_customer_repository(db: AsyncSession = Depends(get_db)) -> CustomerRepository:
    return CustomerRepository(db)


def get_auth_service(
    customers: CustomerRepository = Depends(get_customer_repository),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(customers, settings.auth)
