"""SQLAlchemy repository for the ``customers`` table."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import ConflictError, PersistenceError
from storefront.core.roles import Role
from storefront.models.customer import Customer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a write whose failure the caller may choose to ignore."""

    ok: bool
    error: Exception | None = None


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "unique" in message or "duplicate" in message


class CustomerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Customer | None:
        stmt = select(Customer).where(Customer.email == normalize_email(email)).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def insert(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        salt: str,
        role: Role,
        provider: str | None = None,
    ) -> Customer:
        """Create a customer row and return it with its assigned id.

        Raises :class:`ConflictError` when the email is already taken
        (including a concurrent insert that won the race) and
        :class:`PersistenceError` for any other storage failure.
        """
        customer = Customer(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            salt=salt,
            role=role.value,
            provider=provider,
        )
        self._session.add(customer)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            if _is_unique_violation(exc):
                raise ConflictError("An account with that email already exists.") from exc
            raise PersistenceError("Failed to create the account.") from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise PersistenceError("Failed to create the account.") from exc

        await self._session.refresh(customer)
        logger.info("Created customer %s (email: %s)", customer.id, customer.email)
        return customer

    async def update_provider(self, customer_id: int, provider: str) -> WriteResult:
        stmt = update(Customer).where(Customer.id == customer_id).values(provider=provider)
        try:
            await self._session.execute(stmt)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            return WriteResult(ok=False, error=exc)
        logger.debug("Customer %s provider set to %s", customer_id, provider)
        return WriteResult(ok=True)
