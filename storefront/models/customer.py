"""
Customer model: storefront accounts (password or provider sign-in).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from storefront.db.base import Base


NAME_MAX_LENGTH = 200
EMAIL_MAX_LENGTH = 320


class Customer(Base):
    __tablename__ = "customers"

    id: int = Column(Integer, primary_key=True, autoincrement=True, index=True)  # type: ignore[assignment]
    name: str = Column("full_name", String(NAME_MAX_LENGTH), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(EMAIL_MAX_LENGTH), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    password_hash: str = Column(String(255), nullable=False)  # type: ignore[assignment]
    salt: str = Column(String(64), nullable=False)  # type: ignore[assignment]
    role: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default="basic",
        server_default="basic",
    )  # admin | staff | loyalty | basic
    provider: str | None = Column(String(50), nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
