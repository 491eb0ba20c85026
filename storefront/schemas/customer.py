"""Pydantic schemas for customers and the sessions issued to them."""

from __future__ import annotations

from storefront.core.roles import Role
from storefront.schemas.common import CamelModel


class CustomerSummary(CamelModel):
    id: int
    name: str
    email: str
    role: Role


class CustomerRead(CustomerSummary):
    provider: str | None = None


class SessionRead(CamelModel):
    token: str
    customer: CustomerSummary
    created_at: str  # ISO-8601 with offset
    expires_at: str
    provider: str | None = None
