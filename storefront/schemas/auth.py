"""Pydantic schemas for the auth endpoints.

Request fields are all optional: missing values are reported by the auth
service with a specific message instead of a generic 422.
"""

from __future__ import annotations

from storefront.schemas.common import CamelModel, OkResponse
from storefront.schemas.customer import CustomerRead, SessionRead


class SignupRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    access_code: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class ProviderLoginRequest(CamelModel):
    email: str | None = None
    name: str | None = None
    provider: str | None = None


class AuthResponse(OkResponse):
    customer: CustomerRead
    session: SessionRead
