"""
Bearer session issuance.

Sessions are plain values handed to the client once; nothing is stored
server-side, so expiry has to be enforced by whoever consumes the token.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from storefront.core.roles import normalize_role
from storefront.schemas.customer import CustomerRead, CustomerSummary, SessionRead

TOKEN_BYTES = 32


@dataclass(frozen=True)
class SessionOverrides:
    """Fixed values for an issued session (tests, or provider hand-off)."""

    token: str | None = None
    created_at: datetime | str | None = None
    expires_at: datetime | str | None = None
    provider: str | None = None


def _as_aware(value: datetime | str) -> datetime:
    if isinstance(value, str):
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _format(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def sanitize_customer(record: Any) -> CustomerRead:
    """Project a customer row (or any object with the same attributes)
    onto the public fields, dropping credentials."""
    return CustomerRead(
        id=int(record.id or 0),
        name=str(record.name or ""),
        email=str(record.email or ""),
        role=normalize_role(record.role),
        provider=getattr(record, "provider", None),
    )


def issue_session(
    customer: Any,
    ttl_hours: int,
    overrides: SessionOverrides | None = None,
) -> SessionRead:
    overrides = overrides or SessionOverrides()

    created_at = (
        _as_aware(overrides.created_at)
        if overrides.created_at is not None
        else datetime.now(timezone.utc).replace(microsecond=0)
    )
    expires_at = (
        _as_aware(overrides.expires_at)
        if overrides.expires_at is not None
        else created_at + timedelta(hours=max(1, int(ttl_hours)))
    )

    return SessionRead(
        token=overrides.token or secrets.token_hex(TOKEN_BYTES),
        customer=CustomerSummary(
            id=int(customer.id),
            name=str(customer.name),
            email=str(customer.email),
            role=normalize_role(customer.role),
        ),
        created_at=_format(created_at),
        expires_at=_format(expires_at),
        provider=getattr(customer, "provider", None) or overrides.provider,
    )
