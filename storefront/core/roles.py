"""
Customer roles, sign-in providers and access-code role resolution.

Free-text role and provider strings coming from requests, configuration
or the database are always passed through ``normalize_role`` /
``normalize_provider`` before use.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    LOYALTY = "loyalty"
    BASIC = "basic"


DEFAULT_ROLE = Role.BASIC

# Roles that can only be claimed with a matching access code
PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.STAFF})

_ROLE_ALIASES: dict[str, Role] = {
    "admin": Role.ADMIN,
    "staff": Role.STAFF,
    "loyalty": Role.LOYALTY,
    "loyalty_customer": Role.LOYALTY,
    "loyalty-customers": Role.LOYALTY,
    "basic": Role.BASIC,
    "customer": Role.BASIC,
    "basic customer": Role.BASIC,
}


class Provider(str, Enum):
    GOOGLE = "google"
    GITHUB = "github"
    MICROSOFT = "microsoft"
    APPLE = "apple"
    FACEBOOK = "facebook"


DEFAULT_PROVIDER = Provider.GOOGLE


def normalize_role(value: str | Role | None, default: Role = DEFAULT_ROLE) -> Role:
    """Map any spelling of a role onto :class:`Role`; unknown input gives *default*."""
    if isinstance(value, Role):
        return value
    key = str(value or "").strip().lower()
    return _ROLE_ALIASES.get(key, default)


def normalize_provider(value: str | Provider | None) -> Provider | None:
    """Return the matching :class:`Provider`, the default one for empty input,
    or ``None`` when the name is not supported."""
    if isinstance(value, Provider):
        return value
    key = str(value or "").strip().lower()
    if not key:
        return DEFAULT_PROVIDER
    try:
        return Provider(key)
    except ValueError:
        return None


def resolve_role(
    requested_role: str | Role | None,
    access_code: str | None,
    role_codes: Mapping[str | Role, str],
    default_role: Role = DEFAULT_ROLE,
) -> Role:
    """Decide which role a signup is granted.

    A matching access code wins over whatever role was requested. Without
    one, privileged roles fall back to *default_role*; any other requested
    role is kept once normalised.
    """
    code = (access_code or "").strip().lower()

    codes: dict[Role, str] = {}
    for role, secret in role_codes.items():
        normalized_secret = (secret or "").strip().lower()
        if normalized_secret:
            codes[normalize_role(role)] = normalized_secret

    if code:
        for role, secret in codes.items():
            if secret == code:
                return role

    normalized = normalize_role(requested_role, default=default_role)
    if normalized in PRIVILEGED_ROLES:
        return default_role
    return normalized
