"""
Password hashing (bcrypt via passlib).
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from functools import lru_cache

from passlib.context import CryptContext

from storefront.core.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 15
SALT_BYTES = 16
# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class PasswordCredentials:
    hash: str
    salt: str


def clamp_rounds(rounds: int) -> int:
    return max(MIN_BCRYPT_ROUNDS, min(int(rounds), MAX_BCRYPT_ROUNDS))


@lru_cache(maxsize=None)
def _context_for(rounds: int) -> CryptContext:
    return pwd_context.copy(bcrypt__default_rounds=rounds)


# ── Passwords ───────────────────────────────────────────────────────
def hash_password(plain: str, rounds: int = 12) -> PasswordCredentials:
    """Hash *plain* with bcrypt at the clamped cost factor.

    The returned ``salt`` is generated separately from the salt bcrypt
    embeds in the hash; it is stored alongside the hash but verification
    only ever needs the hash.
    """
    try:
        salt = secrets.token_hex(SALT_BYTES)
        hashed = _context_for(clamp_rounds(rounds)).hash(plain)
    except (OSError, RuntimeError) as exc:
        logger.error("Password hashing failed: %s", type(exc).__name__)
        raise InfrastructureError("Unable to hash password.") from exc
    return PasswordCredentials(hash=hashed, salt=salt)


def password_too_long(plain: str) -> bool:
    return len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES


def verify_password(plain: str, hashed: str | None) -> bool:
    if not plain or not hashed or password_too_long(plain):
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # Stored value is not a recognisable hash
        return False
