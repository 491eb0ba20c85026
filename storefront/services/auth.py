"""
Customer authentication flows: signup, login, provider login and logout.

Each flow validates its input up front and raises an
:class:`~storefront.core.exceptions.AuthError` subclass carrying the HTTP
status and the message shown to the caller.
"""

from __future__ import annotations

import logging
import secrets

from email_validator import EmailNotValidError, validate_email

from storefront.core.config import AuthConfig
from storefront.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from storefront.core.roles import normalize_provider, normalize_role, resolve_role
from storefront.core.security import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
    verify_password,
)
from storefront.core.sessions import SessionOverrides, issue_session, sanitize_customer
from storefront.models.customer import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from storefront.repositories.customer import CustomerRepository, normalize_email
from storefront.schemas.auth import AuthResponse

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
THROWAWAY_PASSWORD_BYTES = 24


def _is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class AuthService:
    def __init__(self, customers: CustomerRepository, config: AuthConfig) -> None:
        self._customers = customers
        self._config = config

    async def signup(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
        role: str | None = None,
        access_code: str | None = None,
    ) -> AuthResponse:
        name = (name or "").strip()
        email = normalize_email(email)
        password = password or ""

        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required.")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters.")
        if not _is_valid_email(email):
            raise ValidationError("Enter a valid email address.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        if password_too_long(password):
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
        if "\x00" in password:
            raise ValidationError("Password must not contain NUL characters.")

        if await self._customers.find_by_email(email) is not None:
            raise ConflictError("An account with that email already exists.")

        resolved_role = resolve_role(
            role, access_code, self._config.role_codes, self._config.default_role
        )
        credentials = hash_password(password, self._config.bcrypt_rounds)

        record = await self._customers.insert(
            name=name,
            email=email,
            password_hash=credentials.hash,
            salt=credentials.salt,
            role=resolved_role,
        )

        customer = sanitize_customer(record)
        session = issue_session(customer, self._config.session_ttl_hours)
        return AuthResponse(customer=customer, session=session)

    async def login(self, *, email: str | None, password: str | None) -> AuthResponse:
        email = normalize_email(email)
        password = password or ""

        if not email or not password:
            raise ValidationError("Email and password are required.")

        record = await self._customers.find_by_email(email)
        if record is None:
            raise NotFoundError("No account found for that email.")

        if not verify_password(password, record.password_hash):
            raise AuthenticationError("Incorrect password. Please try again.")

        customer = sanitize_customer(record)
        session = issue_session(customer, self._config.session_ttl_hours)
        return AuthResponse(customer=customer, session=session)

    async def provider_login(
        self,
        *,
        email: str | None,
        name: str | None = None,
        provider: str | None = None,
    ) -> AuthResponse:
        email = normalize_email(email)
        name = (name or "").strip()

        if not email:
            raise ValidationError("Provider sign-in requires an email address.")
        if len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError("Enter a valid email address.")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters.")

        resolved_provider = normalize_provider(provider)
        if resolved_provider is None:
            raise ValidationError("Unsupported sign-in provider.")
        provider_name = resolved_provider.value

        record = await self._customers.find_by_email(email)

        if record is None:
            # Unusable for password login: never stored in clear or returned
            throwaway = secrets.token_hex(THROWAWAY_PASSWORD_BYTES)
            credentials = hash_password(throwaway, self._config.bcrypt_rounds)
            try:
                record = await self._customers.insert(
                    name=name or email.split("@", 1)[0][:NAME_MAX_LENGTH],
                    email=email,
                    password_hash=credentials.hash,
                    salt=credentials.salt,
                    role=normalize_role(self._config.default_provider_role),
                    provider=provider_name,
                )
            except (ConflictError, PersistenceError) as exc:
                raise PersistenceError("Failed to create provider account.") from exc
            customer = sanitize_customer(record)
        else:
            customer = sanitize_customer(record)
            if customer.provider != provider_name:
                outcome = await self._customers.update_provider(customer.id, provider_name)
                if outcome.ok:
                    logger.info(
                        "Customer %s provider changed from %s to %s",
                        customer.id,
                        customer.provider,
                        provider_name,
                    )
                    customer = customer.model_copy(update={"provider": provider_name})
                else:
                    # Sign-in still succeeds with the previously stored provider
                    logger.warning(
                        "Could not update provider for customer %s: %s",
                        customer.id,
                        outcome.error,
                    )

        session = issue_session(
            customer,
            self._config.session_ttl_hours,
            SessionOverrides(provider=provider_name),
        )
        return AuthResponse(customer=customer, session=session)

    async def logout(self) -> None:
        """Sessions are not tracked server-side; the client drops its token."""
        return None
