"""Password Identity — credentials provider backed by the users table.

Invariants:
    - Malformed credentials, unknown emails and wrong passwords are all rejected
      the same way (AuthFailure.INVALID_CREDENTIALS), so callers cannot probe for accounts
    - A failing user lookup is tagged AuthFailure.UNEXPECTED
"""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from app.core.domain_types import AuthFailure
from app.core.errors import AuthenticationError, DataFetchError, ErrorContext
from app.core.repository_protocols import SessionProvider
from app.infrastructure.passwords import check_password
from app.schemas.auth import SignInCredentials, SignedInUser
from app.services.invoice_queries import get_user_by_email

logger = logging.getLogger(__name__)


class PasswordIdentityProvider:
    """Email + bcrypt password sign-in."""

    def __init__(self, sessions: SessionProvider):
        self._sessions = sessions

    async def sign_in(self, credentials: dict[str, Any]) -> SignedInUser:
        try:
            creds = SignInCredentials.model_validate(credentials)
        except ValidationError:
            raise AuthenticationError(AuthFailure.INVALID_CREDENTIALS)

        try:
            async with self._sessions.session() as db:
                user = await get_user_by_email(db, creds.email)
        except DataFetchError as e:
            raise AuthenticationError(
                AuthFailure.UNEXPECTED,
                context=ErrorContext(operation="sign_in"),
            ) from e

        if user is None:
            raise AuthenticationError(AuthFailure.INVALID_CREDENTIALS)
        matches = await asyncio.to_thread(
            check_password, creds.password, user.password,
        )
        if not matches:
            raise AuthenticationError(AuthFailure.INVALID_CREDENTIALS)

        logger.info("User signed in", extra={"operation": "sign_in"})
        return SignedInUser.model_validate(user)
