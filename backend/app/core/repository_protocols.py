"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store access, revalidation and sign-in are reached through these Protocols
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from app.core.domain_types import UserId


class SessionProvider(Protocol):
    """Hands out independent store sessions. Implemented by DatabaseSessionManager."""
    def session(self) -> AbstractAsyncContextManager[Any]: ...


class Revalidator(Protocol):
    """Marks a served view stale after a successful mutation."""
    def revalidate_path(self, path: str) -> None: ...


class UserProfile(Protocol):
    """Public part of a signed-in user."""
    id: UserId
    name: str
    email: str


class IdentityProvider(Protocol):
    """Verifies submitted credentials.

    Raises AuthenticationError tagged INVALID_CREDENTIALS when the credentials
    are rejected; any other failure is raised as-is or tagged UNEXPECTED.
    """
    async def sign_in(self, credentials: dict[str, Any]) -> UserProfile: ...
