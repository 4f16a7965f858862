"""Request Dependencies — app-lifetime collaborators read from app.state.

Invariants:
    - Collaborators are set by the lifespan (or by test fixtures) before requests arrive
"""

from fastapi import Request

from app.infrastructure.revalidation import PathRevalidator
from app.services.password_identity import PasswordIdentityProvider


def get_revalidator(request: Request) -> PathRevalidator:
    return request.app.state.revalidator


def get_identity_provider(request: Request) -> PasswordIdentityProvider:
    return request.app.state.identity_provider
