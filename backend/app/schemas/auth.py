"""Auth Schemas — sign-in credential shape and the signed-in user profile.

Invariants:
    - email is trimmed and must look like an address
    - password is at least 6 characters
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignInCredentials(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class SignedInUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
