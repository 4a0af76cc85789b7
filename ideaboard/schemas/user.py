"""User Pydantic schemas — registration, login, public profile output."""

from datetime import datetime
from typing import List, Optional

from ideaboard.schemas.base import CamelModel, Envelope


class UserCreate(CamelModel):
    """Fields submitted on the registration form.

    Everything is optional here so missing fields reach the Account Directory,
    which reports them as a ValidationError instead of a schema error.
    """
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None


class UserLogin(CamelModel):
    """Fields submitted on the login form."""
    phone_number: Optional[str] = None
    password: Optional[str] = None


class UserPublic(CamelModel):
    """Public user identity, without the password hash."""
    id: int
    full_name: str
    phone_number: str


class UserOut(UserPublic):
    created_at: datetime
    updated_at: datetime


class UserEnvelope(Envelope):
    user: UserPublic


class UsersEnvelope(Envelope):
    users: List[UserOut]
