"""
Account Directory — registration and phone/password authentication.

Unknown phone numbers and wrong passwords fail the same way so callers cannot
probe which numbers are registered.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.config import settings
from ideaboard.errors import DuplicateAccount, InternalError, InvalidCredentials, ValidationError
from ideaboard.models.user import User
from ideaboard.security import BCRYPT_MAX_BYTES, hash_password_async, verify_password_async

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class AccountDirectory:
    def __init__(
        self,
        session: AsyncSession,
        password_min_length: Optional[int] = None,
        bcrypt_rounds: Optional[int] = None,
    ):
        self._session = session
        self._password_min_length = password_min_length or settings.PASSWORD_MIN_LENGTH
        self._bcrypt_rounds = bcrypt_rounds or settings.BCRYPT_ROUNDS

    async def get_by_id(self, user_id: int) -> Optional[User]:
        try:
            return await self._session.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load user %s", user_id)
            raise InternalError() from exc

    async def get_by_phone(self, phone_number: str) -> Optional[User]:
        stmt = select(User).where(User.phone_number == phone_number)
        try:
            return (await self._session.scalars(stmt)).one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up user by phone number")
            raise InternalError() from exc

    # ═══════════════════════════════════════════════════════════════
    #  Register
    # ═══════════════════════════════════════════════════════════════

    async def register(self, full_name: str, phone_number: str, password: str) -> User:
        full_name = _clean(full_name)
        phone_number = _clean(phone_number)
        if not full_name or not phone_number or not password:
            raise ValidationError("All fields are required")
        if len(password) < self._password_min_length:
            raise ValidationError(
                f"Password must be at least {self._password_min_length} characters"
            )
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

        # Courtesy check; the unique index on phone_number is what actually
        # guarantees uniqueness under concurrent registrations.
        if await self.get_by_phone(phone_number):
            raise DuplicateAccount()

        user = User(
            full_name=full_name,
            phone_number=phone_number,
            password_hash=await hash_password_async(password, self._bcrypt_rounds),
        )
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateAccount() from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Registration failed for %s", phone_number)
            raise InternalError("Server error during registration") from exc

        logger.info("User registered: %s (id=%s)", phone_number, user.id)
        return user

    # ═══════════════════════════════════════════════════════════════
    #  Authenticate
    # ═══════════════════════════════════════════════════════════════

    async def authenticate(self, phone_number: str, password: str) -> User:
        phone_number = _clean(phone_number)
        if not phone_number or not password:
            raise InvalidCredentials()

        user = await self.get_by_phone(phone_number)
        if not user or not await verify_password_async(password, user.password_hash):
            logger.info("Failed login for %s", phone_number)
            raise InvalidCredentials()

        logger.info("User logged in: %s", phone_number)
        return user

    # ═══════════════════════════════════════════════════════════════
    #  List
    # ═══════════════════════════════════════════════════════════════

    async def list_accounts(self) -> List[User]:
        try:
            result = await self._session.scalars(select(User).order_by(User.id.asc()))
            return list(result.all())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list users")
            raise InternalError() from exc
