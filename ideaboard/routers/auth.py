"""
Authentication router — phone number + password registration and login.

Endpoints:
    POST /api/register → create an account, return its public fields
    POST /api/login    → verify credentials, return the account's public fields

No token or cookie is issued; the client keeps the returned identity itself.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.database import get_db
from ideaboard.schemas.base import ErrorEnvelope
from ideaboard.schemas.user import UserCreate, UserEnvelope, UserLogin, UserPublic
from ideaboard.services.accounts import AccountDirectory

router = APIRouter(
    prefix="/api",
    tags=["auth"],
    responses={400: {"model": ErrorEnvelope}, 500: {"model": ErrorEnvelope}},
)


def get_account_directory(request: Request, db: AsyncSession = Depends(get_db)) -> AccountDirectory:
    settings = request.app.state.settings
    return AccountDirectory(
        db,
        password_min_length=settings.PASSWORD_MIN_LENGTH,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    accounts: AccountDirectory = Depends(get_account_directory),
):
    user = await accounts.register(payload.full_name, payload.phone_number, payload.password)
    return UserEnvelope(
        message="User registered successfully",
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=UserEnvelope)
async def login(
    payload: UserLogin,
    accounts: AccountDirectory = Depends(get_account_directory),
):
    user = await accounts.authenticate(payload.phone_number, payload.password)
    return UserEnvelope(
        message="Login successful",
        user=UserPublic.model_validate(user),
    )
