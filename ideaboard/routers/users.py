"""Users router – account listing for diagnostics."""

from fastapi import APIRouter, Depends

from ideaboard.routers.auth import get_account_directory
from ideaboard.schemas.base import ErrorEnvelope
from ideaboard.schemas.user import UserOut, UsersEnvelope
from ideaboard.services.accounts import AccountDirectory

router = APIRouter(prefix="/api/users", tags=["users"], responses={500: {"model": ErrorEnvelope}})


@router.get("", response_model=UsersEnvelope)
async def list_users(accounts: AccountDirectory = Depends(get_account_directory)):
    """Every account's public fields; password hashes are not part of the schema."""
    users = await accounts.list_accounts()
    return UsersEnvelope(users=[UserOut.model_validate(u) for u in users])
