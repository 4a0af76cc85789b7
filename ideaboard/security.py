"""
Idea Board – Password hashing.

bcrypt is CPU bound, so the async helpers push it onto the worker thread pool.
"""

from typing import Optional

import bcrypt
from fastapi.concurrency import run_in_threadpool

from ideaboard.config import settings

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        # Over-long input or a malformed stored hash never matches.
        return False


async def hash_password_async(password: str, rounds: Optional[int] = None) -> str:
    return await run_in_threadpool(hash_password, password, rounds)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(verify_password, plain_password, hashed_password)
