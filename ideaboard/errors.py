"""
Idea Board – Domain errors.

Services raise these; the handlers in ``ideaboard.main`` turn each one into a
``{"success": false, "message": ...}`` response with the class's status code.
"""

from typing import Optional

from fastapi import status


class IdeaBoardError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(IdeaBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class DuplicateAccount(IdeaBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User with this phone number already exists"


class InvalidCredentials(IdeaBoardError):
    """Raised for an unknown phone number and a wrong password alike."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid phone number or password"


class NotFound(IdeaBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(IdeaBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
