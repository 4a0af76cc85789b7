"""
Idea Board – client-side presentation shell.

The shell talks to the API through ``ApiClient`` and keeps the remembered
identity in whatever ``IdentityStore`` it is given.
"""

from ideaboard.shell.client import ApiClient, ApiResponse                       # noqa: F401
from ideaboard.shell.shell import Banner, PresentationShell                      # noqa: F401
from ideaboard.shell.storage import IdentityStore, JsonFileIdentityStore, MemoryIdentityStore  # noqa: F401
