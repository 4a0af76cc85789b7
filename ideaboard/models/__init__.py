"""
Idea Board – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them through a single
``import ideaboard.models``.
"""

from ideaboard.models.user import User                 # noqa: F401
from ideaboard.models.idea import Idea, IdeaStatus     # noqa: F401
