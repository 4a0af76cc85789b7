"""Idea Pydantic schemas."""

from datetime import datetime
from typing import Dict, List, Optional

from ideaboard.models.idea import IdeaStatus
from ideaboard.schemas.base import CamelModel, Envelope
from ideaboard.schemas.user import UserPublic


class IdeaCreate(CamelModel):
    text: Optional[str] = None
    project: Optional[str] = None
    module: Optional[str] = None
    section: Optional[str] = None
    submitted_by: Optional[str] = None
    user_id: Optional[int] = None


class IdeaStatusUpdate(CamelModel):
    # Plain string: unknown values are rejected by the ledger, not the schema.
    status: Optional[str] = None


class IdeaOut(CamelModel):
    id: int
    text: str
    project: str
    module: str
    section: str
    submitted_by: str
    user_id: int
    status: IdeaStatus
    created_at: datetime
    updated_at: datetime


class IdeaWithUserOut(IdeaOut):
    """Idea joined with its owner's public identity."""
    user: UserPublic


class IdeaStats(CamelModel):
    total: int
    by_status: Dict[str, int]


class IdeaEnvelope(Envelope):
    idea: IdeaOut


class IdeasEnvelope(Envelope):
    ideas: List[IdeaOut]


class IdeasWithUserEnvelope(Envelope):
    ideas: List[IdeaWithUserOut]


class IdeaStatsEnvelope(Envelope):
    stats: IdeaStats
