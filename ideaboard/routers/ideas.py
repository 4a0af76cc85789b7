"""
Ideas router — submit ideas, list them, and move them through the status workflow.

Endpoints:
    POST  /api/ideas                      → submit an idea (always starts as pending)
    GET   /api/ideas                      → all ideas with owner identity, newest first
    GET   /api/ideas/stats                → per-status counts across all ideas
    GET   /api/ideas/user/{user_id}       → one owner's ideas, newest first
    GET   /api/ideas/user/{user_id}/stats → per-status counts for one owner
    GET   /api/ideas/{idea_id}            → a single idea
    PATCH /api/ideas/{idea_id}/status     → set the status
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.database import get_db
from ideaboard.schemas.base import ErrorEnvelope
from ideaboard.schemas.idea import (
    IdeaCreate,
    IdeaEnvelope,
    IdeaOut,
    IdeasEnvelope,
    IdeaStats,
    IdeaStatsEnvelope,
    IdeaStatusUpdate,
    IdeasWithUserEnvelope,
    IdeaWithUserOut,
)
from ideaboard.services.ideas import IdeaLedger

router = APIRouter(prefix="/api/ideas", tags=["ideas"], responses={500: {"model": ErrorEnvelope}})


def get_idea_ledger(db: AsyncSession = Depends(get_db)) -> IdeaLedger:
    return IdeaLedger(db)


# ═══════════════════════════════════════════════════════════════
#  POST /api/ideas → submit
# ═══════════════════════════════════════════════════════════════

@router.post(
    "",
    response_model=IdeaEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorEnvelope}},
)
async def submit_idea(payload: IdeaCreate, ledger: IdeaLedger = Depends(get_idea_ledger)):
    idea = await ledger.submit(
        text=payload.text,
        project=payload.project,
        module=payload.module,
        section=payload.section,
        submitted_by=payload.submitted_by,
        owner_id=payload.user_id,
    )
    return IdeaEnvelope(message="Idea submitted successfully", idea=IdeaOut.model_validate(idea))


# ═══════════════════════════════════════════════════════════════
#  GET listings
# ═══════════════════════════════════════════════════════════════

@router.get("", response_model=IdeasWithUserEnvelope)
async def list_ideas(ledger: IdeaLedger = Depends(get_idea_ledger)):
    ideas = await ledger.list_all()
    return IdeasWithUserEnvelope(ideas=[IdeaWithUserOut.model_validate(i) for i in ideas])


@router.get("/stats", response_model=IdeaStatsEnvelope)
async def idea_stats(ledger: IdeaLedger = Depends(get_idea_ledger)):
    summary = await ledger.status_summary()
    return IdeaStatsEnvelope(stats=IdeaStats(**summary))


@router.get("/user/{user_id}", response_model=IdeasEnvelope)
async def list_user_ideas(user_id: int, ledger: IdeaLedger = Depends(get_idea_ledger)):
    """Returns an empty list, not an error, when the user has no ideas."""
    ideas = await ledger.list_by_owner(user_id)
    return IdeasEnvelope(ideas=[IdeaOut.model_validate(i) for i in ideas])


@router.get("/user/{user_id}/stats", response_model=IdeaStatsEnvelope)
async def user_idea_stats(user_id: int, ledger: IdeaLedger = Depends(get_idea_ledger)):
    summary = await ledger.status_summary(owner_id=user_id)
    return IdeaStatsEnvelope(stats=IdeaStats(**summary))


@router.get("/{idea_id}", response_model=IdeaEnvelope, responses={404: {"model": ErrorEnvelope}})
async def get_idea(idea_id: int, ledger: IdeaLedger = Depends(get_idea_ledger)):
    idea = await ledger.get(idea_id)
    return IdeaEnvelope(idea=IdeaOut.model_validate(idea))


# ═══════════════════════════════════════════════════════════════
#  PATCH /api/ideas/{idea_id}/status
# ═══════════════════════════════════════════════════════════════

@router.patch(
    "/{idea_id}/status",
    response_model=IdeaEnvelope,
    responses={400: {"model": ErrorEnvelope}, 404: {"model": ErrorEnvelope}},
)
async def update_idea_status(
    idea_id: int,
    payload: IdeaStatusUpdate,
    ledger: IdeaLedger = Depends(get_idea_ledger),
):
    idea = await ledger.update_status(idea_id, payload.status)
    return IdeaEnvelope(message="Idea status updated successfully", idea=IdeaOut.model_validate(idea))
