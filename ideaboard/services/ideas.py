"""
Idea Ledger — submission, listing, and status changes for ideas.

Status transitions are unrestricted: any status may be set from any other,
including back to ``pending`` and to the current value.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ideaboard.errors import InternalError, NotFound, ValidationError
from ideaboard.models.idea import Idea, IdeaStatus
from ideaboard.models.user import User, utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("text", "project", "module", "section", "submitted_by")


class IdeaLedger:
    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _newest_first(stmt):
        return stmt.order_by(desc(Idea.created_at), desc(Idea.id))

    # ═══════════════════════════════════════════════════════════════
    #  Submit
    # ═══════════════════════════════════════════════════════════════

    async def submit(
        self,
        text: str,
        project: str,
        module: str,
        section: str,
        submitted_by: str,
        owner_id: int,
    ) -> Idea:
        values = {
            "text": text,
            "project": project,
            "module": module,
            "section": section,
            "submitted_by": submitted_by,
        }
        values = {k: v.strip() if isinstance(v, str) else "" for k, v in values.items()}
        if not all(values[field] for field in REQUIRED_FIELDS) or owner_id is None:
            raise ValidationError("All fields are required")

        try:
            owner = await self._session.get(User, owner_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load owner %s", owner_id)
            raise InternalError("Server error during idea submission") from exc
        if owner is None:
            raise ValidationError("Unknown user")

        idea = Idea(**values, user_id=owner_id, status=IdeaStatus.PENDING)
        self._session.add(idea)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            # Owner removed between the check and the insert.
            await self._session.rollback()
            raise ValidationError("Unknown user") from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Idea submission failed for user %s", owner_id)
            raise InternalError("Server error during idea submission") from exc

        logger.info("Idea %s submitted by user %s", idea.id, owner_id)
        return idea

    # ═══════════════════════════════════════════════════════════════
    #  Read
    # ═══════════════════════════════════════════════════════════════

    async def list_all(self) -> List[Idea]:
        """Every idea, newest first, with its owner loaded."""
        stmt = self._newest_first(select(Idea).options(selectinload(Idea.user)))
        try:
            return list((await self._session.scalars(stmt)).all())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list ideas")
            raise InternalError() from exc

    async def list_by_owner(self, owner_id: int) -> List[Idea]:
        stmt = self._newest_first(select(Idea).where(Idea.user_id == owner_id))
        try:
            return list((await self._session.scalars(stmt)).all())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list ideas for user %s", owner_id)
            raise InternalError() from exc

    async def get(self, idea_id: int) -> Idea:
        try:
            idea = await self._session.get(Idea, idea_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load idea %s", idea_id)
            raise InternalError() from exc
        if idea is None:
            raise NotFound("Idea not found")
        return idea

    async def status_summary(self, owner_id: Optional[int] = None) -> Dict[str, object]:
        """Count ideas per status; every status is present, zero when unused."""
        stmt = select(Idea.status, func.count(Idea.id)).group_by(Idea.status)
        if owner_id is not None:
            stmt = stmt.where(Idea.user_id == owner_id)
        try:
            rows = (await self._session.execute(stmt)).all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to summarise idea statuses")
            raise InternalError() from exc

        by_status = {s.value: 0 for s in IdeaStatus}
        for status, count in rows:
            by_status[IdeaStatus(status).value] = count
        return {"total": sum(by_status.values()), "by_status": by_status}

    # ═══════════════════════════════════════════════════════════════
    #  Update status
    # ═══════════════════════════════════════════════════════════════

    async def update_status(self, idea_id: int, new_status: str) -> Idea:
        try:
            status = IdeaStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid status") from None

        idea = await self.get(idea_id)
        previous = idea.status
        idea.status = status
        # Set explicitly: onupdate does not fire when the status is unchanged.
        idea.updated_at = utcnow()
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Failed to update status of idea %s", idea_id)
            raise InternalError() from exc

        logger.info("Idea %s status %s -> %s", idea_id, previous.value, status.value)
        return idea
