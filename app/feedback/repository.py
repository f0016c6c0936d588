"""Feedback repository for database operations"""
import logging
from uuid import UUID
from typing import Optional, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, exists
from app.db.repository import BaseRepository
from app.feedback.exceptions import DuplicateFeedbackError
from app.feedback.models import Feedback, MEMBER_PROVIDER_CONSTRAINT

logger = logging.getLogger(__name__)

# SQLite reports unique violations by column list rather than constraint name
_SQLITE_CONFLICT_MARKER = "feedback.member_id, feedback.provider_name"


def _is_member_provider_conflict(error: IntegrityError) -> bool:
    message = str(error.orig)
    return MEMBER_PROVIDER_CONSTRAINT in message or _SQLITE_CONFLICT_MARKER in message


class FeedbackRepository(BaseRepository):
    """Repository for feedback database operations"""

    def __init__(self, db: AsyncSession, schema: Optional[str] = None):
        super().__init__(db, schema)

    async def create(self, feedback: Feedback) -> Feedback:
        """
        Persist new feedback.

        The id and submitted_at are filled in by column defaults. Once this
        returns the row is committed.

        Raises:
            DuplicateFeedbackError: the member/provider pair already exists
        """
        await self._set_search_path()
        self.db.add(feedback)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_member_provider_conflict(e):
                raise DuplicateFeedbackError(feedback.member_id, feedback.provider_name) from e
            raise
        await self.db.refresh(feedback)
        return feedback

    async def list_all(self) -> List[Feedback]:
        """Get all feedback, newest first"""
        await self._set_search_path()
        stmt = select(Feedback).order_by(Feedback.submitted_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_member(self, member_id: str) -> List[Feedback]:
        """Get a member's feedback, newest first"""
        await self._set_search_path()
        stmt = (
            select(Feedback)
            .where(Feedback.member_id == member_id)
            .order_by(Feedback.submitted_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, feedback_id: UUID) -> Optional[Feedback]:
        """Get feedback by ID"""
        await self._set_search_path()
        stmt = select(Feedback).where(Feedback.id == feedback_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_member_and_provider(self, member_id: str, provider_name: str) -> bool:
        """Check whether a member already reviewed a provider (exact match)"""
        await self._set_search_path()
        stmt = select(
            exists().where(
                Feedback.member_id == member_id,
                Feedback.provider_name == provider_name,
            )
        )
        result = await self.db.execute(stmt)
        return bool(result.scalar())

    async def list_by_provider(self, provider_name: str, min_rating: Optional[int] = None) -> List[Feedback]:
        """
        Get feedback for a provider, newest first.

        Args:
            provider_name: Provider to filter by (exact match)
            min_rating: Only include ratings at or above this value (optional)
        """
        await self._set_search_path()
        stmt = select(Feedback).where(Feedback.provider_name == provider_name)
        if min_rating is not None:
            stmt = stmt.where(Feedback.rating >= min_rating)
        stmt = stmt.order_by(Feedback.submitted_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_by_rating(self, rating: int) -> List[Feedback]:
        """Get feedback with an exact star rating, newest first"""
        await self._set_search_path()
        stmt = (
            select(Feedback)
            .where(Feedback.rating == rating)
            .order_by(Feedback.submitted_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_by_provider(self, provider_name: str) -> int:
        """Count feedback entries for a provider"""
        await self._set_search_path()
        stmt = select(func.count()).select_from(Feedback).where(Feedback.provider_name == provider_name)
        result = await self.db.execute(stmt)
        return int(result.scalar() or 0)
