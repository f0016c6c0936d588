"""Feedback service layer for business logic"""
import logging
from uuid import UUID
from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.feedback.models import Feedback
from app.feedback.repository import FeedbackRepository
from app.feedback.duplicate_guard import DuplicateGuard
from app.feedback.event_publisher import FeedbackEventPublisher
from app.feedback.satisfaction import compute_metrics
from app.feedback.schemas import FeedbackRequest
from app.feedback.validators import FeedbackValidator
from app.feedback.exceptions import (
    DuplicateFeedbackError,
    FeedbackNotFoundException,
    FeedbackValidationException,
    InvalidFeedbackIdException,
)

logger = logging.getLogger(__name__)


def duplicate_message(provider_name: str) -> str:
    return f"You have already submitted feedback for {provider_name}"


def _trim(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


class FeedbackService:
    """Service layer for feedback business logic"""

    def __init__(
        self,
        db: AsyncSession,
        event_publisher: FeedbackEventPublisher,
        repository: Optional[FeedbackRepository] = None,
    ):
        self.db = db
        self.repository = repository or FeedbackRepository(db)
        self.validator = FeedbackValidator()
        self.duplicate_guard = DuplicateGuard(self.repository)
        self.event_publisher = event_publisher

    async def validate_and_save(self, request: FeedbackRequest) -> Feedback:
        """
        Validate a submission, store it and announce it.

        Steps:
        1. Business rules (first failure wins)
        2. Duplicate member/provider check
        3. Durable insert of the trimmed fields
        4. Best-effort event publish; its outcome never affects the result

        Raises:
            FeedbackValidationException: a rule failed or the pair already exists
        """
        try:
            self.validator.validate(request)
        except FeedbackValidationException as e:
            logger.warning(f"Feedback rejected - Member: {request.member_id}, Reason: {e.message}")
            raise

        member_id = request.member_id.strip()
        provider_name = request.provider_name.strip()

        if await self.duplicate_guard.check_duplicate(member_id, provider_name):
            raise FeedbackValidationException(duplicate_message(request.provider_name))

        feedback = Feedback(
            member_id=member_id,
            provider_name=provider_name,
            rating=request.rating,
            comment=_trim(request.comment),
        )

        try:
            saved = await self.repository.create(feedback)
        except DuplicateFeedbackError:
            # Lost a race with a concurrent submission for the same pair
            logger.warning(f"Concurrent duplicate feedback - Member: {member_id}, Provider: {provider_name}")
            raise FeedbackValidationException(duplicate_message(request.provider_name))

        logger.info(f"Feedback saved - ID: {saved.id}, Member: {saved.member_id}, Provider: {saved.provider_name}")

        try:
            self.event_publisher.publish_feedback_submitted(saved)
        except Exception as e:
            logger.error(f"Failed to publish feedback event for ID {saved.id}: {e}")

        return saved

    async def get_feedback(self, member_id: Optional[str] = None, rating: Optional[int] = None) -> List[Feedback]:
        """
        List feedback, newest first.

        Args:
            member_id: Filter by member (blank counts as no filter)
            rating: Exact rating filter, used only without a member filter
        """
        if member_id is None or not member_id.strip():
            if rating is not None:
                return await self.repository.list_by_rating(rating)
            return await self.repository.list_all()

        return await self.repository.list_by_member(member_id.strip())

    async def get_feedback_by_id(self, feedback_id: str) -> Feedback:
        """
        Get feedback by ID.
        """
        try:
            parsed_id = UUID(str(feedback_id))
        except ValueError:
            raise InvalidFeedbackIdException(feedback_id)

        feedback = await self.repository.get_by_id(parsed_id)
        if not feedback:
            raise FeedbackNotFoundException(feedback_id)

        return feedback

    async def get_provider_summary(self, provider_name: str, min_rating: Optional[int] = None) -> Dict:
        """
        Get a provider's feedback along with satisfaction metrics.

        Returns:
            Dict with provider_name, total_feedbacks (all ratings), metrics and
            feedback (filtered by min_rating when given)
        """
        provider_name = provider_name.strip()
        feedbacks = await self.repository.list_by_provider(provider_name, min_rating=min_rating)
        total = await self.repository.count_by_provider(provider_name)

        return {
            "provider_name": provider_name,
            "total_feedbacks": total,
            "metrics": compute_metrics(feedbacks),
            "feedback": feedbacks,
        }
