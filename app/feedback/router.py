"""Feedback REST API endpoints"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.feedback.event_publisher import FeedbackEventPublisher, get_event_publisher
from app.feedback.exceptions import FeedbackValidationException
from app.feedback.models import Feedback
from app.feedback.service import FeedbackService
from app.feedback.schemas import (
    ErrorResponse,
    FeedbackMetrics,
    FeedbackRequest,
    FeedbackResponse,
    FieldError,
    ProviderFeedbackSummary,
)


router = APIRouter(
    prefix="/api/v1",
    tags=["feedback"],
)


def get_feedback_service(
    db: AsyncSession = Depends(get_db),
    event_publisher: FeedbackEventPublisher = Depends(get_event_publisher),
) -> FeedbackService:
    return FeedbackService(db, event_publisher)


def to_response(feedback: Feedback) -> FeedbackResponse:
    """Convert Feedback model to response schema"""
    return FeedbackResponse(
        id=feedback.id,
        member_id=feedback.member_id,
        provider_name=feedback.provider_name,
        rating=feedback.rating,
        comment=feedback.comment,
        submitted_at=feedback.submitted_at,
    )


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_feedback(
    request: FeedbackRequest,
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    Submit new provider feedback.

    Business rules:
    - Member ID and provider name are required
    - Rating must be between 1 and 5
    - Comment is optional, at most 200 characters
    - One feedback per member and provider
    """
    try:
        feedback = await service.validate_and_save(request)
    except FeedbackValidationException as e:
        error = ErrorResponse(errors=[FieldError(field=e.field, message=e.message)])
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.model_dump())

    return to_response(feedback)


@router.get("/feedback", response_model=List[FeedbackResponse])
async def list_feedback(
    member_id: Optional[str] = Query(None, alias="memberId"),
    rating: Optional[int] = Query(None, ge=1, le=5),
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    List feedback, newest first.

    Filtered by member when memberId is given, otherwise by rating when given.
    """
    feedbacks = await service.get_feedback(member_id=member_id, rating=rating)
    return [to_response(feedback) for feedback in feedbacks]


@router.get("/feedback/providers/{provider_name}", response_model=ProviderFeedbackSummary)
async def get_provider_summary(
    provider_name: str,
    min_rating: Optional[int] = Query(None, alias="minRating", ge=1, le=5),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Provider feedback with satisfaction metrics."""
    summary = await service.get_provider_summary(provider_name, min_rating=min_rating)
    return ProviderFeedbackSummary(
        provider_name=summary["provider_name"],
        total_feedbacks=summary["total_feedbacks"],
        metrics=FeedbackMetrics(**summary["metrics"]),
        feedback=[to_response(feedback) for feedback in summary["feedback"]],
    )


@router.get("/feedback/{feedback_id}", response_model=FeedbackResponse)
async def get_feedback_by_id(
    feedback_id: str,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Get feedback by ID."""
    feedback = await service.get_feedback_by_id(feedback_id)
    return to_response(feedback)


@router.get("/health", response_class=PlainTextResponse)
async def health():
    """Simple health check to verify the API is running"""
    return "Feedback API is healthy!"
