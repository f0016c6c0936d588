"""Feedback Pydantic schemas"""
from uuid import UUID
from datetime import datetime
from typing import List, Dict, Optional
from pydantic import BaseModel, Field, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class FeedbackRequest(CamelModel):
    """Request payload for submitting provider feedback.

    Presence, blankness and rating range are business rules checked by
    FeedbackValidator, so they are optional here.
    """
    member_id: Optional[str] = Field(None, max_length=36, description="Member/patient identifier")
    provider_name: Optional[str] = Field(None, max_length=80, description="Name of the provider being reviewed")
    rating: Optional[StrictInt] = Field(None, description="Rating score (1-5)")
    comment: Optional[str] = Field(None, max_length=200, description="Optional feedback comment")


class FeedbackResponse(CamelModel):
    """Feedback response"""
    id: UUID
    member_id: str
    provider_name: str
    rating: int
    comment: Optional[str] = None
    submitted_at: datetime


class FieldError(BaseModel):
    """Single field validation error"""
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Validation failure details"""
    errors: List[FieldError]


class FeedbackMetrics(CamelModel):
    """Satisfaction metrics"""
    average_rating: float
    satisfaction_index: float  # 0-100 scale
    total_feedbacks: int
    distribution: Dict[str, float]  # Percentage distribution of star ratings
    satisfaction_levels: Dict[str, int]  # Count by satisfaction level


class ProviderFeedbackSummary(CamelModel):
    """Provider's feedback with satisfaction metrics"""
    provider_name: str
    total_feedbacks: int
    metrics: FeedbackMetrics
    feedback: List[FeedbackResponse]
