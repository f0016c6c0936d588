from app.feedback.repository import FeedbackRepository
from app.feedback.service import FeedbackService
from app.feedback.models import Feedback

__all__ = ["FeedbackRepository", "FeedbackService", "Feedback"]
