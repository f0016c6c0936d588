"""Feedback custom exceptions"""
from fastapi import HTTPException, status


class FeedbackValidationException(Exception):
    """Raised when a submission breaks a business rule.

    Carries a single field name ("business" for every service-layer rule)
    and a human-readable message.
    """
    def __init__(self, message: str, field: str = "business"):
        super().__init__(message)
        self.field = field
        self.message = message


class DuplicateFeedbackError(Exception):
    """Raised by the repository when the member/provider pair is already stored"""
    def __init__(self, member_id: str, provider_name: str):
        super().__init__(f"Feedback already exists for member {member_id} and provider {provider_name}")
        self.member_id = member_id
        self.provider_name = provider_name


class FeedbackNotFoundException(HTTPException):
    """Raised when feedback is not found"""
    def __init__(self, feedback_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feedback not found with id: {feedback_id}"
        )


class InvalidFeedbackIdException(HTTPException):
    """Raised when a feedback id is not a valid UUID"""
    def __init__(self, feedback_id: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid feedback id: {feedback_id}"
        )
