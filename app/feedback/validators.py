"""Validation logic for feedback submissions"""
from app.feedback.exceptions import FeedbackValidationException

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 200


def _is_blank(value) -> bool:
    return value is None or not value.strip()


class FeedbackValidator:
    """Validates feedback business rules.

    Rules run in a fixed order and stop at the first failure, so a caller
    only ever sees one error per submission.
    """

    def validate(self, payload) -> None:
        """Raise FeedbackValidationException for the first broken rule"""
        if _is_blank(payload.member_id):
            raise FeedbackValidationException("Member ID is required")

        if _is_blank(payload.provider_name):
            raise FeedbackValidationException("Provider name is required")

        if payload.rating is None:
            raise FeedbackValidationException("Rating is required")

        if payload.rating < MIN_RATING or payload.rating > MAX_RATING:
            raise FeedbackValidationException(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}"
            )

        if payload.comment is not None and len(payload.comment) > MAX_COMMENT_LENGTH:
            raise FeedbackValidationException(
                f"Comment must be {MAX_COMMENT_LENGTH} characters or less"
            )
