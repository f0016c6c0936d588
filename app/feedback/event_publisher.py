"""Event publisher for feedback submissions"""
import os
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Dict, Optional

from app.feedback.models import Feedback
from app.messaging.rabbitmq import RabbitMQPublisher

logger = logging.getLogger(__name__)

FEEDBACK_SUBMITTED = "feedback.submitted"


def build_feedback_message(feedback: Feedback) -> Dict:
    """Flat payload in the format the analytics consumer expects"""
    return {
        "id": str(feedback.id),
        "memberId": feedback.member_id,
        "providerName": feedback.provider_name,
        "rating": feedback.rating,
        "comment": feedback.comment,
        "submittedAt": feedback.submitted_at.isoformat(),
    }


class FeedbackEventPublisher:
    """Publishes feedback events, fire-and-forget.

    Sends run on a single background thread so the request never waits on
    the broker and messages leave in the order they were handed over. Any
    failure is logged and dropped.
    """

    def __init__(self, publisher: Optional[RabbitMQPublisher] = None, routing_key: Optional[str] = None):
        self.publisher = publisher or RabbitMQPublisher()
        self.routing_key = routing_key or os.getenv("RABBITMQ_FEEDBACK_ROUTING_KEY", FEEDBACK_SUBMITTED)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="feedback-events")

    def publish_feedback_submitted(self, feedback: Feedback) -> None:
        """Publish feedback submitted event"""
        if feedback is None or feedback.id is None:
            logger.warning("Cannot publish feedback event: feedback or ID is null")
            return

        try:
            message = build_feedback_message(feedback)
            self._executor.submit(self._send, message)
        except Exception as e:
            logger.error(f"Failed to publish feedback event for ID {feedback.id}: {e}")

    def _send(self, message: Dict) -> None:
        try:
            self.publisher.publish(self.routing_key, message, message_id=message["id"])
            logger.info(f"Feedback event published - ID: {message['id']}")
        except Exception as e:
            logger.error(f"Failed to publish feedback event for ID {message['id']}: {e}")

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background sender"""
        self._executor.shutdown(wait=wait)


@lru_cache
def get_event_publisher() -> FeedbackEventPublisher:
    """Dependency returning the process-wide feedback event publisher."""
    return FeedbackEventPublisher()
