"""RabbitMQ publishing"""
import os
import json
import logging
from typing import Dict, Optional

import pika

logger = logging.getLogger(__name__)


class RabbitMQPublisher:
    """Publishes JSON messages to a durable topic exchange.

    A connection is opened for each message and closed afterwards. Callers
    decide what to do with failures; nothing is retried here.
    """

    def __init__(self, exchange: Optional[str] = None):
        self.host = os.getenv("RABBITMQ_HOST", "localhost")
        self.port = int(os.getenv("RABBITMQ_PORT", "5672"))
        self.user = os.getenv("RABBITMQ_USER", "guest")
        self.password = os.getenv("RABBITMQ_PASSWORD", "guest")
        self.exchange = exchange or os.getenv("RABBITMQ_FEEDBACK_EXCHANGE", "feedback.events")

    def _parameters(self) -> pika.ConnectionParameters:
        credentials = pika.PlainCredentials(self.user, self.password)
        return pika.ConnectionParameters(
            host=self.host,
            port=self.port,
            credentials=credentials,
            heartbeat=600,
            blocked_connection_timeout=300
        )

    def publish(self, routing_key: str, message: Dict, message_id: Optional[str] = None) -> None:
        """Send one message. Raises pika errors on failure."""
        connection = pika.BlockingConnection(self._parameters())
        try:
            channel = connection.channel()
            channel.exchange_declare(
                exchange=self.exchange,
                exchange_type='topic',
                durable=True
            )
            channel.basic_publish(
                exchange=self.exchange,
                routing_key=routing_key,
                body=json.dumps(message),
                properties=pika.BasicProperties(
                    content_type="application/json",
                    delivery_mode=2,
                    message_id=message_id,
                    type=routing_key,
                ),
            )
            logger.debug(f"Published {routing_key} to {self.exchange}")
        finally:
            if connection.is_open:
                connection.close()
