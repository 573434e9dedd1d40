"""Worker that handles queue message consumption and orchestration."""

import json
from typing import Any

from pydantic import ValidationError

from audio_splitter.config import RabbitMQConfig
from audio_splitter.domain import NoSplitNeeded, PipelineResult, SplitComplete, SplitRequest
from audio_splitter.handlers import SplitPipeline
from audio_splitter.infrastructure.interfaces import MessageBroker
from audio_splitter.logging import setup_logging

logger = setup_logging()


class Worker:
    """Consumes split requests from the queue and reports each outcome as an event."""

    def __init__(
        self,
        broker: MessageBroker,
        pipeline: SplitPipeline,
        config: RabbitMQConfig,
    ):
        self._broker = broker
        self._pipeline = pipeline
        self._config = config

    def start(self) -> None:
        """Starts consuming messages from the queue."""
        logger.info("Worker initialized, starting message consumption")
        self._broker.consume(self._on_message)

    def _on_message(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        """Callback for each received message."""
        delivery_count = headers.get("x-delivery-count", 1) if headers else 1

        logger.info(
            "Message received",
            extra={
                "attempt": delivery_count,
                "max_attempts": self._config.queue_config.max_delivery_count,
            },
        )

        try:
            request = SplitRequest.model_validate(json.loads(body))
        except (ValidationError, ValueError) as e:
            logger.exception("Invalid message format", extra={"error": str(e)})
            self._broker.reject(delivery_tag, requeue=False)
            return

        try:
            result = self._pipeline.run(request)

            # Outcome goes out before the ack so a broker failure redelivers the request.
            self._broker.publish(
                routing_key=self._routing_key_for(result),
                payload=result.model_dump(mode="json"),
            )

            self._broker.acknowledge(delivery_tag)

            logger.info(
                "Message processed",
                extra={"source_key": request.source_key, "status": result.status},
            )

        except Exception:
            logger.exception(
                "Message processing failed",
                extra={"source_key": request.source_key},
            )
            self._broker.reject(delivery_tag, requeue=True)

    def _routing_key_for(self, result: PipelineResult) -> str:
        queue_config = self._config.queue_config
        if isinstance(result, SplitComplete):
            return queue_config.success_routing_key
        if isinstance(result, NoSplitNeeded):
            return queue_config.skipped_routing_key
        return queue_config.failure_routing_key
