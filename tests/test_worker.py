import json
from unittest.mock import MagicMock

import pytest

from audio_splitter.config import RabbitMQConfig
from audio_splitter.domain import NoSplitNeeded, PipelineFailure, SplitComplete, SplitRequest
from audio_splitter.exceptions import ErrorKind, EventPublishError
from audio_splitter.worker import Worker


@pytest.fixture
def broker():
    return MagicMock()


@pytest.fixture
def pipeline():
    return MagicMock()


@pytest.fixture
def worker(broker, pipeline):
    return Worker(broker, pipeline, RabbitMQConfig(host="rabbitmq", user="u", password="p"))


@pytest.mark.parametrize(
    "result, routing_key",
    [
        (
            SplitComplete(original_key="meeting.mp3", original_duration=25200, segments=[]),
            "audio.split.completed",
        ),
        (NoSplitNeeded(duration=600), "audio.split.skipped"),
        (
            PipelineFailure(
                kind=ErrorKind.PUBLISH_FAILURE,
                message="Failed to publish segment 1",
                source_key="meeting.mp3",
                segment_index=1,
            ),
            "audio.split.failed",
        ),
    ],
)
def test_outcome_is_published_by_status(worker, broker, pipeline, result, routing_key):
    pipeline.run.return_value = result
    body = json.dumps({"source_bucket": "recordings", "source_key": "meeting.mp3"})

    worker._on_message(body.encode(), 7, {"x-delivery-count": 1})

    pipeline.run.assert_called_once_with(
        SplitRequest(source_bucket="recordings", source_key="meeting.mp3")
    )
    broker.publish.assert_called_once_with(
        routing_key=routing_key, payload=result.model_dump(mode="json")
    )
    broker.acknowledge.assert_called_once_with(7)
    broker.reject.assert_not_called()


@pytest.mark.parametrize(
    "payload",
    [
        {"bucketName": "recordings", "s3Key": "meeting.mp3"},
        {"bucket_name": "recordings", "file_name": "meeting.mp3"},
    ],
)
def test_trigger_aliases_are_accepted(worker, pipeline, payload):
    pipeline.run.return_value = NoSplitNeeded(duration=1)

    worker._on_message(json.dumps(payload).encode(), 1, None)

    request = pipeline.run.call_args.args[0]
    assert (request.source_bucket, request.source_key) == ("recordings", "meeting.mp3")


@pytest.mark.parametrize("body", [b"{}", b"not json", b'{"source_bucket": "recordings"}'])
def test_malformed_message_is_rejected(worker, broker, pipeline, body):
    worker._on_message(body, 3, None)

    broker.reject.assert_called_once_with(3, requeue=False)
    pipeline.run.assert_not_called()


def test_broker_failure_rejects_for_redelivery(worker, broker, pipeline):
    pipeline.run.return_value = NoSplitNeeded(duration=1)
    broker.publish.side_effect = EventPublishError("audio.split.skipped")
    body = json.dumps({"source_bucket": "recordings", "source_key": "meeting.mp3"})

    worker._on_message(body.encode(), 9, None)

    broker.acknowledge.assert_not_called()
    broker.reject.assert_called_once_with(9, requeue=True)
