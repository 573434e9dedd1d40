"""Writes transcoded segments back to object storage."""

import os
from pathlib import Path

from audio_splitter.exceptions import PublishError, StorageUploadError
from audio_splitter.infrastructure.interfaces import StorageClient
from audio_splitter.logging import setup_logging

from .models import PublishedSegment, SegmentWindow
from .segment_naming import content_type_for, derive_segment_key, segment_metadata

logger = setup_logging()


class SegmentPublisher:
    """Uploads one segment file per window under a deterministic key."""

    def __init__(self, storage: StorageClient, target_codec: str = "mp3"):
        self._storage = storage
        self._target_codec = target_codec

    def publish(
        self,
        segment_path: Path,
        bucket_name: str,
        source_key: str,
        window: SegmentWindow,
    ) -> PublishedSegment:
        """
        Uploads a segment file next to its source recording.

        Publishing the same source and window twice overwrites the same object.

        Args:
            segment_path: Local path of the encoded segment.
            bucket_name: Destination bucket.
            source_key: Object name of the original recording.
            window: Time range the segment covers.

        Returns:
            PublishedSegment describing the stored object.

        Raises:
            PublishError: If the segment cannot be read or written.
        """
        object_name = derive_segment_key(source_key, window.index, self._target_codec)

        try:
            size = os.path.getsize(segment_path)
            with open(segment_path, "rb") as data:
                locator = self._storage.upload(
                    bucket_name=bucket_name,
                    object_name=object_name,
                    data=data,
                    size=size,
                    content_type=content_type_for(self._target_codec),
                    metadata=segment_metadata(source_key, window),
                )
        except (StorageUploadError, OSError) as e:
            logger.exception(
                "Segment publish failed",
                extra={"segment_index": window.index, "object_name": object_name},
            )
            raise PublishError(window.index, e) from e

        logger.info(
            "Segment published",
            extra={"segment_index": window.index, "locator": locator},
        )
        return PublishedSegment(
            index=window.index,
            bucket_name=bucket_name,
            object_name=object_name,
            locator=locator,
            start_seconds=window.start_seconds,
            length_seconds=window.length_seconds,
        )
