"""Naming and encoding rules for published segments."""

import os

from .models import SegmentWindow

CONTENT_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "flac": "audio/flac",
    "ogg": "audio/ogg",
}

FFMPEG_CODECS = {
    "mp3": "libmp3lame",
    "wav": "pcm_s16le",
    "flac": "flac",
    "ogg": "libvorbis",
}


def derive_segment_key(source_key: str, index: int, extension: str = "mp3") -> str:
    """
    Derives the object name for a segment from the source object name.

    The source extension is replaced with ``_segment_{index}.{extension}``,
    so the same source and index always map to the same key.

    Example: ``folder/meeting.recording.mp3`` -> ``folder/meeting.recording_segment_2.mp3``
    """
    return f"{os.path.splitext(source_key)[0]}_segment_{index}.{extension}"


def segment_metadata(source_key: str, window: SegmentWindow) -> dict[str, str]:
    """Builds the descriptive metadata stored alongside a segment object."""
    return {
        "original-file": source_key,
        "segment-index": str(window.index),
        "segment-start-time": str(window.start_seconds),
        "segment-duration": str(window.length_seconds),
    }


def content_type_for(codec: str) -> str:
    return CONTENT_TYPES.get(codec, "application/octet-stream")


def parse_locator(locator: str) -> tuple[str, str]:
    """Splits an ``s3://bucket/key`` locator into ``(bucket, key)``."""
    if not locator.startswith("s3://"):
        raise ValueError(f"Unsupported locator '{locator}'")
    bucket, _, key = locator[len("s3://"):].partition("/")
    if not bucket or not key:
        raise ValueError(f"Malformed locator '{locator}'")
    return bucket, key
