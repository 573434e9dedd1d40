"""Moviepy implementation of the AudioTranscoder interface."""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import moviepy

from audio_splitter.domain.models import SegmentWindow
from audio_splitter.domain.segment_naming import FFMPEG_CODECS
from audio_splitter.exceptions import TranscodeError
from audio_splitter.logging import setup_logging

from .interfaces import AudioTranscoder

logger = setup_logging()


class MoviepyAudioTranscoder(AudioTranscoder):
    """Cuts a window out of the source and re-encodes it to the target codec."""

    def __init__(self, target_codec: str = "mp3", bitrate: str | None = None):
        if target_codec not in FFMPEG_CODECS:
            raise ValueError(f"Unsupported target codec '{target_codec}'")
        self._target_codec = target_codec
        self._bitrate = bitrate

    @contextmanager
    def extract(self, source_path: Path, window: SegmentWindow) -> Iterator[Path]:
        with tempfile.TemporaryDirectory(prefix="segment_") as temp_dir:
            segment_path = Path(temp_dir) / f"segment_{window.index}.{self._target_codec}"
            try:
                self._write_window(source_path, window, segment_path)
            except Exception as e:
                logger.exception(
                    "Segment transcoding failed",
                    extra={"segment_index": window.index, "source": source_path.name},
                )
                raise TranscodeError(window.index, e) from e

            logger.info(
                "Segment transcoded",
                extra={
                    "segment_index": window.index,
                    "start_seconds": window.start_seconds,
                    "length_seconds": window.length_seconds,
                    "size_bytes": os.path.getsize(segment_path),
                },
            )
            yield segment_path

    def _write_window(
        self, source_path: Path, window: SegmentWindow, segment_path: Path
    ) -> None:
        """Performs the actual cut and re-encode using moviepy."""
        audio = moviepy.AudioFileClip(str(source_path))
        try:
            end = min(window.end_seconds, audio.duration)
            segment = audio.subclipped(window.start_seconds, end)
            try:
                segment.write_audiofile(
                    str(segment_path),
                    codec=FFMPEG_CODECS[self._target_codec],
                    bitrate=self._bitrate,
                    logger=None,
                )
            finally:
                segment.close()
        finally:
            audio.close()
