"""Abstract interface for extracting and re-encoding audio windows."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from audio_splitter.domain.models import SegmentWindow


class AudioTranscoder(ABC):
    """Abstract base class for seek-and-duration bounded re-encoding."""

    @abstractmethod
    @contextmanager
    def extract(self, source_path: Path, window: SegmentWindow) -> Iterator[Path]:
        """
        Re-encodes ``window`` of the source into a temporary segment file.

        The yielded file only exists inside the ``with`` block; it is removed
        on exit whether or not the block raised.

        Args:
            source_path: Local path of the full source recording.
            window: Time range to extract.

        Yields:
            Path of the encoded segment file.

        Raises:
            TranscodeError: If decoding or encoding fails.
        """
