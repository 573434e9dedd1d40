"""Abstract interface for audio inspection."""

from abc import ABC, abstractmethod
from pathlib import Path

from audio_splitter.domain.models import AudioInfo


class AudioProber(ABC):
    """Abstract base class for reading container-level audio facts."""

    @abstractmethod
    def probe(self, audio_path: Path) -> AudioInfo:
        """
        Inspects a complete audio file.

        Args:
            audio_path: Local path of the materialized audio file.

        Returns:
            AudioInfo with duration, byte size and container format.

        Raises:
            UnreadableMediaError: If the container or codec cannot be parsed.
        """
