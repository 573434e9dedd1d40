"""FFprobe implementation of the AudioProber interface."""

import json
import subprocess
from pathlib import Path

from audio_splitter.domain.models import AudioInfo
from audio_splitter.exceptions import UnreadableMediaError
from audio_splitter.logging import setup_logging

from .interfaces import AudioProber

logger = setup_logging()


class FFprobeAudioProber(AudioProber):
    """Reads duration, size and container format with ``ffprobe``."""

    def __init__(self, ffprobe_binary: str = "ffprobe"):
        self._ffprobe_binary = ffprobe_binary

    def probe(self, audio_path: Path) -> AudioInfo:
        cmd = [
            self._ffprobe_binary,
            "-v", "error",
            "-show_format",
            "-of", "json",
            str(audio_path),
        ]

        try:
            completed = subprocess.run(cmd, check=True, capture_output=True, text=True)
            fmt = json.loads(completed.stdout)["format"]
            info = AudioInfo(
                duration_seconds=float(fmt["duration"]),
                size_bytes=int(fmt.get("size") or audio_path.stat().st_size),
                format=fmt.get("format_name", "unknown"),
            )
        except subprocess.CalledProcessError as e:
            logger.error(
                "FFprobe failed",
                extra={"audio_path": str(audio_path), "stderr": e.stderr},
            )
            raise UnreadableMediaError(audio_path.name, e) from e
        except (OSError, ValueError, KeyError, TypeError) as e:
            # N/A durations, missing format sections and a missing binary all land here.
            logger.exception("Audio probe failed", extra={"audio_path": str(audio_path)})
            raise UnreadableMediaError(audio_path.name, e) from e

        logger.info(
            "Audio probed",
            extra={
                "duration_seconds": info.duration_seconds,
                "size_bytes": info.size_bytes,
                "format": info.format,
            },
        )
        return info
