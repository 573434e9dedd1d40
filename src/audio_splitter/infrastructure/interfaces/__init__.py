"""Infrastructure interface exports."""

from .audio_prober import AudioProber
from .audio_transcoder import AudioTranscoder
from .message_broker import MessageBroker, MessagePublisher
from .storage import StorageClient
from .transcription_service import TranscriptionService

__all__ = [
    "AudioProber",
    "AudioTranscoder",
    "MessageBroker",
    "MessagePublisher",
    "StorageClient",
    "TranscriptionService",
]
