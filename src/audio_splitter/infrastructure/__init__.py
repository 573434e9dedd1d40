"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriptionService
from .aws_transcribe import AwsTranscribeService
from .ffprobe_prober import FFprobeAudioProber
from .minio_storage import MinioStorageClient
from .moviepy_transcoder import MoviepyAudioTranscoder
from .rabbitmq_broker import RabbitMQBroker

__all__ = [
    "AssemblyAITranscriptionService",
    "AwsTranscribeService",
    "FFprobeAudioProber",
    "MinioStorageClient",
    "MoviepyAudioTranscoder",
    "RabbitMQBroker",
]
