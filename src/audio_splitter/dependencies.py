"""Dependency injection configuration for the audio-splitter service."""

import assemblyai as aai
import boto3
import pika
from minio import Minio

from audio_splitter.config import load_config
from audio_splitter.domain import (
    SegmentPlanner,
    SegmentPublisher,
    TranscriptionDispatcher,
    timestamped_job_names,
)
from audio_splitter.handlers import SplitPipeline
from audio_splitter.infrastructure import (
    AssemblyAITranscriptionService,
    AwsTranscribeService,
    FFprobeAudioProber,
    MinioStorageClient,
    MoviepyAudioTranscoder,
    RabbitMQBroker,
)
from audio_splitter.infrastructure.interfaces import (
    MessageBroker,
    StorageClient,
    TranscriptionService,
)
from audio_splitter.logging import setup_logging
from audio_splitter.worker import Worker

logger = setup_logging()

_config = load_config()

# MinIO setup
_minio_client = Minio(
    endpoint=_config.minio.endpoint,
    access_key=_config.minio.user,
    secret_key=_config.minio.password,
    secure=_config.minio.secure,
)

_storage = MinioStorageClient(_minio_client)
_storage.ensure_bucket_exists(_config.minio.bucket_name)

# RabbitMQ setup
_credentials = pika.PlainCredentials(_config.rabbitmq.user, _config.rabbitmq.password)
_parameters = pika.ConnectionParameters(
    host=_config.rabbitmq.host,
    credentials=_credentials,
    heartbeat=0,
)
_rabbit_connection = pika.BlockingConnection(_parameters)
_rabbit_channel = _rabbit_connection.channel()

_broker = RabbitMQBroker(_rabbit_channel, _config.rabbitmq)
_broker.setup()

# Transcription backend setup
if _config.transcription.backend == "assemblyai":
    aai.settings.api_key = _config.transcription.assemblyai_api_key
    _transcription_service = AssemblyAITranscriptionService(
        aai.Transcriber(),
        _storage,
        _config.transcription.presigned_url_expiry_seconds,
    )
else:
    _transcription_service = AwsTranscribeService(
        boto3.client("transcribe", region_name=_config.transcription.aws_region)
    )

logger.info(
    "Audio splitter configured",
    extra={
        "transcription_backend": _config.transcription.backend,
        "dispatch_enabled": _config.splitter.dispatch_enabled,
        "max_workers": _config.splitter.max_workers,
    },
)


def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    return _storage


def get_broker() -> MessageBroker:
    """Returns the configured message broker."""
    return _broker


def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    return _transcription_service


def get_dispatcher() -> TranscriptionDispatcher:
    """Returns a dispatcher bound to the configured transcription service."""
    splitter = _config.splitter
    return TranscriptionDispatcher(
        _transcription_service,
        language_code=splitter.language_code,
        media_format=splitter.target_codec,
        output_prefix=splitter.transcription_output_prefix,
        job_name_factory=timestamped_job_names(splitter.job_name_prefix),
    )


def get_pipeline() -> SplitPipeline:
    """Returns the configured split pipeline."""
    splitter = _config.splitter
    return SplitPipeline(
        storage=_storage,
        prober=FFprobeAudioProber(splitter.ffprobe_binary),
        planner=SegmentPlanner(),
        transcoder=MoviepyAudioTranscoder(splitter.target_codec),
        publisher=SegmentPublisher(_storage, splitter.target_codec),
        config=splitter,
        dispatcher=get_dispatcher(),
    )


def get_worker() -> Worker:
    """Returns the configured worker."""
    return Worker(_broker, get_pipeline(), _config.rabbitmq)
