"""Application configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class MinioConfig(BaseModel, frozen=True):
    """MinIO (or any S3-compatible) connection configuration."""

    endpoint: str
    user: str
    password: str
    secure: bool = False
    bucket_name: str = "recordings"


class QueueConfig(BaseModel, frozen=True):
    """RabbitMQ queue configuration."""

    name: str = "audio_split_queue"
    queue_type: str = "quorum"
    max_delivery_count: int = 3
    expected_routing_key: str = "audio.upload.completed"
    success_routing_key: str = "audio.split.completed"
    skipped_routing_key: str = "audio.split.skipped"
    failure_routing_key: str = "audio.split.failed"
    dlq_name: str = "dlq_audio_splitter"
    dlq_exchange_name: str = "dead_letter_exchange"
    dlq_routing_key: str = "audio.split.rejected"


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection configuration."""

    host: str
    user: str
    password: str
    exchange_name: str = "events"
    queue_config: QueueConfig = QueueConfig()


class TranscriptionConfig(BaseModel, frozen=True):
    """Transcription backend configuration."""

    backend: Literal["aws", "assemblyai"] = "aws"
    aws_region: str = "us-east-1"
    assemblyai_api_key: str = ""
    presigned_url_expiry_seconds: int = 86400


class SplitterConfig(BaseModel, frozen=True):
    """Duration ceiling, segment sizing and dispatch settings."""

    max_file_duration_seconds: float = Field(default=14400, gt=0)
    segment_duration_seconds: float = Field(default=12600, gt=0)
    language_code: str = "en-US"
    target_codec: Literal["mp3", "wav", "flac", "ogg"] = "mp3"
    dispatch_enabled: bool = False
    max_workers: int = Field(default=min(2, os.cpu_count() or 1), ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0)
    job_name_prefix: str = "audio-split"
    transcription_output_prefix: str = "transcriptions"
    ffprobe_binary: str = "ffprobe"

    @model_validator(mode="after")
    def _segment_fits_under_ceiling(self) -> "SplitterConfig":
        # Every segment must be individually accepted by the transcription service.
        if self.segment_duration_seconds >= self.max_file_duration_seconds:
            raise ValueError(
                "segment_duration_seconds must be strictly less than "
                "max_file_duration_seconds"
            )
        return self


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    rabbitmq: RabbitMQConfig
    transcription: TranscriptionConfig
    splitter: SplitterConfig


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    timeout = os.getenv("PIPELINE_TIMEOUT_SECONDS")
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            secure=_env_flag("MINIO_SECURE"),
            bucket_name=os.getenv("MINIO_BUCKET", "recordings"),
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", "rabbitmq"),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
        ),
        transcription=TranscriptionConfig(
            backend=os.getenv("TRANSCRIPTION_BACKEND", "aws"),
            aws_region=os.getenv("AWS_REGION", "us-east-1"),
            assemblyai_api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        splitter=SplitterConfig(
            max_file_duration_seconds=float(
                os.getenv("MAX_FILE_DURATION_SECONDS", "14400")
            ),
            segment_duration_seconds=float(
                os.getenv("SEGMENT_DURATION_SECONDS", "12600")
            ),
            language_code=os.getenv("LANGUAGE_CODE", "en-US"),
            target_codec=os.getenv("TARGET_CODEC", "mp3"),
            dispatch_enabled=_env_flag("DISPATCH_ENABLED"),
            max_workers=int(os.getenv("MAX_WORKERS", str(min(2, os.cpu_count() or 1)))),
            timeout_seconds=float(timeout) if timeout else None,
            job_name_prefix=os.getenv("JOB_NAME_PREFIX", "audio-split"),
            ffprobe_binary=os.getenv("FFPROBE_BINARY", "ffprobe"),
        ),
    )
