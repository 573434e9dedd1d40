"""Custom exceptions for the audio-splitter service."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of pipeline failures reported to the caller."""

    UNREADABLE_MEDIA = "UnreadableMedia"
    INVALID_DURATION = "InvalidDuration"
    INVALID_CONFIGURATION = "InvalidConfiguration"
    SOURCE_UNAVAILABLE = "SourceUnavailable"
    TRANSCODE_FAILURE = "TranscodeFailure"
    PUBLISH_FAILURE = "PublishFailure"
    DISPATCH_SUBMIT_FAILURE = "DispatchSubmitFailure"
    TIMEOUT = "Timeout"
    INTERNAL = "Internal"


class PipelineError(Exception):
    """Base class for errors raised while splitting an audio file."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        segment_index: int | None = None,
    ):
        self.cause = cause
        self.segment_index = segment_index
        super().__init__(message)


class UnreadableMediaError(PipelineError):
    """Raised when the audio container or codec cannot be parsed."""

    kind = ErrorKind.UNREADABLE_MEDIA

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        super().__init__(f"Failed to read audio file '{file_name}'", cause)


class InvalidDurationError(PipelineError):
    """Raised when a segment plan is requested for a non-positive duration."""

    kind = ErrorKind.INVALID_DURATION

    def __init__(self, duration: float):
        self.duration = duration
        super().__init__(f"Audio duration must be positive, got {duration}")


class InvalidConfigurationError(PipelineError):
    """Raised when a pipeline setting cannot be used."""

    kind = ErrorKind.INVALID_CONFIGURATION

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for '{setting}': {reason}")


class StorageDownloadError(PipelineError):
    """Raised when downloading a file from storage fails."""

    kind = ErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to download '{object_name}' from storage", cause)


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class TranscodeError(PipelineError):
    """Raised when a segment window cannot be re-encoded."""

    kind = ErrorKind.TRANSCODE_FAILURE

    def __init__(self, segment_index: int, cause: Exception | None = None):
        super().__init__(
            f"Failed to transcode segment {segment_index}", cause, segment_index
        )


class PublishError(PipelineError):
    """Raised when a transcoded segment cannot be written back to storage."""

    kind = ErrorKind.PUBLISH_FAILURE

    def __init__(self, segment_index: int, cause: Exception | None = None):
        super().__init__(
            f"Failed to publish segment {segment_index}", cause, segment_index
        )


class DispatchSubmitError(PipelineError):
    """Raised when a transcription job cannot be submitted for a segment."""

    kind = ErrorKind.DISPATCH_SUBMIT_FAILURE

    def __init__(self, segment_index: int, cause: Exception | None = None):
        super().__init__(
            f"Failed to submit transcription job for segment {segment_index}",
            cause,
            segment_index,
        )


class TranscriptionSubmitError(Exception):
    """Raised when a transcription backend refuses a job submission."""

    def __init__(self, job_name: str, cause: Exception | None = None):
        self.job_name = job_name
        self.cause = cause
        super().__init__(f"Failed to submit transcription job '{job_name}'")


class PipelineTimeoutError(PipelineError):
    """Raised when an invocation runs past its deadline."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, stage: str, segment_index: int | None = None):
        self.stage = stage
        super().__init__(
            f"Pipeline deadline exceeded during {stage}", None, segment_index
        )


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
