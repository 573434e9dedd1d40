"""Domain models for the audio splitting pipeline."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, Field

from audio_splitter.exceptions import ErrorKind


class SplitRequest(BaseModel, frozen=True):
    """Represents an incoming request to split a stored recording."""

    source_bucket: str = Field(
        validation_alias=AliasChoices("source_bucket", "bucket_name", "bucketName")
    )
    source_key: str = Field(
        validation_alias=AliasChoices("source_key", "file_name", "s3Key")
    )


class AudioInfo(BaseModel, frozen=True):
    """Container-level facts about an audio file."""

    duration_seconds: float = Field(ge=0)
    size_bytes: int = Field(ge=0)
    format: str


class SegmentWindow(BaseModel, frozen=True):
    """A contiguous time range of the source audio."""

    index: int = Field(ge=0)
    start_seconds: float = Field(ge=0)
    length_seconds: float = Field(gt=0)

    @property
    def end_seconds(self) -> float:
        return self.start_seconds + self.length_seconds


class SegmentPlan(BaseModel, frozen=True):
    """Ordered, gap-free windows covering the whole source duration."""

    total_duration: float
    segment_length: float
    windows: list[SegmentWindow]

    def __len__(self) -> int:
        return len(self.windows)


class PublishedSegment(BaseModel, frozen=True):
    """A segment that has been durably written to the object store."""

    index: int
    bucket_name: str
    object_name: str
    locator: str
    start_seconds: float
    length_seconds: float


class JobStatus(str, Enum):
    SUBMITTED = "Submitted"
    SUBMIT_FAILED = "SubmitFailed"


class TranscriptionJob(BaseModel, frozen=True):
    """Submission record for one segment's transcription job."""

    job_name: str
    segment_index: int
    status: JobStatus
    media_uri: str
    output_key: str
    job_handle: str | None = None
    error: str | None = None


class NoSplitNeeded(BaseModel, frozen=True):
    """The recording already fits under the transcription ceiling."""

    status: Literal["no-split-needed"] = "no-split-needed"
    duration: float


class SplitComplete(BaseModel, frozen=True):
    """Every segment was transcoded and published."""

    status: Literal["split-complete"] = "split-complete"
    original_key: str
    original_duration: float
    segments: list[PublishedSegment]
    dispatched: bool = False
    transcription_jobs: list[TranscriptionJob] = []

    @property
    def failed_jobs(self) -> list[TranscriptionJob]:
        """Jobs that still need manual resubmission."""
        return [
            job for job in self.transcription_jobs
            if job.status == JobStatus.SUBMIT_FAILED
        ]


class PipelineFailure(BaseModel, frozen=True):
    """The invocation did not complete; published segments must not be trusted."""

    status: Literal["error"] = "error"
    kind: ErrorKind
    message: str
    source_key: str
    segment_index: int | None = None
    cause: str | None = None


PipelineResult = Annotated[
    NoSplitNeeded | SplitComplete | PipelineFailure,
    Field(discriminator="status"),
]
