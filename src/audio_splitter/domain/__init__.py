"""Domain layer exports."""

from .models import (
    AudioInfo,
    JobStatus,
    NoSplitNeeded,
    PipelineFailure,
    PipelineResult,
    PublishedSegment,
    SegmentPlan,
    SegmentWindow,
    SplitComplete,
    SplitRequest,
    TranscriptionJob,
)
from .segment_naming import derive_segment_key
from .segment_planner import SegmentPlanner
from .segment_publisher import SegmentPublisher
from .transcription_dispatcher import TranscriptionDispatcher, timestamped_job_names

__all__ = [
    "AudioInfo",
    "JobStatus",
    "NoSplitNeeded",
    "PipelineFailure",
    "PipelineResult",
    "PublishedSegment",
    "SegmentPlan",
    "SegmentPlanner",
    "SegmentPublisher",
    "SegmentWindow",
    "SplitComplete",
    "SplitRequest",
    "TranscriptionDispatcher",
    "TranscriptionJob",
    "derive_segment_key",
    "timestamped_job_names",
]
