from audio_splitter.config import SplitterConfig, load_config
from audio_splitter.domain import (
    NoSplitNeeded,
    PipelineFailure,
    PipelineResult,
    SplitComplete,
    SplitRequest,
)
from audio_splitter.exceptions import ErrorKind, PipelineError
from audio_splitter.logging import setup_logging

__all__ = [
    "setup_logging",
    "load_config",
    "SplitterConfig",
    "ErrorKind",
    "PipelineError",
    "SplitRequest",
    "NoSplitNeeded",
    "SplitComplete",
    "PipelineFailure",
    "PipelineResult",
]
