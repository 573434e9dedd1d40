"""Pipeline that splits an over-long recording into transcribable segments."""

import tempfile
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path, PurePosixPath

from audio_splitter.config import SplitterConfig
from audio_splitter.domain import (
    NoSplitNeeded,
    PipelineFailure,
    PipelineResult,
    PublishedSegment,
    SegmentPlan,
    SegmentPlanner,
    SegmentPublisher,
    SegmentWindow,
    SplitComplete,
    SplitRequest,
    TranscriptionDispatcher,
)
from audio_splitter.exceptions import ErrorKind, PipelineError, PipelineTimeoutError
from audio_splitter.infrastructure.interfaces import (
    AudioProber,
    AudioTranscoder,
    StorageClient,
)
from audio_splitter.logging import setup_logging

logger = setup_logging()


def _describe_cause(error: BaseException | None) -> str | None:
    """Flattens a chain of wrapped errors into ``Type: message <- Type: message``."""
    parts = []
    while error is not None and len(parts) < 5:
        parts.append(f"{type(error).__name__}: {error}")
        error = getattr(error, "cause", None) or error.__cause__
    return " <- ".join(parts) or None


class SplitPipeline:
    """
    Orchestrates probe, plan, transcode, publish and dispatch for one recording.

    Each call to ``run`` is independent: the source is downloaded into a
    scratch directory owned by that call and removed before it returns.
    """

    def __init__(
        self,
        storage: StorageClient,
        prober: AudioProber,
        planner: SegmentPlanner,
        transcoder: AudioTranscoder,
        publisher: SegmentPublisher,
        config: SplitterConfig,
        dispatcher: TranscriptionDispatcher | None = None,
    ):
        self._storage = storage
        self._prober = prober
        self._planner = planner
        self._transcoder = transcoder
        self._publisher = publisher
        self._config = config
        self._dispatcher = dispatcher

    def run(self, request: SplitRequest, deadline: float | None = None) -> PipelineResult:
        """
        Splits the requested recording if it exceeds the duration ceiling.

        Args:
            request: Location of the source recording.
            deadline: Absolute ``time.monotonic()`` value after which the
                invocation is abandoned. Defaults to ``timeout_seconds`` from
                the configuration, if set.

        Returns:
            NoSplitNeeded, SplitComplete or PipelineFailure. Never raises.
        """
        if deadline is None and self._config.timeout_seconds is not None:
            deadline = time.monotonic() + self._config.timeout_seconds

        logger.info(
            "Split pipeline started",
            extra={"bucket_name": request.source_bucket, "source_key": request.source_key},
        )

        try:
            result = self._run(request, deadline)
        except PipelineError as e:
            logger.error(
                "Split pipeline failed",
                extra={
                    "source_key": request.source_key,
                    "kind": e.kind.value,
                    "segment_index": e.segment_index,
                    "error": str(e),
                },
            )
            return PipelineFailure(
                kind=e.kind,
                message=str(e),
                source_key=request.source_key,
                segment_index=e.segment_index,
                cause=_describe_cause(e.cause),
            )
        except Exception as e:
            logger.exception(
                "Split pipeline crashed", extra={"source_key": request.source_key}
            )
            return PipelineFailure(
                kind=ErrorKind.INTERNAL,
                message="Unexpected error while splitting audio",
                source_key=request.source_key,
                cause=_describe_cause(e),
            )

        logger.info(
            "Split pipeline finished",
            extra={"source_key": request.source_key, "status": result.status},
        )
        return result

    def _run(self, request: SplitRequest, deadline: float | None) -> PipelineResult:
        with tempfile.TemporaryDirectory(prefix="audio_split_") as scratch_dir:
            source_path = Path(scratch_dir) / (
                "source" + PurePosixPath(request.source_key).suffix
            )
            self._storage.download_file(
                request.source_bucket, request.source_key, source_path
            )
            self._check_deadline(deadline, "download")

            info = self._prober.probe(source_path)
            self._check_deadline(deadline, "probe")

            if info.duration_seconds <= self._config.max_file_duration_seconds:
                logger.info(
                    "Recording within duration ceiling, no split needed",
                    extra={
                        "duration_seconds": info.duration_seconds,
                        "max_file_duration_seconds": self._config.max_file_duration_seconds,
                    },
                )
                return NoSplitNeeded(duration=info.duration_seconds)

            plan = self._planner.plan(
                info.duration_seconds, self._config.segment_duration_seconds
            )
            logger.info(
                "Segment plan ready",
                extra={"duration_seconds": info.duration_seconds, "segments": len(plan)},
            )

            segments = self._segment_all(source_path, request, plan, deadline)

        # Dispatch never fails the split; past the deadline unstarted jobs are SubmitFailed.
        jobs = []
        dispatched = False
        if self._config.dispatch_enabled and self._dispatcher is not None:
            jobs = self._dispatcher.dispatch(segments, timeout=self._remaining(deadline))
            dispatched = True

        return SplitComplete(
            original_key=request.source_key,
            original_duration=info.duration_seconds,
            segments=segments,
            dispatched=dispatched,
            transcription_jobs=jobs,
        )

    def _segment_all(
        self,
        source_path: Path,
        request: SplitRequest,
        plan: SegmentPlan,
        deadline: float | None,
    ) -> list[PublishedSegment]:
        """Transcodes and publishes every window; the first failure by index wins."""
        with ThreadPoolExecutor(
            max_workers=self._config.max_workers, thread_name_prefix="segment"
        ) as executor:
            futures = [
                executor.submit(self._process_window, source_path, request, window)
                for window in plan.windows
            ]
            segments = []
            try:
                for window, future in zip(plan.windows, futures):
                    try:
                        segments.append(future.result(timeout=self._remaining(deadline)))
                    except FutureTimeoutError as e:
                        raise PipelineTimeoutError("segmenting", window.index) from e
            finally:
                # Windows not yet started are dropped; running ones finish their cleanup.
                for future in futures:
                    future.cancel()
        return segments

    def _process_window(
        self, source_path: Path, request: SplitRequest, window: SegmentWindow
    ) -> PublishedSegment:
        with self._transcoder.extract(source_path, window) as segment_path:
            return self._publisher.publish(
                segment_path, request.source_bucket, request.source_key, window
            )

    def _check_deadline(self, deadline: float | None, stage: str) -> None:
        if deadline is not None and time.monotonic() >= deadline:
            raise PipelineTimeoutError(stage)

    def _remaining(self, deadline: float | None) -> float | None:
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())
