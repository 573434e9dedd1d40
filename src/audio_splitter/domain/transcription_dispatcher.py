"""Submits published segments to a batch transcription backend."""

import time
import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait

from audio_splitter.exceptions import DispatchSubmitError
from audio_splitter.infrastructure.interfaces import TranscriptionService
from audio_splitter.logging import setup_logging

from .models import JobStatus, PublishedSegment, TranscriptionJob

logger = setup_logging()

JobNameFactory = Callable[[PublishedSegment], str]


def timestamped_job_names(prefix: str = "audio-split") -> JobNameFactory:
    """Returns a factory producing ``{prefix}-segment-{index}-{millis}-{random}`` names."""

    def _name(segment: PublishedSegment) -> str:
        millis = time.time_ns() // 1_000_000
        return f"{prefix}-segment-{segment.index}-{millis}-{uuid.uuid4().hex[:8]}"

    return _name


class TranscriptionDispatcher:
    """Starts one transcription job per segment without waiting for results."""

    def __init__(
        self,
        transcription_service: TranscriptionService,
        language_code: str = "en-US",
        media_format: str = "mp3",
        output_prefix: str = "transcriptions",
        job_name_factory: JobNameFactory | None = None,
        max_workers: int = 8,
    ):
        self._transcription_service = transcription_service
        self._language_code = language_code
        self._media_format = media_format
        self._output_prefix = output_prefix
        self._job_name_factory = job_name_factory or timestamped_job_names()
        self._max_workers = max_workers

    def dispatch(
        self,
        segments: list[PublishedSegment],
        timeout: float | None = None,
    ) -> list[TranscriptionJob]:
        """
        Submits every segment concurrently and joins on all submissions.

        A failing or slow submission never affects the others: it is recorded
        as ``SubmitFailed`` so the caller knows which segments to resubmit.

        Args:
            segments: Published segments, in index order.
            timeout: Seconds to wait before abandoning submissions that have
                not started yet. Submissions already in flight are always
                joined and reported with their real outcome.

        Returns:
            One TranscriptionJob per segment, in the same order.
        """
        if not segments:
            return []

        job_names = [self._job_name_factory(segment) for segment in segments]
        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(segments)),
            thread_name_prefix="dispatch",
        ) as executor:
            futures = [
                executor.submit(self._submit, segment, job_name)
                for segment, job_name in zip(segments, job_names)
            ]
            wait(futures, timeout=timeout)

            # Only submissions that never reached the backend are dropped; a
            # request already in flight is joined so its job is not reported twice.
            for future in futures:
                future.cancel()

            jobs = []
            for segment, job_name, future in zip(segments, job_names, futures):
                if future.cancelled():
                    logger.error(
                        "Transcription submission skipped at deadline",
                        extra={"segment_index": segment.index, "job_name": job_name},
                    )
                    jobs.append(
                        self._failed_job(
                            segment, job_name, "Not submitted before the deadline"
                        )
                    )
                else:
                    jobs.append(future.result())

        submitted = sum(1 for job in jobs if job.status == JobStatus.SUBMITTED)
        logger.info(
            "Transcription dispatch finished",
            extra={"submitted": submitted, "failed": len(jobs) - submitted},
        )
        return jobs

    def _submit(self, segment: PublishedSegment, job_name: str) -> TranscriptionJob:
        output_key = self._output_key(job_name)
        try:
            job_handle = self._transcription_service.start_job(
                job_name=job_name,
                media_uri=segment.locator,
                media_format=self._media_format,
                language_code=self._language_code,
                output_bucket=segment.bucket_name,
                output_key=output_key,
            )
        except Exception as e:
            error = DispatchSubmitError(segment.index, e)
            logger.exception(
                str(error), extra={"segment_index": segment.index, "job_name": job_name}
            )
            return self._failed_job(segment, job_name, f"{error}: {e}")

        logger.info(
            "Transcription job submitted",
            extra={"segment_index": segment.index, "job_name": job_name},
        )
        return TranscriptionJob(
            job_name=job_name,
            segment_index=segment.index,
            status=JobStatus.SUBMITTED,
            media_uri=segment.locator,
            output_key=output_key,
            job_handle=job_handle,
        )

    def _failed_job(
        self, segment: PublishedSegment, job_name: str, error: str
    ) -> TranscriptionJob:
        return TranscriptionJob(
            job_name=job_name,
            segment_index=segment.index,
            status=JobStatus.SUBMIT_FAILED,
            media_uri=segment.locator,
            output_key=self._output_key(job_name),
            error=error,
        )

    def _output_key(self, job_name: str) -> str:
        return f"{self._output_prefix}/{job_name}.json"
