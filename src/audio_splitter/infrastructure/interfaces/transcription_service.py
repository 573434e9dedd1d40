"""Abstract interface for batch transcription services."""

from abc import ABC, abstractmethod


class TranscriptionService(ABC):
    """Abstract base class for asynchronous transcription backends."""

    @abstractmethod
    def start_job(
        self,
        job_name: str,
        media_uri: str,
        media_format: str,
        language_code: str,
        output_bucket: str,
        output_key: str,
    ) -> str:
        """
        Submits a transcription job without waiting for it to finish.

        Args:
            job_name: Unique name of the job.
            media_uri: Locator of the audio to transcribe.
            media_format: Audio format (e.g. ``mp3``).
            language_code: BCP-47 language code (e.g. ``en-US``).
            output_bucket: Bucket that receives the transcript.
            output_key: Object name of the transcript.

        Returns:
            The backend's handle for the submitted job.
        """
