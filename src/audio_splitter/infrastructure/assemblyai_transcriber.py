"""AssemblyAI implementation of the TranscriptionService interface."""

import assemblyai as aai

from audio_splitter.domain.segment_naming import parse_locator
from audio_splitter.exceptions import TranscriptionSubmitError
from audio_splitter.logging import setup_logging

from .interfaces import StorageClient, TranscriptionService

logger = setup_logging()


class AssemblyAITranscriptionService(TranscriptionService):
    """
    Queues transcripts on AssemblyAI without polling them.

    AssemblyAI cannot read ``s3://`` locators, so each segment is handed over
    as a presigned HTTPS URL. Transcripts stay on AssemblyAI's side; the
    output bucket and key are only carried on the returned job record.
    """

    def __init__(
        self,
        transcriber: aai.Transcriber,
        storage: StorageClient,
        url_expiry_seconds: int = 86400,
    ):
        self._transcriber = transcriber
        self._storage = storage
        self._url_expiry_seconds = url_expiry_seconds

    def start_job(
        self,
        job_name: str,
        media_uri: str,
        media_format: str,
        language_code: str,
        output_bucket: str,
        output_key: str,
    ) -> str:
        try:
            bucket_name, object_name = parse_locator(media_uri)
            audio_url = self._storage.presigned_url(
                bucket_name, object_name, self._url_expiry_seconds
            )
            config = aai.TranscriptionConfig(
                language_code=language_code.replace("-", "_").lower()
            )
            transcript = self._transcriber.submit(audio_url, config=config)

            if transcript.status == aai.TranscriptStatus.error:
                raise TranscriptionSubmitError(job_name, Exception(transcript.error))

        except TranscriptionSubmitError:
            logger.error("AssemblyAI rejected transcript", extra={"job_name": job_name})
            raise
        except Exception as e:
            logger.exception("AssemblyAI submission failed", extra={"job_name": job_name})
            raise TranscriptionSubmitError(job_name, e) from e

        logger.info(
            "AssemblyAI transcript queued",
            extra={"job_name": job_name, "transcript_id": transcript.id},
        )
        return transcript.id
