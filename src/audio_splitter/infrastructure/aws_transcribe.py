"""AWS Transcribe implementation of the TranscriptionService interface."""

from audio_splitter.exceptions import TranscriptionSubmitError
from audio_splitter.logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()


class AwsTranscribeService(TranscriptionService):
    """Starts batch jobs on AWS Transcribe; results land in the output bucket."""

    def __init__(self, client):
        # boto3 "transcribe" client
        self._client = client

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
            response = self._client.start_transcription_job(
                TranscriptionJobName=job_name,
                Media={"MediaFileUri": media_uri},
                MediaFormat=media_format,
                LanguageCode=language_code,
                OutputBucketName=output_bucket,
                OutputKey=output_key,
            )
        except Exception as e:
            logger.exception(
                "AWS Transcribe submission failed", extra={"job_name": job_name}
            )
            raise TranscriptionSubmitError(job_name, e) from e

        job = response.get("TranscriptionJob", {})
        logger.info(
            "AWS Transcribe job started",
            extra={
                "job_name": job_name,
                "job_status": job.get("TranscriptionJobStatus"),
            },
        )
        return job.get("TranscriptionJobName", job_name)
