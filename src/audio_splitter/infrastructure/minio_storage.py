"""MinIO implementation of the StorageClient interface."""

from datetime import timedelta
from pathlib import Path
from typing import BinaryIO

from minio import Minio

from audio_splitter.exceptions import StorageDownloadError, StorageUploadError
from audio_splitter.logging import setup_logging

from .interfaces import StorageClient

logger = setup_logging()


class MinioStorageClient(StorageClient):
    """Handles object storage operations using MinIO or any S3-compatible endpoint."""

    def __init__(self, client: Minio):
        self._client = client

    def download_file(self, bucket_name: str, object_name: str, file_path: Path) -> None:
        try:
            self._client.fget_object(
                bucket_name=bucket_name,
                object_name=object_name,
                file_path=str(file_path),
            )
            logger.info(
                "File downloaded from MinIO",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
        except Exception as e:
            logger.exception(
                "MinIO download failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> str:
        try:
            self._client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
                metadata=metadata,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "size": size,
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e
        return f"s3://{bucket_name}/{object_name}"

    def presigned_url(self, bucket_name: str, object_name: str, expires_seconds: int) -> str:
        return self._client.presigned_get_object(
            bucket_name=bucket_name,
            object_name=object_name,
            expires=timedelta(seconds=expires_seconds),
        )

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        if not self._client.bucket_exists(bucket_name):
            self._client.make_bucket(bucket_name)
            logger.info("Bucket created", extra={"bucket_name": bucket_name})
        else:
            logger.info("Bucket already exists", extra={"bucket_name": bucket_name})
