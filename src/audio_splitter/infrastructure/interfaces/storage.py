"""Abstract interface for object storage operations."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class StorageClient(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    def download_file(self, bucket_name: str, object_name: str, file_path: Path) -> None:
        """
        Downloads an object from storage into a local file.

        Args:
            bucket_name: The storage bucket name.
            object_name: The object path/name in storage.
            file_path: Local destination path.

        Raises:
            StorageDownloadError: If the download fails.
        """

    @abstractmethod
    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> str:
        """
        Uploads a file to storage, overwriting any existing object.

        Args:
            bucket_name: The storage bucket name.
            object_name: The destination path/name in storage.
            data: File-like object containing the data.
            size: Size of the file in bytes.
            content_type: MIME type of the file.
            metadata: Descriptive user metadata stored with the object.

        Returns:
            The locator of the stored object (``s3://bucket/key``).

        Raises:
            StorageUploadError: If the upload fails.
        """

    @abstractmethod
    def presigned_url(self, bucket_name: str, object_name: str, expires_seconds: int) -> str:
        """
        Returns a time-limited HTTPS URL for reading an object.

        Args:
            bucket_name: The storage bucket name.
            object_name: The object path/name in storage.
            expires_seconds: Validity of the URL.
        """

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """
        Ensures a bucket exists, creating it if necessary.

        Args:
            bucket_name: The bucket name to ensure exists.
        """
