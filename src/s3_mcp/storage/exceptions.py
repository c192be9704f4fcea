"""
Exceptions for object storage operations.
"""

from typing import Optional


class StorageError(Exception):
    """Base exception for object storage operations."""

    pass


class BucketNotAllowedError(StorageError):
    """Raised when a bucket is not in the configured allow-list."""

    def __init__(self, bucket: str):
        self.bucket = bucket
        super().__init__(f"Bucket {bucket} is not in the allowed buckets list")


class RemoteFetchError(StorageError):
    """Raised when a request to the storage backend fails."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code and self.code not in self.message:
            return f"{self.message} (code={self.code})"
        return self.message


class UnsupportedBodyTypeError(StorageError):
    """Raised when a response body has neither a buffered nor a chunked shape."""

    def __init__(self, body_type: str):
        self.body_type = body_type
        super().__init__(f"Unexpected response body type: {body_type}")


class EmptyBodyError(StorageError):
    """Raised when an object retrieval yields zero bytes."""

    def __init__(self, bucket: str, key: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Empty response body: s3://{bucket}/{key}")


class PDFExtractionError(StorageError):
    """Raised when text cannot be extracted from a PDF document."""

    pass
