"""
Single-shot object retrieval from the storage backend.
"""

import asyncio
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from s3_mcp.storage.body import read_body
from s3_mcp.storage.exceptions import EmptyBodyError, RemoteFetchError
from s3_mcp.storage.models import DEFAULT_CONTENT_TYPE, RawObject

logger = logging.getLogger(__name__)


def remote_error(error: Exception) -> RemoteFetchError:
    """Convert a botocore failure into a RemoteFetchError."""
    if isinstance(error, ClientError):
        details = error.response.get("Error") or {}
        message = details.get("Message") or str(error)
        return RemoteFetchError(message, code=details.get("Code"))
    return RemoteFetchError(str(error))


class ObjectFetcher:
    """
    Fetches whole objects from an S3-compatible backend.

    Access must already have been confirmed by the caller. Each call
    issues exactly one ``get_object`` request; nothing is cached and
    failures are not retried.

    Usage:
        fetcher = ObjectFetcher(boto3.client("s3"))
        raw = await fetcher.fetch("reports", "2024/summary.pdf")
        print(raw.content_type, raw.size)
    """

    def __init__(self, client: Any):
        """
        Initialize the fetcher.

        Args:
            client: A boto3 S3 client (or an object with the same get_object)
        """
        self.client = client

    async def fetch(self, bucket: str, key: str) -> RawObject:
        """
        Retrieve the complete body of an object.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            The object's bytes and content type

        Raises:
            RemoteFetchError: If the backend request or body stream fails
            UnsupportedBodyTypeError: If the body shape is not recognized
            EmptyBodyError: If the object body is empty
        """
        try:
            response = await asyncio.to_thread(
                self.client.get_object, Bucket=bucket, Key=key
            )
        except (ClientError, BotoCoreError) as e:
            raise remote_error(e) from e

        content_type = response.get("ContentType") or DEFAULT_CONTENT_TYPE

        try:
            data = await read_body(response.get("Body"))
        except (ClientError, BotoCoreError) as e:
            raise remote_error(e) from e

        if not data:
            raise EmptyBodyError(bucket, key)

        logger.debug(f"Fetched s3://{bucket}/{key} ({len(data)} bytes, {content_type})")
        return RawObject(data=data, content_type=content_type)
