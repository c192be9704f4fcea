"""
Restricted S3 resource for safe LLM access to buckets and objects.
"""

import asyncio
import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from s3_mcp.storage.classifier import classify
from s3_mcp.storage.config import S3AccessConfig
from s3_mcp.storage.exceptions import BucketNotAllowedError
from s3_mcp.storage.fetcher import ObjectFetcher, remote_error
from s3_mcp.storage.materializer import ContentMaterializer
from s3_mcp.storage.models import BucketSummary, ObjectPayload, ObjectSummary

logger = logging.getLogger(__name__)

DEFAULT_MAX_KEYS = 1000


class S3Resource:
    """
    Bucket and object access restricted by an allow-list.

    Every operation checks the allow-list before any request reaches
    the backend. Objects are fetched whole, classified, and materialized
    into text or binary payloads.

    Usage:
        config = S3AccessConfig(allowed_buckets=("reports",), max_buckets=5)
        resource = S3Resource(boto3.client("s3"), config)

        try:
            payload = await resource.get_object("reports", "summary.md")
        except BucketNotAllowedError as e:
            print(f"Access denied: {e}")
    """

    def __init__(
        self,
        client: Any,
        config: Optional[S3AccessConfig] = None,
        *,
        max_buckets: Optional[int] = None,
        materializer: Optional[ContentMaterializer] = None,
    ):
        """
        Initialize the resource.

        Args:
            client: A boto3 S3 client
            config: Access configuration (default: open access)
            max_buckets: Overrides config.max_buckets when given
            materializer: Content materializer (default: pypdf-backed)
        """
        config = config or S3AccessConfig()
        if max_buckets is not None:
            config = config.model_copy(update={"max_buckets": max_buckets})

        self.client = client
        self.config = config
        self.fetcher = ObjectFetcher(client)
        self.materializer = materializer or ContentMaterializer()

    def _check_bucket(self, bucket: str) -> None:
        if not self.config.is_bucket_allowed(bucket):
            logger.warning(f"Access denied to bucket {bucket}")
            raise BucketNotAllowedError(bucket)

    async def list_buckets(self) -> list[BucketSummary]:
        """
        List buckets visible under the allow-list.

        Returns:
            Allowed buckets in discovery order, at most config.max_buckets

        Raises:
            RemoteFetchError: If the backend request fails
        """
        try:
            response = await asyncio.to_thread(self.client.list_buckets)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error listing buckets: {e}")
            raise remote_error(e) from e

        buckets = [
            BucketSummary.model_validate(b)
            for b in response.get("Buckets") or []
            if b.get("Name")
        ]
        allowed = self.config.filter_buckets(buckets)
        logger.debug(f"Listed {len(allowed)} of {len(buckets)} bucket(s)")
        return allowed

    async def list_objects(
        self, bucket: str, prefix: str = "", max_keys: int = DEFAULT_MAX_KEYS
    ) -> list[ObjectSummary]:
        """
        List one page of objects in a bucket.

        Args:
            bucket: Bucket name
            prefix: Key prefix filter
            max_keys: Maximum number of entries requested from the backend

        Returns:
            Object entries as returned by the backend

        Raises:
            BucketNotAllowedError: If the bucket is not allowed
            RemoteFetchError: If the backend request fails
        """
        self._check_bucket(bucket)

        try:
            response = await asyncio.to_thread(
                self.client.list_objects_v2,
                Bucket=bucket,
                Prefix=prefix,
                MaxKeys=max_keys,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error listing objects in bucket {bucket}: {e}")
            raise remote_error(e) from e

        objects = [ObjectSummary.model_validate(o) for o in response.get("Contents") or []]
        logger.debug(f"Listed {len(objects)} object(s) in {bucket} (prefix={prefix!r})")
        return objects

    async def get_object(self, bucket: str, key: str) -> ObjectPayload:
        """
        Retrieve and materialize an object.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Text payload for text and PDF objects, binary payload otherwise

        Raises:
            BucketNotAllowedError: If the bucket is not allowed
            RemoteFetchError: If the backend request fails
            UnsupportedBodyTypeError: If the response body is not readable
            EmptyBodyError: If the object is empty
        """
        self._check_bucket(bucket)

        raw = await self.fetcher.fetch(bucket, key)
        category = classify(key, raw.content_type)
        logger.debug(f"Classified s3://{bucket}/{key} as {category.value}")

        return await self.materializer.materialize(category, raw.data, raw.content_type)
