"""
Shared fixtures: an in-memory stand-in for the boto3 S3 client.
"""

import io
from datetime import datetime, timezone
from typing import Any, Optional

import pytest
from botocore.exceptions import ClientError


class FakeS3Client:
    """Records calls and serves canned responses like a boto3 S3 client."""

    def __init__(self):
        self.buckets: list[dict[str, Any]] = []
        self.objects: dict[tuple[str, str], tuple[Any, Optional[str]]] = {}
        self.listing: list[dict[str, Any]] = []
        self.error: Optional[Exception] = None
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def add_buckets(self, count: int) -> None:
        self.buckets = [
            {
                "Name": f"test-bucket-{i + 1}",
                "CreationDate": datetime(2024, 1, i + 1, tzinfo=timezone.utc),
            }
            for i in range(count)
        ]

    def put_object(
        self, bucket: str, key: str, body: Any, content_type: Optional[str] = None
    ) -> None:
        self.objects[(bucket, key)] = (body, content_type)

    def list_buckets(self):
        self.calls.append(("list_buckets", {}))
        if self.error:
            raise self.error
        return {"Buckets": list(self.buckets)}

    def list_objects_v2(self, **kwargs):
        self.calls.append(("list_objects_v2", kwargs))
        if self.error:
            raise self.error
        if not self.listing:
            return {"KeyCount": 0}
        return {"Contents": list(self.listing)}

    def get_object(self, **kwargs):
        self.calls.append(("get_object", kwargs))
        if self.error:
            raise self.error
        key = (kwargs["Bucket"], kwargs["Key"])
        if key not in self.objects:
            raise no_such_key()
        body, content_type = self.objects[key]
        if isinstance(body, bytes):
            body = io.BytesIO(body)
        response = {"Body": body}
        if content_type is not None:
            response["ContentType"] = content_type
        return response


def no_such_key() -> ClientError:
    return ClientError(
        {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
        "GetObject",
    )


@pytest.fixture
def fake_client():
    """Create an empty fake S3 client."""
    return FakeS3Client()
