"""
Object storage data models.

Listing entries are Pydantic models that keep the backend's field names
on serialization. Retrieved objects and payloads are plain dataclasses
that only live for the duration of a single request.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from s3_mcp.storage.classifier import ContentCategory

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BucketSummary(BaseModel):
    """A bucket as reported by the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(alias="Name", description="Bucket name")
    creation_date: Optional[datetime] = Field(
        default=None, alias="CreationDate", description="Bucket creation time"
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with the backend's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ObjectSummary(BaseModel):
    """An object entry from a bucket listing."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    key: str = Field(alias="Key", description="Object key")
    size: Optional[int] = Field(default=None, alias="Size", description="Size in bytes")
    last_modified: Optional[datetime] = Field(
        default=None, alias="LastModified", description="Last modification time"
    )
    etag: Optional[str] = Field(default=None, alias="ETag", description="Entity tag")
    storage_class: Optional[str] = Field(
        default=None, alias="StorageClass", description="Storage class"
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with the backend's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class RawObject:
    """
    Bytes of a retrieved object.

    Attributes:
        data: The complete object body
        content_type: Declared content type (octet-stream when absent)
    """

    data: bytes = field(repr=False)
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ObjectPayload:
    """
    Materialized object content returned to callers.

    Exactly one of ``text`` and ``binary`` is set: ``text`` for TEXT and
    PDF objects, ``binary`` for BINARY objects.

    Attributes:
        category: How the object was classified
        content_type: Original content type of the object
        text: Decoded or extracted text
        binary: Raw bytes of a binary object
    """

    category: ContentCategory
    content_type: str
    text: Optional[str] = None
    binary: Optional[bytes] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.category == ContentCategory.BINARY:
            if self.binary is None or self.text is not None:
                raise ValueError("Binary payloads carry bytes and no text")
        elif self.text is None or self.binary is not None:
            raise ValueError(f"{self.category.value} payloads carry text and no bytes")

    @classmethod
    def from_text(
        cls, category: ContentCategory, text: str, content_type: str
    ) -> "ObjectPayload":
        return cls(category=category, content_type=content_type, text=text)

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str) -> "ObjectPayload":
        return cls(
            category=ContentCategory.BINARY, content_type=content_type, binary=data
        )

    @property
    def is_text(self) -> bool:
        return self.text is not None
