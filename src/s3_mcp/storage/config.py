"""
Access policy for restricted bucket access.
"""

from typing import Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class S3AccessConfig(BaseModel):
    """
    Bucket access restrictions for LLM storage access.

    Defines which buckets the LLM can see and how many buckets a
    listing may return. An empty allow-list means every bucket is
    accessible.

    The config is frozen: it is built once from settings at startup
    and shared read-only by every request.
    """

    model_config = ConfigDict(frozen=True)

    allowed_buckets: tuple[str, ...] = Field(
        default=(),
        description="Whitelisted bucket names (empty = all buckets allowed)",
    )

    max_buckets: int = Field(
        default=5,
        ge=0,
        description="Maximum number of buckets returned by a bucket listing",
    )

    @field_validator("allowed_buckets", mode="before")
    @classmethod
    def parse_buckets(cls, v):
        """Accept a comma-separated string or a list, dropping blank entries."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(",")
        return tuple(b.strip() for b in v if b and b.strip())

    @property
    def is_restricted(self) -> bool:
        """Whether an allow-list is configured."""
        return bool(self.allowed_buckets)

    def is_bucket_allowed(self, bucket: str) -> bool:
        """
        Check if a bucket may be accessed.

        Matching is exact and case-sensitive.

        Args:
            bucket: Bucket name to check

        Returns:
            True if the allow-list is empty or contains the bucket
        """
        if not self.is_restricted:
            return True
        return bucket in self.allowed_buckets

    def filter_buckets(
        self, candidates: Sequence[T], max_count: Optional[int] = None
    ) -> list[T]:
        """
        Restrict discovered buckets to the allow-list and truncate.

        Candidate order is preserved. Candidates may be bucket names or
        objects with a ``name`` attribute.

        Args:
            candidates: Buckets in discovery order
            max_count: Truncation limit (default: max_buckets)

        Returns:
            At most max_count allowed candidates
        """
        limit = self.max_buckets if max_count is None else max_count

        if self.is_restricted:
            candidates = [
                c for c in candidates if _bucket_name(c) in self.allowed_buckets
            ]

        return list(candidates[:limit])

    def __repr__(self) -> str:
        return (
            f"S3AccessConfig("
            f"allowed_buckets={len(self.allowed_buckets)}, "
            f"max_buckets={self.max_buckets})"
        )


def _bucket_name(candidate) -> Optional[str]:
    if isinstance(candidate, str):
        return candidate
    return getattr(candidate, "name", None)
