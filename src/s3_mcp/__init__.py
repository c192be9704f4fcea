"""
S3 MCP Agent - restricted object storage access for AI agents.

This package exposes a read-only, allow-listed view of S3-compatible
object storage (bucket listing, object listing, object retrieval) as
Model Context Protocol tools.
"""

__version__ = "0.2.5"

from s3_mcp.storage import (
    BucketNotAllowedError,
    BucketSummary,
    ContentCategory,
    ContentMaterializer,
    EmptyBodyError,
    LLMStorageTools,
    ObjectFetcher,
    ObjectPayload,
    ObjectSummary,
    RawObject,
    RemoteFetchError,
    S3AccessConfig,
    S3Resource,
    StorageError,
    ToolResult,
    UnsupportedBodyTypeError,
    classify,
)

from s3_mcp.settings import S3Settings

__all__ = [
    # Version
    "__version__",
    # Access policy
    "S3AccessConfig",
    # Classification
    "ContentCategory",
    "classify",
    # Pipeline
    "ObjectFetcher",
    "ContentMaterializer",
    "S3Resource",
    # Models
    "BucketSummary",
    "ObjectSummary",
    "RawObject",
    "ObjectPayload",
    # Tools
    "LLMStorageTools",
    "ToolResult",
    # Errors
    "StorageError",
    "BucketNotAllowedError",
    "RemoteFetchError",
    "UnsupportedBodyTypeError",
    "EmptyBodyError",
    # Settings
    "S3Settings",
]
