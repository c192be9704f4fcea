"""
Restricted object storage interface for LLM access.

This module provides allow-listed, read-only access to S3-compatible
object storage for LLMs, including object retrieval with content
classification (text, PDF, binary) and bounded listings.
"""

from s3_mcp.storage.classifier import ContentCategory, classify, is_pdf_file, is_text_file
from s3_mcp.storage.config import S3AccessConfig
from s3_mcp.storage.exceptions import (
    BucketNotAllowedError,
    EmptyBodyError,
    PDFExtractionError,
    RemoteFetchError,
    StorageError,
    UnsupportedBodyTypeError,
)
from s3_mcp.storage.fetcher import ObjectFetcher
from s3_mcp.storage.materializer import PDF_EXTRACTION_ERROR_TEXT, ContentMaterializer
from s3_mcp.storage.models import BucketSummary, ObjectPayload, ObjectSummary, RawObject
from s3_mcp.storage.pdf import PDFTextExtractor
from s3_mcp.storage.resource import S3Resource
from s3_mcp.storage.tools import LLMStorageTools, ToolResult

__all__ = [
    "ContentCategory",
    "classify",
    "is_pdf_file",
    "is_text_file",
    "S3AccessConfig",
    "BucketNotAllowedError",
    "EmptyBodyError",
    "PDFExtractionError",
    "RemoteFetchError",
    "StorageError",
    "UnsupportedBodyTypeError",
    "ObjectFetcher",
    "PDF_EXTRACTION_ERROR_TEXT",
    "ContentMaterializer",
    "BucketSummary",
    "ObjectPayload",
    "ObjectSummary",
    "RawObject",
    "PDFTextExtractor",
    "S3Resource",
    "LLMStorageTools",
    "ToolResult",
]
