"""
Content classification for retrieved objects.

Decides whether an object's bytes should be read as text, extracted
as a PDF document, or passed through as opaque binary data.
"""

from enum import Enum
from typing import Optional


class ContentCategory(str, Enum):
    """How the bytes of an object are materialized."""

    TEXT = "text"
    PDF = "pdf"
    BINARY = "binary"


TEXT_CONTENT_TYPES = frozenset(
    {
        "application/json",
        "application/xml",
        "application/javascript",
    }
)

TEXT_EXTENSIONS = (
    ".txt",
    ".json",
    ".xml",
    ".html",
    ".htm",
    ".css",
    ".js",
    ".ts",
    ".md",
    ".csv",
    ".yml",
    ".yaml",
    ".log",
    ".sh",
    ".bash",
    ".py",
    ".rb",
    ".java",
    ".c",
    ".cpp",
    ".h",
    ".cs",
    ".php",
)

PDF_CONTENT_TYPE = "application/pdf"
PDF_EXTENSION = ".pdf"


def _is_text_content_type(content_type: str) -> bool:
    return content_type.startswith("text/") or content_type in TEXT_CONTENT_TYPES


def is_text_file(key: str, content_type: Optional[str] = None) -> bool:
    """Check if an object is text based on its content type or key extension."""
    return _is_text_content_type((content_type or "").lower()) or key.lower().endswith(
        TEXT_EXTENSIONS
    )


def is_pdf_file(key: str, content_type: Optional[str] = None) -> bool:
    """Check if an object is a PDF based on its content type or key extension."""
    return (content_type or "").lower() == PDF_CONTENT_TYPE or key.lower().endswith(
        PDF_EXTENSION
    )


def classify(key: str, content_type: Optional[str] = None) -> ContentCategory:
    """
    Classify an object by content type and key.

    Rules are applied in order and the first match wins:

    1. text/* or a known textual application type
    2. a known text extension on the key
    3. application/pdf
    4. a .pdf extension on the key
    5. anything else is binary

    All text rules run before the PDF rules, so ``report.pdf`` served as
    ``text/plain`` is TEXT.

    Args:
        key: Object key
        content_type: Declared content type (may be None or empty)

    Returns:
        The content category
    """
    if is_text_file(key, content_type):
        return ContentCategory.TEXT
    if is_pdf_file(key, content_type):
        return ContentCategory.PDF
    return ContentCategory.BINARY
