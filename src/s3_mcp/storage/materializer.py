"""
Turns classified object bytes into caller-facing payloads.
"""

import logging
from typing import Optional, Protocol

from s3_mcp.storage.classifier import ContentCategory
from s3_mcp.storage.models import ObjectPayload
from s3_mcp.storage.pdf import PDFTextExtractor

logger = logging.getLogger(__name__)

PDF_EXTRACTION_ERROR_TEXT = "Error: Could not extract text from PDF file."


class TextExtractor(Protocol):
    async def extract(self, data: bytes) -> str: ...


class ContentMaterializer:
    """
    Produces an ObjectPayload for each content category.

    Text is decoded as UTF-8 with replacement characters, PDFs go through
    the text extractor, and binary data is passed through untouched.
    PDF extraction is best effort: failures are logged and replaced by
    PDF_EXTRACTION_ERROR_TEXT instead of being raised.
    """

    def __init__(self, pdf_extractor: Optional[TextExtractor] = None):
        self.pdf_extractor = pdf_extractor or PDFTextExtractor()

    async def materialize(
        self, category: ContentCategory, data: bytes, content_type: str
    ) -> ObjectPayload:
        """
        Build the payload for classified bytes.

        Args:
            category: Classification of the object
            data: Raw object bytes
            content_type: Declared content type, carried into the payload

        Returns:
            Text payload for TEXT and PDF, binary payload for BINARY
        """
        if category == ContentCategory.TEXT:
            text = data.decode("utf-8-sig", errors="replace")
            return ObjectPayload.from_text(category, text, content_type)

        if category == ContentCategory.PDF:
            text = await self.convert_pdf_to_text(data)
            return ObjectPayload.from_text(category, text, content_type)

        return ObjectPayload.from_bytes(bytes(data), content_type)

    async def convert_pdf_to_text(self, data: bytes) -> str:
        """Extract PDF text, falling back to a placeholder on any failure."""
        try:
            return await self.pdf_extractor.extract(data)
        except Exception as e:
            logger.error(f"Error converting PDF to text: {e}")
            return PDF_EXTRACTION_ERROR_TEXT
