"""
PDF text extraction.

Uses pypdf to pull the text layer out of PDF documents. Extraction is
CPU-bound and runs in a worker thread to keep the event loop free.
"""

import asyncio
import io
import logging

from pypdf import PdfReader

from s3_mcp.storage.exceptions import PDFExtractionError

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """
    Extracts plain text from PDF bytes.

    Usage:
        extractor = PDFTextExtractor()
        text = await extractor.extract(pdf_bytes)
    """

    async def extract(self, data: bytes) -> str:
        """
        Extract the text of every page, joined by newlines.

        Args:
            data: Raw PDF document

        Returns:
            Extracted text

        Raises:
            PDFExtractionError: If the document cannot be parsed
        """
        return await asyncio.to_thread(self._extract_sync, data)

    def _extract_sync(self, data: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            raise PDFExtractionError(f"Failed to read PDF: {e}") from e

        logger.debug(f"Extracted text from {len(pages)} PDF page(s)")
        return "\n".join(pages)
