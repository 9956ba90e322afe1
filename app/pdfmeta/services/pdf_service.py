"""
PDF text extraction service using pdfplumber.

Pulls the embedded text layer out of PDF documents. Scanned pages without a
text layer yield empty text; no OCR is attempted.
"""

import io
import logging
from typing import BinaryIO

import pdfplumber

from ..models import ExtractedText

logger = logging.getLogger(__name__)


class PDFExtractionError(Exception):
    """Raised when PDF text extraction fails."""

    pass


class PDFService:
    """
    Service for PDF text extraction.

    Uses pdfplumber (backed by pdfminer.six) to read the text of every page.
    """

    def __init__(self, page_separator: str = "\n"):
        """
        Initialize the PDF service.

        Args:
            page_separator: String placed between the text of consecutive pages.
        """
        self.page_separator = page_separator

    @staticmethod
    def _read_bytes(file_bytes: bytes | BinaryIO) -> bytes:
        # Ensure we have bytes
        if hasattr(file_bytes, "read"):
            return file_bytes.read()
        return file_bytes

    def _validate(self, pdf_bytes: bytes) -> None:
        if not pdf_bytes:
            raise PDFExtractionError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise PDFExtractionError(
                "Invalid PDF file: does not start with PDF header"
            )

    def extract_text(self, file_bytes: bytes | BinaryIO) -> ExtractedText:
        """
        Extract the embedded text of every page.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            ExtractedText with the joined page text and the page count.

        Raises:
            PDFExtractionError: If the bytes are not a readable PDF.
        """
        pdf_bytes = self._read_bytes(file_bytes)
        self._validate(pdf_bytes)

        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            logger.error("PDF text extraction failed: %s", e)
            raise PDFExtractionError(f"Invalid or corrupted PDF file: {e}") from e

        text = self.page_separator.join(pages)
        logger.info(
            "Extracted %d characters from %d page(s)", len(text), len(pages)
        )
        return ExtractedText(text=text, page_count=len(pages))

    def get_page_count(self, file_bytes: bytes | BinaryIO) -> int:
        """
        Get the total number of pages in a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            Number of pages in the PDF.

        Raises:
            PDFExtractionError: If page count cannot be determined.
        """
        pdf_bytes = self._read_bytes(file_bytes)
        self._validate(pdf_bytes)

        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as e:
            logger.error("Could not get page count: %s", e)
            raise PDFExtractionError(f"Could not get page count: {e}") from e
