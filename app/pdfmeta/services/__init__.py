"""
Services package for the PDF metadata extraction service.

Contains:
- pdf_service: PDF text extraction with pdfplumber
- metadata_service: OpenAI structured-output metadata generation
- pipeline: the extraction pipeline tying both together
"""

from .metadata_service import MetadataGenerationError, MetadataService
from .pdf_service import PDFExtractionError, PDFService
from .pipeline import ExtractionPipeline, Upload

__all__ = [
    "ExtractionPipeline",
    "MetadataGenerationError",
    "MetadataService",
    "PDFExtractionError",
    "PDFService",
    "Upload",
]
