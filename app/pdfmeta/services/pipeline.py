"""
Extraction pipeline: one uploaded PDF in, one metadata envelope out.

Stages run strictly in order and stop at the first failure:
presence check, type check, text extraction, emptiness check, prompt
truncation, metadata generation, envelope assembly.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from starlette.datastructures import UploadFile

from ..config import Settings
from ..exceptions import (
    ExtractionFailedError,
    GenerationFailedError,
    MissingFileError,
    NoTextContentError,
    UnsupportedFileTypeError,
)
from ..models import DocumentMetadata, DocumentStats, ExtractedText, ExtractionResponse
from .metadata_service import MetadataGenerationError, MetadataService
from .pdf_service import PDFExtractionError, PDFService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Upload:
    """An uploaded file as received from the multipart form."""

    filename: str
    content: bytes

    @classmethod
    async def from_form_field(cls, value: Any) -> "Upload | None":
        """
        Build an Upload from a raw form value.

        Returns None when the field is absent or was sent as a plain string.
        """
        if not isinstance(value, UploadFile):
            return None
        try:
            content = await value.read()
        finally:
            await value.close()
        return cls(filename=value.filename or "", content=content)


def truncate_for_prompt(text: str, max_chars: int) -> tuple[str, bool]:
    """
    Bound text to the prompt budget.

    Returns:
        The first ``max_chars`` characters of ``text`` and whether anything
        was cut off.
    """
    if len(text) <= max_chars:
        return text, False
    return text[:max_chars], True


class ExtractionPipeline:
    """
    Orchestrates text extraction and metadata generation for one upload.

    Holds no per-request state; a single instance serves all requests.
    """

    def __init__(
        self,
        settings: Settings,
        text_extractor: PDFService,
        metadata_generator: MetadataService,
    ):
        self.settings = settings
        self.text_extractor = text_extractor
        self.metadata_generator = metadata_generator

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtractionPipeline":
        return cls(
            settings=settings,
            text_extractor=PDFService(),
            metadata_generator=MetadataService.from_settings(settings),
        )

    async def extract(self, upload: Upload | None) -> ExtractionResponse:
        """
        Run the full pipeline for one upload.

        Args:
            upload: The uploaded file, or None if the request carried none.

        Returns:
            ExtractionResponse with metadata, full text and stats.

        Raises:
            PipelineError: One of MissingFileError, UnsupportedFileTypeError,
                NoTextContentError, ExtractionFailedError, GenerationFailedError.
        """
        if upload is None:
            raise MissingFileError()

        if not upload.filename.lower().endswith(".pdf"):
            logger.info("Rejected non-PDF upload: %s", upload.filename)
            raise UnsupportedFileTypeError()

        logger.info("Processing PDF: %s (%d bytes)", upload.filename, len(upload.content))

        extracted = await self._extract_text(upload.content)
        text = extracted.text

        if not text.strip():
            logger.warning("No text layer found in %s", upload.filename)
            raise NoTextContentError()

        prompt_text, truncated = truncate_for_prompt(
            text, self.settings.max_prompt_chars
        )
        if truncated:
            logger.info(
                "Truncated prompt text from %d to %d characters",
                len(text),
                len(prompt_text),
            )

        metadata = await self._generate(prompt_text)

        return ExtractionResponse(
            success=True,
            metadata=metadata,
            raw_text=text,
            stats=DocumentStats(page_count=extracted.page_count, text_length=len(text)),
            truncated=truncated,
        )

    async def _extract_text(self, content: bytes) -> ExtractedText:
        timeout = self.settings.extraction_timeout
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.text_extractor.extract_text, content),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Text extraction timed out after %s seconds", timeout)
            raise ExtractionFailedError(
                f"Text extraction timed out after {timeout} seconds"
            ) from e
        except PDFExtractionError as e:
            raise ExtractionFailedError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error during text extraction")
            raise ExtractionFailedError(str(e)) from e

    async def _generate(self, prompt_text: str) -> DocumentMetadata:
        timeout = self.settings.generation_timeout
        try:
            return await asyncio.wait_for(
                self.metadata_generator.generate(prompt_text),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Metadata generation timed out after %s seconds", timeout)
            raise GenerationFailedError(
                f"Metadata generation timed out after {timeout} seconds"
            ) from e
        except MetadataGenerationError as e:
            raise GenerationFailedError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error during metadata generation")
            raise GenerationFailedError(str(e)) from e
