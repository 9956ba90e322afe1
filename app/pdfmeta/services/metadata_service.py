"""
Metadata generation using OpenAI structured outputs.

Sends document text to the model with DocumentMetadata as the response
format and returns the validated result.
"""

import logging
from typing import Any

import openai
from pydantic import ValidationError

from ..config import Settings
from ..models import DocumentMetadata, DocumentType

logger = logging.getLogger(__name__)


class MetadataGenerationError(Exception):
    """Raised when the model call fails or returns unusable output."""

    pass


# =============================================================================
# Prompts
# =============================================================================

METADATA_SYSTEM_PROMPT = """You are a document analyst.
You read the plain text of a document and describe it with structured metadata.

## Rules:
- Base every value on the document text. Do not invent authors; use null when none is named.
- If the title is not stated, infer a short descriptive title from the content.
- Keep topics and keywords in order of importance.
- Pick the single closest document type from the allowed values; use "other" when none fits."""


def build_prompt(text: str) -> str:
    """Build the user prompt wrapping the document text."""
    return f"""Analyze the following document text and extract metadata.

Document text:
---
{text}
---"""


class MetadataService:
    """
    Service for generating document metadata with an OpenAI model.

    In mock mode (explicit opt-in) it returns deterministic metadata so the
    service runs offline. Without mock mode a missing API key is an error.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-5-mini-2025-08-07",
        timeout: float = 120.0,
        max_retries: int = 0,
        use_mock: bool = False,
    ):
        """
        Initialize the metadata service.

        Args:
            api_key: OpenAI API key. Required unless use_mock is set.
            model: OpenAI model supporting structured outputs.
            timeout: Request timeout in seconds for the OpenAI client.
            max_retries: Client-level retries on transient provider errors.
            use_mock: If True, return mock metadata instead of calling OpenAI.
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries
        self.use_mock = use_mock
        self._client: openai.AsyncOpenAI | None = None

        if self.use_mock:
            logger.warning(
                "Metadata service running in MOCK MODE. Unset USE_MOCK_AI for real extraction."
            )
        elif not self.api_key:
            logger.error(
                "OPENAI_API_KEY is not set; metadata generation requests will fail."
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MetadataService":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.generation_timeout,
            max_retries=settings.openai_max_retries,
            use_mock=settings.use_mock_ai,
        )

    @property
    def client(self) -> openai.AsyncOpenAI:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise MetadataGenerationError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self._client

    async def generate(self, text: str) -> DocumentMetadata:
        """
        Generate structured metadata for a document.

        Args:
            text: Document text, already bounded to the prompt budget.

        Returns:
            DocumentMetadata validated against the schema.

        Raises:
            MetadataGenerationError: On provider errors, refusals or output
                that does not match the schema.
        """
        if self.use_mock:
            logger.info("Generating metadata (MOCK MODE)")
            return self._get_mock_metadata(text)

        logger.info("Calling OpenAI (%s) with %d characters", self.model, len(text))

        try:
            response = await self.client.chat.completions.parse(
                model=self.model,
                messages=[
                    {"role": "system", "content": METADATA_SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(text)},
                ],
                response_format=DocumentMetadata,
            )
        except openai.OpenAIError as e:
            logger.error("OpenAI API error: %s", e)
            raise MetadataGenerationError(f"AI provider error: {e}") from e
        except ValidationError as e:
            logger.error("Model output did not match schema: %s", e)
            raise MetadataGenerationError(
                f"AI response did not match metadata schema: {e}"
            ) from e

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> DocumentMetadata:
        if not response.choices:
            raise MetadataGenerationError("AI returned no choices")

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise MetadataGenerationError(f"AI refused the request: {message.refusal}")

        metadata = message.parsed
        if metadata is None:
            logger.error("OpenAI returned no parsed response")
            raise MetadataGenerationError("Failed to parse metadata response")

        logger.info(
            "Generated metadata: type=%s, title=%r",
            metadata.document_type.value,
            metadata.title[:100],
        )
        return metadata

    def _get_mock_metadata(self, text: str) -> DocumentMetadata:
        """Return mock metadata for development."""
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        title = lines[0][:120] if lines else "Untitled Document"

        return DocumentMetadata(
            title=title,
            author=None,
            summary=(
                "DEVELOPMENT MODE: mock metadata generated without calling OpenAI. "
                "Unset USE_MOCK_AI for real extraction."
            ),
            topics=["mock topic one", "mock topic two", "mock topic three"],
            keywords=["mock", "pdf", "metadata", "extraction", "development"],
            document_type=DocumentType.OTHER,
        )
