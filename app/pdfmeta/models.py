"""
Pydantic models for the PDF metadata extraction service.

Defines the structured metadata schema handed to the language model and the
JSON envelopes returned by the API. Wire names are camelCase.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class DocumentType(str, Enum):
    """Closed set of document categories the model may choose from."""

    REPORT = "report"
    ARTICLE = "article"
    LETTER = "letter"
    CONTRACT = "contract"
    MANUAL = "manual"
    PRESENTATION = "presentation"
    ACADEMIC_PAPER = "academic_paper"
    INVOICE = "invoice"
    RESUME = "resume"
    OTHER = "other"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentMetadata(CamelModel):
    """
    Structured metadata the model extracts from a document's text.

    The field descriptions are part of the JSON schema sent to the model,
    so they double as extraction instructions.
    """

    title: str = Field(
        ...,
        description="The title of the document. If not explicitly stated, infer from content.",
    )
    author: str | None = Field(
        ...,
        description="The author or authors of the document. Return null if not found.",
    )
    summary: str = Field(
        ...,
        description="A 2-3 sentence summary of the document main content and purpose.",
    )
    topics: list[str] = Field(
        ...,
        description="3-5 main topics or themes discussed in the document.",
    )
    keywords: list[str] = Field(
        ...,
        description="5-10 important keywords or key phrases from the document.",
    )
    document_type: DocumentType = Field(
        ...,
        description="The type or category of document.",
    )

    @field_validator("topics", "keywords")
    @classmethod
    def strip_blank_entries(cls, v: list[str]) -> list[str]:
        """Drop empty strings while keeping the model's ordering."""
        return [item.strip() for item in v if item and item.strip()]


class ExtractedText(BaseModel):
    """Plain text pulled out of a PDF together with its page count."""

    text: str
    page_count: int = Field(..., ge=0)


class DocumentStats(CamelModel):
    """Basic statistics about the extracted text."""

    model_config = ConfigDict(frozen=True)

    page_count: int = Field(..., ge=0, description="Number of pages in the PDF")
    text_length: int = Field(
        ..., ge=0, description="Character length of the full extracted text"
    )


class ExtractionResponse(CamelModel):
    """Response envelope for a successful POST /extract."""

    model_config = ConfigDict(frozen=True)

    success: bool = Field(default=True)
    metadata: DocumentMetadata
    raw_text: str = Field(..., description="Full, untruncated extracted text")
    stats: DocumentStats
    truncated: bool = Field(
        default=False,
        description="Whether the text sent to the model was cut to the prompt budget",
    )


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok")
    message: str = Field(default="PDF Metadata Extraction API")
    version: str = Field(default="1.0.0")
    endpoints: dict[str, str] = Field(default_factory=dict)
