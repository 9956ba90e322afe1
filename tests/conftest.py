"""Pytest configuration and fixtures."""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from app.pdfmeta.config import Settings
from app.pdfmeta.dependencies import get_pipeline
from app.pdfmeta.main import app
from app.pdfmeta.models import DocumentMetadata, DocumentType, ExtractedText
from app.pdfmeta.services.pipeline import ExtractionPipeline


def build_pdf(page_texts: list[str | None]) -> bytes:
    """
    Build a small but well-formed PDF, one page per entry.

    A string entry becomes a line of Helvetica text on that page; None gives
    a page with an empty content stream (no text layer, like a scan).
    """
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, page_texts):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


class FakeTextExtractor:
    """Stands in for PDFService and records every call."""

    def __init__(
        self,
        result: ExtractedText | None = None,
        error: Exception | None = None,
    ):
        self.result = result or ExtractedText(text="Sample document text", page_count=1)
        self.error = error
        self.calls: list[bytes] = []

    def extract_text(self, content: bytes) -> ExtractedText:
        self.calls.append(content)
        if self.error is not None:
            raise self.error
        return self.result


class FakeMetadataGenerator:
    """Stands in for MetadataService and records every prompt."""

    def __init__(
        self,
        result: DocumentMetadata | None = None,
        error: Exception | None = None,
    ):
        self.result = result
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, text: str) -> DocumentMetadata:
        self.prompts.append(text)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, openai_api_key=None, use_mock_ai=False)


@pytest.fixture
def sample_metadata() -> DocumentMetadata:
    """Metadata as the model would return it for a quarterly report."""
    return DocumentMetadata(
        title="Quarterly Operations Report",
        author="Jane Smith",
        summary=(
            "The report reviews operations for the third quarter. "
            "It highlights cost reductions and staffing changes."
        ),
        topics=["operations", "costs", "staffing"],
        keywords=["quarterly", "report", "operations", "budget", "staffing"],
        document_type=DocumentType.REPORT,
    )


@pytest.fixture
def make_pipeline(
    settings: Settings,
    sample_metadata: DocumentMetadata,
) -> Callable[..., ExtractionPipeline]:
    """Factory for pipelines wired to fake collaborators."""

    def _make(
        extractor: FakeTextExtractor | None = None,
        generator: FakeMetadataGenerator | None = None,
        **overrides,
    ) -> ExtractionPipeline:
        return ExtractionPipeline(
            settings=settings.model_copy(update=overrides),
            text_extractor=extractor or FakeTextExtractor(),
            metadata_generator=generator or FakeMetadataGenerator(sample_metadata),
        )

    return _make


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_pipeline() -> Callable[[ExtractionPipeline], None]:
    """Route requests in the test client through the given pipeline."""

    def _use(pipeline: ExtractionPipeline) -> None:
        app.dependency_overrides[get_pipeline] = lambda: pipeline

    return _use


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """A two-page PDF with an embedded text layer."""
    return build_pdf(["Hello World", "Second page text"])


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """A one-page PDF without any text, as a scanned document would look."""
    return build_pdf([None])


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"
