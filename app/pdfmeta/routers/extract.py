"""
Router for PDF metadata extraction.

The multipart body is read directly so a missing or non-file `file` field is
reported through the pipeline's own error contract instead of FastAPI's
request validation.
"""

import logging

from fastapi import APIRouter, Depends, Request

from ..dependencies import get_pipeline
from ..models import ErrorResponse, ExtractionResponse
from ..services.pipeline import ExtractionPipeline, Upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["extract"])

EXTRACT_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "file": {
                            "type": "string",
                            "format": "binary",
                            "description": "PDF file to analyze",
                        },
                    },
                    "required": ["file"],
                },
            },
        },
    },
}


@router.post(
    "/extract",
    response_model=ExtractionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        422: {"model": ErrorResponse, "description": "Could not extract text from PDF"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    openapi_extra=EXTRACT_REQUEST_BODY,
)
async def extract_metadata(
    request: Request,
    pipeline: ExtractionPipeline = Depends(get_pipeline),
) -> ExtractionResponse:
    """
    Extract structured metadata from an uploaded PDF.

    Accepts multipart/form-data with a `file` field holding the PDF and
    returns the metadata, the full extracted text and basic stats.
    """
    form = await request.form()
    upload = await Upload.from_form_field(form.get("file"))
    return await pipeline.extract(upload)
