"""
Error taxonomy for the extraction pipeline.

Each error carries the HTTP status code it is reported with.
"""

from fastapi import status


class PipelineError(Exception):
    """Base class for errors that terminate an extraction request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFileError(PipelineError):
    """Raised when the request carries no binary `file` field."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__(
            'No PDF file uploaded. Please upload a file with field name "file".'
        )


class UnsupportedFileTypeError(PipelineError):
    """Raised when the uploaded filename does not end in .pdf."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("Only PDF files are accepted. Please upload a .pdf file.")


class NoTextContentError(PipelineError):
    """Raised when the PDF has no embedded text layer."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT

    def __init__(self):
        super().__init__(
            "Could not extract text from PDF. The file may be scanned or image-based."
        )


class ExtractionFailedError(PipelineError):
    """Raised when the text extractor cannot read the PDF."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to process PDF: {reason}")


class GenerationFailedError(PipelineError):
    """Raised when the metadata generator fails or returns invalid output."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to process PDF: {reason}")
