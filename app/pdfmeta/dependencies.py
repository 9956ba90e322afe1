"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from .services.pipeline import ExtractionPipeline


def get_pipeline(request: Request) -> ExtractionPipeline:
    """Return the pipeline built during application startup."""
    return request.app.state.pipeline
