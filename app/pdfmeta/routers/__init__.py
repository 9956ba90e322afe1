"""
Routers package for FastAPI endpoints.

- extract: PDF upload and metadata extraction
"""

from . import extract

__all__ = ["extract"]
