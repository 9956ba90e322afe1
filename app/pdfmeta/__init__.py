"""
PDF Metadata Extraction Service.

A FastAPI service that extracts the embedded text of an uploaded PDF and
asks an OpenAI model for structured document metadata.
"""

__version__ = "1.0.0"
