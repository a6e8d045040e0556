"""
FastAPI Server for the Law Proxy.

This package provides a thin HTTP wrapper around the proxy pipeline.
"""

from .main import create_app
from .adapter import to_response, status_for, build_error
from .schemas import HealthResponse, ErrorResponse

__all__ = [
    "create_app",
    # Adapter
    "to_response",
    "status_for",
    "build_error",
    # Schemas
    "HealthResponse",
    "ErrorResponse",
]
