"""Shared presentation schemas."""
from .health import HealthResponse, DetailedHealthResponse
from .errors import ErrorDetail, ErrorResponse

__all__ = [
    "HealthResponse",
    "DetailedHealthResponse",
    "ErrorDetail",
    "ErrorResponse",
]
