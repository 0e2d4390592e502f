"""Error response schemas."""
from typing import Any, Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Detalhe de erro normalizado (code/message/details)."""
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: ErrorDetail
