"""
schemas/common.py

- Schemas shared across the project (Pydantic v2)
  1) error envelope: ErrorDetail, ErrorResponse
  2) success envelope: SuccessEnvelope[T]
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) error envelope
# =========================================================

class ErrorDetail(BaseModel):
    """Smallest unit of an error: machine code + readable message"""
    code: str = Field(..., description="error code (e.g. VALIDATION_ERROR, NOT_FOUND, INTERNAL_ERROR)")
    message: str = Field(..., description="human readable message")

class ErrorResponse(BaseModel):
    """
    Body returned by every handler in middlewares/error_handler.py
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="response creation time (UTC)"
    )
    latency_ms: Optional[int] = Field(
        default=None, ge=0, description="request latency in ms, filled from the timing middleware"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) success envelope
# =========================================================

T = TypeVar("T")

class SuccessEnvelope(BaseModel, Generic[T]):
    """
    Standard success wrapper
    - success: always True
    - data: payload
    - message: optional human readable note
    """
    success: bool = True
    data: T
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
