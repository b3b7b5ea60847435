"""
Response envelopes shared by every endpoint.
"""
from datetime import datetime
from typing import Optional, Any, Dict
from pydantic import BaseModel, Field

from app.utils.time import utc_now

class ResponseBase(BaseModel):
    """Success envelope; endpoint-specific payload goes in ``data``."""
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)
    data: Optional[Dict[str, Any]] = None

class ErrorResponse(BaseModel):
    """Envelope rendered by the application's exception handlers."""
    success: bool = False
    message: Any = Field(description="Error text, or the HTTPException detail as given")
    request_id: str = "unknown"
    code: Optional[str] = Field(None, description="Machine-readable code for AvaTax errors")
    details: Optional[Any] = Field(None, description="Validation errors, when the request body was rejected")
