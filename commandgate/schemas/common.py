"""
Shared schema primitives used across the API.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class ViolationOut(BaseModel):
    """A single field-level rule failure."""
    resource: str
    field: str
    code: str
    message_key: str
    message: str
    value: Any = None
    limit: Optional[int] = None


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    message_key: Optional[str] = None
    details: Optional[dict[str, Any]] = None


class ValidationFailedDetails(BaseModel):
    resource: str
    errors: list[ViolationOut]
