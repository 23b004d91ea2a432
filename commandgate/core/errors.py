"""
Custom exception hierarchy for the command gate.

Rule: every error has a machine-readable `code` string so clients
can branch on it without parsing English messages, plus a `message_key`
that front-ends resolve into a translated message.

Structural errors (malformed payload, unsupported parameter, malformed
field) are raised the moment they are detected. Field-rule violations are
collected for the whole pass and surface once as `ValidationFailedError`.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from commandgate.schemas.common import ValidationFailedDetails, ViolationOut

if TYPE_CHECKING:
    from commandgate.services.violations import Violation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class CommandGateError(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message_key: str = "error.msg.internal"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "message_key": self.message_key,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class MalformedPayloadError(CommandGateError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "MALFORMED_PAYLOAD"
    message_key = "error.msg.invalid.request.body"

    def __init__(self, reason: str | None = None):
        super().__init__(
            message="The body of the request sent is not valid JSON.",
            details={"reason": reason} if reason else {},
        )


class UnsupportedParameterError(CommandGateError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "UNSUPPORTED_PARAMETER"
    message_key = "error.msg.parameter.unsupported"

    def __init__(self, parameters: Iterable[str]):
        self.parameters = sorted(parameters)
        super().__init__(
            message=f"Unsupported parameter(s): {', '.join(self.parameters)}.",
            details={"parameters": self.parameters},
        )


class MalformedFieldError(CommandGateError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "MALFORMED_FIELD"

    def __init__(self, field: str, value: Any, kind: str):
        self.field = field
        self.value = value
        self.kind = kind
        self.message_key = f"validation.msg.invalid.{kind}.format"
        super().__init__(
            message=f"The parameter {field} is not a valid {kind}: {value!r}.",
            details={"field": field, "value": value, "kind": kind},
        )


class ValidationFailedError(CommandGateError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_FAILED"
    message_key = "validation.msg.validation.errors.exist"

    def __init__(self, resource: str, violations: list[Violation]):
        self.resource = resource
        self.violations = list(violations)
        super().__init__(
            message="Validation errors exist.",
            details=ValidationFailedDetails(
                resource=resource,
                errors=[ViolationOut(**v.to_dict()) for v in self.violations],
            ).model_dump(),
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def commandgate_exception_handler(request: Request, exc: CommandGateError) -> JSONResponse:
    logger.warning(
        "Rejected %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        extra={
            "error_code": exc.code,
            "resource": getattr(exc, "resource", None),
            "violations": len(getattr(exc, "violations", ())) or None,
        },
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
