"""
Office command gate.

POST /offices/validate
PUT  /offices/{office_id}/validate

The body is read as raw text so that blank or unparsable payloads reach the
validator instead of FastAPI's own JSON handling.
"""
from fastapi import APIRouter, Depends, Path, Request, Response
from starlette import status

from commandgate.core.errors import MalformedPayloadError
from commandgate.schemas.common import ErrorResponse
from commandgate.schemas.office import RESOURCE
from commandgate.services.command_validator import CommandValidator, get_validator

router = APIRouter(prefix="/offices", tags=["offices"])

_RESPONSES = {
    204: {"description": "Payload is valid."},
    400: {
        "model": ErrorResponse,
        "description": "Malformed payload, unsupported parameter, or field violations.",
    },
}
_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {"type": "object"},
                "example": {"name": "HQ", "openingDate": "2020-01-01"},
            }
        },
    }
}


async def raw_body(request: Request) -> str:
    body = await request.body()
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedPayloadError("body is not UTF-8") from exc


def office_validator() -> CommandValidator:
    return get_validator(RESOURCE)


@router.post(
    "/validate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Validate an office create command",
    responses=_RESPONSES,
    openapi_extra=_REQUEST_BODY,
)
def validate_create(
    payload: str = Depends(raw_body),
    validator: CommandValidator = Depends(office_validator),
):
    """
    Create mode: every required field must be present and valid.
    All field violations are reported together in `details.errors`.
    """
    validator.validate_for_create(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{office_id}/validate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Validate an office update command",
    responses=_RESPONSES,
    openapi_extra=_REQUEST_BODY,
)
def validate_update(
    office_id: int = Path(gt=0, description="Office being updated."),
    payload: str = Depends(raw_body),
    validator: CommandValidator = Depends(office_validator),
):
    """Update mode: fields are optional, but any field sent must be valid."""
    validator.validate_for_update(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
