"""
Office create/update command.

POST /offices/validate             → create mode
PUT  /offices/{office_id}/validate → update mode
"""
from __future__ import annotations

from dataclasses import replace

from commandgate.schemas.command import CommandSchema, FieldDescriptor, FieldKind
from commandgate.services.rules import NOT_BLANK, NOT_NULL, POSITIVE_INTEGER, max_length

RESOURCE = "office"
NAME_MAX_LENGTH = 100

SUPPORTED_PARAMETERS = frozenset({
    "name", "parentId", "openingDate", "externalId", "locale", "dateFormat",
    "cin", "companyName", "companyStatus", "roc", "funds", "incorporatedDate",
    "registrationAddress", "registrationNumber",
})

_TEXT = (NOT_BLANK, max_length(NAME_MAX_LENGTH))
_POSITIVE = (NOT_NULL, POSITIVE_INTEGER)

OFFICE_CREATE_FIELDS = (
    FieldDescriptor("name",                FieldKind.string,  True,  _TEXT),
    FieldDescriptor("openingDate",         FieldKind.date,    True,  (NOT_NULL,)),
    FieldDescriptor("externalId",          FieldKind.string,  False, (max_length(NAME_MAX_LENGTH),)),
    FieldDescriptor("parentId",            FieldKind.integer, False, _POSITIVE),
    FieldDescriptor("cin",                 FieldKind.string,  True,  _TEXT),
    FieldDescriptor("roc",                 FieldKind.string,  True,  _TEXT),
    FieldDescriptor("incorporatedDate",    FieldKind.date,    True,  (NOT_NULL,)),
    FieldDescriptor("companyName",         FieldKind.string,  True,  _TEXT),
    FieldDescriptor("companyStatus",       FieldKind.string,  True,  _TEXT),
    FieldDescriptor("registrationAddress", FieldKind.string,  True,  _TEXT),
    FieldDescriptor("funds",               FieldKind.integer, True,  _POSITIVE),
    FieldDescriptor("registrationNumber",  FieldKind.integer, True,  _POSITIVE),
)

# Update mode reads companyStatus as a date; clients already depend on it.
OFFICE_UPDATE_FIELDS = tuple(
    replace(d, kind=FieldKind.date, rules=(NOT_NULL,)) if d.name == "companyStatus" else d
    for d in OFFICE_CREATE_FIELDS
)

OFFICE_SCHEMA = CommandSchema(
    resource=RESOURCE,
    supported_parameters=SUPPORTED_PARAMETERS,
    create_fields=OFFICE_CREATE_FIELDS,
    update_fields=OFFICE_UPDATE_FIELDS,
)
