"""
Command validator: gate a create/update command body against its schema.

A pass runs in two phases:

1. Structure. A blank or unparsable body raises `MalformedPayloadError`;
   any top-level key outside the schema's allow-list raises
   `UnsupportedParameterError`. Both abort the pass immediately.
2. Fields. Every applicable field is extracted and run through its rule
   chain; failures are accumulated and raised once as
   `ValidationFailedError`.

In create mode fields marked `required_on_create` are always checked and
the rest only when present. In update mode every field is optional and only
checked when present.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from commandgate.core.config import settings
from commandgate.core.errors import UnsupportedParameterError
from commandgate.schemas.command import CommandSchema, FieldDescriptor, FieldKind, Mode
from commandgate.schemas.office import OFFICE_SCHEMA
from commandgate.services.extractor import FieldExtractor
from commandgate.services.rules import apply_rules, for_field
from commandgate.services.violations import ViolationAccumulator

logger = logging.getLogger(__name__)


class CommandValidator:
    def __init__(self, schema: CommandSchema, extractor: Optional[FieldExtractor] = None):
        self.schema = schema
        self.extractor = extractor or FieldExtractor(
            default_date_format=settings.DEFAULT_DATE_FORMAT,
            default_locale=settings.DEFAULT_LOCALE,
        )

    @property
    def resource(self) -> str:
        return self.schema.resource

    def validate_for_create(self, json_text: Optional[str]) -> None:
        self._validate(json_text, Mode.create)

    def validate_for_update(self, json_text: Optional[str]) -> None:
        self._validate(json_text, Mode.update)

    # ------------------------------------------------------------------

    def _validate(self, json_text: Optional[str], mode: Mode) -> None:
        element = self._check_structure(json_text)

        accumulator = ViolationAccumulator(self.resource)
        for descriptor in self.schema.fields_for(mode):
            must_check = mode is Mode.create and descriptor.required_on_create
            if not must_check and not self.extractor.exists(element, descriptor.name):
                continue
            value = self._extract(element, descriptor)
            apply_rules(for_field(accumulator, descriptor.name, value), descriptor.rules)

        logger.debug(
            "%s %s validation finished with %d violation(s)",
            self.resource,
            mode.value,
            len(accumulator),
            extra={"resource": self.resource, "mode": mode.value, "violations": len(accumulator)},
        )
        accumulator.raise_if_any()

    def _check_structure(self, json_text: Optional[str]) -> dict[str, Any]:
        element = self.extractor.parse(json_text)
        unsupported = self.schema.unsupported(element.keys())
        if unsupported:
            raise UnsupportedParameterError(unsupported)
        # Fail fast on an unreadable parsing context before any date field uses it.
        self.extractor.date_format_of(element)
        self.extractor.locale_of(element)
        return element

    def _extract(self, element: dict[str, Any], descriptor: FieldDescriptor) -> Any:
        if descriptor.kind is FieldKind.string:
            return self.extractor.extract_string(element, descriptor.name)
        if descriptor.kind is FieldKind.integer:
            return self.extractor.extract_integer(element, descriptor.name)
        return self.extractor.extract_date(element, descriptor.name)


# ---------------------------------------------------------------------------
# Shared validators, one per resource
# ---------------------------------------------------------------------------

_VALIDATORS: dict[str, CommandValidator] = {
    OFFICE_SCHEMA.resource: CommandValidator(OFFICE_SCHEMA),
}


def get_validator(resource: str) -> CommandValidator:
    """Return the shared validator for `resource`. Raises KeyError if unknown."""
    return _VALIDATORS[resource]
