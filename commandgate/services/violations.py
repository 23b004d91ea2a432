"""
Violation accumulator: collects every field-rule failure of one validation
pass and converts them into a single `ValidationFailedError` at the end.

An accumulator is created per pass and never shared between calls.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from commandgate.core.errors import ValidationFailedError


class RuleCode(str, enum.Enum):
    required = "required"
    blank = "blank"
    too_long = "too_long"
    not_positive_integer = "not_positive_integer"


_KEY_SUFFIX = {
    RuleCode.required: "cannot.be.blank",
    RuleCode.blank: "cannot.be.blank",
    RuleCode.too_long: "exceeds.max.length",
    RuleCode.not_positive_integer: "not.greater.than.zero",
}


@dataclass(frozen=True)
class Violation:
    resource: str
    field: str
    rule: RuleCode
    value: Any
    limit: Optional[int] = None

    @property
    def message_key(self) -> str:
        return f"validation.msg.{self.resource}.{self.field}.{_KEY_SUFFIX[self.rule]}"

    @property
    def default_message(self) -> str:
        if self.rule is RuleCode.required:
            return f"The parameter {self.field} is mandatory."
        if self.rule is RuleCode.blank:
            return f"The parameter {self.field} cannot be blank."
        if self.rule is RuleCode.too_long:
            return f"The parameter {self.field} exceeds max length of {self.limit}."
        return f"The parameter {self.field} must be greater than 0."

    def to_dict(self) -> dict:
        value = self.value
        if value is not None and not isinstance(value, (str, int, float, bool)):
            value = str(value)
        return {
            "resource": self.resource,
            "field": self.field,
            "code": self.rule.value,
            "message_key": self.message_key,
            "message": self.default_message,
            "value": value,
            "limit": self.limit,
        }


class ViolationAccumulator:
    """Ordered, append-only list of violations for one resource."""

    def __init__(self, resource: str):
        self.resource = resource
        self._violations: list[Violation] = []

    def add(self, field: str, rule: RuleCode, value: Any, limit: Optional[int] = None) -> Violation:
        violation = Violation(
            resource=self.resource, field=field, rule=rule, value=value, limit=limit,
        )
        self._violations.append(violation)
        return violation

    def is_empty(self) -> bool:
        return not self._violations

    def all(self) -> list[Violation]:
        return list(self._violations)

    def __len__(self) -> int:
        return len(self._violations)

    def raise_if_any(self) -> None:
        if self._violations:
            raise ValidationFailedError(self.resource, self._violations)
