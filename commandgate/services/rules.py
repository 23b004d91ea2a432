"""
Per-field rule chain.

    for_field(acc, "name", value).not_blank().not_exceeding_length(100)

Each rule tests the same value independently and appends at most one
violation to the accumulator; a failing rule never stops the ones after it.
Rules other than `not_blank` / `not_null` ignore a missing value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from commandgate.services.violations import RuleCode, ViolationAccumulator


@dataclass(frozen=True)
class FieldCheck:
    accumulator: ViolationAccumulator
    field: str
    value: Any

    def not_blank(self) -> "FieldCheck":
        if self.value is None or (isinstance(self.value, str) and not self.value.strip()):
            self.accumulator.add(self.field, RuleCode.blank, self.value)
        return self

    def not_null(self) -> "FieldCheck":
        if self.value is None:
            self.accumulator.add(self.field, RuleCode.required, self.value)
        return self

    def not_exceeding_length(self, max_length: int) -> "FieldCheck":
        if self.value is not None and len(str(self.value)) > max_length:
            self.accumulator.add(self.field, RuleCode.too_long, self.value, limit=max_length)
        return self

    def integer_greater_than_zero(self) -> "FieldCheck":
        if self.value is not None and not self.value > 0:
            self.accumulator.add(self.field, RuleCode.not_positive_integer, self.value)
        return self


def for_field(accumulator: ViolationAccumulator, field: str, value: Any) -> FieldCheck:
    return FieldCheck(accumulator=accumulator, field=field, value=value)


# ---------------------------------------------------------------------------
# Declarative rules, used by field descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """A rule-chain step stored as data: a FieldCheck method plus its arguments."""
    method: Callable[..., FieldCheck]
    args: tuple = ()

    def apply(self, check: FieldCheck) -> FieldCheck:
        return self.method(check, *self.args)


NOT_BLANK = Rule(FieldCheck.not_blank)
NOT_NULL = Rule(FieldCheck.not_null)
POSITIVE_INTEGER = Rule(FieldCheck.integer_greater_than_zero)


def max_length(limit: int) -> Rule:
    return Rule(FieldCheck.not_exceeding_length, (limit,))


def apply_rules(check: FieldCheck, rules: tuple[Rule, ...]) -> FieldCheck:
    for rule in rules:
        rule.apply(check)
    return check
