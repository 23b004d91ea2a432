"""
Static description of a command payload: which parameters it accepts and
how each field is typed and checked in create and update mode.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from commandgate.services.rules import Rule


class FieldKind(str, enum.Enum):
    string = "string"
    integer = "integer"
    date = "date"


class Mode(str, enum.Enum):
    create = "create"
    update = "update"


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    kind: FieldKind
    required_on_create: bool
    rules: tuple[Rule, ...] = ()


@dataclass(frozen=True)
class CommandSchema:
    """
    `supported_parameters` is the allow-list for top-level keys. It may hold
    names that are not validated as fields (e.g. `locale`, `dateFormat`), but
    every descriptor must name a supported parameter.

    `update_fields` defaults to `create_fields`; update mode ignores
    `required_on_create`.
    """
    resource: str
    supported_parameters: frozenset[str]
    create_fields: tuple[FieldDescriptor, ...]
    update_fields: Optional[tuple[FieldDescriptor, ...]] = None

    def __post_init__(self):
        if self.update_fields is None:
            object.__setattr__(self, "update_fields", self.create_fields)
        for descriptor in (*self.create_fields, *self.update_fields):
            if descriptor.name not in self.supported_parameters:
                raise ValueError(
                    f"{self.resource}: field {descriptor.name!r} is not a supported parameter"
                )

    def fields_for(self, mode: Mode) -> tuple[FieldDescriptor, ...]:
        return self.create_fields if mode is Mode.create else self.update_fields

    def unsupported(self, keys: Iterable[str]) -> set[str]:
        return set(keys) - self.supported_parameters
