"""
Field extractor: parses the command body and pulls typed scalars out of it.

A missing key and an explicit `null` both extract as `None`; `exists()`
tells them apart. A value that is present but cannot be read as the
requested kind raises `MalformedFieldError`.

Date fields honour the payload's own `dateFormat` / `locale` parameters,
falling back to the configured defaults. Formats use the Java-style
tokens API clients send (`dd MMMM yyyy`, `yyyy-MM-dd`, ...).
"""
from __future__ import annotations

import json
import math
import re
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Optional

from commandgate.core.errors import MalformedFieldError, MalformedPayloadError

DATE_FORMAT_PARAM = "dateFormat"
LOCALE_PARAM = "locale"

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FORMAT_TOKEN_RE = re.compile(r"'[^']*'|yyyy|yy|MMMM|MMM|MM|M|dd|d|%")
_FORMAT_TOKENS = {
    "yyyy": "%Y",
    "yy": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "dd": "%d",
    "d": "%d",
    "%": "%%",
}


@lru_cache(maxsize=64)
def to_strptime_format(pattern: str) -> str:
    """Translate a Java-style date pattern into a `strptime` format string."""
    def _sub(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("'"):
            return token[1:-1].replace("%", "%%")
        return _FORMAT_TOKENS[token]

    return _FORMAT_TOKEN_RE.sub(_sub, pattern)


class FieldExtractor:
    def __init__(self, default_date_format: str = "yyyy-MM-dd", default_locale: str = "en"):
        self.default_date_format = default_date_format
        self.default_locale = default_locale

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, json_text: Optional[str]) -> dict[str, Any]:
        if json_text is None or not json_text.strip():
            raise MalformedPayloadError("empty body")
        try:
            element = json.loads(
                json_text, parse_constant=_reject_constant, parse_float=_finite_float,
            )
        except RecursionError as exc:
            raise MalformedPayloadError("nesting too deep") from exc
        except ValueError as exc:
            raise MalformedPayloadError(str(exc)) from exc
        if not isinstance(element, dict):
            raise MalformedPayloadError("top-level value must be a JSON object")
        return element

    # ------------------------------------------------------------------
    # Field queries
    # ------------------------------------------------------------------

    def exists(self, element: dict[str, Any], name: str) -> bool:
        _check_name(name)
        return name in element

    def extract_string(self, element: dict[str, Any], name: str) -> Optional[str]:
        _check_name(name)
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        raise MalformedFieldError(name, value, "string")

    def extract_integer(self, element: dict[str, Any], name: str) -> Optional[int]:
        _check_name(name)
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, bool):
            raise MalformedFieldError(name, value, "integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if _INTEGER_RE.match(text):
                return int(text)
        raise MalformedFieldError(name, value, "integer")

    def extract_date(self, element: dict[str, Any], name: str) -> Optional[date]:
        _check_name(name)
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return self._date_from_parts(name, value)
        if not isinstance(value, str):
            raise MalformedFieldError(name, value, "date")
        text = value.strip()
        if not text:
            return None
        date_format = self.date_format_of(element)
        try:
            return datetime.strptime(text, to_strptime_format(date_format)).date()
        except ValueError as exc:
            raise MalformedFieldError(name, value, "date") from exc

    # ------------------------------------------------------------------
    # Parsing context carried by the payload
    # ------------------------------------------------------------------

    def date_format_of(self, element: dict[str, Any]) -> str:
        return self._context_param(element, DATE_FORMAT_PARAM, self.default_date_format)

    def locale_of(self, element: dict[str, Any]) -> str:
        # Only type-checked: month names are always matched in English.
        return self._context_param(element, LOCALE_PARAM, self.default_locale)

    @staticmethod
    def _context_param(element: dict[str, Any], name: str, default: str) -> str:
        value = element.get(name)
        if value is None:
            return default
        if not isinstance(value, str):
            raise MalformedFieldError(name, value, name)
        return value.strip() or default

    @staticmethod
    def _date_from_parts(name: str, parts: list) -> date:
        if len(parts) != 3 or not all(isinstance(p, int) and not isinstance(p, bool) for p in parts):
            raise MalformedFieldError(name, parts, "date")
        try:
            return date(*parts)
        except ValueError as exc:
            raise MalformedFieldError(name, parts, "date") from exc


def _reject_constant(token: str):
    raise MalformedPayloadError(f"{token} is not valid JSON")


def _finite_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        raise MalformedPayloadError(f"number out of range: {token}")
    return value


def _check_name(name: str) -> None:
    if not name:
        raise ValueError("field name must be non-empty")
