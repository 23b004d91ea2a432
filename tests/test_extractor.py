"""
Unit tests for the field extractor: parsing, presence, and typed extraction.
"""
from datetime import date

import pytest

from commandgate.core.errors import MalformedFieldError, MalformedPayloadError
from commandgate.services.extractor import FieldExtractor, to_strptime_format


class TestParse:
    @pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
    def test_blank_body_is_malformed(self, extractor, text):
        with pytest.raises(MalformedPayloadError):
            extractor.parse(text)

    @pytest.mark.parametrize("text", [
        "{", "not json", '{"name": }', '{"name": ' + "[" * 100000 + "}",
    ])
    def test_invalid_json_is_malformed(self, extractor, text):
        with pytest.raises(MalformedPayloadError):
            extractor.parse(text)

    @pytest.mark.parametrize("text", [
        '{"name": NaN}', '{"funds": Infinity}', '{"funds": -Infinity}', '{"funds": 1e999}',
    ])
    def test_non_standard_numbers_are_malformed(self, extractor, text):
        with pytest.raises(MalformedPayloadError):
            extractor.parse(text)

    def test_finite_floats_still_parse(self, extractor):
        assert extractor.parse('{"funds": 7.0}') == {"funds": 7.0}

    @pytest.mark.parametrize("text", ["[]", "1", '"office"', "null"])
    def test_non_object_is_malformed(self, extractor, text):
        with pytest.raises(MalformedPayloadError):
            extractor.parse(text)

    def test_object_is_returned(self, extractor):
        assert extractor.parse('{"name": "HQ"}') == {"name": "HQ"}


class TestExists:
    def test_present_key(self, extractor):
        assert extractor.exists({"name": "HQ"}, "name")

    def test_null_value_still_exists(self, extractor):
        assert extractor.exists({"name": None}, "name")

    def test_missing_key(self, extractor):
        assert not extractor.exists({}, "name")

    def test_empty_name_rejected(self, extractor):
        with pytest.raises(ValueError):
            extractor.exists({}, "")


class TestExtractString:
    def test_missing_and_null_are_absent(self, extractor):
        assert extractor.extract_string({}, "name") is None
        assert extractor.extract_string({"name": None}, "name") is None

    def test_string_is_stripped(self, extractor):
        assert extractor.extract_string({"name": "  HQ  "}, "name") == "HQ"

    def test_blank_string_stays_blank(self, extractor):
        assert extractor.extract_string({"name": "   "}, "name") == ""

    def test_scalars_are_rendered(self, extractor):
        assert extractor.extract_string({"cin": 42}, "cin") == "42"
        assert extractor.extract_string({"cin": True}, "cin") == "true"

    @pytest.mark.parametrize("value", [{"a": 1}, ["a"]])
    def test_nested_value_is_malformed(self, extractor, value):
        with pytest.raises(MalformedFieldError) as exc_info:
            extractor.extract_string({"name": value}, "name")
        assert exc_info.value.field == "name"
        assert exc_info.value.kind == "string"


class TestExtractInteger:
    def test_missing_null_and_blank_are_absent(self, extractor):
        assert extractor.extract_integer({}, "funds") is None
        assert extractor.extract_integer({"funds": None}, "funds") is None
        assert extractor.extract_integer({"funds": "  "}, "funds") is None

    @pytest.mark.parametrize("value, expected", [
        (5, 5), (0, 0), (-3, -3), (7.0, 7), ("12", 12), (" -4 ", -4), ("+9", 9),
    ])
    def test_coercible_values(self, extractor, value, expected):
        assert extractor.extract_integer({"funds": value}, "funds") == expected

    @pytest.mark.parametrize("value", [True, 1.5, "abc", "1.0", [1], {"v": 1}])
    def test_uncoercible_values(self, extractor, value):
        with pytest.raises(MalformedFieldError) as exc_info:
            extractor.extract_integer({"funds": value}, "funds")
        assert exc_info.value.kind == "integer"


class TestExtractDate:
    def test_missing_null_and_blank_are_absent(self, extractor):
        assert extractor.extract_date({}, "openingDate") is None
        assert extractor.extract_date({"openingDate": None}, "openingDate") is None
        assert extractor.extract_date({"openingDate": ""}, "openingDate") is None

    def test_default_iso_format(self, extractor):
        assert extractor.extract_date({"openingDate": "2020-01-31"}, "openingDate") == date(2020, 1, 31)

    def test_payload_date_format(self, extractor):
        element = {"openingDate": "05 March 2021", "dateFormat": "dd MMMM yyyy", "locale": "en"}
        assert extractor.extract_date(element, "openingDate") == date(2021, 3, 5)

    def test_configured_default_format(self):
        extractor = FieldExtractor(default_date_format="dd/MM/yyyy")
        assert extractor.extract_date({"openingDate": "31/12/2019"}, "openingDate") == date(2019, 12, 31)

    def test_array_form(self, extractor):
        assert extractor.extract_date({"openingDate": [2020, 2, 29]}, "openingDate") == date(2020, 2, 29)

    @pytest.mark.parametrize("value", [
        "yesterday", "2020-13-01", "2019-02-29", 20200101, [2020, 1], [2020, 2, 30], True,
    ])
    def test_uncoercible_values(self, extractor, value):
        with pytest.raises(MalformedFieldError) as exc_info:
            extractor.extract_date({"openingDate": value}, "openingDate")
        assert exc_info.value.kind == "date"
        assert exc_info.value.message_key == "validation.msg.invalid.date.format"

    def test_value_not_matching_payload_format(self, extractor):
        element = {"openingDate": "2020-01-01", "dateFormat": "dd MMMM yyyy"}
        with pytest.raises(MalformedFieldError):
            extractor.extract_date(element, "openingDate")


class TestParsingContext:
    def test_defaults(self, extractor):
        assert extractor.date_format_of({}) == "yyyy-MM-dd"
        assert extractor.locale_of({}) == "en"

    def test_payload_overrides(self, extractor):
        element = {"dateFormat": "dd MMM yyyy", "locale": "en_GB"}
        assert extractor.date_format_of(element) == "dd MMM yyyy"
        assert extractor.locale_of(element) == "en_GB"

    def test_locale_does_not_change_parsing(self, extractor):
        element = {"openingDate": "05 March 2021", "dateFormat": "dd MMMM yyyy", "locale": "fr"}
        assert extractor.locale_of(element) == "fr"
        assert extractor.extract_date(element, "openingDate") == date(2021, 3, 5)

    def test_non_string_context_is_malformed(self, extractor):
        with pytest.raises(MalformedFieldError):
            extractor.locale_of({"locale": 1})


class TestFormatTranslation:
    @pytest.mark.parametrize("pattern, expected", [
        ("yyyy-MM-dd", "%Y-%m-%d"),
        ("dd MMMM yyyy", "%d %B %Y"),
        ("d MMM yy", "%d %b %y"),
        ("dd/M/yyyy", "%d/%m/%Y"),
        ("yyyy'T'MM", "%YT%m"),
        ("100% dd", "100%% %d"),
    ])
    def test_patterns(self, pattern, expected):
        assert to_strptime_format(pattern) == expected
