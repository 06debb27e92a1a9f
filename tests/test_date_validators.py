"""
Tests for date format and date range validators.
"""

from datetime import date, datetime

import pytest

from lemo_validator import (
    ConfigurationError,
    DateFormatValidator,
    DateGreaterThanValidator,
    DateLessThanValidator,
)


class TestDateFormat:

    @pytest.fixture
    def validator(self):
        return DateFormatValidator({"params": {"format": "%d.%m.%Y"}})

    @pytest.mark.parametrize("value", ["19.10.2026", "05.01.2024", "5.1.2024", "29.02.2024"])
    def test_valid(self, validator, value, context):
        assert validator.validate(value, context).passed

    def test_wrong_format(self, validator, context):
        result = validator.validate("2024-01-05", context)

        assert result.error_code == "dateFormatInvalidFormat"
        assert result.message_variables["format"] == "%d.%m.%Y"
        assert result.message == "Date '2024-01-05' doesn`t match format '%d.%m.%Y'"

    @pytest.mark.parametrize("value", ["31.02.2024", "29.02.2023", "garbage", ""])
    def test_invalid_date(self, validator, value, context):
        assert validator.validate(value, context).error_code == "dateFormatInvalidDate"

    def test_iso_format(self, context):
        validator = DateFormatValidator({"params": {"format": "%Y-%m-%d"}})

        assert validator.validate("2024-01-05", context).passed
        assert validator.validate("05.01.2024", context).error_code == "dateFormatInvalidFormat"

    def test_integer_input(self, context):
        validator = DateFormatValidator({"params": {"format": "%Y%m%d"}})

        assert validator.validate(20240105, context).passed

    @pytest.mark.parametrize("params", [{}, {"format": ""}, {"format": None}])
    def test_format_required(self, params):
        with pytest.raises(ConfigurationError):
            DateFormatValidator({"params": params})

    def test_non_scalar(self, validator, non_scalar):
        assert validator.validate(non_scalar).error_code == "dateFormatInvalid"


class TestDateGreaterThan:

    def test_strict(self, context):
        validator = DateGreaterThanValidator({"params": {"min": "2024-01-01"}})

        result = validator.validate("2024-01-02", context)
        assert result.passed
        assert result.expected_value == {"min": "2024-01-01T00:00:00"}

        result = validator.validate("2024-01-01", context)
        assert result.error_code == "notDateGreaterThan"
        assert result.message == "The input is not greater than date '2024-01-01'"

    def test_inclusive(self, context):
        validator = DateGreaterThanValidator({"params": {"min": "2024-01-01", "inclusive": True}})

        assert validator.validate("2024-01-01", context).passed
        result = validator.validate("2023-12-31", context)
        assert result.error_code == "notDateGreaterThanInclusive"
        assert result.message_variables["min"] == "2024-01-01"

    def test_relative_bound_uses_reference_instant(self, context):
        validator = DateGreaterThanValidator({"params": {"min": "today"}})

        assert validator.validate("20.10.2026", context).passed
        assert validator.validate("19.10.2026", context).error_code == "notDateGreaterThan"
        assert validator.validate("20.10.2026", {"now": datetime(2026, 10, 25)}).error_code == "notDateGreaterThan"

    def test_day_first(self, context):
        assert DateGreaterThanValidator(
            {"params": {"min": "2024-01-15"}}
        ).validate("01.02.2024", context).passed
        assert not DateGreaterThanValidator(
            {"params": {"min": "2024-01-15", "dayfirst": False}}
        ).validate("01.02.2024", context).passed

    def test_date_object_bound(self, context):
        # YAML loads unquoted dates as date objects
        validator = DateGreaterThanValidator({"params": {"min": date(2024, 1, 1)}})

        assert validator.params.min == "2024-01-01"
        assert validator.validate("2024-06-01", context).passed

    def test_unparsable_input(self, context):
        result = DateGreaterThanValidator({"params": {"min": "2024-01-01"}}).validate("garbage", context)

        assert result.error_code == "dateGreaterThanInvalidDate"

    @pytest.mark.parametrize("params", [{}, {"min": ""}, {"min": "garbage"}, {"min": "2024-01-01", "max": "2025-01-01"}])
    def test_bad_configuration(self, params):
        with pytest.raises(ConfigurationError):
            DateGreaterThanValidator({"params": params})

    def test_non_scalar(self, non_scalar):
        validator = DateGreaterThanValidator({"params": {"min": "2024-01-01"}})

        assert validator.validate(non_scalar).error_code == "dateGreaterThanInvalid"


class TestDateLessThan:

    def test_strict(self, context):
        validator = DateLessThanValidator({"params": {"max": "tomorrow"}})

        assert validator.validate("19.10.2026", context).passed
        result = validator.validate("20.10.2026", context)
        assert result.error_code == "notDateLessThan"
        assert result.message_variables["max"] == "tomorrow"

    def test_inclusive(self, context):
        validator = DateLessThanValidator({"params": {"max": "tomorrow", "inclusive": True}})

        assert validator.validate("20.10.2026", context).passed
        assert validator.validate("21.10.2026", context).error_code == "notDateLessThanInclusive"

    def test_timestamps_and_offsets(self, context):
        validator = DateLessThanValidator({"params": {"max": "tomorrow"}})

        assert validator.validate("@0", context).passed
        # 21:30 UTC on the 19th
        assert validator.validate("2026-10-19T23:30:00+02:00", context).passed
        assert not validator.validate("2026-10-20T03:00:00+02:00", context).passed

    def test_unparsable_input(self, context):
        result = DateLessThanValidator({"params": {"max": "2024-01-01"}}).validate("garbage", context)

        assert result.error_code == "dateLessThanInvalidDate"

    def test_max_required(self):
        with pytest.raises(ConfigurationError):
            DateLessThanValidator({"params": {"min": "2024-01-01"}})

    def test_non_scalar(self, non_scalar):
        validator = DateLessThanValidator({"params": {"max": "2024-01-01"}})

        assert validator.validate(non_scalar).error_code == "dateLessThanInvalid"
