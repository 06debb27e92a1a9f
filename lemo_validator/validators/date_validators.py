"""
Date validators.

Contains validators for date strings:
- DateFormatValidator: Value must round-trip through a strftime format
- DateGreaterThanValidator: Value must be after a minimum date
- DateLessThanValidator: Value must be before a maximum date

All of them read dates with the permissive parser in core.calendar.
"""

import operator
import re
from datetime import datetime
from typing import Any, Callable, Dict

from pydantic import field_validator

from lemo_validator.core.base import BaseValidator, ValidationResult, ValidatorParams, to_string
from lemo_validator.core.calendar import parse_datetime
from lemo_validator.core.registry import register_validator

LEADING_ZERO = re.compile(r'^0')


def _normalize(value: str) -> str:
    """Drop a leading zero and zero padding after dots ("05.01.2024" -> "5.1.2024")"""
    return LEADING_ZERO.sub('', value, count=1).replace('.0', '.')


def _require_date(value: Any, option: str) -> str:
    if value is None or value == '':
        raise ValueError(f'expects a "{option}" option; none given')
    value = to_string(value) if not isinstance(value, datetime) else value.isoformat()
    if parse_datetime(value) is None:
        raise ValueError(f'"{option}" option {value!r} is not a date')
    return value


class DateFormatParams(ValidatorParams):
    format: str
    dayfirst: bool = True

    @field_validator('format')
    @classmethod
    def format_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError('expects a "format" option; none given')
        return value


class DateMinParams(ValidatorParams):
    min: str
    inclusive: bool = False
    dayfirst: bool = True

    @field_validator('min', mode='before')
    @classmethod
    def min_is_date(cls, value: Any) -> str:
        return _require_date(value, 'min')


class DateMaxParams(ValidatorParams):
    max: str
    inclusive: bool = False
    dayfirst: bool = True

    @field_validator('max', mode='before')
    @classmethod
    def max_is_date(cls, value: Any) -> str:
        return _require_date(value, 'max')


@register_validator("date_format")
class DateFormatValidator(BaseValidator):
    """
    Validate that a date string is written in a given format.

    The value is parsed, formatted back with the strftime pattern and
    compared. Leading zeros are ignored on both sides, so "5.1.2024"
    passes "%d.%m.%Y".

    Configuration:
        params:
          format: "%d.%m.%Y"  # required
          dayfirst: true  # optional

    Example:
        - validator: date_format
          field: issued_on
          params:
            format: "%Y-%m-%d"
    """

    params_model = DateFormatParams
    invalid_type_code = 'dateFormatInvalid'
    messages = {
        'dateFormatInvalid': "Invalid type given. String or integer expected",
        'dateFormatInvalidDate': "Invalid date '{value}' given.",
        'dateFormatInvalidFormat': "Date '{value}' doesn`t match format '{format}'",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = _normalize(to_string(value))

        parsed = parse_datetime(value, self._reference_now(context), self.params.dayfirst)
        if parsed is None:
            return self._failure('dateFormatInvalidDate', value)

        formatted = _normalize(parsed.strftime(self.params.format))
        if value != formatted:
            return self._failure('dateFormatInvalidFormat', value, format=self.params.format)

        return self._success(value)


class _DateBoundValidator(BaseValidator):
    """Compares the parsed value against a bound option"""

    bound_option: str
    strict_code: str
    inclusive_code: str
    invalid_date_code: str
    strict_compare: Callable[[datetime, datetime], bool]
    inclusive_compare: Callable[[datetime, datetime], bool]

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = to_string(value)
        now = self._reference_now(context)
        bound_text = getattr(self.params, self.bound_option)

        parsed = parse_datetime(value, now, self.params.dayfirst)
        if parsed is None:
            return self._failure(self.invalid_date_code, value)

        bound = parse_datetime(bound_text, now, self.params.dayfirst)

        if self.params.inclusive:
            if not type(self).inclusive_compare(parsed, bound):
                return self._failure(self.inclusive_code, value, **{self.bound_option: bound_text})
        elif not type(self).strict_compare(parsed, bound):
            return self._failure(self.strict_code, value, **{self.bound_option: bound_text})

        return self._success(value, expected_value={self.bound_option: bound.isoformat()})


@register_validator("date_greater_than")
class DateGreaterThanValidator(_DateBoundValidator):
    """
    Validate that a date is after a minimum.

    Configuration:
        params:
          min: "2024-01-01"  # required, also accepts "today", "now"...
          inclusive: false  # optional, true allows the minimum itself

    Example:
        - validator: date_greater_than
          field: end_date
          params:
            min: today
            inclusive: true
    """

    params_model = DateMinParams
    invalid_type_code = 'dateGreaterThanInvalid'
    bound_option = 'min'
    strict_code = 'notDateGreaterThan'
    inclusive_code = 'notDateGreaterThanInclusive'
    invalid_date_code = 'dateGreaterThanInvalidDate'
    strict_compare = operator.gt
    inclusive_compare = operator.ge
    messages = {
        'dateGreaterThanInvalid': "Invalid type given. String or integer expected",
        'dateGreaterThanInvalidDate': "Invalid date '{value}' given.",
        'notDateGreaterThan': "The input is not greater than date '{min}'",
        'notDateGreaterThanInclusive': "The input is not greater or equal than date '{min}'",
    }


@register_validator("date_less_than")
class DateLessThanValidator(_DateBoundValidator):
    """
    Validate that a date is before a maximum.

    Configuration:
        params:
          max: "2024-12-31"  # required
          inclusive: false  # optional, true allows the maximum itself

    Example:
        - validator: date_less_than
          field: birth_date
          params:
            max: today
    """

    params_model = DateMaxParams
    invalid_type_code = 'dateLessThanInvalid'
    bound_option = 'max'
    strict_code = 'notDateLessThan'
    inclusive_code = 'notDateLessThanInclusive'
    invalid_date_code = 'dateLessThanInvalidDate'
    strict_compare = operator.lt
    inclusive_compare = operator.le
    messages = {
        'dateLessThanInvalid': "Invalid type given. String or integer expected",
        'dateLessThanInvalidDate': "Invalid date '{value}' given.",
        'notDateLessThan': "The input is not less than date '{max}'",
        'notDateLessThanInclusive': "The input is not less or equal than date '{max}'",
    }
