"""
Field validators module.

Contains general purpose validators for single field values:
- PhoneNumberValidator: Czech/Slovak phone numbers
- JsonValidator: Syntactically valid JSON
- StringContainsValidator: Character class requirements (password style rules)
- UniqueValueValidator: Value must not already exist in a reference list
"""

import json
import re
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

from pydantic import Field, StrictInt, field_validator

from lemo_validator.core.base import (
    BaseValidator,
    InputKind,
    ValidationResult,
    ValidatorParams,
    classify_input,
    to_string,
)
from lemo_validator.core.registry import register_validator

PHONE_PATTERNS: Dict[str, Pattern[str]] = {
    'cs-CZ': re.compile(r'(\+?420)? ?[1-9][0-9]{2} ?[0-9]{3} ?[0-9]{3}'),
    'sk-SK': re.compile(r'(\+?421)? ?[1-9][0-9]{2} ?[0-9]{3} ?[0-9]{3}'),
}

ASCII_LIMIT = 128

# Decimal or exponent notation only; no underscores, nan or inf
NUMERIC_STRING = re.compile(r'\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*', re.ASCII)


class PhoneNumberParams(ValidatorParams):
    locale: Optional[Union[str, Tuple[str, ...]]] = None
    strict: bool = False

    @field_validator('locale', mode='before')
    @classmethod
    def locale_as_tuple(cls, value: Any) -> Any:
        if isinstance(value, list):
            return tuple(value)
        return value


@register_validator("phone_number_czsk")
class PhoneNumberValidator(BaseValidator):
    """
    Validate a Czech or Slovak phone number.

    Accepts nine digits, optionally grouped by spaces and prefixed with
    the country code (420 / 421, with or without "+").

    Configuration:
        params:
          locale: ["cs-CZ", "sk-SK"]  # optional, string or list; default all
          strict: false  # optional, require the international "+" prefix

    Example:
        - validator: phone_number_czsk
          field: contact.phone
          params:
            locale: cs-CZ
    """

    params_model = PhoneNumberParams
    accepted_inputs = frozenset({InputKind.STRING})
    invalid_type_code = 'phoneNumberInvalid'
    messages = {
        'phoneNumberInvalid': "Invalid type given. String expected",
        'phoneNumberNoMatch': "The input does not match a phone number format",
        'phoneNumberNoMatchInternational': "The input does not match an international phone number format",
        'phoneNumberUnsupported': "The country provided is currently unsupported",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        if self.params.strict and not value.startswith('+'):
            return self._failure('phoneNumberNoMatchInternational', value)

        locale = self.params.locale
        if locale is None:
            locales = tuple(PHONE_PATTERNS)
        elif isinstance(locale, str):
            locales = (locale,)
        else:
            locales = locale

        for loc in locales:
            pattern = PHONE_PATTERNS.get(loc)
            if pattern is None:
                return self._failure('phoneNumberUnsupported', value, locale=loc)
            if pattern.fullmatch(value):
                return self._success(value, metadata={'locale': loc})

        return self._failure('phoneNumberNoMatch', value)


def _is_empty(value: Any) -> bool:
    """Empty in the loose sense: None, "", "0", 0, False and empty containers"""
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    if isinstance(value, str):
        return value in ('', '0')
    return False


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Syntax error, {name} is not a valid JSON literal")


@register_validator("json")
class JsonValidator(BaseValidator):
    """
    Validate that a value is syntactically valid JSON.

    Empty values pass; combine with a required check if needed.

    Example:
        - validator: json
          field: payload
    """

    invalid_type_code = 'jsonInvalid'
    messages = {
        'jsonInvalid': "Json is invalid: {reason}",
    }

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        if _is_empty(value):
            return self._success(value)
        if classify_input(value) is None:
            return self._failure('jsonInvalid', value, reason="Invalid type given. Scalar expected")
        return self._validate(value, context or {})

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        try:
            json.loads(to_string(value), parse_constant=_reject_constant)
        except ValueError as e:
            reason = str(e) or 'An Unexpected Error Occurred'
            return self._failure('jsonInvalid', value, reason=reason)
        except RecursionError:
            return self._failure('jsonInvalid', value, reason='Maximum stack depth exceeded')
        return self._success(value)


class StringContainsParams(ValidatorParams):
    characters: Optional[Union[StrictInt, str]] = None
    require_alpha: bool = False
    require_capital_letter: bool = False
    require_numeric: bool = False
    require_small_letter: bool = False

    @field_validator('characters')
    @classmethod
    def characters_in_ascii_range(cls, value: Optional[Union[int, str]]) -> Optional[Union[int, str]]:
        if isinstance(value, int) and not 0 <= value <= ASCII_LIMIT:
            raise ValueError(f'"characters" must be between 0 and {ASCII_LIMIT}, got {value}')
        return value


@register_validator("string_contains")
class StringContainsValidator(BaseValidator):
    """
    Validate which character classes a string contains.

    "characters" restricts the whole value to an allowlist: either a
    string of allowed characters or an integer N allowing ASCII code
    points below N. The require_* flags each demand one character of
    their class. Checks stop at the first failure.

    Configuration:
        params:
          characters: 128  # optional, allowlist string or ASCII limit
          require_alpha: false
          require_capital_letter: false
          require_numeric: false
          require_small_letter: false

    Example:
        - validator: string_contains
          field: password
          params:
            characters: 128
            require_capital_letter: true
            require_numeric: true
    """

    params_model = StringContainsParams
    invalid_type_code = 'stringContainsInvalid'
    messages = {
        'stringContainsInvalid': "Invalid type given. Scalar expected",
        'noAlpha': "Value must contain at least one alphabetic character",
        'noValidCharacters': "The input contains an invalid characters",
        'noCapitalLetter': "Value must contain at least one capital letter",
        'noNumeric': "Value must contain at least one numeric character",
        'noSmallLetter': "Value must contain at least one small letter",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = to_string(value)
        params = self.params

        if params.require_alpha and not re.search(r'[a-zA-Z]', value):
            return self._failure('noAlpha', value)

        if params.characters is not None:
            invalid = self._invalid_characters(value, params.characters)
            if invalid:
                return self._failure('noValidCharacters', value, invalid=''.join(invalid))

        if params.require_capital_letter and not re.search(r'[A-Z]', value):
            return self._failure('noCapitalLetter', value)

        if params.require_numeric and not re.search(r'[0-9]', value):
            return self._failure('noNumeric', value)

        if params.require_small_letter and not re.search(r'[a-z]', value):
            return self._failure('noSmallLetter', value)

        return self._success(value)

    @staticmethod
    def _invalid_characters(value: str, characters: Union[int, str]) -> List[str]:
        """Characters of value outside the allowlist, in order of first appearance"""
        if isinstance(characters, int):
            invalid = (char for char in value if ord(char) >= characters)
        else:
            invalid = (char for char in value if char not in characters)
        return list(dict.fromkeys(invalid))


class UniqueValueParams(ValidatorParams):
    haystack: Tuple[Union[bool, int, float, str], ...] = Field(min_length=1)
    case_sensitive: bool = False
    strict: bool = False


def _is_numeric(value: Any) -> bool:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return True
    if isinstance(value, str):
        return NUMERIC_STRING.fullmatch(value) is not None
    return False


def _loose_equals(left: Any, right: Any) -> bool:
    """
    Equality across scalar types.

    Numbers and numeric strings compare by value ("1" == 1.0,
    "1e3" == "1000"), a bool compares by emptiness ("0" == False),
    anything else by its string form.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return _is_empty(left) == _is_empty(right)
    if _is_numeric(left) and _is_numeric(right):
        if isinstance(left, str) or isinstance(right, str):
            return float(left) == float(right)
        return left == right
    if type(left) is type(right):
        return left == right
    return to_string(left) == to_string(right)


@register_validator("unique_value")
class UniqueValueValidator(BaseValidator):
    """
    Validate that a value does not occur in a reference list.

    Configuration:
        params:
          haystack: ["taken", "values"]  # required, non-empty
          case_sensitive: false  # optional
          strict: false  # optional, true also compares types

    Example:
        - validator: unique_value
          field: username
          params:
            haystack: ["admin", "root"]
    """

    params_model = UniqueValueParams
    invalid_type_code = 'valueInvalid'
    messages = {
        'valueInvalid': "Invalid type given. Boolean, float, integer, or string expected",
        'valueNotUnique': "Value must be unique",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        needle = self._fold(value)
        equals = self._strict_equals if self.params.strict else _loose_equals

        for candidate in self.params.haystack:
            if equals(needle, self._fold(candidate)):
                return self._failure('valueNotUnique', value)

        return self._success(value)

    def _fold(self, value: Any) -> Any:
        if not self.params.case_sensitive and isinstance(value, str):
            return value.lower()
        return value

    @staticmethod
    def _strict_equals(left: Any, right: Any) -> bool:
        return type(left) is type(right) and left == right
