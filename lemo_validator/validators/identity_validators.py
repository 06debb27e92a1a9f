"""
National identifier validators.

Contains validators for Czech/Slovak personal and organization numbers:
- BirthNumberValidator: Birth number (rodne cislo), 9 or 10 digits
- BirthNumberMinorChildValidator: Birth number of a person under an age limit
- IdentificationNumberValidator: Organization identification number (ICO), 8 digits
"""

import re
from datetime import date
from typing import Any, Dict, NamedTuple, Optional, Pattern, Tuple

from dateutil.relativedelta import relativedelta
from pydantic import Field, field_validator

from lemo_validator.core.base import (
    BaseValidator,
    STRING_OR_INTEGER,
    ValidationResult,
    ValidatorParams,
    to_string,
)
from lemo_validator.core.calendar import LEGACY_CUTOFF_YEAR, decode_month, is_valid_date, resolve_year
from lemo_validator.core.checksum import birth_number_check_digit, identification_number_check_digit
from lemo_validator.core.registry import register_validator
from lemo_validator.utils.logger import setup_logger

logger = setup_logger(__name__)

BIRTH_NUMBER_PATTERN = re.compile(r'\s*(\d\d)(\d\d)(\d\d)(\d\d\d)(\d?)\s*', re.ASCII)
IDENTIFICATION_NUMBER_PATTERN = re.compile(r'\d{8}', re.ASCII)
IDENTIFICATION_NUMBER_LENGTH = 8


class ExclusionParams(ValidatorParams):
    """Regular expressions whose match forces a value to be valid"""
    exclude: Tuple[Pattern[str], ...] = ()

    @field_validator('exclude', mode='before')
    @classmethod
    def compile_patterns(cls, value: Any) -> Tuple[Pattern[str], ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        compiled = []
        for pattern in value:
            try:
                compiled.append(re.compile(pattern))
            except (re.error, TypeError) as e:
                raise ValueError(f"Invalid regular expression pattern `{pattern}` in options: {e}") from e
        return tuple(compiled)


class BirthNumberParams(ExclusionParams):
    verify_legacy: bool = False


class MinorChildParams(ExclusionParams):
    limit: int = Field(default=18, gt=0)


class BirthNumber(NamedTuple):
    """Fields of a parsed birth number"""
    year: int
    raw_month: int
    day: int
    extension: str
    check_digit: Optional[int]
    base: str


def parse_birth_number(value: str) -> Optional[BirthNumber]:
    """
    Split a birth number into its fields.

    Returns None when the value is not 9 or 10 digits
    (surrounding whitespace allowed).
    """
    match = BIRTH_NUMBER_PATTERN.fullmatch(value)
    if not match:
        return None
    year, month, day, extension, check = match.groups()
    return BirthNumber(
        year=int(year),
        raw_month=int(month),
        day=int(day),
        extension=extension,
        check_digit=int(check) if check else None,
        base=year + month + day + extension,
    )


def _matches_exclusion(patterns: Tuple[Pattern[str], ...], value: str) -> bool:
    for pattern in patterns:
        if pattern.search(value):
            logger.debug(f"Value {value!r} matched exclusion pattern {pattern.pattern!r}")
            return True
    return False


class _BirthNumberBase(BaseValidator):
    """Shared parsing, checksum and calendar logic"""

    accepted_inputs = STRING_OR_INTEGER
    not_birth_number_code = 'notBirthNumber'

    def _resolve_birth_date(self, number: BirthNumber, reference_year: int) -> Optional[date]:
        """
        Verify the check digit and calendar date of a ten-digit number.

        Returns:
            The birth date, or None if the number is not valid
        """
        if birth_number_check_digit(number.base) != number.check_digit:
            return None

        year = resolve_year(number.year, True, reference_year)
        month = decode_month(number.raw_month, year)
        if not is_valid_date(year, month, number.day):
            return None
        return date(year, month, number.day)


@register_validator("birth_number_cz")
class BirthNumberValidator(_BirthNumberBase):
    """
    Validate a Czech/Slovak birth number.

    Configuration:
        params:
          exclude: ["0000$", "9999$"]  # optional, values matching are valid
          verify_legacy: false  # optional, only accept 9 digits before 1954

    Example:
        - validator: birth_number_cz
          field: birth_number
          params:
            exclude: ["^000000"]
    """

    params_model = BirthNumberParams
    invalid_type_code = 'birthNumberInvalid'
    messages = {
        'birthNumberInvalid': "Invalid type given. String or integer expected",
        'notBirthNumber': "The value does not appear to be a birth number",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = to_string(value)

        if _matches_exclusion(self.params.exclude, value):
            return self._success(value, metadata={'excluded': True})

        number = parse_birth_number(value)
        if number is None:
            return self._failure(self.not_birth_number_code, value)

        reference_year = self._reference_now(context).year

        if number.check_digit is None:
            if self._check_legacy(number, reference_year):
                return self._success(value, metadata={'legacy': True})
            return self._failure(self.not_birth_number_code, value)

        birth_date = self._resolve_birth_date(number, reference_year)
        if birth_date is None:
            return self._failure(self.not_birth_number_code, value)

        return self._success(value, metadata={'birth_date': birth_date.isoformat()})

    def _check_legacy(self, number: BirthNumber, reference_year: int) -> bool:
        if not self.params.verify_legacy:
            return True
        return resolve_year(number.year, False, reference_year) < LEGACY_CUTOFF_YEAR


@register_validator("birth_number_cz_minor_child")
class BirthNumberMinorChildValidator(_BirthNumberBase):
    """
    Validate that a birth number belongs to a person younger than a limit.

    The person is no longer a minor from the day the limit is reached.

    Configuration:
        params:
          limit: 18  # years, must be positive
          exclude: []  # optional

    Example:
        - validator: birth_number_cz_minor_child
          field: child_birth_number
          params:
            limit: 15
    """

    params_model = MinorChildParams
    invalid_type_code = 'intInvalid'
    messages = {
        'intInvalid': "Invalid type given. String or integer expected",
        'notBirthNumber': "The value does not appear to be a birth number",
        'notMinorChild': "The value does not appear to be a minor child",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = to_string(value)

        if _matches_exclusion(self.params.exclude, value):
            return self._success(value, metadata={'excluded': True})

        number = parse_birth_number(value)
        if number is None:
            return self._failure(self.not_birth_number_code, value)

        now = self._reference_now(context)

        if number.check_digit is None:
            return self._success(value, metadata={'legacy': True})

        birth_date = self._resolve_birth_date(number, now.year)
        if birth_date is None:
            return self._failure(self.not_birth_number_code, value)

        adult_since = birth_date + relativedelta(years=self.params.limit)
        if adult_since <= now.date():
            return self._failure('notMinorChild', value, limit=self.params.limit)

        return self._success(value, metadata={'birth_date': birth_date.isoformat()})


@register_validator("identification_number_cz")
class IdentificationNumberValidator(BaseValidator):
    """
    Validate a Czech organization identification number (ICO).

    Shorter values are left-padded with zeros to 8 digits before the
    exclusion patterns and the checksum are applied.

    Configuration:
        params:
          exclude: ["^0000"]  # optional, matched against the padded value

    Example:
        - validator: identification_number_cz
          field: company_id
    """

    params_model = ExclusionParams
    accepted_inputs = STRING_OR_INTEGER
    invalid_type_code = 'identificationNumberInvalid'
    messages = {
        'identificationNumberInvalid': "Invalid type given. String or integer expected",
        'notIdentificationNumber': "The value does not appear to be an identification number",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = to_string(value).rjust(IDENTIFICATION_NUMBER_LENGTH, '0')

        if not IDENTIFICATION_NUMBER_PATTERN.fullmatch(value):
            return self._failure('notIdentificationNumber', value)

        if _matches_exclusion(self.params.exclude, value):
            return self._success(value, metadata={'excluded': True})

        if identification_number_check_digit(value[:7]) != int(value[7]):
            return self._failure('notIdentificationNumber', value)

        return self._success(value)
