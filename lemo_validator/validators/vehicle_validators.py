"""
Vehicle validators.

Contains:
- VinValidator: Vehicle identification number (17 characters, ISO 3779)
"""

import re
from typing import Any, Dict

from lemo_validator.core.base import BaseValidator, ValidationResult, ValidatorParams, to_string
from lemo_validator.core.checksum import VIN_CHECK_POSITION, vin_check_character
from lemo_validator.core.registry import register_validator

VIN_LENGTH = 17
VIN_ALLOWED_CHARS = re.compile(r'[0-9A-HJ-NPR-Z]+')
CONSECUTIVE_ZEROS = re.compile(r'0{7}')
CONSECUTIVE_ONES = re.compile(r'1{6}')

# Check character is only computed for VINs that look like they carry one
CHECKED_VIN = re.compile(r'.{8}[0-9X]|[1-5]')


class VinParams(ValidatorParams):
    strict: bool = False
    allow_long_sequences: bool = True


@register_validator("vin")
class VinValidator(BaseValidator):
    """
    Validate a vehicle identification number.

    Checks run in order and stop at the first failure: length, character
    set, long digit runs (optional), check character (strict only).

    Configuration:
        params:
          strict: false  # optional, verify the position 9 check character
          allow_long_sequences: true  # optional, false rejects 0000000 / 111111

    Example:
        - validator: vin
          field: vehicle.vin
          params:
            strict: true
    """

    params_model = VinParams
    invalid_type_code = 'vinInvalid'
    messages = {
        'vinInvalid': "Invalid type given. String expected",
        'vinInvalidChars': "The value contains invalid characters",
        'vinInvalidCn': "Invalid control number",
        'vinInvalidConsecutiveOnes': "The value contains consecutive ones",
        'vinInvalidConsecutiveZeros': "The value contains consecutive zeros",
        'vinInvalidLength': "Invalid value length",
    }

    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        value = to_string(value)

        if len(value) != VIN_LENGTH:
            return self._failure('vinInvalidLength', value, length=len(value))

        if not VIN_ALLOWED_CHARS.fullmatch(value):
            return self._failure('vinInvalidChars', value)

        if not self.params.allow_long_sequences:
            if CONSECUTIVE_ZEROS.search(value):
                return self._failure('vinInvalidConsecutiveZeros', value)
            if CONSECUTIVE_ONES.search(value):
                return self._failure('vinInvalidConsecutiveOnes', value)

        if self.params.strict and CHECKED_VIN.match(value):
            try:
                expected = vin_check_character(value)
            except KeyError:
                return self._failure('vinInvalidChars', value)

            actual = value[VIN_CHECK_POSITION]
            if expected != actual:
                return self._failure('vinInvalidCn', value, expected=expected, actual=actual)

        return self._success(value)
