"""
Lemo Validator.

Input validators for Czech/Slovak identifiers, vehicle identification
numbers, phone numbers, dates, JSON and string rules.

Main components:
- Validators: one class per rule, configured once, validate(value) many times
- ValidationEngine: chains validators over the fields of a record from YAML rules
- Registry: look validators up by their configuration name

Usage:
    from lemo_validator import create_validator

    vin = create_validator("vin", {"params": {"strict": True}})
    result = vin.validate("1M8GDM9AXKP042788")

    if not result.passed:
        print(f"{result.error_code}: {result.message}")
"""

from lemo_validator.core.base import (
    BaseValidator,
    InputKind,
    ValidationResult,
    ValidationSeverity,
    ValidatorParams,
)
from lemo_validator.core.exceptions import ConfigurationError, UnknownValidatorError
from lemo_validator.core.registry import (
    VALIDATOR_REGISTRY,
    create_validator,
    get_validator,
    list_validators,
    register_validator,
)
from lemo_validator.validators.identity_validators import (
    BirthNumberMinorChildValidator,
    BirthNumberValidator,
    IdentificationNumberValidator,
)
from lemo_validator.validators.vehicle_validators import VinValidator
from lemo_validator.validators.date_validators import (
    DateFormatValidator,
    DateGreaterThanValidator,
    DateLessThanValidator,
)
from lemo_validator.validators.field_validators import (
    JsonValidator,
    PhoneNumberValidator,
    StringContainsValidator,
    UniqueValueValidator,
)
from lemo_validator.engine import FormValidationResult, ValidationEngine, ValidationSummary

__version__ = "1.0.0"

__all__ = [
    'BaseValidator',
    'InputKind',
    'ValidationResult',
    'ValidationSeverity',
    'ValidatorParams',
    'ConfigurationError',
    'UnknownValidatorError',
    'VALIDATOR_REGISTRY',
    'create_validator',
    'get_validator',
    'list_validators',
    'register_validator',
    'BirthNumberValidator',
    'BirthNumberMinorChildValidator',
    'IdentificationNumberValidator',
    'VinValidator',
    'DateFormatValidator',
    'DateGreaterThanValidator',
    'DateLessThanValidator',
    'JsonValidator',
    'PhoneNumberValidator',
    'StringContainsValidator',
    'UniqueValueValidator',
    'ValidationEngine',
    'FormValidationResult',
    'ValidationSummary',
]
