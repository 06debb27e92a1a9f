"""
Validation core module.

Contains base classes, the registry, configuration loading and the
checksum and calendar helpers shared by the validators.
"""

from lemo_validator.core.base import (
    BaseValidator,
    InputKind,
    ValidationResult,
    ValidationSeverity,
    ValidatorParams,
    classify_input,
    to_string,
)
from lemo_validator.core.exceptions import ConfigurationError, UnknownValidatorError, ValidatorException
from lemo_validator.core.registry import VALIDATOR_REGISTRY, create_validator, get_validator, register_validator

__all__ = [
    'BaseValidator',
    'InputKind',
    'ValidationResult',
    'ValidationSeverity',
    'ValidatorParams',
    'classify_input',
    'to_string',
    'ConfigurationError',
    'UnknownValidatorError',
    'ValidatorException',
    'VALIDATOR_REGISTRY',
    'create_validator',
    'get_validator',
    'register_validator',
]
