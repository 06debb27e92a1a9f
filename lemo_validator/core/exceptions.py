"""
Custom exceptions for the validation library.

Validation failures are never raised; they are returned as
ValidationResult objects. Exceptions here signal broken configuration.
"""


class ValidatorException(Exception):
    """Base exception for the validation library."""
    pass


class ConfigurationError(ValidatorException, ValueError):
    """Exception raised when a validator or rule file is misconfigured."""
    pass


class UnknownValidatorError(ConfigurationError):
    """Exception raised when a validator name is not in the registry."""
    pass
