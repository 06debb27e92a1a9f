"""
Validator registry system.

Provides decorator-based registration for validators and retrieval functions.
This allows for pluggable validators without modifying core code.
"""

from typing import Any, Dict, Optional, Type

from lemo_validator.core.base import BaseValidator
from lemo_validator.core.exceptions import UnknownValidatorError
from lemo_validator.utils.logger import setup_logger

logger = setup_logger(__name__)

# Global registry of all validators
VALIDATOR_REGISTRY: Dict[str, Type[BaseValidator]] = {}


def register_validator(name: str):
    """
    Decorator to register a validator in the global registry.

    Usage:
        @register_validator("vin")
        class VinValidator(BaseValidator):
            def _validate(self, value, context):
                ...

    Args:
        name: Unique name for the validator (used in configuration)

    Returns:
        Decorator function
    """
    def decorator(cls: Type[BaseValidator]):
        if name in VALIDATOR_REGISTRY:
            logger.warning(
                f"Validator '{name}' is already registered. "
                f"Overwriting with {cls.__name__}"
            )

        cls.validator_name = name
        VALIDATOR_REGISTRY[name] = cls
        logger.debug(f"Registered validator: {name} -> {cls.__name__}")
        return cls

    return decorator


def get_validator(name: str) -> Optional[Type[BaseValidator]]:
    """
    Get validator class by name from registry.

    Args:
        name: Validator name

    Returns:
        Validator class or None if not found
    """
    return VALIDATOR_REGISTRY.get(name)


def create_validator(name: str, config: Optional[Dict[str, Any]] = None) -> BaseValidator:
    """
    Instantiate a registered validator.

    Args:
        name: Validator name
        config: Rule configuration (field, params, severity, message)

    Returns:
        Configured validator instance

    Raises:
        UnknownValidatorError: If no validator is registered under name
        ConfigurationError: If the configuration is invalid
    """
    validator_class = get_validator(name)
    if validator_class is None:
        raise UnknownValidatorError(f"Validator '{name}' not found in registry")
    return validator_class(config)


def list_validators() -> Dict[str, str]:
    """
    List all registered validators.

    Returns:
        Dictionary mapping validator names to class names
    """
    return {
        name: cls.__name__
        for name, cls in VALIDATOR_REGISTRY.items()
    }


def is_registered(name: str) -> bool:
    """
    Check if a validator is registered.

    Args:
        name: Validator name

    Returns:
        True if registered, False otherwise
    """
    return name in VALIDATOR_REGISTRY
