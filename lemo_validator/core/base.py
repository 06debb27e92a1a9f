"""
Base classes and data models for the validation library.

This module provides the foundation for all validators:
- BaseValidator: Abstract base class for all validators
- ValidatorParams: Frozen parameter model every validator extends
- ValidationResult: Standard result format
- ValidationSeverity: Severity levels
- InputKind: The scalar input kinds a validator may accept
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dataclass_field, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from lemo_validator.core.exceptions import ConfigurationError


class ValidationSeverity(str, Enum):
    """Severity levels for validation results"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class InputKind(str, Enum):
    """Scalar kinds accepted at the validator boundary"""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


SCALAR_KINDS: FrozenSet[InputKind] = frozenset(InputKind)
STRING_OR_INTEGER: FrozenSet[InputKind] = frozenset({InputKind.STRING, InputKind.INTEGER})


def classify_input(value: Any) -> Optional[InputKind]:
    """
    Classify a raw input value.

    Returns None for anything that is not a scalar (None, lists, dicts,
    arbitrary objects). bool is checked before int because it subclasses it.
    """
    if isinstance(value, bool):
        return InputKind.BOOLEAN
    if isinstance(value, int):
        return InputKind.INTEGER
    if isinstance(value, float):
        return InputKind.FLOAT
    if isinstance(value, str):
        return InputKind.STRING
    return None


def to_string(value: Any) -> str:
    """
    Coerce a scalar to its canonical string form.

    Example:
        to_string(True)   # "1"
        to_string(False)  # ""
        to_string(12.0)   # "12"
    """
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class _MessageVariables(dict):
    """Leaves unknown placeholders untouched when formatting messages"""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


@dataclass
class ValidationResult:
    """
    Standard validation result format.

    All validators return this format. A failed result always carries
    a stable error_code; a passed result never does.
    """
    # Core fields
    passed: bool
    validator_name: str
    severity: ValidationSeverity
    message: str = ""
    error_code: Optional[str] = None

    # Optional context
    field: Optional[str] = None
    message_variables: Dict[str, Any] = dataclass_field(default_factory=dict)

    # Value information
    actual_value: Any = None
    expected_value: Any = None

    # Metadata
    metadata: Dict[str, Any] = dataclass_field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.passed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        data = asdict(self)
        # Convert enum to string
        data['severity'] = self.severity.value
        return data


class ValidatorParams(BaseModel):
    """
    Base parameter model.

    Parameters are frozen once built and unknown options are rejected,
    so a validator's configuration can never change between calls.
    """
    model_config = ConfigDict(frozen=True, extra='forbid')


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    All validators inherit from this class and implement _validate().
    The public validate() gates the input kind first, so _validate()
    only ever sees accepted scalars.

    Example:
        @register_validator("my_custom_validator")
        class MyValidator(BaseValidator):
            invalid_type_code = "myInvalid"

            def _validate(self, value, context):
                return self._success(value)
    """

    params_model: Type[ValidatorParams] = ValidatorParams
    accepted_inputs: FrozenSet[InputKind] = SCALAR_KINDS
    invalid_type_code: str = "invalid"
    messages: Mapping[str, str] = {}
    validator_name: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize validator with configuration.

        Args:
            config: Rule configuration dictionary from YAML or code.
                    Keys: field, params, severity, message (all optional)

        Raises:
            ConfigurationError: If severity or params are invalid
        """
        config = dict(config or {})
        self.config = config

        try:
            self.severity = ValidationSeverity(config.get('severity', 'error'))
        except ValueError as e:
            raise ConfigurationError(
                f"{type(self).__name__} got unknown severity {config.get('severity')!r}"
            ) from e

        self.field = config.get('field')
        self.message_template = config.get('message') or ''
        self.params = self._load_params(config.get('params') or {})

    @property
    def name(self) -> str:
        return self.validator_name or type(self).__name__.replace('Validator', '').lower()

    def _load_params(self, params: Any) -> ValidatorParams:
        """Build the frozen params model, turning pydantic errors into ConfigurationError"""
        try:
            return self.params_model.model_validate(params)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid params for {type(self).__name__}: {e}") from e

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        """
        Execute validation logic.

        Args:
            value: Scalar input to validate
            context: Optional call context. "now" pins the reference instant
                     used by date-dependent validators.

        Returns:
            ValidationResult object (never raises for any input value)

        Raises:
            TypeError: If context["now"] is given but is not a date or datetime.
                       A malformed context is a caller bug, not an input failure.
        """
        if classify_input(value) not in self.accepted_inputs:
            return self._failure(self.invalid_type_code, value)
        return self._validate(value, context or {})

    @abstractmethod
    def _validate(self, value: Any, context: Dict[str, Any]) -> ValidationResult:
        """Validate an input that already passed the kind gate"""

    def _reference_now(self, context: Dict[str, Any]) -> datetime:
        """Return the reference instant from context, or the current local time"""
        now = context.get('now')
        if now is None:
            return datetime.now()
        if isinstance(now, datetime):
            return now
        if isinstance(now, date):
            return datetime(now.year, now.month, now.day)
        raise TypeError(f"context['now'] must be a date or datetime, got {type(now).__name__}")

    def _success(self, value: Any = None, **kwargs: Any) -> ValidationResult:
        return self._create_result(passed=True, actual_value=value, **kwargs)

    def _failure(self, code: str, value: Any = None, **variables: Any) -> ValidationResult:
        """
        Helper to create a failed ValidationResult.

        Args:
            code: Stable error code
            value: The input that failed
            **variables: Message variables (also returned to the caller)

        Returns:
            ValidationResult object
        """
        variables = {'value': value, **variables}
        template = self.message_template or self.messages.get(code, code)
        return self._create_result(
            passed=False,
            message=template.format_map(_MessageVariables(variables)),
            error_code=code,
            message_variables=variables,
            actual_value=value,
        )

    def _create_result(self, passed: bool, **kwargs: Any) -> ValidationResult:
        """Helper to create ValidationResult with common fields"""
        return ValidationResult(
            passed=passed,
            validator_name=self.name,
            severity=self.severity,
            field=self.field,
            **kwargs
        )
