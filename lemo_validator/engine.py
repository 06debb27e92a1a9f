"""
ValidationEngine - Orchestrator for validating records field by field.

Loads rules from configuration, builds every validator up front and
chains them over the fields of a record.
"""

from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path

from lemo_validator.core.base import BaseValidator, ValidationResult, ValidationSeverity
from lemo_validator.core.registry import VALIDATOR_REGISTRY, get_validator
from lemo_validator.core.config_loader import ValidationConfigLoader
from lemo_validator.utils.logger import setup_logger, log_error

# Import validators to trigger registration
from lemo_validator import validators  # noqa: F401

logger = setup_logger(__name__)


@dataclass
class ValidationSummary:
    """Summary of validation results for a record"""
    form_type: str
    passed: bool
    score: float  # 0.0 to 1.0
    total_checks: int
    passed_checks: int
    failed_checks: int
    warning_checks: int
    error_checks: int
    critical_checks: int
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data


@dataclass
class FormValidationResult:
    """Complete validation result for a record"""
    form_type: str
    passed: bool
    score: float
    results: List[ValidationResult]
    summary: ValidationSummary
    metadata: Dict[str, Any]
    timestamp: datetime

    @property
    def failures(self) -> List[ValidationResult]:
        """Failed checks in execution order"""
        return [r for r in self.results if not r.passed]

    def errors_by_field(self) -> Dict[str, List[str]]:
        """
        Group failed error codes by field.

        Returns:
            {"field": ["errorCode", ...]}
        """
        grouped: Dict[str, List[str]] = {}
        for result in self.failures:
            grouped.setdefault(result.field or '', []).append(result.error_code)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'form_type': self.form_type,
            'passed': self.passed,
            'score': self.score,
            'results': [r.to_dict() for r in self.results],
            'summary': self.summary.to_dict(),
            'metadata': self.metadata,
            'timestamp': self.timestamp.isoformat()
        }


class ValidationEngine:
    """
    Rule-driven validation engine.

    Orchestrates validation by:
    1. Loading rules from configuration
    2. Instantiating every validator once (bad configuration fails here)
    3. Executing validation checks per field
    4. Aggregating results

    Usage:
        engine = ValidationEngine("rules.yaml")
        result = engine.validate("customer", {"birth_number": "7103192745"})

        if not result.passed:
            for failure in result.failures:
                print(f"{failure.field}: {failure.message}")
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize validation engine.

        Args:
            config_path: Path to validation rules YAML file
                        If None, uses default location

        Raises:
            ConfigurationError: If any rule has invalid validator options
        """
        self.config_loader = ValidationConfigLoader(config_path)
        self.config = self.config_loader.load()
        self.global_settings = self.config_loader.get_global_settings()
        self._validators = self._build_validators()

        logger.info(
            f"ValidationEngine initialized with {len(VALIDATOR_REGISTRY)} validators "
            f"and {len(self._validators)} forms"
        )

    def _build_validators(self) -> Dict[str, List[BaseValidator]]:
        """
        Instantiate the validators of every form.

        Rules without a known validator or a field are skipped with a warning.
        """
        built: Dict[str, List[BaseValidator]] = {}

        for form_type in self.config_loader.get_form_types():
            form_validators: List[BaseValidator] = []

            for rule_config in self.config_loader.get_form_rules(form_type):
                validator_name = rule_config.get('validator')

                if not validator_name:
                    logger.warning(f"Rule missing 'validator' field: {rule_config}")
                    continue

                if not rule_config.get('field'):
                    logger.warning(f"Rule for '{validator_name}' in '{form_type}' has no 'field'")
                    continue

                # Get validator class from registry
                validator_class = get_validator(validator_name)

                if not validator_class:
                    logger.warning(f"Validator '{validator_name}' not found in registry")
                    continue

                form_validators.append(validator_class(rule_config))

            built[form_type] = form_validators

        return built

    def validate(
        self,
        form_type: str,
        data: Dict[str, Any],
        context: Optional[Dict[str, Any]] = None
    ) -> FormValidationResult:
        """
        Validate a record against configured rules.

        Args:
            form_type: Form identifier (e.g., "customer", "vehicle")
            data: Record to validate
                   Format: {"field1": "value", "nested": {"field2": 123}, ...}
            context: Optional call context passed to every validator
                      Format: {"now": datetime(...)}

        Returns:
            FormValidationResult with all validation results

        Example:
            result = engine.validate(
                "vehicle",
                {"vin": "1M8GDM9AXKP042788"},
                {"now": datetime(2024, 1, 1)}
            )
        """
        logger.info(f"Validating form type: {form_type}")

        form_validators = self._validators.get(form_type, [])

        if not form_validators:
            logger.info(f"No validation rules defined for {form_type}")
            return self._create_empty_result(form_type)

        results: List[ValidationResult] = []
        stop_on_error = self.global_settings.get('stop_on_first_error', False)
        skip_missing = self.global_settings.get('skip_missing', True)

        for validator in form_validators:
            value = self._get_field_value(data, validator.field)

            if value is None and skip_missing:
                logger.debug(f"Skipping '{validator.name}': field '{validator.field}' is missing")
                continue

            try:
                result = validator.validate(value, context)
            except Exception as e:
                log_error(logger, e, f"Validator '{validator.name}' failed")
                result = ValidationResult(
                    passed=False,
                    validator_name=validator.name,
                    severity=ValidationSeverity.ERROR,
                    message=f"Validator execution failed: {str(e)}",
                    error_code='validatorExecutionFailed',
                    field=validator.field,
                    actual_value=value
                )

            results.append(result)

            # Stop on first error if configured
            if stop_on_error and not result.passed and result.severity in (
                ValidationSeverity.ERROR, ValidationSeverity.CRITICAL
            ):
                logger.info(f"Stopping validation on first error: {result.message}")
                break

        return self._generate_result(form_type, results)

    def _get_field_value(self, data: Dict[str, Any], field_path: str) -> Any:
        """
        Get field value from data using dot notation.

        Supports nested fields: "address.city", "items.0.name"

        Args:
            data: Data dictionary
            field_path: Field path in dot notation

        Returns:
            Field value or None if not found
        """
        value: Any = data
        for key in field_path.split('.'):
            if isinstance(value, dict):
                value = value.get(key)
            elif isinstance(value, list) and key.isdigit() and int(key) < len(value):
                value = value[int(key)]
            else:
                return None

            if value is None:
                return None

        return value

    def _create_empty_result(self, form_type: str) -> FormValidationResult:
        """
        Create empty result when no rules are defined.

        Args:
            form_type: Form type

        Returns:
            FormValidationResult with passed=True
        """
        timestamp = datetime.now(timezone.utc)
        summary = ValidationSummary(
            form_type=form_type,
            passed=True,
            score=1.0,
            total_checks=0,
            passed_checks=0,
            failed_checks=0,
            warning_checks=0,
            error_checks=0,
            critical_checks=0,
            timestamp=timestamp
        )

        return FormValidationResult(
            form_type=form_type,
            passed=True,
            score=1.0,
            results=[],
            summary=summary,
            metadata={'no_rules': True},
            timestamp=timestamp
        )

    def _generate_result(
        self,
        form_type: str,
        results: List[ValidationResult]
    ) -> FormValidationResult:
        """
        Generate final validation result with summary.

        Args:
            form_type: Form type
            results: List of validation results

        Returns:
            FormValidationResult
        """
        timestamp = datetime.now(timezone.utc)

        # Count results by severity
        total = len(results)
        passed = sum(1 for r in results if r.passed)
        failed = total - passed

        def count_failed(severity: ValidationSeverity) -> int:
            return sum(1 for r in results if not r.passed and r.severity == severity)

        warnings = count_failed(ValidationSeverity.WARNING)
        errors = count_failed(ValidationSeverity.ERROR)
        critical = count_failed(ValidationSeverity.CRITICAL)

        # Overall pass/fail (only ERROR and CRITICAL fail, WARNING and INFO pass)
        overall_passed = errors == 0 and critical == 0

        # Calculate score (percentage of passed checks)
        score = passed / total if total > 0 else 1.0

        summary = ValidationSummary(
            form_type=form_type,
            passed=overall_passed,
            score=score,
            total_checks=total,
            passed_checks=passed,
            failed_checks=failed,
            warning_checks=warnings,
            error_checks=errors,
            critical_checks=critical,
            timestamp=timestamp
        )

        metadata = {
            'rules_count': len(self._validators.get(form_type, [])),
            'checked_fields': sorted({r.field for r in results if r.field})
        }

        return FormValidationResult(
            form_type=form_type,
            passed=overall_passed,
            score=score,
            results=results,
            summary=summary,
            metadata=metadata,
            timestamp=timestamp
        )

    def reload_config(self) -> None:
        """Reload validation configuration from file and rebuild validators"""
        logger.info("Reloading validation configuration")
        self.config = self.config_loader.reload()
        self.global_settings = self.config_loader.get_global_settings()
        self._validators = self._build_validators()

    def get_available_validators(self) -> List[str]:
        """
        Get list of all registered validators.

        Returns:
            List of validator names
        """
        return list(VALIDATOR_REGISTRY.keys())

    def get_form_rules(self, form_type: str) -> List[Dict[str, Any]]:
        """
        Get validation rules for a form.

        Args:
            form_type: Form type

        Returns:
            List of rule configurations
        """
        return self.config_loader.get_form_rules(form_type)
