"""
Tests for the validator registry and the shared validator base.
"""

from datetime import date

import pytest

from lemo_validator import (
    BaseValidator,
    ConfigurationError,
    UnknownValidatorError,
    VALIDATOR_REGISTRY,
    ValidationSeverity,
    VinValidator,
    create_validator,
    get_validator,
    list_validators,
    register_validator,
)
from lemo_validator.core.base import InputKind, classify_input, to_string
from lemo_validator.core.registry import is_registered

BUILT_IN = {
    "birth_number_cz": "BirthNumberValidator",
    "birth_number_cz_minor_child": "BirthNumberMinorChildValidator",
    "identification_number_cz": "IdentificationNumberValidator",
    "vin": "VinValidator",
    "date_format": "DateFormatValidator",
    "date_greater_than": "DateGreaterThanValidator",
    "date_less_than": "DateLessThanValidator",
    "phone_number_czsk": "PhoneNumberValidator",
    "json": "JsonValidator",
    "string_contains": "StringContainsValidator",
    "unique_value": "UniqueValueValidator",
}


@pytest.fixture
def scratch_name():
    name = "test_always_fails"
    yield name
    VALIDATOR_REGISTRY.pop(name, None)


def test_built_in_validators_registered():
    registered = list_validators()

    for name, class_name in BUILT_IN.items():
        assert registered[name] == class_name
        assert is_registered(name)


def test_get_validator():
    assert get_validator("vin") is VinValidator
    assert get_validator("missing") is None


def test_create_validator():
    validator = create_validator("vin", {"field": "vin", "params": {"strict": True}})

    assert isinstance(validator, VinValidator)
    assert validator.params.strict is True
    assert validator.name == "vin"


def test_create_unknown_validator():
    with pytest.raises(UnknownValidatorError):
        create_validator("missing")


def test_unknown_validator_is_a_configuration_error():
    assert issubclass(UnknownValidatorError, ConfigurationError)
    assert issubclass(ConfigurationError, ValueError)


def test_register_custom_validator(scratch_name):

    @register_validator(scratch_name)
    class AlwaysFailsValidator(BaseValidator):
        invalid_type_code = "alwaysInvalid"
        messages = {"alwaysFails": "{value} is never valid"}

        def _validate(self, value, context):
            return self._failure("alwaysFails", value)

    assert AlwaysFailsValidator.validator_name == scratch_name

    result = create_validator(scratch_name, {"severity": "warning"}).validate("x")
    assert not result
    assert result.severity == ValidationSeverity.WARNING
    assert result.message == "x is never valid"
    assert result.validator_name == scratch_name


def test_register_overwrites_with_warning(scratch_name, caplog):

    @register_validator(scratch_name)
    class First(BaseValidator):
        def _validate(self, value, context):
            return self._success(value)

    @register_validator(scratch_name)
    class Second(BaseValidator):
        def _validate(self, value, context):
            return self._success(value)

    assert get_validator(scratch_name) is Second
    assert "already registered" in caplog.text


def test_result_to_dict():
    result = create_validator("vin", {"field": "vin"}).validate("short")
    data = result.to_dict()

    assert data["passed"] is False
    assert data["severity"] == "error"
    assert data["error_code"] == "vinInvalidLength"
    assert data["field"] == "vin"
    assert data["message_variables"] == {"value": "short", "length": 5}


def test_unknown_placeholders_are_kept():
    validator = create_validator("vin", {"message": "{value} has {unknown}"})

    assert validator.validate("short").message == "short has {unknown}"


def test_context_now_must_be_a_date():
    validator = create_validator("birth_number_cz")

    with pytest.raises(TypeError):
        validator.validate("7103192745", {"now": "2026-10-19"})


def test_context_now_accepts_date_objects():
    validator = create_validator("birth_number_cz_minor_child")

    assert validator.validate("0810191239", {"now": date(2026, 10, 18)}).passed
    assert not validator.validate("0810191239", {"now": date(2026, 10, 19)}).passed


@pytest.mark.parametrize("value, kind", [
    ("x", InputKind.STRING),
    (1, InputKind.INTEGER),
    (1.5, InputKind.FLOAT),
    (True, InputKind.BOOLEAN),
    (None, None),
    ([1], None),
    ({"a": 1}, None),
])
def test_classify_input(value, kind):
    assert classify_input(value) is kind


@pytest.mark.parametrize("value, expected", [
    ("abc", "abc"),
    (42, "42"),
    (12.0, "12"),
    (1.5, "1.5"),
    (True, "1"),
    (False, ""),
])
def test_to_string(value, expected):
    assert to_string(value) == expected
