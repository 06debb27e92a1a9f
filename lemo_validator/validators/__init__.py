"""
Validators module.

Contains all built-in validators organized by category:
- identity_validators: Birth numbers and organization identification numbers
- vehicle_validators: Vehicle identification numbers
- date_validators: Date format and date range validators
- field_validators: Phone numbers, JSON, character classes, uniqueness

All validators are automatically registered via decorators.
"""

# Import all validators to trigger registration
from lemo_validator.validators import identity_validators
from lemo_validator.validators import vehicle_validators
from lemo_validator.validators import date_validators
from lemo_validator.validators import field_validators

__all__ = ['identity_validators', 'vehicle_validators', 'date_validators', 'field_validators']
