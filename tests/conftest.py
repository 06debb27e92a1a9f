"""
Shared fixtures for the validator test suite.
"""

from datetime import datetime

import pytest

# Importing the package registers every built-in validator
import lemo_validator  # noqa: F401


@pytest.fixture
def now() -> datetime:
    """Pinned reference instant for date dependent validators"""
    return datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def context(now):
    return {"now": now}


@pytest.fixture(
    params=[None, [], ["7103192745"], {}, {"value": 1}, object()],
    ids=["none", "empty-list", "list", "empty-dict", "dict", "object"],
)
def non_scalar(request):
    """Inputs that no validator accepts"""
    return request.param
