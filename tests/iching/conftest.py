"""
Shared fixtures for I Ching tests.
"""

import pytest

from modules.iching.core.data_models import OracleInterpretation
from tests.iching.factories import SCENARIO_TOSSES, cast_scenario, make_interpretation_dict


@pytest.fixture
def scenario_tosses():
    return list(SCENARIO_TOSSES)


@pytest.fixture
def interpretation_dict():
    return make_interpretation_dict(transformed_positions=(6, 5, 4, 3, 2, 1))


@pytest.fixture
def interpretation(interpretation_dict):
    return OracleInterpretation.from_dict(interpretation_dict)


@pytest.fixture
def interpretation_without_transform():
    return OracleInterpretation.from_dict(make_interpretation_dict())


@pytest.fixture
def cast_lines():
    """Six CastLines from the scenario tosses."""
    return cast_scenario().cast_lines
