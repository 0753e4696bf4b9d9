"""Property tests for the calculator, scoring and tip selection using hypothesis."""

import pytest
from hypothesis import given, strategies as st

from ecotracker.calculator import (
    calculate_carbon_footprint,
    calculate_energy_emissions,
    calculate_food_emissions,
    calculate_travel_emissions,
    round_half_up,
)
from ecotracker.models import CarbonData, EmissionResult, EnergyData, FoodData, TravelData
from ecotracker.scoring import get_eco_score
from ecotracker.tips import get_relevant_tips

_amount = st.floats(min_value=0.0, max_value=1000.0, allow_nan=False, allow_infinity=False)

carbon_data = st.builds(
    CarbonData,
    travel=st.builds(
        TravelData,
        mode=st.sampled_from(["car", "bus", "bike", "walk", "flight"]),
        distance=_amount,
        frequency=st.sampled_from(["daily", "weekly"]),
    ),
    food=st.builds(
        FoodData,
        meat_servings=st.floats(min_value=0, max_value=10, allow_nan=False),
        vegetarian_servings=st.floats(min_value=0, max_value=10, allow_nan=False),
        local_percentage=st.floats(min_value=0, max_value=100, allow_nan=False),
    ),
    energy=st.builds(
        EnergyData,
        electricity_kwh=_amount,
        heating_type=st.sampled_from(["gas", "electric", "none"]),
        heating_kwh=_amount,
        water_liters=_amount,
    ),
)


@given(data=carbon_data)
def test_total_is_sum_of_rounded_components(data):
    """The daily total equals the sum of the rounded components."""
    result = calculate_carbon_footprint(data)
    assert result.total == pytest.approx(
        result.travel + result.food + result.energy, abs=1e-9
    )


@given(data=carbon_data)
def test_annual_derives_from_unrounded_total(data):
    """Annual emissions round the unrounded total times 365."""
    unrounded = (
        calculate_travel_emissions(data.travel)
        + calculate_food_emissions(data.food)
        + calculate_energy_emissions(data.energy)
    )
    result = calculate_carbon_footprint(data)
    assert result.annual == round_half_up(unrounded * 365, 2)


@given(
    electricity=_amount,
    water=_amount,
    first=_amount,
    second=_amount,
)
def test_no_heating_ignores_heating_kwh(electricity, water, first, second):
    """Inputs differing only in heating kWh match when heating is 'none'."""
    base = dict(electricity_kwh=electricity, heating_type="none", water_liters=water)
    assert calculate_energy_emissions(
        EnergyData(heating_kwh=first, **base)
    ) == calculate_energy_emissions(EnergyData(heating_kwh=second, **base))


@given(
    low=st.floats(min_value=-1000, max_value=20000, allow_nan=False),
    delta=st.floats(min_value=0, max_value=20000, allow_nan=False),
)
def test_eco_score_is_non_increasing(low, delta):
    """More emissions never improve the score."""
    score_low = get_eco_score(low)
    score_high = get_eco_score(low + delta)
    assert 0 <= score_high <= score_low <= 100


@given(
    travel=_amount,
    food=_amount,
    energy=_amount,
    top_n=st.integers(min_value=-2, max_value=12),
)
def test_tips_are_bounded_and_unique(travel, food, energy, top_n):
    """Tip selection never exceeds top_n and never repeats a tip."""
    emissions = EmissionResult(
        travel=travel, food=food, energy=energy, total=travel + food + energy, annual=0.0
    )
    tips = get_relevant_tips(emissions, top_n)
    ids = [tip.id for tip in tips]

    assert len(tips) <= max(top_n, 0)
    assert len(ids) == len(set(ids))
