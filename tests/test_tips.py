"""Tests for tip selection."""

from ecotracker.calculator import calculate_carbon_footprint
from ecotracker.models import DEFAULT_CARBON_DATA, EmissionResult
from ecotracker.tips import TIPS, get_relevant_tips, rank_categories


def _emissions(travel: float, food: float, energy: float) -> EmissionResult:
    total = travel + food + energy
    return EmissionResult(travel=travel, food=food, energy=energy, total=total, annual=total * 365)


def test_catalogue_is_complete_and_unique():
    """The catalogue holds ten tips with unique ids."""
    ids = [tip.id for tip in TIPS]
    assert len(ids) == 10
    assert len(set(ids)) == 10
    assert {tip.category for tip in TIPS} == {"travel", "food", "energy"}


def test_default_results_favour_food_then_energy():
    """Default inputs rank food, then energy, then travel."""
    results = calculate_carbon_footprint(DEFAULT_CARBON_DATA)
    tips = get_relevant_tips(results)

    assert [tip.id for tip in tips] == ["food-1", "food-2", "energy-1", "energy-2"]


def test_at_most_two_tips_per_category():
    """A large top_n still takes two tips per category."""
    tips = get_relevant_tips(_emissions(1.0, 3.0, 2.0), top_n=10)
    assert [tip.id for tip in tips] == [
        "food-1",
        "food-2",
        "energy-1",
        "energy-2",
        "travel-1",
        "travel-2",
    ]


def test_ties_keep_category_order():
    """Equal emissions keep the travel, food, energy order."""
    emissions = _emissions(0.0, 0.0, 0.0)

    assert rank_categories(emissions) == ["travel", "food", "energy"]
    assert [tip.id for tip in get_relevant_tips(emissions, top_n=3)] == [
        "travel-1",
        "travel-2",
        "food-1",
    ]


def test_partial_tie_is_stable():
    """Food and energy tie above travel and keep their source order."""
    assert rank_categories(_emissions(1.0, 5.0, 5.0)) == ["food", "energy", "travel"]


def test_non_positive_top_n_returns_nothing():
    """Zero or negative top_n selects no tips."""
    emissions = _emissions(1.0, 2.0, 3.0)
    assert get_relevant_tips(emissions, top_n=0) == []
    assert get_relevant_tips(emissions, top_n=-1) == []
