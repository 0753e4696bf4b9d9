"""Deterministic carbon-footprint calculations."""

from __future__ import annotations

import math

from .factors import (
    ENERGY_FACTORS,
    FOOD_FACTORS,
    LOCAL_FOOD_MAX_REDUCTION,
    get_travel_factor,
)
from .models import CarbonData, EmissionResult, EnergyData, FoodData, TravelData

__all__ = [
    "calculate_carbon_footprint",
    "calculate_energy_emissions",
    "calculate_food_emissions",
    "calculate_travel_emissions",
    "format_emissions",
    "round_half_up",
]

DAYS_PER_WEEK: int = 7
DAYS_PER_YEAR: int = 365


def round_half_up(value: float, digits: int = 2) -> float:
    """Round ``value`` to ``digits`` decimals with halves rounded toward +inf.

    Args:
        value: Number to round.
        digits: Number of decimal places to keep.

    Returns:
        The rounded value. ``round`` is not used because it rounds halves to
        even.
    """

    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def calculate_travel_emissions(travel: TravelData) -> float:
    """Calculate daily travel emissions in kg CO2e."""

    daily_distance = travel.distance
    if travel.frequency == "weekly":
        daily_distance = travel.distance / DAYS_PER_WEEK
    return daily_distance * get_travel_factor(travel.mode)


def calculate_food_emissions(food: FoodData) -> float:
    """Calculate daily food emissions in kg CO2e.

    Fully local sourcing lowers the total by ``LOCAL_FOOD_MAX_REDUCTION``;
    partial sourcing scales the reduction linearly.
    """

    meat = food.meat_servings * FOOD_FACTORS.meat
    vegetarian = food.vegetarian_servings * FOOD_FACTORS.vegetarian
    local_multiplier = 1 - (food.local_percentage / 100) * LOCAL_FOOD_MAX_REDUCTION
    return (meat + vegetarian) * local_multiplier


def calculate_energy_emissions(energy: EnergyData) -> float:
    """Calculate daily household energy emissions in kg CO2e."""

    electricity = energy.electricity_kwh * ENERGY_FACTORS.electricity

    heating = 0.0
    if energy.heating_type == "gas":
        heating = energy.heating_kwh * ENERGY_FACTORS.gas
    elif energy.heating_type == "electric":
        heating = energy.heating_kwh * ENERGY_FACTORS.electricity

    water = energy.water_liters * ENERGY_FACTORS.water
    return electricity + heating + water


def calculate_carbon_footprint(data: CarbonData) -> EmissionResult:
    """Compute the full emissions breakdown for ``data``.

    Args:
        data: Snapshot of the calculator inputs. Values are not validated.

    Returns:
        A new :class:`EmissionResult`. Components are rounded independently,
        ``total`` is the sum of the rounded components and ``annual`` is
        derived from the unrounded daily total.
    """

    travel = calculate_travel_emissions(data.travel)
    food = calculate_food_emissions(data.food)
    energy = calculate_energy_emissions(data.energy)
    unrounded_total = travel + food + energy

    travel_rounded = round_half_up(travel)
    food_rounded = round_half_up(food)
    energy_rounded = round_half_up(energy)

    return EmissionResult(
        travel=travel_rounded,
        food=food_rounded,
        energy=energy_rounded,
        total=round_half_up(travel_rounded + food_rounded + energy_rounded),
        annual=round_half_up(unrounded_total * DAYS_PER_YEAR),
    )


def format_emissions(kg_co2: float) -> str:
    """Format a kg CO2e value for display, switching to tonnes at 1000 kg."""

    if kg_co2 >= 1000:
        return f"{kg_co2 / 1000:.2f} tons"
    return f"{kg_co2:.1f} kg"
