"""Emission factor table for the footprint calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class FoodFactors:
    """Food emission factors.

    ``local_multiplier`` and ``imported_multiplier`` are published alongside
    the per-serving factors but the calculator applies the linear
    ``1 - local_pct / 100 * LOCAL_FOOD_MAX_REDUCTION`` discount instead.
    """

    meat: float
    vegetarian: float
    local_multiplier: float
    imported_multiplier: float


@dataclass(frozen=True)
class EnergyFactors:
    """Energy emission factors (kg CO2e per kWh or litre)."""

    electricity: float
    gas: float
    water: float


# kg CO2e per km
TRAVEL_FACTORS: Dict[str, float] = {
    "car": 0.2,
    "bus": 0.1,
    "bike": 0.0,
    "walk": 0.0,
    "flight": 0.25,
}

# kg CO2e per serving
FOOD_FACTORS = FoodFactors(
    meat=10.0,
    vegetarian=2.0,
    local_multiplier=0.8,
    imported_multiplier=1.2,
)

ENERGY_FACTORS = EnergyFactors(electricity=0.5, gas=0.2, water=0.001)

LOCAL_FOOD_MAX_REDUCTION: float = 0.2

# kg CO2e per year
GLOBAL_AVERAGES: Dict[str, float] = {
    "world": 4800.0,
    "usa": 16000.0,
    "eu": 7500.0,
    "target": 2000.0,  # Paris Agreement per-capita target
}

CATEGORY_COLORS: Dict[str, str] = {
    "travel": "#3B82F6",
    "food": "#22C55E",
    "energy": "#F59E0B",
}


def get_travel_factor(mode: str) -> float:
    """Return the per-km factor for ``mode`` (``0.0`` for unknown modes)."""
    return TRAVEL_FACTORS.get(mode, 0.0)
