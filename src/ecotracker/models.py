"""Carbon-footprint data models for the ecotracker toolkit.

Inputs are frozen dataclasses so a calculation always works on a snapshot;
state changes produce new instances via :func:`dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Literal

TravelMode = Literal["car", "bus", "bike", "walk", "flight"]
TravelFrequency = Literal["daily", "weekly"]
HeatingType = Literal["gas", "electric", "none"]
Category = Literal["travel", "food", "energy"]

CATEGORIES: tuple[Category, ...] = ("travel", "food", "energy")


@dataclass(slots=True, frozen=True)
class TravelData:
    """Commute description.

    Attributes:
        mode: Means of transport.
        distance: Distance in kilometres per ``frequency`` period.
        frequency: Whether ``distance`` is covered daily or weekly.
    """

    mode: TravelMode = "car"
    distance: float = 20.0
    frequency: TravelFrequency = "daily"


@dataclass(slots=True, frozen=True)
class FoodData:
    """Daily diet description."""

    meat_servings: float = 1.0
    vegetarian_servings: float = 2.0
    local_percentage: float = 50.0


@dataclass(slots=True, frozen=True)
class EnergyData:
    """Daily household energy and water usage."""

    electricity_kwh: float = 10.0
    heating_type: HeatingType = "gas"
    heating_kwh: float = 5.0
    water_liters: float = 150.0


@dataclass(slots=True, frozen=True)
class CarbonData:
    """Complete calculator input."""

    travel: TravelData = field(default_factory=TravelData)
    food: FoodData = field(default_factory=FoodData)
    energy: EnergyData = field(default_factory=EnergyData)


@dataclass(slots=True, frozen=True)
class EmissionResult:
    """Derived emissions breakdown.

    ``travel``, ``food``, ``energy`` and ``total`` are kg CO2e per day,
    ``annual`` is kg CO2e per year. All values carry two decimals.
    """

    travel: float
    food: float
    energy: float
    total: float
    annual: float

    def by_category(self) -> dict[Category, float]:
        """Return the per-day values keyed by category, in category order."""

        return {"travel": self.travel, "food": self.food, "energy": self.energy}

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


DEFAULT_CARBON_DATA = CarbonData()
