"""Reduction tip catalogue and selection."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .models import CATEGORIES, Category, EmissionResult

TIPS_PER_CATEGORY: int = 2
DEFAULT_TOP_N: int = 4


@dataclass(frozen=True)
class Tip:
    """Static recommendation entry."""

    id: str
    category: Category
    icon: str
    title: str
    description: str
    potential_reduction: int  # percent

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


TIPS: tuple[Tip, ...] = (
    Tip(
        "travel-1",
        "travel",
        "🚌",
        "Switch to Public Transport",
        "Taking the bus instead of driving can reduce your travel emissions by up to 50%.",
        50,
    ),
    Tip(
        "travel-2",
        "travel",
        "🚲",
        "Bike or Walk Short Distances",
        "For trips under 5km, biking or walking produces zero emissions and improves health.",
        100,
    ),
    Tip(
        "travel-3",
        "travel",
        "✈️",
        "Reduce Air Travel",
        "Consider video calls for meetings and trains for shorter trips. "
        "One flight can equal months of car emissions.",
        80,
    ),
    Tip(
        "food-1",
        "food",
        "🥗",
        "Eat More Plant-Based Meals",
        "Reducing meat consumption by just one meal per day can cut your food emissions by 15%.",
        15,
    ),
    Tip(
        "food-2",
        "food",
        "🌾",
        "Choose Local & Seasonal",
        "Buying local produce reduces transportation emissions and supports local farmers.",
        20,
    ),
    Tip(
        "food-3",
        "food",
        "🥩",
        "Reduce Red Meat",
        "Beef has the highest carbon footprint. Try chicken, fish, or plant-based alternatives.",
        30,
    ),
    Tip(
        "energy-1",
        "energy",
        "💡",
        "Switch to LED Bulbs",
        "LED bulbs use 75% less energy and last 25 times longer than incandescent.",
        10,
    ),
    Tip(
        "energy-2",
        "energy",
        "🌡️",
        "Adjust Thermostat",
        "Lowering heating by 1°C can reduce energy use by up to 10%.",
        10,
    ),
    Tip(
        "energy-3",
        "energy",
        "🔌",
        "Unplug Unused Devices",
        "Standby power can account for up to 10% of your electricity bill.",
        5,
    ),
    Tip(
        "energy-4",
        "energy",
        "🚿",
        "Take Shorter Showers",
        "Reducing shower time by 2 minutes can save thousands of liters of water per year.",
        5,
    ),
)


def rank_categories(emissions: EmissionResult) -> list[Category]:
    """Return categories ordered by emission, highest first.

    Equal values keep the ``travel``, ``food``, ``energy`` order.
    """

    values = emissions.by_category()
    return sorted(CATEGORIES, key=lambda category: values[category], reverse=True)


def get_relevant_tips(emissions: EmissionResult, top_n: int = DEFAULT_TOP_N) -> list[Tip]:
    """Select tips for the highest-emitting categories.

    Args:
        emissions: Breakdown used to rank the categories.
        top_n: Maximum number of tips to return.

    Returns:
        Up to ``top_n`` distinct tips, at most ``TIPS_PER_CATEGORY`` per
        category, in ranked category order and catalogue order within a
        category.
    """

    selected: list[Tip] = []
    used_ids: set[str] = set()

    for category in rank_categories(emissions):
        candidates = [
            tip for tip in TIPS if tip.category == category and tip.id not in used_ids
        ]
        for tip in candidates[:TIPS_PER_CATEGORY]:
            if len(selected) >= top_n:
                return selected
            selected.append(tip)
            used_ids.add(tip.id)

    return selected
