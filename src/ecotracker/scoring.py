"""Eco score and world-average comparison helpers."""

from __future__ import annotations

from dataclasses import dataclass

from .calculator import round_half_up
from .factors import GLOBAL_AVERAGES

WORLD_AVERAGE_KG: float = GLOBAL_AVERAGES["world"]
TARGET_KG: float = GLOBAL_AVERAGES["target"]
ZERO_SCORE_KG: float = WORLD_AVERAGE_KG * 2


@dataclass(slots=True, frozen=True)
class Comparison:
    """Annual footprint relative to the world average."""

    percentage: int
    better: bool
    message: str


def get_comparison(annual_emissions: float) -> Comparison:
    """Compare annual emissions in kg CO2e against the world average."""

    percentage = int(round_half_up(annual_emissions / WORLD_AVERAGE_KG * 100, 0))
    better = annual_emissions < WORLD_AVERAGE_KG

    if better:
        if percentage < 50:
            message = "Excellent! Your footprint is less than half the global average."
        elif percentage < 80:
            message = "Great job! Your footprint is below the global average."
        else:
            message = "Good! Your footprint is slightly below the global average."
    elif percentage > 200:
        message = (
            "Your footprint is more than double the global average. "
            "Consider making some changes."
        )
    elif percentage > 150:
        message = "Your footprint is significantly above the global average."
    else:
        message = "Your footprint is slightly above the global average."

    return Comparison(percentage=percentage, better=better, message=message)


def get_eco_score(annual_emissions: float) -> int:
    """Map annual emissions onto a 0-100 score.

    At or under the target scores 100, at or over twice the world average
    scores 0, and everything in between is interpolated linearly.
    """

    if annual_emissions <= TARGET_KG:
        return 100
    if annual_emissions >= ZERO_SCORE_KG:
        return 0

    score = 100 - (annual_emissions - TARGET_KG) / (ZERO_SCORE_KG - TARGET_KG) * 100
    return int(max(0.0, min(100.0, round_half_up(score, 0))))


_SCORE_BANDS: tuple[tuple[int, str, str], ...] = (
    (80, "#22C55E", "Excellent"),
    (60, "#84CC16", "Good"),
    (40, "#EAB308", "Average"),
    (20, "#F97316", "Below Average"),
)
_LOWEST_BAND: tuple[str, str] = ("#EF4444", "Needs Improvement")


def _band(score: float) -> tuple[str, str]:
    for threshold, color, label in _SCORE_BANDS:
        if score >= threshold:
            return color, label
    return _LOWEST_BAND


def get_eco_score_color(score: float) -> str:
    """Return the hex colour associated with ``score``."""

    return _band(score)[0]


def get_eco_score_label(score: float) -> str:
    """Return the human-readable label associated with ``score``."""

    return _band(score)[1]
