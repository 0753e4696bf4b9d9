"""Footprint report payloads for export and display."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from .calculator import format_emissions, round_half_up
from .factors import CATEGORY_COLORS, GLOBAL_AVERAGES
from .models import EmissionResult
from .scoring import (
    get_comparison,
    get_eco_score,
    get_eco_score_color,
    get_eco_score_label,
)
from .tips import DEFAULT_TOP_N, get_relevant_tips


class CategoryLine(BaseModel):
    """One row of the per-category breakdown."""

    model_config = ConfigDict(frozen=True)

    category: str
    kg_per_day: float
    formatted: str
    color: str


class TipLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    icon: str
    title: str
    description: str
    potential_reduction: int


class BenchmarkBar(BaseModel):
    """Annual emissions in tonnes for the comparison chart."""

    model_config = ConfigDict(frozen=True)

    name: str
    tonnes: float
    color: str


class FootprintReport(BaseModel):
    """Everything the exported footprint report shows."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = "EcoTracker Report"
    generated_on: date
    daily: str = Field(description="Formatted daily total.")
    annual: str = Field(description="Formatted annual total.")
    results: dict[str, float]
    eco_score: int = Field(ge=0, le=100)
    eco_score_label: str
    eco_score_color: str
    comparison_percentage: int
    better_than_average: bool
    comparison_message: str
    breakdown: list[CategoryLine]
    benchmarks: list[BenchmarkBar]
    tips: list[TipLine]


def benchmark_bars(annual_emissions: float, *, color: str) -> list[BenchmarkBar]:
    """Return the You / World Avg / USA Avg / Target bars in tonnes."""

    def tonnes(kg: float) -> float:
        return round_half_up(kg / 1000)

    return [
        BenchmarkBar(name="You", tonnes=tonnes(annual_emissions), color=color),
        BenchmarkBar(name="World Avg", tonnes=tonnes(GLOBAL_AVERAGES["world"]), color="#64748B"),
        BenchmarkBar(name="USA Avg", tonnes=tonnes(GLOBAL_AVERAGES["usa"]), color="#94A3B8"),
        BenchmarkBar(name="Target", tonnes=tonnes(GLOBAL_AVERAGES["target"]), color="#22C55E"),
    ]


def build_report(
    results: EmissionResult,
    *,
    generated_on: date | None = None,
    top_n: int = DEFAULT_TOP_N,
) -> FootprintReport:
    """Assemble the report for ``results``.

    Args:
        results: Output of :func:`~ecotracker.calculator.calculate_carbon_footprint`.
        generated_on: Report date, today when omitted.
        top_n: Number of tips to include.

    Returns:
        A validated :class:`FootprintReport`.
    """

    score = get_eco_score(results.annual)
    color = get_eco_score_color(score)
    comparison = get_comparison(results.annual)

    breakdown = [
        CategoryLine(
            category=category,
            kg_per_day=value,
            formatted=format_emissions(value),
            color=CATEGORY_COLORS[category],
        )
        for category, value in results.by_category().items()
    ]
    tips = [
        TipLine.model_validate(tip.to_dict())
        for tip in get_relevant_tips(results, top_n)
    ]

    return FootprintReport(
        generated_on=generated_on or date.today(),
        daily=format_emissions(results.total),
        annual=format_emissions(results.annual),
        results=results.to_dict(),
        eco_score=score,
        eco_score_label=get_eco_score_label(score),
        eco_score_color=color,
        comparison_percentage=comparison.percentage,
        better_than_average=comparison.better,
        comparison_message=comparison.message,
        breakdown=breakdown,
        benchmarks=benchmark_bars(results.annual, color=color),
        tips=tips,
    )


def render_text(report: FootprintReport) -> str:
    """Render ``report`` as the plain-text layout of the exported document."""

    lines = [
        report.title,
        f"Generated on {report.generated_on.isoformat()}",
        "",
        "Your Carbon Footprint",
        f"Daily: {report.daily} CO2e",
        f"Annual: {report.annual} CO2e",
        f"Eco Score: {report.eco_score}/100 ({report.eco_score_label})",
        "",
        "Breakdown by Category",
    ]
    lines.extend(
        f"{line.category.capitalize()}: {line.formatted}/day" for line in report.breakdown
    )
    lines.extend(["", report.comparison_message])
    if report.tips:
        lines.extend(["", "Tips"])
        lines.extend(
            f"- {tip.title} (up to {tip.potential_reduction}% reduction)"
            for tip in report.tips
        )
    return "\n".join(lines)
