"""EcoTracker - carbon-footprint estimation and job-application tracking."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "CarbonData",
    "CarbonState",
    "EmissionResult",
    "JobTracker",
    "ReminderService",
    "calculate_carbon_footprint",
    "get_comparison",
    "get_eco_score",
    "get_relevant_tips",
]

if TYPE_CHECKING:
    from .calculator import calculate_carbon_footprint
    from .jobs.scheduler import ReminderService
    from .jobs.tracker import JobTracker
    from .models import CarbonData, EmissionResult
    from .scoring import get_comparison, get_eco_score
    from .state import CarbonState
    from .tips import get_relevant_tips


def __getattr__(name: str) -> Any:
    """Lazily import modules so the pure calculator stays dependency-free."""

    module_map = {
        "CarbonData": "models",
        "CarbonState": "state",
        "EmissionResult": "models",
        "JobTracker": "jobs.tracker",
        "ReminderService": "jobs.scheduler",
        "calculate_carbon_footprint": "calculator",
        "get_comparison": "scoring",
        "get_eco_score": "scoring",
        "get_relevant_tips": "tips",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
