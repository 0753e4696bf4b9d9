"""Job application tracker with follow-up reminders."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "JobApplication",
    "JobDraft",
    "JobStats",
    "JobTracker",
    "JobValidationError",
    "ReminderScheduler",
    "ReminderService",
    "compute_stats",
    "filter_jobs",
    "overdue_reminders",
    "upcoming_reminders",
    "validate_job",
]

if TYPE_CHECKING:
    from .models import JobApplication, JobDraft, JobStats
    from .queries import (
        compute_stats,
        filter_jobs,
        overdue_reminders,
        upcoming_reminders,
        validate_job,
    )
    from .scheduler import ReminderScheduler, ReminderService
    from .tracker import JobTracker, JobValidationError


def __getattr__(name: str) -> Any:
    """Lazily import submodules; ``tracker`` depends on :mod:`ecotracker.schemas`."""

    module_map = {
        "JobApplication": "models",
        "JobDraft": "models",
        "JobStats": "models",
        "JobTracker": "tracker",
        "JobValidationError": "tracker",
        "ReminderScheduler": "scheduler",
        "ReminderService": "scheduler",
        "compute_stats": "queries",
        "filter_jobs": "queries",
        "overdue_reminders": "queries",
        "upcoming_reminders": "queries",
        "validate_job": "queries",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
