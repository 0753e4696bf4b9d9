"""Pure helpers over job application lists: validation, search, stats."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Literal

from ..calculator import round_half_up
from .models import (
    JOB_STATUSES,
    STATUS_ICONS,
    JobApplication,
    JobDraft,
    JobStats,
    JobStatus,
)

SortOption = Literal["date-desc", "date-asc", "status"]
StatusFilter = Literal["all", "Applied", "Interviewed", "Offered", "Rejected"]

UPCOMING_LIMIT: int = 5
OVERDUE_LIMIT: int = 3


def validate_job(draft: JobDraft, today: date) -> dict[str, str]:
    """Return field errors for ``draft``; an empty mapping means valid.

    Args:
        draft: Candidate field values.
        today: Current local date, used to reject future application dates.
    """

    errors: dict[str, str] = {}

    if not draft.job_title.strip():
        errors["job_title"] = "Job title is required"
    if not draft.company.strip():
        errors["company"] = "Company name is required"
    if draft.status not in JOB_STATUSES:
        errors["status"] = f"Status must be one of {', '.join(JOB_STATUSES)}"

    if draft.application_date is None:
        errors["application_date"] = "Application date is required"
    elif draft.application_date > today:
        errors["application_date"] = "Application date cannot be in the future"

    if (
        draft.follow_up_date is not None
        and draft.application_date is not None
        and draft.follow_up_date < draft.application_date
    ):
        errors["follow_up_date"] = "Follow-up date must be after application date"

    return errors


def filter_jobs(
    jobs: Iterable[JobApplication],
    query: str = "",
    status: StatusFilter = "all",
    sort: SortOption = "date-desc",
) -> list[JobApplication]:
    """Search, filter and sort ``jobs`` without modifying the input.

    The query matches case-insensitively against title and company; a blank
    query matches everything. Sorting is stable.
    """

    result = list(jobs)

    needle = query.strip().lower()
    if needle:
        result = [
            job
            for job in result
            if needle in job.job_title.lower() or needle in job.company.lower()
        ]

    if status != "all":
        result = [job for job in result if job.status == status]

    if sort == "date-desc":
        result.sort(key=lambda job: job.application_date, reverse=True)
    elif sort == "date-asc":
        result.sort(key=lambda job: job.application_date)
    elif sort == "status":
        result.sort(key=lambda job: job.status)

    return result


def days_until(target: date, today: date) -> int:
    """Whole days from ``today`` to ``target`` (negative when overdue)."""

    return (target - today).days


def describe_job(job: JobApplication, today: date) -> str:
    """One-line summary with the status icon and follow-up countdown."""

    line = f"{STATUS_ICONS[job.status]} {job.job_title} at {job.company} ({job.status})"
    if job.follow_up_date is None:
        return line
    days = days_until(job.follow_up_date, today)
    if days == 0:
        return f"{line}, follow up today"
    if days > 0:
        return f"{line}, follow up in {days} day{'' if days == 1 else 's'}"
    return f"{line}, follow-up overdue by {-days} day{'' if days == -1 else 's'}"


def upcoming_reminders(
    jobs: Iterable[JobApplication], today: date, limit: int = UPCOMING_LIMIT
) -> list[JobApplication]:
    """Jobs whose follow-up is today or later, soonest first."""

    due = [
        job
        for job in jobs
        if job.follow_up_date is not None and job.follow_up_date >= today
    ]
    due.sort(key=lambda job: job.follow_up_date)  # type: ignore[arg-type, return-value]
    return due[:limit]


def overdue_reminders(
    jobs: Iterable[JobApplication], today: date, limit: int = OVERDUE_LIMIT
) -> list[JobApplication]:
    """Jobs whose follow-up date has passed, most recent first."""

    overdue = [
        job
        for job in jobs
        if job.follow_up_date is not None and job.follow_up_date < today
    ]
    overdue.sort(key=lambda job: job.follow_up_date, reverse=True)  # type: ignore[arg-type, return-value]
    return overdue[:limit]


def compute_stats(jobs: Sequence[JobApplication]) -> JobStats:
    """Count applications per status."""

    counts: Counter[JobStatus] = Counter(job.status for job in jobs)
    total = len(jobs)
    success_rate = (
        int(round_half_up(counts["Offered"] / total * 100, 0)) if total else 0
    )
    return JobStats(
        total=total,
        applied=counts["Applied"],
        interviewed=counts["Interviewed"],
        offered=counts["Offered"],
        rejected=counts["Rejected"],
        success_rate=success_rate,
    )
