"""Domain models for the job-application tracker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

JobStatus = Literal["Applied", "Interviewed", "Offered", "Rejected"]
JOB_STATUSES: tuple[JobStatus, ...] = ("Applied", "Interviewed", "Offered", "Rejected")

STATUS_ICONS: dict[JobStatus, str] = {
    "Applied": "✉️",
    "Interviewed": "🤝",
    "Offered": "🎉",
    "Rejected": "❌",
}


@dataclass(slots=True, frozen=True)
class JobDraft:
    """User-editable fields of a job application.

    ``application_date`` may be ``None`` while a form is incomplete;
    validation rejects it.
    """

    job_title: str
    company: str
    application_date: date | None
    status: JobStatus = "Applied"
    follow_up_date: date | None = None
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class JobApplication:
    """Tracked job application.

    ``created_at`` and ``updated_at`` are epoch milliseconds.
    """

    id: str
    job_title: str
    company: str
    application_date: date
    status: JobStatus
    follow_up_date: date | None
    notes: str | None
    created_at: int
    updated_at: int


@dataclass(slots=True, frozen=True)
class JobStats:
    """Per-status counts and the share of applications that led to an offer."""

    total: int
    applied: int
    interviewed: int
    offered: int
    rejected: int
    success_rate: int  # percent
