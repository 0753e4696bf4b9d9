"""Job application repository mirrored into a key-value store."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date

from pydantic import ValidationError

from ..schemas import dump_jobs_json, load_jobs_json
from ..storage import KeyValueStore, MemoryStore
from .models import JobApplication, JobDraft
from .queries import validate_job
from .scheduler import ReminderService

LOGGER = logging.getLogger(__name__)

STORAGE_KEY = "jobhunt-applications"


def _now_ms() -> int:
    return int(time.time() * 1000)


class JobValidationError(ValueError):
    """Raised when a draft fails validation.

    Attributes:
        errors: Mapping of field name to message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        details = "; ".join(f"{key}: {message}" for key, message in self.errors.items())
        super().__init__(f"Invalid job application ({details})")


class JobTracker:
    """CRUD over job applications.

    Every change is mirrored to ``store``. When ``reminders`` is given,
    adding or editing a job reschedules its follow-up reminder and deleting
    a job cancels it.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        reminders: ReminderService | None = None,
        key: str = STORAGE_KEY,
        clock: Callable[[], int] = _now_ms,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store: KeyValueStore = store if store is not None else MemoryStore()
        self._key = key
        self._clock = clock
        self._today = today
        self.reminders = reminders
        self._jobs: list[JobApplication] = self._load()

    def jobs(self) -> list[JobApplication]:
        """Return the jobs in insertion order, newest first."""

        return list(self._jobs)

    def get(self, job_id: str) -> JobApplication:
        """Return the job with ``job_id``.

        Raises:
            KeyError: If no such job exists.
        """

        return self._jobs[self._index(job_id)]

    def add(self, draft: JobDraft) -> JobApplication:
        """Validate and store a new job application.

        Raises:
            JobValidationError: If ``draft`` is invalid.
        """

        self._validate(draft)
        now = self._clock()
        job = JobApplication(
            id=uuid.uuid4().hex,
            job_title=draft.job_title.strip(),
            company=draft.company.strip(),
            application_date=draft.application_date,  # type: ignore[arg-type]
            status=draft.status,
            follow_up_date=draft.follow_up_date,
            notes=(draft.notes or "").strip() or None,
            created_at=now,
            updated_at=now,
        )
        self._jobs.insert(0, job)
        self._save()
        LOGGER.info("Added job application %s", job.id)
        self._sync_reminder(job)
        return job

    def update(self, job_id: str, draft: JobDraft) -> JobApplication:
        """Replace the editable fields of an existing job.

        Raises:
            KeyError: If no such job exists.
            JobValidationError: If ``draft`` is invalid.
        """

        index = self._index(job_id)
        self._validate(draft)
        job = replace(
            self._jobs[index],
            job_title=draft.job_title.strip(),
            company=draft.company.strip(),
            application_date=draft.application_date,
            status=draft.status,
            follow_up_date=draft.follow_up_date,
            notes=(draft.notes or "").strip() or None,
            updated_at=self._clock(),
        )
        self._jobs[index] = job
        self._save()
        LOGGER.info("Updated job application %s", job_id)
        self._sync_reminder(job)
        return job

    def delete(self, job_id: str) -> JobApplication:
        """Remove a job and cancel its reminder.

        Raises:
            KeyError: If no such job exists.
        """

        job = self._jobs.pop(self._index(job_id))
        self._save()
        LOGGER.info("Deleted job application %s", job_id)
        if self.reminders is not None:
            self.reminders.cancel_notification(job_id)
        return job

    def _index(self, job_id: str) -> int:
        for index, job in enumerate(self._jobs):
            if job.id == job_id:
                return index
        raise KeyError(job_id)

    def _sync_reminder(self, job: JobApplication) -> None:
        """Point the reminder for ``job`` at its current follow-up date.

        The job is already stored at this point, so a missing event loop is
        logged instead of failing the call; any existing timer is kept.
        """

        if self.reminders is None:
            return
        try:
            scheduled = self.reminders.schedule_notification(job)
        except RuntimeError:
            LOGGER.warning(
                "Could not schedule reminder for %s: no running event loop", job.id
            )
            return
        if not scheduled:
            self.reminders.cancel_notification(job.id)

    def _validate(self, draft: JobDraft) -> None:
        errors = validate_job(draft, self._today())
        if errors:
            raise JobValidationError(errors)

    def _load(self) -> list[JobApplication]:
        payload = self._store.get_item(self._key)
        if not payload:
            return []
        try:
            return load_jobs_json(payload)
        except ValidationError:
            LOGGER.warning("Stored job list under %r is malformed; starting empty", self._key)
            return []

    def _save(self) -> None:
        self._store.set_item(self._key, dump_jobs_json(self._jobs))
