"""Tests for the job application repository."""

from __future__ import annotations

import asyncio
import json
from datetime import date, datetime, timezone

import pytest

from ecotracker.jobs.models import JobDraft
from ecotracker.jobs.scheduler import ReminderService
from ecotracker.jobs.tracker import STORAGE_KEY, JobTracker, JobValidationError
from ecotracker.storage import MemoryStore

TODAY = date(2026, 3, 10)


class FakeClock:
    """Monotonic millisecond clock."""

    def __init__(self) -> None:
        self.now = 1_000

    def __call__(self) -> int:
        self.now += 1
        return self.now


def _tracker(store: MemoryStore, **kwargs: object) -> JobTracker:
    return JobTracker(store, clock=FakeClock(), today=lambda: TODAY, **kwargs)  # type: ignore[arg-type]


def _draft(**overrides: object) -> JobDraft:
    values: dict[str, object] = {
        "job_title": "  Backend Engineer ",
        "company": "Acme ",
        "application_date": date(2026, 3, 1),
        "status": "Applied",
        "follow_up_date": date(2026, 3, 15),
        "notes": "   ",
    }
    values.update(overrides)
    return JobDraft(**values)  # type: ignore[arg-type]


def test_add_trims_fields_and_persists(memory_store):
    """New jobs are normalised, stored first and mirrored in camelCase."""
    tracker = _tracker(memory_store)
    first = tracker.add(_draft())
    second = tracker.add(_draft(job_title="Data Analyst"))

    assert first.job_title == "Backend Engineer"
    assert first.company == "Acme"
    assert first.notes is None
    assert first.created_at == first.updated_at
    assert [job.id for job in tracker.jobs()] == [second.id, first.id]

    stored = json.loads(memory_store.get_item(STORAGE_KEY))
    assert stored[1]["jobTitle"] == "Backend Engineer"
    assert stored[1]["applicationDate"] == "2026-03-01"
    assert stored[1]["followUpDate"] == "2026-03-15"
    assert "notes" not in stored[1]


def test_jobs_reload_from_store(memory_store):
    """A second tracker sees the first tracker's jobs."""
    job = _tracker(memory_store).add(_draft(notes="Referral from Sam"))

    reloaded = _tracker(memory_store)
    assert reloaded.get(job.id) == job


def test_invalid_draft_raises_with_field_errors(memory_store):
    """Validation errors carry per-field messages and nothing is stored."""
    tracker = _tracker(memory_store)

    with pytest.raises(JobValidationError) as excinfo:
        tracker.add(_draft(job_title="", application_date=date(2026, 4, 1)))

    assert excinfo.value.errors == {
        "job_title": "Job title is required",
        "application_date": "Application date cannot be in the future",
    }
    assert isinstance(excinfo.value, ValueError)
    assert tracker.jobs() == []


def test_update_replaces_fields_and_bumps_timestamp(memory_store):
    """Updates keep id and creation time."""
    tracker = _tracker(memory_store)
    job = tracker.add(_draft())

    updated = tracker.update(job.id, _draft(status="Interviewed", notes="Went well"))

    assert updated.id == job.id
    assert updated.created_at == job.created_at
    assert updated.updated_at > job.updated_at
    assert updated.status == "Interviewed"
    assert updated.notes == "Went well"
    assert tracker.get(job.id) == updated


def test_unknown_ids_raise_key_error(memory_store):
    """Get, update and delete reject unknown ids."""
    tracker = _tracker(memory_store)

    with pytest.raises(KeyError):
        tracker.get("missing")
    with pytest.raises(KeyError):
        tracker.update("missing", _draft())
    with pytest.raises(KeyError):
        tracker.delete("missing")


def test_delete_removes_and_persists(memory_store):
    """Deleted jobs disappear from memory and the store."""
    tracker = _tracker(memory_store)
    job = tracker.add(_draft())

    assert tracker.delete(job.id) == job
    assert tracker.jobs() == []
    assert json.loads(memory_store.get_item(STORAGE_KEY)) == []


def test_malformed_store_starts_empty(caplog: pytest.LogCaptureFixture):
    """Unparsable stored jobs are ignored."""
    store = MemoryStore({STORAGE_KEY: '[{"id": ""}]'})

    with caplog.at_level("WARNING", logger="ecotracker.jobs.tracker"):
        tracker = _tracker(store)

    assert tracker.jobs() == []
    assert "malformed" in caplog.text


async def test_reminders_follow_job_lifecycle(memory_store):
    """Adding schedules, editing reschedules and deleting cancels reminders."""
    now = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
    reminders = ReminderService(permission="granted", clock=lambda: now)
    tracker = _tracker(memory_store, reminders=reminders)

    job = tracker.add(_draft())
    assert reminders.scheduler.pending() == {
        job.id: datetime(2026, 3, 15, tzinfo=timezone.utc)
    }

    tracker.update(job.id, _draft(follow_up_date=date(2026, 3, 20)))
    assert reminders.scheduler.pending() == {
        job.id: datetime(2026, 3, 20, tzinfo=timezone.utc)
    }

    tracker.update(job.id, _draft(follow_up_date=None))
    assert reminders.scheduler.pending() == {}

    other = tracker.add(_draft(job_title="Data Analyst"))
    tracker.delete(other.id)
    assert reminders.scheduler.pending() == {}

    reminders.close()


def test_reminders_without_event_loop_keep_crud_working(
    memory_store, caplog: pytest.LogCaptureFixture
):
    """Outside an event loop the job is still saved and the reminder is skipped."""
    now = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
    reminders = ReminderService(permission="granted", clock=lambda: now)
    tracker = _tracker(memory_store, reminders=reminders)

    with caplog.at_level("WARNING", logger="ecotracker.jobs.tracker"):
        job = tracker.add(_draft())
        updated = tracker.update(job.id, _draft(status="Interviewed"))

    assert tracker.jobs() == [updated]
    assert len(json.loads(memory_store.get_item(STORAGE_KEY))) == 1
    assert reminders.scheduler.pending() == {}
    assert caplog.text.count("no running event loop") == 2


def test_update_outside_event_loop_keeps_existing_reminder(memory_store):
    """A failed reschedule leaves the previously scheduled timer pending."""
    now = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
    reminders = ReminderService(permission="granted", clock=lambda: now)
    tracker = _tracker(memory_store, reminders=reminders)

    async def add_job():
        return tracker.add(_draft())

    loop = asyncio.new_event_loop()
    try:
        job = loop.run_until_complete(add_job())
        tracker.update(job.id, _draft(follow_up_date=date(2026, 3, 20)))

        assert tracker.get(job.id).follow_up_date == date(2026, 3, 20)
        assert reminders.scheduler.pending() == {
            job.id: datetime(2026, 3, 15, tzinfo=timezone.utc)
        }
    finally:
        reminders.close()
        loop.close()
