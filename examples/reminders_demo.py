"""Example script tracking a job application with a follow-up reminder."""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ecotracker.jobs.models import JobDraft
from ecotracker.jobs.queries import compute_stats, describe_job, upcoming_reminders
from ecotracker.jobs.scheduler import ReminderService
from ecotracker.jobs.tracker import JobTracker
from ecotracker.logging_pipeline import configure_structured_logging, shutdown_listeners


async def _run(delay: float) -> None:
    # Pretend it is just before midnight so tomorrow's follow-up fires after ``delay``.
    today = date.today()
    fake_now = datetime.combine(
        today + timedelta(days=1), datetime.min.time(), tzinfo=timezone.utc
    ) - timedelta(seconds=delay)

    reminders = ReminderService.from_settings(clock=lambda: fake_now)
    if reminders.permission != "granted":
        reminders.request_permission(lambda: "granted")
    tracker = JobTracker(reminders=reminders)
    tracker.add(
        JobDraft(
            job_title="Backend Engineer",
            company="Acme",
            application_date=today,
            follow_up_date=today + timedelta(days=1),
        )
    )

    print(compute_stats(tracker.jobs()))
    for job in upcoming_reminders(tracker.jobs(), today):
        print(describe_job(job, today))

    await asyncio.sleep(delay + 0.1)
    reminders.close()


def main(argv: Optional[list[str]] = None) -> int:
    """Schedule a reminder and wait for the notification to be logged."""
    parser = argparse.ArgumentParser(
        description="Track a job application and fire its follow-up reminder."
    )
    parser.add_argument("--delay", type=float, default=1.0)
    args = parser.parse_args(argv)

    listener = configure_structured_logging(logging.getLogger("ecotracker"))
    try:
        asyncio.run(_run(args.delay))
    finally:
        shutdown_listeners([listener])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
