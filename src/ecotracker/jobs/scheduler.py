"""One-shot follow-up reminders on the asyncio event loop.

:class:`ReminderScheduler` keeps at most one pending timer per key; a new
``schedule`` call for the same key replaces the previous timer.
:class:`ReminderService` turns job applications into reminders and delivers
them to a :class:`Notifier` once they fire.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, time, timezone
from typing import Protocol

from ..settings import EcoTrackerSettings, NotificationPermission, get_settings
from .models import JobApplication

LOGGER = logging.getLogger(__name__)

NOTIFICATION_TITLE = "JobHunt Reminder"

Clock = Callable[[], datetime]
FireCallback = Callable[[str, object], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class _PendingTimer:
    handle: asyncio.TimerHandle
    fire_at: datetime
    token: object = field(default_factory=object)


class ReminderScheduler:
    """Keyed one-shot timers with last-write-wins semantics."""

    def __init__(
        self,
        on_fire: FireCallback,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        clock: Clock = _utcnow,
    ) -> None:
        self._on_fire = on_fire
        self._loop = loop
        self._clock = clock
        self._pending: dict[str, _PendingTimer] = {}

    def schedule(self, key: str, fire_at: datetime, payload: object) -> Callable[[], None]:
        """Schedule ``payload`` to fire for ``key`` at ``fire_at``.

        Any pending timer for ``key`` is cancelled first. Times in the past
        fire on the next loop iteration. When no loop is available the
        pending timer is left untouched.

        Args:
            key: Timer identity, typically a job id.
            fire_at: Timezone-aware fire time.
            payload: Object passed to the fire callback.

        Returns:
            A callable cancelling this timer. It does nothing once the timer
            fired or was replaced by a newer one.

        Raises:
            RuntimeError: If no loop was supplied and none is running.
        """

        loop = self._loop or asyncio.get_running_loop()
        self.cancel(key)
        delay = max((fire_at - self._clock()).total_seconds(), 0.0)

        token = object()
        handle = loop.call_later(delay, self._fire, key, token, payload)
        self._pending[key] = _PendingTimer(handle=handle, fire_at=fire_at, token=token)
        LOGGER.debug("Scheduled reminder %s in %.1fs", key, delay)

        def cancel() -> None:
            entry = self._pending.get(key)
            if entry is not None and entry.token is token:
                entry.handle.cancel()
                del self._pending[key]

        return cancel

    def cancel(self, key: str) -> bool:
        """Cancel the pending timer for ``key``; return whether one existed."""

        entry = self._pending.pop(key, None)
        if entry is None:
            return False
        entry.handle.cancel()
        LOGGER.debug("Cancelled reminder %s", key)
        return True

    def pending(self) -> dict[str, datetime]:
        """Return the fire time of every pending timer keyed by key."""

        return {key: entry.fire_at for key, entry in self._pending.items()}

    def close(self) -> None:
        """Cancel every pending timer."""

        for entry in self._pending.values():
            entry.handle.cancel()
        self._pending.clear()

    def _fire(self, key: str, token: object, payload: object) -> None:
        entry = self._pending.get(key)
        if entry is None or entry.token is not token:
            return
        del self._pending[key]
        try:
            self._on_fire(key, payload)
        except Exception:
            LOGGER.error("Reminder callback for %s failed", key, exc_info=True)


@dataclass(slots=True, frozen=True)
class Notification:
    """Notification shown when a follow-up reminder fires."""

    title: str
    body: str
    tag: str


class Notifier(Protocol):
    """Delivery backend for fired reminders."""

    def notify(self, notification: Notification) -> None:
        """Deliver ``notification`` to the user."""


class LoggingNotifier:
    """Notifier that writes reminders to the log."""

    def __init__(self, logger: logging.Logger = LOGGER) -> None:
        self.logger = logger

    def notify(self, notification: Notification) -> None:
        self.logger.info(
            "%s: %s",
            notification.title,
            notification.body,
            extra={"tag": notification.tag},
        )


def build_notification(job: JobApplication) -> Notification:
    return Notification(
        title=NOTIFICATION_TITLE,
        body=f"Follow up on your application for {job.job_title} at {job.company}",
        tag=job.id,
    )


def follow_up_datetime(job: JobApplication) -> datetime | None:
    """Fire time for ``job``: midnight UTC on its follow-up date."""

    if job.follow_up_date is None:
        return None
    return datetime.combine(job.follow_up_date, time.min, tzinfo=timezone.utc)


class ReminderService:
    """Schedule follow-up notifications for job applications.

    Reminders are only scheduled once notification permission has been
    granted and only for follow-up dates in the future.
    """

    def __init__(
        self,
        *,
        notifier: Notifier | None = None,
        permission: NotificationPermission = "default",
        loop: asyncio.AbstractEventLoop | None = None,
        clock: Clock = _utcnow,
    ) -> None:
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.permission: NotificationPermission = permission
        self._clock = clock
        self._scheduler = ReminderScheduler(self._deliver, loop=loop, clock=clock)

    @classmethod
    def from_settings(
        cls,
        settings: EcoTrackerSettings | None = None,
        *,
        notifier: Notifier | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        clock: Clock = _utcnow,
    ) -> ReminderService:
        """Build a service whose initial permission comes from ``ECOTRACKER_NOTIFICATIONS``."""

        settings = settings or get_settings()
        return cls(
            notifier=notifier,
            permission=settings.notification_permission,
            loop=loop,
            clock=clock,
        )

    @property
    def scheduler(self) -> ReminderScheduler:
        return self._scheduler

    def request_permission(self, resolver: Callable[[], NotificationPermission]) -> bool:
        """Ask ``resolver`` for permission and remember the answer.

        Returns:
            ``True`` when permission was granted. Resolver failures are
            logged and reported as ``False``.
        """

        try:
            result = resolver()
        except Exception:
            LOGGER.error("Requesting notification permission failed", exc_info=True)
            return False
        self.permission = result
        return result == "granted"

    def schedule_notification(self, job: JobApplication) -> bool:
        """Schedule the follow-up reminder for ``job``.

        Returns:
            ``True`` if a timer was scheduled.
        """

        fire_at = follow_up_datetime(job)
        if fire_at is None or self.permission != "granted":
            return False
        if fire_at <= self._clock():
            return False
        self._scheduler.schedule(job.id, fire_at, build_notification(job))
        return True

    def cancel_notification(self, job_id: str) -> None:
        self._scheduler.cancel(job_id)

    def schedule_all(self, jobs: Iterable[JobApplication]) -> int:
        """Schedule reminders for every job with a follow-up date.

        Returns:
            Number of reminders scheduled.
        """

        if self.permission != "granted":
            return 0
        return sum(1 for job in jobs if self.schedule_notification(job))

    def close(self) -> None:
        self._scheduler.close()

    def _deliver(self, key: str, payload: object) -> None:
        if not isinstance(payload, Notification):
            LOGGER.warning("Dropping reminder %s with unexpected payload", key)
            return
        self.notifier.notify(payload)
