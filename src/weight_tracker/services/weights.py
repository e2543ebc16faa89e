"""Weight entry logging and history queries."""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from weight_tracker.domain.models import WeightEntry, WeightUnit
from weight_tracker.domain.periods import TimePeriod
from weight_tracker.domain.units import to_kilograms
from weight_tracker.services.notifier import UpdateNotifier

_logger = logging.getLogger(__name__)


class WeightEntryRepository(Protocol):
    """Persistence interface for weight entries."""

    def create_entry(self, entry: WeightEntry) -> WeightEntry:
        """Persist a new entry and return it."""

    def update_entry(self, entry: WeightEntry) -> WeightEntry:
        """Persist changes to an existing entry and return it."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""

    def get_entry(self, entry_id: UUID) -> WeightEntry | None:
        """Return an entry by id, if present."""

    def list_recent(self, limit: int) -> list[WeightEntry]:
        """Return the newest entries first."""

    def list_between(self, start: datetime, end: datetime) -> list[WeightEntry]:
        """Return entries within a time range, oldest first."""

    def list_all(self) -> list[WeightEntry]:
        """Return every entry, newest first."""


@dataclass(frozen=True)
class WeightStatistics:
    """Aggregates over a period, in kilograms."""

    average: float
    minimum: float
    maximum: float
    count: int


@dataclass(frozen=True)
class WeeklyProgress:
    """Latest weight compared with the last one logged a week earlier."""

    current: float | None
    previous: float | None
    change: float | None


@dataclass
class WeightEntryService:
    """Service for logging weights and reading history."""

    repository: WeightEntryRepository
    notifier: UpdateNotifier
    timezone_name: str = "UTC"
    recent_limit: int = 30
    streak_milestones: tuple[int, ...] = (7, 30)
    _announced_streaks: set[int] = field(default_factory=set, init=False)

    def add_entry(
        self,
        weight: float,
        unit: WeightUnit | str = WeightUnit.KILOGRAMS,
        timestamp: datetime | None = None,
    ) -> WeightEntry | None:
        """Log a weight; returns None when it could not be saved."""
        now = datetime.now(tz=UTC)
        entry = WeightEntry(
            id=uuid4(),
            weight=to_kilograms(weight, unit),
            timestamp=timestamp or now,
            unit=WeightUnit(unit),
            created_at=now,
            updated_at=now,
        )
        try:
            saved = self.repository.create_entry(entry)
        except Exception as exc:
            _logger.exception("Failed to save weight entry")
            self.notifier.notify_data_save_error(exc)
            return None
        _logger.info("Weight entry saved: id=%s", saved.id)
        self.notifier.notify_weight_data_updated()
        self._announce_streak()
        return saved

    def update_entry(
        self, entry: WeightEntry, weight: float, unit: WeightUnit | str
    ) -> WeightEntry | None:
        """Apply a corrective edit to an entry."""
        corrected = replace(
            entry,
            weight=to_kilograms(weight, unit),
            unit=WeightUnit(unit),
            updated_at=datetime.now(tz=UTC),
        )
        try:
            saved = self.repository.update_entry(corrected)
        except Exception as exc:
            _logger.exception("Failed to update weight entry: id=%s", entry.id)
            self.notifier.notify_data_save_error(exc)
            return None
        self.notifier.notify_weight_data_updated()
        return saved

    def delete_entry(self, entry: WeightEntry) -> bool:
        """Delete an entry; returns False when the store rejected it."""
        try:
            self.repository.delete_entry(entry.id)
        except Exception as exc:
            _logger.exception("Failed to delete weight entry: id=%s", entry.id)
            self.notifier.notify_data_save_error(exc)
            return False
        self.notifier.notify_weight_data_updated()
        return True

    def latest_entry(self) -> WeightEntry | None:
        entries = self.repository.list_recent(1)
        return entries[0] if entries else None

    def recent_entries(self) -> list[WeightEntry]:
        return self.repository.list_recent(self.recent_limit)

    def all_entries(self) -> list[WeightEntry]:
        return self.repository.list_all()

    def entries_for_period(
        self, period: TimePeriod, now: datetime | None = None
    ) -> list[WeightEntry]:
        """Return entries inside ``period``, oldest first."""
        start, end = period.date_range(now or datetime.now(tz=UTC))
        return self.repository.list_between(start, end)

    def statistics(
        self, period: TimePeriod, now: datetime | None = None
    ) -> WeightStatistics | None:
        """Return average, minimum and maximum weight for a period."""
        weights = [entry.weight for entry in self.entries_for_period(period, now)]
        if not weights:
            return None
        return WeightStatistics(
            average=sum(weights) / len(weights),
            minimum=min(weights),
            maximum=max(weights),
            count=len(weights),
        )

    def weight_change(self) -> float | None:
        """Return the latest weight minus the one logged before it."""
        entries = self.repository.list_recent(2)
        if len(entries) < 2:
            return None
        return entries[0].weight - entries[1].weight

    def weekly_progress(self, now: datetime | None = None) -> WeeklyProgress:
        """Compare the latest weight with the last one logged a week or more ago."""
        now = now or datetime.now(tz=UTC)
        latest = self.latest_entry()
        if latest is None:
            return WeeklyProgress(current=None, previous=None, change=None)
        older = self.repository.list_between(
            datetime.min.replace(tzinfo=UTC), now - timedelta(days=7)
        )
        if not older:
            return WeeklyProgress(current=latest.weight, previous=None, change=None)
        previous = older[-1].weight
        return WeeklyProgress(
            current=latest.weight,
            previous=previous,
            change=latest.weight - previous,
        )

    def current_streak(self, today: date | None = None) -> int:
        """Count consecutive days with an entry, ending today."""
        tz = ZoneInfo(self.timezone_name)
        day = today or datetime.now(tz=tz).date()
        logged_days = {
            entry.timestamp.astimezone(tz).date()
            for entry in self.repository.list_all()
        }
        streak = 0
        while day in logged_days:
            streak += 1
            day -= timedelta(days=1)
        return streak

    def _announce_streak(self) -> None:
        streak = self.current_streak()
        for milestone in sorted(self.streak_milestones):
            if streak >= milestone and milestone not in self._announced_streaks:
                self._announced_streaks.add(milestone)
                self.notifier.notify_streak_achieved(milestone)
