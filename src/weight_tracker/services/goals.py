"""Weight goal lifecycle and progress tracking."""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from weight_tracker.domain.models import WeightGoal
from weight_tracker.domain.periods import TimePeriod
from weight_tracker.services.notifier import UpdateNotifier
from weight_tracker.services.weights import WeightEntryService

_logger = logging.getLogger(__name__)


class WeightGoalRepository(Protocol):
    """Persistence interface for weight goals."""

    def create_goal(self, goal: WeightGoal) -> WeightGoal:
        """Persist a new goal and return it."""

    def update_goal(self, goal: WeightGoal) -> WeightGoal:
        """Persist changes to a goal and return it."""

    def get_active_goal(self) -> WeightGoal | None:
        """Return the most recently created active goal."""

    def list_goals(self) -> list[WeightGoal]:
        """Return every goal, newest first."""


def calculate_progress(goal: WeightGoal, current_weight: float) -> float:
    """Return the fraction of the way from start to target, within [0, 1]."""
    total_change = goal.target_weight - goal.start_weight
    if total_change == 0:
        return 1.0
    current_change = current_weight - goal.start_weight
    return min(max(current_change / total_change, 0.0), 1.0)


@dataclass
class GoalService:
    """Service for creating goals and tracking progress toward them."""

    repository: WeightGoalRepository
    entries: WeightEntryService
    notifier: UpdateNotifier
    milestones: tuple[float, ...] = (0.25, 0.5, 0.75)
    _reached: dict[UUID, set[float]] = field(default_factory=dict, init=False)

    def active_goal(self) -> WeightGoal | None:
        return self.repository.get_active_goal()

    def create_goal(
        self, target_weight: float, target_date: date | None = None
    ) -> WeightGoal | None:
        """Create the new active goal, replacing any current one."""
        if target_weight <= 0:
            error = ValueError(f"Target weight must be positive, got {target_weight}")
            self.notifier.notify_goal_creation_failed(error)
            return None
        now = datetime.now(tz=UTC)
        latest = self.entries.latest_entry()
        goal = WeightGoal(
            id=uuid4(),
            target_weight=target_weight,
            target_date=target_date,
            start_date=now,
            start_weight=latest.weight if latest else 0.0,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        current = self.repository.get_active_goal()
        try:
            saved = self.repository.create_goal(goal)
        except Exception as exc:
            _logger.exception("Failed to create weight goal")
            self.notifier.notify_goal_creation_failed(exc)
            return None
        # The previous goal stays active until its replacement is stored.
        if current is not None:
            self._save(replace(current, is_active=False, updated_at=now))
        _logger.info("Weight goal created: id=%s target=%s", saved.id, target_weight)
        self.notifier.notify_goal_updated(saved)
        return saved

    def update_goal(
        self,
        goal: WeightGoal,
        target_weight: float | None = None,
        target_date: date | None = None,
    ) -> WeightGoal | None:
        """Change the target of an existing goal."""
        changed = replace(
            goal,
            target_weight=(
                goal.target_weight if target_weight is None else target_weight
            ),
            target_date=goal.target_date if target_date is None else target_date,
            updated_at=datetime.now(tz=UTC),
        )
        saved = self._save(changed)
        if saved is not None:
            self._reached.pop(saved.id, None)
            self.notifier.notify_goal_updated(saved)
        return saved

    def complete_goal(self, goal: WeightGoal) -> WeightGoal | None:
        """Deactivate a goal that was reached."""
        saved = self._deactivate(goal)
        if saved is not None:
            self.notifier.notify_weight_goal_completed(saved)
            self.notifier.notify_goal_updated(None)
        return saved

    def cancel_goal(self, goal: WeightGoal) -> WeightGoal | None:
        """Deactivate a goal the user abandoned."""
        saved = self._deactivate(goal)
        if saved is not None:
            self.notifier.notify_goal_updated(None)
        return saved

    def progress(
        self, goal: WeightGoal | None = None, current_weight: float | None = None
    ) -> float | None:
        """Return progress toward ``goal`` (default: the active goal)."""
        goal = goal or self.repository.get_active_goal()
        if goal is None:
            return None
        if current_weight is None:
            latest = self.entries.latest_entry()
            if latest is None:
                return None
            current_weight = latest.weight
        return calculate_progress(goal, current_weight)

    def estimated_completion(self, now: datetime | None = None) -> datetime | None:
        """Project when the active goal is reached at last week's rate."""
        now = now or datetime.now(tz=UTC)
        goal = self.repository.get_active_goal()
        latest = self.entries.latest_entry()
        if goal is None or latest is None:
            return None
        weekly = self.entries.entries_for_period(TimePeriod.WEEK, now)
        if len(weekly) < 2:
            return None
        weekly_change = latest.weight - weekly[0].weight
        if weekly_change == 0:
            return None
        weeks = (goal.target_weight - latest.weight) / weekly_change
        if weeks < 0:
            return None
        try:
            return now + timedelta(weeks=int(weeks))
        except OverflowError:
            _logger.info("Goal estimate beyond the calendar: weeks=%s", weeks)
            return None

    def evaluate_progress(self) -> None:
        """Announce newly crossed milestones and complete a reached goal."""
        goal = self.repository.get_active_goal()
        # Goals created before any weight was logged have no baseline.
        if goal is None or goal.start_weight <= 0:
            return
        progress = self.progress(goal)
        if progress is None:
            return
        reached = self._reached.setdefault(goal.id, set())
        for threshold in sorted(self.milestones):
            if progress >= threshold and threshold not in reached:
                reached.add(threshold)
                self.notifier.notify_goal_milestone_reached(threshold, goal)
        if progress >= 1.0:
            self._reached.pop(goal.id, None)
            self.complete_goal(goal)

    def _deactivate(self, goal: WeightGoal) -> WeightGoal | None:
        return self._save(
            replace(goal, is_active=False, updated_at=datetime.now(tz=UTC))
        )

    def _save(self, goal: WeightGoal) -> WeightGoal | None:
        try:
            return self.repository.update_goal(goal)
        except Exception as exc:
            _logger.exception("Failed to save weight goal: id=%s", goal.id)
            self.notifier.notify_data_save_error(exc)
            return None
