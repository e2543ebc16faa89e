"""Achievements unlocked by logging activity and app usage."""

import logging
from datetime import UTC, datetime

from weight_tracker.domain.events import Event, EventKind
from weight_tracker.domain.models import AchievementType
from weight_tracker.services.event_bus import EventBus
from weight_tracker.services.goals import GoalService
from weight_tracker.services.notifier import UpdateNotifier
from weight_tracker.services.observers import NotificationObserver
from weight_tracker.services.weights import WeightEntryService

_logger = logging.getLogger(__name__)

CONSISTENT_LOGGER_ENTRIES = 50
GOAL_TOLERANCE_KG = 0.5
WEIGHT_LOSS_ACHIEVEMENTS = (
    (AchievementType.WEIGHT_LOSS_5KG, 5.0),
    (AchievementType.WEIGHT_LOSS_10KG, 10.0),
)
STREAK_ACHIEVEMENTS = (
    (AchievementType.WEEK_STREAK, 7),
    (AchievementType.MONTH_STREAK, 30),
)
EXPLORABLE_VIEWS = (
    EventKind.OPEN_MAIN_VIEW,
    EventKind.OPEN_CHARTS,
    EventKind.OPEN_GOALS,
    EventKind.OPEN_SETTINGS,
)


class AchievementTracker(NotificationObserver):
    """Unlocks each achievement once and announces it on the bus.

    Weight-based achievements are re-checked on every ``WEIGHT_DATA_UPDATED``;
    ``DATA_EXPLORER`` unlocks once every main view has been opened.
    """

    def __init__(
        self,
        bus: EventBus,
        notifier: UpdateNotifier,
        weight_service: WeightEntryService,
        goal_service: GoalService,
    ) -> None:
        super().__init__(bus)
        self.notifier = notifier
        self.weight_service = weight_service
        self.goal_service = goal_service
        self.unlocked: dict[AchievementType, datetime] = {}
        self._explored: set[EventKind] = set()

    def setup_notification_observers(self) -> None:
        self.observe(EventKind.WEIGHT_DATA_UPDATED, self._on_weight_data_updated)
        self.observe(EventKind.WEIGHT_GOAL_COMPLETED, self._on_goal_completed)
        for kind in EXPLORABLE_VIEWS:
            self.observe(kind, self._on_view_opened)

    def has_achievement(self, achievement: AchievementType) -> bool:
        return achievement in self.unlocked

    def check_achievements(self) -> None:
        """Unlock whatever the current entries and goal qualify for."""
        entries = self.weight_service.all_entries()
        if not entries:
            return
        self._unlock(AchievementType.FIRST_ENTRY)
        if len(entries) >= CONSISTENT_LOGGER_ENTRIES:
            self._unlock(AchievementType.CONSISTENT_LOGGER)

        latest, first = entries[0], entries[-1]
        if len(entries) >= 2:
            lost = first.weight - latest.weight
            for achievement, kilograms in WEIGHT_LOSS_ACHIEVEMENTS:
                if lost >= kilograms:
                    self._unlock(achievement)

        goal = self.goal_service.active_goal()
        near_target = goal is not None and (
            abs(latest.weight - goal.target_weight) <= GOAL_TOLERANCE_KG
        )
        if near_target:
            self._unlock(AchievementType.GOAL_ACHIEVER)

        streak = self.weight_service.current_streak()
        for achievement, days in STREAK_ACHIEVEMENTS:
            if streak >= days:
                self._unlock(achievement)

    def _unlock(self, achievement: AchievementType) -> None:
        if achievement in self.unlocked:
            return
        self.unlocked[achievement] = datetime.now(tz=UTC)
        _logger.info("Achievement unlocked: %s", achievement.value)
        self.notifier.notify_achievement_unlocked(achievement)

    def _on_weight_data_updated(self, _event: Event) -> None:
        self.check_achievements()

    def _on_goal_completed(self, _event: Event) -> None:
        self._unlock(AchievementType.GOAL_ACHIEVER)

    def _on_view_opened(self, event: Event) -> None:
        self._explored.add(event.kind)
        if self._explored.issuperset(EXPLORABLE_VIEWS):
            self._unlock(AchievementType.DATA_EXPLORER)
