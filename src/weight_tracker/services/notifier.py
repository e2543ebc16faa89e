"""Update notifier publishing domain events."""

from dataclasses import dataclass

from weight_tracker.domain.events import (
    AchievementUnlocked,
    DataSaveError,
    EventKind,
    GoalCreationFailed,
    GoalMilestoneReached,
    GoalUpdated,
    LanguageChanged,
    StreakAchieved,
    WeightGoalCompleted,
)
from weight_tracker.domain.models import AchievementType, WeightGoal
from weight_tracker.services.event_bus import EventBus


@dataclass
class UpdateNotifier:
    """Publishes each domain event with its payload shape.

    One instance is created by the container and shared by every service.
    """

    bus: EventBus

    # Navigation

    def trigger_quick_log(self) -> None:
        self.bus.publish(EventKind.OPEN_QUICK_LOG)

    def trigger_open_charts(self) -> None:
        self.bus.publish(EventKind.OPEN_CHARTS)

    def trigger_open_goals(self) -> None:
        self.bus.publish(EventKind.OPEN_GOALS)

    def trigger_open_settings(self) -> None:
        self.bus.publish(EventKind.OPEN_SETTINGS)

    def trigger_open_main_view(self) -> None:
        self.bus.publish(EventKind.OPEN_MAIN_VIEW)

    # Data updates

    def notify_weight_data_updated(self) -> None:
        """Signal views showing weight data to refetch."""
        self.bus.publish(EventKind.WEIGHT_DATA_UPDATED)

    def notify_goal_updated(self, goal: WeightGoal | None) -> None:
        """Publish the new active goal, or None when it was cleared."""
        self.bus.publish(EventKind.GOAL_UPDATED, GoalUpdated(goal=goal))

    def notify_goal_creation_failed(self, error: object) -> None:
        self.bus.publish(
            EventKind.GOAL_CREATION_FAILED, GoalCreationFailed(error=error)
        )

    def notify_settings_updated(self) -> None:
        self.bus.publish(EventKind.SETTINGS_UPDATED)

    def notify_language_changed(self, language: str) -> None:
        self.bus.publish(EventKind.LANGUAGE_CHANGED, LanguageChanged(language=language))

    def notify_data_save_error(self, error: object) -> None:
        self.bus.publish(EventKind.DATA_SAVE_ERROR, DataSaveError(error=error))

    # Achievements

    def notify_goal_milestone_reached(self, progress: float, goal: WeightGoal) -> None:
        """Publish a milestone; ``progress`` must already be within [0, 1]."""
        self.bus.publish(
            EventKind.GOAL_MILESTONE_REACHED,
            GoalMilestoneReached(progress=progress, goal=goal),
        )

    def notify_streak_achieved(self, days: int) -> None:
        self.bus.publish(EventKind.STREAK_ACHIEVED, StreakAchieved(days=days))

    def notify_weight_goal_completed(self, goal: WeightGoal) -> None:
        self.bus.publish(
            EventKind.WEIGHT_GOAL_COMPLETED, WeightGoalCompleted(goal=goal)
        )

    def notify_achievement_unlocked(self, achievement: AchievementType) -> None:
        self.bus.publish(
            EventKind.ACHIEVEMENT_UNLOCKED, AchievementUnlocked(achievement=achievement)
        )
