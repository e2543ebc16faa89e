"""Domain events published on the event bus."""

from dataclasses import dataclass
from enum import Enum

from weight_tracker.domain.models import AchievementType, WeightGoal


class EventKind(Enum):
    """Closed catalogue of events that can be published."""

    OPEN_QUICK_LOG = "openQuickLog"
    OPEN_CHARTS = "openCharts"
    OPEN_GOALS = "openGoals"
    OPEN_SETTINGS = "openSettings"
    OPEN_MAIN_VIEW = "openMainView"
    WEIGHT_DATA_UPDATED = "weightDataUpdated"
    GOAL_UPDATED = "goalUpdated"
    GOAL_CREATION_FAILED = "goalCreationFailed"
    SETTINGS_UPDATED = "settingsUpdated"
    LANGUAGE_CHANGED = "languageChanged"
    DATA_SAVE_ERROR = "dataSaveError"
    GOAL_MILESTONE_REACHED = "goalMilestoneReached"
    STREAK_ACHIEVED = "streakAchieved"
    WEIGHT_GOAL_COMPLETED = "weightGoalCompleted"
    ACHIEVEMENT_UNLOCKED = "achievementUnlocked"


@dataclass(frozen=True)
class GoalUpdated:
    """The active goal changed; ``goal`` is None when it was cleared."""

    goal: WeightGoal | None


@dataclass(frozen=True)
class GoalCreationFailed:
    error: object


@dataclass(frozen=True)
class DataSaveError:
    error: object


@dataclass(frozen=True)
class LanguageChanged:
    language: str


@dataclass(frozen=True)
class GoalMilestoneReached:
    """Progress toward ``goal`` crossed a threshold in [0, 1]."""

    progress: float
    goal: WeightGoal


@dataclass(frozen=True)
class StreakAchieved:
    days: int


@dataclass(frozen=True)
class WeightGoalCompleted:
    goal: WeightGoal


@dataclass(frozen=True)
class AchievementUnlocked:
    achievement: AchievementType


EventPayload = (
    GoalUpdated
    | GoalCreationFailed
    | DataSaveError
    | LanguageChanged
    | GoalMilestoneReached
    | StreakAchieved
    | WeightGoalCompleted
    | AchievementUnlocked
)

PAYLOAD_TYPES: dict[EventKind, type | None] = {
    EventKind.OPEN_QUICK_LOG: None,
    EventKind.OPEN_CHARTS: None,
    EventKind.OPEN_GOALS: None,
    EventKind.OPEN_SETTINGS: None,
    EventKind.OPEN_MAIN_VIEW: None,
    EventKind.WEIGHT_DATA_UPDATED: None,
    EventKind.GOAL_UPDATED: GoalUpdated,
    EventKind.GOAL_CREATION_FAILED: GoalCreationFailed,
    EventKind.SETTINGS_UPDATED: None,
    EventKind.LANGUAGE_CHANGED: LanguageChanged,
    EventKind.DATA_SAVE_ERROR: DataSaveError,
    EventKind.GOAL_MILESTONE_REACHED: GoalMilestoneReached,
    EventKind.STREAK_ACHIEVED: StreakAchieved,
    EventKind.WEIGHT_GOAL_COMPLETED: WeightGoalCompleted,
    EventKind.ACHIEVEMENT_UNLOCKED: AchievementUnlocked,
}


@dataclass(frozen=True)
class Event:
    """A message delivered to subscribers."""

    kind: EventKind
    payload: EventPayload | None = None


def check_payload(kind: EventKind, payload: object) -> None:
    """Raise TypeError when ``payload`` is not the shape bound to ``kind``."""
    expected = PAYLOAD_TYPES[kind]
    if expected is None:
        if payload is not None:
            raise TypeError(f"{kind.name} carries no payload")
        return
    if not isinstance(payload, expected):
        raise TypeError(
            f"{kind.name} expects {expected.__name__}, got {type(payload).__name__}"
        )
