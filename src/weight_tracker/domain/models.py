"""Domain models for the weight tracker."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from uuid import UUID


class WeightUnit(str, Enum):
    """Supported weight units."""

    KILOGRAMS = "kg"
    POUNDS = "lb"


@dataclass(frozen=True)
class WeightEntry:
    """A single logged weight measurement.

    ``weight`` is always stored in kilograms; ``unit`` records the unit the
    value was entered in.
    """

    id: UUID
    weight: float
    timestamp: datetime
    unit: WeightUnit
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if self.weight <= 0:
            raise ValueError(f"Weight must be positive, got {self.weight}")
        object.__setattr__(self, "unit", WeightUnit(self.unit))


@dataclass(frozen=True)
class WeightGoal:
    """A target weight the user is working toward."""

    id: UUID
    target_weight: float
    target_date: date | None
    start_date: datetime
    start_weight: float
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserSettings:
    """Per-installation preferences.

    ``health_kit_enabled`` is kept for schema compatibility only.
    """

    id: UUID
    preferred_unit: WeightUnit
    target_weight: float
    notifications_enabled: bool
    reminder_time: time | None
    created_at: datetime
    updated_at: datetime
    health_kit_enabled: bool = False
    selected_theme: str = "system"
    preferred_language: str = "en-US"
    onboarding_completed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "preferred_unit", WeightUnit(self.preferred_unit))


class AchievementType(str, Enum):
    """Achievements a user can unlock, each at most once."""

    FIRST_ENTRY = "first_entry"
    WEEK_STREAK = "week_streak"
    MONTH_STREAK = "month_streak"
    WEIGHT_LOSS_5KG = "weight_loss_5kg"
    WEIGHT_LOSS_10KG = "weight_loss_10kg"
    CONSISTENT_LOGGER = "consistent_logger"
    GOAL_ACHIEVER = "goal_achiever"
    DATA_EXPLORER = "data_explorer"
