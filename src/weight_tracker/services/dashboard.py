"""Main screen state kept current through bus events."""

from weight_tracker.domain.events import (
    DataSaveError,
    Event,
    EventKind,
    GoalCreationFailed,
)
from weight_tracker.domain.models import WeightEntry, WeightGoal, WeightUnit
from weight_tracker.services.event_bus import EventBus
from weight_tracker.services.goals import GoalService
from weight_tracker.services.observers import NotificationObserver
from weight_tracker.services.user_settings import UserSettingsService
from weight_tracker.services.weights import WeightEntryService


class DashboardViewModel(NotificationObserver):
    """Latest weight, active goal and streak for the main view."""

    def __init__(
        self,
        bus: EventBus,
        weight_service: WeightEntryService,
        goal_service: GoalService,
        user_settings_service: UserSettingsService,
    ) -> None:
        super().__init__(bus)
        self.weight_service = weight_service
        self.goal_service = goal_service
        self.user_settings_service = user_settings_service
        self.latest_entry: WeightEntry | None = None
        self.active_goal: WeightGoal | None = None
        self.progress: float | None = None
        self.streak = 0
        self.preferred_unit = WeightUnit.KILOGRAMS
        self.last_error: object | None = None
        self.refresh_count = 0

    def setup_notification_observers(self) -> None:
        self.observe(EventKind.WEIGHT_DATA_UPDATED, self._on_data_changed)
        self.observe(EventKind.GOAL_UPDATED, self._on_data_changed)
        self.observe(EventKind.SETTINGS_UPDATED, self._on_data_changed)
        self.observe(EventKind.DATA_SAVE_ERROR, self._on_error)
        self.observe(EventKind.GOAL_CREATION_FAILED, self._on_error)
        self.refresh()

    def refresh(self) -> None:
        """Reload everything the dashboard displays."""
        self.latest_entry = self.weight_service.latest_entry()
        self.active_goal = self.goal_service.active_goal()
        self.progress = self.goal_service.progress(self.active_goal)
        self.streak = self.weight_service.current_streak()
        self.preferred_unit = self.user_settings_service.get_or_create().preferred_unit
        self.refresh_count += 1

    @property
    def latest_weight_label(self) -> str | None:
        if self.latest_entry is None:
            return None
        return self.user_settings_service.format_weight(self.latest_entry.weight)

    def _on_data_changed(self, _event: Event) -> None:
        self.refresh()

    def _on_error(self, event: Event) -> None:
        if isinstance(event.payload, DataSaveError | GoalCreationFailed):
            self.last_error = event.payload.error
