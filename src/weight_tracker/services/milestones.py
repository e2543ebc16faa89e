"""Goal progress tracking driven by weight updates."""

from weight_tracker.domain.events import Event, EventKind
from weight_tracker.services.event_bus import EventBus
from weight_tracker.services.goals import GoalService
from weight_tracker.services.observers import NotificationObserver


class GoalProgressObserver(NotificationObserver):
    """Re-evaluates goal milestones whenever weight data changes."""

    def __init__(self, bus: EventBus, goal_service: GoalService) -> None:
        super().__init__(bus)
        self.goal_service = goal_service

    def setup_notification_observers(self) -> None:
        self.observe(EventKind.WEIGHT_DATA_UPDATED, self._on_weight_data_updated)

    def _on_weight_data_updated(self, _event: Event) -> None:
        self.goal_service.evaluate_progress()
