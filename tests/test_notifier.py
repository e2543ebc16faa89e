"""Tests for the update notifier."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from weight_tracker.domain.events import (
    AchievementUnlocked,
    DataSaveError,
    Event,
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
from weight_tracker.services.notifier import UpdateNotifier
from tests.conftest import EventRecorder


def _goal() -> WeightGoal:
    now = datetime.now(tz=UTC)
    return WeightGoal(
        id=uuid4(),
        target_weight=70.0,
        target_date=None,
        start_date=now,
        start_weight=80.0,
        is_active=True,
        created_at=now,
        updated_at=now,
    )


@pytest.mark.parametrize(
    ("method", "kind"),
    [
        ("trigger_quick_log", EventKind.OPEN_QUICK_LOG),
        ("trigger_open_charts", EventKind.OPEN_CHARTS),
        ("trigger_open_goals", EventKind.OPEN_GOALS),
        ("trigger_open_settings", EventKind.OPEN_SETTINGS),
        ("trigger_open_main_view", EventKind.OPEN_MAIN_VIEW),
        ("notify_weight_data_updated", EventKind.WEIGHT_DATA_UPDATED),
        ("notify_settings_updated", EventKind.SETTINGS_UPDATED),
    ],
)
def test_payloadless_events(
    notifier: UpdateNotifier, recorder: EventRecorder, method: str, kind: EventKind
) -> None:
    getattr(notifier, method)()

    assert recorder.events == [Event(kind=kind, payload=None)]


def test_weight_data_updated_scenario(bus: EventBus, notifier: UpdateNotifier) -> None:
    calls: list[tuple[str, object]] = []
    handle_a = bus.subscribe(
        EventKind.WEIGHT_DATA_UPDATED, lambda e: calls.append(("a", e.payload))
    )
    bus.subscribe(
        EventKind.WEIGHT_DATA_UPDATED, lambda e: calls.append(("b", e.payload))
    )

    notifier.notify_weight_data_updated()
    assert calls == [("a", None), ("b", None)]

    handle_a.cancel()
    calls.clear()
    notifier.notify_weight_data_updated()
    assert calls == [("b", None)]


def test_goal_milestone_reaches_only_milestone_subscribers(
    notifier: UpdateNotifier, recorder: EventRecorder
) -> None:
    goal = _goal()

    notifier.notify_goal_milestone_reached(progress=0.5, goal=goal)

    assert recorder.kinds() == [EventKind.GOAL_MILESTONE_REACHED]
    payload = recorder.events[0].payload
    assert payload == GoalMilestoneReached(progress=0.5, goal=goal)
    assert payload.goal is goal


def test_goal_updated_distinguishes_cleared_goal(
    notifier: UpdateNotifier, recorder: EventRecorder
) -> None:
    goal = _goal()

    notifier.notify_goal_updated(None)
    notifier.notify_goal_updated(goal)

    cleared, present = recorder.of(EventKind.GOAL_UPDATED)
    assert cleared.payload == GoalUpdated(goal=None)
    assert present.payload == GoalUpdated(goal=goal)
    assert cleared.payload != present.payload


def test_goal_creation_failed_carries_error(
    bus: EventBus, notifier: UpdateNotifier
) -> None:
    received: list[Event] = []
    bus.subscribe(EventKind.GOAL_CREATION_FAILED, received.append)

    notifier.notify_goal_creation_failed(error="disk full")

    assert len(received) == 1
    assert isinstance(received[0].payload, GoalCreationFailed)
    assert received[0].payload.error == "disk full"


def test_payload_events(notifier: UpdateNotifier, recorder: EventRecorder) -> None:
    goal = _goal()
    error = OSError("read-only")

    notifier.notify_data_save_error(error)
    notifier.notify_streak_achieved(days=7)
    notifier.notify_weight_goal_completed(goal)
    notifier.notify_language_changed("es-ES")
    notifier.notify_achievement_unlocked(AchievementType.FIRST_ENTRY)

    assert [event.payload for event in recorder.events] == [
        DataSaveError(error=error),
        StreakAchieved(days=7),
        WeightGoalCompleted(goal=goal),
        LanguageChanged(language="es-ES"),
        AchievementUnlocked(achievement=AchievementType.FIRST_ENTRY),
    ]
