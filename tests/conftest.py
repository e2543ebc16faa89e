"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import pytest

from weight_tracker.config import Settings
from weight_tracker.containers import AppContainer, wire_container
from weight_tracker.domain.events import Event, EventKind
from weight_tracker.domain.models import UserSettings, WeightEntry, WeightGoal
from weight_tracker.services.event_bus import EventBus
from weight_tracker.services.goals import GoalService, WeightGoalRepository
from weight_tracker.services.notifier import UpdateNotifier
from weight_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from weight_tracker.services.weights import WeightEntryRepository, WeightEntryService


@dataclass
class InMemoryWeightEntryRepository(WeightEntryRepository):
    """In-memory weight entry repository for tests."""

    entries: dict[UUID, WeightEntry] = field(default_factory=dict)
    fail_with: Exception | None = None

    def create_entry(self, entry: WeightEntry) -> WeightEntry:
        if self.fail_with is not None:
            raise self.fail_with
        self.entries[entry.id] = entry
        return entry

    def update_entry(self, entry: WeightEntry) -> WeightEntry:
        if self.fail_with is not None:
            raise self.fail_with
        self.entries[entry.id] = entry
        return entry

    def delete_entry(self, entry_id: UUID) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.entries.pop(entry_id, None)

    def get_entry(self, entry_id: UUID) -> WeightEntry | None:
        return self.entries.get(entry_id)

    def list_recent(self, limit: int) -> list[WeightEntry]:
        return self.list_all()[:limit]

    def list_between(self, start: datetime, end: datetime) -> list[WeightEntry]:
        return sorted(
            (e for e in self.entries.values() if start <= e.timestamp <= end),
            key=lambda e: e.timestamp,
        )

    def list_all(self) -> list[WeightEntry]:
        return sorted(self.entries.values(), key=lambda e: e.timestamp, reverse=True)


@dataclass
class InMemoryWeightGoalRepository(WeightGoalRepository):
    """In-memory weight goal repository for tests."""

    goals: dict[UUID, WeightGoal] = field(default_factory=dict)
    fail_with: Exception | None = None

    def create_goal(self, goal: WeightGoal) -> WeightGoal:
        if self.fail_with is not None:
            raise self.fail_with
        self.goals[goal.id] = goal
        return goal

    def update_goal(self, goal: WeightGoal) -> WeightGoal:
        if self.fail_with is not None:
            raise self.fail_with
        self.goals[goal.id] = goal
        return goal

    def get_active_goal(self) -> WeightGoal | None:
        active = [goal for goal in self.list_goals() if goal.is_active]
        return active[0] if active else None

    def list_goals(self) -> list[WeightGoal]:
        return sorted(self.goals.values(), key=lambda g: g.created_at, reverse=True)


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    settings: UserSettings | None = None
    created: int = 0
    fail_with: Exception | None = None

    def get_settings(self) -> UserSettings | None:
        return self.settings

    def create_settings(self, settings: UserSettings) -> UserSettings:
        self.created += 1
        self.settings = settings
        return settings

    def update_settings(self, settings: UserSettings) -> UserSettings:
        if self.fail_with is not None:
            raise self.fail_with
        self.settings = settings
        return settings


@dataclass
class EventRecorder:
    """Subscribes to every event kind and records deliveries."""

    events: list[Event] = field(default_factory=list)

    def attach(self, bus: EventBus) -> "EventRecorder":
        for kind in EventKind:
            bus.subscribe(kind, self.events.append)
        return self

    def kinds(self) -> list[EventKind]:
        return [event.kind for event in self.events]

    def of(self, kind: EventKind) -> list[Event]:
        return [event for event in self.events if event.kind == kind]


@pytest.fixture(autouse=True)
def reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("weight_tracker")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def notifier(bus: EventBus) -> UpdateNotifier:
    return UpdateNotifier(bus)


@pytest.fixture
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder().attach(bus)


@pytest.fixture
def weight_repository() -> InMemoryWeightEntryRepository:
    return InMemoryWeightEntryRepository()


@pytest.fixture
def goal_repository() -> InMemoryWeightGoalRepository:
    return InMemoryWeightGoalRepository()


@pytest.fixture
def user_settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def weight_service(
    weight_repository: InMemoryWeightEntryRepository, notifier: UpdateNotifier
) -> WeightEntryService:
    return WeightEntryService(repository=weight_repository, notifier=notifier)


@pytest.fixture
def goal_service(
    goal_repository: InMemoryWeightGoalRepository,
    weight_service: WeightEntryService,
    notifier: UpdateNotifier,
) -> GoalService:
    return GoalService(
        repository=goal_repository, entries=weight_service, notifier=notifier
    )


@pytest.fixture
def user_settings_service(
    user_settings_repository: InMemoryUserSettingsRepository,
    notifier: UpdateNotifier,
) -> UserSettingsService:
    return UserSettingsService(repository=user_settings_repository, notifier=notifier)


@pytest.fixture
def container(settings: Settings) -> Iterator[AppContainer]:
    app_container = wire_container(
        settings=settings,
        weight_repository=InMemoryWeightEntryRepository(),
        goal_repository=InMemoryWeightGoalRepository(),
        user_settings_repository=InMemoryUserSettingsRepository(),
    )
    yield app_container
    app_container.close_resources()
