"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import create_client

from weight_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from weight_tracker.adapters.supabase_weight_entry_repository import (
    SupabaseWeightEntryRepository,
)
from weight_tracker.adapters.supabase_weight_goal_repository import (
    SupabaseWeightGoalRepository,
)
from weight_tracker.app_logging import configure_logging
from weight_tracker.config import Settings
from weight_tracker.domain.models import WeightUnit
from weight_tracker.services.achievements import AchievementTracker
from weight_tracker.services.event_bus import EventBus
from weight_tracker.services.goals import GoalService, WeightGoalRepository
from weight_tracker.services.milestones import GoalProgressObserver
from weight_tracker.services.notifier import UpdateNotifier
from weight_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from weight_tracker.services.weights import WeightEntryRepository, WeightEntryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    ``event_bus`` and ``notifier`` are the single instances for the process;
    collaborators receive them from here instead of reaching for globals.
    """

    settings: Settings
    event_bus: EventBus
    notifier: UpdateNotifier
    weight_service: WeightEntryService
    goal_service: GoalService
    user_settings_service: UserSettingsService
    goal_progress_observer: GoalProgressObserver
    achievement_tracker: AchievementTracker
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container backed by Supabase."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return wire_container(
        settings=resolved_settings,
        weight_repository=SupabaseWeightEntryRepository(supabase_client),
        goal_repository=SupabaseWeightGoalRepository(supabase_client),
        user_settings_repository=SupabaseUserSettingsRepository(supabase_client),
    )


def wire_container(
    settings: Settings,
    weight_repository: WeightEntryRepository,
    goal_repository: WeightGoalRepository,
    user_settings_repository: UserSettingsRepository,
) -> AppContainer:
    """Wire services around the given repositories."""
    event_bus = EventBus()
    notifier = UpdateNotifier(event_bus)
    weight_service = WeightEntryService(
        repository=weight_repository,
        notifier=notifier,
        timezone_name=settings.timezone,
        recent_limit=settings.recent_entries_limit,
        streak_milestones=tuple(settings.streak_milestone_days),
    )
    goal_service = GoalService(
        repository=goal_repository,
        entries=weight_service,
        notifier=notifier,
        milestones=tuple(settings.goal_milestones),
    )
    user_settings_service = UserSettingsService(
        repository=user_settings_repository,
        notifier=notifier,
        default_unit=WeightUnit(settings.default_unit),
        default_target_weight=settings.default_target_weight,
        default_reminder_time=settings.default_reminder_time,
    )
    goal_progress_observer = GoalProgressObserver(event_bus, goal_service)
    goal_progress_observer.setup_notification_observers()
    achievement_tracker = AchievementTracker(
        event_bus, notifier, weight_service, goal_service
    )
    achievement_tracker.setup_notification_observers()

    def close_resources() -> None:
        goal_progress_observer.remove_notification_observers()
        achievement_tracker.remove_notification_observers()

    return AppContainer(
        settings=settings,
        event_bus=event_bus,
        notifier=notifier,
        weight_service=weight_service,
        goal_service=goal_service,
        user_settings_service=user_settings_service,
        goal_progress_observer=goal_progress_observer,
        achievement_tracker=achievement_tracker,
        close_resources=close_resources,
    )
