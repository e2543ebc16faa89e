"""User settings service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime, time
from typing import Protocol
from uuid import uuid4

from weight_tracker.domain.models import UserSettings, WeightUnit
from weight_tracker.domain.units import format_weight
from weight_tracker.services.notifier import UpdateNotifier

_logger = logging.getLogger(__name__)


class UserSettingsRepository(Protocol):
    """Persistence interface for the installation's settings record."""

    def get_settings(self) -> UserSettings | None:
        """Return the settings record if one exists."""

    def create_settings(self, settings: UserSettings) -> UserSettings:
        """Persist the initial settings record."""

    def update_settings(self, settings: UserSettings) -> UserSettings:
        """Persist changes to the settings record."""


@dataclass
class UserSettingsService:
    """Service for reading and changing user settings."""

    repository: UserSettingsRepository
    notifier: UpdateNotifier
    default_unit: WeightUnit = WeightUnit.KILOGRAMS
    default_target_weight: float = 70.0
    default_reminder_time: time | None = time(hour=9)

    def get_or_create(self) -> UserSettings:
        """Return the settings record, creating defaults on first use."""
        existing = self.repository.get_settings()
        if existing is not None:
            return existing
        now = datetime.now(tz=UTC)
        created = self.repository.create_settings(
            UserSettings(
                id=uuid4(),
                preferred_unit=self.default_unit,
                target_weight=self.default_target_weight,
                notifications_enabled=True,
                reminder_time=self.default_reminder_time,
                created_at=now,
                updated_at=now,
            )
        )
        _logger.info("Default user settings created: id=%s", created.id)
        return created

    def update(  # noqa: PLR0913
        self,
        *,
        preferred_unit: WeightUnit | str | None = None,
        target_weight: float | None = None,
        notifications_enabled: bool | None = None,
        reminder_time: time | None = None,
        selected_theme: str | None = None,
        preferred_language: str | None = None,
    ) -> UserSettings | None:
        """Apply the given changes; fields left as None are kept."""
        current = self.get_or_create()
        changes: dict[str, object] = {}
        if preferred_unit is not None:
            changes["preferred_unit"] = WeightUnit(preferred_unit)
        if target_weight is not None:
            changes["target_weight"] = target_weight
        if notifications_enabled is not None:
            changes["notifications_enabled"] = notifications_enabled
        if reminder_time is not None:
            changes["reminder_time"] = reminder_time
        if selected_theme is not None:
            changes["selected_theme"] = selected_theme
        if preferred_language is not None:
            changes["preferred_language"] = preferred_language
        saved = self._save(replace(current, **changes))
        if saved is None:
            return None
        self.notifier.notify_settings_updated()
        if saved.preferred_language != current.preferred_language:
            self.notifier.notify_language_changed(saved.preferred_language)
        return saved

    def complete_onboarding(self) -> UserSettings | None:
        return self._save(replace(self.get_or_create(), onboarding_completed=True))

    def reset_onboarding(self) -> UserSettings | None:
        return self._save(replace(self.get_or_create(), onboarding_completed=False))

    def format_weight(self, kilograms: float) -> str:
        """Render a stored weight in the preferred unit."""
        return format_weight(kilograms, self.get_or_create().preferred_unit)

    def _save(self, settings: UserSettings) -> UserSettings | None:
        try:
            return self.repository.update_settings(
                replace(settings, updated_at=datetime.now(tz=UTC))
            )
        except Exception as exc:
            _logger.exception("Failed to save user settings")
            self.notifier.notify_data_save_error(exc)
            return None
