"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import datetime, time
from uuid import UUID

from supabase import Client

from weight_tracker.domain.models import UserSettings
from weight_tracker.services.user_settings import UserSettingsRepository

_TABLE = "user_settings"


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_settings(self) -> UserSettings | None:
        """Return the oldest settings row; there is one per installation."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("created_at", desc=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_settings(response.data[0])

    def create_settings(self, settings: UserSettings) -> UserSettings:
        """Insert the settings row."""
        response = self.client.table(_TABLE).insert(_serialize(settings)).execute()
        if not response.data:
            raise RuntimeError("Failed to create user settings")
        return _parse_settings(response.data[0])

    def update_settings(self, settings: UserSettings) -> UserSettings:
        """Update the settings row."""
        payload = _serialize(settings)
        payload.pop("id")
        payload.pop("created_at")
        response = (
            self.client.table(_TABLE)
            .update(payload)
            .eq("id", str(settings.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user settings")
        return _parse_settings(response.data[0])


def _serialize(settings: UserSettings) -> dict[str, object]:
    return {
        "id": str(settings.id),
        "preferred_unit": settings.preferred_unit.value,
        "target_weight": settings.target_weight,
        "notifications_enabled": settings.notifications_enabled,
        "reminder_time": (
            settings.reminder_time.isoformat() if settings.reminder_time else None
        ),
        "health_kit_enabled": settings.health_kit_enabled,
        "selected_theme": settings.selected_theme,
        "preferred_language": settings.preferred_language,
        "onboarding_completed": settings.onboarding_completed,
        "created_at": settings.created_at.isoformat(),
        "updated_at": settings.updated_at.isoformat(),
    }


def _parse_settings(row: dict[str, object]) -> UserSettings:
    """Parse a settings row into a domain model."""
    reminder_raw = row.get("reminder_time")
    reminder_time = (
        time.fromisoformat(reminder_raw)
        if isinstance(reminder_raw, str) and reminder_raw
        else None
    )
    return UserSettings(
        id=UUID(str(row["id"])),
        preferred_unit=str(row.get("preferred_unit") or "kg"),
        target_weight=float(row.get("target_weight") or 0.0),
        notifications_enabled=bool(row.get("notifications_enabled", False)),
        reminder_time=reminder_time,
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
        health_kit_enabled=bool(row.get("health_kit_enabled", False)),
        selected_theme=str(row.get("selected_theme") or "system"),
        preferred_language=str(row.get("preferred_language") or "en-US"),
        onboarding_completed=bool(row.get("onboarding_completed", False)),
    )
