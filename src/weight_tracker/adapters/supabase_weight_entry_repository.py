"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from weight_tracker.domain.models import WeightEntry
from weight_tracker.services.weights import WeightEntryRepository

_TABLE = "weight_entries"


@dataclass
class SupabaseWeightEntryRepository(WeightEntryRepository):
    """Supabase implementation for weight entry persistence."""

    client: Client

    def create_entry(self, entry: WeightEntry) -> WeightEntry:
        """Insert an entry and return the stored row."""
        response = self.client.table(_TABLE).insert(_serialize(entry)).execute()
        if not response.data:
            raise RuntimeError("Failed to create weight entry")
        return _parse_entry(response.data[0])

    def update_entry(self, entry: WeightEntry) -> WeightEntry:
        """Update an entry and return the stored row."""
        payload = _serialize(entry)
        payload.pop("id")
        payload.pop("created_at")
        response = (
            self.client.table(_TABLE).update(payload).eq("id", str(entry.id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update weight entry")
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry by id."""
        self.client.table(_TABLE).delete().eq("id", str(entry_id)).execute()

    def get_entry(self, entry_id: UUID) -> WeightEntry | None:
        """Return an entry by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_recent(self, limit: int) -> list[WeightEntry]:
        """Return the newest entries."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_between(self, start: datetime, end: datetime) -> list[WeightEntry]:
        """Return entries in the time range, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .gte("timestamp", start.isoformat())
            .lte("timestamp", end.isoformat())
            .order("timestamp", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_all(self) -> list[WeightEntry]:
        """Return every entry, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _serialize(entry: WeightEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "weight": entry.weight,
        "timestamp": entry.timestamp.isoformat(),
        "unit": entry.unit.value,
        "created_at": entry.created_at.isoformat(),
        "updated_at": entry.updated_at.isoformat(),
    }


def _parse_entry(row: dict[str, object]) -> WeightEntry:
    """Parse a weight entry row into a domain model."""
    return WeightEntry(
        id=UUID(str(row["id"])),
        weight=float(row["weight"]),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
        unit=str(row.get("unit") or "kg"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
