"""Supabase repository for weight goals."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from weight_tracker.domain.models import WeightGoal
from weight_tracker.services.goals import WeightGoalRepository

_TABLE = "weight_goals"


@dataclass
class SupabaseWeightGoalRepository(WeightGoalRepository):
    """Supabase implementation for weight goal persistence."""

    client: Client

    def create_goal(self, goal: WeightGoal) -> WeightGoal:
        """Insert a goal and return the stored row."""
        response = self.client.table(_TABLE).insert(_serialize(goal)).execute()
        if not response.data:
            raise RuntimeError("Failed to create weight goal")
        return _parse_goal(response.data[0])

    def update_goal(self, goal: WeightGoal) -> WeightGoal:
        """Update a goal and return the stored row."""
        payload = _serialize(goal)
        payload.pop("id")
        payload.pop("created_at")
        response = (
            self.client.table(_TABLE).update(payload).eq("id", str(goal.id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update weight goal")
        return _parse_goal(response.data[0])

    def get_active_goal(self) -> WeightGoal | None:
        """Return the most recently created active goal."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("is_active", True)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def list_goals(self) -> list[WeightGoal]:
        """Return all goals, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_goal(row) for row in response.data or []]


def _serialize(goal: WeightGoal) -> dict[str, object]:
    return {
        "id": str(goal.id),
        "target_weight": goal.target_weight,
        "target_date": goal.target_date.isoformat() if goal.target_date else None,
        "start_date": goal.start_date.isoformat(),
        "start_weight": goal.start_weight,
        "is_active": goal.is_active,
        "created_at": goal.created_at.isoformat(),
        "updated_at": goal.updated_at.isoformat(),
    }


def _parse_goal(row: dict[str, object]) -> WeightGoal:
    """Parse a weight goal row into a domain model."""
    target_date_raw = row.get("target_date")
    target_date = (
        date.fromisoformat(target_date_raw[:10])
        if isinstance(target_date_raw, str) and target_date_raw
        else None
    )
    return WeightGoal(
        id=UUID(str(row["id"])),
        target_weight=float(row["target_weight"]),
        target_date=target_date,
        start_date=datetime.fromisoformat(str(row["start_date"])),
        start_weight=float(row.get("start_weight") or 0.0),
        is_active=bool(row.get("is_active", False)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
