"""Weight unit conversions."""

from weight_tracker.domain.models import WeightUnit

KILOGRAMS_PER_POUND = 0.453592
POUNDS_PER_KILOGRAM = 2.20462


def to_kilograms(value: float, unit: WeightUnit | str) -> float:
    """Convert a weight entered in ``unit`` to kilograms."""
    if WeightUnit(unit) is WeightUnit.POUNDS:
        return value * KILOGRAMS_PER_POUND
    return value


def from_kilograms(kilograms: float, unit: WeightUnit | str) -> float:
    """Convert a stored kilogram weight for display in ``unit``."""
    if WeightUnit(unit) is WeightUnit.POUNDS:
        return kilograms * POUNDS_PER_KILOGRAM
    return kilograms


def format_weight(kilograms: float, unit: WeightUnit | str) -> str:
    """Render a stored weight with one decimal and the unit suffix."""
    resolved = WeightUnit(unit)
    return f"{from_kilograms(kilograms, resolved):.1f} {resolved.value}"
