import re
from collections.abc import Mapping
from typing import Literal, NamedTuple

from agrismart.schemas.sensor import SensorReading

Status = Literal["low", "high", "optimal"]

# Both numbers must stand alone: "10,000-25,000" and "-5-10" are not ranges.
_RANGE_PATTERN = re.compile(r"(?<![\d.,-])(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)(?!\.?\d|,\d)")

# Profile key -> SensorReading attribute
READING_FIELDS: dict[str, str] = {
    "temperature": "temperature",
    "humidity": "humidity",
    "soilMoisture": "soil_moisture",
    "ph": "ph",
    "lightIntensity": "light_intensity",
    "nitrogen": "nitrogen",
    "phosphorus": "phosphorus",
    "potassium": "potassium",
}


class OptimalRange(NamedTuple):
    min: float
    max: float


def parse_optimal_range(text: str | None) -> OptimalRange | None:
    """Extract ``(min, max)`` from strings like ``"18-25°C"`` or ``"6.0 - 6.8"``.

    Returns ``None`` when there is no ``<number>-<number>`` pair, or when the
    pair is inverted.
    """
    if not text:
        return None
    match = _RANGE_PATTERN.search(text)
    if match is None:
        return None
    low, high = float(match.group(1)), float(match.group(2))
    if low > high:
        return None
    return OptimalRange(low, high)


def classify_status(value: float, optimal: OptimalRange | None) -> Status:
    # unknown range never raises an alarm
    if optimal is None:
        return "optimal"
    if value < optimal.min:
        return "low"
    if value > optimal.max:
        return "high"
    return "optimal"


def field_statuses(reading: SensorReading, optimal_conditions: Mapping[str, str]) -> dict[str, Status]:
    statuses: dict[str, Status] = {}
    for key, attribute in READING_FIELDS.items():
        value = getattr(reading, attribute)
        if value is None or key not in optimal_conditions:
            continue
        statuses[key] = classify_status(value, parse_optimal_range(optimal_conditions[key]))
    return statuses
