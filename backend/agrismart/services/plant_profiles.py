"""Optimal growing ranges per plant type.

The table is built once at import time and only ever handed out through
read-only ``MappingProxyType`` views.
"""

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_PLANT = "default"

_PROFILES: dict[str, dict[str, str]] = {
    DEFAULT_PLANT: {
        "temperature": "18-25°C",
        "humidity": "40-70%",
        "soilMoisture": "30-60%",
        "ph": "6.0-7.0",
        "lightIntensity": "10000-25000 lux",
        "nitrogen": "100-200 ppm",
        "phosphorus": "40-80 ppm",
        "potassium": "120-220 ppm",
    },
    "tomato": {
        "temperature": "21-27°C",
        "humidity": "60-80%",
        "soilMoisture": "50-70%",
        "ph": "6.0-6.8",
        "lightIntensity": "20000-30000 lux",
        "nitrogen": "120-200 ppm",
        "phosphorus": "50-90 ppm",
        "potassium": "150-250 ppm",
    },
    "lettuce": {
        "temperature": "15-21°C",
        "humidity": "50-70%",
        "soilMoisture": "50-70%",
        "ph": "6.0-7.0",
        "lightIntensity": "10000-20000 lux",
        "nitrogen": "100-180 ppm",
        "phosphorus": "40-70 ppm",
        "potassium": "120-200 ppm",
    },
    "carrot": {
        "temperature": "15-21°C",
        "humidity": "40-60%",
        "soilMoisture": "40-60%",
        "ph": "6.0-6.8",
        "lightIntensity": "20000-30000 lux",
        "nitrogen": "80-150 ppm",
        "phosphorus": "50-100 ppm",
        "potassium": "150-250 ppm",
    },
}

PLANT_PROFILES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {name: MappingProxyType(dict(profile)) for name, profile in _PROFILES.items()}
)
del _PROFILES


def resolve_plant_key(plant_type: str | None) -> str:
    """Return the table key used for ``plant_type``: exact lower-cased match or ``default``."""
    if not plant_type:
        return DEFAULT_PLANT
    key = plant_type.lower()
    return key if key in PLANT_PROFILES else DEFAULT_PLANT


def get_plant_profile(plant_type: str | None) -> Mapping[str, str]:
    return PLANT_PROFILES[resolve_plant_key(plant_type)]


def list_plant_types() -> list[str]:
    return sorted(name for name in PLANT_PROFILES if name != DEFAULT_PLANT)
