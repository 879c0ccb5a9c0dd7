from agrismart.schemas.assessment import (
    FALLBACK_PROBLEM,
    AssessmentResult,
    PlantListResponse,
    PlantProfileOut,
    PredictionResponse,
    WeatherReport,
)
from agrismart.schemas.sensor import Coordinates, SensorReading
from agrismart.schemas.weather import RiskLevel, WeatherImpact, WeatherSnapshot

__all__ = [
    "FALLBACK_PROBLEM",
    "AssessmentResult",
    "Coordinates",
    "PlantListResponse",
    "PlantProfileOut",
    "PredictionResponse",
    "RiskLevel",
    "SensorReading",
    "WeatherImpact",
    "WeatherReport",
    "WeatherSnapshot",
]
