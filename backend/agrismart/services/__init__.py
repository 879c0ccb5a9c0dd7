from agrismart.services.advisor import PlantAdvisor, get_advisor, plant_advisor
from agrismart.services.fallback_engine import build_fallback_assessment
from agrismart.services.gemini_client import GeminiClient, GeminiError, gemini_client
from agrismart.services.optimal_range import OptimalRange, classify_status, field_statuses, parse_optimal_range
from agrismart.services.plant_profiles import get_plant_profile, list_plant_types, resolve_plant_key
from agrismart.services.weather_client import WeatherClient, weather_client
from agrismart.services.weather_impact import classify_weather_impact

__all__ = [
    "GeminiClient",
    "GeminiError",
    "OptimalRange",
    "PlantAdvisor",
    "WeatherClient",
    "build_fallback_assessment",
    "classify_status",
    "classify_weather_impact",
    "field_statuses",
    "gemini_client",
    "get_advisor",
    "get_plant_profile",
    "list_plant_types",
    "parse_optimal_range",
    "plant_advisor",
    "resolve_plant_key",
    "weather_client",
]
