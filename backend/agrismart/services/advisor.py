import logging

from pydantic import ValidationError

from agrismart.schemas.assessment import AssessmentResult, PredictionResponse
from agrismart.schemas.sensor import SensorReading
from agrismart.schemas.weather import WeatherSnapshot
from agrismart.services.fallback_engine import build_fallback_assessment
from agrismart.services.gemini_client import GeminiClient, GeminiError, gemini_client
from agrismart.services.plant_profiles import get_plant_profile
from agrismart.services.weather_client import WeatherClient, weather_client
from agrismart.services.weather_impact import classify_weather_impact

logger = logging.getLogger(__name__)


class PlantAdvisor:
    """Combines the AI assessment, its rule-based fallback and the weather lookup."""

    def __init__(self, ai_client: GeminiClient, weather: WeatherClient) -> None:
        self.ai_client = ai_client
        self.weather_client = weather

    def lookup_weather(self, reading: SensorReading) -> WeatherSnapshot | None:
        if reading.location is None:
            return None
        return self.weather_client.fetch_snapshot(reading.location.latitude, reading.location.longitude)

    def assess(self, reading: SensorReading, weather: WeatherSnapshot | None = None) -> AssessmentResult:
        if not self.ai_client.is_configured:
            logger.info("GEMINI_API_KEY is not set, using fallback assessment")
            return build_fallback_assessment(reading)

        try:
            raw = self.ai_client.generate_assessment(reading, weather)
            result = AssessmentResult.model_validate({**raw, "source": "ai"})
        except GeminiError as exc:
            logger.error("Gemini API error (status=%s): %s, using fallback data", exc.status_code, exc)
            return build_fallback_assessment(reading)
        except ValidationError as exc:
            logger.error("Gemini response does not match the assessment shape, using fallback data: %s", exc)
            return build_fallback_assessment(reading)
        except Exception:
            logger.exception("Unexpected error during Gemini analysis, using fallback data")
            return build_fallback_assessment(reading)

        optimal = {**get_plant_profile(reading.plant_type), **result.optimal_conditions}
        return result.model_copy(update={"optimal_conditions": optimal})

    def predict(self, reading: SensorReading) -> PredictionResponse:
        weather = self.lookup_weather(reading)
        assessment = self.assess(reading, weather)
        impact = None
        if weather is not None:
            impact = classify_weather_impact(weather, reading.temperature, reading.humidity)

        return PredictionResponse(
            **assessment.model_dump(exclude={"is_fallback"}),
            weather_data=weather,
            weather_impact=impact,
        )


plant_advisor = PlantAdvisor(gemini_client, weather_client)


def get_advisor() -> PlantAdvisor:
    return plant_advisor
