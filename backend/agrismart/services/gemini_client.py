import json
import logging
import re
from typing import Any

import requests

from agrismart.core.config import settings
from agrismart.schemas.sensor import SensorReading
from agrismart.schemas.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```json|```")

RESPONSE_SCHEMA = """{
  "assessment": "overall assessment text",
  "problems": ["problem1", "problem2", ...],
  "recommendations": ["recommendation1", "recommendation2", ...],
  "preventativeCare": ["care_tip1", "care_tip2", ...],
  "optimalConditions": {
    "temperature": "optimal range in °C",
    "humidity": "optimal range in %",
    "soilMoisture": "optimal range in %",
    "ph": "optimal pH range",
    "lightIntensity": "optimal range in lux",
    "nitrogen": "optimal range in ppm",
    "phosphorus": "optimal range in ppm",
    "potassium": "optimal range in ppm"
  }
}"""


class GeminiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def build_prompt(reading: SensorReading, weather: WeatherSnapshot | None = None) -> str:
    lines = [
        "Analyze these agricultural sensor readings and provide:",
        "1. An overall assessment of soil and plant health.",
        "2. Specific problems detected (if any).",
        "3. Practical recommendations to improve current conditions.",
        "4. A list of preventative measures to prevent the plant from dying and ensure its long-term health.",
        "5. The real optimal conditions for the specified plant type, not generic ones.",
        "",
        "Sensor Data:",
        f"- Temperature: {reading.temperature}°C",
        f"- Humidity: {reading.humidity}%",
        f"- Soil Moisture: {reading.soil_moisture}%",
        f"- Soil pH: {reading.ph}",
        f"- Light Intensity: {reading.light_intensity} lux",
    ]
    for label, value in (
        ("Nitrogen", reading.nitrogen),
        ("Phosphorus", reading.phosphorus),
        ("Potassium", reading.potassium),
    ):
        if value is not None:
            lines.append(f"- {label}: {value} ppm")
    lines.append(f"- Plant Type: {reading.plant_type or 'Not specified'}")

    if weather is not None:
        lines += [
            "",
            f"Current Weather ({weather.location or 'user location'}):",
            f"- Conditions: {weather.description or 'unknown'}",
            f"- Air Temperature: {weather.temperature}°C",
            f"- Air Humidity: {weather.humidity}%",
            f"- Wind Speed: {weather.wind_speed} m/s",
            f"- Pressure: {weather.pressure} hPa",
            f"- Visibility: {weather.visibility} km",
        ]
        if weather.uv_index is not None:
            lines.append(f"- UV Index: {weather.uv_index}")

    lines += [
        "",
        "Format your response as a JSON object with this exact structure:",
        RESPONSE_SCHEMA,
        "Please provide only the JSON response without any additional text.",
    ]
    return "\n".join(lines)


def extract_text(payload: dict[str, Any]) -> str:
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    chunks = [part.get("text") for part in parts if isinstance(part, dict)]
    return "\n".join(chunk for chunk in chunks if isinstance(chunk, str) and chunk).strip()


def parse_json_text(text: str) -> dict[str, Any]:
    """Parse a model reply that may be wrapped in ```json fences."""
    try:
        parsed = json.loads(_FENCE_PATTERN.sub("", text).strip())
    except json.JSONDecodeError as exc:
        raise GeminiError(f"Could not parse Gemini response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise GeminiError("Gemini response is not a JSON object")
    return parsed


class GeminiClient:
    def __init__(self, base_url: str, api_key: str, model: str, timeout: int) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def generate_content(self, prompt: str) -> str:
        try:
            response = requests.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                params={"key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc

        if response.status_code == 429:
            logger.warning("Gemini API quota exceeded")
        elif response.status_code == 404:
            logger.warning("Gemini model %s not found", self.model)
        if not response.ok:
            raise GeminiError(f"Gemini API returned {response.status_code}", status_code=response.status_code)

        try:
            text = extract_text(response.json())
        except ValueError as exc:
            raise GeminiError("Gemini API returned a non-JSON body") from exc
        if not text:
            raise GeminiError("Gemini API returned no candidates")
        return text

    def generate_assessment(self, reading: SensorReading, weather: WeatherSnapshot | None = None) -> dict[str, Any]:
        return parse_json_text(self.generate_content(build_prompt(reading, weather)))


gemini_client = GeminiClient(
    settings.gemini_base_url,
    settings.gemini_api_key,
    settings.gemini_model,
    settings.gemini_timeout,
)
