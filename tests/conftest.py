"""
Shared fixtures for the AgriSmart test suite.

Provides:
- Factories for sensor readings and weather snapshots
- Mocked Gemini and OpenWeather clients (no network access)
- A FastAPI TestClient wired to an advisor built on those mocks
"""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from agrismart.main import app
from agrismart.schemas import SensorReading, WeatherSnapshot
from agrismart.services import GeminiClient, PlantAdvisor, WeatherClient, get_advisor

FAVORABLE_PAYLOAD: dict[str, Any] = {
    "temperature": 22,
    "humidity": 65,
    "soilMoisture": 45,
    "ph": 6.8,
    "lightIntensity": 18000,
    "nitrogen": 150,
    "phosphorus": 60,
    "potassium": 200,
}


@pytest.fixture
def make_reading():
    """Build a SensorReading from favorable defaults plus overrides (None drops a field)."""

    def _make(**overrides: Any) -> SensorReading:
        payload = {**FAVORABLE_PAYLOAD, **overrides}
        return SensorReading.model_validate({k: v for k, v in payload.items() if v is not None})

    return _make


@pytest.fixture
def make_snapshot():
    """Build a WeatherSnapshot with calm conditions plus overrides."""

    def _make(**overrides: Any) -> WeatherSnapshot:
        values: dict[str, Any] = {
            "temperature": 20.0,
            "humidity": 55.0,
            "description": "clear sky",
            "wind_speed": 3.0,
            "pressure": 1013.0,
            "visibility": 10.0,
            "uv_index": None,
            "location": "Wageningen",
            "timestamp": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return WeatherSnapshot(**values)

    return _make


@pytest.fixture
def ai_client():
    client = Mock(spec=GeminiClient)
    client.is_configured = False
    return client


@pytest.fixture
def weather_client():
    client = Mock(spec=WeatherClient)
    client.is_configured = True
    client.fetch_snapshot.return_value = None
    return client


@pytest.fixture
def advisor(ai_client, weather_client):
    return PlantAdvisor(ai_client, weather_client)


@pytest.fixture
def client(advisor):
    app.dependency_overrides[get_advisor] = lambda: advisor
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
