"""Tests for the OpenWeatherMap client. All HTTP calls are mocked."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from agrismart.services.weather_client import WeatherClient, snapshot_from_openweather

OPENWEATHER_PAYLOAD = {
    "weather": [{"main": "Clouds", "description": "broken clouds"}],
    "main": {"temp": 14.2, "humidity": 81, "pressure": 1006},
    "visibility": 8000,
    "wind": {"speed": 6.7},
    "dt": 1714564800,
    "name": "Nairobi",
}


@pytest.fixture
def weather():
    return WeatherClient("https://weather.test/data/2.5/", "secret", timeout=3)


def _response(body=None, error: Exception | None = None) -> Mock:
    response = Mock()
    response.json.return_value = body
    if error is not None:
        response.raise_for_status.side_effect = error
    return response


class TestSnapshotFromOpenWeather:
    def test_maps_fields(self):
        snapshot = snapshot_from_openweather(OPENWEATHER_PAYLOAD)

        assert snapshot.temperature == 14.2
        assert snapshot.humidity == 81
        assert snapshot.pressure == 1006
        assert snapshot.wind_speed == 6.7
        assert snapshot.visibility == 8.0
        assert snapshot.uv_index is None
        assert snapshot.description == "broken clouds"
        assert snapshot.location == "Nairobi"
        assert snapshot.timestamp == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_defaults_for_optional_sections(self):
        snapshot = snapshot_from_openweather({"main": {"temp": 1, "humidity": 2, "pressure": 990}})
        assert snapshot.wind_speed == 0.0
        assert snapshot.visibility == 10.0
        assert snapshot.description == ""


class TestFetchSnapshot:
    def test_success(self, weather):
        with patch("agrismart.services.weather_client.requests.get", return_value=_response(OPENWEATHER_PAYLOAD)) as get:
            snapshot = weather.fetch_snapshot(-1.29, 36.82)

        assert snapshot is not None
        assert snapshot.location == "Nairobi"
        args, kwargs = get.call_args
        assert args[0] == "https://weather.test/data/2.5/weather"
        assert kwargs["params"] == {"lat": -1.29, "lon": 36.82, "appid": "secret", "units": "metric"}

    def test_missing_key_skips_lookup(self):
        client = WeatherClient("https://weather.test", "", timeout=3)
        with patch("agrismart.services.weather_client.requests.get") as get:
            assert client.fetch_snapshot(0, 0) is None
        get.assert_not_called()

    def test_http_error(self, weather):
        response = _response(error=requests.HTTPError("401 Unauthorized"))
        with patch("agrismart.services.weather_client.requests.get", return_value=response):
            assert weather.fetch_snapshot(0, 0) is None

    def test_network_error(self, weather):
        with patch("agrismart.services.weather_client.requests.get", side_effect=requests.Timeout("slow")):
            assert weather.fetch_snapshot(0, 0) is None

    @pytest.mark.parametrize("body", [{}, {"main": {"temp": "warm", "humidity": 1, "pressure": 1}}, None])
    def test_malformed_payload(self, weather, body):
        with patch("agrismart.services.weather_client.requests.get", return_value=_response(body)):
            assert weather.fetch_snapshot(0, 0) is None
