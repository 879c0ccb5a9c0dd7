import logging
from datetime import datetime, timezone
from typing import Any

import requests

from agrismart.core.config import settings
from agrismart.schemas.weather import WeatherSnapshot

logger = logging.getLogger(__name__)


def _describe(payload: dict[str, Any]) -> str:
    weather = payload.get("weather") or []
    if weather and isinstance(weather[0], dict):
        return str(weather[0].get("description") or weather[0].get("main") or "").strip()
    return ""


def snapshot_from_openweather(payload: dict[str, Any]) -> WeatherSnapshot:
    """Map an OpenWeatherMap current-weather payload (metric units) to a snapshot."""
    main = payload["main"]
    observed = payload.get("dt")
    return WeatherSnapshot(
        temperature=float(main["temp"]),
        humidity=float(main["humidity"]),
        description=_describe(payload),
        wind_speed=float((payload.get("wind") or {}).get("speed", 0.0)),
        pressure=float(main["pressure"]),
        # reported in metres, capped at 10 km
        visibility=float(payload.get("visibility", 10000)) / 1000.0,
        location=str(payload.get("name") or ""),
        timestamp=(
            datetime.fromtimestamp(observed, tz=timezone.utc) if observed is not None else datetime.now(timezone.utc)
        ),
    )


class WeatherClient:
    def __init__(self, base_url: str, api_key: str, timeout: int) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch_snapshot(self, latitude: float, longitude: float) -> WeatherSnapshot | None:
        if not self.is_configured:
            logger.warning("OPENWEATHER_API_KEY is not set, skipping weather lookup")
            return None

        try:
            response = requests.get(
                f"{self.base_url}/weather",
                params={"lat": latitude, "lon": longitude, "appid": self.api_key, "units": "metric"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return snapshot_from_openweather(response.json())
        except requests.RequestException as exc:
            logger.warning("Weather lookup failed for (%s, %s): %s", latitude, longitude, exc)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unexpected weather payload for (%s, %s): %s", latitude, longitude, exc)
        return None


weather_client = WeatherClient(settings.openweather_base_url, settings.openweather_api_key, settings.weather_timeout)
