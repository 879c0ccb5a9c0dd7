from agrismart.schemas.weather import RiskLevel, WeatherImpact, WeatherSnapshot

FROST_TEMPERATURE = 5.0
HEAT_TEMPERATURE = 35.0
COMFORT_TEMPERATURE = (10.0, 30.0)
HUMIDITY_LIMITS = (30.0, 90.0)
HIGH_WIND_SPEED = 15.0
STORM_PRESSURE = 1000.0
HIGH_UV_INDEX = 8.0
FOG_VISIBILITY = 1.0


def _escalate(current: RiskLevel, candidate: RiskLevel) -> RiskLevel:
    return candidate if candidate.rank > current.rank else current


def classify_weather_impact(weather: WeatherSnapshot, temperature: float, humidity: float) -> WeatherImpact:
    """Rate how threatening current weather is for the plant.

    ``temperature`` and ``humidity`` are the user's own readings; wind,
    pressure, UV and visibility come from ``weather``. All rules are applied
    and the risk level only ever goes up.
    """
    risk = RiskLevel.LOW
    issues: list[str] = []
    recommendations: list[str] = []
    alerts: list[str] = []

    if temperature < FROST_TEMPERATURE:
        issues.append(f"Frost risk: temperature is below {FROST_TEMPERATURE:g}°C")
        alerts.append("Frost warning: protect plants from freezing temperatures")
        recommendations.append("Cover plants with frost cloth or move them to a sheltered area")
        risk = _escalate(risk, RiskLevel.HIGH)
    elif temperature > HEAT_TEMPERATURE:
        issues.append(f"Heat stress: temperature is above {HEAT_TEMPERATURE:g}°C")
        alerts.append("Heat warning: plants are at risk of heat stress")
        recommendations.append("Provide shade and increase watering frequency")
        risk = _escalate(risk, RiskLevel.HIGH)
    elif temperature < COMFORT_TEMPERATURE[0] or temperature > COMFORT_TEMPERATURE[1]:
        issues.append(
            f"Temperature is in a suboptimal range (outside "
            f"{COMFORT_TEMPERATURE[0]:g}-{COMFORT_TEMPERATURE[1]:g}°C)"
        )
        risk = _escalate(risk, RiskLevel.MEDIUM)

    if humidity > HUMIDITY_LIMITS[1]:
        issues.append("Excessive humidity increases the risk of fungal disease")
        recommendations.append("Improve air circulation around plants")
        risk = _escalate(risk, RiskLevel.MEDIUM)
    elif humidity < HUMIDITY_LIMITS[0]:
        issues.append("Low humidity may cause plants to dry out")
        recommendations.append("Mist plants or use a humidifier to raise humidity")
        risk = _escalate(risk, RiskLevel.MEDIUM)

    if weather.wind_speed > HIGH_WIND_SPEED:
        issues.append(f"High wind speed ({weather.wind_speed:g} m/s) may damage plants")
        alerts.append("High wind warning: secure and stake vulnerable plants")
        recommendations.append("Stake tall plants and set up windbreaks")
        risk = _escalate(risk, RiskLevel.MEDIUM)

    if weather.pressure < STORM_PRESSURE:
        issues.append(f"Low atmospheric pressure ({weather.pressure:g} hPa): storm conditions possible")
        alerts.append("Storm warning: low pressure system detected")
        recommendations.append("Secure loose items and protect plants from storm damage")
        risk = RiskLevel.HIGH

    if weather.uv_index is not None and weather.uv_index > HIGH_UV_INDEX:
        issues.append(f"High UV index ({weather.uv_index:g}) may scorch leaves")
        recommendations.append("Provide shade during peak sunlight hours")
        risk = _escalate(risk, RiskLevel.MEDIUM)

    if weather.visibility < FOG_VISIBILITY:
        issues.append("Poor visibility: fog or mist present")
        recommendations.append("Monitor light absorption, as fog reduces available sunlight")
        risk = _escalate(risk, RiskLevel.MEDIUM)

    return WeatherImpact(risk_level=risk, issues=issues, recommendations=recommendations, alerts=alerts)
