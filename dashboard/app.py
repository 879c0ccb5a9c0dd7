import os
from typing import Any

import pandas as pd
import plotly.express as px
import requests
import streamlit as st

from agrismart.schemas import FALLBACK_PROBLEM, SensorReading
from agrismart.services.optimal_range import READING_FIELDS, field_statuses, parse_optimal_range

DEFAULT_BACKEND_URL = os.getenv("BACKEND_API_URL", "http://localhost:8000/api")
REQUEST_TIMEOUT = 60

STATUS_BADGES = {"low": "🔵 LOW", "high": "🔴 HIGH", "optimal": "🟢 OK"}
STATUS_COLORS = {"low": "#3b82f6", "high": "#ef4444", "optimal": "#22c55e"}
RISK_BANNERS = {"low": st.success, "medium": st.warning, "high": st.error}

FIELD_LABELS = {
    "temperature": ("Temperature", "°C"),
    "humidity": ("Humidity", "%"),
    "soilMoisture": ("Soil Moisture", "%"),
    "ph": ("Soil pH", "pH"),
    "lightIntensity": ("Light Intensity", "lux"),
    "nitrogen": ("Nitrogen", "ppm"),
    "phosphorus": ("Phosphorus", "ppm"),
    "potassium": ("Potassium", "ppm"),
}


st.set_page_config(page_title="AgriSmart AI", layout="wide")


def api_get(base_url: str, path: str) -> tuple[dict[str, Any] | None, str | None]:
    try:
        response = requests.get(f"{base_url}{path}", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json(), None
    except requests.RequestException as exc:
        return None, str(exc)


def api_post(base_url: str, path: str, payload: dict[str, Any] | None = None) -> tuple[dict[str, Any] | None, str | None]:
    try:
        response = requests.post(f"{base_url}{path}", json=payload or {}, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        return None, str(exc)
    if not response.ok:
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        return None, str(detail or f"Request failed with status {response.status_code}")
    return response.json(), None


def build_range_table(reading: SensorReading, optimal_conditions: dict[str, str]) -> pd.DataFrame:
    statuses = field_statuses(reading, optimal_conditions)
    rows = []
    for key, status in statuses.items():
        label, unit = FIELD_LABELS.get(key, (key, ""))
        value = getattr(reading, READING_FIELDS[key])
        optimal = parse_optimal_range(optimal_conditions[key])
        position = None
        if optimal is not None and optimal.max > optimal.min:
            position = round((value - optimal.min) / (optimal.max - optimal.min) * 100, 1)
        rows.append(
            {
                "field": label,
                "current": f"{value:g} {unit}",
                "optimal range": optimal_conditions[key],
                "status": STATUS_BADGES[status],
                "status_key": status,
                "position": position,
            }
        )
    return pd.DataFrame(rows)


st.title("AgriSmart AI")
st.caption("AI-powered analysis of your soil and plant conditions")

with st.sidebar:
    st.header("Settings")
    backend_url = st.text_input("Backend API URL", value=DEFAULT_BACKEND_URL)
    include_weather = st.checkbox("Include live weather", value=False)
    latitude = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=0.0, format="%.4f")
    longitude = st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=0.0, format="%.4f")

health_payload, health_error = api_get(backend_url, "/health")
if health_error:
    st.error(f"Backend unavailable: {health_error}")
    st.stop()
if not health_payload.get("ai_configured"):
    st.info("AI service is not configured; assessments use standard agricultural guidelines.")

plants_payload, _ = api_get(backend_url, "/plants")
known_plants = ", ".join(plants_payload["items"]) if plants_payload else ""

with st.form("sensor-form"):
    c1, c2 = st.columns(2)
    with c1:
        temperature = st.number_input("Temperature (°C)", value=22.0)
        humidity = st.number_input("Humidity (%)", value=65.0)
        soil_moisture = st.number_input("Soil Moisture (%)", value=45.0)
        ph_value = st.number_input("Soil pH", value=6.8, step=0.1)
        light_intensity = st.number_input("Light Intensity (lux)", value=18000.0, step=500.0)
    with c2:
        nitrogen = st.number_input("Nitrogen (ppm)", value=150.0)
        phosphorus = st.number_input("Phosphorus (ppm)", value=60.0)
        potassium = st.number_input("Potassium (ppm)", value=200.0)
        plant_type = st.text_input("Plant Type (Optional)", value="Tomato", help=f"Known profiles: {known_plants}")
    submitted = st.form_submit_button("Get Prediction", use_container_width=True)

if submitted:
    payload: dict[str, Any] = {
        "temperature": temperature,
        "humidity": humidity,
        "soilMoisture": soil_moisture,
        "ph": ph_value,
        "lightIntensity": light_intensity,
        "nitrogen": nitrogen,
        "phosphorus": phosphorus,
        "potassium": potassium,
    }
    if plant_type.strip():
        payload["plantType"] = plant_type.strip()
    if include_weather:
        payload["location"] = {"latitude": latitude, "longitude": longitude}

    with st.spinner("Analyzing..."):
        prediction, predict_error = api_post(backend_url, "/predict", payload)

    if predict_error:
        st.error(f"Could not connect to analysis service: {predict_error}")
        st.stop()

    # older backends only carry the sentinel problem string
    is_fallback = prediction.get("source") == "fallback" or FALLBACK_PROBLEM in prediction.get("problems", [])
    if is_fallback:
        st.warning("Using standard agricultural guidelines as AI service is currently unavailable.")

    st.subheader("Analysis Result")
    st.markdown(f"**Overall Assessment:** {prediction['assessment']}")

    problems = [item for item in prediction.get("problems", []) if item != FALLBACK_PROBLEM]
    if problems:
        st.markdown("**Problems**")
        for problem in problems:
            st.markdown(f"- {problem}")

    st.markdown("**Recommendations**")
    for recommendation in prediction.get("recommendations", []):
        st.markdown(f"- {recommendation}")

    if prediction.get("preventativeCare"):
        st.markdown("**Preventative Care**")
        for tip in prediction["preventativeCare"]:
            st.markdown(f"- {tip}")

    st.subheader("Optimal Conditions")
    reading = SensorReading.model_validate(payload)
    table = build_range_table(reading, prediction.get("optimalConditions", {}))
    if table.empty:
        st.info("No optimal ranges available")
    else:
        st.dataframe(
            table[["field", "current", "optimal range", "status"]],
            hide_index=True,
            use_container_width=True,
        )
        chart_df = table.dropna(subset=["position"])
        if not chart_df.empty:
            fig = px.bar(
                chart_df,
                x="field",
                y="position",
                color="status_key",
                color_discrete_map=STATUS_COLORS,
                title="Position within optimal range (%)",
            )
            fig.add_hrect(y0=0, y1=100, fillcolor="#22c55e", opacity=0.1, line_width=0)
            st.plotly_chart(fig, use_container_width=True)

    weather = prediction.get("weatherData")
    impact = prediction.get("weatherImpact")
    if include_weather and not weather:
        st.warning("Live weather is unavailable for this location")
    if weather:
        st.subheader(f"Weather at {weather.get('location') or 'your location'}")
        w1, w2, w3, w4 = st.columns(4)
        w1.metric("Air Temperature", f"{weather['temperature']:.1f} °C")
        w2.metric("Air Humidity", f"{weather['humidity']:.0f}%")
        w3.metric("Wind", f"{weather['windSpeed']:.1f} m/s")
        w4.metric("Pressure", f"{weather['pressure']:.0f} hPa")
        st.caption(weather.get("description", ""))
    if impact:
        risk = impact["riskLevel"]
        RISK_BANNERS.get(risk, st.info)(f"Weather risk: {risk.upper()}")
        for alert in impact.get("alerts", []):
            st.error(alert)
        for issue in impact.get("issues", []):
            st.markdown(f"- {issue}")
        for recommendation in impact.get("recommendations", []):
            st.markdown(f"- _{recommendation}_")
