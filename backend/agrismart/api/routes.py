import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from agrismart.schemas import (
    PlantListResponse,
    PlantProfileOut,
    PredictionResponse,
    SensorReading,
    WeatherReport,
)
from agrismart.services import (
    PlantAdvisor,
    classify_weather_impact,
    get_advisor,
    get_plant_profile,
    list_plant_types,
    resolve_plant_key,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _validation_detail(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}")
    return "Invalid sensor data: " + "; ".join(messages)


def _parse_reading(payload: Any) -> SensorReading:
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid sensor data: request body must be a JSON object")
    missing = SensorReading.missing_required_fields(payload)
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")
    try:
        return SensorReading.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=_validation_detail(exc)) from exc


@router.get("/health")
def health(advisor: PlantAdvisor = Depends(get_advisor)) -> dict[str, Any]:
    return {
        "status": "ok",
        "ai_configured": advisor.ai_client.is_configured,
        "weather_configured": advisor.weather_client.is_configured,
    }


@router.post("/predict", response_model=PredictionResponse, response_model_exclude_none=True)
def predict(
    payload: Any = Body(...),
    advisor: PlantAdvisor = Depends(get_advisor),
) -> PredictionResponse:
    reading = _parse_reading(payload)
    try:
        return advisor.predict(reading)
    except Exception as exc:
        logger.exception("Error in prediction API")
        raise HTTPException(status_code=500, detail="Failed to process request") from exc


@router.get("/plants", response_model=PlantListResponse)
def get_plants() -> PlantListResponse:
    items = list_plant_types()
    return PlantListResponse(items=items, count=len(items))


@router.get("/plants/{plant_type}", response_model=PlantProfileOut)
def get_plant(plant_type: str) -> PlantProfileOut:
    return PlantProfileOut(
        plant_type=resolve_plant_key(plant_type),
        optimal_conditions=dict(get_plant_profile(plant_type)),
    )


@router.get("/weather", response_model=WeatherReport, response_model_exclude_none=True)
def get_weather(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    temperature: float | None = Query(default=None),
    humidity: float | None = Query(default=None),
    advisor: PlantAdvisor = Depends(get_advisor),
) -> WeatherReport:
    snapshot = advisor.weather_client.fetch_snapshot(latitude, longitude)
    if snapshot is None:
        raise HTTPException(status_code=502, detail="Weather data is unavailable for this location")

    impact = None
    if temperature is not None and humidity is not None:
        impact = classify_weather_impact(snapshot, temperature, humidity)
    return WeatherReport(weather_data=snapshot, weather_impact=impact)
