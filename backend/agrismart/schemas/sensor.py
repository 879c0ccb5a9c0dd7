from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class SensorReading(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False, frozen=True)

    temperature: float = Field(..., description="Temperature in Celsius")
    humidity: float = Field(..., description="Relative humidity percentage")
    soil_moisture: float = Field(..., alias="soilMoisture", description="Soil moisture percentage")
    ph: float = Field(..., description="Soil pH")
    light_intensity: float = Field(..., alias="lightIntensity", description="Light intensity in lux")
    nitrogen: float | None = Field(default=None, validation_alias=AliasChoices("nitrogen", "Nitrogen"))
    phosphorus: float | None = Field(default=None, validation_alias=AliasChoices("phosphorus", "Phosphorus"))
    potassium: float | None = Field(default=None, validation_alias=AliasChoices("potassium", "Potassium"))
    plant_type: str | None = Field(default=None, alias="plantType")
    location: Coordinates | None = None

    @classmethod
    def missing_required_fields(cls, payload: dict[str, Any]) -> list[str]:
        """Names (as posted by the web form) of required fields absent from ``payload``."""
        missing: list[str] = []
        for name, field in cls.model_fields.items():
            if not field.is_required():
                continue
            key = field.alias or name
            if payload.get(key) is None and payload.get(name) is None:
                missing.append(key)
        return missing
