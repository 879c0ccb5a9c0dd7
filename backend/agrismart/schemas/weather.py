from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)


class WeatherSnapshot(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    temperature: float = Field(..., description="Air temperature in Celsius")
    humidity: float = Field(..., description="Relative humidity percentage")
    description: str = ""
    wind_speed: float = Field(..., description="Wind speed in m/s")
    pressure: float = Field(..., description="Atmospheric pressure in hPa")
    visibility: float = Field(..., description="Visibility in km")
    uv_index: float | None = None
    location: str = ""
    timestamp: datetime


class WeatherImpact(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    risk_level: RiskLevel = RiskLevel.LOW
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    alerts: list[str] = Field(default_factory=list)
