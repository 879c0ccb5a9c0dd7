from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from agrismart.schemas.weather import WeatherImpact, WeatherSnapshot

FALLBACK_PROBLEM = "Unable to get AI analysis due to API issues"


class AssessmentResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    assessment: str
    problems: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    optimal_conditions: dict[str, str] = Field(default_factory=dict)
    preventative_care: list[str] | None = None
    source: Literal["ai", "fallback"] = "ai"

    @computed_field(alias="isFallback")
    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


class PredictionResponse(AssessmentResult):
    weather_data: WeatherSnapshot | None = None
    weather_impact: WeatherImpact | None = None


class PlantListResponse(BaseModel):
    items: list[str]
    count: int


class PlantProfileOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plant_type: str
    optimal_conditions: dict[str, str]


class WeatherReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    weather_data: WeatherSnapshot
    weather_impact: WeatherImpact | None = None
