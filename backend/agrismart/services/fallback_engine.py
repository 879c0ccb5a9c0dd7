from typing import NamedTuple

from agrismart.schemas.assessment import FALLBACK_PROBLEM, AssessmentResult
from agrismart.schemas.sensor import SensorReading
from agrismart.services.plant_profiles import get_plant_profile

DEFAULT_ASSESSMENT = "Conditions appear generally favorable"
MONITOR_RECOMMENDATION = "Conditions appear generally favorable. Monitor regularly."


class _Rule(NamedTuple):
    attribute: str
    low: float
    high: float
    low_recommendation: str
    low_assessment: str
    high_recommendation: str
    high_assessment: str


# Evaluation order matters: the last rule that fires sets the headline.
_RULES: tuple[_Rule, ...] = (
    _Rule(
        "ph", 5.5, 7.5,
        "Add lime to increase soil pH level (currently too acidic)", "Soil is too acidic",
        "Add sulfur or organic matter to decrease soil pH (currently too alkaline)", "Soil is too alkaline",
    ),
    _Rule(
        "soil_moisture", 30, 70,
        "Water plants thoroughly as soil moisture is low", "Soil moisture is insufficient",
        "Reduce watering to prevent root rot", "Soil is too wet",
    ),
    _Rule(
        "temperature", 15, 30,
        "Consider using plant covers to protect from cold", "Temperature is too low for optimal growth",
        "Provide shade during hottest parts of the day", "Temperature is too high for optimal growth",
    ),
    _Rule(
        "light_intensity", 10000, 30000,
        "Increase light exposure or consider artificial lighting", "Light intensity is insufficient",
        "Provide some shading to prevent light stress", "Light intensity is excessive",
    ),
    _Rule(
        "nitrogen", 80, 250,
        "Apply a nitrogen-rich fertilizer such as composted manure or urea", "Nitrogen levels are deficient",
        "Reduce nitrogen fertilization to avoid excessive leafy growth", "Nitrogen levels are excessive",
    ),
    _Rule(
        "phosphorus", 40, 100,
        "Add bone meal or a phosphate fertilizer to raise phosphorus", "Phosphorus levels are deficient",
        "Stop phosphorus fertilization to avoid micronutrient lock-out", "Phosphorus levels are excessive",
    ),
    _Rule(
        "potassium", 100, 250,
        "Apply potash or another potassium-rich fertilizer", "Potassium levels are deficient",
        "Reduce potassium inputs to prevent nutrient imbalance", "Potassium levels are excessive",
    ),
)


def build_fallback_assessment(reading: SensorReading) -> AssessmentResult:
    """Rule-based assessment used whenever the AI analysis is unavailable.

    Each quantity is checked against fixed universal cutoffs, not against the
    plant profile; the profile is only returned for display. Nutrient rules
    are skipped for readings that do not carry that nutrient.
    """
    assessment = DEFAULT_ASSESSMENT
    recommendations: list[str] = []

    for rule in _RULES:
        value = getattr(reading, rule.attribute)
        if value is None:
            continue
        if value < rule.low:
            recommendations.append(rule.low_recommendation)
            assessment = rule.low_assessment
        elif value > rule.high:
            recommendations.append(rule.high_recommendation)
            assessment = rule.high_assessment

    if not recommendations:
        recommendations.append(MONITOR_RECOMMENDATION)

    return AssessmentResult(
        assessment=assessment,
        problems=[FALLBACK_PROBLEM],
        recommendations=recommendations,
        optimal_conditions=dict(get_plant_profile(reading.plant_type)),
        source="fallback",
    )
