"""
Sustainability recommendations from Gemini.

generate() always settles with a non-empty list: the live answer when the
model returns a payload matching RESPONSE_SCHEMA, FALLBACK_RECOMMENDATIONS
otherwise (no key, SDK/network error, empty or malformed output).
"""
import logging
from typing import List, Literal, Optional

import google.generativeai as genai
from google.generativeai import types
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from config import Settings, load_settings
from footprint import EmissionBreakdown, InputMetrics

logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 4
IMPACTS = ["High", "Medium", "Low"]
CATEGORIES = ["Energy", "Waste", "Transport", "General"]


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    impact: Literal["High", "Medium", "Low"]
    category: Literal["Energy", "Waste", "Transport", "General"]


_recommendations_adapter = TypeAdapter(List[Recommendation])


RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "min_items": RECOMMENDATION_COUNT,
    "max_items": RECOMMENDATION_COUNT,
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "description": {"type": "STRING"},
            "impact": {"type": "STRING", "format": "enum", "enum": IMPACTS},
            "category": {"type": "STRING", "format": "enum", "enum": CATEGORIES},
        },
        "required": ["title", "description", "impact", "category"],
    },
}


FALLBACK_RECOMMENDATIONS = (
    Recommendation(
        title="Implement PPE Recycling (Right Cycle)",
        description="Partner with specialized recyclers to turn used nitrile gloves and masks "
                    "into eco-friendly pellets instead of dumping them.",
        impact="High",
        category="Waste",
    ),
    Recommendation(
        title="Solar Grid Tie System",
        description="Install solar panels to offset ZESA reliance, reducing scope 2 emissions "
                    "and mitigating load shedding impact.",
        impact="High",
        category="Energy",
    ),
    Recommendation(
        title="Route Optimization",
        description="Use GPS tracking for your fleet to reduce fuel consumption on "
                    "distribution routes around Harare and Bulawayo.",
        impact="Medium",
        category="Transport",
    ),
)


class RecommendationError(Exception):
    """The service answered, but not with usable recommendations."""


def build_prompt(metrics: InputMetrics, breakdown: EmissionBreakdown) -> str:
    return f"""
    Act as a senior sustainability consultant for "Carbon Media", an initiative inspired by
    the Right Cycle program for diverting PPE waste from landfill.

    Analyze the following carbon footprint data for a company in {metrics.location}:
    - Company: {metrics.company_name}
    - Energy Usage (Grid): {metrics.energy_usage_kwh:g} kWh/year (CO2: {breakdown.energy_co2:.2f} tons)
    - General Waste: {metrics.waste_general_kg:g} kg/year
    - PPE Waste (Gloves, Masks, Safety Gear): {metrics.waste_ppe_kg:g} kg/year (Waste CO2: {breakdown.waste_co2:.2f} tons)
    - Transport (Fuel): {metrics.transport_fuel_litres:g} Litres/year (Transport CO2: {breakdown.transport_co2:.2f} tons)

    Total Carbon Footprint: {breakdown.total_co2:.2f} tons.
    Sustainability Score: {breakdown.score}/100.

    Provide {RECOMMENDATION_COUNT} specific, actionable recommendations to reduce this footprint.
    Focus heavily on the "Right Cycle" concept: recycling PPE waste instead of sending it to landfills.
    Suggest solutions that fit the local context of {metrics.location} where possible
    (e.g., solar alternatives to offset grid dependency, local recycling partners).
    """


def parse_recommendations(raw: str) -> List[Recommendation]:
    """Validate the model's JSON text against the Recommendation shape."""
    if not raw or not raw.strip():
        raise RecommendationError("empty response")

    raw = raw.strip()
    if "```" in raw:
        raw = raw.split("```")[1].replace("json", "", 1).strip()

    try:
        items = _recommendations_adapter.validate_json(raw)
    except ValidationError as e:
        raise RecommendationError(f"response does not match schema: {e.error_count()} error(s)") from e

    if not items:
        raise RecommendationError("response contained no recommendations")
    return items


def _build_model(settings: Settings):
    genai.configure(api_key=settings.gemini_api_key)
    return genai.GenerativeModel(settings.gemini_model)


async def generate(metrics: InputMetrics, breakdown: EmissionBreakdown, *, model=None,
                   settings: Optional[Settings] = None) -> List[Recommendation]:
    """Ask Gemini for recommendations; never raises."""
    settings = settings or load_settings()

    try:
        if model is None:
            if not settings.has_gemini_key:
                logger.warning("No Gemini API key configured - using fallback recommendations.")
                return list(FALLBACK_RECOMMENDATIONS)
            model = _build_model(settings)

        response = await model.generate_content_async(
            build_prompt(metrics, breakdown),
            generation_config=types.GenerationConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
        recommendations = parse_recommendations(response.text)
    except Exception:
        logger.exception("Failed to generate recommendations for %s", metrics.company_name)
        return list(FALLBACK_RECOMMENDATIONS)

    logger.info("Gemini returned %d recommendations for %s", len(recommendations), metrics.company_name)
    return recommendations
