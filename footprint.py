"""Footprint calculator: activity metrics -> tons CO2e per category and a 0-100 score."""
import math
from dataclasses import dataclass, asdict

# Grid: ~0.95 kg CO2/kWh (thermal-heavy mix)
# Diesel/Petrol: ~2.7 kg CO2/Litre
# Waste: ~1.5 kg CO2/kg (methane from landfill)
FACTORS = {
    "energy": 0.00095,     # tons per kWh
    "transport": 0.0027,   # tons per Litre
    "waste": 0.0015,       # tons per kg
}

# Score benchmark: 50 points lost per 50 tons
SCORE_BENCHMARK_TONS = 50.0


@dataclass(frozen=True)
class InputMetrics:
    company_name: str
    location: str
    energy_usage_kwh: float
    waste_general_kg: float
    waste_ppe_kg: float
    transport_fuel_litres: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EmissionBreakdown:
    energy_co2: float
    transport_co2: float
    waste_co2: float
    total_co2: float
    score: int

    def to_dict(self) -> dict:
        return asdict(self)


# Shown on the dashboard before anything was submitted
DEMO_METRICS = InputMetrics(
    company_name="Matabeleland Textiles",
    location="Bulawayo, Zimbabwe",
    energy_usage_kwh=25000,
    waste_general_kg=8000,
    waste_ppe_kg=3500,
    transport_fuel_litres=12000,
)

# Calculator form initial values
DEFAULT_FORM_METRICS = InputMetrics(
    company_name="Acme Zim Manufacturing",
    location="Harare, Zimbabwe",
    energy_usage_kwh=15000,
    waste_general_kg=5000,
    waste_ppe_kg=1200,
    transport_fuel_litres=4500,
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute(metrics: InputMetrics) -> EmissionBreakdown:
    """
    Convert raw activity into emissions.

    General and PPE waste share one factor; they are only tracked
    separately so the advisor can talk about PPE diversion.
    """
    energy_co2 = metrics.energy_usage_kwh * FACTORS["energy"]
    transport_co2 = metrics.transport_fuel_litres * FACTORS["transport"]
    waste_co2 = (metrics.waste_general_kg + metrics.waste_ppe_kg) * FACTORS["waste"]
    total_co2 = energy_co2 + transport_co2 + waste_co2

    raw_score = max(0.0, 100 - (total_co2 / SCORE_BENCHMARK_TONS) * 50)
    score = min(100, _round_half_up(raw_score))

    return EmissionBreakdown(
        energy_co2=energy_co2,
        transport_co2=transport_co2,
        waste_co2=waste_co2,
        total_co2=total_co2,
        score=score,
    )


def score_band(score: int) -> str:
    if score > 70:
        return "good"
    if score > 40:
        return "fair"
    return "poor"


def chart_series(metrics: InputMetrics, breakdown: EmissionBreakdown) -> dict:
    """Dashboard chart data: CO2 per category and the general/PPE waste split."""
    return {
        "emissions": [
            {"name": "Energy (Grid)", "value": round(breakdown.energy_co2, 2)},
            {"name": "Transport", "value": round(breakdown.transport_co2, 2)},
            {"name": "Waste (Landfill)", "value": round(breakdown.waste_co2, 2)},
        ],
        "waste_split": [
            {"name": "General Waste", "value": metrics.waste_general_kg},
            {"name": "PPE Waste", "value": metrics.waste_ppe_kg},
        ],
    }
