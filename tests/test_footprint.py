from dataclasses import FrozenInstanceError, replace

import pytest

from footprint import (
    DEMO_METRICS,
    InputMetrics,
    _round_half_up,
    chart_series,
    compute,
    score_band,
)

NUMERIC_FIELDS = ["energy_usage_kwh", "waste_general_kg", "waste_ppe_kg", "transport_fuel_litres"]


def _metrics(**kw):
    base = dict(company_name="Co", location="Here", energy_usage_kwh=0,
                waste_general_kg=0, waste_ppe_kg=0, transport_fuel_litres=0)
    base.update(kw)
    return InputMetrics(**base)


def test_worked_example(acme):
    result = compute(acme)
    assert result.energy_co2 == pytest.approx(14.25)
    assert result.transport_co2 == pytest.approx(12.15)
    assert result.waste_co2 == pytest.approx(9.3)
    assert result.total_co2 == pytest.approx(35.7)
    assert result.score == 64


def test_zero_input_scores_100():
    result = compute(_metrics())
    assert result.total_co2 == 0
    assert result.score == 100


@pytest.mark.parametrize("kwh", [100 / 0.00095, 250000, 10 ** 9])
def test_score_saturates_at_zero(kwh):
    result = compute(_metrics(energy_usage_kwh=kwh))
    assert result.total_co2 >= 100 - 1e-9
    assert result.score == 0


def test_total_is_unbounded():
    result = compute(_metrics(transport_fuel_litres=10 ** 9))
    assert result.total_co2 == pytest.approx(2.7e6)
    assert result.score == 0


def test_total_is_sum_of_categories():
    for m in (DEMO_METRICS, _metrics(energy_usage_kwh=1.5, waste_ppe_kg=333.3, transport_fuel_litres=12.7)):
        r = compute(m)
        assert r.total_co2 == pytest.approx(r.energy_co2 + r.transport_co2 + r.waste_co2)


def test_general_and_ppe_waste_share_one_factor():
    a = compute(_metrics(waste_general_kg=1000))
    b = compute(_metrics(waste_ppe_kg=1000))
    assert a.waste_co2 == pytest.approx(b.waste_co2) == pytest.approx(1.5)


def test_score_is_integer_in_range():
    for kwh in (0, 1, 999, 52631.5, 10 ** 6):
        score = compute(_metrics(energy_usage_kwh=kwh, transport_fuel_litres=kwh / 7)).score
        assert isinstance(score, int)
        assert 0 <= score <= 100


def test_score_rounds_half_up():
    assert _round_half_up(97.5) == 98
    assert _round_half_up(96.5) == 97
    assert _round_half_up(64.3) == 64


@pytest.mark.parametrize("field", NUMERIC_FIELDS)
def test_monotonic_in_each_field(field, acme):
    previous = compute(acme)
    for step in (1, 100, 10000, 1000000):
        bigger = replace(acme, **{field: getattr(acme, field) + step})
        result = compute(bigger)
        assert result.total_co2 >= previous.total_co2
        assert result.score <= previous.score
        previous = result


def test_breakdown_is_immutable(acme):
    result = compute(acme)
    with pytest.raises(FrozenInstanceError):
        result.score = 1


@pytest.mark.parametrize("score,band", [(100, "good"), (71, "good"), (70, "fair"), (41, "fair"), (40, "poor"), (0, "poor")])
def test_score_band(score, band):
    assert score_band(score) == band


def test_chart_series(acme):
    charts = chart_series(acme, compute(acme))
    assert [e["value"] for e in charts["emissions"]] == [14.25, 12.15, 9.3]
    assert charts["waste_split"] == [
        {"name": "General Waste", "value": 5000},
        {"name": "PPE Waste", "value": 1200},
    ]
