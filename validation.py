import math

from footprint import InputMetrics

TEXT_FIELDS = ("company_name", "location")
NUMERIC_FIELDS = (
    "energy_usage_kwh",
    "waste_general_kg",
    "waste_ppe_kg",
    "transport_fuel_litres",
)

# camelCase names posted by the JS form
FIELD_ALIASES = {
    "companyName": "company_name",
    "energyUsageKwH": "energy_usage_kwh",
    "wasteGeneralKg": "waste_general_kg",
    "wastePPEKg": "waste_ppe_kg",
    "transportFuelLitres": "transport_fuel_litres",
}


class InvalidMetricsError(ValueError):
    """Raised when submitted metrics cannot become an InputMetrics."""

    def __init__(self, errors):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid input for: {fields}")


def _normalize_keys(data) -> dict:
    out = {}
    for key, value in (data or {}).items():
        out[FIELD_ALIASES.get(key, key)] = value
    return out


def _parse_number(value):
    if value is None or isinstance(value, bool):
        raise ValueError("a number is required")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("a number is required")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError("must be a finite number")
    except (TypeError, ValueError):
        raise ValueError("must be a number")
    if not math.isfinite(number):
        raise ValueError("must be a finite number")
    if number < 0:
        raise ValueError("must not be negative")
    return number


def parse_metrics(data) -> InputMetrics:
    """Validate raw form/JSON data and build InputMetrics.

    Collects every field error before raising so the form can show them together.
    """
    data = _normalize_keys(data)
    errors = {}
    values = {}

    for field in TEXT_FIELDS:
        text = data.get(field)
        text = str(text).strip() if text is not None else ""
        if not text:
            errors[field] = "is required"
        else:
            values[field] = text

    for field in NUMERIC_FIELDS:
        try:
            values[field] = _parse_number(data.get(field))
        except ValueError as e:
            errors[field] = str(e)

    if errors:
        raise InvalidMetricsError(errors)

    return InputMetrics(**values)
