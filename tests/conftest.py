import pytest

from app import create_app
from config import Settings
from footprint import InputMetrics


@pytest.fixture
def settings():
    # No API key: the advisor resolves to its fallback list
    return Settings(gemini_api_key="", share_url="https://example.org/report", secret_key="test")


@pytest.fixture
def app(settings):
    """Create test Flask application."""
    app = create_app(settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def acme():
    return InputMetrics(
        company_name="Acme Zim Manufacturing",
        location="Harare, Zimbabwe",
        energy_usage_kwh=15000,
        waste_general_kg=5000,
        waste_ppe_kg=1200,
        transport_fuel_litres=4500,
    )


@pytest.fixture
def acme_form():
    return {
        "companyName": "Acme Zim Manufacturing",
        "location": "Harare, Zimbabwe",
        "energyUsageKwH": "15000",
        "wasteGeneralKg": "5000",
        "wastePPEKg": "1200",
        "transportFuelLitres": "4500",
    }
