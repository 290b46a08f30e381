import csv
import io
import re
from decimal import Decimal
from urllib.parse import quote

from config import DEFAULT_SHARE_URL

CSV_HEADERS = [
    "Company Name",
    "Location",
    "Energy Usage (kWh)",
    "General Waste (kg)",
    "PPE Waste (kg)",
    "Transport Fuel (Litres)",
    "Energy CO2 (tons)",
    "Waste CO2 (tons)",
    "Transport CO2 (tons)",
    "Total CO2 (tons)",
    "Sustainability Score",
]

SHARE_TEMPLATE = (
    "Our company {company} just calculated its carbon footprint with Carbon Media! "
    "Total Emissions: {total:.2f} tons. Score: {score}/100. #Sustainability #Zimbabwe"
)
SHARE_EMAIL_SUBJECT = "Our Carbon Footprint Report"


# -------- CSV --------

def _number(value: float) -> Decimal:
    value = float(value)
    return Decimal(int(value)) if value.is_integer() else Decimal(repr(value))


def build_csv(metrics, breakdown) -> str:
    """Header + one value row; text columns always quoted."""
    row = [
        metrics.company_name,
        metrics.location,
        _number(metrics.energy_usage_kwh),
        _number(metrics.waste_general_kg),
        _number(metrics.waste_ppe_kg),
        _number(metrics.transport_fuel_litres),
        Decimal(f"{breakdown.energy_co2:.4f}"),
        Decimal(f"{breakdown.waste_co2:.4f}"),
        Decimal(f"{breakdown.transport_co2:.4f}"),
        Decimal(f"{breakdown.total_co2:.4f}"),
        int(breakdown.score),
    ]

    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(CSV_HEADERS)
    # Decimal values count as numeric, so only the text columns are quoted
    csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_NONNUMERIC).writerow(row)
    return buf.getvalue().rstrip("\n")


def csv_filename(company_name: str) -> str:
    return "carbon_report_" + re.sub(r"\s+", "_", company_name) + ".csv"


# -------- Share --------

def build_share(metrics, breakdown, share_url: str = DEFAULT_SHARE_URL) -> dict:
    text = SHARE_TEMPLATE.format(
        company=metrics.company_name,
        total=breakdown.total_co2,
        score=breakdown.score,
    )
    enc_text = quote(text, safe="")
    enc_url = quote(share_url, safe="")

    return {
        "text": text,
        "url": share_url,
        "clipboard": f"{text} {share_url}",
        "links": {
            "twitter": f"https://twitter.com/intent/tweet?text={enc_text}&url={enc_url}",
            "linkedin": f"https://www.linkedin.com/sharing/share-offsite/?url={enc_url}",
            "facebook": f"https://www.facebook.com/sharer/sharer.php?u={enc_url}&quote={enc_text}",
            "email": "mailto:?subject={}&body={}".format(
                quote(SHARE_EMAIL_SUBJECT, safe=""),
                quote(text + "\n\n" + share_url, safe=""),
            ),
        },
    }
