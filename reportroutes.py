from io import BytesIO
import logging

from flask import Blueprint, current_app, jsonify, request, send_file

import advisor
from exports import build_csv, build_share, csv_filename
from footprint import DEFAULT_FORM_METRICS, DEMO_METRICS, chart_series, compute, score_band
from validation import parse_metrics

logger = logging.getLogger(__name__)

report_bp = Blueprint("report_bp", __name__)


def _state():
    return current_app.extensions["report_state"]


def _settings():
    return current_app.config["SETTINGS"]


def _current_metrics():
    """Last submitted input, or the demo preset if nothing was submitted yet."""
    metrics = _state().snapshot().metrics
    if metrics is None:
        return DEMO_METRICS, True
    return metrics, False


# ----------------- ROUTES -----------------

@report_bp.route("/calculator", methods=["GET"])
def calculator():
    metrics = _state().snapshot().metrics or DEFAULT_FORM_METRICS
    return jsonify({"form": metrics.to_dict()})


@report_bp.route("/calculate", methods=["POST"])
def calculate():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form.to_dict()

    # InvalidMetricsError is answered by the app's error handler
    metrics = parse_metrics(data)
    breakdown = compute(metrics)
    _state().submit(metrics)

    logger.info("Footprint for %s: %.2f tCO2e, score %d",
                metrics.company_name, breakdown.total_co2, breakdown.score)

    return jsonify({
        "input": metrics.to_dict(),
        "result": breakdown.to_dict(),
        "page": "dashboard",
    }), 200


# ---------------------------------------------------------------------
# ROUTE: Dashboard
# ---------------------------------------------------------------------

@report_bp.route("/dashboard")
async def dashboard():
    state = _state()
    metrics, is_demo = _current_metrics()
    breakdown = compute(metrics)

    # Only regenerate when the input changed
    recommendations = state.cached(metrics)
    applied = True
    if recommendations is None:
        ticket = state.begin(metrics)
        recommendations = await advisor.generate(metrics, breakdown, settings=_settings())
        applied = state.settle(ticket, recommendations)

    # A result for an input that was replaced meanwhile still belongs to this
    # response's input; it is returned but flagged stale and not stored.
    current = state.snapshot()
    return jsonify({
        "input": metrics.to_dict(),
        "demo": is_demo,
        "result": breakdown.to_dict(),
        "score_band": score_band(breakdown.score),
        "charts": chart_series(metrics, breakdown),
        "recommendations": [r.model_dump() for r in recommendations],
        "status": current.status,
        "stale": not applied,
    })


@report_bp.route("/dashboard/status")
def dashboard_status():
    current = _state().snapshot()
    return jsonify({
        "status": current.status,
        "request_seq": current.request_seq,
        "recommendation_count": len(current.recommendations),
    })


@report_bp.route("/export.csv")
def export_csv():
    metrics, _ = _current_metrics()
    breakdown = compute(metrics)
    content = build_csv(metrics, breakdown)

    return send_file(
        BytesIO(content.encode("utf-8")),
        mimetype="text/csv",
        as_attachment=True,
        download_name=csv_filename(metrics.company_name),
    )


@report_bp.route("/share")
def share():
    metrics, _ = _current_metrics()
    breakdown = compute(metrics)
    return jsonify(build_share(metrics, breakdown, share_url=_settings().share_url))
