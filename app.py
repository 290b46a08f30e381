from flask import Flask, request, jsonify
import logging
import traceback

from werkzeug.exceptions import HTTPException

from config import load_settings
from report_state import PAGES, ReportState
from reportroutes import report_bp
from validation import InvalidMetricsError

# Configure logging
logging.basicConfig(level=logging.INFO)

ABOUT = {
    "title": "About Carbon Media",
    "body": (
        "Carbon Media is a concept application demonstrating how the principles of the "
        "Right Cycle program can be digitized to streamline sustainability reporting."
    ),
    "disclosure": (
        "This application is running in demonstration mode. All calculations are "
        "approximations based on general emission factors and should not be used for "
        "official auditing without verification."
    ),
}


def create_app(settings=None):
    settings = settings or load_settings()

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["SETTINGS"] = settings
    app.extensions["report_state"] = ReportState()

    app.register_blueprint(report_bp)
    _register_core_routes(app)
    _register_error_handlers(app)
    return app


# ----------------------
# Routes
# ----------------------
def _register_core_routes(app):

    @app.route('/', methods=['GET'])
    def home():
        current = app.extensions["report_state"].snapshot()
        return jsonify({
            "page": current.page,
            "has_input": current.metrics is not None,
            "pages": list(PAGES),
        })

    @app.route('/navigate', methods=['POST'])
    def navigate():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = request.form
        page = str(data.get('page') or '').strip()
        try:
            app.extensions["report_state"].navigate(page)
        except ValueError as e:
            return jsonify({'message': str(e)}), 400
        return jsonify({'page': page}), 200

    @app.route('/about')
    def about():
        return jsonify(ABOUT)


def _register_error_handlers(app):

    @app.errorhandler(InvalidMetricsError)
    def invalid_metrics(e):
        return jsonify({'message': str(e), 'errors': e.errors}), 400

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'message': e.description}), e.code

    @app.errorhandler(Exception)
    def unhandled(e):
        logging.error(f"Unhandled error: {e}")
        logging.error(traceback.format_exc())
        return jsonify({'message': 'An error occurred. Please try again.'}), 500


app = create_app()


# Run Flask
# ----------------------
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=True)
