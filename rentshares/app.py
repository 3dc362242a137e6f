# rentshares/app.py
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from rentshares.allocation import AllocationError, calculate_shares
from rentshares.formatting import build_table
from rentshares.schema import FormValidationError, default_form, new_participant, parse_bill
from rentshares.settings import Settings

logger = logging.getLogger(__name__)


def create_app(settings=None):
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.config["RENTSHARES_SETTINGS"] = settings
    # Lets the React frontend talk to this backend
    CORS(app, resources={r"/api/*": {"origins": settings.cors_origins}})

    register_routes(app)
    return app


def register_routes(app):
    # --- 1. HEALTH CHECK ROUTE ---
    @app.route('/api', methods=['GET'])
    def health_check():
        return jsonify({"status": "healthy", "message": "Backend is running!"})

    # --- 2. FORM DEFAULTS ---
    @app.route('/api/defaults', methods=['GET'])
    def defaults():
        return jsonify(default_form())

    # --- 3. BLANK PARTICIPANT FOR "ADD PARTICIPANT" ---
    @app.route('/api/participants/new', methods=['GET'])
    def blank_participant():
        index = request.args.get("index", 0, type=int)
        if index < 0:
            return jsonify({"error": "index must not be negative."}), 400
        return jsonify(new_participant(index))

    # --- 4. CALCULATION ROUTE ---
    @app.route('/api/calculate', methods=['POST'])
    def calculate():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object."}), 400

        try:
            bill, participants = parse_bill(data)
            allocation = calculate_shares(bill, participants)
        except FormValidationError as e:
            logger.warning("Rejected bill with %d invalid field(s)", len(e.errors))
            return jsonify({
                "error": "validation_failed",
                "step": e.step,
                "errors": e.errors,
            }), 400
        except AllocationError as e:
            logger.warning("Degenerate bill: %s", e)
            return jsonify({"error": "degenerate_input", "message": str(e)}), 422
        except Exception as e:
            logger.exception("Calculation failed")
            return jsonify({"error": str(e)}), 500

        logger.info("Split %.2f across %d participant(s)", bill.amount, len(participants))
        return jsonify(build_table(allocation))
