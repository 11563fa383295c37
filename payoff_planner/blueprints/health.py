"""Health check blueprint."""

from flask import Blueprint, Response, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status and simulation limits
    """
    return jsonify(
        {
            "status": "ok",
            "max_simulation_months": current_app.config["MAX_SIMULATION_MONTHS"],
        }
    )
