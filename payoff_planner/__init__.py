"""Debt Payoff Planner Flask Application Factory."""

from typing import Optional

from flask import Flask

from payoff_planner.config import get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production)

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.flask_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = (config_name or settings.app_env) == "testing"
    app.config["MAX_SIMULATION_MONTHS"] = settings.max_simulation_months

    app.logger.setLevel(settings.log_level)

    # Register blueprints
    from payoff_planner.blueprints.health import health_bp
    from payoff_planner.blueprints.plans import plans_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(plans_bp)

    return app
