"""
Plans blueprint for debt repayment simulations.

This module provides API endpoints that run the repayment simulator on a
posted debt snapshot, either for every strategy at once or for one strategy.
Nothing is stored; every request is simulated from scratch.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from payoff_planner.models.repayment.engine import PlanInputError
from payoff_planner.models.repayment.result import RepaymentStrategy
from payoff_planner.services.plan_service import PlanService

plans_bp = Blueprint("plans", __name__, url_prefix="/api")


def _include_ledger() -> bool:
    return request.args.get("include_ledger", "true").lower() not in {
        "false",
        "0",
        "no",
    }


def _plan_service() -> PlanService:
    return PlanService(max_months=current_app.config["MAX_SIMULATION_MONTHS"])


@plans_bp.route("/plans", methods=["POST"])
def compare_plans() -> Any:
    """Simulate every repayment strategy for a debt snapshot.

    Returns:
        JSON response with minimum, avalanche and snowball plans
    """
    try:
        data = request.get_json(silent=True)
        comparison = _plan_service().build_comparison(
            data, include_ledger=_include_ledger()
        )
        return jsonify(comparison), 200

    except (PlanInputError, ValidationError) as e:
        return jsonify({"error": "Invalid plan input", "message": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error comparing plans: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@plans_bp.route("/plans/<strategy>", methods=["POST"])
def create_plan(strategy: str) -> Any:
    """Simulate a single repayment strategy for a debt snapshot.

    Args:
        strategy: One of minimum, avalanche or snowball

    Returns:
        JSON response with the plan
    """
    try:
        selected = RepaymentStrategy(strategy)
    except ValueError:
        return jsonify({"error": f"Unknown strategy: {strategy}"}), 404

    try:
        data = request.get_json(silent=True)
        plan = _plan_service().build_plan(
            data, selected, include_ledger=_include_ledger()
        )
        return jsonify(plan), 200

    except (PlanInputError, ValidationError) as e:
        return jsonify({"error": "Invalid plan input", "message": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error creating {strategy} plan: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
