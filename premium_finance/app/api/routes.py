"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from premium_finance.config import EXPORT_FILENAME
from premium_finance.core.export import export_projection_csv
from premium_finance.core.mortgage import quote_refinance
from premium_finance.core.projection import calculate_projection
from premium_finance.core.stress import calculate_stress_test, stress_input_from_projection
from premium_finance.domain.validation import InputValidationError, validate_simulation_input
from premium_finance.schemas.mortgage import RefinanceInput
from premium_finance.schemas.projection import SimulationInput
from premium_finance.schemas.stress import StressTestRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InputValidationError)
def _handle_input_error(exc: InputValidationError):
    logger.warning("rejected proposal: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify({"message": "pong"})


@api_bp.post("/projection")
def projection() -> Any:
    """Baseline 30-year ledger for one proposal."""
    simulation = SimulationInput.model_validate(_payload())
    warnings = validate_simulation_input(simulation)

    result = calculate_projection(simulation)
    logger.info(
        "projection: source=%s premium=%.2f loan=%.2f final=%.2f",
        simulation.fundSource, result.totalPremium, result.bankLoan, result.finalNetEquity,
    )
    return jsonify({**result.model_dump(), "warnings": warnings})


@api_bp.post("/stress-test")
def stress_test() -> Any:
    """Baseline ledger and its stressed counterpart with the sensitivity grid."""
    body = StressTestRequest.model_validate(_payload())
    warnings = validate_simulation_input(body.simulation, body.stress)

    baseline = calculate_projection(body.simulation)
    stressed = calculate_stress_test(
        stress_input_from_projection(body.simulation, baseline, body.stress)
    )
    logger.info(
        "stress test: hibor=%.4f drop=%.2f lowest=%.2f break-even=%.4f",
        body.stress.simulatedHibor,
        body.stress.bondPriceDrop,
        stressed.stressStats.lowestEquity,
        stressed.stressStats.breakEvenHibor,
    )
    return jsonify(
        {
            "baseline": baseline.model_dump(),
            "stress": stressed.model_dump(),
            "warnings": warnings,
        }
    )


@api_bp.post("/refinance")
def refinance() -> Any:
    """Cash released by a refinance and its monthly payment."""
    terms = RefinanceInput.model_validate(_payload())
    return jsonify(quote_refinance(terms).model_dump())


@api_bp.post("/projection/export")
def export_projection() -> Response:
    """Baseline ledger as a CSV attachment."""
    simulation = SimulationInput.model_validate(_payload())
    validate_simulation_input(simulation)

    body = export_projection_csv(calculate_projection(simulation), simulation.fundSource)
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )
