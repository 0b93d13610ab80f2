"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from fincalc.core.amortization import project_baseline, project_schedule
from fincalc.core.dti import calculate_dti
from fincalc.core.retirement import project_growth
from fincalc.core.summary import summarize_projection, summarize_schedule
from fincalc.domain.errors import InvalidParameterError, NonConvergenceError, ProjectionError
from fincalc.models import DebtToIncomeInputs, RetirementAccountParameters
from fincalc.schemas.mortgage import MortgagePayoffRequest, MortgagePayoffResponse
from fincalc.schemas.ping import PingResponse
from fincalc.schemas.retirement import RetirementProjectionResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _json_payload() -> Any:
    return request.get_json(force=True, silent=False)


def _dump(model) -> Any:
    return model.model_dump(mode="json", by_alias=True)


def _max_periods() -> int:
    return current_app.config["FINCALC_SETTINGS"].max_schedule_periods


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidParameterError)
def _handle_invalid_parameter(exc: InvalidParameterError):
    return jsonify({"error": exc.errors, "field": exc.field}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(NonConvergenceError)
def _handle_non_convergence(exc: NonConvergenceError):
    return jsonify({"error": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(ProjectionError)
def _handle_projection_error(exc: ProjectionError):
    logger.error("Projection failed: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.INTERNAL_SERVER_ERROR


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"error": [exc.description]}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.post("/calc/mortgage-payoff")
def mortgage_payoff() -> Any:
    """Schedule with extra payments next to the plain baseline."""
    payload = MortgagePayoffRequest.model_validate(_json_payload())
    logger.info(
        "Mortgage payoff: principal=%.2f rate=%.3f%% term=%dy frequency=%s",
        payload.loan.principal,
        payload.loan.annual_rate_percent,
        payload.loan.term_years,
        payload.loan.payment_frequency.value,
    )

    max_periods = _max_periods()
    baseline = project_baseline(payload.loan, max_periods=max_periods)
    schedule = project_schedule(payload.loan, payload.extra_payments, max_periods=max_periods)

    response = MortgagePayoffResponse(
        schedule=schedule,
        baseline=baseline,
        summary=summarize_schedule(schedule, payload.loan, baseline),
    )
    return jsonify(_dump(response))


@api_bp.post("/calc/roth-ira")
def roth_ira() -> Any:
    """Year-by-year Roth IRA projection."""
    params = RetirementAccountParameters.model_validate(_json_payload())
    logger.info(
        "Roth IRA projection: ages %d-%d, return=%.2f%%",
        params.current_age,
        params.target_age,
        params.annual_return_percent,
    )

    projection = project_growth(params)
    response = RetirementProjectionResponse(
        projection=projection,
        summary=summarize_projection(projection, params),
    )
    return jsonify(_dump(response))


@api_bp.post("/calc/debt-to-income")
def debt_to_income() -> Any:
    """Front-end and back-end DTI ratios."""
    inputs = DebtToIncomeInputs.model_validate(_json_payload())
    return jsonify(_dump(calculate_dti(inputs)))
