"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from satsplan.core.presentation import chart_geometry, ledger_table
from satsplan.core.projection import compute
from satsplan.schemas.api import ErrorResponse, PingResponse, TableResponse
from satsplan.schemas.projection import FORM_DEFAULTS, ProjectionForm, ProjectionResult

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


class BadPayload(Exception):
    """Raised when the request body is not a JSON object."""


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("rejected projection payload: %d validation error(s)", exc.error_count())
    body = ErrorResponse(detail=exc.errors(include_url=False, include_context=False))
    return jsonify(body.model_dump()), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BadPayload)
def _handle_bad_payload(exc: BadPayload):
    logger.warning("rejected projection payload: %s", exc)
    return jsonify(ErrorResponse(detail=str(exc)).model_dump()), HTTPStatus.BAD_REQUEST


def _project_from_request() -> ProjectionResult:
    raw_payload: Any = request.get_json(silent=True)
    if not isinstance(raw_payload, dict):
        raise BadPayload("request body must be a JSON object")

    form = ProjectionForm.model_validate(raw_payload)
    result = compute(form.to_inputs())
    logger.info(
        "projection computed: ages %d-%d, canRetire=%s, retirementAge=%d",
        form.currentAge,
        form.lifeExpectancy,
        result.canRetire,
        result.retirementAge,
    )
    return result


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.get("/projection/defaults")
def projection_defaults() -> Any:
    """Values the calculator form starts from."""
    defaults: Dict[str, float] = dict(FORM_DEFAULTS)
    return jsonify(defaults)


@api_bp.post("/projection")
def projection() -> Any:
    """Retirement age, summary and full ledger for the submitted form."""
    result = _project_from_request()
    return jsonify(result.model_dump())


@api_bp.post("/projection/table")
def projection_table() -> Any:
    result = _project_from_request()
    return jsonify(TableResponse(rows=ledger_table(result)).model_dump())


@api_bp.post("/projection/chart")
def projection_chart() -> Any:
    series = request.args.get("series", "holdings")
    result = _project_from_request()
    try:
        geometry = chart_geometry(result, series=series)
    except ValueError as exc:
        raise BadPayload(str(exc)) from exc
    return jsonify(geometry.model_dump())
