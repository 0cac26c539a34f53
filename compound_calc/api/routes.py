"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from compound_calc.core.calculator import (
    calculate,
    chart_series,
    default_params,
    params_from_record,
    preset_rates,
)
from compound_calc.core.environment import EnvironmentStatus, require_environment
from compound_calc.core.export import export_csv, to_csv_bytes, write_csv
from compound_calc.core.health import get_health
from compound_calc.core.history import HistoryStore
from compound_calc.core.projection import project
from compound_calc.errors import (
    EnvironmentUnavailableError,
    ExportError,
    InvalidParameterError,
    PersistenceError,
)
from compound_calc.schemas.calculation import (
    CalculationRequest,
    CalculationResponse,
    ChartResponse,
    PresetsResponse,
)
from compound_calc.schemas.health import HealthResponse
from compound_calc.schemas.history import HistoryResponse, RestoredParamsResponse

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidParameterError)
def _handle_invalid_parameters(exc: InvalidParameterError):
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(EnvironmentUnavailableError)
def _handle_environment_unavailable(exc: EnvironmentUnavailableError):
    return jsonify({"detail": str(exc)}), HTTPStatus.SERVICE_UNAVAILABLE


@api_bp.errorhandler(PersistenceError)
def _handle_persistence_error(exc: PersistenceError):
    return jsonify({"detail": str(exc)}), HTTPStatus.SERVICE_UNAVAILABLE


@api_bp.errorhandler(ExportError)
def _handle_export_error(exc: ExportError):
    return jsonify({"detail": str(exc)}), HTTPStatus.INTERNAL_SERVER_ERROR


def _environment() -> EnvironmentStatus:
    return current_app.config["ENVIRONMENT_STATUS"]


def _history_store() -> Optional[HistoryStore]:
    """The configured store, or None while history is disabled."""
    if not _environment().enabled:
        return None
    return current_app.config["HISTORY_STORE"]


def _require_history() -> HistoryStore:
    require_environment(_environment())
    return current_app.config["HISTORY_STORE"]


def _read_request() -> CalculationRequest:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    return CalculationRequest.model_validate(raw_payload)


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse.model_validate(get_health(_environment()))
    return jsonify(response.model_dump())


@api_bp.get("/presets")
def presets() -> Any:
    """Preset annual rates and the default form values."""
    response = PresetsResponse(presets=preset_rates(), defaults=default_params())
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/calc/compound")
def compound() -> Any:
    """Run a projection and record it in history."""
    payload = _read_request()
    outcome = calculate(payload.to_params(), store=_history_store())
    response = CalculationResponse(
        result=outcome.result,
        record=outcome.record,
        historySaved=outcome.history_saved,
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/calc/chart")
def chart() -> Any:
    """Per-year series for the growth chart."""
    payload = _read_request()
    response = ChartResponse(series=chart_series(project(payload.to_params())))
    return jsonify(response.model_dump())


@api_bp.get("/history")
def history() -> Any:
    records = _require_history().read_all()
    response = HistoryResponse(records=records, count=len(records))
    return jsonify(response.model_dump(mode="json"))


@api_bp.delete("/history")
def clear_history() -> Any:
    _require_history().clear()
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/history/<record_id>/params")
def restore_params(record_id: str) -> Any:
    """Form values rebuilt from a stored record."""
    record = _require_history().get(record_id)
    if record is None:
        return jsonify({"detail": f"record {record_id} not found"}), HTTPStatus.NOT_FOUND
    response = RestoredParamsResponse(id=record.id, params=params_from_record(record))
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/export/csv")
def export_download() -> Response:
    """CSV attachment (UTF-8 with BOM) for the submitted calculation."""
    params = _read_request().to_params()
    csv_text = export_csv(project(params), params)
    filename = current_app.config["SETTINGS"].EXPORT_FILENAME
    return Response(
        to_csv_bytes(csv_text),
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@api_bp.post("/export/csv/file")
def export_file() -> Any:
    """Write the CSV into the configured export directory."""
    params = _read_request().to_params()
    csv_text = export_csv(project(params), params)
    settings = current_app.config["SETTINGS"]
    path = write_csv(csv_text, settings.EXPORT_DIR, settings.EXPORT_FILENAME)
    return jsonify({"path": str(path)}), HTTPStatus.CREATED
