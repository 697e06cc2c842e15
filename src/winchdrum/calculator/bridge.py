"""
JSON bridge for the calculation endpoint.

Provides a single entry point for HTTP and script callers: a JSON request
body goes in, a JSON response body comes out. Requests are checked against
the request schema (winchdrum.io.schema) before computation; a bad request
gives status 400 with one error entry per offending field and never raises.

Usage:
    >>> from winchdrum.calculator.bridge import calculate
    >>> response = json.loads(calculate(request_body))
    >>> response["status"]
    200
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from typing_extensions import TypedDict

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..enums import DrivetrainType
from ..io import Configuration
from ..io.schema import validate_request_fields
from .core import compute
from .validation import validate_model
from .output import model_to_dict, to_summary, to_markdown

logger = logging.getLogger(__name__)


class FieldErrorDict(TypedDict):
    """One offending request field."""
    field: str
    message: str


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to callers."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "CAPACITY_EXCEEDED"
    message: str
    suggestion: Optional[str]


# ============================================================================
# Output Model
# ============================================================================

class CalculationResponse(BaseModel):
    """Response body for a calculation request."""
    model_config = ConfigDict(extra='ignore')

    status: int = 200
    success: bool
    error: Optional[str] = None
    errors: List[FieldErrorDict] = Field(default_factory=list)

    project_name: Optional[str] = None
    drivetrain: Optional[str] = None
    generated_at: Optional[str] = None
    version: Optional[str] = None

    # Computed model as a JSON-compatible dict (unbounded limits are null)
    model: Optional[Dict[str, Any]] = None
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)


def _package_version() -> str:
    from .. import __version__
    return __version__


def _bad_request(error: str, errors: Optional[List[FieldErrorDict]] = None) -> CalculationResponse:
    return CalculationResponse(status=400, success=False, error=error, errors=errors or [])


def _configuration_from_request(data: Dict[str, Any], drivetrain: DrivetrainType) -> Configuration:
    """
    Build a Configuration from a request body.

    The drivetrain selector enables one drivetrain; explicit boolean
    enable flags in the body take precedence.
    """
    fields = dict(data)
    fields.setdefault('electric_enabled', drivetrain == DrivetrainType.ELECTRIC)
    fields.setdefault('hydraulic_enabled', drivetrain == DrivetrainType.HYDRAULIC)
    return Configuration.model_validate(fields)


# ============================================================================
# Main Entry Points
# ============================================================================

def calculate_payload(data: Any, include_markdown: bool = False) -> CalculationResponse:
    """
    Compute a model from a decoded request body.

    Args:
        data: Decoded JSON request body (should be an object)
        include_markdown: Also render the Markdown report

    Returns:
        CalculationResponse with status 200 on success, 400 for bad input
    """
    if not isinstance(data, dict):
        return _bad_request("Invalid calculation payload: expected a JSON object.")

    drivetrain = DrivetrainType.from_value(data.get('drivetrain'))

    field_errors = validate_request_fields(data, drivetrain)
    if field_errors:
        logger.info(f"Rejected calculation request: {len(field_errors)} invalid field(s)")
        return _bad_request("Invalid calculation payload.", field_errors)

    try:
        config = _configuration_from_request(data, drivetrain)
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        return _bad_request("Invalid calculation payload.", errors)

    model = compute(config)
    validation = validate_model(model)

    return CalculationResponse(
        status=200,
        success=True,
        project_name=data.get('project_name'),
        drivetrain=drivetrain.value,
        generated_at=datetime.now(timezone.utc).isoformat(),
        version=_package_version(),
        model=model_to_dict(model),
        summary=to_summary(model, validation),
        markdown=to_markdown(model, validation) if include_markdown else None,
        valid=validation.valid,
        messages=[
            {
                'severity': m.severity.value,
                'code': m.code,
                'message': m.message,
                'suggestion': m.suggestion
            }
            for m in validation.messages
        ],
    )


def calculate(input_json: str) -> str:
    """
    Single entry point for JSON callers.

    Args:
        input_json: JSON request body

    Returns:
        JSON string with CalculationResponse structure
    """
    try:
        data = json.loads(input_json)
        response = calculate_payload(data)

    except json.JSONDecodeError as e:
        response = _bad_request(f"Invalid JSON: {e}")

    except Exception as e:
        logger.exception("Calculation failed")
        response = CalculationResponse(status=500, success=False, error=str(e))

    return response.model_dump_json()
