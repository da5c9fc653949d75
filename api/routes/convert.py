"""
Conversion Endpoints

This module exposes the psychrometric engine over HTTP. It plays the
role of the presentation layer: it accepts raw field values, validates
them, runs the conversion and returns the results rounded for display.

Flow:
1. Receive temperature, source tag and source value
2. Validate against the Humidity-Guard
3. Convert with the psychrometric engine
4. Round to two decimals and return with the validation report

Engine error messages are passed through to the client verbatim.
"""

import logging
import math
import os

from fastapi import APIRouter, HTTPException, Query, status

from api.models import (
    ConversionRequest,
    ConversionResponse,
    ErrorResponse,
    SaturationResponse,
    ValidationIssue,
    ValidationResponse,
    ValidationStatus,
)
from core.exceptions import InvalidInputError, InvalidSourceError
from core.psychrometrics import (
    OUT_OF_RANGE_MESSAGE,
    absolute_humidity_from_rh,
    convert,
    saturation_vapor_pressure,
)
from core.validators import HumidityGuard, ValidationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/convert", tags=["Conversion"])

# Error envelope produced by the handlers in api.main
ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Unknown humidity source"},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse, "description": "Invalid input"},
}

# Initialize core components
humidity_guard = HumidityGuard(
    strict_mode=os.getenv("GUARD_STRICT_MODE", "false").lower() == "true"
)


def to_validation_response(result: ValidationResult) -> ValidationResponse:
    """Convert a core validation result to the API model."""
    return ValidationResponse(
        is_valid=result.is_valid,
        status=ValidationStatus(result.status),
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        issues=[
            ValidationIssue(
                severity=issue.severity.value,
                rule_name=issue.rule_name,
                message=issue.message,
                field_name=issue.field_name,
                actual_value=issue.actual_value,
                expected_range=issue.expected_range
            )
            for issue in result.issues
        ]
    )


def rejection_status(result: ValidationResult) -> int:
    """An unknown source is a bad request; everything else is bad input."""
    if any(i.rule_name == "source_unknown" for i in result.errors):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_422_UNPROCESSABLE_ENTITY


# =========================================
# API Endpoints
# =========================================

@router.post(
    "",
    response_model=ConversionResponse,
    responses=ERROR_RESPONSES,
    summary="Convert a humidity measurement",
    description="""
    Derive relative humidity, dew point and absolute humidity from the air
    temperature and any one of them.

    **Sources:**
    - `relativeHumidity` (%), within 0.1 - 100
    - `dewPoint` (°C), not above the air temperature
    - `absoluteHumidity` (g/m³)

    Results are rounded to two decimals.
    """
)
async def convert_humidity(request: ConversionRequest):
    """Convert one humidity measurement into all three."""
    validation = humidity_guard.validate(request.temperature, request.source, request.value)

    if not validation.is_valid:
        first_error = validation.errors[0]
        logger.warning(f"Conversion rejected: {first_error.rule_name}")
        raise HTTPException(
            status_code=rejection_status(validation),
            detail=first_error.message
        )

    try:
        result = convert(validation.temperature, validation.value, validation.source)
    except InvalidSourceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidInputError as e:
        logger.warning(f"Conversion failed: {e.message}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)

    display = result.rounded(2)
    logger.info(
        f"Converted {validation.source.value}={validation.value} at {validation.temperature}°C"
    )

    return ConversionResponse(
        temperature=validation.temperature,
        source=validation.source.value,
        relative_humidity=display.relative_humidity,
        dew_point=display.dew_point,
        absolute_humidity=display.absolute_humidity,
        validation=to_validation_response(validation)
    )


@router.post(
    "/validate",
    response_model=ValidationResponse,
    summary="Validate conversion input",
    description="Run the Humidity-Guard without converting. Always returns 200."
)
async def validate_input(request: ConversionRequest):
    """Validate conversion input and report every issue found."""
    validation = humidity_guard.validate(request.temperature, request.source, request.value)
    return to_validation_response(validation)


@router.get(
    "/saturation",
    response_model=SaturationResponse,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: ERROR_RESPONSES[status.HTTP_422_UNPROCESSABLE_ENTITY]},
    summary="Saturation values at a temperature",
    description="Saturation vapor pressure (kPa) and the absolute humidity of saturated air (g/m³)."
)
async def get_saturation(
    temperature: float = Query(..., description="Air temperature (°C)")
):
    """Get saturation vapor pressure and absolute humidity at 100% RH."""
    try:
        vapor_pressure = saturation_vapor_pressure(temperature)
        absolute_humidity = absolute_humidity_from_rh(100.0, temperature)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)

    if not (math.isfinite(vapor_pressure) and math.isfinite(absolute_humidity)):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=OUT_OF_RANGE_MESSAGE
        )

    return SaturationResponse(
        temperature=temperature,
        vapor_pressure_kpa=round(vapor_pressure, 4),
        absolute_humidity=round(absolute_humidity, 2)
    )
