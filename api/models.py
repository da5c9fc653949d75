"""
Pydantic Models for API Request/Response Validation

This module defines all the data models used by the API for:
- Request body validation
- Response serialization
- Documentation generation (OpenAPI/Swagger)

Numeric request fields accept numbers or numeric strings; parsing and
range checks are left to the Humidity-Guard so that every problem is
reported with the same messages the engine uses.

All models use Pydantic v2 syntax for validation and serialization.
"""

from datetime import datetime
from typing import Optional, List, Dict, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# =========================================
# Enums
# =========================================

class ValidationStatus(str, Enum):
    """Input validation status."""
    ACCEPTED = "accepted"
    ACCEPTED_WITH_WARNINGS = "accepted_with_warnings"
    REJECTED = "rejected"


# =========================================
# Conversion Models
# =========================================

class ConversionRequest(BaseModel):
    """
    Input model for a humidity conversion.

    Exactly one humidity measurement is supplied, identified by `source`.
    """
    temperature: Optional[Union[float, str]] = Field(
        default=None,
        description="Air temperature (°C)"
    )
    source: Optional[str] = Field(
        default=None,
        description="Supplied measurement: relativeHumidity, dewPoint or absoluteHumidity"
    )
    value: Optional[Union[float, str]] = Field(
        default=None,
        description="Value of the supplied measurement (%, °C or g/m³)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "temperature": 25.0,
                "source": "relativeHumidity",
                "value": 50.0
            }
        }


class ValidationIssue(BaseModel):
    """A single validation issue."""
    severity: str = Field(..., description="error, warning, or info")
    rule_name: str = Field(..., description="Name of the violated rule")
    message: str = Field(..., description="Human-readable description")
    field_name: Optional[str] = Field(None, description="Affected input field")
    actual_value: Optional[float] = Field(None, description="The problematic value")
    expected_range: Optional[str] = Field(None, description="Expected value range")


class ValidationResponse(BaseModel):
    """Response from input validation."""
    is_valid: bool = Field(..., description="Whether input was accepted")
    status: ValidationStatus = Field(..., description="Validation status")
    error_count: int = Field(default=0, description="Number of errors")
    warning_count: int = Field(default=0, description="Number of warnings")
    issues: List[ValidationIssue] = Field(
        default_factory=list,
        description="List of validation issues"
    )


class ConversionResponse(BaseModel):
    """Derived humidity measurements, rounded to two decimals."""
    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(..., description="Air temperature (°C)")
    source: str = Field(..., description="Which measurement was supplied")
    relative_humidity: float = Field(
        ...,
        alias="relativeHumidity",
        description="Relative humidity (%)"
    )
    dew_point: float = Field(
        ...,
        alias="dewPoint",
        description="Dew point (°C)"
    )
    absolute_humidity: float = Field(
        ...,
        alias="absoluteHumidity",
        description="Absolute humidity (g/m³)"
    )
    validation: ValidationResponse = Field(..., description="Validation results")


class SaturationResponse(BaseModel):
    """Saturation values at a temperature."""
    temperature: float = Field(..., description="Air temperature (°C)")
    vapor_pressure_kpa: float = Field(..., description="Saturation vapor pressure (kPa)")
    absolute_humidity: float = Field(..., description="Saturation absolute humidity (g/m³)")


# =========================================
# System Models
# =========================================

class SystemHealth(BaseModel):
    """System health check response."""
    status: str = Field(..., description="ok or degraded")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Time of check")
    components: Dict[str, str] = Field(
        default_factory=dict,
        description="Per-component status"
    )


class ErrorResponse(BaseModel):
    """Uniform error envelope."""
    error: bool = True
    message: str
    status_code: int
    timestamp: datetime
    detail: Optional[str] = None
