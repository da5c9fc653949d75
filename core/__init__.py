"""
Core Module - Psychrometric Converter

This module contains the core logic of the humidity converter:
- Psychrometric calculations (saturation vapor pressure, RH, dew point,
  absolute humidity)
- Validation layer (Humidity-Guard)
- Error types shared by both

These components are framework-agnostic and can be used by the API
or imported directly as a library.
"""

from .exceptions import ConversionError, InvalidInputError, InvalidSourceError
from .psychrometrics import (
    ConversionResult,
    HumiditySource,
    PsychrometricConstants,
    absolute_humidity_from_rh,
    convert,
    dew_point_from_rh,
    rh_from_absolute_humidity,
    rh_from_dew_point,
    saturation_vapor_pressure,
)
from .validators import HumidityGuard, ValidationResult, parse_number, validate_conversion_input

__all__ = [
    # Psychrometrics
    "ConversionResult",
    "HumiditySource",
    "PsychrometricConstants",
    "saturation_vapor_pressure",
    "dew_point_from_rh",
    "rh_from_dew_point",
    "absolute_humidity_from_rh",
    "rh_from_absolute_humidity",
    "convert",

    # Errors
    "ConversionError",
    "InvalidInputError",
    "InvalidSourceError",

    # Validation
    "HumidityGuard",
    "ValidationResult",
    "parse_number",
    "validate_conversion_input",
]

__version__ = "0.1.0"
