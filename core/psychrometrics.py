"""
Psychrometric Conversions

This module derives the three common humidity measurements from one
another at a given air temperature. All calculations are pure functions
based on the August-Roche-Magnus approximation for saturation vapor
pressure and the ideal gas law for water vapor.

Key Quantities:
- Relative Humidity: Actual / saturation vapor pressure (%)
- Dew Point: Temperature at which the air becomes saturated (°C)
- Absolute Humidity: Mass of water vapor per volume of air (g/m³)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from .exceptions import InvalidInputError, InvalidSourceError


@dataclass(frozen=True)
class PsychrometricConstants:
    """
    Constants used in the humidity conversions.

    The Magnus coefficients are the Alduchov & Eskridge (1996) values,
    valid to within 0.4% between -40°C and 50°C.
    """

    # August-Roche-Magnus coefficients
    MAGNUS_E0: float = 0.61094            # kPa
    MAGNUS_A: float = 17.625              # dimensionless
    MAGNUS_B: float = 243.04              # °C

    # Ideal gas law
    R_WATER_VAPOR: float = 461.5          # J/(kg·K)
    KELVIN_OFFSET: float = 273.15         # °C -> K

    # Relative humidity domain
    RH_MIN: float = 0.1                   # %
    RH_MAX: float = 100.0                 # %


CONSTANTS = PsychrometricConstants()

OUT_OF_RANGE_MESSAGE = "Temperature is outside the range of the saturation vapor pressure approximation."


class HumiditySource(str, Enum):
    """Which humidity field was supplied by the user."""
    RELATIVE_HUMIDITY = "relativeHumidity"
    DEW_POINT = "dewPoint"
    ABSOLUTE_HUMIDITY = "absoluteHumidity"

    @classmethod
    def parse(cls, tag: Union["HumiditySource", str]) -> "HumiditySource":
        """
        Map a raw source tag to a HumiditySource member.

        Raises:
            InvalidSourceError: If the tag is not one of the known sources
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise InvalidSourceError(
                f"Invalid conversion source provided: {tag!r}"
            ) from None


@dataclass(frozen=True)
class ConversionResult:
    """
    Mutually consistent humidity measurements at one temperature.

    Attributes:
        relative_humidity: Relative humidity (%)
        dew_point: Dew point (°C)
        absolute_humidity: Absolute humidity (g/m³)
    """
    relative_humidity: float
    dew_point: float
    absolute_humidity: float

    def rounded(self, digits: int = 2) -> "ConversionResult":
        """Copy of the result rounded for display."""
        return ConversionResult(
            relative_humidity=round(self.relative_humidity, digits),
            dew_point=round(self.dew_point, digits),
            absolute_humidity=round(self.absolute_humidity, digits),
        )

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return {
            "relativeHumidity": self.relative_humidity,
            "dewPoint": self.dew_point,
            "absoluteHumidity": self.absolute_humidity,
        }


def saturation_vapor_pressure(temp_c: float) -> float:
    """
    Calculate saturation vapor pressure over water.

    Args:
        temp_c: Air temperature (°C)

    Returns:
        Saturation vapor pressure in kPa

    Formula:
        e_s(T) = 0.61094 × exp(17.625 × T / (243.04 + T))

    Note:
        No input validation. Accuracy degrades far outside the usual
        atmospheric range but any finite temperature is accepted. Around
        the pole at -243.04°C the result saturates to 0.0 (at and just
        above it) or math.inf (just below it) instead of raising.
    """
    c = CONSTANTS
    denominator = c.MAGNUS_B + temp_c
    if denominator == 0:
        # Exponent tends to -inf
        return 0.0

    try:
        return c.MAGNUS_E0 * math.exp((c.MAGNUS_A * temp_c) / denominator)
    except OverflowError:
        return math.inf


def _require_usable_saturation(e_s: float) -> None:
    if not 0 < e_s < math.inf:
        raise InvalidInputError(OUT_OF_RANGE_MESSAGE)


def _kelvin(temp_c: float) -> float:
    temp_k = temp_c + CONSTANTS.KELVIN_OFFSET
    if temp_k <= 0:
        raise InvalidInputError("Temperature must be above absolute zero.")
    return temp_k


def dew_point_from_rh(rh: float, temp_c: float) -> float:
    """
    Calculate dew point from relative humidity.

    Args:
        rh: Relative humidity (%), must be within [0.1, 100]
        temp_c: Air temperature (°C)

    Returns:
        Dew point in °C, capped at temp_c so that feeding a saturated
        result back as a dew point (the RH = 100 round trip) is accepted

    Raises:
        InvalidInputError: If rh is outside [0.1, 100], or the actual
            vapor pressure at temp_c is zero or infinite

    Formula:
        e   = RH/100 × e_s(T)
        γ   = ln(e / 0.61094)
        T_d = 243.04 × γ / (17.625 - γ)
    """
    c = CONSTANTS
    if rh < c.RH_MIN or rh > c.RH_MAX:
        raise InvalidInputError("Relative humidity must be between 0 and 100.")

    e = (rh / 100) * saturation_vapor_pressure(temp_c)
    _require_usable_saturation(e)

    gamma = math.log(e / c.MAGNUS_E0)
    if gamma == c.MAGNUS_A:
        raise InvalidInputError(OUT_OF_RANGE_MESSAGE)
    dew_point = (c.MAGNUS_B * gamma) / (c.MAGNUS_A - gamma)

    # At saturation the inverse can overshoot by an ulp
    return min(dew_point, temp_c)


def rh_from_dew_point(dp: float, temp_c: float) -> float:
    """
    Calculate relative humidity from dew point.

    Args:
        dp: Dew point (°C), must not exceed temp_c
        temp_c: Air temperature (°C)

    Returns:
        Relative humidity in %, capped at 100

    Raises:
        InvalidInputError: If the dew point is above the air temperature,
            or saturation vapor pressure at temp_c is zero or infinite
    """
    if dp > temp_c:
        raise InvalidInputError("Dew point cannot be greater than temperature.")

    e_s = saturation_vapor_pressure(temp_c)
    _require_usable_saturation(e_s)

    rh = (saturation_vapor_pressure(dp) / e_s) * 100
    return min(rh, CONSTANTS.RH_MAX)


def absolute_humidity_from_rh(rh: float, temp_c: float) -> float:
    """
    Calculate absolute humidity from relative humidity.

    Args:
        rh: Relative humidity (%)
        temp_c: Air temperature (°C)

    Returns:
        Absolute humidity in g/m³

    Formula:
        AH = e × 10⁶ / (R_v × T_K)

        Where e is in kPa: ×1000 for Pa, ×1000 again for kg -> g.

    Raises:
        InvalidInputError: If temp_c is at or below absolute zero
    """
    c = CONSTANTS
    temp_k = _kelvin(temp_c)
    e = (rh / 100) * saturation_vapor_pressure(temp_c)
    return (e * 1000 * 1000) / (c.R_WATER_VAPOR * temp_k)


def rh_from_absolute_humidity(ah: float, temp_c: float) -> float:
    """
    Calculate relative humidity from absolute humidity.

    The lower bound is not guarded: a vanishing absolute humidity gives a
    relative humidity near zero.
    """
    c = CONSTANTS
    temp_k = _kelvin(temp_c)
    e_s = saturation_vapor_pressure(temp_c)
    _require_usable_saturation(e_s)

    # g/m³ -> kg/m³, then Pa -> kPa
    e = ((ah / 1000) * c.R_WATER_VAPOR * temp_k) / 1000
    rh = (e / e_s) * 100
    return min(rh, c.RH_MAX)


def convert(
    temp_c: float,
    source_value: float,
    source: Union[HumiditySource, str]
) -> ConversionResult:
    """
    Derive all three humidity measurements from one of them.

    This is the main entry point of the engine. The supplied value is
    assigned directly; the other two are derived at the given temperature.

    Args:
        temp_c: Air temperature (°C)
        source_value: Value of the supplied humidity measurement
        source: Which measurement source_value is

    Returns:
        ConversionResult with all fields populated

    Raises:
        InvalidSourceError: If source is not a known HumiditySource
        InvalidInputError: If a stage function rejects its input

    Example:
        result = convert(25.0, 50.0, HumiditySource.RELATIVE_HUMIDITY)
        print(f"Dew point: {result.dew_point:.2f}°C")  # ~13.86°C
    """
    source = HumiditySource.parse(source)

    if source is HumiditySource.RELATIVE_HUMIDITY:
        relative_humidity = source_value
        dew_point = dew_point_from_rh(relative_humidity, temp_c)
        absolute_humidity = absolute_humidity_from_rh(relative_humidity, temp_c)
    elif source is HumiditySource.DEW_POINT:
        dew_point = source_value
        relative_humidity = rh_from_dew_point(dew_point, temp_c)
        absolute_humidity = absolute_humidity_from_rh(relative_humidity, temp_c)
    else:
        absolute_humidity = source_value
        relative_humidity = rh_from_absolute_humidity(absolute_humidity, temp_c)
        dew_point = dew_point_from_rh(relative_humidity, temp_c)

    return ConversionResult(
        relative_humidity=relative_humidity,
        dew_point=dew_point,
        absolute_humidity=absolute_humidity,
    )
