"""
Tests for Psychrometric Calculations

These tests verify the humidity conversions against hand-evaluated
formulas and check the physical properties the conversions must keep.

Run with: pytest tests/test_psychrometrics.py -v
"""

import math

import pytest

from core.exceptions import ConversionError, InvalidInputError, InvalidSourceError
from core.psychrometrics import (
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


class TestPsychrometricConstants:
    """Test constants match the reference values."""

    def test_constants_exist(self):
        """Verify all required constants are defined."""
        constants = PsychrometricConstants()

        assert constants.MAGNUS_E0 == 0.61094
        assert constants.MAGNUS_A == 17.625
        assert constants.MAGNUS_B == 243.04
        assert constants.R_WATER_VAPOR == 461.5
        assert constants.KELVIN_OFFSET == 273.15

    def test_rh_domain(self):
        constants = PsychrometricConstants()

        assert constants.RH_MIN == 0.1
        assert constants.RH_MAX == 100.0


class TestSaturationVaporPressure:
    """Tests for the Magnus saturation vapor pressure."""

    def test_zero_celsius(self):
        """At 0°C the exponent vanishes and e_s equals the Magnus constant."""
        assert saturation_vapor_pressure(0.0) == pytest.approx(0.61094)

    def test_twenty_celsius(self):
        """Test a typical room temperature value."""
        # 0.61094 × exp(17.625 × 20 / 263.04)
        assert saturation_vapor_pressure(20.0) == pytest.approx(2.3335, abs=1e-3)

    def test_boiling_point_is_close_to_one_atmosphere(self):
        """Magnus is fitted for weather, but stays near 101 kPa at 100°C."""
        assert saturation_vapor_pressure(100.0) == pytest.approx(101.325, rel=0.05)

    def test_increases_with_temperature(self):
        values = [saturation_vapor_pressure(t) for t in (-30, -10, 0, 10, 25, 40)]

        assert values == sorted(values)
        assert len(set(values)) == len(values)

    def test_extreme_temperatures_not_rejected(self):
        """No validation: any finite temperature yields a positive pressure."""
        assert saturation_vapor_pressure(-80.0) > 0
        assert saturation_vapor_pressure(150.0) > 0


class TestDewPointFromRH:
    """Tests for relative humidity -> dew point."""

    def test_known_value(self):
        """25°C at 50% RH has a dew point of about 13.9°C."""
        assert dew_point_from_rh(50.0, 25.0) == pytest.approx(13.87, abs=0.1)

    def test_saturated_air_dew_point_equals_temperature(self):
        assert dew_point_from_rh(100.0, 20.0) == pytest.approx(20.0, abs=1e-9)

    def test_never_exceeds_temperature(self):
        for temp in (-25.0, 0.0, 12.3, 37.7):
            assert dew_point_from_rh(100.0, temp) <= temp

    def test_minimum_rh_accepted(self):
        dew_point = dew_point_from_rh(0.1, 20.0)

        assert math.isfinite(dew_point)
        assert dew_point < -40

    def test_zero_rh_rejected(self):
        with pytest.raises(InvalidInputError):
            dew_point_from_rh(0, 20)

    def test_rh_just_below_minimum_rejected(self):
        with pytest.raises(InvalidInputError):
            dew_point_from_rh(0.09, 20)

    def test_rh_above_100_rejected(self):
        with pytest.raises(InvalidInputError, match="between 0 and 100"):
            dew_point_from_rh(100.0001, 20)

    def test_monotonic_in_rh(self):
        """Dew point rises strictly with relative humidity."""
        dew_points = [dew_point_from_rh(rh, 22.0) for rh in (1, 10, 25, 50, 75, 99)]

        assert all(a < b for a, b in zip(dew_points, dew_points[1:]))


class TestRHFromDewPoint:
    """Tests for dew point -> relative humidity."""

    def test_saturation_gives_exactly_100(self):
        """Dew point equal to temperature means saturated air."""
        for temp in (-30.0, 0.0, 20.0, 45.5):
            assert rh_from_dew_point(temp, temp) == 100.0

    def test_known_value(self):
        """A 10°C dew point at 20°C is about 52.5% RH."""
        assert rh_from_dew_point(10.0, 20.0) == pytest.approx(52.5, abs=0.5)

    def test_dew_point_above_temperature_rejected(self):
        with pytest.raises(InvalidInputError, match="Dew point cannot be greater than temperature"):
            rh_from_dew_point(25, 20)

    def test_very_dry_air(self):
        rh = rh_from_dew_point(-40.0, 30.0)

        assert 0 < rh < 2


class TestAbsoluteHumidity:
    """Tests for relative humidity <-> absolute humidity."""

    def test_known_value(self):
        """25°C at 50% RH holds about 11.5 g/m³."""
        assert absolute_humidity_from_rh(50.0, 25.0) == pytest.approx(11.50, abs=0.1)

    def test_saturation_at_20(self):
        assert absolute_humidity_from_rh(100.0, 20.0) == pytest.approx(17.25, abs=0.1)

    def test_zero_rh_gives_zero(self):
        assert absolute_humidity_from_rh(0.0, 25.0) == 0.0

    def test_monotonic_in_rh(self):
        """Absolute humidity rises strictly with relative humidity."""
        values = [absolute_humidity_from_rh(rh, 15.0) for rh in (1, 10, 25, 50, 75, 100)]

        assert all(a < b for a, b in zip(values, values[1:]))

    def test_inverse(self):
        ah = absolute_humidity_from_rh(63.0, 18.0)

        assert rh_from_absolute_humidity(ah, 18.0) == pytest.approx(63.0, abs=1e-9)

    def test_supersaturated_input_clamped(self):
        """More vapor than saturated air can hold caps at exactly 100%."""
        assert rh_from_absolute_humidity(50.0, 20.0) == 100.0

    def test_lower_bound_not_guarded(self):
        assert rh_from_absolute_humidity(0.0, 20.0) == 0.0


class TestHumiditySource:
    """Test source tag parsing."""

    def test_values(self):
        assert HumiditySource.RELATIVE_HUMIDITY.value == "relativeHumidity"
        assert HumiditySource.DEW_POINT.value == "dewPoint"
        assert HumiditySource.ABSOLUTE_HUMIDITY.value == "absoluteHumidity"

    def test_parse_string(self):
        assert HumiditySource.parse("dewPoint") is HumiditySource.DEW_POINT

    def test_parse_member(self):
        assert HumiditySource.parse(HumiditySource.ABSOLUTE_HUMIDITY) is HumiditySource.ABSOLUTE_HUMIDITY

    def test_parse_unknown(self):
        with pytest.raises(InvalidSourceError):
            HumiditySource.parse("pressure")

    def test_parse_is_case_sensitive(self):
        with pytest.raises(InvalidSourceError):
            HumiditySource.parse("DewPoint")


class TestConvert:
    """Tests for the unified conversion entry point."""

    def test_from_relative_humidity(self):
        """25°C, 50% RH."""
        result = convert(25.0, 50.0, HumiditySource.RELATIVE_HUMIDITY)

        assert result.relative_humidity == 50.0
        assert result.dew_point == pytest.approx(13.87, abs=0.1)
        assert result.absolute_humidity == pytest.approx(11.50, abs=0.1)

    def test_from_dew_point_at_saturation(self):
        """20°C air with a 20°C dew point is saturated."""
        result = convert(20.0, 20.0, "dewPoint")

        assert result.relative_humidity == 100.0
        assert result.dew_point == 20.0
        assert result.absolute_humidity == pytest.approx(absolute_humidity_from_rh(100.0, 20.0))

    def test_from_absolute_humidity(self):
        result = convert(25.0, 11.5, "absoluteHumidity")

        assert result.absolute_humidity == 11.5
        assert result.relative_humidity == pytest.approx(50.0, abs=0.1)
        assert result.dew_point == pytest.approx(13.87, abs=0.1)

    def test_supersaturated_absolute_humidity_clamped(self):
        result = convert(20.0, 50.0, "absoluteHumidity")

        assert result.relative_humidity == 100.0
        assert result.dew_point <= 20.0

    def test_invalid_source(self):
        with pytest.raises(InvalidSourceError):
            convert(25, 50, "pressure")

    def test_invalid_source_is_a_conversion_error(self):
        with pytest.raises(ConversionError):
            convert(25, 50, None)

    def test_rh_out_of_bounds_propagates(self):
        with pytest.raises(InvalidInputError):
            convert(25, 120, "relativeHumidity")

    def test_dew_point_above_temperature_propagates(self):
        with pytest.raises(InvalidInputError):
            convert(20, 25, "dewPoint")

    def test_vanishing_absolute_humidity_fails_at_dew_point_stage(self):
        """The intermediate RH is not re-validated before dew point derivation."""
        with pytest.raises(InvalidInputError, match="Relative humidity"):
            convert(25, 0, "absoluteHumidity")

    @pytest.mark.parametrize("temp_c,rh", [
        (-20.0, 35.0),
        (0.0, 80.0),
        (18.5, 5.0),
        (25.0, 50.0),
        (40.0, 100.0),
    ])
    def test_round_trip_through_dew_point(self, temp_c, rh):
        """Feeding the derived dew point back reproduces the RH."""
        first = convert(temp_c, rh, "relativeHumidity")
        second = convert(temp_c, first.dew_point, "dewPoint")

        assert second.relative_humidity == pytest.approx(rh, abs=1e-3)
        assert second.absolute_humidity == pytest.approx(first.absolute_humidity, abs=1e-3)

    @pytest.mark.parametrize("temp_c,rh", [
        (-20.0, 35.0),
        (0.0, 80.0),
        (18.5, 5.0),
        (25.0, 50.0),
        (40.0, 100.0),
    ])
    def test_round_trip_through_absolute_humidity(self, temp_c, rh):
        """Feeding the derived absolute humidity back reproduces the RH."""
        first = convert(temp_c, rh, "relativeHumidity")
        second = convert(temp_c, first.absolute_humidity, "absoluteHumidity")

        assert second.relative_humidity == pytest.approx(rh, abs=1e-3)
        assert second.dew_point == pytest.approx(first.dew_point, abs=1e-3)


class TestConversionResult:
    """Test the result container."""

    def test_to_dict_uses_interface_keys(self):
        result = ConversionResult(relative_humidity=50.0, dew_point=13.86, absolute_humidity=11.49)

        assert result.to_dict() == {
            "relativeHumidity": 50.0,
            "dewPoint": 13.86,
            "absoluteHumidity": 11.49,
        }

    def test_rounded(self):
        result = ConversionResult(relative_humidity=49.996, dew_point=13.8571, absolute_humidity=11.4888)

        display = result.rounded(2)

        assert display.relative_humidity == 50.0
        assert display.dew_point == 13.86
        assert display.absolute_humidity == 11.49
        assert result.dew_point == 13.8571  # original untouched


class TestMagnusPole:
    """The Magnus exponent has a pole at -243.04°C; nothing may leak a raw math error."""

    POLE = -243.04

    def test_saturation_at_pole_is_zero(self):
        assert saturation_vapor_pressure(self.POLE) == 0.0

    def test_saturation_just_above_pole_underflows_to_zero(self):
        assert saturation_vapor_pressure(self.POLE + 1e-7) == 0.0

    def test_saturation_just_below_pole_overflows_to_infinity(self):
        assert saturation_vapor_pressure(self.POLE - 1e-7) == math.inf

    @pytest.mark.parametrize("temp_c", [-243.04, -243.04 + 1e-7, -243.04 - 1e-7])
    def test_dew_point_from_rh_rejected(self, temp_c):
        with pytest.raises(InvalidInputError, match="outside the range"):
            dew_point_from_rh(50.0, temp_c)

    @pytest.mark.parametrize("temp_c", [-243.04, -243.04 + 1e-7, -243.04 - 1e-7])
    def test_rh_from_dew_point_rejected(self, temp_c):
        with pytest.raises(InvalidInputError, match="outside the range"):
            rh_from_dew_point(-250.0, temp_c)

    @pytest.mark.parametrize("temp_c", [-243.04, -243.04 + 1e-7, -243.04 - 1e-7])
    def test_rh_from_absolute_humidity_rejected(self, temp_c):
        with pytest.raises(InvalidInputError, match="outside the range"):
            rh_from_absolute_humidity(1.0, temp_c)

    @pytest.mark.parametrize("source", ["relativeHumidity", "absoluteHumidity"])
    def test_convert_near_pole_raises_input_error(self, source):
        with pytest.raises(InvalidInputError):
            convert(-243.0399999, 50.0, source)

    def test_convert_dew_point_at_pole_raises_input_error(self):
        with pytest.raises(InvalidInputError):
            convert(-243.04, -250.0, "dewPoint")

    def test_absolute_zero_rejected(self):
        with pytest.raises(InvalidInputError, match="absolute zero"):
            absolute_humidity_from_rh(50.0, -273.15)
