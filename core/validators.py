"""
Humidity-Guard Validation Layer

This module checks conversion inputs as they arrive from a form or an
API request, before they reach the psychrometric engine. It reports every
problem at once instead of stopping at the first one, so a user can fix
all fields in one pass.

Philosophy:
- Hard failures: Missing, non-numeric or physically impossible → Reject
- Soft warnings: Outside typical atmospheric conditions → Accept with warnings
- The engine still enforces its own bounds; the guard never relaxes them
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import logging
import math

from .exceptions import InvalidInputError, InvalidSourceError
from .psychrometrics import CONSTANTS, HumiditySource

logger = logging.getLogger(__name__)

MISSING_VALUE_MESSAGE = "Please provide a temperature and at least one other value."
NON_NUMERIC_MESSAGE = "Please enter valid numbers."


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"        # Cannot be converted - must reject
    WARNING = "warning"    # Unusual - accept with warning
    INFO = "info"          # Informational note


@dataclass
class ValidationIssue:
    """
    A single validation issue found in the input.

    Attributes:
        severity: How serious is this issue
        rule_name: Identifier for the rule that was violated
        message: Human-readable description
        field_name: Which input field has the issue
        actual_value: The problematic value, when it is numeric
        expected_range: What the value should be
    """
    severity: ValidationSeverity
    rule_name: str
    message: str
    field_name: Optional[str] = None
    actual_value: Optional[float] = None
    expected_range: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "severity": self.severity.value,
            "rule_name": self.rule_name,
            "message": self.message,
            "field_name": self.field_name,
            "actual_value": self.actual_value,
            "expected_range": self.expected_range,
        }


@dataclass
class ValidationResult:
    """
    Result of validating conversion input.

    Attributes:
        is_valid: True if input can be converted (possibly with warnings)
        status: "accepted", "accepted_with_warnings", or "rejected"
        issues: List of all validation issues found
        temperature: Parsed temperature, when it parsed
        source: Parsed source tag, when it is known
        value: Parsed source value, when it parsed
    """
    is_valid: bool
    status: str
    issues: List[ValidationIssue] = field(default_factory=list)
    temperature: Optional[float] = None
    source: Optional[HumiditySource] = None
    value: Optional[float] = None

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        infos = [i for i in self.issues if i.severity == ValidationSeverity.INFO]

        return {
            "is_valid": self.is_valid,
            "status": self.status,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "info_count": len(infos),
            "issues": [issue.to_dict() for issue in self.issues],
        }


def parse_number(raw: Any) -> float:
    """
    Parse a form field into a float.

    Accepts ints, floats and numeric strings (surrounding whitespace is
    ignored). Booleans, NaN and infinities are rejected.

    Raises:
        InvalidInputError: If the value is missing or not a finite number
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise InvalidInputError(MISSING_VALUE_MESSAGE)
    if isinstance(raw, bool):
        raise InvalidInputError(NON_NUMERIC_MESSAGE)

    try:
        number = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        raise InvalidInputError(NON_NUMERIC_MESSAGE) from None

    if not math.isfinite(number):
        raise InvalidInputError(NON_NUMERIC_MESSAGE)
    return number


class HumidityGuard:
    """
    Validation guard for psychrometric conversion input.

    Catches the mistakes a person makes when filling in the form:
    - Leaving the temperature or the humidity field empty
    - Typing text into a numeric field
    - Entering a dew point above the air temperature
    - Entering relative humidity above 100%

    Example:
        guard = HumidityGuard()
        result = guard.validate("25", "relativeHumidity", "50")
        print(result.status)  # "accepted"

        result = guard.validate("20", "dewPoint", "25")
        print(result.status)  # "rejected"
    """

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the humidity guard.

        Args:
            strict_mode: If True, treat warnings as errors (reject more)
        """
        self.strict_mode = strict_mode

        # Typical atmospheric conditions near the surface
        # Values outside these trigger warnings, not errors
        self.typical_ranges: Dict[str, Tuple[float, float]] = {
            "temperature": (-60.0, 60.0),                       # °C
            HumiditySource.DEW_POINT.value: (-70.0, 35.0),       # °C
            HumiditySource.ABSOLUTE_HUMIDITY.value: (0.0, 40.0), # g/m³
        }

    def validate(self, temperature: Any, source: Any, value: Any) -> ValidationResult:
        """
        Validate raw conversion input.

        Args:
            temperature: Air temperature (°C), number or numeric string
            source: Humidity source tag
            value: Value of the supplied humidity measurement

        Returns:
            ValidationResult with status, issues and the parsed values
        """
        issues: List[ValidationIssue] = []

        parsed_source = self._validate_source(source, issues)
        parsed_temp = self._parse_field("temperature", temperature, issues)
        field_name = parsed_source.value if parsed_source else "value"
        parsed_value = self._parse_field(field_name, value, issues)

        if parsed_source is not None and parsed_temp is not None and parsed_value is not None:
            issues.extend(self._validate_physical_bounds(parsed_temp, parsed_source, parsed_value))
            issues.extend(self._validate_typical_ranges(parsed_temp, parsed_source, parsed_value))

        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        warnings = [i for i in issues if i.severity == ValidationSeverity.WARNING]

        if errors:
            status = "rejected"
        elif warnings and self.strict_mode:
            for w in warnings:
                w.severity = ValidationSeverity.ERROR
            status = "rejected"
        elif warnings:
            status = "accepted_with_warnings"
        else:
            status = "accepted"

        if status == "rejected":
            logger.debug("Conversion input rejected: %s", [i.rule_name for i in issues])

        return ValidationResult(
            is_valid=status != "rejected",
            status=status,
            issues=issues,
            temperature=parsed_temp,
            source=parsed_source,
            value=parsed_value,
        )

    def _validate_source(self, source: Any, issues: List[ValidationIssue]) -> Optional[HumiditySource]:
        if source is None or source == "":
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name="source_required",
                message=MISSING_VALUE_MESSAGE,
                field_name="source",
                expected_range=", ".join(s.value for s in HumiditySource),
            ))
            return None

        try:
            return HumiditySource.parse(source)
        except InvalidSourceError as e:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name="source_unknown",
                message=e.message,
                field_name="source",
                expected_range=", ".join(s.value for s in HumiditySource),
            ))
            return None

    def _parse_field(self, field_name: str, raw: Any, issues: List[ValidationIssue]) -> Optional[float]:
        try:
            return parse_number(raw)
        except InvalidInputError as e:
            missing = e.message == MISSING_VALUE_MESSAGE
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name=f"{field_name}_required" if missing else f"{field_name}_not_numeric",
                message=e.message,
                field_name=field_name,
            ))
            return None

    def _validate_physical_bounds(
        self,
        temperature: float,
        source: HumiditySource,
        value: float
    ) -> List[ValidationIssue]:
        """
        Validate that the supplied humidity can exist at this temperature.

        These are the same hard limits the engine enforces, reported with
        the engine's messages.
        """
        issues = []

        if source is HumiditySource.RELATIVE_HUMIDITY:
            if value < CONSTANTS.RH_MIN or value > CONSTANTS.RH_MAX:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name="relative_humidity_bounds",
                    message="Relative humidity must be between 0 and 100.",
                    field_name=source.value,
                    actual_value=value,
                    expected_range=f"{CONSTANTS.RH_MIN} - {CONSTANTS.RH_MAX}",
                ))

        elif source is HumiditySource.DEW_POINT:
            # Dew point above air temperature means supersaturation
            if value > temperature:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name="dew_point_above_temperature",
                    message="Dew point cannot be greater than temperature.",
                    field_name=source.value,
                    actual_value=value,
                    expected_range=f"<= {temperature}°C (air temperature)",
                ))

        elif value < 0:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name="absolute_humidity_non_negative",
                message="Absolute humidity cannot be negative.",
                field_name=source.value,
                actual_value=value,
                expected_range=">= 0 g/m³",
            ))

        return issues

    def _validate_typical_ranges(
        self,
        temperature: float,
        source: HumiditySource,
        value: float
    ) -> List[ValidationIssue]:
        """
        Check if values are within typical atmospheric ranges.

        Large deviations get warnings, small ones get info.
        """
        issues = []
        values = {"temperature": temperature, source.value: value}

        for field_name, number in values.items():
            bounds = self.typical_ranges.get(field_name)
            if bounds is None:
                continue

            min_val, max_val = bounds
            if min_val <= number <= max_val:
                continue

            if number < min_val:
                deviation_factor = (min_val - number) / max(abs(min_val), 1)
            else:
                deviation_factor = (number - max_val) / max(abs(max_val), 1)

            severity = ValidationSeverity.WARNING if deviation_factor > 0.5 else ValidationSeverity.INFO

            issues.append(ValidationIssue(
                severity=severity,
                rule_name=f"{field_name}_typical_range",
                message=f"{field_name} is outside typical atmospheric range",
                field_name=field_name,
                actual_value=round(number, 2),
                expected_range=f"{min_val} - {max_val}",
            ))

        return issues


def validate_conversion_input(
    temperature: Any,
    source: Any,
    value: Any,
    strict: bool = False
) -> ValidationResult:
    """
    Convenience function to validate conversion input.

    Example:
        result = validate_conversion_input("25", "dewPoint", "30")
        if not result.is_valid:
            print(result.errors[0].message)
    """
    guard = HumidityGuard(strict_mode=strict)
    return guard.validate(temperature, source, value)
