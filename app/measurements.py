"""Normalization and validation of the height/weight text inputs.

Both functions are pure: they never raise and never touch I/O, so the
display layer can call them on every keystroke and on every submit.
"""
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# "at most 2 digits after one optional separator", with "," already folded to "."
_TWO_DECIMALS = re.compile(r"[0-9]*\.?[0-9]{0,2}")
# What a browser's parseFloat would accept as a whole number literal
_NUMBER_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class MeasurementKind(str, Enum):
    HEIGHT = "height"
    WEIGHT = "weight"


class ValidationErrorKind(str, Enum):
    NOT_A_NUMBER = "NotANumber"
    NON_POSITIVE = "NonPositive"
    ABOVE_MAXIMUM = "AboveMaximum"


# Height in meters, weight in kilograms
MAXIMUMS = {
    MeasurementKind.HEIGHT: 3.0,
    MeasurementKind.WEIGHT: 500.0,
}


@dataclass(frozen=True)
class MeasurementError:
    """Why a field's text could not become a measurement"""
    kind: ValidationErrorKind
    measurement: MeasurementKind
    maximum: float


@dataclass(frozen=True)
class ParseResult:
    """Either a parsed value or the first validation error found"""
    value: Optional[float] = None
    error: Optional[MeasurementError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def truncate_to_two_decimals(text: str) -> str:
    """Keep ``text`` in a shape that can still become a two-decimal number.

    Text that already matches is returned verbatim. Otherwise the longest valid
    prefix is kept, written with the separator the user typed ("," wins if the
    text contains one). Idempotent.
    """
    normalized = text.replace(",", ".", 1)
    if _TWO_DECIMALS.fullmatch(normalized):
        return text

    prefix = _TWO_DECIMALS.match(normalized).group(0)
    separator = "," if "," in text else "."
    return prefix.replace(".", separator)


def _to_number(text: str) -> float:
    candidate = text.replace(",", ".").strip()
    if not _NUMBER_LITERAL.fullmatch(candidate):
        return math.nan
    return float(candidate)


def parse_measurement(text: str, kind: MeasurementKind) -> ParseResult:
    """Parse field text into a bounded measurement.

    Checks run in a fixed order: not-a-number, then non-positive, then the
    per-kind maximum, so "-900" reports NonPositive rather than AboveMaximum.
    """
    kind = MeasurementKind(kind)
    maximum = MAXIMUMS[kind]
    value = _to_number(text)

    if not math.isfinite(value):
        error_kind = ValidationErrorKind.NOT_A_NUMBER
    elif value <= 0:
        error_kind = ValidationErrorKind.NON_POSITIVE
    elif value > maximum:
        error_kind = ValidationErrorKind.ABOVE_MAXIMUM
    else:
        return ParseResult(value=value)

    return ParseResult(error=MeasurementError(kind=error_kind, measurement=kind, maximum=maximum))
