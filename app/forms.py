"""Per-field edit/submit state for the calculation form"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from app.measurements import (
    MeasurementError,
    MeasurementKind,
    ParseResult,
    ValidationErrorKind,
    parse_measurement,
    truncate_to_two_decimals,
)


MESSAGES = {
    MeasurementKind.HEIGHT: {
        ValidationErrorKind.NOT_A_NUMBER: "Ingresa una altura válida. Ejemplo: 1,75",
        ValidationErrorKind.NON_POSITIVE: "La altura debe ser mayor que 0",
        ValidationErrorKind.ABOVE_MAXIMUM: "La altura no puede superar 3,00 m",
    },
    MeasurementKind.WEIGHT: {
        ValidationErrorKind.NOT_A_NUMBER: "Ingresa un peso válido. Ejemplo: 70",
        ValidationErrorKind.NON_POSITIVE: "El peso debe ser mayor que 0",
        ValidationErrorKind.ABOVE_MAXIMUM: "El peso no puede superar 500 kg",
    },
}

# Wire names of the form fields
FIELD_NAMES = {
    MeasurementKind.HEIGHT: "altura",
    MeasurementKind.WEIGHT: "peso",
}


def localize(error: MeasurementError) -> str:
    return MESSAGES[error.measurement][error.kind]


class FieldStatus(str, Enum):
    CLEAN = "clean"
    INVALID = "invalid"


class MeasurementField:
    """One text input: Clean -> (submit fails) -> Invalid -> (edit) -> Clean"""

    def __init__(self, kind: MeasurementKind, text: str = ""):
        self.kind = MeasurementKind(kind)
        # submitted text is validated as sent; only edit() truncates
        self.text = text
        self.status = FieldStatus.CLEAN
        self.error: Optional[MeasurementError] = None
        self.value: Optional[float] = None

    @property
    def message(self) -> Optional[str]:
        return localize(self.error) if self.error else None

    def edit(self, text: str) -> str:
        self.text = truncate_to_two_decimals(text)
        self.status = FieldStatus.CLEAN
        self.error = None
        self.value = None
        return self.text

    def submit(self) -> ParseResult:
        result = parse_measurement(self.text, self.kind)
        if result.ok:
            self.status = FieldStatus.CLEAN
            self.error = None
            self.value = result.value
        else:
            self.status = FieldStatus.INVALID
            self.error = result.error
            self.value = None
        return result


@dataclass(frozen=True)
class CalculationPayload:
    height: float
    weight: float


class CalculationForm:
    """Height and weight fields submitted together"""

    def __init__(self, altura: str = "", peso: str = ""):
        self.height = MeasurementField(MeasurementKind.HEIGHT, altura)
        self.weight = MeasurementField(MeasurementKind.WEIGHT, peso)

    def submit(self) -> Tuple[Optional[CalculationPayload], Dict[str, str]]:
        """Validate both fields; the payload is present only when both are clean.

        Every invalid field is reported, keyed by its wire name.
        """
        errors = {}
        for field in (self.height, self.weight):
            if not field.submit().ok:
                errors[FIELD_NAMES[field.kind]] = field.message

        if errors:
            return None, errors
        return CalculationPayload(height=self.height.value, weight=self.weight.value), {}
