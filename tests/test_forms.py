"""Tests for the form field state machine"""
from app.forms import CalculationForm, FieldStatus, MeasurementField, localize
from app.measurements import MeasurementKind, ValidationErrorKind, parse_measurement


def test_field_edit_truncates_text():
    field = MeasurementField(MeasurementKind.HEIGHT)
    assert field.edit("1,789") == "1,78"
    assert field.text == "1,78"
    assert field.status == FieldStatus.CLEAN


def test_field_invalid_after_failed_submit_then_clean_on_edit():
    field = MeasurementField(MeasurementKind.WEIGHT, "600")

    result = field.submit()
    assert not result.ok
    assert field.status == FieldStatus.INVALID
    assert field.message == "El peso no puede superar 500 kg"

    field.edit("60")
    assert field.status == FieldStatus.CLEAN
    assert field.message is None

    assert field.submit().ok
    assert field.value == 60.0


def test_height_messages_reference_ceiling():
    error = parse_measurement("4", MeasurementKind.HEIGHT).error
    assert "3,00 m" in localize(error)


def test_messages_cover_every_kind():
    for kind in MeasurementKind:
        for error_kind in ValidationErrorKind:
            field = MeasurementField(kind)
            text = {"NotANumber": "", "NonPositive": "0", "AboveMaximum": "9999"}[error_kind.value]
            field.edit(text)
            field.submit()
            assert field.error.kind == error_kind
            assert field.message


def test_form_submit_success():
    payload, errors = CalculationForm(altura="1,75", peso="70.5").submit()
    assert errors == {}
    assert payload.height == 1.75
    assert payload.weight == 70.5


def test_form_reports_both_fields():
    payload, errors = CalculationForm(altura="", peso="0").submit()
    assert payload is None
    assert errors == {
        "altura": "Ingresa una altura válida. Ejemplo: 1,75",
        "peso": "El peso debe ser mayor que 0",
    }


def test_form_validates_submitted_text_as_sent():
    payload, errors = CalculationForm(altura="1.75m", peso="1e3").submit()
    assert payload is None
    assert errors == {
        "altura": "Ingresa una altura válida. Ejemplo: 1,75",
        "peso": "El peso no puede superar 500 kg",
    }


def test_form_does_not_truncate_on_submit():
    payload, _ = CalculationForm(altura="1.234", peso="70").submit()
    assert payload.height == 1.234


def test_edit_then_submit_uses_truncated_text():
    form = CalculationForm()
    form.height.edit("1.234")
    form.weight.edit("70")
    payload, _ = form.submit()
    assert payload.height == 1.23
