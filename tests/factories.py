"""Record builders shared by the test modules"""
from datetime import datetime, timedelta, timezone

from app.schemas import CalculationRecord


def make_record_data(
    record_id: int,
    peso: float = 70.0,
    altura: float = 1.75,
    resultado: float = 22.86,
    categoria: str = "Normal",
    created_at: datetime = None
) -> dict:
    """Record as the IMC backend serializes it"""
    created_at = created_at or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc) + timedelta(hours=record_id)
    return {
        "id": record_id,
        "peso": peso,
        "altura": altura,
        "resultado": resultado,
        "categoria": categoria,
        "createdAt": created_at.isoformat(),
    }


def make_record(record_id: int, **kwargs) -> CalculationRecord:
    return CalculationRecord.model_validate(make_record_data(record_id, **kwargs))
