"""Бизнес-логика: расчет IMC, история и сводка для дашборда"""
import logging
from datetime import date, timezone
from typing import List, Optional
from zoneinfo import ZoneInfo

import httpx

from app.auth import SessionCredentials
from app.forms import CalculationForm
from app.history import FilterSpec, HistoryPage, PageWindow, SortSpec, project
from app.schemas import CalculationRecord
from app.summary import DashboardSummary, summarize
from app.utils.error_handler import UpstreamServiceError, ValidationError
from clients.imc_backend_client import imc_backend_client
from settings.config import AppConfig

logger = logging.getLogger(__name__)

CALCULATION_UNAVAILABLE = "Error al calcular el IMC. Verifica si el backend está corriendo."
HISTORY_UNAVAILABLE = "No se pudo cargar el historial. Intenta nuevamente."


def reference_timezone() -> ZoneInfo:
    return ZoneInfo(AppConfig.REFERENCE_TIMEZONE)


async def calculate_imc(
    credentials: SessionCredentials,
    altura: str,
    peso: str
) -> CalculationRecord:
    """Validates both fields and submits them to the calculation service"""
    payload, errors = CalculationForm(altura=altura, peso=peso).submit()
    if errors:
        raise ValidationError("Datos inválidos", details=errors)

    try:
        data = await imc_backend_client.calculate(
            credentials,
            height=payload.height,
            weight=payload.weight
        )
        record = CalculationRecord.model_validate(data)
    except (httpx.HTTPError, ValueError, TypeError) as e:
        # unreachable, non-2xx, or an answer that is not a calculation record
        logger.error("Calculation service failed: %s", e)
        raise UpstreamServiceError(CALCULATION_UNAVAILABLE) from e

    logger.info("Calculation id=%s stored for %r", record.id, credentials)
    return record


async def fetch_history(
    credentials: SessionCredentials,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    newest_first: bool = True
) -> List[CalculationRecord]:
    """History records ordered by timestamp (newest first by default)"""
    try:
        data = await imc_backend_client.get_history(credentials, date_from, date_to)
        records = [CalculationRecord.model_validate(item) for item in data]
    except (httpx.HTTPError, ValueError, TypeError) as e:
        logger.error("History service failed: %s", e)
        raise UpstreamServiceError(HISTORY_UNAVAILABLE) from e

    return sorted(
        records,
        key=lambda record: (
            record.timestamp if record.timestamp.tzinfo else record.timestamp.replace(tzinfo=timezone.utc)
        ),
        reverse=newest_first
    )


async def get_history_page(
    credentials: SessionCredentials,
    filter_spec: FilterSpec,
    sort_spec: SortSpec,
    page: PageWindow
) -> HistoryPage:
    """Fetches the history (server-side bounds) and projects the requested page"""
    records = await fetch_history(credentials, filter_spec.date_from, filter_spec.date_to)
    result = project(records, filter_spec, sort_spec, page, reference_tz=reference_timezone())

    logger.info(
        "Projected %d of %d history records (page %d/%d)",
        len(result.visible), result.total_records, page.current_page, result.display_total_pages
    )
    return result


async def get_dashboard(credentials: SessionCredentials) -> DashboardSummary:
    records = await fetch_history(credentials, newest_first=False)
    return summarize(records)
