"""API роуты калькулятора IMC и истории расчетов"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.auth import SessionCredentials, get_credentials
from app.forms import localize
from app.history import PAGE_SIZE, FilterSpec, PageWindow, SortDirection, SortKey, SortSpec
from app.measurements import parse_measurement, truncate_to_two_decimals
from app.schemas import (
    CalculateRequest,
    CalculationRecord,
    HistoryPageResponse,
    NormalizeInputRequest,
    NormalizeInputResponse,
    SortStateResponse,
    ValidateInputRequest,
    ValidateInputResponse,
)
from app.services import calculate_imc, get_history_page
from app.utils.error_handler import handle_api_errors


router = APIRouter()


@router.post(
    "/input/normalize",
    response_model=NormalizeInputResponse,
    status_code=status.HTTP_200_OK,
    summary="Limitar el texto de un campo a dos decimales"
)
@handle_api_errors
async def normalize_input_endpoint(request: NormalizeInputRequest = Body(...)):
    """Called on every keystroke of the altura/peso inputs"""
    return NormalizeInputResponse(text=truncate_to_two_decimals(request.text))


@router.post(
    "/input/validate",
    response_model=ValidateInputResponse,
    status_code=status.HTTP_200_OK,
    summary="Validar un campo de altura o peso"
)
@handle_api_errors
async def validate_input_endpoint(request: ValidateInputRequest = Body(...)):
    result = parse_measurement(request.text, request.kind)
    if result.ok:
        return ValidateInputResponse(valid=True, value=result.value)
    return ValidateInputResponse(
        valid=False,
        error_kind=result.error.kind,
        message=localize(result.error)
    )


@router.post(
    "/calcular",
    response_model=CalculationRecord,
    status_code=status.HTTP_200_OK,
    summary="Calcular el IMC"
)
@handle_api_errors
async def calculate_endpoint(
    request: CalculateRequest = Body(...),
    credentials: SessionCredentials = Depends(get_credentials)
):
    """Validates altura/peso and forwards them to the calculation service"""
    return await calculate_imc(credentials, altura=request.altura, peso=request.peso)


@router.get(
    "/historial",
    response_model=HistoryPageResponse,
    status_code=status.HTTP_200_OK,
    summary="Historial de cálculos filtrado, ordenado y paginado"
)
@handle_api_errors
async def history_endpoint(
    desde: Optional[date] = Query(None, description="Desde (YYYY-MM-DD, inclusive)"),
    hasta: Optional[date] = Query(None, description="Hasta (YYYY-MM-DD, inclusive)"),
    sort_key: Optional[SortKey] = Query(None),
    sort_dir: SortDirection = Query(SortDirection.DESC),
    page: int = Query(1, ge=1),
    credentials: SessionCredentials = Depends(get_credentials)
):
    result = await get_history_page(
        credentials,
        filter_spec=FilterSpec(date_from=desde, date_to=hasta),
        sort_spec=SortSpec(key=sort_key, direction=sort_dir),
        page=PageWindow(current_page=page)
    )
    return HistoryPageResponse(
        items=result.visible,
        total_pages=result.total_pages,
        display_total_pages=result.display_total_pages,
        current_page=page,
        page_size=PAGE_SIZE,
        total_records=result.total_records
    )


@router.get(
    "/historial/sort",
    response_model=SortStateResponse,
    status_code=status.HTTP_200_OK,
    summary="Siguiente estado de ordenamiento al pulsar una columna"
)
@handle_api_errors
async def next_sort_endpoint(
    selected: SortKey = Query(...),
    current_key: Optional[SortKey] = Query(None),
    current_dir: SortDirection = Query(SortDirection.DESC)
):
    toggled = SortSpec(key=current_key, direction=current_dir).toggled(selected)
    return SortStateResponse(key=toggled.key, direction=toggled.direction)
