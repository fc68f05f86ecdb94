"""API роуты для дашборда"""
from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from app.auth import SessionCredentials, get_credentials
from app.schemas import DashboardResponse
from app.services import get_dashboard
from app.utils.error_handler import handle_api_errors


router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Evolución del IMC y distribución por categoría"
)
@handle_api_errors
async def dashboard_endpoint(credentials: SessionCredentials = Depends(get_credentials)):
    summary = await get_dashboard(credentials)
    return DashboardResponse.model_validate(asdict(summary))
