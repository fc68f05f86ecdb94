"""HTTP client for the IMC backend (calculation and history endpoints)"""
import logging
from datetime import date
from typing import List, Optional

import httpx

from app.auth import SessionCredentials
from clients.cache_utils import async_ttl_cache
from settings.config import AppConfig

logger = logging.getLogger(__name__)


class ImcBackendClient:
    """Client for the external IMC backend. Every call carries the caller's bearer token."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or AppConfig.IMC_BACKEND_URL).rstrip("/")
        self.timeout = timeout or AppConfig.IMC_BACKEND_TIMEOUT

    def __repr__(self) -> str:
        return f"ImcBackendClient({self.base_url})"

    def _get_headers(self, credentials: SessionCredentials) -> dict:
        return {"Accept": "application/json", **credentials.authorization_header()}

    async def calculate(self, credentials: SessionCredentials, height: float, weight: float) -> dict:
        """Ask the backend to compute and store a BMI. Returns the stored record."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/imc/calcular",
                json={"altura": height, "peso": weight},
                headers=self._get_headers(credentials)
            )
            response.raise_for_status()
            # the new record must show up in the next history read
            await self.get_history.clear_cache()
            record = response.json()

        logger.info("Stored calculation for %r", credentials)
        return record

    @async_ttl_cache(ttl=lambda: AppConfig.HISTORY_CACHE_TTL_SECONDS)
    async def get_history(
        self,
        credentials: SessionCredentials,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ) -> List[dict]:
        """Past calculations of the current user, optionally bounded by date. Order is unspecified."""
        params = {}
        if date_from is not None:
            params["desde"] = date_from.isoformat()
        if date_to is not None:
            params["hasta"] = date_to.isoformat()

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/imc/historial",
                params=params,
                headers=self._get_headers(credentials)
            )
            response.raise_for_status()
            records = response.json()

        logger.info("Fetched %d history records for %r", len(records), credentials)
        return records


# Singleton instance
imc_backend_client = ImcBackendClient()
