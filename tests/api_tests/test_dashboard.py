"""API тесты для дашборда"""
from datetime import datetime, timezone

import httpx
import pytest
from httpx import AsyncClient

from tests.factories import make_record_data


@pytest.mark.asyncio
async def test_dashboard_empty(async_client: AsyncClient, auth_headers: dict, backend):
    response = await async_client.get("/imc/dashboard", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "total_records": 0,
        "last_index": None,
        "most_frequent_category": None,
        "evolution": [],
        "categories": [],
    }


@pytest.mark.asyncio
async def test_dashboard_with_data(async_client: AsyncClient, auth_headers: dict, backend):
    backend.get_history.return_value = [
        make_record_data(2, resultado=31.0, categoria="Obesidad",
                         created_at=datetime(2025, 5, 2, tzinfo=timezone.utc)),
        make_record_data(1, resultado=29.0, categoria="Sobrepeso",
                         created_at=datetime(2025, 5, 1, tzinfo=timezone.utc)),
        make_record_data(3, resultado=30.0, categoria="Obesidad",
                         created_at=datetime(2025, 5, 3, tzinfo=timezone.utc)),
    ]

    response = await async_client.get("/imc/dashboard", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_records"] == 3
    assert data["last_index"] == 30.0
    assert data["most_frequent_category"] == "Obesidad"
    assert [point["index"] for point in data["evolution"]] == [29.0, 31.0, 30.0]
    assert [(c["name"], c["count"], c["average_index"]) for c in data["categories"]] == [
        ("Sobrepeso", 1, 29.0),
        ("Obesidad", 2, 30.5),
    ]
    assert [c["share"] for c in data["categories"]] == [pytest.approx(100 / 3), pytest.approx(200 / 3)]
    # full history, no date bounds
    assert backend.get_history.await_args.args[1:] == (None, None)


@pytest.mark.asyncio
async def test_dashboard_backend_down(async_client: AsyncClient, auth_headers: dict, backend):
    backend.get_history.side_effect = httpx.ConnectError("refused")

    response = await async_client.get("/imc/dashboard", headers=auth_headers)

    assert response.status_code == 502
    assert response.json()["error_type"] == "UpstreamServiceError"
