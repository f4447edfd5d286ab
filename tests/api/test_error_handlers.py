"""Global Error Handlers — transport status always matches base.status_code."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from costing_master.api.error_handlers import register_error_handlers
from costing_master.api.response_formatter import ResponseFormatter
from costing_master.core.error_translator import INTERNAL_ERROR_MESSAGE
from costing_master.core.errors import (
    DatabaseError, EntityKind, NotFoundError, OperationTimeoutError,
)


def _app_raising(error: Exception) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app, ResponseFormatter())

    @app.get("/boom")
    async def boom():
        raise error

    return app


async def _get_boom(error: Exception):
    async with AsyncClient(
        transport=ASGITransport(app=_app_raising(error)), base_url="http://test",
    ) as c:
        return await c.get("/boom")


async def test_database_error_answers_500_in_transport_and_envelope():
    response = await _get_boom(DatabaseError("connection refused", "select"))
    base = response.json()["base"]
    assert response.status_code == 500
    assert base["status_code"] == "500"
    assert base["message"] == INTERNAL_ERROR_MESSAGE
    assert "refused" not in base["message"]


async def test_timeout_answers_500_in_transport_and_envelope():
    response = await _get_boom(OperationTimeoutError("GetUOM", 0.5))
    assert response.status_code == 500
    assert response.json()["base"]["status_code"] == "500"


async def test_domain_error_status_matches_envelope():
    response = await _get_boom(NotFoundError(EntityKind.UOM))
    assert response.status_code == 404
    assert response.json()["base"]["status_code"] == "404"
    assert response.json()["base"]["message"] == "uom not found"
