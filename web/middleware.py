"""Middleware для аутентификации API"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.auth import parse_bearer


PUBLIC_PATHS = ("/", "/health", "/docs", "/redoc", "/openapi.json")


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Requires ``Authorization: Bearer <token>`` and stores it on request.state"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in PUBLIC_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        header_value = request.headers.get("Authorization")
        if not header_value:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Missing Authorization header", "error_type": "UnauthorizedError"}
            )

        credentials = parse_bearer(header_value)
        if credentials is None:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Authorization must be a bearer token", "error_type": "UnauthorizedError"}
            )

        request.state.credentials = credentials
        return await call_next(request)
