"""FastAPI приложение калькулятора IMC"""
import logging.config

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from settings.logs import LogsConfig
from settings.config import AppConfig, STAND
from web.routes.imc import router as imc_router
from web.routes.dashboard import router as dashboard_router
from web.middleware import BearerAuthMiddleware, PUBLIC_PATHS
from app.utils.error_handler import APIError, global_exception_handler, create_error_responses

# Настраиваем логирование
logging.config.dictConfig(LogsConfig.LOGGING)
logger = logging.getLogger(__name__)


sentry_sdk.init(
    dsn=AppConfig.SENTRY_DSN,
    send_default_pii=False,
    environment=STAND
)

app = FastAPI(
    title="IMC Calculator API",
    description="Body-mass-index calculator: input validation, history and dashboard over the IMC backend",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_exception_handler(APIError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Bearer auth must run inside CORS so preflight gets CORS headers
app.add_middleware(BearerAuthMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=AppConfig.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    imc_router,
    prefix="/imc",
    tags=["imc"],
    responses=create_error_responses()
)

app.include_router(
    dashboard_router,
    prefix="/imc",
    tags=["dashboard"],
    responses=create_error_responses()
)


def custom_openapi():
    """Adds the bearer scheme to every non-public path in the OpenAPI schema"""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "description": "Access token del proveedor de identidad"
        }
    }

    for path, path_item in openapi_schema["paths"].items():
        if path in PUBLIC_PATHS:
            continue
        for method in path_item:
            if method in ["get", "post", "put", "patch", "delete"]:
                path_item[method].setdefault("security", [{"BearerAuth": []}])

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.get("/", tags=["health"])
async def root():
    return {
        "status": "ok",
        "message": "IMC Calculator API is running",
        "version": "1.0.0"
    }


@app.get("/health", tags=["health"])
async def health_check():
    return {
        "status": "healthy",
        "service": "imc_calculator"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "web.main:app",
        host="0.0.0.0",
        port=AppConfig.PORT,
        reload=AppConfig.DEBUG
    )
