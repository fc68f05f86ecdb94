"""Универсальный обработчик ошибок для FastAPI"""
import logging
from typing import Optional, Dict, Any
from functools import wraps

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError


logger = logging.getLogger(__name__)


class APIError(Exception):
    """Базовый класс для ошибок API"""
    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(APIError):
    """Form input rejected; details map field name -> message"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class UnauthorizedError(APIError):
    """Missing or malformed bearer credential"""
    def __init__(self, message: str = "Missing bearer token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=401, details=details)


class UpstreamServiceError(APIError):
    """The IMC backend was unreachable or answered non-2xx; safe to retry"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=502, details=details)


def log_error(error: Exception, request: Optional[Request] = None, context: Optional[Dict[str, Any]] = None) -> None:
    """Логирует ошибку с контекстом"""
    context = context or {}

    if request:
        context.update({
            'method': request.method,
            'url': str(request.url),
            'client_ip': request.client.host if request.client else None,
            'user_agent': request.headers.get('user-agent'),
        })

    # 4xx are the caller's problem
    if isinstance(error, (APIError, HTTPException)) and 400 <= error.status_code < 500:
        log_level = logging.WARNING
    else:
        log_level = logging.ERROR

    log_message = f"API Error: {str(error)}"
    if context:
        log_message += f" | Context: {context}"

    logger.log(log_level, log_message, exc_info=log_level >= logging.ERROR)


def get_error_response(error: Exception) -> JSONResponse:
    """Возвращает JSON ответ с ошибкой"""
    content: Dict[str, Any]
    if isinstance(error, APIError) and error.status_code < 500:
        content = {"detail": error.message, "error_type": error.__class__.__name__}
        if error.details:
            content["details"] = error.details
        status_code = error.status_code
    elif isinstance(error, UpstreamServiceError):
        # retryable notice is meant for the user as is
        content = {"detail": error.message, "error_type": error.__class__.__name__}
        status_code = error.status_code
    elif isinstance(error, APIError):
        content = {"detail": "Internal Server Error", "error_type": error.__class__.__name__}
        status_code = error.status_code
    else:
        content = {"detail": "Internal Server Error", "error_type": "InternalError"}
        status_code = 500

    return JSONResponse(status_code=status_code, content=content)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Глобальный обработчик исключений FastAPI"""
    log_error(exc, request)
    return get_error_response(exc)


def handle_api_errors(func):
    """Декоратор для обработки ошибок в API endpoints"""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except APIError as e:
            log_error(e)
            return get_error_response(e)
        except HTTPException as e:
            log_error(e)
            raise
        except PydanticValidationError as e:
            log_error(e)
            raise HTTPException(
                status_code=400,
                detail=f"Validation error: {str(e)}"
            ) from e
        except ValueError as e:
            log_error(e)
            raise HTTPException(
                status_code=400,
                detail=str(e)
            ) from e
        except Exception as e:  # noqa: BLE001
            log_error(e)
            raise HTTPException(
                status_code=500,
                detail="Internal Server Error"
            ) from e

    return wrapper


def create_error_responses() -> Dict[int, Dict[str, Any]]:
    """Создает стандартные описания ошибок для OpenAPI"""
    return {
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Datos inválidos",
                        "error_type": "ValidationError",
                        "details": {"altura": "La altura no puede superar 3,00 m"},
                    }
                }
            }
        },
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {
                    "example": {"detail": "Missing bearer token", "error_type": "UnauthorizedError"}
                }
            }
        },
        502: {
            "description": "IMC backend unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Error al calcular el IMC. Verifica si el backend está corriendo.",
                        "error_type": "UpstreamServiceError",
                    }
                }
            }
        }
    }
