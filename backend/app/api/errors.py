import json
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.services.product_service import ProductStoreError
from app.utils.logs import get_logger

log = get_logger("errors", "ERRORS")


def error_response(request: Request, status: int, message: Any) -> JSONResponse:
    """
    Build the structured error body, log it and append it to the error log file.
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    body = {
        "status_code": status,
        "timestamp": timestamp,
        "path": request.url.path,
        "message": message,
    }
    log.error(f"HTTP Status: {status} Error Message: {json.dumps(message)}")
    with open(settings.ERROR_LOG_FILE, "a", encoding="utf-8") as fh:
        fh.write(f"{timestamp} - {json.dumps(body)}\n")
    return JSONResponse(status_code=status, content=body)


async def store_error_handler(request: Request, exc: ProductStoreError):
    return error_response(request, exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, exc.status_code, exc.detail)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(request, 400, jsonable_encoder(exc.errors()))


async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception(f"unhandled {type(exc).__name__} on {request.url.path}")
    return error_response(request, 500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductStoreError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
