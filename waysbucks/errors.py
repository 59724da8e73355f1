"""
Exception handlers that render every failure as the error envelope.

Response body is always ``{"code": <status>, "message": <text>}`` and the
HTTP status matches ``code``. Internal details never reach the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from waysbucks.schemas.result import ErrorResult
from waysbucks.services.image_upload import ImageUploadError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    body = ErrorResult(code=status_code, message=message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [part for part in first.get("loc", ()) if isinstance(part, str) and part not in ("body", "query", "path")]
    field = ".".join(loc)
    msg = first.get("msg", "invalid value")
    return f"{field}: {msg}" if field else msg


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(ImageUploadError)
    async def handle_upload_error(request: Request, exc: ImageUploadError) -> JSONResponse:
        logger.warning("image upload failed path=%s", request.url.path)
        return error_response(status.HTTP_502_BAD_GATEWAY, str(exc) or "Image upload failed")

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("database error path=%s", request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")
