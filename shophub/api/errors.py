# shophub/api/errors.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shophub.domain.errors import Internal, ShopError, Unauthorized, ValidationFailed
from shophub.utils.logging import get_logger

logger = get_logger(__name__)


def _error_body(exc: ShopError) -> dict:
    body = {"status": "error", "code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationFailed) and exc.errors:
        body["errors"] = exc.errors
    return body


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "msg": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(ValidationFailed("Validation failed", errors)),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Blad bazy danych: {request.method} {request.url.path}", exc_info=exc)
    err = Internal()
    return JSONResponse(status_code=err.status_code, content=_error_body(err))


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
