from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from core.errors import ExecutionError, UnsupportedLanguageError
from core.logging import get_logger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "The Requested resource was not found"


def error_response(
    status_code: int, message: str, kind: str = "request"
) -> JSONResponse:
    logger.error("API Error [%s]: %s", kind, message)
    return JSONResponse(status_code=status_code, content={"message": message})


async def execution_error_handler(request: Request, exc: ExecutionError):
    if isinstance(exc, UnsupportedLanguageError):
        return error_response(
            status.HTTP_400_BAD_REQUEST, f"Invalid input: {exc.detail}", exc.kind
        )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, f"Internal server error: {exc}", exc.kind
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return error_response(status.HTTP_400_BAD_REQUEST, f"Bad request: {details}")


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExecutionError, execution_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
