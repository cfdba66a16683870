import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_ORIGINS
from .errors import MethodNotAllowedError, TaskError

logger = logging.getLogger(__name__)


def _error_response(message: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def _allowed_origin(request: Request) -> Optional[str]:
    if "*" in CORS_ORIGINS:
        return "*"
    origin = request.headers.get("origin")
    if origin in CORS_ORIGINS:
        return origin
    return None


def _apply_cors_headers(request: Request, response: Response) -> Response:
    origin = _allowed_origin(request)
    if origin:
        response.headers["Access-Control-Allow-Origin"] = origin
        if origin != "*":
            response.headers["Vary"] = "Origin"
    response.headers["Access-Control-Allow-Methods"] = ", ".join(CORS_ALLOW_METHODS)
    response.headers["Access-Control-Allow-Headers"] = ", ".join(CORS_ALLOW_HEADERS)
    return response


async def cors_middleware(request: Request, call_next):
    """Add CORS headers to every response and answer OPTIONS directly.

    Anything the route layer did not handle ends up here as a 500.
    """
    if request.method == "OPTIONS":
        return _apply_cors_headers(request, Response(status_code=200))

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = _error_response("internal server error", 500)
    return _apply_cors_headers(request, response)


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Task operation failed on %s: %s", request.url.path, exc.message)
    return _error_response(exc.message, exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return _error_response("invalid request body", 400)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        error = MethodNotAllowedError()
        return _error_response(error.message, error.status_code, headers=exc.headers)
    return _error_response(str(exc.detail), exc.status_code, headers=exc.headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskError, task_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
