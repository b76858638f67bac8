"""Map exceptions to JSON error responses: {"error": message}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taletrail.core.exceptions import TaleTrailError

logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: TaleTrailError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": details},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaleTrailError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
