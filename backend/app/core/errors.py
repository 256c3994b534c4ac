from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRoute


logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ValidationError(AppError):
    """The store rejected a record (not-null or unique constraint)."""

    status_code = 400


class StoreError(AppError):
    """Connectivity or query failure. The driver message is kept verbatim."""

    status_code = 500


def describe_validation_error(exc: RequestValidationError) -> BadRequestError:
    errors = exc.errors()
    if not errors:
        return BadRequestError("Invalid request payload")

    first = errors[0]
    loc = tuple(first.get("loc") or ())
    source = loc[0] if loc else "body"

    if source == "path":
        return BadRequestError("Invalid ID")
    if source == "query":
        return BadRequestError("Invalid query parameters")
    if first.get("type") == "json_invalid" or len(loc) < 2:
        return BadRequestError("Invalid request payload")

    field = ".".join(str(part) for part in loc[1:])
    return BadRequestError(f"Invalid request payload: {field}: {first.get('msg')}")


def _log(exc: AppError) -> None:
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message)
    else:
        logger.info("%s: %s", type(exc).__name__, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        _log(exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        err = describe_validation_error(exc)
        _log(err)
        return JSONResponse(status_code=err.status_code, content={"error": err.message})


class PlainTextErrorRoute(APIRoute):
    """Route class for the legacy resources: errors go out as bare text bodies."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_handler = super().get_route_handler()

        async def handler(request: Request) -> Response:
            try:
                return await original_handler(request)
            except RequestValidationError as exc:
                err = describe_validation_error(exc)
            except AppError as exc:
                err = exc
            _log(err)
            return PlainTextResponse(err.message, status_code=err.status_code)

        return handler
