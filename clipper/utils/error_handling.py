"""
Centralized error handling for the application.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clipper.utils.logger import logging


class ClipperError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(ClipperError):
    """Required request fields are missing or out of range."""

    status_code = 400


class ToolFailure(ClipperError):
    """An external process exited non-zero, timed out or could not be started."""


class MediaNotFound(ToolFailure):
    """The downloader could not resolve the given URL."""


class EncodeFailure(ToolFailure):
    """The transcoder did not produce the requested output file."""


class ParseFailure(ClipperError):
    """Malformed JSON from a tool or from the model response."""


class ApiFailure(ClipperError):
    """A call to the hosted speech or language model failed."""


class NotConfigured(ClipperError):
    """An AI route was called without a configured credential."""


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every error as ``{"error": <message>}`` with a matching status code.

    Args:
        app: FastAPI application to register the handlers on
    """

    @app.exception_handler(ClipperError)
    async def clipper_error_handler(request: Request, exc: ClipperError):
        if exc.status_code >= 500:
            logging.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logging.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        logging.info(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions."""
        logging.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": f"An unexpected error occurred: {str(exc)}"},
        )
