"""
Exception handlers for the resumable upload API.

Every ``NeoResumableError`` is rendered with ``create_error_response`` and
the status from the configurable HTTP mapping. Request validation failures
are reported as 400.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...core.exceptions import NeoResumableError, create_error_response, get_http_status_code

logger = logging.getLogger(__name__)


class ExceptionHandlerRegistry:
    """Registers the upload API's exception handlers on an application."""

    def __init__(self, is_production: bool = True):
        self.is_production = is_production

    @staticmethod
    def _error_body(code: str, message: str, details: Dict[str, Any], error_type: str) -> Dict[str, Any]:
        return {"error": {"code": code, "message": message, "details": details, "type": error_type}}

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(NeoResumableError)
        async def neo_resumable_exception_handler(request: Request, exc: NeoResumableError):
            """Handle upload engine exceptions."""
            status_code = get_http_status_code(exc)
            if status_code >= 500:
                logger.error(f"{exc.error_code}: {exc.message}", exc_info=exc)
            else:
                logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.error_code}: {exc.message}")
            return JSONResponse(status_code=status_code, content=jsonable_encoder(create_error_response(exc)))

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            """Handle malformed query parameters and bodies."""
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=self._error_body(
                    "ValidationError",
                    "Invalid request",
                    {"errors": jsonable_encoder(exc.errors())},
                    exc.__class__.__name__,
                ),
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)
            message = "An unexpected error occurred" if self.is_production else str(exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=self._error_body("InternalError", message, {}, exc.__class__.__name__),
            )


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """
    Register exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        is_production: Hide unexpected error messages when True
    """
    ExceptionHandlerRegistry(is_production).register_handlers(app)
