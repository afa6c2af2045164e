"""
Error handling middleware for API

FastAPI exception handlers converting exceptions into ErrorResponse JSON:
- Validation errors (bad request format) -> 422
- Domain errors (unknown product / viewer / color) -> their own status
- Anything else -> 500
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from frameview.api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from frameview.utils.logger import get_logger
from frameview.models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class ProductNotFoundError(DomainError):
    """Product id is not in the catalog"""
    def __init__(self, product_id: str):
        super().__init__(
            code="PRODUCT_NOT_FOUND",
            message=f"Product '{product_id}' not found",
            details={"product_id": product_id},
            status_code=404
        )


class ViewerNotFoundError(DomainError):
    """Viewer session doesn't exist (never created or already closed)"""
    def __init__(self, viewer_id: str):
        super().__init__(
            code="VIEWER_NOT_FOUND",
            message=f"Viewer '{viewer_id}' not found",
            details={"viewer_id": viewer_id},
            status_code=404
        )


class ColorNotFoundError(DomainError):
    """Color is not offered for the product"""
    def __init__(self, product_id: str, color_id: str, valid_colors: list):
        super().__init__(
            code="COLOR_NOT_FOUND",
            message=f"Color '{color_id}' not found for product '{product_id}'",
            details={
                "color_id": color_id,
                "valid_values": valid_colors
            },
            status_code=422
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error ({request_id}): {len(errors)} errors", path=request.url.path)

        validation_errors = []
        for error in errors:
            field = ".".join(str(x) for x in error["loc"][1:])  # Skip "body"
            validation_errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
                timestamp=_now()
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=json.loads(response.model_dump_json())
        )

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Handle domain-specific errors"""
        request_id = str(uuid.uuid4())

        log.warn(f"Domain error ({request_id}): {exc.code} - {exc.message}")

        response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                timestamp=_now()
            ),
            request_id=request_id
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=json.loads(response.model_dump_json())
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error ({request_id}): {type(exc).__name__}: {str(exc)}",
            path=request.url.path
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id},
                timestamp=_now()
            ),
            request_id=request_id
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=json.loads(response.model_dump_json())
        )
