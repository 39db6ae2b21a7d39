"""
Shared exceptions and custom exception handler.
Consolidates all domain exceptions for the application.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
)
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# === Base Exceptions ===

class AppException(Exception):
    """Base exception for application."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def details(self) -> dict:
        """Extra fields exposed in the error envelope."""
        return {}


class NotFoundError(AppException):
    """Entity not found."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity_name: str, entity_id, message: str = None):
        super().__init__(
            message=message or f"{entity_name} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND"
        )
        self.entity_name = entity_name
        self.entity_id = entity_id

    def details(self) -> dict:
        return {'entity': self.entity_name, 'entity_id': str(self.entity_id)}


class ValidationError(AppException):
    """Validation failed."""

    def __init__(self, message: str, field: str = None, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)
        self.field = field

    def details(self) -> dict:
        return {'field': self.field} if self.field else {}


class PermissionDeniedError(AppException):
    """Caller is not allowed to act on the resource."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message=message, code="FORBIDDEN")


class ConflictError(AppException):
    """Resource already exists or clashes with another one."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str, field: str = None):
        super().__init__(message=message, code="CONFLICT")
        self.field = field

    def details(self) -> dict:
        return {'field': self.field} if self.field else {}


class InsufficientStockError(AppException):
    """Stock insufficient."""

    def __init__(self, product_id, requested: int, available: int, product_name: str = None):
        label = product_name or product_id
        super().__init__(
            message=f"Insufficient stock for {label}. Available: {available}",
            code="INSUFFICIENT_STOCK"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available

    def details(self) -> dict:
        return {
            'product_id': str(self.product_id),
            'requested': self.requested,
            'available': self.available,
        }


class InternalError(AppException):
    """Unexpected server-side failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error", code: str = "INTERNAL_ERROR"):
        super().__init__(message=message, code=code)


# === Exception Handler ===

def error_response(code: str, message: str, status_code: int, **details) -> Response:
    """Build the error envelope shared by every endpoint."""
    error = {'code': code}
    error.update({k: v for k, v in details.items() if v is not None})
    return Response(
        {
            'success': False,
            'error': error,
            'message': message,
        },
        status=status_code,
    )


def _first_message(data) -> str:
    """Pick the first human readable message out of DRF error data."""
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        for value in data.values():
            return _first_message(value)
    if isinstance(data, list) and data:
        return _first_message(data[0])
    return str(data) if data else "Invalid request"


def custom_exception_handler(exc, context):
    """Handle custom application exceptions."""
    if isinstance(exc, AppException):
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}", exc_info=True)
        return error_response(exc.code, exc.message, exc.status_code, **exc.details())

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return error_response(
            'UNAUTHORIZED',
            'Authentication credentials were not provided or are invalid',
            status.HTTP_401_UNAUTHORIZED,
        )

    if isinstance(exc, PermissionDenied):
        return error_response(
            'FORBIDDEN',
            _first_message(response.data) if response is not None else str(exc),
            status.HTTP_403_FORBIDDEN,
        )

    if isinstance(exc, DRFValidationError):
        return error_response(
            'VALIDATION_ERROR',
            _first_message(response.data),
            response.status_code,
            errors=response.data,
        )

    if response is not None and isinstance(exc, APIException):
        code = exc.default_code.upper() if isinstance(exc.default_code, str) else 'ERROR'
        return error_response(code, _first_message(response.data), response.status_code)

    logger.error(f"Unhandled exception in {context.get('view').__class__.__name__}: {exc}", exc_info=exc)
    return error_response(
        'INTERNAL_ERROR',
        'Internal server error',
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
