"""
Users module exceptions.
"""
from shared.exceptions import AppException, ConflictError, NotFoundError


class UserAlreadyExistsError(ConflictError):
    """Raised when attempting to create a user that already exists."""

    def __init__(self, field: str, value: str):
        super().__init__(message=f"User with {field} '{value}' already exists", field=field)
        self.value = value


class VendorAlreadyExistsError(ConflictError):
    """Raised when a vendor e-mail or VAT number is already registered."""

    def __init__(self, field: str, value: str):
        super().__init__(message=f"Vendor with {field} '{value}' already exists", field=field)
        self.value = value


class InvalidCredentialsError(AppException):
    """Raised when login credentials are invalid."""

    status_code = 401

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS"
        )


class VendorNotFoundError(NotFoundError):

    def __init__(self, vendor_id):
        super().__init__('Vendor', vendor_id, message=f"Vendor '{vendor_id}' not found")
        self.code = 'VENDOR_NOT_FOUND'
