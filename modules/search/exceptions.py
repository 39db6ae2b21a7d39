"""
Search module exceptions.
"""
from shared.exceptions import ValidationError


class InvalidSearchQueryError(ValidationError):
    """Raised when search parameters are invalid."""

    def __init__(self, message: str):
        super().__init__(message, code='INVALID_SEARCH_QUERY')
