"""
Categories module exceptions.
"""
from shared.exceptions import ConflictError, NotFoundError, ValidationError


class CategoryNotFoundError(NotFoundError):
    """Raised when category is not found."""

    def __init__(self, category_id=None, slug=None):
        self.slug = slug
        super().__init__(
            'Category',
            slug or category_id,
            message=f"Category not found: {slug or category_id}",
        )
        self.code = 'CATEGORY_NOT_FOUND'


class CategoryAlreadyExistsError(ConflictError):
    """Raised when a category name or slug is taken."""

    def __init__(self, field: str, value: str):
        super().__init__(f"Category with this {field} already exists: {value}", field=field)
        self.code = 'CATEGORY_ALREADY_EXISTS'


class InvalidCategoryHierarchyError(ValidationError):
    """Raised when category hierarchy is invalid."""

    def __init__(self, message: str):
        super().__init__(message, field='parent_id', code='INVALID_CATEGORY_HIERARCHY')


class CategoryDeletionError(ValidationError):
    """Raised when a deletion would remove the category its products move to."""

    def __init__(self, message: str):
        super().__init__(message, field='move_to_uncategorized', code='INVALID_CATEGORY_DELETION')
