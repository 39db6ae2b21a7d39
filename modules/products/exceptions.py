"""
Products module exceptions.
"""
from shared.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, identifier):
        super().__init__('Product', identifier, message=f"Product '{identifier}' not found")
        self.code = 'PRODUCT_NOT_FOUND'


class BrandNotFoundError(NotFoundError):

    def __init__(self, identifier):
        super().__init__('Brand', identifier, message=f"Brand '{identifier}' not found")
        self.code = 'BRAND_NOT_FOUND'


class ReviewNotFoundError(NotFoundError):

    def __init__(self, review_id):
        super().__init__('Review', review_id)


class DuplicateSKUError(ConflictError):
    """Raised when SKU already exists."""

    def __init__(self, sku: str):
        super().__init__(message=f"Product with SKU '{sku}' already exists", field='sku')
        self.sku = sku


class BrandAlreadyExistsError(ConflictError):

    def __init__(self, name: str):
        super().__init__(message=f"Brand with this name already exists: {name}", field='name')


class DuplicateReviewError(ValidationError):
    """Raised when a user reviews the same product twice."""

    def __init__(self):
        super().__init__(message="You have already reviewed this product", code='DUPLICATE_REVIEW')


class InvalidPriceError(ValidationError):
    """Raised when price is invalid."""

    def __init__(self, price, field: str = 'regular_price'):
        super().__init__(
            message=f"Invalid price: {price}. Price must be non-negative.",
            field=field
        )
        self.price = price


class ProductOwnershipError(PermissionDeniedError):
    """Raised when a vendor touches another vendor's product."""

    def __init__(self, product_id):
        super().__init__(f"You can only manage your own products (product {product_id})")
        self.product_id = product_id
