"""
Orders module exceptions.
"""
from shared.exceptions import InternalError, NotFoundError, ValidationError


class OrderNotFoundError(NotFoundError):
    """Raised when an order is not found."""

    def __init__(self, identifier):
        super().__init__('Order', identifier, message=f"Order '{identifier}' not found")
        self.code = 'ORDER_NOT_FOUND'


class CartItemNotFoundError(NotFoundError):

    def __init__(self, item_id):
        super().__init__('CartItem', item_id, message="Item not found in cart")
        self.code = 'CART_ITEM_NOT_FOUND'


class SubOrderNotFoundError(NotFoundError):

    def __init__(self, order_id, vendor_id):
        super().__init__('SubOrder', order_id, message=f"Order '{order_id}' has no items from vendor {vendor_id}")
        self.code = 'SUB_ORDER_NOT_FOUND'


class EmptyCartError(ValidationError):
    """Raised when trying to checkout with an empty cart."""

    def __init__(self):
        super().__init__(message="Your cart is empty", code='EMPTY_CART')


class MissingShippingDetailsError(ValidationError):

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(
            message=f"Missing shipping details: {', '.join(self.fields)}",
            code='MISSING_SHIPPING_DETAILS',
        )

    def details(self) -> dict:
        return {'fields': self.fields}


class InvalidPaymentMethodError(ValidationError):

    def __init__(self, payment_method):
        super().__init__(
            message=f"Invalid payment method: {payment_method}",
            field='payment_method',
        )


class ProductUnavailableError(ValidationError):
    """Raised when a cart line points at a missing or inactive product."""

    def __init__(self, product_name: str):
        super().__init__(
            message=f"Product {product_name} is no longer available",
            code='PRODUCT_UNAVAILABLE',
        )
        self.product_name = product_name


class OrderCannotBeCancelledError(ValidationError):
    """Raised when order cannot be cancelled due to its status."""

    def __init__(self, order_number: str, status: str):
        super().__init__(
            message=f"Order '{order_number}' with status '{status}' cannot be cancelled",
            code='ORDER_NOT_CANCELLABLE',
        )
        self.order_number = order_number
        self.status = status


class OrderNotEditableError(ValidationError):

    def __init__(self, order_number: str):
        super().__init__(
            message=f"Cancelled order '{order_number}' cannot be updated",
            code='ORDER_NOT_EDITABLE',
        )


class OrderNumberCollisionError(InternalError):
    """Raised when no unique order number could be generated."""

    def __init__(self, attempts: int):
        super().__init__(
            message=f"Could not allocate a unique order number after {attempts} attempts",
            code='ORDER_NUMBER_COLLISION',
        )
        self.attempts = attempts
