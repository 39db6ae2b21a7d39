"""
Error envelope tests for the custom exception handler.
"""
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.exceptions import ValidationError as DRFValidationError

from modules.orders.exceptions import MissingShippingDetailsError, OrderNumberCollisionError
from modules.products.exceptions import ProductNotFoundError
from shared.exceptions import InsufficientStockError, custom_exception_handler


class DummyView:
    pass


def handle(exc):
    return custom_exception_handler(exc, {'view': DummyView()})


def test_not_found():
    response = handle(ProductNotFoundError(7))

    assert response.status_code == 404
    assert response.data == {
        'success': False,
        'error': {'code': 'PRODUCT_NOT_FOUND', 'entity': 'Product', 'entity_id': '7'},
        'message': "Product '7' not found",
    }


def test_insufficient_stock_details():
    response = handle(InsufficientStockError(3, requested=5, available=2, product_name='Forceps'))

    assert response.status_code == 400
    assert response.data['error'] == {
        'code': 'INSUFFICIENT_STOCK', 'product_id': '3', 'requested': 5, 'available': 2,
    }
    assert response.data['message'] == 'Insufficient stock for Forceps. Available: 2'


def test_missing_shipping_fields_listed():
    response = handle(MissingShippingDetailsError(['phone', 'city']))
    assert response.data['error'] == {'code': 'MISSING_SHIPPING_DETAILS', 'fields': ['phone', 'city']}


def test_internal_errors_are_500():
    response = handle(OrderNumberCollisionError(5))
    assert response.status_code == 500
    assert response.data['error']['code'] == 'ORDER_NUMBER_COLLISION'


def test_drf_validation_error():
    response = handle(DRFValidationError({'quantity': ['Ensure this value is greater than or equal to 1.']}))

    assert response.status_code == 400
    assert response.data['error']['code'] == 'VALIDATION_ERROR'
    assert response.data['message'] == 'Ensure this value is greater than or equal to 1.'
    assert 'quantity' in response.data['error']['errors']


def test_unauthenticated():
    response = handle(NotAuthenticated())
    assert response.status_code == 401
    assert response.data['error'] == {'code': 'UNAUTHORIZED'}


def test_forbidden():
    response = handle(PermissionDenied('Admin access required'))
    assert response.status_code == 403
    assert response.data['message'] == 'Admin access required'


def test_unexpected_exception():
    response = handle(RuntimeError('boom'))
    assert response.status_code == 500
    assert response.data == {
        'success': False,
        'error': {'code': 'INTERNAL_ERROR'},
        'message': 'Internal server error',
    }
