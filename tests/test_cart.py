"""
Cart service tests.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from modules.orders.exceptions import CartItemNotFoundError, ProductUnavailableError
from modules.orders.models import CartItemModel, CartModel
from modules.orders.tasks import cleanup_abandoned_carts
from modules.products.exceptions import ProductNotFoundError
from shared.exceptions import InsufficientStockError

pytestmark = pytest.mark.django_db


class TestAddItem:

    def test_creates_cart_on_first_add(self, cart_service, customer, product):
        item = cart_service.add_item(customer, product.id, quantity=2, attributes={'size': 'M'})

        assert CartModel.objects.filter(user=customer).count() == 1
        assert item.quantity == 2
        assert item.attributes == {'size': 'M'}

    def test_merges_existing_line(self, cart_service, customer, product):
        cart_service.add_item(customer, product.id, quantity=2)
        item = cart_service.add_item(customer, product.id, quantity=3)

        assert item.quantity == 5
        assert CartItemModel.objects.filter(cart__user=customer).count() == 1

    def test_merge_is_clamped_to_stock(self, cart_service, customer, product):
        cart_service.add_item(customer, product.id, quantity=8)
        item = cart_service.add_item(customer, product.id, quantity=8)
        assert item.quantity == 10

    def test_untracked_stock_has_no_limit(self, cart_service, customer, create_product):
        product = create_product(stock=None)
        item = cart_service.add_item(customer, product.id, quantity=500)
        assert item.quantity == 500

    def test_missing_product(self, cart_service, customer):
        with pytest.raises(ProductNotFoundError):
            cart_service.add_item(customer, 99999)

    def test_inactive_product(self, cart_service, customer, create_product):
        product = create_product(status='inactive')
        with pytest.raises(ProductUnavailableError):
            cart_service.add_item(customer, product.id)

    def test_more_than_stock(self, cart_service, customer, product):
        with pytest.raises(InsufficientStockError):
            cart_service.add_item(customer, product.id, quantity=11)


class TestCartContents:

    def test_totals_use_effective_price(self, cart_service, customer, create_product):
        first = create_product(regular_price='100.00', special_offer_price=Decimal('80.00'))
        second = create_product(regular_price='50.00')
        cart_service.add_item(customer, first.id, quantity=2)
        cart_service.add_item(customer, second.id, quantity=1)

        cart = cart_service.get_cart(customer)

        assert cart['item_count'] == 3
        assert cart['subtotal'] == Decimal('210.00')
        assert len(cart['items']) == 2

    def test_get_cart_drops_unavailable_products(self, cart_service, customer, product, create_product):
        other = create_product(name='Suture Kit')
        cart_service.add_item(customer, product.id)
        cart_service.add_item(customer, other.id)
        other.status = 'draft'
        other.save()

        cart = cart_service.get_cart(customer)

        assert [item.product_id for item in cart['items']] == [product.id]

    def test_update_quantity(self, cart_service, customer, product):
        item = cart_service.add_item(customer, product.id)
        updated = cart_service.update_item_quantity(customer, item.id, 4)
        assert updated.quantity == 4

    def test_zero_quantity_removes_line(self, cart_service, customer, product):
        item = cart_service.add_item(customer, product.id)
        assert cart_service.update_item_quantity(customer, item.id, 0) is None
        assert not CartItemModel.objects.filter(id=item.id).exists()

    def test_update_over_stock(self, cart_service, customer, product):
        item = cart_service.add_item(customer, product.id)
        with pytest.raises(InsufficientStockError):
            cart_service.update_item_quantity(customer, item.id, 11)

    def test_cannot_touch_another_users_line(self, cart_service, customer, create_user, product):
        item = cart_service.add_item(customer, product.id)
        with pytest.raises(CartItemNotFoundError):
            cart_service.remove_item(create_user(), item.id)

    def test_clear_cart(self, cart_service, customer, product, create_product):
        cart_service.add_item(customer, product.id)
        cart_service.add_item(customer, create_product().id)
        assert cart_service.clear_cart(customer) == 2
        assert cart_service.get_cart(customer)['items'] == []


def test_cleanup_abandoned_carts(cart_service, customer, create_user, product):
    cart_service.add_item(customer, product.id)
    fresh_user = create_user()
    cart_service.add_item(fresh_user, product.id)
    CartModel.objects.filter(user=customer).update(updated_at=timezone.now() - timedelta(days=45))

    assert cleanup_abandoned_carts(days=30) == 1
    assert list(CartModel.objects.values_list('user_id', flat=True)) == [fresh_user.id]
