"""
Effective price resolution tests.
"""
from decimal import Decimal

import pytest

from modules.products.pricing import discount_percentage, effective_price


class TestEffectivePrice:

    def test_special_offer_wins(self):
        product = {'regular_price': 100, 'special_offer_price': 80}
        assert effective_price(product) == Decimal('80.00')

    def test_percentage_discount(self):
        product = {'regular_price': 100, 'discount_type': 'percentage', 'discount_value': 10}
        assert effective_price(product) == Decimal('90.00')

    def test_amount_discount(self):
        product = {'regular_price': 100, 'discount_type': 'amount', 'discount_value': 15}
        assert effective_price(product) == Decimal('85.00')

    def test_no_discount_fields(self):
        assert effective_price({'regular_price': 100}) == Decimal('100.00')

    def test_special_offer_above_regular_is_ignored(self):
        product = {'regular_price': 100, 'special_offer_price': 120}
        assert effective_price(product) == Decimal('100.00')

    def test_amount_discount_never_negative(self):
        product = {'regular_price': 10, 'discount_type': 'amount', 'discount_value': 50}
        assert effective_price(product) == Decimal('0.00')

    @pytest.mark.django_db
    def test_model_property_uses_same_rules(self, create_product):
        product = create_product(regular_price='250.00', special_offer_price=Decimal('199.99'))
        assert product.effective_price == Decimal('199.99')


def test_discount_percentage():
    assert discount_percentage({'regular_price': 100, 'special_offer_price': 75}) == 25
    assert discount_percentage({'regular_price': 100}) == 0
