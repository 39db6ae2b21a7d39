"""
Order total, numbering and status derivation tests.
"""
import re
from datetime import datetime
from decimal import Decimal

import pytest

from modules.orders.services import (
    calculate_order_totals,
    derive_parent_order_status,
    generate_order_number,
    vendor_view,
)


class TestOrderTotals:

    def test_subtotal_plus_flat_shipping(self):
        totals = calculate_order_totals([
            {'price': 500, 'quantity': 2},
            {'price': 300, 'quantity': 1},
        ])
        assert totals == {
            'subtotal': Decimal('1300.00'),
            'shipping': Decimal('100.00'),
            'total': Decimal('1400.00'),
        }

    def test_shipping_fee_from_settings(self, settings):
        settings.ORDER_SHIPPING_FEE = '150.50'
        totals = calculate_order_totals([{'price': Decimal('10.25'), 'quantity': 4}])
        assert totals['subtotal'] == Decimal('41.00')
        assert totals['total'] == Decimal('191.50')


class TestOrderNumber:

    def test_format(self, settings):
        settings.ORDER_NUMBER_PREFIX = 'MB'
        number = generate_order_number(datetime(2025, 1, 14, 10, 30))
        assert re.fullmatch(r'MB20250114\d{6}', number)

    def test_prefix_is_configurable(self, settings):
        settings.ORDER_NUMBER_PREFIX = 'SK'
        assert generate_order_number().startswith('SK')


class TestDeriveParentOrderStatus:

    @pytest.mark.parametrize('statuses, expected', [
        (['delivered', 'delivered'], 'delivered'),
        (['shipped', 'processing'], 'shipped'),
        (['pending', 'pending'], 'pending'),
        (['cancelled', 'cancelled'], 'cancelled'),
        (['delivered', 'pending'], 'shipped'),
        (['processing', 'pending'], 'processing'),
        (['cancelled', 'pending'], 'pending'),
    ])
    def test_precedence(self, statuses, expected):
        assert derive_parent_order_status(statuses) == expected

    def test_no_sub_orders(self):
        assert derive_parent_order_status([]) is None


@pytest.mark.django_db
class TestVendorView:

    def _order(self, user, **kwargs):
        from modules.orders.models import OrderModel
        return OrderModel.objects.create(
            order_number=generate_order_number(),
            user=user,
            full_name='Dr. Sharma',
            email='customer@example.com',
            phone='9812345678',
            address='New Road 12',
            city='Kathmandu',
            province='Bagmati',
            payment_method='pay-later',
            subtotal=Decimal('500'),
            shipping=Decimal('100'),
            total=Decimal('600'),
            **kwargs
        )

    def test_sub_order_overrides_parent_fields(self, customer, vendor):
        from modules.orders.models import SubOrderModel

        order = self._order(customer, order_status='processing', tracking_number='PARENT-1')
        SubOrderModel.objects.create(
            order=order, vendor=vendor, status='shipped', tracking_number='NCM-778',
            subtotal=Decimal('500'), total=Decimal('500'),
        )
        view = vendor_view(order, vendor)
        assert view['order_status'] == 'shipped'
        assert view['tracking_number'] == 'NCM-778'

    def test_falls_back_to_parent_without_sub_order(self, customer, vendor):
        order = self._order(customer, order_status='processing', tracking_number='PARENT-1')
        view = vendor_view(order, vendor)
        assert view == {
            'order_status': 'processing',
            'tracking_number': 'PARENT-1',
            'estimated_delivery': None,
        }
