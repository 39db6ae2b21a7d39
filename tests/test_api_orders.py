"""
Cart and order API tests.
"""
import json

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from modules.orders.models import OrderModel

pytestmark = pytest.mark.django_db

CART_URL = '/api/v1/orders/cart/'
ORDERS_URL = '/api/v1/orders/'


@pytest.fixture
def filled_cart(authenticated_client, product):
    authenticated_client.post(CART_URL, {'product_id': product.id, 'quantity': 2}, format='json')
    return authenticated_client


def checkout(client, shipping_details, payment_method='pay-later'):
    return client.post(
        ORDERS_URL,
        {'shipping_details': shipping_details, 'payment_method': payment_method},
        format='json',
    )


class TestCartApi:

    def test_cart_requires_auth(self, api_client):
        assert api_client.get(CART_URL).status_code == 401

    def test_add_and_read(self, filled_cart, product):
        body = filled_cart.get(CART_URL).json()

        assert body['success'] is True
        assert body['data']['item_count'] == 2
        assert body['data']['subtotal'] == '1000.00'
        assert body['data']['items'][0]['product']['id'] == product.id
        assert body['data']['items'][0]['line_total'] == '1000.00'

    def test_add_over_stock(self, authenticated_client, product):
        response = authenticated_client.post(CART_URL, {'product_id': product.id, 'quantity': 50}, format='json')
        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INSUFFICIENT_STOCK'

    def test_update_and_remove_line(self, filled_cart):
        item_id = filled_cart.get(CART_URL).json()['data']['items'][0]['id']

        response = filled_cart.patch(f'{CART_URL}{item_id}/', {'quantity': 5}, format='json')
        assert response.json()['data']['quantity'] == 5

        response = filled_cart.patch(f'{CART_URL}{item_id}/', {'quantity': 0}, format='json')
        assert response.json()['message'] == 'Item removed from cart'
        assert filled_cart.get(CART_URL).json()['data']['items'] == []

    def test_missing_line(self, authenticated_client):
        response = authenticated_client.delete(f'{CART_URL}999/')
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'CART_ITEM_NOT_FOUND'

    def test_cleanup_reports_removed_lines(self, filled_cart, product):
        product.status = 'inactive'
        product.save()

        data = filled_cart.post(f'{CART_URL}cleanup/').json()['data']
        assert data['removed_count'] == 1
        assert data['items'] == []


class TestCheckoutApi:

    def test_place_order(self, filled_cart, shipping_details):
        response = checkout(filled_cart, shipping_details)

        assert response.status_code == 201
        data = response.json()['data']
        assert data['order_number'].startswith('MB')
        assert data['total'] == '1100.00'
        assert data['items'][0]['quantity'] == 2
        assert data['vendors'] == []
        assert filled_cart.get(CART_URL).json()['data']['item_count'] == 0

    def test_empty_cart(self, authenticated_client, shipping_details):
        response = checkout(authenticated_client, shipping_details)
        assert response.status_code == 400
        assert response.json()['error']['code'] == 'EMPTY_CART'

    def test_missing_shipping_fields(self, filled_cart):
        response = checkout(filled_cart, {'full_name': 'Dr. Sharma'})

        assert response.status_code == 400
        error = response.json()['error']
        assert error['code'] == 'MISSING_SHIPPING_DETAILS'
        assert error['fields'] == ['email', 'phone', 'address', 'city', 'province']

    def test_pay_now_multipart_with_screenshot(self, filled_cart, shipping_details, monkeypatch):
        from modules.orders import views

        uploads = []

        def fake_upload(uploaded_file, user_id):
            uploads.append(uploaded_file.name)
            return f'payment-proofs/{user_id}/proof.png'

        monkeypatch.setattr(views.default_storage, 'upload_payment_proof', fake_upload)

        response = filled_cart.post(
            ORDERS_URL,
            {
                'shipping_details': json.dumps(shipping_details),
                'payment_method': 'pay-now',
                'payment_screenshot': SimpleUploadedFile('proof.png', b'\x89PNG', content_type='image/png'),
            },
            format='multipart',
        )

        assert response.status_code == 201
        assert uploads == ['proof.png']
        order = OrderModel.objects.get()
        assert order.payment_status == 'processing'
        assert order.payment_screenshot.endswith('proof.png')

    def test_malformed_shipping_json(self, filled_cart):
        response = filled_cart.post(
            ORDERS_URL,
            {'shipping_details': '{not json', 'payment_method': 'pay-later'},
            format='multipart',
        )
        assert response.status_code == 400


class TestOrderAccessApi:

    def test_owner_lists_and_reads_orders(self, filled_cart, shipping_details):
        order_id = checkout(filled_cart, shipping_details).json()['data']['id']

        assert [o['id'] for o in filled_cart.get(ORDERS_URL).json()['data']] == [order_id]
        assert filled_cart.get(f'{ORDERS_URL}{order_id}/').status_code == 200

    def test_other_customer_is_forbidden(self, filled_cart, shipping_details, create_user):
        order_id = checkout(filled_cart, shipping_details).json()['data']['id']

        filled_cart.force_authenticate(user=create_user())
        response = filled_cart.get(f'{ORDERS_URL}{order_id}/')
        assert response.status_code == 403
        assert response.json()['error']['code'] == 'FORBIDDEN'

    def test_unknown_order(self, authenticated_client):
        response = authenticated_client.get(f'{ORDERS_URL}424242/')
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'ORDER_NOT_FOUND'

    def test_cancel(self, filled_cart, shipping_details, product):
        order_id = checkout(filled_cart, shipping_details).json()['data']['id']

        response = filled_cart.patch(
            f'{ORDERS_URL}{order_id}/cancel/', {'cancel_reason': 'Duplicate order'}, format='json',
        )

        assert response.status_code == 200
        assert response.json()['data']['order_status'] == 'cancelled'
        product.refresh_from_db()
        assert product.stock == 10

        again = filled_cart.patch(f'{ORDERS_URL}{order_id}/cancel/', {}, format='json')
        assert again.status_code == 400
        assert again.json()['error']['code'] == 'ORDER_NOT_CANCELLABLE'


class TestAdminOrderApi:

    def test_status_update_requires_admin(self, filled_cart, shipping_details):
        order_id = checkout(filled_cart, shipping_details).json()['data']['id']
        response = filled_cart.patch(f'{ORDERS_URL}{order_id}/status/', {'order_status': 'shipped'}, format='json')
        assert response.status_code == 403

    def test_admin_updates_status_and_lists(self, filled_cart, shipping_details, admin_user):
        order_id = checkout(filled_cart, shipping_details).json()['data']['id']
        filled_cart.force_authenticate(user=admin_user)

        response = filled_cart.patch(
            f'{ORDERS_URL}{order_id}/status/',
            {'order_status': 'shipped', 'tracking_number': 'NCM-55', 'estimated_delivery': '2025-02-01'},
            format='json',
        )
        assert response.json()['data']['tracking_number'] == 'NCM-55'
        assert response.json()['data']['estimated_delivery'] == '2025-02-01'

        body = filled_cart.get(f'{ORDERS_URL}admin/all/', {'status': 'shipped'}).json()
        assert [o['id'] for o in body['data']] == [order_id]
        assert body['pagination']['total'] == 1

        body = filled_cart.get(f'{ORDERS_URL}admin/all/', {'status': 'pending'}).json()
        assert body['data'] == []

    def test_payment_status(self, filled_cart, shipping_details, admin_user):
        order_id = checkout(filled_cart, shipping_details).json()['data']['id']
        filled_cart.force_authenticate(user=admin_user)

        response = filled_cart.patch(f'{ORDERS_URL}{order_id}/payment/', {'payment_status': 'paid'}, format='json')
        assert response.json()['data']['payment_status'] == 'paid'


class TestVendorOrderApi:

    @pytest.fixture
    def vendor_order(self, authenticated_client, vendor, create_product, shipping_details):
        own = create_product(name='Apex Locator', regular_price='40000', stock=3, vendor=vendor)
        other = create_product(name='Latex Gloves', regular_price='200', stock=None)
        authenticated_client.post(CART_URL, {'product_id': own.id}, format='json')
        authenticated_client.post(CART_URL, {'product_id': other.id, 'quantity': 5}, format='json')
        return checkout(authenticated_client, shipping_details).json()['data']

    def test_vendor_sees_only_their_lines(self, vendor_order, vendor, api_client):
        api_client.force_authenticate(user=vendor.user)

        body = api_client.get(f'{ORDERS_URL}vendor/').json()

        assert body['pagination']['total'] == 1
        order = body['data'][0]
        assert [item['name'] for item in order['items']] == ['Apex Locator']
        assert [so['vendor'] for so in order['sub_orders']] == [vendor.id]

    def test_vendor_updates_own_sub_order(self, vendor_order, vendor, api_client):
        api_client.force_authenticate(user=vendor.user)

        response = api_client.patch(
            f"{ORDERS_URL}vendor/{vendor_order['id']}/",
            {'order_status': 'shipped', 'tracking_number': 'VND-1'},
            format='json',
        )

        data = response.json()['data']
        assert data['order_status'] == 'shipped'
        assert data['tracking_number'] == 'VND-1'
        parent = OrderModel.objects.get(id=vendor_order['id'])
        assert parent.order_status == 'shipped'
        assert parent.tracking_number == ''

    def test_customer_cannot_use_vendor_endpoints(self, authenticated_client):
        assert authenticated_client.get(f'{ORDERS_URL}vendor/').status_code == 403
