"""
Signup, vendor registration, login and profile API tests.
"""
import pytest
from django.core import mail

from modules.users.models import UserModel, VendorModel
from modules.users.tasks import send_welcome_email

pytestmark = pytest.mark.django_db

SIGNUP_URL = '/api/v1/users/signup/'
VENDOR_URL = '/api/v1/users/vendors/register/'
LOGIN_URL = '/api/v1/users/login/'
PROFILE_URL = '/api/v1/users/me/'


class TestSignup:

    def test_creates_customer(self, api_client):
        response = api_client.post(SIGNUP_URL, {
            'email': 'Dr.Rai@Example.com',
            'password': 'secret123',
            'name': 'Dr. Rai',
            'phone': '9841000000',
        }, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['success'] is True
        assert body['data']['role'] == 'customer'
        assert UserModel.objects.get(email='dr.rai@example.com').check_password('secret123')

    def test_duplicate_email_is_conflict(self, api_client, customer):
        response = api_client.post(SIGNUP_URL, {
            'email': customer.email,
            'password': 'secret123',
            'name': 'Someone',
        }, format='json')

        assert response.status_code == 409
        assert response.json()['error']['field'] == 'email'

    def test_invalid_phone(self, api_client):
        response = api_client.post(SIGNUP_URL, {
            'email': 'new@example.com',
            'password': 'secret123',
            'name': 'New',
            'phone': '12ab',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'


def test_welcome_email():
    send_welcome_email(1, 'new@example.com', 'New')
    assert mail.outbox[0].subject == 'Welcome to Surgical Kart Nepal'
    assert mail.outbox[0].to == ['new@example.com']


class TestVendorRegistration:

    payload = {
        'email': 'sales@everestdental.com.np',
        'password': 'vendorpass1',
        'name': 'Everest Dental',
        'primary_phone': '9801234567',
        'city': 'Lalitpur',
        'vat_number': '601234567',
        'business_type': 'distributor',
    }

    def test_registers_pending_vendor(self, api_client):
        response = api_client.post(VENDOR_URL, self.payload, format='json')

        assert response.status_code == 201
        vendor = VendorModel.objects.get(vat_number='601234567')
        assert vendor.status == 'pending'
        assert vendor.user.role == 'vendor'

    def test_duplicate_vat_number(self, api_client):
        api_client.post(VENDOR_URL, self.payload, format='json')
        response = api_client.post(VENDOR_URL, {**self.payload, 'email': 'other@example.com'}, format='json')

        assert response.status_code == 409
        assert response.json()['error']['field'] == 'vat_number'

    def test_invalid_vat_number(self, api_client):
        response = api_client.post(VENDOR_URL, {**self.payload, 'vat_number': '12345'}, format='json')
        assert response.status_code == 400


class TestLoginAndProfile:

    def test_login_returns_tokens(self, api_client, create_user):
        create_user(email='login@example.com', password='pass12345')

        response = api_client.post(LOGIN_URL, {'email': 'login@example.com', 'password': 'pass12345'}, format='json')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['token_type'] == 'Bearer'
        assert data['access_token']
        assert data['role'] == 'customer'

    def test_wrong_password(self, api_client, create_user):
        create_user(email='login@example.com', password='pass12345')
        response = api_client.post(LOGIN_URL, {'email': 'login@example.com', 'password': 'nope'}, format='json')
        assert response.status_code == 401
        assert response.json()['error']['code'] == 'INVALID_CREDENTIALS'

    def test_token_authenticates_requests(self, api_client, create_user):
        create_user(email='login@example.com', password='pass12345')
        token = api_client.post(
            LOGIN_URL, {'email': 'login@example.com', 'password': 'pass12345'}, format='json',
        ).json()['data']['access_token']

        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        assert api_client.get(PROFILE_URL).json()['data']['email'] == 'login@example.com'

    def test_profile_requires_auth(self, api_client):
        response = api_client.get(PROFILE_URL)
        assert response.status_code == 401
        assert response.json()['error']['code'] == 'UNAUTHORIZED'

    def test_update_profile(self, authenticated_client, customer):
        response = authenticated_client.patch(PROFILE_URL, {'city': 'Pokhara', 'role': 'admin'}, format='json')

        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.city == 'Pokhara'
        assert customer.role == 'customer'

    def test_vendor_profile_is_embedded(self, vendor_client, vendor):
        data = vendor_client.get(PROFILE_URL).json()['data']
        assert data['vendor']['vat_number'] == vendor.vat_number
