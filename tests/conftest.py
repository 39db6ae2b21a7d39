"""
Pytest configuration and fixtures.
"""
import itertools
from decimal import Decimal

import pytest

_sequence = itertools.count(1)


@pytest.fixture(autouse=True)
def clear_cache():
    """The public category tree is cached; start every test cold."""
    from django.core.cache import cache
    cache.clear()


@pytest.fixture
def api_client():
    """Create an API client for testing."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def user_model():
    """Get the custom user model."""
    from modules.users.models import UserModel
    return UserModel


@pytest.fixture
def create_user(db, user_model):
    """Factory fixture to create users."""
    def _create_user(
        email=None,
        name='Test User',
        password='testpass123',
        role='customer',
        **kwargs
    ):
        return user_model.objects.create_user(
            email=email or f'user{next(_sequence)}@example.com',
            name=name,
            password=password,
            role=role,
            **kwargs
        )
    return _create_user


@pytest.fixture
def customer(create_user):
    return create_user(email='customer@example.com', name='Dr. Sharma')


@pytest.fixture
def admin_user(create_user):
    """Create an admin user."""
    return create_user(email='admin@example.com', name='Admin', role='admin', is_staff=True)


@pytest.fixture
def create_vendor(create_user):
    """Factory fixture for a vendor login with its business profile."""
    from modules.users.models import VendorModel

    def _create_vendor(name='Himalaya Surgicals', status='active', **kwargs):
        n = next(_sequence)
        user = create_user(email=f'vendor{n}@example.com', name=name, role='vendor')
        return VendorModel.objects.create(
            user=user,
            name=name,
            email=user.email,
            primary_phone='9800000000',
            city='Kathmandu',
            vat_number=f'{n:09d}',
            status=status,
            **kwargs
        )
    return _create_vendor


@pytest.fixture
def vendor(create_vendor):
    return create_vendor()


@pytest.fixture
def authenticated_client(api_client, customer):
    """Create an authenticated API client."""
    api_client.force_authenticate(user=customer)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """Create an authenticated admin API client."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def vendor_client(api_client, vendor):
    api_client.force_authenticate(user=vendor.user)
    return api_client


# Service fixtures

@pytest.fixture
def product_service():
    """Get product service instance."""
    from modules.products.services import ProductService
    return ProductService()


@pytest.fixture
def category_service():
    """Get category service instance."""
    from modules.categories.services import CategoryService
    return CategoryService()


@pytest.fixture
def cart_service():
    """Get cart service instance."""
    from modules.orders.services import CartService
    return CartService()


@pytest.fixture
def order_service():
    """Get order service instance."""
    from modules.orders.services import OrderService
    return OrderService()


@pytest.fixture
def search_service():
    """Get search service instance."""
    from modules.search.services import SearchService
    return SearchService()


# Model fixtures

@pytest.fixture
def create_category(db):
    from modules.categories.models import CategoryModel

    def _create_category(name, parent=None, **kwargs):
        return CategoryModel.objects.create(name=name, parent=parent, **kwargs)
    return _create_category


@pytest.fixture
def category(create_category):
    """Create a test category."""
    return create_category('Surgical Instruments')


@pytest.fixture
def create_brand(db):
    from modules.products.models import BrandModel

    def _create_brand(name='Medline', **kwargs):
        return BrandModel.objects.create(name=name, **kwargs)
    return _create_brand


@pytest.fixture
def create_product(db):
    """Factory fixture for products; active and approved unless told otherwise."""
    from modules.products.models import ProductModel

    def _create_product(name='Surgical Scissors', regular_price='500.00', categories=(), **kwargs):
        kwargs.setdefault('slug', f'product-{next(_sequence)}')
        product = ProductModel.objects.create(
            name=name,
            regular_price=Decimal(str(regular_price)),
            **kwargs
        )
        if categories:
            product.categories.set(categories)
        return product
    return _create_product


@pytest.fixture
def product(create_product, category):
    """Create a test product."""
    return create_product(stock=10, categories=[category])


@pytest.fixture
def shipping_details():
    return {
        'full_name': 'Dr. Sharma',
        'email': 'customer@example.com',
        'phone': '9812345678',
        'address': 'New Road 12',
        'city': 'Kathmandu',
        'province': 'Bagmati',
        'clinic_name': 'Smile Dental Clinic',
    }
