"""
Product catalogue, brand and review tests.
"""
from decimal import Decimal

import pytest

from modules.products.exceptions import (
    BrandAlreadyExistsError,
    BrandNotFoundError,
    DuplicateReviewError,
    DuplicateSKUError,
    InvalidPriceError,
    ProductNotFoundError,
    ProductOwnershipError,
)
from modules.products.models import ProductModel
from modules.products.services import BrandService, ReviewService

pytestmark = pytest.mark.django_db


@pytest.fixture
def brand_service():
    return BrandService()


@pytest.fixture
def review_service():
    return ReviewService()


class TestProductService:

    def test_vendor_products_start_pending(self, product_service, vendor, category):
        product = product_service.create_product(
            {'name': 'Apex Locator', 'regular_price': Decimal('45000'), 'category_ids': [category.id]},
            vendor.user,
        )

        assert product.vendor == vendor
        assert product.approval_status == 'pending'
        assert product.slug.startswith('apex-locator-')
        category.refresh_from_db()
        assert category.products_count == 1

    def test_admin_products_are_approved(self, product_service, admin_user):
        product = product_service.create_product({'name': 'Autoclave', 'regular_price': Decimal('90000')}, admin_user)
        assert product.approval_status == 'approved'
        assert product.vendor is None

    def test_negative_price(self, product_service, admin_user):
        with pytest.raises(InvalidPriceError):
            product_service.create_product({'name': 'Bad', 'regular_price': Decimal('-1')}, admin_user)

    def test_duplicate_sku(self, product_service, admin_user, create_product):
        create_product(sku='SK-001')
        with pytest.raises(DuplicateSKUError):
            product_service.create_product({'name': 'Copy', 'regular_price': Decimal('1'), 'sku': 'SK-001'}, admin_user)

    def test_vendor_cannot_edit_foreign_product(self, product_service, create_vendor, create_product):
        owner, other = create_vendor(), create_vendor(name='Other Supplies')
        product = create_product(vendor=owner)

        with pytest.raises(ProductOwnershipError):
            product_service.update_product(product.id, {'name': 'Renamed'}, other.user)

    def test_slug_is_kept_on_rename(self, product_service, admin_user, create_product):
        product = create_product(name='Bone File')
        updated = product_service.update_product(product.id, {'name': 'Bone File XL'}, admin_user)
        assert updated.slug == product.slug

    def test_update_inventory(self, product_service, vendor, create_product):
        product = create_product(vendor=vendor, stock=3)
        updated = product_service.update_inventory(product.id, vendor.user, stock=0, status='out-of-stock')
        assert updated.stock == 0
        assert updated.status == 'out-of-stock'

    def test_public_lookup_hides_pending(self, product_service, create_product):
        product = create_product(approval_status='pending')
        with pytest.raises(ProductNotFoundError):
            product_service.get_product_by_id(product.id, public=True)

    def test_category_filter_includes_subcategories(self, product_service, create_category, create_product):
        dental = create_category('Dental')
        endo = create_category('Endodontics', parent=dental)
        create_product(name='K-File', categories=[endo])
        create_product(name='Scalpel')

        result = product_service.get_products_with_filters(category=dental.slug)

        assert [p.name for p in result['products']] == ['K-File']
        assert result['total_pages'] == 1

    def test_price_filter_and_sort(self, product_service, create_product):
        create_product(name='Cheap', regular_price='50')
        create_product(name='Mid', regular_price='500')
        create_product(name='Dear', regular_price='5000')

        result = product_service.get_products_with_filters(min_price=Decimal('100'), sort='price_high')
        assert [p.name for p in result['products']] == ['Dear', 'Mid']

    def test_price_filter_uses_effective_price(self, product_service, create_product):
        create_product(name='Offer', regular_price='1000', special_offer_price=Decimal('90'))
        create_product(name='Half Off', regular_price='200', discount_type='percentage', discount_value=Decimal('50'))
        create_product(name='Flat Off', regular_price='150', discount_type='amount', discount_value=Decimal('100'))
        create_product(name='Plain', regular_price='80')
        create_product(name='Small Discount', regular_price='500', discount_type='percentage', discount_value=Decimal('10'))

        result = product_service.get_products_with_filters(max_price=Decimal('100'), sort='price_low')

        assert [p.name for p in result['products']] == ['Flat Off', 'Plain', 'Offer', 'Half Off']
        assert result['products'][0].current_price == Decimal('50')

    def test_related_products(self, product_service, category, create_product):
        base = create_product(name='Needle Holder', categories=[category])
        create_product(name='Tissue Forceps', categories=[category])
        create_product(name='Unrelated')
        assert [p.name for p in product_service.get_related_products(base.id)] == ['Tissue Forceps']


class TestBrandService:

    def test_create_and_lookup(self, brand_service):
        brand = brand_service.create_brand({'name': ' 3M Health Care '})
        assert brand.name == '3M Health Care'
        assert brand_service.get_brand('3m-health-care') == brand
        assert brand_service.get_brand(str(brand.id)) == brand

    def test_duplicate_name(self, brand_service, create_brand):
        create_brand('Medline')
        with pytest.raises(BrandAlreadyExistsError):
            brand_service.create_brand({'name': 'MEDLINE'})

    def test_inactive_brand_is_not_public(self, brand_service, create_brand):
        brand = create_brand('Dentsply', status='inactive')
        with pytest.raises(BrandNotFoundError):
            brand_service.get_brand(brand.slug)
        assert brand_service.get_brand(brand.slug, public=False) == brand

    def test_product_counts(self, brand_service, create_brand, create_product):
        brand = create_brand('Medline')
        create_product(brand=brand)
        assert brand_service.list_brands()[0].products_count == 1


class TestReviews:

    def test_rating_counts_only_approved_reviews(self, review_service, product, create_user):
        first = review_service.create_review(product.id, create_user(), {'rating': 5, 'comment': 'Sharp'})
        second = review_service.create_review(product.id, create_user(), {'rating': 2, 'comment': 'Dull'})

        product.refresh_from_db()
        assert product.review_count == 0

        review_service.update_review_status(first.id, 'approved')
        review_service.update_review_status(second.id, 'approved')
        product.refresh_from_db()
        assert product.review_count == 2
        assert product.rating == Decimal('3.50')

        review_service.delete_review(second.id, second.user)
        product.refresh_from_db()
        assert product.rating == Decimal('5.00')
        assert product.review_count == 1

    def test_one_review_per_user(self, review_service, product, customer):
        review_service.create_review(product.id, customer, {'rating': 4, 'comment': 'Good'})
        with pytest.raises(DuplicateReviewError):
            review_service.create_review(product.id, customer, {'rating': 1, 'comment': 'Changed my mind'})


class TestProductApi:

    def test_listing_is_paginated(self, api_client, create_product):
        for n in range(3):
            create_product(name=f'Gauze {n}')
        create_product(name='Hidden', status='draft')

        body = api_client.get('/api/v1/products/', {'limit': 2}).json()

        assert body['success'] is True
        assert len(body['data']) == 2
        assert body['pagination'] == {'total': 3, 'page': 1, 'limit': 2, 'pages': 2}

    def test_detail_returns_effective_price(self, api_client, create_product):
        product = create_product(regular_price='100.00', special_offer_price=Decimal('80.00'))
        data = api_client.get(f'/api/v1/products/{product.id}/').json()['data']
        assert data['effective_price'] == '80.00'
        assert data['discount_percentage'] == 20

    def test_missing_product_envelope(self, api_client):
        response = api_client.get('/api/v1/products/999999/')
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'PRODUCT_NOT_FOUND'

    def test_customer_cannot_create(self, authenticated_client):
        response = authenticated_client.post(
            '/api/v1/products/', {'name': 'X', 'regular_price': '1.00'}, format='json',
        )
        assert response.status_code == 403

    def test_vendor_creates_pending_product(self, vendor_client):
        response = vendor_client.post(
            '/api/v1/products/',
            {
                'name': 'Curing Light',
                'regular_price': '12000.00',
                'attributes': [{'name': 'Wavelength', 'value': '420-480nm'}],
            },
            format='json',
        )
        assert response.status_code == 201
        assert ProductModel.objects.get(name='Curing Light').approval_status == 'pending'
