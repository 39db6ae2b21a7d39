"""
Wishlist service and API tests.
"""
import pytest

from modules.products.exceptions import ProductNotFoundError
from modules.products.models import WishlistItemModel
from modules.products.services import WishlistService

pytestmark = pytest.mark.django_db

WISHLIST_URL = '/api/v1/wishlist/'


@pytest.fixture
def wishlist_service():
    return WishlistService()


class TestWishlistService:

    def test_add_and_list(self, wishlist_service, customer, create_product):
        scissors = create_product(name='Surgical Scissors')
        gloves = create_product(name='Latex Gloves')

        wishlist_service.add_item(customer, scissors.id)
        wishlist_service.add_item(customer, gloves.id)

        assert {p.name for p in wishlist_service.get_wishlist(customer)} == {'Surgical Scissors', 'Latex Gloves'}

    def test_adding_twice_keeps_one_entry(self, wishlist_service, customer, product):
        wishlist_service.add_item(customer, product.id)
        wishlist_service.add_item(customer, product.id)

        assert WishlistItemModel.objects.filter(user=customer).count() == 1

    def test_unpublished_product_cannot_be_added(self, wishlist_service, customer, create_product):
        draft = create_product(approval_status='pending')

        with pytest.raises(ProductNotFoundError):
            wishlist_service.add_item(customer, draft.id)

    def test_remove_missing_item_is_quiet(self, wishlist_service, customer, product):
        assert wishlist_service.remove_item(customer, product.id) == 0

    def test_lists_are_per_user(self, wishlist_service, customer, create_user, product):
        other = create_user()
        wishlist_service.add_item(other, product.id)

        assert wishlist_service.get_wishlist(customer) == []

    def test_clear(self, wishlist_service, customer, create_product):
        for name in ('Surgical Scissors', 'Latex Gloves'):
            wishlist_service.add_item(customer, create_product(name=name).id)

        assert wishlist_service.clear(customer) == 2
        assert wishlist_service.get_wishlist(customer) == []


class TestWishlistApi:

    def test_requires_auth(self, api_client):
        assert api_client.get(WISHLIST_URL).status_code == 401

    def test_add_then_read(self, authenticated_client, product):
        response = authenticated_client.post(WISHLIST_URL, {'product_id': product.id}, format='json')

        assert response.status_code == 200
        assert response.json()['message'] == 'Product added to wishlist'
        assert response.json()['data']['id'] == product.id

        body = authenticated_client.get(WISHLIST_URL).json()
        assert [row['id'] for row in body['data']] == [product.id]

    def test_add_unknown_product(self, authenticated_client):
        response = authenticated_client.post(WISHLIST_URL, {'product_id': 999999}, format='json')

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'PRODUCT_NOT_FOUND'

    def test_add_requires_product_id(self, authenticated_client):
        assert authenticated_client.post(WISHLIST_URL, {}, format='json').status_code == 400

    def test_remove(self, authenticated_client, customer, product):
        WishlistItemModel.objects.create(user=customer, product=product)

        response = authenticated_client.delete(f'{WISHLIST_URL}{product.id}/')

        assert response.status_code == 200
        assert not WishlistItemModel.objects.filter(user=customer).exists()

    def test_clear(self, authenticated_client, customer, product):
        WishlistItemModel.objects.create(user=customer, product=product)

        response = authenticated_client.delete(WISHLIST_URL)

        assert response.status_code == 200
        assert response.json()['data'] == {'removed': 1}
