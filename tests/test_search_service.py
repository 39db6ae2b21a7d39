"""
Cross-entity search tests.
"""
import pytest

from modules.search.exceptions import InvalidSearchQueryError
from modules.search.services import slot_limit

pytestmark = pytest.mark.django_db


@pytest.fixture
def catalogue(create_product, create_brand, create_category):
    brand = create_brand('Medline', description='Medical gloves and disposables')
    create_brand('Dentsply', status='inactive')
    category = create_category('Dental Instruments', description='Mirrors, scalers and explorers')
    products = {
        'exact': create_product(name='Dental Mirror', description='Front surface mirror', brand=brand),
        'loose': create_product(name='Mouth Mirror Handle', description='Fits any dental mirror head'),
        'tagged': create_product(name='Explorer Tip', tags=['dental', 'mirror-compatible']),
        'hidden': create_product(name='Dental Mirror Deluxe', status='inactive'),
        'pending': create_product(name='Dental Mirror Pro', approval_status='pending'),
    }
    return {'brand': brand, 'category': category, 'products': products}


class TestSearchAll:

    def test_multi_word_query_ranks_exact_name_first(self, search_service, catalogue):
        result = search_service.search_all('dental mirror')

        names = [product.name for product in result['products']]
        assert names[0] == 'Dental Mirror'
        assert set(names) == {'Dental Mirror', 'Mouth Mirror Handle', 'Explorer Tip'}

    def test_only_public_products(self, search_service, catalogue):
        result = search_service.search_all('mirror')
        names = {product.name for product in result['products']}
        assert 'Dental Mirror Deluxe' not in names
        assert 'Dental Mirror Pro' not in names

    def test_attribute_values_are_searched(self, search_service, create_product):
        create_product(name='Composite Kit', attributes=[{'name': 'Shade', 'value': 'Vita A2'}])
        result = search_service.search_all('vita a2')
        assert [product.name for product in result['products']] == ['Composite Kit']

    def test_brands_and_categories(self, search_service, catalogue):
        result = search_service.search_all('MEDLINE')
        assert [brand.name for brand in result['brands']] == ['Medline']
        assert result['categories'] == []

        result = search_service.search_all('scalers explorers')
        assert [category.name for category in result['categories']] == ['Dental Instruments']

    def test_inactive_brands_are_hidden(self, search_service, catalogue):
        assert search_service.search_all('dentsply')['brands'] == []

    def test_totals(self, search_service, catalogue):
        result = search_service.search_all('dental mirror', limit=2)

        assert result['total_results'] == 3
        assert result['total_pages'] == 2
        assert result['current_page'] == 1

    def test_pagination(self, search_service, create_product):
        for n in range(3):
            create_product(name=f'Scalpel Blade {n}')

        first = search_service.search_all('scalpel', page=1, limit=2)
        second = search_service.search_all('scalpel', page=2, limit=2)

        assert len(first['products']) == 2
        assert len(second['products']) == 1
        assert {p.id for p in first['products']}.isdisjoint({p.id for p in second['products']})

    def test_page_past_the_end_is_clamped(self, search_service, create_product):
        create_product(name='Scalpel Handle')
        result = search_service.search_all('scalpel', page=9, limit=5)
        assert len(result['products']) == 1
        assert result['current_page'] == 9

    def test_empty_query(self, search_service, catalogue):
        assert search_service.search_all('   ') == {
            'products': [],
            'brands': [],
            'categories': [],
            'total_results': 0,
            'total_pages': 0,
            'current_page': 1,
        }

    def test_regex_characters_are_literal(self, search_service, create_product):
        create_product(name='Suture 3-0 (Silk)')
        assert search_service.search_all('(silk)')['total_results'] == 1
        assert search_service.search_all('.*')['total_results'] == 0

    def test_invalid_page(self, search_service):
        with pytest.raises(InvalidSearchQueryError):
            search_service.search_all('mirror', page=0)


@pytest.mark.parametrize('count, total, limit, min_share, expected', [
    (10, 10, 20, 0.5, 10),
    (30, 40, 20, 0.5, 15),
    (5, 40, 20, 0.5, 5),
    (1, 100, 20, 0.1, 1),
    (0, 10, 20, 0.1, 0),
])
def test_slot_limit(count, total, limit, min_share, expected):
    assert slot_limit(count, total, limit, min_share) == expected


class TestSearchApi:

    def test_results_envelope(self, api_client, catalogue):
        response = api_client.get('/api/v1/search/', {'query': 'dental mirror'})

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['message'] == 'Search results fetched successfully'
        assert body['data']['products'][0]['name'] == 'Dental Mirror'
        assert body['data']['total_results'] == 3

    def test_empty_query_message(self, api_client):
        body = api_client.get('/api/v1/search/').json()
        assert body['message'] == 'Empty search query'
        assert body['data']['total_results'] == 0

    def test_no_results_message(self, api_client, catalogue):
        body = api_client.get('/api/v1/search/', {'query': 'xylophone'}).json()
        assert body['message'] == 'No results found'

    def test_limit_out_of_range(self, api_client):
        response = api_client.get('/api/v1/search/', {'query': 'mirror', 'limit': 0})
        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'
