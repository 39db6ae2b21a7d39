"""
Health endpoint tests.
"""
import pytest


def test_health(api_client):
    response = api_client.get('/api/v1/health/')
    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'


@pytest.mark.django_db
def test_readiness(api_client):
    body = api_client.get('/api/v1/health/ready/').json()
    assert body['status'] == 'ready'
    assert body['checks']['database'] == {'healthy': True}
