"""
Test configuration for the storefront checkout server.
"""
import pytest
from unittest import mock

from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user():
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def auth_client(user):
    """DRF test client authenticated as ``user``."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def sign():
    """Sign (order_id, payment_id) with the configured provider secret."""
    from django.conf import settings
    from apps.payments.services import compute_signature

    def _sign(order_id, payment_id):
        return compute_signature(order_id, payment_id, settings.RAZORPAY_KEY_SECRET)
    return _sign


def provider_response(status_code=200, body=None):
    """Stand-in for a requests.Response from the provider."""
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body if body is not None else {}
    return response


@pytest.fixture
def provider_post():
    """Patch the provider HTTP call; yields the mock of Session.post."""
    with mock.patch('apps.payments.services.razorpay_client.requests.Session.post') as post:
        post.side_effect = lambda url, json=None, timeout=None: provider_response(200, {
            'id': f"order_{json['receipt']}",
            'entity': 'order',
            'amount': json['amount'],
            'currency': json['currency'],
            'receipt': json['receipt'],
            'status': 'created',
        })
        yield post


@pytest.fixture
def make_provider_response():
    return provider_response
