"""
Razorpay orders API client.
"""
from django.conf import settings
import logging

import requests

from apps.common.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class RazorpayClient:
    """
    Thin wrapper over the provider's REST API.

    Calls are single-shot: a timeout or connection failure surfaces as a
    ProviderError and is never retried here, so a slow provider cannot
    cause a duplicate order.
    """

    def __init__(self, key_id=None, key_secret=None, api_base=None, timeout=None, session=None):
        self.key_id = key_id if key_id is not None else getattr(settings, 'RAZORPAY_KEY_ID', '')
        self.key_secret = key_secret if key_secret is not None else getattr(settings, 'RAZORPAY_KEY_SECRET', '')
        self.api_base = (api_base or getattr(settings, 'RAZORPAY_API_BASE', 'https://api.razorpay.com/v1')).rstrip('/')
        self.timeout = timeout or getattr(settings, 'RAZORPAY_TIMEOUT', 10)
        self._session = session

    def ensure_configured(self):
        missing_configs = []
        if not self.key_id:
            missing_configs.append('RAZORPAY_KEY_ID')
        if not self.key_secret:
            missing_configs.append('RAZORPAY_KEY_SECRET')

        if missing_configs:
            logger.error(f"Missing payment provider configuration: {', '.join(missing_configs)}")
            raise ConfigurationError("Payment provider is not configured.")

    @property
    def session(self):
        if self._session is None:
            self._session = requests.Session()
            self._session.auth = (self.key_id, self.key_secret)
            self._session.headers.update({'Content-Type': 'application/json'})
        return self._session

    def create_order(self, amount, currency, receipt):
        """
        Create a provider order for ``amount`` minor units.

        Returns the provider's JSON body (``id``, ``amount``, ``currency``,
        ``receipt``, ...).
        """
        self.ensure_configured()

        payload = {'amount': amount, 'currency': currency, 'receipt': receipt}
        try:
            response = self.session.post(f"{self.api_base}/orders", json=payload, timeout=self.timeout)
        except requests.Timeout:
            logger.error(f"Payment provider timed out creating order for receipt {receipt}")
            raise ProviderError("Payment provider timed out.")
        except requests.RequestException as e:
            logger.error(f"Payment provider unreachable for receipt {receipt}: {e}")
            raise ProviderError("Payment provider is unreachable.")

        if not response.ok:
            message = self._error_description(response)
            logger.error(f"Payment provider rejected order for receipt {receipt}: {response.status_code} {message}")
            raise ProviderError(message, upstream_status=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise ProviderError("Payment provider returned an invalid response.", upstream_status=response.status_code)

        if not isinstance(body, dict) or not body.get('id'):
            raise ProviderError("Payment provider response is missing the order id.", upstream_status=response.status_code)
        return body

    @staticmethod
    def _error_description(response):
        try:
            body = response.json()
        except ValueError:
            body = {}
        error = body.get('error') if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get('description'):
            return error['description']
        return f"Payment provider request failed with status {response.status_code}."
