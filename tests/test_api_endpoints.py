"""
HTTP-level tests for the checkout API: request validation, response
shapes, rate limiting and security headers.
"""
import pytest
from decimal import Decimal

from apps.payments.models import PaymentOrder
from tests.factories import CouponFactory, DynamicPricingRuleFactory, PaymentOrderFactory


@pytest.mark.django_db
class TestPricingEndpoints:

    def test_compute_total(self, api_client):
        response = api_client.post('/api/pricing/total/', {'subtotal': '80'}, format='json')

        assert response.status_code == 200
        data = response.json()
        assert data['shippingCost'] == 10
        assert data['tax'] == 6.4
        assert data['total'] == 96.4
        assert data['hasFreeShipping'] is False

    def test_compute_total_with_discount_and_gift_wrap(self, api_client):
        response = api_client.post('/api/pricing/total/', {
            'subtotal': '150', 'couponDiscount': '20', 'giftWrapCost': '5',
        }, format='json')

        data = response.json()
        assert data['taxableAmount'] == 135
        assert data['total'] == 145.8

    @pytest.mark.parametrize('payload', [
        {'subtotal': '-1'},
        {'subtotal': 'abc'},
        {},
        {'subtotal': '10', 'couponDiscount': '-5'},
    ])
    def test_compute_total_rejects_invalid_input(self, api_client, payload):
        response = api_client.post('/api/pricing/total/', payload, format='json')

        assert response.status_code == 400
        assert response.json()['code'] == 400
        assert response.json()['error'] == 'Invalid amount'
        assert 'errors' in response.json()

    def test_preflight_returns_empty_ok(self, api_client):
        response = api_client.options('/api/pricing/total/')
        assert response.status_code == 200
        assert response.content == b''

    def test_applicable_rule(self, api_client):
        DynamicPricingRuleFactory(name='Big basket', discount_value=Decimal('10'),
                                  conditions={'field': 'subtotal', 'op': 'gte', 'value': 100})
        payload = {'items': [{'productId': 'p1', 'unitPrice': '60', 'quantity': 2}]}

        response = api_client.post('/api/pricing/rules/applicable/', payload, format='json')

        assert response.status_code == 200
        assert response.json()['rule']['name'] == 'Big basket'
        assert response.json()['discount'] == 12

    def test_no_applicable_rule(self, api_client):
        payload = {'items': [{'productId': 'p1', 'unitPrice': '60'}]}
        response = api_client.post('/api/pricing/rules/applicable/', payload, format='json')
        assert response.json() == {'rule': None, 'discount': 0}

    def test_empty_cart_rejected(self, api_client):
        response = api_client.post('/api/pricing/rules/applicable/', {'items': []}, format='json')
        assert response.status_code == 400

    def test_security_headers(self, api_client):
        response = api_client.post('/api/pricing/total/', {'subtotal': '1'}, format='json')
        assert response['X-Content-Type-Options'] == 'nosniff'
        assert response['Referrer-Policy'] == 'strict-origin-when-cross-origin'


@pytest.mark.django_db
class TestCouponEndpoints:

    def test_validate_below_minimum(self, api_client):
        CouponFactory(code='SAVE20', discount_value=Decimal('20'), min_order_amount=Decimal('50'))

        response = api_client.post('/api/coupons/validate/', {'code': 'SAVE20', 'orderAmount': '40'}, format='json')

        assert response.status_code == 200
        assert response.json() == {'valid': False, 'message': 'below minimum order amount'}

    def test_validate_success(self, api_client):
        CouponFactory(code='SAVE20', discount_value=Decimal('20'))

        response = api_client.post('/api/coupons/validate/', {'code': 'save20', 'orderAmount': '80'}, format='json')

        data = response.json()
        assert data['valid'] is True
        assert data['discount'] == 16
        assert data['coupon']['code'] == 'SAVE20'

    def test_validate_requires_code(self, api_client):
        response = api_client.post('/api/coupons/validate/', {'code': ' ', 'orderAmount': '40'}, format='json')
        assert response.status_code == 400

    def test_apply_requires_authentication(self, api_client):
        coupon = CouponFactory()
        response = api_client.post('/api/coupons/apply/', {
            'couponId': coupon.pk, 'orderId': 'order_1', 'discountApplied': '5',
        }, format='json')
        assert response.status_code == 401
        assert response.json()['code'] == 401

    def test_apply(self, auth_client):
        coupon = CouponFactory()
        response = auth_client.post('/api/coupons/apply/', {
            'couponId': coupon.pk, 'orderId': 'order_1', 'discountApplied': '5',
        }, format='json')

        assert response.status_code == 200
        assert response.json()['success'] is True
        assert response.json()['usesCount'] == 1

    def test_apply_exhausted_coupon_conflict(self, auth_client):
        coupon = CouponFactory(max_uses=1, uses_count=1)
        response = auth_client.post('/api/coupons/apply/', {
            'couponId': coupon.pk, 'orderId': 'order_1', 'discountApplied': '5',
        }, format='json')

        assert response.status_code == 409
        assert response.json()['error'] == 'usage limit reached'

    def test_active_coupons(self, api_client):
        CouponFactory(code='LIVE')
        CouponFactory(code='OFF', is_active=False)

        response = api_client.get('/api/coupons/active/')

        assert [c['code'] for c in response.json()] == ['LIVE']


@pytest.mark.django_db
class TestRateLimitEndpoint:

    def test_check_until_limited(self, api_client):
        payload = {'identifier': 'ip:9.9.9.9', 'endpoint': '/api/search', 'maxRequests': 2, 'windowMinutes': 1}

        first = api_client.post('/api/rate-limit/check/', payload, format='json')
        second = api_client.post('/api/rate-limit/check/', payload, format='json')
        third = api_client.post('/api/rate-limit/check/', payload, format='json')

        assert first.json() == {'allowed': True, 'remaining': 1}
        assert second.json() == {'allowed': True, 'remaining': 0}
        assert third.status_code == 429
        assert third['Retry-After'] == '60'
        assert third.json()['allowed'] is False
        assert third.json()['remaining'] == 0
        assert third.json()['retryAfter'] == 60

    def test_check_requires_identifier(self, api_client):
        response = api_client.post('/api/rate-limit/check/', {'endpoint': '/x'}, format='json')
        assert response.status_code == 400
        assert 'identifier' in response.json()['errors']


@pytest.mark.django_db
class TestPaymentEndpoints:

    def test_create_order(self, api_client, provider_post):
        response = api_client.post('/api/payments/create-order/', {'amount': '499.99', 'receipt': 'rcpt_api'},
                                   format='json')

        assert response.status_code == 200
        assert response.json() == {
            'orderId': 'order_rcpt_api', 'amount': 49999, 'currency': 'INR', 'key': 'rzp_test_key',
        }

    @pytest.mark.parametrize('amount', ['0', '-10', 'abc'])
    def test_create_order_invalid_amount(self, api_client, provider_post, amount):
        response = api_client.post('/api/payments/create-order/', {'amount': amount}, format='json')

        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid amount'
        provider_post.assert_not_called()

    def test_create_order_not_configured(self, api_client, settings):
        settings.RAZORPAY_KEY_ID = ''
        settings.RAZORPAY_KEY_SECRET = ''

        response = api_client.post('/api/payments/create-order/', {'amount': '10'}, format='json')

        assert response.status_code == 500
        assert response.json() == {'code': 500, 'error': 'Payment provider is not configured.'}

    def test_create_order_provider_failure(self, api_client, provider_post, make_provider_response):
        provider_post.side_effect = None
        provider_post.return_value = make_provider_response(401, {
            'error': {'code': 'BAD_REQUEST_ERROR', 'description': 'Authentication failed'}
        })

        response = api_client.post('/api/payments/create-order/', {'amount': '10'}, format='json')

        assert response.status_code == 502
        assert response.json()['error'] == 'Authentication failed'

    def test_create_order_rate_limited(self, api_client):
        for _ in range(10):
            assert api_client.post('/api/payments/create-order/', {'amount': '0'}, format='json').status_code == 400

        response = api_client.post('/api/payments/create-order/', {'amount': '0'}, format='json')

        assert response.status_code == 429
        assert response['Retry-After'] == '60'
        assert response.json()['retryAfter'] == 60

    def test_verify_payment(self, api_client, sign):
        payment_order = PaymentOrderFactory()
        order_id = payment_order.provider_order_id

        response = api_client.post('/api/payments/verify-payment/', {
            'orderId': order_id, 'paymentId': 'pay_1', 'signature': sign(order_id, 'pay_1'),
        }, format='json')

        assert response.status_code == 200
        assert response.json() == {'verified': True}
        payment_order.refresh_from_db()
        assert payment_order.status == PaymentOrder.STATUS_PAID

    def test_verify_payment_with_provider_field_names(self, api_client, sign):
        response = api_client.post('/api/payments/verify-payment/', {
            'razorpay_order_id': 'order_1',
            'razorpay_payment_id': 'pay_1',
            'razorpay_signature': sign('order_1', 'pay_1'),
        }, format='json')

        assert response.json() == {'verified': True}

    def test_verify_payment_mismatch(self, api_client, sign):
        response = api_client.post('/api/payments/verify-payment/', {
            'orderId': 'order_1', 'paymentId': 'pay_1', 'signature': sign('order_1', 'pay_1')[:-1],
        }, format='json')

        assert response.status_code == 200
        assert response.json() == {'verified': False}

    def test_verify_payment_oversized_values_are_a_mismatch(self, api_client, sign):
        payment_order = PaymentOrderFactory()
        order_id = payment_order.provider_order_id

        response = api_client.post('/api/payments/verify-payment/', {
            'orderId': order_id, 'paymentId': 'pay_1', 'signature': sign(order_id, 'pay_1') + 'a' * 300,
        }, format='json')

        assert response.status_code == 200
        assert response.json() == {'verified': False}
        payment_order.refresh_from_db()
        assert payment_order.status == PaymentOrder.STATUS_FAILED

        response = api_client.post('/api/payments/verify-payment/', {
            'orderId': 'o' * 500, 'paymentId': 'p' * 500, 'signature': sign('o' * 500, 'p' * 500)[:-1],
        }, format='json')

        assert response.status_code == 200
        assert response.json() == {'verified': False}

    def test_verify_payment_signature_whitespace_is_not_trimmed(self, api_client, sign):
        response = api_client.post('/api/payments/verify-payment/', {
            'orderId': 'order_1', 'paymentId': 'pay_1', 'signature': f" {sign('order_1', 'pay_1')} ",
        }, format='json')

        assert response.status_code == 200
        assert response.json() == {'verified': False}

    def test_verify_payment_missing_fields(self, api_client):
        response = api_client.post('/api/payments/verify-payment/', {'orderId': 'order_1'}, format='json')

        assert response.status_code == 400
        assert set(response.json()['errors']) == {'paymentId', 'signature'}

    def test_order_detail(self, api_client):
        payment_order = PaymentOrderFactory(amount=1250)

        response = api_client.get(f'/api/payments/orders/{payment_order.provider_order_id}/')

        assert response.status_code == 200
        assert response.json()['status'] == 'created'
        assert response.json()['amountMajor'] == 12.5

    def test_order_detail_not_found(self, api_client):
        response = api_client.get('/api/payments/orders/order_missing/')
        assert response.status_code == 404
        assert response.json()['code'] == 404

    def test_cancel_order(self, api_client):
        payment_order = PaymentOrderFactory()
        response = api_client.post(f'/api/payments/orders/{payment_order.provider_order_id}/cancel/')

        assert response.status_code == 200
        assert response.json()['status'] == 'cancelled'

        again = api_client.post(f'/api/payments/orders/{payment_order.provider_order_id}/cancel/')
        assert again.status_code == 409


@pytest.mark.django_db
class TestCheckoutEndpoints:

    def test_quote(self, api_client):
        CouponFactory(code='SAVE20', discount_value=Decimal('20'))
        payload = {
            'items': [{'productId': 'p1', 'unitPrice': '50', 'quantity': 2}],
            'couponCode': 'SAVE20',
            'giftWrap': True,
        }

        response = api_client.post('/api/checkout/quote/', payload, format='json')

        data = response.json()
        assert response.status_code == 200
        assert data['discountSource'] == 'coupon'
        assert data['discount'] == 20
        assert data['giftWrapCost'] == 5
        assert data['total'] == 91.8

    def test_place(self, api_client, provider_post):
        payload = {'items': [{'productId': 'p1', 'unitPrice': '80'}], 'receipt': 'rcpt_checkout'}

        response = api_client.post('/api/checkout/place/', payload, format='json')

        data = response.json()
        assert response.status_code == 200
        assert data['quote']['total'] == 96.4
        assert data['order']['amount'] == 9640
        assert data['order']['orderId'] == 'order_rcpt_checkout'

    def test_place_invalid_cart(self, api_client):
        response = api_client.post('/api/checkout/place/', {'items': [{'productId': 'p1', 'unitPrice': '-1'}]},
                                   format='json')
        assert response.status_code == 400
