"""
Payment order and verification gateway.

Two-phase handshake with the provider: ``create_order`` mints a provider
order for an exact amount, ``verify_payment`` later checks the signed
callback the client relays after checkout. An order is marked paid only
by a verified signature.
"""
from datetime import timedelta
import hashlib
import hmac
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.common.exceptions import ConfigurationError, ValidationError
from apps.common.money import ZERO, to_decimal, to_minor_units, quantize_money
from apps.common.security import SecurityAuditLogger
from apps.common.utils import support_reference
from ..models import PaymentOrder, PaymentVerificationLog
from .razorpay_client import RazorpayClient

logger = logging.getLogger(__name__)


def compute_signature(order_id, payment_id, secret):
    """Hex HMAC-SHA256 of ``order_id|payment_id`` keyed with ``secret``"""
    message = f"{order_id}|{payment_id}".encode('utf-8')
    return hmac.new(secret.encode('utf-8'), message, hashlib.sha256).hexdigest()


def signatures_match(expected, presented):
    if not isinstance(presented, str):
        return False
    return hmac.compare_digest(expected.encode('utf-8'), presented.encode('utf-8'))


def default_receipt(now=None):
    now = now or timezone.now()
    return f"order_{int(now.timestamp() * 1000)}_{support_reference()}"


class PaymentGatewayService:
    """Service class for provider order creation and payment verification"""

    @staticmethod
    def create_order(amount, currency=None, receipt=None, user=None, coupon=None,
                     coupon_discount=ZERO, pricing_snapshot=None, client=None):
        """
        Create a provider order for ``amount`` (major units) and persist it.

        Returns ``{orderId, amount, currency, key}`` with the amount in
        minor units and the public key id only.
        """
        try:
            amount = to_decimal(amount) if amount is not None else None
        except ValueError:
            amount = None
        if amount is None or amount <= ZERO or to_minor_units(amount) < 1:
            raise ValidationError({'amount': ['Invalid amount']})

        client = client or RazorpayClient()
        client.ensure_configured()

        minor_amount = to_minor_units(amount)
        currency = (currency or getattr(settings, 'PAYMENT_DEFAULT_CURRENCY', 'INR')).upper()
        receipt = receipt or default_receipt()
        owner = user if getattr(user, 'is_authenticated', False) else None
        coupon_discount = quantize_money(coupon_discount)

        existing = PaymentOrder.objects.filter(receipt=receipt).order_by('-created_at').first()
        if existing is not None:
            if PaymentGatewayService._same_order(existing, minor_amount, currency, owner, coupon, coupon_discount):
                logger.info(f"Reusing payment order {existing.provider_order_id} for receipt {receipt}")
                return PaymentGatewayService._order_payload(existing, client)
            raise ValidationError({'receipt': ['Receipt is already used by another payment order']})

        body = client.create_order(minor_amount, currency, receipt)

        payment_order = PaymentOrder.objects.create(
            provider_order_id=body['id'],
            receipt=receipt,
            amount=body.get('amount', minor_amount),
            currency=body.get('currency', currency),
            user=owner,
            coupon=coupon,
            coupon_discount=coupon_discount,
            pricing_snapshot=pricing_snapshot or {},
        )
        logger.info(f"Created payment order {payment_order.provider_order_id} for {minor_amount} {currency}")

        return PaymentGatewayService._order_payload(payment_order, client)

    @staticmethod
    def _same_order(existing, minor_amount, currency, owner, coupon, coupon_discount):
        """Whether a retried request describes the order already stored for its receipt"""
        return (
            existing.status == PaymentOrder.STATUS_CREATED
            and existing.amount == minor_amount
            and existing.currency == currency
            and existing.user_id == (owner.pk if owner is not None else None)
            and existing.coupon_id == (coupon.pk if coupon is not None else None)
            and existing.coupon_discount == coupon_discount
        )

    @staticmethod
    def _order_payload(payment_order, client):
        return {
            'orderId': payment_order.provider_order_id,
            'amount': payment_order.amount,
            'currency': payment_order.currency,
            'key': client.key_id,
        }

    @staticmethod
    def verify_payment(order_id, payment_id, signature, request_ip=None, secret=None):
        """
        Check a relayed payment callback against the server-held secret.

        Returns ``{'verified': bool, 'payment_order': PaymentOrder | None}``.
        A mismatch is a normal result, never an exception.
        """
        missing = [
            name for name, value in (('orderId', order_id), ('paymentId', payment_id), ('signature', signature))
            if value is None or value == ''
        ]
        if missing:
            raise ValidationError({name: ['This field is required.'] for name in missing})

        secret = secret if secret is not None else getattr(settings, 'RAZORPAY_KEY_SECRET', '')
        if not secret:
            logger.error("Missing payment provider configuration: RAZORPAY_KEY_SECRET")
            raise ConfigurationError("Payment provider is not configured.")

        if not isinstance(order_id, str) or not isinstance(payment_id, str):
            verified = False
        else:
            verified = signatures_match(compute_signature(order_id, payment_id, secret), signature)

        order_key, payment_key = str(order_id), str(payment_id)

        with transaction.atomic():
            payment_order = PaymentOrder.objects.select_for_update().filter(provider_order_id=order_key).first()

            if verified:
                reason = PaymentGatewayService._mark_paid(payment_order, payment_key)
            else:
                reason = 'signature mismatch'
                PaymentGatewayService._mark_failed(payment_order)

            PaymentVerificationLog.objects.create(
                payment_order=payment_order,
                provider_order_id=order_key[:100],
                payment_id=payment_key[:100],
                verified=verified,
                reason=reason,
                request_ip=request_ip,
            )

        if not verified:
            SecurityAuditLogger.log_signature_mismatch(order_key, payment_key, ip_address=request_ip)

        return {'verified': verified, 'payment_order': payment_order}

    @staticmethod
    def _mark_paid(payment_order, payment_id):
        if payment_order is None:
            logger.warning(f"Verified payment {payment_id} for an unknown payment order")
            return 'unknown order'

        if payment_order.is_paid:
            return 'already paid'

        if payment_order.status not in (PaymentOrder.STATUS_CREATED, PaymentOrder.STATUS_FAILED):
            logger.warning(
                f"Verified payment {payment_id} for {payment_order.status} order "
                f"{payment_order.provider_order_id}, needs reconciliation"
            )
            return f"order {payment_order.status}"

        payment_order.status = PaymentOrder.STATUS_PAID
        payment_order.payment_id = payment_id[:100]
        payment_order.paid_at = timezone.now()
        payment_order.failure_reason = ''
        payment_order.save(update_fields=['status', 'payment_id', 'paid_at', 'failure_reason', 'updated_at'])

        if payment_order.coupon_id:
            PaymentGatewayService._redeem_coupon(payment_order)

        logger.info(f"Payment order {payment_order.provider_order_id} paid by {payment_id}")
        return 'paid'

    @staticmethod
    def _redeem_coupon(payment_order):
        from apps.coupons.services import CouponService

        result = CouponService.apply_coupon(
            payment_order.coupon_id,
            payment_order.provider_order_id,
            payment_order.coupon_discount,
            user=payment_order.user,
            now=payment_order.created_at,
        )
        if not result['success']:
            # The customer has already paid the discounted amount
            logger.warning(
                f"Coupon {payment_order.coupon_id} could not be redeemed for paid order "
                f"{payment_order.provider_order_id}: {result['message']}"
            )

    @staticmethod
    def _mark_failed(payment_order):
        if payment_order is None or payment_order.status != PaymentOrder.STATUS_CREATED:
            return
        payment_order.status = PaymentOrder.STATUS_FAILED
        payment_order.failure_reason = 'signature mismatch'
        payment_order.save(update_fields=['status', 'failure_reason', 'updated_at'])

    @staticmethod
    def get_order(order_id, user=None):
        orders = PaymentOrder.objects.select_related('coupon')
        if user is not None and getattr(user, 'is_authenticated', False):
            orders = orders.filter(user=user)
        return orders.filter(provider_order_id=order_id).first()

    @staticmethod
    @transaction.atomic
    def cancel_order(order_id, user=None):
        """Cancel an unpaid order"""
        payment_order = PaymentOrder.objects.select_for_update().filter(provider_order_id=order_id).first()
        if payment_order is None or (payment_order.user_id and user is not None
                                     and payment_order.user_id != getattr(user, 'pk', None)):
            return {'success': False, 'message': 'Payment order not found'}

        if payment_order.status != PaymentOrder.STATUS_CREATED:
            return {
                'success': False,
                'message': f"Payment order cannot be cancelled in status {payment_order.status}",
                'payment_order': payment_order,
            }

        payment_order.status = PaymentOrder.STATUS_CANCELLED
        payment_order.failure_reason = 'cancelled'
        payment_order.save(update_fields=['status', 'failure_reason', 'updated_at'])
        logger.info(f"Payment order {order_id} cancelled")
        return {'success': True, 'message': 'Payment order cancelled', 'payment_order': payment_order}

    @staticmethod
    def expire_stale_orders(ttl_minutes=None, now=None):
        """Move created orders older than the TTL to expired, return the count"""
        if ttl_minutes is None:
            ttl_minutes = getattr(settings, 'PAYMENT_ORDER_TTL_MINUTES', 30)
        cutoff = (now or timezone.now()) - timedelta(minutes=ttl_minutes)

        expired = PaymentOrder.objects.filter(
            status=PaymentOrder.STATUS_CREATED,
            created_at__lt=cutoff,
        ).update(status=PaymentOrder.STATUS_EXPIRED, failure_reason='expired', updated_at=timezone.now())

        if expired:
            logger.info(f"Expired {expired} payment orders older than {ttl_minutes} minutes")
        return expired
