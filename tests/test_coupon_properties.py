"""
Property-based tests for coupon validation and redemption.
"""
from datetime import timedelta
from decimal import Decimal
from hypothesis import given, strategies as st, settings
from hypothesis.extra.django import TestCase
from django.contrib.auth.models import AnonymousUser
from django.utils import timezone

from apps.coupons.models import Coupon, CouponUse
from apps.coupons.services import CouponService
from apps.pricing.services import Cart, CartLine
from tests.factories import CouponFactory, CouponUseFactory, UserFactory


class TestCouponValidation(TestCase):
    """Eligibility checks, in order, with their user-facing messages."""

    def setUp(self):
        self.user = UserFactory()

    def test_below_minimum_order_amount(self):
        CouponFactory(code='SAVE20', discount_type='percentage', discount_value=Decimal('20'),
                      min_order_amount=Decimal('50'))

        result = CouponService.validate_coupon('SAVE20', Decimal('40'), user=self.user)

        self.assertFalse(result.valid)
        self.assertEqual(result.message, 'below minimum order amount')
        self.assertEqual(result.discount, 0)

    def test_valid_percentage_coupon(self):
        CouponFactory(code='SAVE20', discount_type='percentage', discount_value=Decimal('20'),
                      min_order_amount=Decimal('50'))

        result = CouponService.validate_coupon('save20', Decimal('80'), user=self.user)

        self.assertTrue(result.valid)
        self.assertEqual(result.discount, Decimal('16'))
        self.assertEqual(result.as_dict()['coupon']['code'], 'SAVE20')

    def test_code_is_stored_upper_case(self):
        coupon = CouponFactory(code='  summer10 ')
        coupon.refresh_from_db()
        self.assertEqual(coupon.code, 'SUMMER10')
        self.assertTrue(CouponService.validate_coupon('Summer10', Decimal('10')).valid)

    def test_unknown_and_inactive_codes(self):
        CouponFactory(code='OFF', is_active=False)
        self.assertEqual(CouponService.validate_coupon('NOPE', Decimal('10')).message, 'invalid code')
        self.assertEqual(CouponService.validate_coupon('OFF', Decimal('10')).message, 'invalid code')
        self.assertEqual(CouponService.validate_coupon('', Decimal('10')).message, 'invalid code')

    def test_time_window(self):
        now = timezone.now()
        CouponFactory(code='SOON', starts_at=now + timedelta(days=1))
        CouponFactory(code='GONE', starts_at=now - timedelta(days=10), expires_at=now - timedelta(days=1))
        CouponFactory(code='FOREVER', expires_at=None)

        self.assertEqual(CouponService.validate_coupon('SOON', Decimal('10'), now=now).message, 'not yet active')
        self.assertEqual(CouponService.validate_coupon('GONE', Decimal('10'), now=now).message, 'expired')
        self.assertTrue(CouponService.validate_coupon('FOREVER', Decimal('10'), now=now).valid)

    def test_checks_short_circuit_in_order(self):
        # Expired and below minimum: the window check comes first
        now = timezone.now()
        CouponFactory(code='BOTH', min_order_amount=Decimal('100'), expires_at=now - timedelta(hours=1))
        self.assertEqual(CouponService.validate_coupon('BOTH', Decimal('10'), now=now).message, 'expired')

    def test_fixed_discount_never_exceeds_order_amount(self):
        CouponFactory(code='FLAT50', discount_type='fixed', discount_value=Decimal('50'))
        result = CouponService.validate_coupon('FLAT50', Decimal('30'))
        self.assertEqual(result.discount, Decimal('30'))

    def test_per_user_limit(self):
        coupon = CouponFactory(code='ONCE', max_uses_per_user=1)
        CouponUseFactory(coupon=coupon, user=self.user)

        result = CouponService.validate_coupon('ONCE', Decimal('10'), user=self.user)
        self.assertEqual(result.message, 'you have already used this coupon')

        other = CouponService.validate_coupon('ONCE', Decimal('10'), user=UserFactory())
        self.assertTrue(other.valid)

    def test_anonymous_user_rejected_when_per_user_cap_set(self):
        CouponFactory(code='MEMBERS', max_uses_per_user=2)
        self.assertEqual(CouponService.validate_coupon('MEMBERS', Decimal('10')).message,
                         'login required to use this coupon')
        self.assertEqual(CouponService.validate_coupon('MEMBERS', Decimal('10'), user=AnonymousUser()).message,
                         'login required to use this coupon')

    def test_anonymous_user_allowed_without_per_user_cap(self):
        CouponFactory(code='PUBLIC')
        self.assertTrue(CouponService.validate_coupon('PUBLIC', Decimal('10'), user=AnonymousUser()).valid)

    def test_scoped_coupon_requires_matching_item(self):
        CouponFactory(code='HATS', applies_to='category', applies_to_ids=['hats'], discount_value=Decimal('50'))
        shirts_only = Cart((CartLine('p1', Decimal('40'), 1, category_id='shirts'),))
        mixed = Cart((
            CartLine('p1', Decimal('40'), 1, category_id='shirts'),
            CartLine('p2', Decimal('20'), 1, category_id='hats'),
        ))

        rejected = CouponService.validate_coupon('HATS', Decimal('40'), cart=shirts_only)
        self.assertEqual(rejected.message, 'coupon does not apply to items in your cart')

        accepted = CouponService.validate_coupon('HATS', Decimal('60'), cart=mixed)
        self.assertTrue(accepted.valid)
        self.assertEqual(accepted.discount, Decimal('10'))

    @given(
        order_amount=st.decimals(min_value=Decimal('1'), max_value=Decimal('5000'), places=2),
        excess=st.decimals(min_value=Decimal('0.01'), max_value=Decimal('100'), places=2),
    )
    @settings(max_examples=50, deadline=None)
    def test_raising_minimum_above_amount_invalidates(self, order_amount, excess):
        coupon = CouponFactory(min_order_amount=Decimal('0'))
        self.assertTrue(CouponService.validate_coupon(coupon.code, order_amount).valid)

        Coupon.objects.filter(pk=coupon.pk).update(min_order_amount=order_amount + excess)
        result = CouponService.validate_coupon(coupon.code, order_amount)
        self.assertFalse(result.valid)
        self.assertEqual(result.message, 'below minimum order amount')

    @given(
        discount_type=st.sampled_from(['percentage', 'fixed']),
        value=st.decimals(min_value=Decimal('0.01'), max_value=Decimal('100'), places=2),
        order_amount=st.decimals(min_value=Decimal('0'), max_value=Decimal('5000'), places=2),
    )
    @settings(max_examples=50, deadline=None)
    def test_discount_bounded_by_order_amount(self, discount_type, value, order_amount):
        coupon = CouponFactory(discount_type=discount_type, discount_value=value)
        result = CouponService.validate_coupon(coupon.code, order_amount)
        self.assertTrue(result.valid)
        self.assertTrue(Decimal('0') <= result.discount <= order_amount)


class TestCouponUsageLimits(TestCase):
    """Global use counter and redemption records."""

    def setUp(self):
        self.user = UserFactory()

    def test_coupon_at_max_uses_rejected(self):
        CouponFactory(code='CAPPED', max_uses=5, uses_count=5)
        result = CouponService.validate_coupon('CAPPED', Decimal('10'))
        self.assertEqual(result.message, 'usage limit reached')

    @given(max_uses=st.integers(min_value=1, max_value=50))
    @settings(max_examples=20, deadline=None)
    def test_last_use_accepted_then_rejected(self, max_uses):
        coupon = CouponFactory(max_uses=max_uses, uses_count=max_uses - 1)
        self.assertTrue(CouponService.validate_coupon(coupon.code, Decimal('10')).valid)

        outcome = CouponService.apply_coupon(coupon.pk, 'order_1', Decimal('1'), user=self.user)
        self.assertTrue(outcome['success'])

        coupon.refresh_from_db()
        self.assertEqual(coupon.uses_count, max_uses)
        result = CouponService.validate_coupon(coupon.code, Decimal('10'))
        self.assertEqual(result.message, 'usage limit reached')

    def test_apply_never_overshoots_max_uses(self):
        coupon = CouponFactory(max_uses=2)
        outcomes = [
            CouponService.apply_coupon(coupon.pk, f'order_{i}', Decimal('1'), user=UserFactory())
            for i in range(4)
        ]

        self.assertEqual([o['success'] for o in outcomes], [True, True, False, False])
        self.assertEqual(outcomes[2]['message'], 'usage limit reached')
        coupon.refresh_from_db()
        self.assertEqual(coupon.uses_count, 2)
        self.assertEqual(CouponUse.objects.filter(coupon=coupon).count(), 2)

    def test_apply_records_use(self):
        coupon = CouponFactory()
        CouponService.apply_coupon(coupon.pk, 'order_abc', Decimal('12.345'), user=self.user)

        use = CouponUse.objects.get(coupon=coupon)
        self.assertEqual(use.user, self.user)
        self.assertEqual(use.order_id, 'order_abc')
        self.assertEqual(use.discount_applied, Decimal('12.35'))

    def test_apply_is_idempotent_per_order(self):
        coupon = CouponFactory()
        CouponService.apply_coupon(coupon.pk, 'order_same', Decimal('5'), user=self.user)
        again = CouponService.apply_coupon(coupon.pk, 'order_same', Decimal('5'), user=self.user)

        self.assertTrue(again['success'])
        coupon.refresh_from_db()
        self.assertEqual(coupon.uses_count, 1)

    def test_apply_enforces_per_user_cap(self):
        coupon = CouponFactory(max_uses_per_user=1)
        first = CouponService.apply_coupon(coupon.pk, 'order_1', Decimal('5'), user=self.user)
        second = CouponService.apply_coupon(coupon.pk, 'order_2', Decimal('5'), user=self.user)

        self.assertTrue(first['success'])
        self.assertFalse(second['success'])
        self.assertEqual(second['message'], 'you have already used this coupon')

    def test_apply_rejects_disabled_or_out_of_window_coupon(self):
        now = timezone.now()
        coupons = [
            CouponFactory(is_active=False, max_uses=3),
            CouponFactory(expires_at=now - timedelta(minutes=1), max_uses=3),
            CouponFactory(starts_at=now + timedelta(days=1), max_uses=3),
        ]

        for coupon in coupons:
            outcome = CouponService.apply_coupon(coupon.pk, 'order_1', Decimal('5'), user=self.user, now=now)
            self.assertFalse(outcome['success'])
            self.assertEqual(outcome['message'], 'coupon is not currently active')
            coupon.refresh_from_db()
            self.assertEqual(coupon.uses_count, 0)

        self.assertFalse(CouponUse.objects.exists())

    def test_apply_checks_window_at_given_time(self):
        coupon = CouponFactory(expires_at=timezone.now() - timedelta(hours=1))
        quoted_at = coupon.expires_at - timedelta(hours=2)

        outcome = CouponService.apply_coupon(coupon.pk, 'order_1', Decimal('5'), user=self.user, now=quoted_at)

        self.assertTrue(outcome['success'])

    def test_apply_unknown_coupon(self):
        self.assertFalse(CouponService.apply_coupon(999999, 'order_1', Decimal('5'))['success'])

    def test_active_coupons(self):
        now = timezone.now()
        live = CouponFactory()
        CouponFactory(is_active=False)
        CouponFactory(expires_at=now - timedelta(minutes=1))
        CouponFactory(starts_at=now + timedelta(days=1))
        CouponFactory(max_uses=1, uses_count=1)

        self.assertEqual(list(CouponService.get_active_coupons(now)), [live])
        self.assertEqual(CouponService.get_coupon_by_id(live.pk), live)
