from django.utils import timezone
import logging
import json

# Set up security logger
security_logger = logging.getLogger('security')


class SecurityAuditLogger:
    """Security audit logging for checkout and payment events"""

    @staticmethod
    def log_security_event(event_type, ip_address=None, user=None, details=None, severity='WARNING'):
        """Log a security-relevant event (rate limit hit, forged payment, ...)"""
        payload = {
            'event_type': event_type,
            'ip_address': ip_address,
            'user': getattr(user, 'pk', None) if user is not None and getattr(user, 'is_authenticated', False) else None,
            'details': details,
            'timestamp': timezone.now().isoformat(),
        }

        log_level = getattr(logging, severity.upper(), logging.WARNING)
        security_logger.log(log_level, f"Security event: {event_type} {json.dumps(payload, default=str)}")

    @staticmethod
    def log_rate_limit_exceeded(identifier, endpoint, ip_address=None):
        SecurityAuditLogger.log_security_event(
            'RATE_LIMIT_EXCEEDED',
            ip_address=ip_address,
            details=f"Rate limit exceeded for {identifier} on {endpoint}",
        )

    @staticmethod
    def log_signature_mismatch(order_id, payment_id, ip_address=None):
        # The presented signature itself is never logged
        SecurityAuditLogger.log_security_event(
            'PAYMENT_SIGNATURE_MISMATCH',
            ip_address=ip_address,
            details=f"Signature mismatch for order {order_id} payment {payment_id}",
        )
