from django.db import models


class PaymentVerificationLog(models.Model):
    """Audit trail of every payment signature check"""

    payment_order = models.ForeignKey(
        'PaymentOrder',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verification_logs',
    )
    provider_order_id = models.CharField(max_length=100, help_text="Order id presented by the client")
    payment_id = models.CharField(max_length=100, help_text="Payment id presented by the client")
    verified = models.BooleanField(default=False)
    reason = models.CharField(max_length=255, blank=True, default='')
    request_ip = models.GenericIPAddressField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payment_verification_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['provider_order_id'], name='payment_verif_order_idx'),
            models.Index(fields=['verified'], name='payment_verif_verified_idx'),
            models.Index(fields=['created_at'], name='payment_verif_created_idx'),
        ]

    def __str__(self):
        outcome = 'verified' if self.verified else 'rejected'
        return f"Verification {self.provider_order_id}/{self.payment_id} - {outcome}"
