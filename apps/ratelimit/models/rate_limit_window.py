from django.db import models


class RateLimitWindow(models.Model):
    """Request counter for one caller on one endpoint within one time bucket"""

    identifier = models.CharField(max_length=191, help_text="Caller key, e.g. ip:1.2.3.4 or user:42")
    endpoint = models.CharField(max_length=191)
    window_start = models.DateTimeField(help_text="Start of the counting bucket")
    request_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'rate_limit_windows'
        constraints = [
            models.UniqueConstraint(
                fields=['identifier', 'endpoint', 'window_start'],
                name='unique_rate_limit_bucket',
            ),
        ]
        indexes = [
            models.Index(fields=['window_start'], name='rate_limit_window_start_idx'),
        ]

    def __str__(self):
        return f"{self.identifier} {self.endpoint} @ {self.window_start:%H:%M:%S} = {self.request_count}"
