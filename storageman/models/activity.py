"""
ActivityLog model: Immutable audit trail of storage mutations.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from storageman.models.enums import ActivityAction


class ActivityLog(models.Model):
    """
    Immutable record of one successful storage mutation.

    Rules:
    - NEVER update() or delete()
    - Exactly one row per mutating operation, written in the same
      transaction as the mutation
    - Listed newest first; the auto-increment id breaks timestamp ties
    """

    storage = models.ForeignKey(
        'storageman.Storage',
        on_delete=models.PROTECT,
        related_name='activity',
        verbose_name=_('Storage'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('User'),
    )
    action = models.CharField(
        max_length=20,
        choices=ActivityAction.choices,
        verbose_name=_('Action'),
    )
    message = models.TextField(verbose_name=_('Message'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Timestamp'))

    class Meta:
        verbose_name = _('Activity log')
        verbose_name_plural = _('Activity logs')
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['storage', 'timestamp'], name='storageman_log_storage_ts_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError("Activity logs are immutable.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Activity logs are immutable.")

    def __str__(self) -> str:
        return f"[{self.action}] {self.message}"
