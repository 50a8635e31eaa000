"""
Soft-delete support shared by every storage entity.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class SoftDeleteQuerySet(models.QuerySet):
    """QuerySet aware of the ``deleted_at`` convention."""

    def alive(self):
        """Rows not soft-deleted."""
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        """Soft-deleted rows."""
        return self.filter(deleted_at__isnull=False)

    def soft_delete(self, when=None) -> int:
        """Mark every alive row in the queryset deleted. Returns row count."""
        when = when or timezone.now()
        return self.alive().update(deleted_at=when, updated_at=when)


class SoftDeleteModel(models.Model):
    """
    Abstract base with timestamps and a nullable deletion mark.

    Rows are never removed: ``deleted_at`` hides them from ``alive()``
    queries and keeps them for history.
    """

    created_at = models.DateTimeField(default=timezone.now, verbose_name=_('Created at'))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_('Updated at'))
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Deleted at'),
    )

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
