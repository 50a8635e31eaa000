"""
Storage and Block models: the grid a storage is laid out as.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _

from storageman.layout import Dimension
from storageman.models.base import SoftDeleteModel


class Storage(SoftDeleteModel):
    """
    A named warehouse unit laid out as an N×N grid of blocks.

    Blocks are generated once, when the storage is created
    (see StorageOperations.create_storage). Deleting a storage
    soft-deletes its blocks and their boxes with it.
    """

    name = models.CharField(max_length=50, verbose_name=_('Name'))
    dimension = models.CharField(
        max_length=3,
        choices=Dimension.choices,
        verbose_name=_('Dimension'),
    )
    capacity = models.CharField(max_length=50, verbose_name=_('Capacity'))

    product = models.ForeignKey(
        'storageman.Product',
        on_delete=models.PROTECT,
        related_name='storages',
        verbose_name=_('Product'),
    )
    supervisor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='supervised_storages',
        verbose_name=_('Supervisor'),
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Created by'),
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Updated by'),
    )

    class Meta:
        verbose_name = _('Storage')
        verbose_name_plural = _('Storages')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                Lower('name'),
                condition=Q(deleted_at__isnull=True),
                name='unique_alive_storage_name',
            ),
        ]

    @property
    def active_product(self):
        """The stored product, or None once it has been soft-deleted."""
        if self.product.is_deleted:
            return None
        return self.product

    def __str__(self) -> str:
        return f"{self.name} ({self.dimension})"


class Block(SoftDeleteModel):
    """One grid cell of a storage, addressed by (row, column)."""

    storage = models.ForeignKey(
        'storageman.Storage',
        on_delete=models.PROTECT,
        related_name='blocks',
        verbose_name=_('Storage'),
    )
    name = models.CharField(max_length=10, verbose_name=_('Name'))
    row = models.PositiveSmallIntegerField(verbose_name=_('Row'))
    column = models.PositiveSmallIntegerField(verbose_name=_('Column'))

    class Meta:
        verbose_name = _('Block')
        verbose_name_plural = _('Blocks')
        ordering = ['row', 'column']
        constraints = [
            models.UniqueConstraint(
                fields=['storage', 'row', 'column'],
                name='unique_block_cell',
            ),
        ]

    def __str__(self) -> str:
        return self.name
