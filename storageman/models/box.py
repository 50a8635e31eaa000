"""
Box model: a batch of identical units sitting in one block.
"""

from django.conf import settings
from django.db import models
from django.db.models import Case, F, Q, Value, When
from django.utils.translation import gettext_lazy as _

from storageman.models.base import SoftDeleteModel, SoftDeleteQuerySet
from storageman.models.enums import BoxState


class BoxQuerySet(SoftDeleteQuerySet):
    """QuerySet for Box with the checkout counter update."""

    def in_block(self, block_id):
        return self.filter(block_id=block_id)

    def open(self):
        """Boxes that still accept checkout."""
        return self.alive().filter(checked_out_at__isnull=True)

    def bounded_checkout(self, pk, quantity: int, when) -> int:
        """
        Advance ``checked_out_boxes`` by ``quantity`` in one UPDATE.

        The row only matches while the new count stays within
        ``total_boxes`` and the box is not closed, so concurrent
        checkouts can never push the counter past the total.
        ``checked_out_at`` is set in the same statement when the new
        count reaches the total.

        Returns:
            1 if the row was updated, 0 if the bound rejected it.
        """
        # checked_out_at is assigned first: some backends evaluate SET
        # clauses left to right against already-updated columns.
        return self.open().filter(
            pk=pk,
            checked_out_boxes__lte=F('total_boxes') - quantity,
        ).update(
            checked_out_at=Case(
                When(total_boxes=F('checked_out_boxes') + quantity, then=Value(when)),
                default=Value(None),
                output_field=models.DateTimeField(),
            ),
            checked_out_boxes=F('checked_out_boxes') + quantity,
            updated_at=when,
        )


class Box(SoftDeleteModel):
    """
    Batch of boxes with independent total/checked-out counters.

    LIFECYCLE:

        OPEN ──checkout(n < total)──► PARTIAL ──checkout(rest)──► CLOSED
          │                                                         ▲
          └───────────────checkout(total)───────────────────────────┘

    Invariants:
    - checked_out_boxes <= total_boxes (also a database constraint)
    - checked_out_at is set iff checked_out_boxes == total_boxes
    - a CLOSED box accepts no further checkout
    """

    block = models.ForeignKey(
        'storageman.Block',
        on_delete=models.PROTECT,
        related_name='boxes',
        verbose_name=_('Block'),
    )
    product = models.ForeignKey(
        'storageman.Product',
        on_delete=models.PROTECT,
        related_name='boxes',
        verbose_name=_('Product'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='storage_boxes',
        verbose_name=_('User'),
    )

    grade = models.CharField(max_length=50, verbose_name=_('Grade'))
    sub_grade = models.CharField(max_length=50, null=True, blank=True, verbose_name=_('Sub grade'))
    weight = models.DecimalField(max_digits=12, decimal_places=3, verbose_name=_('Weight'))
    price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name=_('Price'))

    total_boxes = models.PositiveIntegerField(verbose_name=_('Total boxes'))
    checked_out_boxes = models.PositiveIntegerField(default=0, verbose_name=_('Checked out boxes'))
    checked_out_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Checked out at'),
        help_text=_('Set when every box has been checked out'),
    )

    countries = models.ManyToManyField(
        'storageman.Country',
        through='storageman.BoxCountry',
        related_name='boxes',
        verbose_name=_('Countries'),
    )

    objects = BoxQuerySet.as_manager()

    class Meta:
        verbose_name = _('Box')
        verbose_name_plural = _('Boxes')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(total_boxes__gte=1),
                name='box_total_at_least_one',
            ),
            models.CheckConstraint(
                condition=Q(checked_out_boxes__lte=F('total_boxes')),
                name='box_checked_out_within_total',
            ),
        ]

    @property
    def remaining_boxes(self) -> int:
        return self.total_boxes - self.checked_out_boxes

    @property
    def is_closed(self) -> bool:
        return self.checked_out_at is not None

    @property
    def state(self) -> BoxState:
        if self.checked_out_at is not None:
            return BoxState.CLOSED
        if self.checked_out_boxes > 0:
            return BoxState.PARTIAL
        return BoxState.OPEN

    def __str__(self) -> str:
        return f"{self.checked_out_boxes}/{self.total_boxes} {self.product} [{self.grade}]"


class BoxCountry(models.Model):
    """Destination country of a box (join row)."""

    box = models.ForeignKey(
        'storageman.Box',
        on_delete=models.CASCADE,
        related_name='box_countries',
    )
    country = models.ForeignKey(
        'storageman.Country',
        on_delete=models.PROTECT,
        related_name='+',
    )

    class Meta:
        verbose_name = _('Box country')
        verbose_name_plural = _('Box countries')
        constraints = [
            models.UniqueConstraint(
                fields=['box', 'country'],
                name='unique_box_country',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.box_id} → {self.country_id}"
