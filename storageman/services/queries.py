"""
Storage queries: read-only lookups.
"""

from dataclasses import dataclass
from datetime import datetime

from django.db.models import Prefetch, Q
from django.utils import timezone

from storageman.conf import storageman_settings
from storageman.exceptions import NotFoundError
from storageman.models.activity import ActivityLog
from storageman.models.box import Box
from storageman.models.storage import Block, Storage
from storageman.services.validation import check_references


@dataclass(frozen=True)
class ActivityCursor:
    """Position after the last entry of an activity page."""

    timestamp: datetime
    id: int


@dataclass(frozen=True)
class ActivityPage:
    logs: list[ActivityLog]
    cursor: ActivityCursor | None


class StorageQueries:
    """Read-only storage methods."""

    @classmethod
    def get_storage(cls, storage_id) -> Storage:
        """
        Alive storage with its people, product and alive blocks.

        Blocks are available as ``storage.alive_blocks``, ordered by
        (row, column).

        Raises:
            NotFoundError('STORAGE_NOT_FOUND')
        """
        storage = (
            Storage.objects.alive()
            .select_related('product', 'supervisor', 'created_by')
            .prefetch_related(
                Prefetch(
                    'blocks',
                    queryset=Block.objects.alive().order_by('row', 'column'),
                    to_attr='alive_blocks',
                )
            )
            .filter(pk=storage_id)
            .first()
        )
        if storage is None:
            raise NotFoundError('STORAGE_NOT_FOUND', storage_id=storage_id)
        return storage

    @classmethod
    def list_storages(cls, name: str | None = None):
        """Alive storages, newest first, optionally by name prefix."""
        qs = Storage.objects.alive().select_related('product', 'supervisor')
        if name:
            qs = qs.filter(name__istartswith=name)
        return qs.order_by('-created_at', '-id')

    @classmethod
    def list_boxes(cls, storage_id, block_id, product_name: str | None = None):
        """
        Alive boxes of a block, newest first.

        Raises:
            NotFoundError: storage or block
        """
        check_references(storage_id=storage_id, block_id=block_id).raise_for_missing()

        qs = (
            Box.objects.alive()
            .in_block(block_id)
            .select_related('block', 'product', 'user')
            .prefetch_related('countries')
        )
        if product_name:
            qs = qs.filter(product__name__istartswith=product_name)
        return qs.order_by('-created_at', '-id')

    @classmethod
    def activity(cls, storage_id, cursor: ActivityCursor | None = None,
                 limit: int | None = None) -> ActivityPage:
        """
        One page of a storage's activity, newest first.

        Entries sharing a timestamp are ordered by id, and the cursor
        carries both so no entry is skipped across pages.

        Args:
            storage_id: Alive storage
            cursor: Position returned by the previous page (None = now)
            limit: Page size (None = ACTIVITY_PAGE_SIZE)

        Raises:
            NotFoundError('STORAGE_NOT_FOUND')
        """
        check_references(storage_id=storage_id).raise_for_missing()
        limit = limit or storageman_settings.ACTIVITY_PAGE_SIZE

        qs = ActivityLog.objects.filter(storage_id=storage_id).select_related('user')
        if cursor is None:
            qs = qs.filter(timestamp__lte=timezone.now())
        else:
            qs = qs.filter(
                Q(timestamp__lt=cursor.timestamp)
                | Q(timestamp=cursor.timestamp, id__lt=cursor.id)
            )

        logs = list(qs.order_by('-timestamp', '-id')[:limit])
        next_cursor = None
        if len(logs) == limit:
            last = logs[-1]
            next_cursor = ActivityCursor(timestamp=last.timestamp, id=last.pk)
        return ActivityPage(logs=logs, cursor=next_cursor)
