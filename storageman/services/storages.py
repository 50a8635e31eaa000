"""
Storage lifecycle: create with its grid, delete with everything in it.

All methods use transaction.atomic().
"""

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.utils import timezone

from storageman.conf import storageman_settings
from storageman.exceptions import ConflictError, NotFoundError, translate_database_errors
from storageman.layout import blocks_for_dimension
from storageman.models.box import Box
from storageman.models.enums import ActivityAction
from storageman.models.storage import Block, Storage
from storageman.services.activity import append_activity
from storageman.services.validation import check_references

logger = logging.getLogger('storageman')


@dataclass(frozen=True)
class CascadeResult:
    """What a storage deletion touched."""

    storage: Storage
    blocks: int
    boxes: int


class StorageOperations:
    """State-changing storage methods."""

    @classmethod
    @translate_database_errors
    def create_storage(cls, name, *, product_id, supervisor_id, dimension,
                       capacity, actor) -> Storage:
        """
        Create a storage and generate one block per grid cell.

        The name check is a fast path for a clear error; the partial
        unique constraint on alive names is what actually guards
        concurrent creation, and its violation is reported the same way.

        Raises:
            NotFoundError: product, or supervisor (as 'user')
            ConflictError('NAME_TAKEN'): an alive storage has this name
        """
        cells = blocks_for_dimension(dimension)

        with transaction.atomic():
            check = check_references(product_id=product_id, user_id=supervisor_id).raise_for_missing()

            if Storage.objects.alive().filter(name__iexact=name).exists():
                raise ConflictError('NAME_TAKEN', name=name)

            try:
                with transaction.atomic():
                    storage = Storage.objects.create(
                        name=name,
                        dimension=dimension,
                        capacity=capacity,
                        product=check.product,
                        supervisor=check.user,
                        created_by=actor,
                    )
            except IntegrityError as e:
                raise ConflictError('NAME_TAKEN', name=name) from e

            Block.objects.bulk_create(
                [
                    Block(storage=storage, name=cell.name, row=cell.row, column=cell.column)
                    for cell in cells
                ],
                batch_size=storageman_settings.BLOCK_INSERT_BATCH_SIZE,
            )

            append_activity(
                storage,
                actor,
                ActivityAction.CREATE,
                f"Created new storage '{storage.name}' with dimension "
                f"'{storage.dimension}' and '{storage.capacity}' capacity.",
            )
            logger.info(
                "storage.created",
                extra={
                    "storage_id": storage.pk,
                    "dimension": dimension,
                    "blocks": len(cells),
                },
            )
            return storage

    @classmethod
    @translate_database_errors
    def delete_storage(cls, storage_id, *, actor) -> CascadeResult:
        """
        Soft-delete a storage, its blocks and every box in those blocks.

        Steps, in one transaction and with one shared timestamp:
        1. Lock the storage and collect its block ids
        2. Mark the storage deleted
        3. Mark its blocks deleted
        4. Mark the boxes of those blocks deleted (skipped with no blocks)
        5. Append a single DELETE activity

        Raises:
            NotFoundError('STORAGE_NOT_FOUND'): missing or already deleted
        """
        with transaction.atomic():
            storage = (
                Storage.objects.alive()
                .select_for_update()
                .filter(pk=storage_id)
                .first()
            )
            if storage is None:
                raise NotFoundError('STORAGE_NOT_FOUND', storage_id=storage_id)

            now = timezone.now()
            block_ids = list(Block.objects.filter(storage=storage).values_list('pk', flat=True))

            storage.deleted_at = now
            storage.updated_by = actor
            storage.save(update_fields=['deleted_at', 'updated_by', 'updated_at'])

            blocks = Block.objects.filter(storage=storage).soft_delete(now)

            boxes = 0
            if block_ids:
                boxes = Box.objects.filter(block_id__in=block_ids).soft_delete(now)

            append_activity(
                storage,
                actor,
                ActivityAction.DELETE,
                f"Deleted storage '{storage.name}'.",
                timestamp=now,
            )
            logger.info(
                "storage.deleted",
                extra={"storage_id": storage.pk, "blocks": blocks, "boxes": boxes},
            )
            return CascadeResult(storage=storage, blocks=blocks, boxes=boxes)
