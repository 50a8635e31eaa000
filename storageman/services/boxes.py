"""
Box lifecycle: add, check out, remove, re-route.

All methods use transaction.atomic(); the reference checks run inside
the same transaction as the writes.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from storageman.diff import three_way_diff
from storageman.exceptions import (
    AlreadyClosedError,
    InsufficientRemainingError,
    InvalidStateError,
    NotFoundError,
    translate_database_errors,
)
from storageman.models.box import Box, BoxCountry
from storageman.models.enums import ActivityAction
from storageman.services.activity import append_activity
from storageman.services.validation import check_references

logger = logging.getLogger('storageman')


def _plural(count: int) -> str:
    return 'boxes' if count > 1 else 'box'


def _format_amount(value) -> str:
    return f"{Decimal(str(value)):.2f}"


def _locked_box(block_id, box_id) -> Box:
    """Alive box of the block, row-locked until the transaction ends."""
    box = (
        Box.objects.alive()
        .select_for_update(of=('self',))
        .select_related('block', 'product')
        .filter(pk=box_id, block_id=block_id)
        .first()
    )
    if box is None:
        raise NotFoundError('BOX_NOT_FOUND', box_id=box_id)
    return box


def _ensure_can_checkout(box: Box, quantity: int) -> None:
    remaining = box.remaining_boxes
    if box.is_closed or remaining == 0:
        raise AlreadyClosedError(box_id=box.pk, remaining=0, requested=quantity)
    if quantity > remaining:
        raise InsufficientRemainingError(box_id=box.pk, remaining=remaining, requested=quantity)


def checkout_message(box: Box, quantity: int, previously_checked_out: int) -> str:
    """
    Describe a checkout.

    Three wordings: everything at once, the last of several checkouts,
    and a partial checkout.
    """
    product = box.product.name
    block = box.block.name
    exhausted = previously_checked_out + quantity == box.total_boxes

    if exhausted and previously_checked_out == 0:
        return (
            f"Checked out all {box.total_boxes} {_plural(box.total_boxes)} "
            f"of '{product}' from '{block}' block."
        )
    if exhausted:
        return (
            f"Checked out last remaining {quantity} {_plural(quantity)} "
            f"of '{product}' ({box.total_boxes} total) from '{block}' block."
        )
    return f"Checked out {quantity} {_plural(quantity)} of '{product}' from '{block}' block."


class BoxOperations:
    """State-changing box methods."""

    @classmethod
    @translate_database_errors
    def add_box(cls, storage_id, block_id, *, product_id, user_id, grade,
                weight, price, total_boxes, countries, actor, sub_grade=None) -> Box:
        """
        Put a new batch of boxes into a block.

        The box starts OPEN (nothing checked out) and ships to every
        country in ``countries`` (duplicates collapsed).

        Raises:
            NotFoundError: storage, block, product, user or countries
            InvalidStateError('INVALID_QUANTITY'): total_boxes < 1
        """
        if total_boxes < 1:
            raise InvalidStateError('INVALID_QUANTITY', requested=total_boxes)

        country_ids = list(dict.fromkeys(countries))

        with transaction.atomic():
            check = check_references(
                storage_id=storage_id,
                block_id=block_id,
                product_id=product_id,
                user_id=user_id,
                country_ids=country_ids,
            ).raise_for_missing()

            box = Box.objects.create(
                block=check.block,
                product=check.product,
                user=check.user,
                grade=grade,
                sub_grade=sub_grade,
                weight=weight,
                price=price,
                total_boxes=total_boxes,
            )
            BoxCountry.objects.bulk_create(
                BoxCountry(box=box, country_id=country_id)
                for country_id in country_ids
            )

            quantity = f"a set of {total_boxes}" if total_boxes > 1 else "a"
            append_activity(
                check.storage,
                actor,
                ActivityAction.ADD_BOX,
                f"Added {quantity} '{check.product.name}' "
                f"(priced at {_format_amount(price)}) to block '{check.block.name}'.",
            )
            logger.info(
                "box.added",
                extra={
                    "box_id": box.pk,
                    "block_id": block_id,
                    "total_boxes": total_boxes,
                },
            )
            return box

    @classmethod
    @translate_database_errors
    def checkout_box(cls, storage_id, block_id, box_id, quantity: int, *, actor) -> Box:
        """
        Withdraw ``quantity`` boxes from a box's remaining stock.

        Transitions: OPEN|PARTIAL -> PARTIAL, OPEN|PARTIAL -> CLOSED

        Raises:
            NotFoundError: storage, block or box
            AlreadyClosedError: every box is already checked out
            InsufficientRemainingError: quantity > remaining boxes
            InvalidStateError('INVALID_QUANTITY'): quantity < 1

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on the box
            - The counter moves through Box.objects.bounded_checkout(),
              which cannot exceed total_boxes even without the lock
        """
        if quantity < 1:
            raise InvalidStateError('INVALID_QUANTITY', requested=quantity)

        with transaction.atomic():
            check = check_references(storage_id=storage_id, block_id=block_id).raise_for_missing()
            box = _locked_box(block_id, box_id)
            _ensure_can_checkout(box, quantity)

            previously = box.checked_out_boxes
            now = timezone.now()

            if not Box.objects.bounded_checkout(box.pk, quantity, now):
                # Another transaction changed the box between our read and update.
                box.refresh_from_db(fields=['checked_out_boxes', 'checked_out_at', 'deleted_at'])
                if box.is_deleted:
                    raise NotFoundError('BOX_NOT_FOUND', box_id=box.pk)
                logger.warning(
                    "box.checkout.rejected",
                    extra={"box_id": box.pk, "qty": quantity, "remaining": box.remaining_boxes},
                )
                _ensure_can_checkout(box, quantity)
                raise InsufficientRemainingError(
                    box_id=box.pk, remaining=box.remaining_boxes, requested=quantity,
                )

            box.refresh_from_db(fields=['checked_out_boxes', 'checked_out_at', 'updated_at'])

            append_activity(
                check.storage,
                actor,
                ActivityAction.CHECKOUT_BOX,
                checkout_message(box, quantity, previously),
                timestamp=now,
            )
            logger.info(
                "box.checked_out",
                extra={
                    "box_id": box.pk,
                    "qty": quantity,
                    "checked_out": box.checked_out_boxes,
                    "total": box.total_boxes,
                },
            )
            return box

    @classmethod
    @translate_database_errors
    def remove_box(cls, storage_id, block_id, box_id, *, actor) -> Box:
        """
        Soft-delete one box. Sibling boxes in the block are untouched.

        Raises:
            NotFoundError: storage, block or box
        """
        with transaction.atomic():
            check = check_references(storage_id=storage_id, block_id=block_id).raise_for_missing()
            box = _locked_box(block_id, box_id)

            now = timezone.now()
            box.deleted_at = now
            box.save(update_fields=['deleted_at', 'updated_at'])

            append_activity(
                check.storage,
                actor,
                ActivityAction.DELETE_BOX,
                f"Deleted '{box.product.name}' box in '{box.block.name}'.",
                timestamp=now,
            )
            logger.info("box.removed", extra={"box_id": box.pk, "block_id": block_id})
            return box

    @classmethod
    @translate_database_errors
    def update_box_countries(cls, storage_id, block_id, box_id, countries, *, actor) -> Box:
        """
        Replace the destination countries of a box.

        Countries already linked are kept, new ones are linked and the
        ones left out are unlinked. Nothing is written (and nothing is
        logged) when the set does not change.

        Raises:
            NotFoundError: storage, block, box or countries
        """
        country_ids = list(dict.fromkeys(countries))

        with transaction.atomic():
            check = check_references(
                storage_id=storage_id,
                block_id=block_id,
                country_ids=country_ids,
            ).raise_for_missing()
            box = _locked_box(block_id, box_id)

            existing = box.box_countries.values_list('country_id', flat=True)
            diff = three_way_diff(country_ids, existing)
            if not diff.has_changes:
                return box

            if diff.missing:
                BoxCountry.objects.filter(box=box, country_id__in=diff.missing).delete()
            BoxCountry.objects.bulk_create(
                BoxCountry(box=box, country_id=country_id)
                for country_id in diff.new
            )

            append_activity(
                check.storage,
                actor,
                ActivityAction.UPDATE_BOX,
                f"Updated destination countries of '{box.product.name}' box "
                f"in '{box.block.name}' ({len(diff.new)} added, {len(diff.missing)} removed).",
            )
            logger.info(
                "box.countries_updated",
                extra={
                    "box_id": box.pk,
                    "added": diff.new,
                    "removed": diff.missing,
                },
            )
            return box
