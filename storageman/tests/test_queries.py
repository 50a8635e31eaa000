"""
Tests for read-only storage queries and the activity trail.
"""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.db import transaction
from django.utils import timezone

from storageman import inventory
from storageman.exceptions import NotFoundError
from storageman.models import ActivityAction, ActivityLog, Product
from storageman.services.activity import append_activity


pytestmark = pytest.mark.django_db


class TestGetStorage:

    def test_alive_blocks_in_grid_order(self, storage):
        found = inventory.get_storage(storage.pk)

        assert [b.name for b in found.alive_blocks] == ['A1', 'A2', 'B1', 'B2']

    def test_deleted_storage(self, storage, user):
        inventory.delete_storage(storage.pk, actor=user)

        with pytest.raises(NotFoundError):
            inventory.get_storage(storage.pk)

    def test_active_product_none_once_deleted(self, storage, product):
        Product.objects.filter(pk=product.pk).soft_delete()

        found = inventory.get_storage(storage.pk)

        assert found.active_product is None


class TestListStorages:

    def test_name_prefix(self, storage, product, supervisor, user):
        inventory.create_storage(
            'Dry Room', product_id=product.pk, supervisor_id=supervisor.pk,
            dimension='1x1', capacity='1', actor=user,
        )

        assert [s.name for s in inventory.list_storages(name='cold')] == ['Cold Room']
        assert inventory.list_storages().count() == 2

    def test_excludes_deleted(self, storage, user):
        inventory.delete_storage(storage.pk, actor=user)

        assert not inventory.list_storages().exists()


class TestListBoxes:

    def test_alive_boxes_of_block(self, storage, a1, user, add_box):
        kept = add_box()
        removed = add_box()
        inventory.remove_box(storage.pk, a1.pk, removed.pk, actor=user)

        assert list(inventory.list_boxes(storage.pk, a1.pk)) == [kept]

    def test_product_name_prefix(self, storage, a1, add_box):
        pear = Product.objects.create(name='Pear')
        add_box()
        add_box(product_id=pear.pk)

        boxes = inventory.list_boxes(storage.pk, a1.pk, product_name='pe')

        assert [b.product.name for b in boxes] == ['Pear']

    def test_unknown_block(self, storage):
        with pytest.raises(NotFoundError) as exc:
            inventory.list_boxes(storage.pk, 999_999)

        assert exc.value.entity == 'block'


class TestActivity:

    def test_newest_first(self, storage, a1, user, add_box):
        box = add_box(total_boxes=2)
        inventory.checkout_box(storage.pk, a1.pk, box.pk, 2, actor=user)

        page = inventory.activity(storage.pk)

        assert [log.action for log in page.logs] == [
            ActivityAction.CHECKOUT_BOX,
            ActivityAction.ADD_BOX,
            ActivityAction.CREATE,
        ]
        assert page.cursor is None

    def test_cursor_pages_through_ties(self, storage, user):
        """Entries sharing a timestamp are neither repeated nor skipped."""
        stamp = timezone.now() - timedelta(minutes=1)
        with transaction.atomic():
            for i in range(5):
                append_activity(storage, user, ActivityAction.UPDATE, f"entry {i}", timestamp=stamp)

        first = inventory.activity(storage.pk, limit=3)
        second = inventory.activity(storage.pk, cursor=first.cursor, limit=3)
        third = inventory.activity(storage.pk, cursor=second.cursor, limit=3)

        messages = [log.message for log in first.logs + second.logs + third.logs]
        assert messages[0].startswith('Created new storage')
        assert messages[1:] == [f"entry {i}" for i in reversed(range(5))]
        assert third.cursor is None

    def test_default_page_size(self, storage, user, settings):
        settings.STORAGEMAN = {'ACTIVITY_PAGE_SIZE': 2}

        page = inventory.activity(storage.pk)

        assert len(page.logs) == 1
        assert page.cursor is None

    def test_unknown_storage(self):
        with pytest.raises(NotFoundError):
            inventory.activity(999_999)


class TestActivityLogImmutability:

    def test_cannot_update(self, storage):
        log = ActivityLog.objects.get(storage=storage)
        log.message = 'changed'

        with pytest.raises(ValueError):
            log.save()

    def test_cannot_delete(self, storage):
        log = ActivityLog.objects.get(storage=storage)

        with pytest.raises(ValueError):
            log.delete()

    @pytest.mark.django_db(transaction=True)
    def test_append_requires_transaction(self):
        with pytest.raises(RuntimeError):
            append_activity(None, None, ActivityAction.UPDATE, 'outside')


class TestStorageActivityCommand:

    def test_prints_entries(self, storage):
        out = StringIO()

        call_command('storage_activity', str(storage.pk), stdout=out)

        assert "CREATE" in out.getvalue()
        assert "Created new storage 'Cold Room'" in out.getvalue()

    def test_unknown_storage(self):
        with pytest.raises(CommandError):
            call_command('storage_activity', '999999')
