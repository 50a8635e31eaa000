"""
Tests for storage creation and cascading deletion.
"""

import pytest
from django.db import IntegrityError, connection, transaction
from django.test.utils import CaptureQueriesContext

from storageman import inventory
from storageman.exceptions import ConflictError, NotFoundError
from storageman.models import ActivityAction, ActivityLog, Block, Box, Storage


pytestmark = pytest.mark.django_db


class TestCreateStorage:
    """Tests for inventory.create_storage()."""

    def test_generates_blocks(self, storage):
        names = list(storage.blocks.order_by('row', 'column').values_list('name', flat=True))

        assert names == ['A1', 'A2', 'B1', 'B2']

    @pytest.mark.parametrize('dimension,count', [('1x1', 1), ('4x4', 16), ('7x7', 49)])
    def test_block_count(self, product, supervisor, user, dimension, count):
        storage = inventory.create_storage(
            f'Room {dimension}', product_id=product.pk, supervisor_id=supervisor.pk,
            dimension=dimension, capacity='100', actor=user,
        )

        assert storage.blocks.count() == count

    def test_records_people(self, storage, supervisor, user, product):
        assert storage.supervisor == supervisor
        assert storage.created_by == user
        assert storage.product == product

    def test_logs_create(self, storage):
        log = ActivityLog.objects.get(storage=storage)

        assert log.action == ActivityAction.CREATE
        assert log.message == "Created new storage 'Cold Room' with dimension '2x2' and '40 pallets' capacity."

    def test_duplicate_name(self, storage, product, supervisor, user):
        with pytest.raises(ConflictError) as exc:
            inventory.create_storage(
                'cold room', product_id=product.pk, supervisor_id=supervisor.pk,
                dimension='1x1', capacity='1', actor=user,
            )

        assert exc.value.kind == 'Conflict:name_taken'
        assert Storage.objects.count() == 1

    def test_name_reusable_after_delete(self, storage, product, supervisor, user):
        inventory.delete_storage(storage.pk, actor=user)

        again = inventory.create_storage(
            'Cold Room', product_id=product.pk, supervisor_id=supervisor.pk,
            dimension='1x1', capacity='1', actor=user,
        )

        assert again.pk != storage.pk

    def test_unique_constraint_guards_alive_names(self, storage, product, supervisor, user):
        """The database rejects a second alive storage with the same name."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Storage.objects.create(
                    name='COLD ROOM', dimension='1x1', capacity='1',
                    product=product, supervisor=supervisor, created_by=user,
                )

    def test_missing_supervisor(self, product, user):
        with pytest.raises(NotFoundError) as exc:
            inventory.create_storage(
                'Room', product_id=product.pk, supervisor_id=999_999,
                dimension='1x1', capacity='1', actor=user,
            )

        assert exc.value.entity == 'user'
        assert Storage.objects.count() == 0

    def test_missing_product(self, supervisor, user):
        with pytest.raises(NotFoundError) as exc:
            inventory.create_storage(
                'Room', product_id=999_999, supervisor_id=supervisor.pk,
                dimension='1x1', capacity='1', actor=user,
            )

        assert exc.value.code == 'PRODUCT_NOT_FOUND'


class TestDeleteStorage:
    """Tests for inventory.delete_storage()."""

    def test_cascades_to_blocks_and_boxes(self, storage, user, add_box):
        b2 = storage.blocks.get(name='B2')
        add_box()
        add_box()
        add_box(block=b2)

        result = inventory.delete_storage(storage.pk, actor=user)

        assert result.blocks == 4
        assert result.boxes == 3
        assert not Block.objects.filter(storage=storage, deleted_at__isnull=True).exists()
        assert not Box.objects.filter(block__storage=storage, deleted_at__isnull=True).exists()
        assert Box.objects.deleted().filter(block__storage=storage).count() == 3

        storage.refresh_from_db()
        assert storage.deleted_at is not None
        assert storage.updated_by == user

    def test_single_delete_log(self, storage, user, add_box):
        add_box()

        inventory.delete_storage(storage.pk, actor=user)

        log = ActivityLog.objects.get(storage=storage, action=ActivityAction.DELETE)
        assert log.message == "Deleted storage 'Cold Room'."
        storage.refresh_from_db()
        assert log.timestamp == storage.deleted_at

    def test_shared_timestamp(self, storage, user, add_box):
        box = add_box()

        inventory.delete_storage(storage.pk, actor=user)

        storage.refresh_from_db()
        box.refresh_from_db()
        assert box.deleted_at == storage.deleted_at
        assert set(storage.blocks.values_list('deleted_at', flat=True)) == {storage.deleted_at}

    def test_leaves_other_storages(self, storage, product, supervisor, user, add_box):
        other = inventory.create_storage(
            'Dry Room', product_id=product.pk, supervisor_id=supervisor.pk,
            dimension='1x1', capacity='1', actor=user,
        )

        inventory.delete_storage(storage.pk, actor=user)

        assert Block.objects.alive().filter(storage=other).count() == 1

    def test_storage_without_blocks(self, product, supervisor, user):
        """No blocks: the box step is skipped."""
        bare = Storage.objects.create(
            name='Bare', dimension='1x1', capacity='1',
            product=product, supervisor=supervisor, created_by=user,
        )

        with CaptureQueriesContext(connection) as ctx:
            result = inventory.delete_storage(bare.pk, actor=user)

        assert result.blocks == 0
        assert result.boxes == 0
        assert not any('"storageman_box"' in q['sql'] for q in ctx.captured_queries)
        assert ActivityLog.objects.filter(storage=bare).count() == 1

    def test_deleted_storage_not_found(self, storage, user):
        inventory.delete_storage(storage.pk, actor=user)

        with pytest.raises(NotFoundError) as exc:
            inventory.delete_storage(storage.pk, actor=user)

        assert exc.value.code == 'STORAGE_NOT_FOUND'
        assert ActivityLog.objects.filter(action=ActivityAction.DELETE).count() == 1
