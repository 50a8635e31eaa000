"""
Inventory Service: The single public interface for storage operations.

Usage:
    from storageman import inventory, StorageError

    storage = inventory.create_storage('Cold Room', product_id=apple.pk,
                                       supervisor_id=ana.pk, dimension='2x2',
                                       capacity='40 pallets', actor=ana)
    a1 = storage.blocks.get(name='A1')
    box = inventory.add_box(storage.pk, a1.pk, product_id=apple.pk,
                            user_id=ana.pk, grade='A', weight=12, price=30,
                            total_boxes=5, countries=[de.pk], actor=ana)
    inventory.checkout_box(storage.pk, a1.pk, box.pk, 3, actor=ana)
    inventory.delete_storage(storage.pk, actor=ana)
"""

from storageman.services import BoxOperations, StorageOperations, StorageQueries


class Inventory(StorageQueries, StorageOperations, BoxOperations):
    """
    Single interface for all storage operations.

    Every state-changing method runs in one atomic transaction that
    holds the reference checks, the writes and exactly one activity
    log entry. See each method's docstring for its failures.
    """
