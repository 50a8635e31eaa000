"""
Django Storageman: Grid storages, boxes and checkout.

Usage:
    from storageman import inventory, StorageError

    storage = inventory.create_storage('Cold Room', product_id=p.pk,
                                       supervisor_id=u.pk, dimension='2x2',
                                       capacity='40 pallets', actor=u)
    box = inventory.add_box(storage.pk, block.pk, ..., total_boxes=5, actor=u)
    inventory.checkout_box(storage.pk, block.pk, box.pk, 3, actor=u)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from storageman.service import Inventory
        return Inventory
    elif name == 'StorageError':
        from storageman.exceptions import StorageError
        return StorageError
    elif name == 'Storage':
        from storageman.models.storage import Storage
        return Storage
    elif name == 'Block':
        from storageman.models.storage import Block
        return Block
    elif name == 'Box':
        from storageman.models.box import Box
        return Box
    elif name == 'ActivityLog':
        from storageman.models.activity import ActivityLog
        return ActivityLog
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'StorageError',
    'Storage',
    'Block',
    'Box',
    'ActivityLog',
]

__version__ = '0.1.0'
