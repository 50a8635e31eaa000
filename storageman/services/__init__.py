"""
Storage services: modular organization of storage operations.

    from storageman.services import StorageQueries, StorageOperations, BoxOperations
"""

from storageman.services.boxes import BoxOperations
from storageman.services.queries import StorageQueries
from storageman.services.storages import StorageOperations

__all__ = [
    'StorageQueries',
    'StorageOperations',
    'BoxOperations',
]
