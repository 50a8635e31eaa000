"""
Storageman Models.

- Product, Country: catalog references
- Storage: warehouse unit laid out as a grid
- Block: one grid cell of a storage
- Box: batch of boxes in a block, checked out over time
- BoxCountry: destination countries of a box
- ActivityLog: immutable audit trail
"""

from storageman.models.activity import ActivityLog
from storageman.models.base import SoftDeleteModel, SoftDeleteQuerySet
from storageman.models.box import Box, BoxCountry
from storageman.models.catalog import Country, Product
from storageman.models.enums import ActivityAction, BoxState
from storageman.models.storage import Block, Storage

__all__ = [
    'ActivityAction',
    'BoxState',
    'SoftDeleteModel',
    'SoftDeleteQuerySet',
    'Product',
    'Country',
    'Storage',
    'Block',
    'Box',
    'BoxCountry',
    'ActivityLog',
]
