"""
Reference checks: do the entities an operation points at exist?

Runs before any write, inside the operation's transaction, so the checks
and the writes share one isolation boundary. Soft-deleted rows count as
missing.

Usage:
    check = check_references(storage_id=1, block_id=4, product_id=2,
                             user_id=7, country_ids=[1, 3])
    check.missing          # 'product' or None
    check.raise_for_missing()
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from storageman.exceptions import InternalError, NotFoundError
from storageman.models.catalog import Country, Product
from storageman.models.storage import Block, Storage

logger = logging.getLogger('storageman')


@dataclass(frozen=True)
class ReferenceCheck:
    """
    Outcome of check_references.

    Each resolved entity is None when it was not found or not asked
    for; ``requested`` tells the two apart.
    """

    PRIORITY: ClassVar[tuple[str, ...]] = ('storage', 'block', 'product', 'user', 'countries')

    storage: Storage | None = None
    block: Block | None = None
    product: Product | None = None
    user: Any = None
    countries_valid: bool = True
    requested: frozenset[str] = field(default_factory=frozenset)

    def _found(self, entity: str) -> bool:
        if entity == 'countries':
            return self.countries_valid
        return getattr(self, entity) is not None

    @property
    def missing(self) -> str | None:
        """First missing entity in priority order, or None."""
        for entity in self.PRIORITY:
            if entity in self.requested and not self._found(entity):
                return entity
        return None

    @property
    def ok(self) -> bool:
        return self.missing is None

    def raise_for_missing(self) -> 'ReferenceCheck':
        """
        Raise NotFoundError for the first missing entity.

        Returns:
            self, when everything requested was found
        """
        entity = self.missing
        if entity is None:
            return self
        if entity == 'countries':
            raise NotFoundError('COUNTRY_NOT_FOUND')
        raise NotFoundError.for_entity(entity)


def countries_exist(country_ids: Iterable) -> bool:
    """
    True when every distinct id resolves to a country.

    Compares the number of matched distinct ids against the de-duplicated
    input, so repeated ids are fine but unknown ones are not. An empty
    input is invalid.
    """
    distinct = set(country_ids)
    if not distinct:
        return False
    return Country.objects.filter(pk__in=distinct).count() == len(distinct)


def check_references(storage_id=None, block_id=None, product_id=None,
                     user_id=None, country_ids=None) -> ReferenceCheck:
    """
    Check every given reference.

    Args:
        storage_id: Storage that must be alive
        block_id: Block that must be alive and belong to storage_id
        product_id: Product that must be alive
        user_id: User that must exist and be active
        country_ids: Countries that must all exist

    Returns:
        ReferenceCheck with the resolved rows

    Raises:
        InternalError: The store failed while checking
    """
    requested = set()
    found: dict[str, Any] = {}

    try:
        if storage_id is not None:
            requested.add('storage')
            found['storage'] = Storage.objects.alive().filter(pk=storage_id).first()

        if block_id is not None:
            requested.add('block')
            found['block'] = Block.objects.alive().filter(
                pk=block_id, storage_id=storage_id,
            ).first()

        if product_id is not None:
            requested.add('product')
            found['product'] = Product.objects.alive().filter(pk=product_id).first()

        if user_id is not None:
            requested.add('user')
            found['user'] = get_user_model().objects.filter(
                pk=user_id, is_active=True,
            ).first()

        if country_ids is not None:
            requested.add('countries')
            found['countries_valid'] = countries_exist(country_ids)
    except DatabaseError as e:
        logger.exception(
            "storage.references.failed",
            extra={"storage_id": storage_id, "block_id": block_id},
        )
        raise InternalError() from e

    return ReferenceCheck(requested=frozenset(requested), **found)
