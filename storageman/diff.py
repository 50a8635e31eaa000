"""
Three-way list diff: reconcile submitted items against stored ones.

Given what the caller submitted and what is currently stored, split the
work into three sets keyed by id:

- new: submitted ids not stored yet (insert)
- matched: ids present on both sides (keep / update)
- missing: stored ids absent from the submission (remove)

Usage:
    diff = three_way_diff(submitted=[1, 2, 4], existing=[1, 2, 3])
    diff.new      # [4]
    diff.matched  # [1, 2]
    diff.missing  # [3]
"""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class ListDiff(Generic[T]):
    """Result of three_way_diff. Order follows the input lists."""

    new: list[T] = field(default_factory=list)
    matched: list[T] = field(default_factory=list)
    missing: list[T] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.new or self.missing)


def _identity(item):
    return item


def three_way_diff(
    submitted: Iterable[T],
    existing: Iterable[T],
    key: Callable[[T], Hashable] = _identity,
) -> ListDiff[T]:
    """
    Diff two collections by key.

    Duplicates in ``submitted`` are collapsed to their first occurrence.
    ``new`` and ``matched`` hold submitted items, ``missing`` holds
    existing items.
    """
    existing_by_key = {}
    for item in existing:
        existing_by_key.setdefault(key(item), item)

    new, matched, seen = [], [], set()
    for item in submitted:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        if k in existing_by_key:
            matched.append(item)
        else:
            new.append(item)

    missing = [item for k, item in existing_by_key.items() if k not in seen]
    return ListDiff(new=new, matched=matched, missing=missing)
