"""
Grid layout: block coordinates for a storage dimension.

A storage of dimension ``NxN`` is split into N rows and N columns.
Rows are lettered (row 1 -> ``A``), columns are numbered from 1, and the
block name joins both: row 2, column 3 is ``B3``.

Examples:
    >>> [c.name for c in blocks_for_dimension('2x2')]
    ['A1', 'A2', 'B1', 'B2']
"""

from dataclasses import dataclass
from string import ascii_uppercase

from django.db import models


class Dimension(models.TextChoices):
    """Allowed storage dimensions."""
    D1 = '1x1', '1x1'
    D2 = '2x2', '2x2'
    D3 = '3x3', '3x3'
    D4 = '4x4', '4x4'
    D5 = '5x5', '5x5'
    D6 = '6x6', '6x6'
    D7 = '7x7', '7x7'


# dimension -> (rows, columns)
DIMENSIONS: dict[str, tuple[int, int]] = {
    Dimension.D1: (1, 1),
    Dimension.D2: (2, 2),
    Dimension.D3: (3, 3),
    Dimension.D4: (4, 4),
    Dimension.D5: (5, 5),
    Dimension.D6: (6, 6),
    Dimension.D7: (7, 7),
}


@dataclass(frozen=True)
class Cell:
    """One grid cell of a storage."""

    name: str
    row: int
    column: int


def row_letter(row: int) -> str:
    """Letter for a 1-based row index."""
    return ascii_uppercase[row - 1]


def blocks_for_dimension(dimension: str) -> list[Cell]:
    """
    All cells of a dimension, row-major.

    Args:
        dimension: One of the Dimension tokens. Validity is checked
            upstream; an unknown token raises KeyError.

    Returns:
        N*N cells with unique (row, column) pairs.
    """
    rows, columns = DIMENSIONS[dimension]
    return [
        Cell(name=f"{row_letter(row)}{column}", row=row, column=column)
        for row in range(1, rows + 1)
        for column in range(1, columns + 1)
    ]
