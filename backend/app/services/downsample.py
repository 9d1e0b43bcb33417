"""Stride decimation of historical query results.

Keeps every k-th row by index rather than averaging; smoothing is left to
the moving-average channels at render time.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")

# Max points sent back for one range query
SEND_DATA_LIMIT = 1000


def reduce(rows: Sequence[T], limit: int = SEND_DATA_LIMIT) -> Sequence[T]:
    """Cap ``rows`` near ``limit`` points by stride decimation.

    If ``len(rows) <= limit`` the input is returned unchanged.  Otherwise
    ``stride = len(rows) // limit`` and row ``i`` is kept when
    ``i % stride == 0``.  Because the stride is floored the result can
    exceed ``limit`` (up to ``2 * limit - 1`` rows when the stride is 1),
    and the last kept row can sit well before the end of the input.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    if len(rows) <= limit:
        return rows
    stride = len(rows) // limit
    return [row for i, row in enumerate(rows) if i % stride == 0]
