"""Stitch successive strips into a 2-D height field."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .chain import FoldChain
from .exceptions import AllocationError, ConfigurationError


def heightfield(chain: FoldChain, count: int) -> NDArray[np.float64]:
    """Pull ``count`` strips from ``chain`` into rows of a new array.

    Args:
        chain: Chain to draw from. Its position advances by ``count``.
        count: Number of rows.

    Returns:
        Array of shape ``(count, chain.width)``; row ``j`` is the ``j``-th
        strip produced by this call.
    """
    if count < 0:
        raise ConfigurationError(f"Strip count must be >= 0, got {count}")
    try:
        field = np.empty((count, chain.width), dtype=np.float64)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(f"Cannot allocate {count}x{chain.width} height field") from exc
    for row in range(count):
        field[row] = chain.next().data
    return field


@dataclass(frozen=True)
class HeightfieldStats:
    """Summary statistics of a height field."""

    rows: int
    columns: int
    minimum: float
    maximum: float
    mean: float
    std: float

    @classmethod
    def from_array(cls, field: NDArray[np.float64]) -> "HeightfieldStats":
        if field.size == 0:
            raise ConfigurationError("Cannot summarize an empty height field")
        rows, columns = field.shape
        return cls(
            rows=rows,
            columns=columns,
            minimum=float(field.min()),
            maximum=float(field.max()),
            mean=float(field.mean()),
            std=float(field.std()),
        )
