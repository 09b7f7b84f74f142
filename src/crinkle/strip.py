"""Height strips and the operators that create them."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .exceptions import AllocationError, ConfigurationError, SizeMismatchError


def strip_length(level: int) -> int:
    """Number of samples in a strip at ``level``."""
    return (1 << level) + 1


@dataclass(eq=False)
class Strip:
    """One cross-section of the terrain at a resolution level.

    A level-``L`` strip holds ``2**L + 1`` float64 heights.
    """

    level: int
    data: NDArray[np.float64]

    def __post_init__(self) -> None:
        if self.data.ndim != 1 or self.data.shape[0] != strip_length(self.level):
            raise SizeMismatchError(
                f"Level {self.level} strip needs {strip_length(self.level)} samples, "
                f"got shape {self.data.shape}"
            )

    def __len__(self) -> int:
        return self.data.shape[0]

    def __getitem__(self, index):
        return self.data[index]

    def __iter__(self):
        return iter(self.data)

    def tolist(self) -> list[float]:
        return self.data.tolist()

    def copy(self) -> "Strip":
        return Strip(self.level, self.data.copy())


def _check_level(level: int) -> None:
    if level < 0:
        raise ConfigurationError(f"Strip level must be >= 0, got {level}")


def allocate(level: int) -> Strip:
    """Allocate an uninitialised strip.

    Raises:
        ConfigurationError: If ``level`` is negative.
        AllocationError: If the buffer cannot be obtained.
    """
    _check_level(level)
    try:
        data = np.empty(strip_length(level), dtype=np.float64)
    except (MemoryError, ValueError, OverflowError) as exc:
        raise AllocationError(f"Cannot allocate level {level} strip") from exc
    return Strip(level, data)


def constant(level: int, value: float) -> Strip:
    """Allocate a strip with every sample set to ``value``."""
    strip = allocate(level)
    strip.data.fill(value)
    return strip


def double(strip: Strip) -> Strip:
    """Spread ``strip`` over the next finer level.

    Original samples land on even indices; odd indices are gaps set to zero
    until ``fill_gaps`` replaces them.
    """
    out = allocate(strip.level + 1)
    out.data[0::2] = strip.data
    out.data[1::2] = 0.0
    return out
