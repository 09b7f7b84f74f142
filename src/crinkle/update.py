"""Midpoint-displacement operators.

Each operator writes new heights as the average of existing neighbours plus
a scaled Gaussian offset. Offsets are drawn from the supplied source in
ascending index order, one per written sample, so scripted sources map
draw ``k`` to a known sample.
"""

import numpy as np

from .exceptions import SizeMismatchError
from .noise import GaussianSource
from .strip import Strip, allocate


def fill_gaps(strip: Strip, scale: float, noise: GaussianSource) -> None:
    """Fill the odd (gap) samples of a freshly doubled strip in place.

    Each gap becomes the mean of its two even neighbours plus
    ``scale * noise()``.
    """
    if strip.level < 1:
        raise SizeMismatchError("A level 0 strip has no gaps to fill")
    d = strip.data
    offsets = scale * noise.samples(1 << (strip.level - 1))
    d[1::2] = offsets + (d[0:-1:2] + d[2::2]) / 2.0


def derive(
    left: Strip,
    right: Strip,
    scale: float,
    midscale: float,
    noise: GaussianSource,
) -> Strip:
    """Compute a new strip between a coarse ``left`` and a full ``right``.

    ``left`` is one level coarser than ``right``; the result has the level of
    ``right``. Even samples (edges) average ``left[i]`` with ``right[2i]``;
    odd samples (centres) average the four diagonal corners
    ``left[i], left[i+1], right[2i], right[2i+2]`` and use ``midscale``.

    Raises:
        SizeMismatchError: If ``left.level + 1 != right.level``.
    """
    if left.level + 1 != right.level:
        raise SizeMismatchError(
            f"derive needs left one level below right, got {left.level} and {right.level}"
        )
    count = 1 << left.level
    # edge, centre, edge, centre, ..., closing edge
    z = noise.samples(2 * count + 1)

    ld = left.data
    rd = right.data
    out = allocate(right.level)
    out.data[0::2] = scale * z[0::2] + (ld + rd[0::2]) / 2.0
    out.data[1::2] = midscale * z[1::2] + (ld[:-1] + ld[1:] + rd[0:-1:2] + rd[2::2]) / 4.0
    return out


def smooth(
    left: Strip,
    target: Strip,
    right: Strip,
    scale: float,
    noise: GaussianSource,
) -> None:
    """Re-average the crease samples of ``target`` in place.

    The even samples of ``target`` were copied up from the coarser level
    and show up as seams. Each is replaced by the mean of its odd
    neighbours in ``target`` and the matching samples of ``left`` and
    ``right``, plus ``scale * noise()``. The first and last samples have a
    single odd neighbour and average three values; the rest average four.

    Raises:
        SizeMismatchError: If the three strips differ in level or are level 0.
    """
    if not (left.level == target.level == right.level):
        raise SizeMismatchError(
            f"smooth needs equal levels, got {left.level}, {target.level}, {right.level}"
        )
    if target.level < 1:
        raise SizeMismatchError("A level 0 strip has no creases to smooth")

    ld = left.data
    td = target.data
    rd = right.data
    offsets = scale * noise.samples((1 << (target.level - 1)) + 1)

    means = np.empty_like(offsets)
    means[0] = (ld[0] + td[1] + rd[0]) / 3.0
    means[1:-1] = (ld[2:-1:2] + td[3::2] + td[1:-2:2] + rd[2:-1:2]) / 4.0
    means[-1] = (ld[-1] + td[-2] + rd[-1]) / 3.0
    td[0::2] = offsets + means
