"""Gaussian sample sources for midpoint displacement.

Every random value that enters a chain comes from a ``GaussianSource``.
The operators draw values in ascending sample order, so a source that
returns a fixed script gives fully deterministic strips.
"""

from typing import Callable, Iterable, Union

import numpy as np
from numpy.typing import NDArray

from .exceptions import ConfigurationError, NoiseExhaustedError


class GaussianSource:
    """Supplier of independent standard-normal draws.

    Subclasses implement ``sample``. ``samples`` must return exactly the
    values that ``n`` successive ``sample`` calls would have returned; the
    default does just that, one call at a time.
    """

    def sample(self) -> float:
        raise NotImplementedError

    def samples(self, n: int) -> NDArray[np.float64]:
        return np.fromiter((self.sample() for _ in range(n)), dtype=np.float64, count=n)

    def __call__(self) -> float:
        return self.sample()


class RandomSource(GaussianSource):
    """Standard-normal draws from a numpy ``Generator``."""

    def __init__(self, rng: np.random.Generator | int | None = None):
        if isinstance(rng, np.random.Generator):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)

    def sample(self) -> float:
        return float(self.rng.standard_normal())

    def samples(self, n: int) -> NDArray[np.float64]:
        return self.rng.standard_normal(n)


class ConstantSource(GaussianSource):
    """Returns the same value on every draw.

    ``ConstantSource(0.0)`` reduces every operator to a plain average.
    """

    def __init__(self, value: float = 0.0):
        self.value = float(value)

    def sample(self) -> float:
        return self.value

    def samples(self, n: int) -> NDArray[np.float64]:
        return np.full(n, self.value, dtype=np.float64)


class ScriptedSource(GaussianSource):
    """Replays a fixed sequence of values.

    Args:
        values: Values to return, in order.
        cycle: Restart from the beginning when the script runs out instead
            of raising ``NoiseExhaustedError``.
    """

    def __init__(self, values: Iterable[float], cycle: bool = False):
        self.values = np.asarray(list(values), dtype=np.float64)
        if cycle and self.values.size == 0:
            raise ConfigurationError("A cycling script needs at least one value")
        self.cycle = cycle
        self.position = 0

    @property
    def consumed(self) -> int:
        """Total number of values drawn so far."""
        return self.position

    def sample(self) -> float:
        return float(self.samples(1)[0])

    def samples(self, n: int) -> NDArray[np.float64]:
        size = self.values.size
        if self.cycle:
            indices = (self.position + np.arange(n)) % size
            self.position += n
            return self.values[indices]
        if self.position + n > size:
            raise NoiseExhaustedError(
                f"Scripted noise exhausted: {n} requested, "
                f"{size - self.position} of {size} left"
            )
        out = self.values[self.position : self.position + n].copy()
        self.position += n
        return out


class CallableSource(GaussianSource):
    """Adapts a plain ``noise() -> float`` function."""

    def __init__(self, fn: Callable[[], float]):
        self.fn = fn

    def sample(self) -> float:
        return float(self.fn())


NoiseLike = Union[GaussianSource, np.random.Generator, int, Callable[[], float], None]


def as_source(noise: NoiseLike) -> GaussianSource:
    """Coerce any accepted noise input to a ``GaussianSource``.

    Args:
        noise: An existing source, a numpy ``Generator``, an integer seed,
            ``None`` for fresh OS entropy, or any zero-argument callable
            returning a float.

    Returns:
        A ``GaussianSource``.

    Raises:
        ConfigurationError: If ``noise`` is none of the above.
    """
    if isinstance(noise, GaussianSource):
        return noise
    if noise is None or isinstance(noise, np.random.Generator):
        return RandomSource(noise)
    if isinstance(noise, bool):
        raise ConfigurationError("A boolean is not a noise source")
    if isinstance(noise, (int, np.integer)):
        return RandomSource(int(noise))
    if callable(noise):
        return CallableSource(noise)
    raise ConfigurationError(f"Cannot use {type(noise).__name__} as a noise source")
