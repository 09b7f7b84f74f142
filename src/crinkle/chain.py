"""Level chain construction, iteration and teardown."""

import math
from dataclasses import dataclass
from typing import Iterator

import structlog

from .config import CrinkleConfig, validate_config
from .exceptions import (
    ChainReleasedError,
    ConfigurationError,
    CrinkleError,
    InvalidStateError,
)
from .fold import Fold
from .noise import GaussianSource, NoiseLike, as_source
from .strip import Strip, strip_length

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReleaseStats:
    """What a chain teardown dropped."""

    folds: int
    strips: int


def level_amplitudes(length: float, fractal_dim: float) -> tuple[float, float]:
    """Edge and diagonal-midpoint displacement amplitudes for one level.

    Args:
        length: Side of the update square at this level.
        fractal_dim: Fractal dimension exponent.

    Returns:
        ``(scale, midscale)``; the midpoint sits ``sqrt(2)`` further away.
    """
    exponent = 2.0 * fractal_dim
    scale = math.pow(length, exponent)
    midscale = math.pow(length * math.sqrt(2.0), exponent)
    return scale, midscale


class FoldChain:
    """Folds for levels ``0..levels`` driven as one strip generator.

    ``folds[k]`` is the fold for level ``k``; level ``k`` pulls its child
    strips from ``folds[k - 1]``. The chain is an iterator over top-level
    strips and a context manager that releases on exit.
    """

    def __init__(self, config: CrinkleConfig, noise: NoiseLike = None):
        self.config = config
        if noise is None:
            noise = config.seed
        self.noise: GaussianSource = as_source(noise)
        self._folds: list[Fold] = []
        self._released = False
        self._generating = False
        # (level, strip) still to be fed to the folds above level
        self._pending: tuple[int, Strip] | None = None
        self.produced = 0

        top = config.levels
        # Coarser levels cover twice the distance of the level above
        for level in range(top + 1):
            length, scale, midscale = self._level_parameters(level)
            self._folds.append(
                Fold(
                    level,
                    self.noise,
                    scale=scale,
                    midscale=midscale,
                    mean=config.mean,
                    start=config.start,
                    smoothing=config.smoothing,
                )
            )
            logger.debug(
                "fold_built", level=level, length=length, scale=scale, midscale=midscale
            )

        logger.info(
            "chain_built",
            levels=top,
            width=self.width,
            smoothing=config.smoothing,
            fractal_dim=config.fractal_dim,
        )

    def _level_parameters(self, level: int) -> tuple[float, float, float]:
        """Update-square side and amplitudes for ``level``.

        Raises:
            ConfigurationError: If any of them is not a finite float.
        """
        config = self.config
        try:
            length = config.length * 2.0 ** (config.levels - level)
            scale, midscale = level_amplitudes(length, config.fractal_dim)
        except OverflowError as e:
            raise ConfigurationError(
                f"Amplitudes at level {level} overflow for levels={config.levels}, "
                f"length={config.length}, fractal_dim={config.fractal_dim}"
            ) from e
        if not all(math.isfinite(v) for v in (length, scale, midscale)):
            raise ConfigurationError(
                f"Amplitudes at level {level} are not finite for levels={config.levels}, "
                f"length={config.length}, fractal_dim={config.fractal_dim}"
            )
        return length, scale, midscale

    @classmethod
    def from_config(cls, config: CrinkleConfig, noise: NoiseLike = None) -> "FoldChain":
        return cls(config, noise)

    @property
    def levels(self) -> int:
        return self.config.levels

    @property
    def width(self) -> int:
        """Samples per top-level strip."""
        return strip_length(self.config.levels)

    @property
    def released(self) -> bool:
        return self._released

    @property
    def folds(self) -> tuple[Fold, ...]:
        self._check_open()
        return tuple(self._folds)

    def fold(self, level: int) -> Fold:
        self._check_open()
        return self._folds[level]

    def _check_open(self) -> None:
        if self._released:
            raise ChainReleasedError("Chain has been released")

    def next(self) -> Strip:
        """Return the next top-level strip.

        Walks down from the top while folds still need a child strip, lets
        the fold it stops at (level 0, or one in STORE) produce a strip on
        its own, then feeds that strip back up through the folds above.

        If a fold above raises a ``CrinkleError`` (for example exhausted
        noise), the strip it was being fed is kept and the next call hands
        it to that fold again instead of pulling a fresh one from below.

        Raises:
            CrinkleError: Recoverable failure; calling again retries.
            InvariantViolation: The fold that raised it is unusable.
            ChainReleasedError: If the chain has been released.
        """
        self._check_open()
        if self._generating:
            raise InvalidStateError("Re-entrant call into chain generation")
        self._generating = True
        try:
            if self._pending is not None:
                level, strip = self._pending
                self._pending = None
            else:
                level = self.config.levels
                while self._folds[level].needs_child:
                    level -= 1
                strip = self._folds[level].advance()
            for upper in range(level + 1, self.config.levels + 1):
                try:
                    strip = self._folds[upper].advance(strip)
                except CrinkleError:
                    self._pending = (upper - 1, strip)
                    raise
        finally:
            self._generating = False
        self.produced += 1
        return strip

    def take(self, count: int) -> list[Strip]:
        """Return the next ``count`` top-level strips."""
        return [self.next() for _ in range(count)]

    def release(self) -> ReleaseStats:
        """Drop every fold and strip buffer, top level first.

        The chain cannot be used afterwards.
        """
        self._check_open()
        folds = 0
        strips = 0
        for fold in reversed(self._folds):
            strips += fold.release()
            folds += 1
        self._folds.clear()
        self._pending = None
        self._released = True
        logger.info("chain_released", folds=folds, strips=strips, produced=self.produced)
        return ReleaseStats(folds=folds, strips=strips)

    def __iter__(self) -> Iterator[Strip]:
        return self

    def __next__(self) -> Strip:
        return self.next()

    def __enter__(self) -> "FoldChain":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._released:
            self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else f"produced={self.produced}"
        return f"FoldChain(levels={self.config.levels}, {state})"


def build_chain(
    levels: int,
    smoothing: bool,
    length: float,
    start_value: float,
    mean: float,
    fractal_dim: float,
    noise: NoiseLike = None,
) -> FoldChain:
    """Build a fold chain for strips of ``2**levels + 1`` samples.

    Args:
        levels: Top resolution level, >= 0.
        smoothing: Enable crease smoothing.
        length: Side of the update square at the top level, > 0.
        start_value: Height every seeded strip starts at.
        mean: Mean height of the level 0 samples.
        fractal_dim: Fractal dimension exponent.
        noise: Sample source; see ``as_source``.

    Raises:
        ConfigurationError: If ``levels < 0``, ``length <= 0``, or the
            per-level amplitudes overflow a float.
        AllocationError: If the seed strips cannot be allocated.
    """
    config = validate_config(
        levels=levels,
        smoothing=smoothing,
        length=length,
        start=start_value,
        mean=mean,
        fractal_dim=fractal_dim,
    )
    return FoldChain(config, noise)
