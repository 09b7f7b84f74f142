"""Per-level generator state.

A ``Fold`` owns the buffers for one resolution level and a two-phase state
machine. Every START/STORE cycle consumes one strip from the next-coarser
level and emits two strips at this level:

- START takes the child strip, finishes the pending ``regen`` strip, derives
  a new ``working`` strip, and returns ``old``.
- STORE returns ``regen``, promotes ``working`` to ``old``, and doubles the
  child strip into the next half-filled ``regen``.

Level 0 has no buffers; it synthesizes two-sample strips from the noise
source on every call.
"""

from enum import Enum, auto

from .exceptions import InvalidStateError, InvariantViolation
from .noise import GaussianSource
from .strip import Strip, allocate, constant, double
from .update import derive, fill_gaps, smooth


class FoldState(Enum):
    """Phase of a fold's update cycle."""

    START = auto()
    STORE = auto()


class Fold:
    """Generator context for one resolution level."""

    def __init__(
        self,
        level: int,
        noise: GaussianSource,
        *,
        scale: float,
        midscale: float,
        mean: float = 0.0,
        start: float = 0.0,
        smoothing: bool = False,
    ):
        self._level = level
        self.noise = noise
        self.scale = scale
        self.midscale = midscale
        self.mean = mean
        self.smoothing = smoothing
        self.state: FoldState = FoldState.START

        self.new: Strip | None = None
        self.working: Strip | None = None
        if level > 0:
            self.regen: Strip | None = constant(level, start)
            self.old: Strip | None = constant(level, start)
        else:
            self.regen = None
            self.old = None

        # Strips handed out so far
        self.emitted = 0
        self._busy = False
        self._broken = False

    @property
    def level(self) -> int:
        return self._level

    @property
    def needs_child(self) -> bool:
        """True when the next ``advance`` must be given a child strip."""
        return self._level > 0 and self.state is FoldState.START

    def strips(self) -> list[Strip]:
        """Populated strip slots, in new/working/regen/old order."""
        return [s for s in (self.new, self.working, self.regen, self.old) if s is not None]

    def advance(self, child: Strip | None = None) -> Strip:
        """Produce this level's next strip.

        Args:
            child: The next strip from level ``level - 1``. Required exactly
                when ``needs_child`` is true.

        Returns:
            A strip of this fold's level. The caller may keep it; the fold
            never writes to a strip after returning it.

        Raises:
            InvalidStateError: On re-entrant calls, a missing or unexpected
                child strip, an unknown state, or after an earlier call
                failed with an invariant violation.
        """
        if self._busy:
            raise InvalidStateError(f"Re-entrant call into level {self._level} fold")
        if self._broken:
            raise InvalidStateError(
                f"Level {self._level} fold is unusable after a failed update"
            )
        self._busy = True
        try:
            if self._level == 0:
                result = self._synthesize(child)
            elif self.state is FoldState.START:
                result = self._start(child)
            elif self.state is FoldState.STORE:
                result = self._store(child)
            else:
                raise InvalidStateError(
                    f"Level {self._level} fold in invalid state {self.state!r}"
                )
        except InvariantViolation:
            self._broken = True
            raise
        finally:
            self._busy = False
        self.emitted += 1
        return result

    def _synthesize(self, child: Strip | None) -> Strip:
        if child is not None:
            raise InvalidStateError("Level 0 fold does not take a child strip")
        strip = allocate(0)
        strip.data[:] = self.mean + self.scale * self.noise.samples(2)
        return strip

    def _start(self, child: Strip | None) -> Strip:
        if child is None:
            raise InvalidStateError(
                f"Level {self._level} fold in START needs a level {self._level - 1} strip"
            )
        fill_gaps(self.regen, self.scale, self.noise)
        self.working = derive(child, self.regen, self.scale, self.midscale, self.noise)
        if self.smoothing:
            # regen is smoothed against working before working becomes old
            smooth(self.working, self.regen, self.old, self.scale, self.noise)
        self.new = child
        self.state = FoldState.STORE
        return self.old

    def _store(self, child: Strip | None) -> Strip:
        if child is not None:
            raise InvalidStateError(
                f"Level {self._level} fold in STORE does not take a child strip"
            )
        result = self.regen
        self.regen = double(self.new)
        self.old = self.working
        self.working = None
        self.new = None
        self.state = FoldState.START
        return result

    def release(self) -> int:
        """Drop every populated strip slot and return how many there were."""
        count = len(self.strips())
        self.new = self.working = self.regen = self.old = None
        return count

    def __repr__(self) -> str:
        state = getattr(self.state, "name", self.state)
        return (
            f"Fold(level={self._level}, state={state}, "
            f"scale={self.scale:.6g}, midscale={self.midscale:.6g})"
        )
