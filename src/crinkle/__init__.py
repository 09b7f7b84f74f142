"""Fractal terrain strips by amortized midpoint displacement.

A chain of per-level folds produces an endless sequence of adjacent height
strips. Each level pulls one strip from the coarser level below for every
two strips it emits.
"""

from .chain import FoldChain, ReleaseStats, build_chain, level_amplitudes
from .config import CrinkleConfig, load_config
from .exceptions import (
    AllocationError,
    ChainReleasedError,
    ConfigurationError,
    CrinkleError,
    InvalidStateError,
    InvariantViolation,
    NoiseExhaustedError,
    SizeMismatchError,
)
from .fold import Fold, FoldState
from .heightfield import HeightfieldStats, heightfield
from .noise import (
    CallableSource,
    ConstantSource,
    GaussianSource,
    RandomSource,
    ScriptedSource,
    as_source,
)
from .strip import Strip, allocate, constant, double, strip_length
from .update import derive, fill_gaps, smooth

__all__ = [
    # Chain
    "FoldChain",
    "ReleaseStats",
    "build_chain",
    "level_amplitudes",
    # Config
    "CrinkleConfig",
    "load_config",
    # Fold
    "Fold",
    "FoldState",
    # Height field
    "HeightfieldStats",
    "heightfield",
    # Noise
    "GaussianSource",
    "RandomSource",
    "ConstantSource",
    "ScriptedSource",
    "CallableSource",
    "as_source",
    # Strips and operators
    "Strip",
    "allocate",
    "constant",
    "double",
    "strip_length",
    "fill_gaps",
    "derive",
    "smooth",
    # Exceptions
    "CrinkleError",
    "ConfigurationError",
    "AllocationError",
    "NoiseExhaustedError",
    "InvariantViolation",
    "SizeMismatchError",
    "InvalidStateError",
    "ChainReleasedError",
]
