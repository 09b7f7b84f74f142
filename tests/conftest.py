"""Shared test fixtures for crinkle tests."""

import numpy as np
import pytest

from crinkle.noise import ConstantSource, ScriptedSource
from crinkle.strip import Strip


@pytest.fixture
def zero_noise() -> ConstantSource:
    """Noise that always returns 0, reducing every operator to plain averages."""
    return ConstantSource(0.0)


@pytest.fixture
def counting_noise() -> ScriptedSource:
    """Noise returning 1, 2, 3, ... so each draw is identifiable."""
    return ScriptedSource(np.arange(1.0, 10001.0))


@pytest.fixture
def make_strip():
    """Factory building a strip from explicit values."""

    def _make(level: int, values) -> Strip:
        return Strip(level, np.asarray(values, dtype=np.float64))

    return _make
