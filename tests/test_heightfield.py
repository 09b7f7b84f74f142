"""Tests for height field stitching."""

import numpy as np
import pytest

from crinkle.chain import build_chain
from crinkle.exceptions import ConfigurationError
from crinkle.heightfield import HeightfieldStats, heightfield
from crinkle.noise import ConstantSource, RandomSource


class TestHeightfield:
    """Tests for heightfield()."""

    def test_shape(self) -> None:
        """Rows are strips, columns are samples."""
        chain = build_chain(4, True, 1.0, 0.0, 0.0, 0.65, noise=RandomSource(2))
        field = heightfield(chain, 10)
        assert field.shape == (10, 17)
        assert chain.produced == 10

    def test_rows_match_strip_sequence(self) -> None:
        """Row j equals the j-th strip of an identical chain."""
        a = build_chain(3, True, 1.0, 0.0, 0.0, 0.5, noise=RandomSource(8))
        b = build_chain(3, True, 1.0, 0.0, 0.0, 0.5, noise=RandomSource(8))
        field = heightfield(a, 6)
        for row, strip in zip(field, b.take(6)):
            np.testing.assert_array_equal(row, strip.data)

    def test_zero_rows(self) -> None:
        """Asking for nothing returns an empty field."""
        chain = build_chain(2, False, 1.0, 0.0, 0.0, 0.5, noise=ConstantSource(0.0))
        assert heightfield(chain, 0).shape == (0, 5)

    def test_negative_count_rejected(self) -> None:
        """Negative row counts are rejected."""
        chain = build_chain(2, False, 1.0, 0.0, 0.0, 0.5, noise=ConstantSource(0.0))
        with pytest.raises(ConfigurationError):
            heightfield(chain, -1)


class TestHeightfieldStats:
    """Tests for summary statistics."""

    def test_from_array(self) -> None:
        """Statistics match numpy."""
        field = np.array([[0.0, 1.0], [2.0, 3.0]])
        stats = HeightfieldStats.from_array(field)
        assert (stats.rows, stats.columns) == (2, 2)
        assert stats.minimum == 0.0
        assert stats.maximum == 3.0
        assert stats.mean == 1.5
        assert stats.std == pytest.approx(np.std(field))

    def test_empty_rejected(self) -> None:
        """Empty fields have no statistics."""
        with pytest.raises(ConfigurationError):
            HeightfieldStats.from_array(np.empty((0, 3)))
