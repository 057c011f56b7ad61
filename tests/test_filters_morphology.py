# -*- coding: utf-8 -*-
"""
Binary Morphology Tests.

Tests for erosion, dilation, opening and closing through ``filter_mask``:
the Schalkoff 21x18 reference images, duality, idempotence, the identity
element, single-cell elements as translations, border modes, in-place
use, and agreement of the full-element and sparse-element paths.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import numpy as np
import pytest

from wrfl.image_processing.filters import FilterConfig, filter_mask
from wrfl.image_processing.filters import morphology
from wrfl.kernel import StructuringElement
from wrfl.raster import Mask
from wrfl.vocabulary import BorderMode, FilterMode, FilterStatus


def _bits(rows):
    return np.array([[c == '1' for c in row] for row in rows], dtype=bool)


def _run(source, element, mode, border=BorderMode.ZERO, config=None):
    src = Mask.from_array(source)
    dst = Mask(src.width, src.height)
    status = filter_mask(dst, src, element, mode, border, config)
    assert status is FilterStatus.SUCCESS
    return dst.data


def _interior(array, h):
    return array[h:array.shape[0] - h, h:array.shape[1] - h]


# R. Schalkoff, "Digital Image Processing and Computer Vision", 6.36-6.39
SCHALKOFF_A = _bits([
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000011111111111110000',
    '000011111111111110000',
    '000000000001111110000',
    '000000000001111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000000111110000000',
    '000000000111110000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
])

SCHALKOFF_DILATION = _bits([
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000111111111111111000',
    '000111111111111111000',
    '000111111111111111000',
    '000111111111111111000',
    '000001111111111111000',
    '000001111111111111000',
    '000001111111111111000',
    '000001111111111111000',
    '000001111111111111000',
    '000000001111111000000',
    '000000001111111000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
])

SCHALKOFF_EROSION = _bits([
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000111100000',
    '000000000000111100000',
    '000000000000111100000',
    '000000000000111100000',
    '000000011111111100000',
    '000000000011100000000',
    '000000000011100000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
])

SCHALKOFF_OPENING = _bits([
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000001111110000',
    '000000000001111110000',
    '000000000001111110000',
    '000000000001111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000000111110000000',
    '000000000111110000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
])

SCHALKOFF_CLOSING = _bits([
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000011111111111110000',
    '000011111111111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000111111111110000',
    '000000000111110000000',
    '000000000111110000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
    '000000000000000000000',
])


def _embedded_3x3():
    """3x3 full block inside a 5x5 window, which takes the sparse path."""
    data = np.zeros((5, 5), dtype=bool)
    data[1:4, 1:4] = True
    return StructuringElement(data)


# ---------------------------------------------------------------------------
# Schalkoff reference scenario
# ---------------------------------------------------------------------------

class TestSchalkoff:
    """21x18 raster with a 3x3 element, every morphology border mode."""

    @pytest.mark.parametrize("border", [
        BorderMode.NOOP, BorderMode.ZERO, BorderMode.COPY,
    ])
    @pytest.mark.parametrize("element", [
        StructuringElement.full(3), _embedded_3x3(),
    ], ids=['full', 'embedded'])
    @pytest.mark.parametrize("flip", [None, 0, 1])
    @pytest.mark.parametrize("mode,expected", [
        (FilterMode.EROSION, SCHALKOFF_EROSION),
        (FilterMode.DILATION, SCHALKOFF_DILATION),
        (FilterMode.OPENING, SCHALKOFF_OPENING),
        (FilterMode.CLOSING, SCHALKOFF_CLOSING),
    ])
    def test_reference(self, border, element, flip, mode, expected):
        """Results match the textbook images, also on flipped input."""
        source = SCHALKOFF_A if flip is None else np.flip(SCHALKOFF_A, flip)
        result = _run(source, element, mode, border)
        if flip is not None:
            result = np.flip(result, flip)
        np.testing.assert_array_equal(result, expected)

    def test_erosion_shrinks_by_one_layer(self):
        """Every eroded cell has all 8 neighbours set in the input."""
        result = _run(SCHALKOFF_A, StructuringElement.full(3),
                      FilterMode.EROSION)
        for y, x in zip(*np.nonzero(result)):
            assert SCHALKOFF_A[y - 1:y + 2, x - 1:x + 2].all()

    def test_opening_removes_thin_protrusion(self):
        """The two-row arm on the left of the top block disappears."""
        result = _run(SCHALKOFF_A, StructuringElement.full(3),
                      FilterMode.OPENING)
        assert SCHALKOFF_A[5, 4:11].all()
        assert not result[5, 4:11].any()


# ---------------------------------------------------------------------------
# Algebraic properties
# ---------------------------------------------------------------------------

class TestDuality:
    """erosion(not S) == not dilation(S) off the border."""

    @pytest.mark.parametrize("element", [
        StructuringElement.full(3),
        StructuringElement.cross(2),
        StructuringElement.disk(3),
        StructuringElement.full(5, 3),
    ])
    def test_erosion_dilation(self, random_mask, element):
        h = max(element.hx, element.hy)
        eroded = _run(~random_mask, element, FilterMode.EROSION)
        dilated = _run(random_mask, element, FilterMode.DILATION)
        np.testing.assert_array_equal(_interior(eroded, h),
                                      _interior(~dilated, h))

    @pytest.mark.parametrize("element", [
        StructuringElement.full(3), StructuringElement.cross(1),
    ])
    def test_dilation_erosion(self, random_mask, element):
        h = max(element.hx, element.hy)
        dilated = _run(~random_mask, element, FilterMode.DILATION)
        eroded = _run(random_mask, element, FilterMode.EROSION)
        np.testing.assert_array_equal(_interior(dilated, h),
                                      _interior(~eroded, h))


class TestIdempotence:
    """Opening and closing applied twice equal a single application."""

    @pytest.mark.parametrize("mode", [FilterMode.OPENING, FilterMode.CLOSING])
    @pytest.mark.parametrize("element", [
        StructuringElement.full(3),
        StructuringElement.cross(1),
        StructuringElement(np.array([[1, 1, 0],
                                     [0, 1, 0],
                                     [0, 1, 1]])),
        StructuringElement(np.array([[1, 0, 0, 0, 1]])),
    ], ids=['full', 'cross', 'asymmetric', 'sparse-row'])
    def test_twice_equals_once(self, random_mask, mode, element):
        h = max(element.hx, element.hy)
        once = _run(random_mask, element, mode)
        twice = _run(once, element, mode)
        np.testing.assert_array_equal(_interior(twice, h),
                                      _interior(once, h))


class TestIdentityElement:
    """A 1x1 set element reproduces the source for every operation."""

    @pytest.mark.parametrize("mode", [
        FilterMode.EROSION, FilterMode.DILATION,
        FilterMode.OPENING, FilterMode.CLOSING,
    ])
    @pytest.mark.parametrize("border", [
        BorderMode.NOOP, BorderMode.ZERO, BorderMode.COPY,
    ])
    def test_identity(self, random_mask, mode, border):
        result = _run(random_mask, StructuringElement.full(1), mode, border)
        np.testing.assert_array_equal(result, random_mask)


class TestSingleCellShift:
    """A single active cell at (dx, dy) translates by (-dx, -dy)."""

    @pytest.mark.parametrize("mode", [FilterMode.EROSION, FilterMode.DILATION])
    @pytest.mark.parametrize("dx,dy", [(2, -1), (-2, 1), (0, 1), (1, 0)])
    def test_equals_shift(self, rng, mode, dx, dy):
        source = rng.random((17, 20)) < 0.5
        element = StructuringElement.single(5, 3, dx, dy)
        result = _run(source, element, mode, BorderMode.ZERO)

        expected = Mask.from_array(source).shift(-dx, -dy).data
        expected[:1, :] = False
        expected[-1:, :] = False
        expected[:, :2] = False
        expected[:, -2:] = False
        np.testing.assert_array_equal(result, expected)


# ---------------------------------------------------------------------------
# Border modes and in-place use
# ---------------------------------------------------------------------------

class TestBorders:
    """Test NOOP, ZERO and COPY border handling."""

    def test_noop_leaves_destination_border(self):
        src = Mask.from_array(SCHALKOFF_A)
        dst = Mask.from_array(np.ones(SCHALKOFF_A.shape))
        filter_mask(dst, src, StructuringElement.full(5),
                    FilterMode.EROSION, BorderMode.NOOP)
        expected = _run(SCHALKOFF_A, StructuringElement.full(5),
                        FilterMode.EROSION)
        assert dst.data[:2, :].all() and dst.data[:, -2:].all()
        np.testing.assert_array_equal(_interior(dst.data, 2),
                                      _interior(expected, 2))

    def test_copy_border_from_source(self, random_mask):
        src = Mask.from_array(~random_mask)
        dst = Mask(src.width, src.height)
        filter_mask(dst, src, StructuringElement.full(3),
                    FilterMode.DILATION, BorderMode.COPY)
        np.testing.assert_array_equal(dst.data[0], src.data[0])
        np.testing.assert_array_equal(dst.data[:, -1], src.data[:, -1])

    def test_zero_border(self):
        src = Mask.from_array(np.ones((6, 7)))
        dst = Mask(7, 6)
        filter_mask(dst, src, StructuringElement.full(3),
                    FilterMode.DILATION, BorderMode.ZERO)
        assert not dst.data[0].any() and not dst.data[:, 0].any()
        assert dst.data[1:-1, 1:-1].all()


class TestInPlace:
    """Destination may be the source."""

    @pytest.mark.parametrize("mode,expected", [
        (FilterMode.EROSION, SCHALKOFF_EROSION),
        (FilterMode.OPENING, SCHALKOFF_OPENING),
        (FilterMode.CLOSING, SCHALKOFF_CLOSING),
    ])
    @pytest.mark.parametrize("border", [BorderMode.NOOP, BorderMode.ZERO])
    def test_in_place(self, mode, expected, border):
        m = Mask.from_array(SCHALKOFF_A)
        filter_mask(m, m, StructuringElement.full(3), mode, border)
        np.testing.assert_array_equal(m.data, expected)

    def test_wrapped_buffer_is_written(self):
        buf = SCHALKOFF_A.copy()
        m = Mask.wrap(buf)
        filter_mask(m, m, StructuringElement.full(3), FilterMode.DILATION,
                    BorderMode.ZERO)
        np.testing.assert_array_equal(buf, SCHALKOFF_DILATION)


# ---------------------------------------------------------------------------
# Algorithm paths
# ---------------------------------------------------------------------------

class TestPaths:
    """Full-element counts and sparse slices agree exactly."""

    @pytest.mark.parametrize("erosion", [True, False])
    @pytest.mark.parametrize("shape", [(3, 3), (3, 5), (7, 1)])
    def test_full_matches_sparse(self, random_mask, erosion, shape):
        element = StructuringElement(np.ones(shape, dtype=bool))
        operator = morphology.erode if erosion else morphology.dilate
        full = operator(random_mask, element)
        sparse = morphology._combine_slices(random_mask, element.data,
                                            erosion, None)
        np.testing.assert_array_equal(full, sparse)

    @pytest.mark.parametrize("mode", [FilterMode.OPENING, FilterMode.CLOSING])
    def test_block_size_independent(self, random_mask, mode):
        element = StructuringElement.disk(2)
        reference = _run(random_mask, element, mode)
        blocked = _run(random_mask, element, mode,
                       config=FilterConfig(block_rows=1))
        np.testing.assert_array_equal(blocked, reference)
