# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the WRFL framework.

Defines the single source of truth for the controlled vocabularies used
across wrfl: pixel types, border modes, filter modes and their families,
the median border strategy, filter status codes, and processor categories.
String values are stable and are what the processor classes accept as
tunable parameters.

Author
------
Steven Siebert

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

from enum import Enum

import numpy as np


class PixelType(Enum):
    """Scalar pixel types supported by ``Image`` rasters."""

    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype backing this pixel type."""
        return np.dtype(_PIXEL_DTYPES[self])

    @classmethod
    def from_dtype(cls, dtype) -> 'PixelType':
        """Look up the pixel type for a numpy dtype.

        Raises
        ------
        KeyError
            If *dtype* is not one of int32, float32 or float64.
        """
        dtype = np.dtype(dtype)
        for member, name in _PIXEL_DTYPES.items():
            if np.dtype(name) == dtype:
                return member
        raise KeyError(dtype.name)


_PIXEL_DTYPES = {
    PixelType.INT: 'int32',
    PixelType.FLOAT: 'float32',
    PixelType.DOUBLE: 'float64',
}


class BorderMode(Enum):
    """How cells closer than the kernel half-size to an edge are produced.

    ``NOOP`` leaves the destination border untouched, ``ZERO`` clears it,
    ``COPY`` copies it from the source, ``CROP`` produces a destination
    shrunk by the half-sizes, and ``FULL`` recomputes every cell from a
    synthetically extended source.
    """

    NOOP = "nop"
    ZERO = "zero"
    COPY = "copy"
    CROP = "crop"
    FULL = "full"


class FilterFamily(Enum):
    """Operation families sharing border rules and raster kind."""

    MORPHOLOGY = "morphology"
    STATISTICAL = "statistical"


class FilterMode(Enum):
    """Filter operations understood by the dispatch layer."""

    EROSION = "erosion"
    DILATION = "dilation"
    OPENING = "opening"
    CLOSING = "closing"
    MEDIAN = "median"
    MEAN = "mean"
    MEAN_FAST = "mean_fast"
    STDEV = "stdev"
    STDEV_FAST = "stdev_fast"
    LINEAR = "linear"
    LINEAR_SCALED = "linear_scaled"
    MORPHO = "morpho"
    MORPHO_SCALED = "morpho_scaled"

    @property
    def family(self) -> FilterFamily:
        """Family this mode belongs to."""
        if self in _MORPHOLOGY_MODES:
            return FilterFamily.MORPHOLOGY
        return FilterFamily.STATISTICAL


_MORPHOLOGY_MODES = frozenset((
    FilterMode.EROSION,
    FilterMode.DILATION,
    FilterMode.OPENING,
    FilterMode.CLOSING,
))


class MedianBorderStrategy(Enum):
    """Synthetic cell construction for median filtering with ``FULL`` border.

    ``EXACT`` excludes the synthetic cells, so border medians are taken
    over the in-bounds part of the window. ``SAMPLE`` fills them with a
    chessboard of +inf and -inf so the full-window median path can run
    over the whole extended raster.
    """

    EXACT = "exact"
    SAMPLE = "sample"


class FilterStatus(Enum):
    """Status codes of the filter entry points."""

    SUCCESS = "success"
    NULL_INPUT = "null_input"
    INVALID_KERNEL_SHAPE = "invalid_kernel_shape"
    EMPTY_KERNEL = "empty_kernel"
    UNSUPPORTED_MODE = "unsupported_mode"
    DIMENSION_MISMATCH = "dimension_mismatch"
    INSUFFICIENT_SAMPLES = "insufficient_samples"
    PIXEL_TYPE_MISMATCH = "pixel_type_mismatch"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    FILTERS = "filters"
    BINARY = "binary"
