# -*- coding: utf-8 -*-
"""
Binary Morphology - Erosion, dilation, opening and closing of masks.

Erosion sets a cell when every source cell under an active element cell is
set; dilation sets it when at least one is. Both are correlations: the
element is not reflected, so an element whose only active cell sits at
offset ``(dx, dy)`` reads the source at ``(x + dx, y + dy)`` and therefore
translates the raster by ``(-dx, -dy)``.

Opening is erosion followed by dilation and closing is dilation followed by
erosion. The second stage uses the element rotated by 180 degrees, which
is the element itself whenever it is symmetric and keeps both compositions
idempotent for asymmetric elements. The first stage writes into a scratch
mask of the source shape and the second stage reads from it, so the
destination may be the source.

Full (all-set) elements are evaluated from window counts of set cells;
other elements combine one shifted slice of the source per active cell.
Both paths give identical results.

Dependencies
------------
numpy

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

# Standard library
import logging
from typing import Optional

# Third-party
import numpy as np

# WRFL internal
from wrfl.image_processing.filters._windows import (
    block_rows_for,
    interior_shape,
    row_blocks,
    window_sums,
)
from wrfl.image_processing.filters.border import write_result
from wrfl.kernel import StructuringElement
from wrfl.vocabulary import BorderMode, FilterMode

logger = logging.getLogger(__name__)


def _combine_slices(source: np.ndarray, element: np.ndarray, erosion: bool,
                    block_rows: Optional[int]) -> np.ndarray:
    nyo, nxo = interior_shape(source.shape, element.shape)
    out = np.full((nyo, nxo), erosion, dtype=bool)
    rows, cols = np.nonzero(element)
    step = block_rows_for(nxo, 1, block_rows)
    for start, stop in row_blocks(nyo, step):
        block = out[start:stop]
        for j, i in zip(rows, cols):
            window = source[start + j:stop + j, i:i + nxo]
            if erosion:
                block &= window
            else:
                block |= window
    return out


def _count_cells(source: np.ndarray, element: np.ndarray,
                 erosion: bool) -> np.ndarray:
    counts = window_sums(source, element.shape, dtype=np.int64)
    if erosion:
        return counts == element.size
    return counts > 0


def erode(source: np.ndarray, element: StructuringElement,
          block_rows: Optional[int] = None) -> np.ndarray:
    """Interior erosion of a boolean array.

    Parameters
    ----------
    source : np.ndarray
        2D bool array, shape ``(ny, nx)``.
    element : StructuringElement
        Non-empty element no larger than *source*.
    block_rows : int, optional
        Output rows per block for sparse elements.

    Returns
    -------
    np.ndarray
        Bool array of shape ``(ny - 2hy, nx - 2hx)``.
    """
    if element.is_full:
        return _count_cells(source, element.data, True)
    return _combine_slices(source, element.data, True, block_rows)


def dilate(source: np.ndarray, element: StructuringElement,
           block_rows: Optional[int] = None) -> np.ndarray:
    """Interior dilation of a boolean array. See ``erode``."""
    if element.is_full:
        return _count_cells(source, element.data, False)
    return _combine_slices(source, element.data, False, block_rows)


_STAGES = {
    FilterMode.EROSION: (erode,),
    FilterMode.DILATION: (dilate,),
    FilterMode.OPENING: (erode, dilate),
    FilterMode.CLOSING: (dilate, erode),
}


def _stage(destination: np.ndarray, source: np.ndarray, operator,
           element: StructuringElement, border: BorderMode,
           block_rows: Optional[int]) -> None:
    interior = operator(source, element, block_rows)
    write_result(destination, source, interior, element.hx, element.hy,
                 border, False)


def apply_morphology(destination: np.ndarray, source: np.ndarray,
                     element: StructuringElement, mode: FilterMode,
                     border: BorderMode,
                     block_rows: Optional[int] = None) -> None:
    """Run a morphological *mode* from *source* into *destination*.

    Arguments are assumed validated: same-shape bool arrays, a non-empty
    element no larger than the source, and a ``NOOP``, ``ZERO`` or
    ``COPY`` border. *destination* may be *source*.
    """
    stages = _STAGES[mode]
    path = 'full' if element.is_full else 'masked'
    logger.debug("%s with %dx%d element, %s border, %s path",
                 mode.value, element.width, element.height,
                 border.value, path)
    if len(stages) == 1:
        _stage(destination, source, stages[0], element, border, block_rows)
        return

    # The scratch border must hold defined values for stage two.
    first_border = BorderMode.COPY if border is BorderMode.NOOP else border
    scratch = np.empty_like(source)
    _stage(scratch, source, stages[0], element, first_border, block_rows)
    _stage(destination, scratch, stages[1], element.rotated(), border,
           block_rows)
