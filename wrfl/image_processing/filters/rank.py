# -*- coding: utf-8 -*-
"""
Rank Filters - Local median and rank-weighted (morpho) filters.

- ``median``: median of the valid samples under the active window cells.
  With an even sample count the result is the mean of the two central
  order statistics, a rule shared by every median path.
- ``median_fast``: full windows without invalid cells, backed by
  ``scipy.ndimage.median_filter`` (C-optimized). The count is odd, so the
  result is one of the samples and matches ``median`` exactly.
- ``morpho``: the valid samples of the whole window are sorted ascending
  and the ``k``-th smallest is weighted by the ``k``-th weight of the
  window in row-major order. The scaled variant divides by the sum of the
  absolute weights that were used.

Dependencies
------------
scipy

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
from typing import Optional, Tuple

# Third-party
import numpy as np
from scipy.ndimage import median_filter

# WRFL internal
from wrfl.image_processing.filters._windows import (
    block_rows_for,
    gather,
    interior_shape,
    row_blocks,
)


def _sorted_samples(values: np.ndarray, valid: Optional[np.ndarray],
                    support: np.ndarray, start: int,
                    stop: int) -> Tuple[np.ndarray, np.ndarray]:
    """Ascending samples (invalid ones as trailing NaN) and valid counts."""
    samples = gather(values, support, start, stop)
    if valid is None:
        count = np.full(samples.shape[:2], samples.shape[-1], dtype=np.int64)
    else:
        ok = gather(valid, support, start, stop)
        samples = np.where(ok, samples, np.nan)
        count = ok.sum(axis=-1)
    samples.sort(axis=-1)
    return samples, count


def _central(ordered: np.ndarray, count: np.ndarray) -> np.ndarray:
    lo = np.maximum((count - 1) // 2, 0)[..., None]
    hi = (count // 2)[..., None]
    low = np.take_along_axis(ordered, lo, axis=-1)[..., 0]
    high = np.take_along_axis(ordered, hi, axis=-1)[..., 0]
    return (low + high) / 2


def median(values: np.ndarray, valid: Optional[np.ndarray],
           support: np.ndarray,
           block_rows: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Median of the valid samples under the active cells.

    Parameters
    ----------
    values : np.ndarray
        2D float64 source.
    valid : np.ndarray or None
        2D bool validity of *values*, ``None`` when every cell is valid.
    support : np.ndarray
        2D bool window.
    block_rows : int, optional
        Output rows per block.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Interior medians and no-data flags.
    """
    shape = interior_shape(values.shape, support.shape)
    result = np.zeros(shape)
    nodata = np.zeros(shape, dtype=bool)
    step = block_rows_for(shape[1], int(np.count_nonzero(support)),
                          block_rows)
    for start, stop in row_blocks(shape[0], step):
        ordered, count = _sorted_samples(values, valid, support, start, stop)
        empty = count == 0
        block = _central(ordered, count)
        block[empty] = 0.0
        result[start:stop] = block
        nodata[start:stop] = empty
    return result, nodata


def median_fast(values: np.ndarray,
                window: Tuple[int, int]) -> Tuple[np.ndarray, np.ndarray]:
    """Median over full ``(my, mx)`` windows of an all-valid source."""
    my, mx = window
    hy, hx = (my - 1) // 2, (mx - 1) // 2
    ny, nx = values.shape
    filtered = median_filter(values, size=(my, mx), mode='constant')
    result = filtered[hy:ny - hy, hx:nx - hx]
    return result, np.zeros(result.shape, dtype=bool)


def morpho(values: np.ndarray, valid: Optional[np.ndarray],
           weights: np.ndarray, scaled: bool,
           block_rows: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Rank-weighted sum of the valid samples of each window.

    Parameters
    ----------
    values : np.ndarray
        2D float64 source.
    valid : np.ndarray or None
        2D bool validity of *values*, ``None`` when every cell is valid.
    weights : np.ndarray
        2D float64 weights; ``weights.ravel()[k]`` weighs the ``k``-th
        smallest valid sample.
    scaled : bool
        Divide by the sum of the absolute weights used.
    block_rows : int, optional
        Output rows per block.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Interior results and no-data flags.
    """
    support = np.ones(weights.shape, dtype=bool)
    flat = weights.ravel()
    rank = np.arange(flat.size)
    shape = interior_shape(values.shape, weights.shape)
    result = np.zeros(shape)
    nodata = np.zeros(shape, dtype=bool)
    step = block_rows_for(shape[1], flat.size, block_rows)
    for start, stop in row_blocks(shape[0], step):
        ordered, count = _sorted_samples(values, valid, support, start, stop)
        used = rank < count[..., None]
        total = np.where(used, ordered * flat, 0.0).sum(axis=-1)
        if scaled:
            norm = np.where(used, np.abs(flat), 0.0).sum(axis=-1)
            empty = norm == 0
            total = np.divide(total, norm, out=np.zeros_like(total),
                              where=~empty)
        else:
            empty = count == 0
            total[empty] = 0.0
        result[start:stop] = total
        nodata[start:stop] = empty
    return result, nodata
