# -*- coding: utf-8 -*-
"""
Linear Filters - Weighted sums over a real-valued window.

``linear`` computes ``sum(w * x)`` over the valid source cells under the
non-zero weights, without reflecting the window (a correlation). The
scaled variant divides by ``sum(|w|)`` over the same cells, so a window of
equal weights yields the local mean. A window with no contributing cell
is no-data.

Sources without invalid cells take a dense path through
``scipy.ndimage.correlate`` (C-optimized); the masked path gathers the
samples per row block. The two agree to rounding.

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
from scipy.ndimage import correlate

# WRFL internal
from wrfl.image_processing.filters._windows import (
    block_rows_for,
    gather,
    interior_shape,
    row_blocks,
)


def linear_dense(values: np.ndarray, weights: np.ndarray,
                 scaled: bool) -> Tuple[np.ndarray, np.ndarray]:
    """Weighted sum over an all-valid source via ``correlate``."""
    my, mx = weights.shape
    hy, hx = (my - 1) // 2, (mx - 1) // 2
    ny, nx = values.shape
    result = correlate(values, weights, mode='constant')[hy:ny - hy,
                                                         hx:nx - hx]
    if scaled:
        result = result / np.abs(weights).sum()
    return result, np.zeros(result.shape, dtype=bool)


def linear(values: np.ndarray, valid: Optional[np.ndarray],
           weights: np.ndarray, scaled: bool,
           block_rows: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Weighted sum of the valid samples under the non-zero weights.

    Parameters
    ----------
    values : np.ndarray
        2D float64 source.
    valid : np.ndarray or None
        2D bool validity of *values*, ``None`` when every cell is valid.
    weights : np.ndarray
        2D float64 window weights, at least one non-zero.
    scaled : bool
        Divide by the sum of the absolute weights of the valid cells.
    block_rows : int, optional
        Output rows per block.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Interior results and no-data flags.
    """
    if valid is None:
        return linear_dense(values, weights, scaled)

    support = weights != 0
    w = weights[support]
    shape = interior_shape(values.shape, weights.shape)
    result = np.zeros(shape)
    nodata = np.zeros(shape, dtype=bool)
    step = block_rows_for(shape[1], w.size, block_rows)
    for start, stop in row_blocks(shape[0], step):
        samples = gather(values, support, start, stop)
        ok = gather(valid, support, start, stop)
        total = np.where(ok, samples * w, 0.0).sum(axis=-1)
        if scaled:
            norm = np.where(ok, np.abs(w), 0.0).sum(axis=-1)
            empty = norm == 0
            total = np.divide(total, norm, out=np.zeros_like(total),
                              where=~empty)
        else:
            empty = ~ok.any(axis=-1)
            total[empty] = 0.0
        result[start:stop] = total
        nodata[start:stop] = empty
    return result, nodata
