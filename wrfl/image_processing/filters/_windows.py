# -*- coding: utf-8 -*-
"""
Window Helpers - Row blocking, window gathering, and running sums.

Shared low-level helpers for the filter engines. Every engine computes the
interior of a raster, i.e. one output cell per window position fully inside
the (possibly extended) source, of shape ``(ny - my + 1, nx - mx + 1)``.
Destination rows are processed in blocks so the gathered sample arrays stay
bounded in memory; results never depend on the block size.

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
from typing import Iterator, Optional, Tuple

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


#: Upper bound on gathered samples held at once by a row block.
BLOCK_ELEMENTS = 1 << 20


def interior_shape(shape: Tuple[int, int],
                   window: Tuple[int, int]) -> Tuple[int, int]:
    """Number of window positions fully inside *shape*."""
    return shape[0] - window[0] + 1, shape[1] - window[1] + 1


def block_rows_for(n_cols: int, n_samples: int,
                   block_rows: Optional[int] = None) -> int:
    """Rows per block, *block_rows* when given else sized to the budget."""
    if block_rows is not None:
        return block_rows
    return max(1, BLOCK_ELEMENTS // max(1, n_cols * n_samples))


def row_blocks(n_rows: int, block_rows: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(start, stop)`` row ranges covering ``range(n_rows)``."""
    for start in range(0, n_rows, block_rows):
        yield start, min(start + block_rows, n_rows)


def gather(array: np.ndarray, support: np.ndarray,
           start: int, stop: int) -> np.ndarray:
    """Samples under the active window cells for output rows ``start:stop``.

    Parameters
    ----------
    array : np.ndarray
        2D source, shape ``(ny, nx)``.
    support : np.ndarray
        2D boolean window, shape ``(my, mx)``.
    start, stop : int
        Output row range.

    Returns
    -------
    np.ndarray
        Shape ``(stop - start, nx - mx + 1, count)``, samples in the
        window's row-major order.
    """
    my, mx = support.shape
    view = sliding_window_view(array[start:stop + my - 1], (my, mx))
    return view[..., support]


def _running_sum(array: np.ndarray, size: int, axis: int,
                 dtype=None) -> np.ndarray:
    csum = np.cumsum(array, axis=axis, dtype=dtype)
    pad = [(0, 0), (0, 0)]
    pad[axis] = (1, 0)
    csum = np.pad(csum, pad)
    n = csum.shape[axis]
    upper = [slice(None), slice(None)]
    lower = [slice(None), slice(None)]
    upper[axis] = slice(size, n)
    lower[axis] = slice(0, n - size)
    return csum[tuple(upper)] - csum[tuple(lower)]


def window_sums(array: np.ndarray, window: Tuple[int, int],
                dtype=None) -> np.ndarray:
    """Sum of *array* over every full ``(my, mx)`` window position.

    Separable running sums: prefix sums along rows, then along columns of
    the row sums.
    """
    my, mx = window
    return _running_sum(_running_sum(array, mx, 1, dtype), my, 0, dtype)
