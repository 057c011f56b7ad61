# -*- coding: utf-8 -*-
"""
Statistical Filters - Local mean and sample standard deviation.

Each engine function takes float64 source values, an optional validity
array (``False`` = excluded cell) and a window, and returns the interior
result together with a ``nodata`` array flagging output cells that had no
usable samples (fewer than two for the standard deviation). No-data
results are 0.

The exact variants gather the samples under the active window cells per
row block. The ``*_fast`` variants take box means of full rectangular
windows with ``scipy.ndimage.uniform_filter``: O(1) work per cell. Values
are centred on their global mean first, so the running sums carry only
the spread of the data and ``mean_fast`` agrees with ``mean`` within
``O(n * eps * max|x|)`` for an ``n``-cell window. The unstable
``E[x^2] - E[x]^2`` formula of ``stdev_fast`` is clamped at zero and
agrees with ``stdev`` to about ``rtol=1e-6`` for data whose spread is not
below a thousandth of its distance from the global mean.

Dependencies
------------
numpy
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
from scipy.ndimage import uniform_filter

# WRFL internal
from wrfl.image_processing.filters._windows import (
    block_rows_for,
    gather,
    interior_shape,
    row_blocks,
)


def _window_moments(values: np.ndarray, valid: Optional[np.ndarray],
                    support: np.ndarray, block_rows: Optional[int],
                    second: bool) -> Tuple[np.ndarray, ...]:
    """Per-window sample count, sum and (optionally) centred square sum."""
    shape = interior_shape(values.shape, support.shape)
    count = np.zeros(shape, dtype=np.int64)
    total = np.zeros(shape)
    squares = np.zeros(shape)
    k = int(np.count_nonzero(support))
    step = block_rows_for(shape[1], k, block_rows)
    for start, stop in row_blocks(shape[0], step):
        samples = gather(values, support, start, stop)
        if valid is None:
            ok = None
            n = np.full(samples.shape[:2], k, dtype=np.int64)
        else:
            ok = gather(valid, support, start, stop)
            samples = np.where(ok, samples, 0.0)
            n = ok.sum(axis=-1)
        s = samples.sum(axis=-1)
        count[start:stop] = n
        total[start:stop] = s
        if second:
            mean = s / np.maximum(n, 1)
            dev = samples - mean[..., None]
            if ok is not None:
                dev = np.where(ok, dev, 0.0)
            squares[start:stop] = np.square(dev).sum(axis=-1)
    return count, total, squares


def mean(values: np.ndarray, valid: Optional[np.ndarray],
         support: np.ndarray,
         block_rows: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Arithmetic mean of the valid samples under the active cells.

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
        Interior means and no-data flags.
    """
    count, total, _ = _window_moments(values, valid, support, block_rows,
                                      second=False)
    nodata = count == 0
    result = np.divide(total, count, out=np.zeros_like(total),
                       where=~nodata)
    return result, nodata


def _box_means(array: np.ndarray, window: Tuple[int, int]) -> np.ndarray:
    """Mean of *array* over every full ``(my, mx)`` window position."""
    my, mx = window
    hy, hx = (my - 1) // 2, (mx - 1) // 2
    ny, nx = array.shape
    means = uniform_filter(array, size=(my, mx), mode='constant')
    return means[hy:ny - hy, hx:nx - hx]


def _centre(values: np.ndarray) -> float:
    # Few significant bits, so centring integer-valued data is exact.
    if values.size == 0:
        return 0.0
    mantissa, exponent = np.frexp(values.mean())
    return float(np.ldexp(np.round(mantissa * 2.0 ** 20), exponent - 20))


def _centred_samples(values: np.ndarray, valid: Optional[np.ndarray],
                     window: Tuple[int, int]):
    """Centre, per-window valid counts and centred (masked) values."""
    area = window[0] * window[1]
    if valid is None:
        centre = _centre(values)
        count = np.full(interior_shape(values.shape, window), area,
                        dtype=np.int64)
        return centre, count, values - centre
    centre = _centre(values[valid])
    count = np.rint(_box_means(valid.astype(np.float64), window) * area)
    return centre, count.astype(np.int64), np.where(valid, values - centre,
                                                    0.0)


def mean_fast(values: np.ndarray, valid: Optional[np.ndarray],
              window: Tuple[int, int]) -> Tuple[np.ndarray, np.ndarray]:
    """Mean over full ``(my, mx)`` windows from box means."""
    centre, count, centred = _centred_samples(values, valid, window)
    total = _box_means(centred, window) * (window[0] * window[1])
    nodata = count == 0
    result = np.divide(total, count, out=np.zeros_like(total),
                       where=~nodata)
    result[~nodata] += centre
    return result, nodata


def stdev(values: np.ndarray, valid: Optional[np.ndarray],
          support: np.ndarray,
          block_rows: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Sample standard deviation (``n - 1`` denominator), two-pass.

    Windows with fewer than two valid samples are no-data.
    """
    count, _, squares = _window_moments(values, valid, support, block_rows,
                                        second=True)
    nodata = count < 2
    variance = np.divide(squares, count - 1, out=np.zeros_like(squares),
                         where=~nodata)
    return np.sqrt(variance), nodata


def stdev_fast(values: np.ndarray, valid: Optional[np.ndarray],
               window: Tuple[int, int]) -> Tuple[np.ndarray, np.ndarray]:
    """Sample standard deviation over full windows from box means."""
    area = window[0] * window[1]
    _, count, centred = _centred_samples(values, valid, window)
    total = _box_means(centred, window) * area
    squares = _box_means(centred * centred, window) * area
    nodata = count < 2
    n = np.maximum(count, 1)
    variance = np.divide(squares - total * total / n, count - 1,
                         out=np.zeros_like(total), where=~nodata)
    np.maximum(variance, 0.0, out=variance)
    return np.sqrt(variance), nodata
