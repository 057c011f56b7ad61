# -*- coding: utf-8 -*-
"""
Border Policy - Border modes, destination shapes, and result assembly.

For half-sizes ``(hx, hy)`` and an ``nx`` by ``ny`` source, the interior is
the set of cells with ``hx <= x < nx - hx`` and ``hy <= y < ny - hy``
(0-based). The engines compute interior values only; this module turns
them into a destination according to the requested ``BorderMode``:

- ``NOOP``: interior written, destination border left as supplied.
- ``ZERO``: interior written, border set to the family zero value.
- ``COPY``: interior written, border copied from the source.
- ``CROP``: destination is ``(nx - 2hx) x (ny - 2hy)`` and is the interior.
- ``FULL``: destination has the source shape; the source is first
  extended by ``hx``/``hy`` synthetic cells per side, so the interior of
  the extended source covers every destination cell.

Morphology supports ``NOOP``, ``ZERO`` and ``COPY``; the statistical
filters support all five.

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
from typing import Any, List, Optional, Tuple

# Third-party
import numpy as np

# WRFL internal
from wrfl.exceptions import DimensionMismatchError, UnsupportedModeError
from wrfl.vocabulary import BorderMode, FilterFamily


FAMILY_BORDERS = {
    FilterFamily.MORPHOLOGY: (
        BorderMode.NOOP, BorderMode.ZERO, BorderMode.COPY,
    ),
    FilterFamily.STATISTICAL: (
        BorderMode.NOOP, BorderMode.ZERO, BorderMode.COPY,
        BorderMode.CROP, BorderMode.FULL,
    ),
}


def border_modes_for(family: FilterFamily) -> Tuple[BorderMode, ...]:
    """Border modes legal for *family*."""
    return FAMILY_BORDERS[family]


def check_border(family: FilterFamily, border: Any) -> None:
    """Raise ``UnsupportedModeError`` unless *border* is legal for *family*."""
    if not isinstance(border, BorderMode):
        raise UnsupportedModeError(
            f"border must be a BorderMode, got {border!r}"
        )
    if border not in border_modes_for(family):
        allowed = ', '.join(b.name for b in border_modes_for(family))
        raise UnsupportedModeError(
            f"border {border.name} is not supported by {family.value} "
            f"filters (allowed: {allowed})"
        )


def destination_shape(shape: Tuple[int, int], hx: int, hy: int,
                      border: BorderMode) -> Tuple[int, int]:
    """Required destination shape for a source of *shape*."""
    if border is BorderMode.CROP:
        return shape[0] - 2 * hy, shape[1] - 2 * hx
    return shape


def check_dimensions(destination: Tuple[int, int], source: Tuple[int, int],
                     window: Tuple[int, int], border: BorderMode) -> None:
    """Validate source and destination shapes against the window.

    Raises
    ------
    DimensionMismatchError
        If the window is larger than the source, or the destination shape
        does not match the one required by *border*.
    """
    my, mx = window
    if my > source[0] or mx > source[1]:
        raise DimensionMismatchError(
            f"{mx}x{my} kernel is larger than the "
            f"{source[1]}x{source[0]} source"
        )
    expected = destination_shape(source, (mx - 1) // 2, (my - 1) // 2, border)
    if tuple(destination) != tuple(expected):
        raise DimensionMismatchError(
            f"border {border.name} needs a {expected[1]}x{expected[0]} "
            f"destination, got {destination[1]}x{destination[0]}"
        )


def interior_slices(shape: Tuple[int, int], hx: int,
                    hy: int) -> Tuple[slice, slice]:
    return slice(hy, shape[0] - hy), slice(hx, shape[1] - hx)


def border_slices(shape: Tuple[int, int], hx: int,
                  hy: int) -> List[Tuple[slice, slice]]:
    """Index tuples covering the border cells exactly once."""
    ny, nx = shape
    return [
        (slice(0, hy), slice(None)),
        (slice(ny - hy, ny), slice(None)),
        (slice(hy, ny - hy), slice(0, hx)),
        (slice(hy, ny - hy), slice(nx - hx, nx)),
    ]


def extend_with_invalid(values: np.ndarray, valid: Optional[np.ndarray],
                        hx: int, hy: int) -> Tuple[np.ndarray, np.ndarray]:
    """Pad *values* by the half-sizes with synthetic cells marked invalid.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Extended values (synthetic cells 0) and extended validity.
    """
    if valid is None:
        valid = np.ones(values.shape, dtype=bool)
    pad = ((hy, hy), (hx, hx))
    return (np.pad(values, pad, constant_values=0),
            np.pad(valid, pad, constant_values=False))


def extend_with_chessboard(values: np.ndarray, hx: int,
                           hy: int) -> np.ndarray:
    """Pad *values* by the half-sizes with a +inf/-inf chessboard.

    A synthetic cell at extended position ``(y, x)`` holds +inf when
    ``x + y`` is even and -inf otherwise. Any window straddling an edge
    then sees as many +inf as -inf cells, give or take one.
    """
    extended = np.pad(values.astype(np.float64), ((hy, hy), (hx, hx)))
    yy, xx = np.indices(extended.shape)
    board = np.where((yy + xx) % 2 == 0, np.inf, -np.inf)
    synthetic = np.ones(extended.shape, dtype=bool)
    synthetic[interior_slices(extended.shape, hx, hy)] = False
    extended[synthetic] = board[synthetic]
    return extended


def write_result(destination: np.ndarray, source: Optional[np.ndarray],
                 interior: np.ndarray, hx: int, hy: int,
                 border: BorderMode, zero: Any) -> None:
    """Assemble the destination from the computed *interior*.

    The border is written before the interior so a destination that is
    the source still reads its original border for ``COPY``. A missing
    *source* makes ``COPY`` behave like ``ZERO``.
    """
    if border in (BorderMode.CROP, BorderMode.FULL):
        destination[...] = interior
        return
    if border is BorderMode.ZERO or (
            border is BorderMode.COPY and source is None):
        for index in border_slices(destination.shape, hx, hy):
            destination[index] = zero
    elif border is BorderMode.COPY:
        for index in border_slices(destination.shape, hx, hy):
            destination[index] = source[index]
    destination[interior_slices(destination.shape, hx, hy)] = interior
