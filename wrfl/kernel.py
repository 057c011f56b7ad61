# -*- coding: utf-8 -*-
"""
Kernels - Structuring elements and weight windows.

Both kernel kinds are odd-sized 2D windows of width ``mx`` and height
``my`` (at most ``MAX_KERNEL_SIZE`` each) stored row-major in a numpy
array of shape ``(my, mx)``. Window cell ``[j, i]`` applies to the source
cell ``(x - hx + i, y - hy + j)`` when computing destination cell
``(x, y)``, with ``hx = (mx - 1) // 2`` and ``hy = (my - 1) // 2``. A set
cell at column ``i``, row ``j`` therefore sits at offset
``(dx, dy) = (i - hx, j - hy)`` from the window centre.

Kernels are value objects: their arrays are copied on construction and
exposed read-only.

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
from typing import List, Optional, Tuple

# Third-party
import numpy as np

# WRFL internal
from wrfl.exceptions import InvalidKernelShapeError, ValidationError


MAX_KERNEL_SIZE = 31


def validate_kernel_shape(shape: Tuple[int, ...]) -> None:
    """Validate a ``(my, mx)`` kernel shape.

    Raises
    ------
    InvalidKernelShapeError
        If the window is not 2D, or a side is zero, even, or larger than
        ``MAX_KERNEL_SIZE``.
    """
    if len(shape) != 2:
        raise InvalidKernelShapeError(
            f"kernel must be 2D, got {len(shape)}D"
        )
    my, mx = shape
    for name, size in (('width', mx), ('height', my)):
        if size < 1:
            raise InvalidKernelShapeError(
                f"kernel {name} must be >= 1, got {size}"
            )
        if size % 2 == 0:
            raise InvalidKernelShapeError(
                f"kernel {name} must be odd, got {size}"
            )
        if size > MAX_KERNEL_SIZE:
            raise InvalidKernelShapeError(
                f"kernel {name} must be <= {MAX_KERNEL_SIZE}, got {size}"
            )


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class _Window:
    """Shape bookkeeping shared by both kernel kinds."""

    _data: np.ndarray

    @property
    def data(self) -> np.ndarray:
        """Read-only window array, shape ``(my, mx)``."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def hx(self) -> int:
        """Horizontal half-size."""
        return (self.width - 1) // 2

    @property
    def hy(self) -> int:
        """Vertical half-size."""
        return (self.height - 1) // 2


class StructuringElement(_Window):
    """Boolean window used by the morphological and statistical filters.

    Parameters
    ----------
    data : array-like
        2D window, non-zero cells are active. Both sides must be odd and
        no larger than ``MAX_KERNEL_SIZE``. An all-clear element can be
        built, but every filter rejects it.

    Raises
    ------
    InvalidKernelShapeError
        If the window shape is not allowed.

    Examples
    --------
    >>> se = StructuringElement.cross(1)
    >>> se.count, se.is_full
    (5, False)
    """

    def __init__(self, data) -> None:
        array = np.asarray(data)
        validate_kernel_shape(array.shape)
        self._data = _frozen(np.array(array, dtype=bool, order='C'))

    @classmethod
    def full(cls, mx: int, my: Optional[int] = None) -> 'StructuringElement':
        """All-set ``mx`` by ``my`` element (square when *my* is omitted)."""
        my = mx if my is None else my
        validate_kernel_shape((my, mx))
        return cls(np.ones((my, mx), dtype=bool))

    @classmethod
    def empty(cls, mx: int, my: Optional[int] = None) -> 'StructuringElement':
        my = mx if my is None else my
        validate_kernel_shape((my, mx))
        return cls(np.zeros((my, mx), dtype=bool))

    @classmethod
    def single(cls, mx: int, my: int, dx: int, dy: int) -> 'StructuringElement':
        """Element with only the cell at offset ``(dx, dy)`` set."""
        validate_kernel_shape((my, mx))
        hx, hy = (mx - 1) // 2, (my - 1) // 2
        if abs(dx) > hx or abs(dy) > hy:
            raise ValidationError(
                f"offset ({dx}, {dy}) lies outside a {mx}x{my} window"
            )
        data = np.zeros((my, mx), dtype=bool)
        data[hy + dy, hx + dx] = True
        return cls(data)

    @classmethod
    def square(cls, radius: int) -> 'StructuringElement':
        """Full ``(2*radius+1)`` square (8-connected)."""
        return cls.full(2 * radius + 1)

    @classmethod
    def cross(cls, radius: int) -> 'StructuringElement':
        """Plus-shaped element (4-connected)."""
        size = 2 * radius + 1
        validate_kernel_shape((size, size))
        data = np.zeros((size, size), dtype=bool)
        data[radius, :] = True
        data[:, radius] = True
        return cls(data)

    @classmethod
    def disk(cls, radius: int) -> 'StructuringElement':
        """Cells within Euclidean distance *radius* of the centre."""
        size = 2 * radius + 1
        validate_kernel_shape((size, size))
        y, x = np.ogrid[-radius:radius + 1, -radius:radius + 1]
        return cls((x * x + y * y) <= radius * radius)

    @classmethod
    def from_weights(cls, weights,
                     tolerance: float = 0.0) -> 'StructuringElement':
        """Element of the cells whose weight magnitude exceeds *tolerance*."""
        if tolerance < 0:
            raise ValidationError(
                f"tolerance must be >= 0, got {tolerance}"
            )
        weights = np.asarray(weights, dtype=np.float64)
        return cls(np.abs(weights) > tolerance)

    @property
    def count(self) -> int:
        """Number of active cells."""
        return int(np.count_nonzero(self._data))

    @property
    def is_full(self) -> bool:
        return bool(self._data.all())

    @property
    def is_empty(self) -> bool:
        return not self._data.any()

    @property
    def is_symmetric(self) -> bool:
        """Whether the element is invariant under 180 degree rotation."""
        return bool(np.array_equal(self._data, self._data[::-1, ::-1]))

    def rotated(self) -> 'StructuringElement':
        """Element rotated by 180 degrees (offset ``d`` becomes ``-d``)."""
        return StructuringElement(self._data[::-1, ::-1])

    def offsets(self) -> List[Tuple[int, int]]:
        """``(dx, dy)`` offsets of the active cells, row-major."""
        rows, cols = np.nonzero(self._data)
        return [(int(i) - self.hx, int(j) - self.hy)
                for j, i in zip(rows, cols)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuringElement):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"StructuringElement({self.width}x{self.height}, "
                f"count={self.count})")


class WeightWindow(_Window):
    """Real-valued window for linear and rank-weighted filters.

    Parameters
    ----------
    weights : array-like
        2D weights. Both sides must be odd and no larger than
        ``MAX_KERNEL_SIZE``.

    Raises
    ------
    InvalidKernelShapeError
        If the window shape is not allowed.
    """

    def __init__(self, weights) -> None:
        array = np.asarray(weights)
        validate_kernel_shape(array.shape)
        self._data = _frozen(np.array(array, dtype=np.float64, order='C'))

    @classmethod
    def from_structuring_element(
        cls, element: StructuringElement,
    ) -> 'WeightWindow':
        """Weights of 1.0 on active cells and 0.0 elsewhere."""
        return cls(element.data.astype(np.float64))

    @property
    def is_empty(self) -> bool:
        """Whether every weight is zero."""
        return not self._data.any()

    @property
    def abs_sum(self) -> float:
        return float(np.abs(self._data).sum())

    @property
    def support(self) -> StructuringElement:
        """Element of the non-zero weights."""
        return StructuringElement(self._data != 0)

    def __repr__(self) -> str:
        return f"WeightWindow({self.width}x{self.height})"
