# -*- coding: utf-8 -*-
"""
Raster Buffers - Binary masks and scalar images consumed by the filters.

A raster is a contiguous row-major numpy buffer of ``height`` rows by
``width`` columns (numpy shape ``(height, width)``) plus an ownership flag.
Buffers created by the constructors or ``from_array`` are owned by the
raster; buffers passed to ``wrap`` are borrowed and are never copied,
reallocated or released by the raster. ``unwrap`` detaches the buffer and
hands it back, after which the raster no longer has data.

External cell coordinates are 1-based ``(x, y)`` with ``x`` along a row,
matching ``get``/``set``. The ``data`` property exposes the raw buffer with
0-based ``[y, x]`` indexing.

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
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# WRFL internal
from wrfl.exceptions import ValidationError
from wrfl.vocabulary import PixelType


def _validate_dimensions(width: int, height: int) -> None:
    for name, value in (('width', width), ('height', height)):
        if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
            raise ValidationError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
        if value < 1:
            raise ValidationError(f"{name} must be >= 1, got {value}")


def _validate_buffer(array: np.ndarray, kind: str) -> None:
    if not isinstance(array, np.ndarray):
        raise ValidationError(
            f"{kind} buffer must be a numpy array, got {type(array).__name__}"
        )
    if array.ndim != 2:
        raise ValidationError(
            f"{kind} buffer must be 2D, got {array.ndim}D"
        )
    if array.size == 0:
        raise ValidationError(f"{kind} buffer must not be empty")


class _Raster:
    """Shared buffer bookkeeping for ``Mask`` and ``Image``."""

    _data: Optional[np.ndarray]
    _wrapped: bool

    @classmethod
    def _from_buffer(cls, data: np.ndarray, wrapped: bool):
        raster = cls.__new__(cls)
        raster._attach(data, wrapped)
        return raster

    def _attach(self, data: np.ndarray, wrapped: bool) -> None:
        self._data = data
        self._wrapped = wrapped

    @property
    def data(self) -> np.ndarray:
        """Raw row-major buffer, shape ``(height, width)``."""
        if self._data is None:
            raise ValidationError(
                f"{type(self).__name__} has been unwrapped and holds no data"
            )
        return self._data

    @property
    def is_detached(self) -> bool:
        """Whether ``unwrap`` has already released the buffer."""
        return self._data is None

    @property
    def is_wrapped(self) -> bool:
        """Whether the buffer is borrowed from the caller."""
        return self._wrapped

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """Numpy shape ``(height, width)``."""
        return self.data.shape

    def unwrap(self) -> np.ndarray:
        """Detach and return the buffer without copying it.

        Returns
        -------
        np.ndarray
            The buffer the raster held, owned or borrowed.
        """
        data = self.data
        self._data = None
        return data

    def _index(self, x: int, y: int) -> Tuple[int, int]:
        height, width = self.shape
        if not (1 <= x <= width and 1 <= y <= height):
            raise ValidationError(
                f"cell ({x}, {y}) is outside the {width}x{height} raster"
            )
        return y - 1, x - 1

    def __repr__(self) -> str:
        if self._data is None:
            return f"{type(self).__name__}(detached)"
        owner = 'wrapped' if self._wrapped else 'owned'
        return f"{type(self).__name__}({self.width}x{self.height}, {owner})"


class Mask(_Raster):
    """Binary raster, one boolean cell per pixel (``True`` = set).

    Parameters
    ----------
    width : int
        Number of columns, >= 1.
    height : int
        Number of rows, >= 1.

    Examples
    --------
    >>> m = Mask(4, 3)
    >>> m.set(2, 1)
    >>> m.count()
    1
    """

    def __init__(self, width: int, height: int) -> None:
        _validate_dimensions(width, height)
        self._attach(np.zeros((height, width), dtype=bool), False)

    @classmethod
    def wrap(cls, array: np.ndarray) -> 'Mask':
        """Borrow a C-contiguous 2D boolean array as a mask.

        Raises
        ------
        ValidationError
            If *array* is not a non-empty, C-contiguous 2D bool array.
        """
        _validate_buffer(array, 'mask')
        if array.dtype != np.bool_:
            raise ValidationError(
                f"mask buffer must have dtype bool, got {array.dtype}"
            )
        if not array.flags['C_CONTIGUOUS']:
            raise ValidationError("mask buffer must be C-contiguous")
        return cls._from_buffer(array, True)

    @classmethod
    def from_array(cls, array) -> 'Mask':
        """Build an owned mask from any 2D array-like (non-zero = set)."""
        array = np.asarray(array)
        _validate_buffer(array, 'mask')
        return cls._from_buffer(np.array(array, dtype=bool, order='C'), False)

    def get(self, x: int, y: int) -> bool:
        return bool(self.data[self._index(x, y)])

    def set(self, x: int, y: int, value: bool = True) -> None:
        self.data[self._index(x, y)] = bool(value)

    def count(self) -> int:
        """Number of set cells."""
        return int(np.count_nonzero(self.data))

    def is_empty(self) -> bool:
        return not self.data.any()

    def invert(self) -> 'Mask':
        """Flip every cell in place and return ``self``."""
        np.logical_not(self.data, out=self.data)
        return self

    def copy(self) -> 'Mask':
        """Owned deep copy."""
        return Mask._from_buffer(self.data.copy(), False)

    def equals(self, other: 'Mask') -> bool:
        return (isinstance(other, Mask)
                and np.array_equal(self.data, other.data))

    def shift(self, dx: int, dy: int, fill: bool = False) -> 'Mask':
        """Translate the content in place by ``(dx, dy)`` cells.

        The cell at ``(x, y)`` moves to ``(x + dx, y + dy)``. Cells left
        without a source take *fill*.

        Returns
        -------
        Mask
            ``self``.

        Raises
        ------
        ValidationError
            If the shift is not smaller than the raster in both axes.
        """
        height, width = self.shape
        if abs(dx) >= width or abs(dy) >= height:
            raise ValidationError(
                f"shift ({dx}, {dy}) must be smaller than the "
                f"{width}x{height} raster"
            )
        moved = np.full_like(self.data, bool(fill))
        src_y = slice(max(0, -dy), height - max(0, dy))
        src_x = slice(max(0, -dx), width - max(0, dx))
        dst_y = slice(max(0, dy), height - max(0, -dy))
        dst_x = slice(max(0, dx), width - max(0, -dx))
        moved[dst_y, dst_x] = self.data[src_y, src_x]
        self.data[...] = moved
        return self


class Image(_Raster):
    """Scalar raster of ``PixelType.INT``, ``FLOAT`` or ``DOUBLE`` pixels.

    An image may carry an ``invalid`` mask of the same shape. Set cells in
    it are excluded from every statistic; the filters also set it on the
    destination for cells they could not compute.

    Parameters
    ----------
    width : int
        Number of columns, >= 1.
    height : int
        Number of rows, >= 1.
    pixel_type : PixelType
        Pixel type of the zero-filled buffer. Default ``DOUBLE``.
    """

    _invalid: Optional[Mask]

    def __init__(self, width: int, height: int,
                 pixel_type: PixelType = PixelType.DOUBLE) -> None:
        _validate_dimensions(width, height)
        if not isinstance(pixel_type, PixelType):
            raise ValidationError(
                f"pixel_type must be a PixelType, got {pixel_type!r}"
            )
        self._attach(np.zeros((height, width), dtype=pixel_type.dtype), False)

    def _attach(self, data: np.ndarray, wrapped: bool) -> None:
        super()._attach(data, wrapped)
        self._invalid = None

    @classmethod
    def wrap(cls, array: np.ndarray,
             invalid: Union[Mask, np.ndarray, None] = None) -> 'Image':
        """Borrow a C-contiguous int32, float32 or float64 2D array.

        Raises
        ------
        ValidationError
            If *array* has an unsupported dtype or layout.
        """
        _validate_buffer(array, 'image')
        try:
            PixelType.from_dtype(array.dtype)
        except KeyError:
            raise ValidationError(
                f"image buffer dtype must be int32, float32 or float64, "
                f"got {array.dtype}"
            ) from None
        if not array.flags['C_CONTIGUOUS']:
            raise ValidationError("image buffer must be C-contiguous")
        image = cls._from_buffer(array, True)
        image.invalid = invalid
        return image

    @classmethod
    def from_array(cls, array, pixel_type: Optional[PixelType] = None,
                   invalid: Union[Mask, np.ndarray, None] = None) -> 'Image':
        """Build an owned image from any 2D array-like.

        Parameters
        ----------
        array : array-like
            Pixel values.
        pixel_type : PixelType, optional
            Target pixel type. Inferred from the array when omitted:
            integer input becomes ``INT``, float32 becomes ``FLOAT``,
            anything else ``DOUBLE``.
        invalid : Mask or np.ndarray, optional
            Cells to exclude from statistics.
        """
        array = np.asarray(array)
        _validate_buffer(array, 'image')
        if pixel_type is None:
            if np.issubdtype(array.dtype, np.integer):
                pixel_type = PixelType.INT
            elif array.dtype == np.float32:
                pixel_type = PixelType.FLOAT
            else:
                pixel_type = PixelType.DOUBLE
        image = cls._from_buffer(
            np.array(array, dtype=pixel_type.dtype, order='C'), False,
        )
        image.invalid = invalid
        return image

    @property
    def pixel_type(self) -> PixelType:
        return PixelType.from_dtype(self.data.dtype)

    @property
    def invalid(self) -> Optional[Mask]:
        """Mask of cells excluded from statistics, or ``None``."""
        return self._invalid

    @invalid.setter
    def invalid(self, value: Union[Mask, np.ndarray, None]) -> None:
        if value is None:
            self._invalid = None
            return
        if not isinstance(value, Mask):
            value = Mask.from_array(value)
        if value.shape != self.shape:
            raise ValidationError(
                f"invalid mask shape {value.shape} does not match "
                f"image shape {self.shape}"
            )
        self._invalid = value

    def get(self, x: int, y: int) -> Union[int, float]:
        return self.data[self._index(x, y)].item()

    def set(self, x: int, y: int, value: Union[int, float]) -> None:
        self.data[self._index(x, y)] = value

    def is_invalid(self, x: int, y: int) -> bool:
        index = self._index(x, y)
        return self._invalid is not None and bool(self._invalid.data[index])

    def copy(self) -> 'Image':
        """Owned deep copy, including the invalid mask."""
        image = Image._from_buffer(self.data.copy(), False)
        if self._invalid is not None:
            image.invalid = self._invalid.copy()
        return image
