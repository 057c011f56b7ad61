# -*- coding: utf-8 -*-
"""
Filter Dispatch - Validated entry points for mask and image filtering.

``filter_mask`` and ``filter_image`` validate their arguments in a fixed
order, pick an algorithm path, compute into scratch arrays and only then
write the destination. The first failing check raises the matching
``FilterError`` subclass; the destination is untouched on failure.

Validation order:

1. destination, source and kernel present (and not unwrapped)
2. kernel sides odd and at most ``MAX_KERNEL_SIZE``
3. kernel has an active cell; two for the standard deviation modes
4. filter mode belongs to the entry point, border mode legal for it
5. destination and source shapes compatible with the border mode
6. identical pixel types for the sorting modes (median, morpho)

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
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

# Third-party
import numpy as np

# WRFL internal
from wrfl.exceptions import (
    EmptyKernelError,
    InsufficientSamplesError,
    NullInputError,
    PixelTypeMismatchError,
    UnsupportedModeError,
    ValidationError,
)
from wrfl.image_processing.filters import linear, rank, statistical
from wrfl.image_processing.filters.border import (
    check_border,
    check_dimensions,
    extend_with_chessboard,
    extend_with_invalid,
    write_result,
)
from wrfl.image_processing.filters.morphology import apply_morphology
from wrfl.kernel import StructuringElement, WeightWindow, validate_kernel_shape
from wrfl.raster import Image, Mask
from wrfl.vocabulary import (
    BorderMode,
    FilterFamily,
    FilterMode,
    FilterStatus,
    MedianBorderStrategy,
)

logger = logging.getLogger(__name__)

Kernel = Union[StructuringElement, WeightWindow]

_STDEV_MODES = (FilterMode.STDEV, FilterMode.STDEV_FAST)
_SORTING_MODES = (FilterMode.MEDIAN, FilterMode.MORPHO,
                  FilterMode.MORPHO_SCALED)


@dataclass(frozen=True)
class FilterConfig:
    """Runtime options of the filter entry points.

    Attributes
    ----------
    median_border : MedianBorderStrategy
        Synthetic cells used by ``MEDIAN`` under ``BorderMode.FULL``.
        ``EXACT`` (default) takes border medians over the in-bounds part
        of the window. ``SAMPLE`` pads with a +inf/-inf chessboard and
        runs the full-window median over the padded raster; it applies
        only to full windows on sources without invalid cells.
    block_rows : int, optional
        Destination rows processed per block. ``None`` sizes blocks from
        a fixed sample budget. Results do not depend on it.
    """

    median_border: MedianBorderStrategy = MedianBorderStrategy.EXACT
    block_rows: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.median_border, MedianBorderStrategy):
            raise ValidationError(
                f"median_border must be a MedianBorderStrategy, "
                f"got {self.median_border!r}"
            )
        if self.block_rows is not None:
            if (not isinstance(self.block_rows, int)
                    or isinstance(self.block_rows, bool)
                    or self.block_rows < 1):
                raise ValidationError(
                    f"block_rows must be a positive integer, "
                    f"got {self.block_rows!r}"
                )


# ---------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------

def _require(**arguments: Any) -> None:
    for name, value in arguments.items():
        if value is None:
            raise NullInputError(f"{name} is required")
        if getattr(value, 'is_detached', False):
            raise NullInputError(f"{name} has been unwrapped")


def _require_type(name: str, value: Any, expected) -> None:
    if not isinstance(value, expected):
        raise TypeError(
            f"{name} must be {getattr(expected, '__name__', expected)}, "
            f"got {type(value).__name__}"
        )


def _check_mode(family: FilterFamily, mode: Any) -> None:
    if not isinstance(mode, FilterMode) or mode.family is not family:
        raise UnsupportedModeError(
            f"{mode!r} is not a {family.value} filter mode"
        )


def _support(kernel: Kernel) -> StructuringElement:
    if isinstance(kernel, WeightWindow):
        return kernel.support
    return kernel


def _weights(kernel: Kernel) -> np.ndarray:
    if isinstance(kernel, StructuringElement):
        return kernel.data.astype(np.float64)
    return kernel.data


# ---------------------------------------------------------------------
# Masks
# ---------------------------------------------------------------------

def filter_mask(destination: Mask, source: Mask, kernel: StructuringElement,
                mode: FilterMode, border: BorderMode,
                config: Optional[FilterConfig] = None) -> FilterStatus:
    """Apply a morphological filter to a mask.

    Parameters
    ----------
    destination : Mask
        Output mask, same shape as *source*. May be *source*.
    source : Mask
        Input mask.
    kernel : StructuringElement
        Non-empty structuring element.
    mode : FilterMode
        ``EROSION``, ``DILATION``, ``OPENING`` or ``CLOSING``.
    border : BorderMode
        ``NOOP``, ``ZERO`` or ``COPY``.
    config : FilterConfig, optional
        Runtime options.

    Returns
    -------
    FilterStatus
        ``FilterStatus.SUCCESS``.

    Raises
    ------
    FilterError
        The subclass matching the first failed validation.
    TypeError
        If an argument has the wrong raster or kernel type.

    Examples
    --------
    >>> src = Mask.from_array(np.eye(5, dtype=bool))
    >>> dst = Mask(5, 5)
    >>> filter_mask(dst, src, StructuringElement.full(3),
    ...             FilterMode.DILATION, BorderMode.ZERO)
    <FilterStatus.SUCCESS: 'success'>
    """
    config = config if config is not None else FilterConfig()
    _require(destination=destination, source=source, kernel=kernel)
    _require_type('destination', destination, Mask)
    _require_type('source', source, Mask)
    _require_type('kernel', kernel, StructuringElement)
    validate_kernel_shape(kernel.shape)
    if kernel.is_empty:
        raise EmptyKernelError("structuring element has no active cell")
    _check_mode(FilterFamily.MORPHOLOGY, mode)
    check_border(FilterFamily.MORPHOLOGY, border)
    check_dimensions(destination.shape, source.shape, kernel.shape, border)

    apply_morphology(destination.data, source.data, kernel, mode, border,
                     config.block_rows)
    return FilterStatus.SUCCESS


# ---------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------

def _compute(mode: FilterMode, values: np.ndarray,
             valid: Optional[np.ndarray], kernel: Kernel,
             block_rows: Optional[int]) -> Tuple[np.ndarray, np.ndarray]:
    support = _support(kernel)
    logger.debug("%s with %dx%d kernel (full=%s, invalid cells=%s)",
                 mode.value, kernel.width, kernel.height, support.is_full,
                 valid is not None)

    if mode is FilterMode.MEDIAN:
        if support.is_full and valid is None:
            return rank.median_fast(values, support.shape)
        return rank.median(values, valid, support.data, block_rows)
    if mode is FilterMode.MEAN:
        return statistical.mean(values, valid, support.data, block_rows)
    if mode is FilterMode.MEAN_FAST:
        if support.is_full:
            return statistical.mean_fast(values, valid, support.shape)
        return statistical.mean(values, valid, support.data, block_rows)
    if mode is FilterMode.STDEV:
        return statistical.stdev(values, valid, support.data, block_rows)
    if mode is FilterMode.STDEV_FAST:
        if support.is_full:
            return statistical.stdev_fast(values, valid, support.shape)
        return statistical.stdev(values, valid, support.data, block_rows)
    if mode in (FilterMode.LINEAR, FilterMode.LINEAR_SCALED):
        return linear.linear(values, valid, _weights(kernel),
                             mode is FilterMode.LINEAR_SCALED, block_rows)
    return rank.morpho(values, valid, _weights(kernel),
                       mode is FilterMode.MORPHO_SCALED, block_rows)


def _write_invalid(destination: Image, source_flags: Optional[np.ndarray],
                   nodata: np.ndarray, hx: int, hy: int,
                   border: BorderMode) -> None:
    current = destination.invalid
    if current is not None:
        flags = current.data.copy()
    else:
        flags = np.zeros(destination.shape, dtype=bool)
    write_result(flags, source_flags, nodata, hx, hy, border, False)
    if current is not None:
        current.data[...] = flags
    elif flags.any():
        destination.invalid = Mask.from_array(flags)


def filter_image(destination: Image, source: Image, kernel: Kernel,
                 mode: FilterMode, border: BorderMode,
                 config: Optional[FilterConfig] = None) -> FilterStatus:
    """Apply a statistical or convolution filter to an image.

    Cells flagged in ``source.invalid`` and non-finite (NaN, +-inf) source
    values are excluded from every window; ``COPY`` borders carry both
    kinds of flag over to ``destination.invalid``.
    Destination cells without usable samples are set to 0 and flagged in
    ``destination.invalid``, which is created when needed. Results are
    computed in float64 and cast to the destination pixel type (truncated
    toward zero for ``PixelType.INT``).

    Parameters
    ----------
    destination : Image
        Output image. Same shape as *source*, or shrunk by twice the
        half-sizes for ``BorderMode.CROP``. May be *source* unless
        cropping.
    source : Image
        Input image.
    kernel : StructuringElement or WeightWindow
        Window. ``MEDIAN``, ``MEAN*`` and ``STDEV*`` use its active (or
        non-zero) cells; ``LINEAR*`` and ``MORPHO*`` use its weights, 1.0
        for the active cells of a structuring element.
    mode : FilterMode
        A statistical filter mode.
    border : BorderMode
        Any border mode.
    config : FilterConfig, optional
        Runtime options.

    Returns
    -------
    FilterStatus
        ``FilterStatus.SUCCESS``.

    Raises
    ------
    FilterError
        The subclass matching the first failed validation.
    TypeError
        If an argument has the wrong raster or kernel type.
    """
    config = config if config is not None else FilterConfig()
    _require(destination=destination, source=source, kernel=kernel)
    _require_type('destination', destination, Image)
    _require_type('source', source, Image)
    _require_type('kernel', kernel, (StructuringElement, WeightWindow))
    validate_kernel_shape(kernel.shape)
    if kernel.is_empty:
        raise EmptyKernelError("kernel has no active cell")
    if mode in _STDEV_MODES and _support(kernel).count < 2:
        raise InsufficientSamplesError(
            "standard deviation needs a kernel with at least 2 cells"
        )
    _check_mode(FilterFamily.STATISTICAL, mode)
    check_border(FilterFamily.STATISTICAL, border)
    check_dimensions(destination.shape, source.shape, kernel.shape, border)
    if mode in _SORTING_MODES and destination.pixel_type is not source.pixel_type:
        raise PixelTypeMismatchError(
            f"{mode.value} needs matching pixel types, got "
            f"{source.pixel_type.value} source and "
            f"{destination.pixel_type.value} destination"
        )

    hx, hy = kernel.hx, kernel.hy
    values = source.data.astype(np.float64)
    # Non-finite values count as invalid cells.
    excluded = ~np.isfinite(values)
    if source.invalid is not None:
        excluded |= source.invalid.data
    if not excluded.any():
        excluded = None
    valid = None if excluded is None else ~excluded
    if border is BorderMode.FULL:
        if (mode is FilterMode.MEDIAN
                and config.median_border is MedianBorderStrategy.SAMPLE
                and valid is None and _support(kernel).is_full):
            values = extend_with_chessboard(values, hx, hy)
        else:
            values, valid = extend_with_invalid(values, valid, hx, hy)

    result, nodata = _compute(mode, values, valid, kernel, config.block_rows)
    result = np.where(nodata, 0.0, result)

    write_result(destination.data, source.data, result, hx, hy, border, 0)
    _write_invalid(destination, excluded, nodata, hx, hy, border)
    return FilterStatus.SUCCESS
