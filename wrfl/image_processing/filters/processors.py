# -*- coding: utf-8 -*-
"""
Filter Processors - Array-level processors over the filter entry points.

Thin ``ImageTransform`` wrappers that build rasters and kernels from numpy
arrays and tunable parameters, call ``filter_mask`` / ``filter_image`` and
hand back plain arrays:

- ``MorphologicalFilter``: erosion, dilation, opening and closing of
  boolean arrays with square, cross or disk elements.
- ``WindowFilter``: median, mean and standard deviation over square
  windows.
- ``ConvolutionFilter``: linear and rank-weighted filtering with
  caller-supplied weights.

The image processors accept ``np.ma.MaskedArray`` input, masked cells
being excluded from every window, and return a masked array whenever the
input was masked or some output cell had no data. 3D inputs are filtered
band by band.

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
from typing import Annotated, Any, Union

# Third-party
import numpy as np

# WRFL internal
from wrfl.exceptions import EmptyKernelError, ValidationError
from wrfl.image_processing.base import BandwiseTransformMixin, ImageTransform
from wrfl.image_processing.filters.border import destination_shape
from wrfl.image_processing.filters.dispatch import (
    FilterConfig,
    filter_image,
    filter_mask,
)
from wrfl.image_processing.params import Desc, Options, Range
from wrfl.image_processing.versioning import processor_tags, processor_version
from wrfl.kernel import StructuringElement, WeightWindow, validate_kernel_shape
from wrfl.raster import Image, Mask
from wrfl.vocabulary import (
    BorderMode,
    FilterMode,
    MedianBorderStrategy,
    PixelType,
    ProcessorCategory,
)


_ELEMENTS = {
    'square': StructuringElement.square,
    'cross': StructuringElement.cross,
    'disk': StructuringElement.disk,
}

_IMAGE_BORDERS = ('full', 'crop', 'copy', 'zero', 'nop')


def _check_2d(source: np.ndarray) -> None:
    if source.ndim != 2:
        raise ValidationError(
            f"source must be 2D (rows, cols), got {source.ndim}D"
        )


def _filter_array(source: np.ndarray,
                  kernel: Union[StructuringElement, WeightWindow],
                  mode: FilterMode, border: BorderMode,
                  config: FilterConfig) -> np.ndarray:
    """Run ``filter_image`` on an array, honouring masked input."""
    _check_2d(source)
    masked = isinstance(source, np.ma.MaskedArray)
    invalid = np.ma.getmaskarray(source) if masked else None
    image = Image.from_array(
        np.ma.getdata(source),
        invalid=invalid if invalid is not None and invalid.any() else None,
    )

    if mode is FilterMode.MEDIAN or image.pixel_type is PixelType.FLOAT:
        pixel_type = image.pixel_type
    else:
        pixel_type = PixelType.DOUBLE
    if border is BorderMode.NOOP:
        # The untouched border keeps the source values and their flags.
        flags = ~np.isfinite(image.data)
        if image.invalid is not None:
            flags |= image.invalid.data
        result = Image.from_array(image.data, pixel_type=pixel_type,
                                  invalid=flags if flags.any() else None)
    else:
        rows, cols = destination_shape(image.shape, kernel.hx, kernel.hy,
                                       border)
        result = Image(cols, rows, pixel_type)

    filter_image(result, image, kernel, mode, border, config)
    if result.invalid is not None and result.invalid.data.any():
        return np.ma.MaskedArray(result.data, mask=result.invalid.unwrap())
    if masked:
        return np.ma.MaskedArray(result.data, mask=False)
    return result.data


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.BINARY,
                description='Binary erosion, dilation, opening and closing')
class MorphologicalFilter(BandwiseTransformMixin, ImageTransform):
    """Binary morphology with a generated structuring element.

    Parameters
    ----------
    operation : str
        ``'erosion'``, ``'dilation'``, ``'opening'`` or ``'closing'``.
    radius : int
        Half-size of the element, which is ``2*radius + 1`` cells wide.
        Default 1 (3x3).
    kernel_shape : str
        ``'square'`` (default, 8-connected), ``'cross'`` (4-connected) or
        ``'disk'``.
    border : str
        ``'zero'`` (default), ``'copy'`` or ``'nop'``.

    Examples
    --------
    >>> f = MorphologicalFilter(operation='opening', radius=2)
    >>> cleaned = f.apply(mask_array)
    """

    operation: Annotated[str, Options('erosion', 'dilation', 'opening',
                                      'closing'),
                         Desc('Morphological operation')] = 'erosion'
    radius: Annotated[int, Range(min=0, max=15),
                      Desc('Structuring element half-size')] = 1
    kernel_shape: Annotated[str, Options('square', 'cross', 'disk'),
                            Desc('Structuring element shape')] = 'square'
    border: Annotated[str, Options('zero', 'copy', 'nop'),
                      Desc('Border handling')] = 'zero'

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Filter one 2D band; non-zero cells are set.

        Returns
        -------
        np.ndarray
            Bool array, same shape as *source*.
        """
        params = self._resolve_params(kwargs)
        _check_2d(source)
        element = _ELEMENTS[params['kernel_shape']](params['radius'])
        mask = Mask.from_array(source)
        result = mask.copy() if params['border'] == 'nop' else Mask(
            mask.width, mask.height)
        filter_mask(result, mask, element, FilterMode(params['operation']),
                    BorderMode(params['border']))
        return result.unwrap()


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Local median, mean and standard deviation')
class WindowFilter(BandwiseTransformMixin, ImageTransform):
    """Square-window median, mean or standard deviation.

    Integer inputs keep their pixel type for the median; other modes
    produce float64 (float32 inputs stay float32).

    Parameters
    ----------
    mode : str
        ``'median'`` (default), ``'mean'``, ``'mean_fast'``, ``'stdev'``
        or ``'stdev_fast'``.
    kernel_size : int
        Odd window side, 1 to 31. Default 3.
    border : str
        ``'full'`` (default), ``'crop'``, ``'copy'``, ``'zero'`` or
        ``'nop'``. ``'crop'`` shrinks the output by ``kernel_size - 1``.
    median_border : str
        ``'exact'`` (default) or ``'sample'``; see ``FilterConfig``.

    Examples
    --------
    >>> f = WindowFilter(mode='median', kernel_size=5)
    >>> denoised = f.apply(noisy_image)
    """

    mode: Annotated[str, Options('median', 'mean', 'mean_fast', 'stdev',
                                 'stdev_fast'),
                    Desc('Window statistic')] = 'median'
    kernel_size: Annotated[int, Range(min=1, max=31),
                           Desc('Square window side length (odd)')] = 3
    border: Annotated[str, Options(*_IMAGE_BORDERS),
                      Desc('Border handling')] = 'full'
    median_border: Annotated[str, Options('exact', 'sample'),
                             Desc('Median border synthesis')] = 'exact'

    def __post_init__(self) -> None:
        validate_kernel_shape((self.kernel_size, self.kernel_size))

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        element = StructuringElement.full(params['kernel_size'])
        config = FilterConfig(
            median_border=MedianBorderStrategy(params['median_border']),
        )
        return _filter_array(source, element, FilterMode(params['mode']),
                             BorderMode(params['border']), config)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Linear and rank-weighted window filters')
class ConvolutionFilter(BandwiseTransformMixin, ImageTransform):
    """Weighted window filter with caller-supplied weights.

    ``'linear'`` correlates the weights with the image (no reflection),
    ``'linear_scaled'`` also divides by the sum of the absolute weights.
    ``'morpho'`` applies the weights, in row-major order, to the sorted
    window samples; ``'morpho_scaled'`` normalises the same way.

    Parameters
    ----------
    weights : array-like
        2D weights with odd sides of at most 31.
    mode : str
        ``'linear'``, ``'linear_scaled'`` (default), ``'morpho'`` or
        ``'morpho_scaled'``.
    border : str
        ``'full'`` (default), ``'crop'``, ``'copy'``, ``'zero'`` or
        ``'nop'``.

    Raises
    ------
    InvalidKernelShapeError
        If *weights* has an even or oversized side.
    EmptyKernelError
        If every weight is zero.
    """

    mode: Annotated[str, Options('linear', 'linear_scaled', 'morpho',
                                 'morpho_scaled'),
                    Desc('Weighting scheme')] = 'linear_scaled'
    border: Annotated[str, Options(*_IMAGE_BORDERS),
                      Desc('Border handling')] = 'full'

    def __init__(self, weights, mode: str = 'linear_scaled',
                 border: str = 'full') -> None:
        self.weights = WeightWindow(weights)
        if self.weights.is_empty:
            raise EmptyKernelError("weights must not all be zero")
        self.mode = mode
        self.border = border
        self._resolve_params({})

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        return _filter_array(source, self.weights, FilterMode(params['mode']),
                             BorderMode(params['border']), FilterConfig())
