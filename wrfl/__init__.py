# -*- coding: utf-8 -*-
"""
WRFL - Windowed Raster Filtering Library.

Morphological operators on binary masks and sliding-window statistical and
convolution filters on scalar images, with explicit border semantics and
caller-supplied invalid cells. Rasters are plain numpy buffers; the library
does no file I/O.

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from wrfl.exceptions import (
    WrflError,
    ValidationError,
    FilterError,
    NullInputError,
    InvalidKernelShapeError,
    EmptyKernelError,
    UnsupportedModeError,
    DimensionMismatchError,
    InsufficientSamplesError,
    PixelTypeMismatchError,
)
from wrfl.vocabulary import (
    BorderMode,
    FilterFamily,
    FilterMode,
    FilterStatus,
    MedianBorderStrategy,
    PixelType,
    ProcessorCategory,
)
from wrfl.raster import Image, Mask
from wrfl.kernel import MAX_KERNEL_SIZE, StructuringElement, WeightWindow
from wrfl.image_processing.filters import (
    FilterConfig,
    filter_image,
    filter_mask,
)

__all__ = [
    'WrflError',
    'ValidationError',
    'FilterError',
    'NullInputError',
    'InvalidKernelShapeError',
    'EmptyKernelError',
    'UnsupportedModeError',
    'DimensionMismatchError',
    'InsufficientSamplesError',
    'PixelTypeMismatchError',
    'BorderMode',
    'FilterFamily',
    'FilterMode',
    'FilterStatus',
    'MedianBorderStrategy',
    'PixelType',
    'ProcessorCategory',
    'Image',
    'Mask',
    'MAX_KERNEL_SIZE',
    'StructuringElement',
    'WeightWindow',
    'FilterConfig',
    'filter_image',
    'filter_mask',
]
