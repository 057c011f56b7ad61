# -*- coding: utf-8 -*-
"""
WRFL Exception Hierarchy - Domain-specific exceptions for raster filtering.

Provides a small exception hierarchy that lets callers catch WRFL-specific
errors distinctly from Python built-in exceptions. All WRFL exceptions
subclass both ``WrflError`` and the appropriate built-in exception.

The ``FilterError`` branch is the closed taxonomy reported by
``filter_mask`` and ``filter_image``. Every subclass carries the matching
``FilterStatus`` member in its ``status`` class attribute, so callers that
prefer status codes can write ``except FilterError as err: err.status``.

Author
------
Steven Siebert

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

# WRFL internal
from wrfl.vocabulary import FilterStatus


class WrflError(Exception):
    """Base exception for all WRFL errors."""


class ValidationError(WrflError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for shape mismatches, out-of-range parameters, out-of-bounds
    raster access, and other input validation failures.
    """


class FilterError(ValidationError):
    """Base of the errors reported by the filter entry points.

    Detected synchronously before the destination is touched.
    """

    status: FilterStatus = FilterStatus.SUCCESS


class NullInputError(FilterError):
    """A required raster or kernel argument is absent or detached."""

    status = FilterStatus.NULL_INPUT


class InvalidKernelShapeError(FilterError):
    """Kernel width or height is even, zero, or above the maximum."""

    status = FilterStatus.INVALID_KERNEL_SHAPE


class EmptyKernelError(FilterError):
    """Kernel has no active cell."""

    status = FilterStatus.EMPTY_KERNEL


class UnsupportedModeError(FilterError):
    """Filter mode and border mode cannot be combined."""

    status = FilterStatus.UNSUPPORTED_MODE


class DimensionMismatchError(FilterError):
    """Destination size is wrong for the requested border mode."""

    status = FilterStatus.DIMENSION_MISMATCH


class InsufficientSamplesError(FilterError):
    """The window cannot hold enough samples for the statistic."""

    status = FilterStatus.INSUFFICIENT_SAMPLES


class PixelTypeMismatchError(FilterError):
    """Source and destination pixel types must match for this mode."""

    status = FilterStatus.PIXEL_TYPE_MISMATCH
