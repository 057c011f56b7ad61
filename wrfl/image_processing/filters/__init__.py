# -*- coding: utf-8 -*-
"""
Filters - Windowed raster filtering engine and processors.

Entry Points
    ``filter_mask`` - erosion, dilation, opening and closing of masks
    ``filter_image`` - median, mean, standard deviation, linear and
    rank-weighted filtering of images
    ``FilterConfig`` - runtime options of both entry points

Engines
    ``morphology`` - binary erosion/dilation and their compositions
    ``statistical`` - local mean and sample standard deviation
    ``rank`` - local median and rank-weighted (morpho) filters
    ``linear`` - weighted sums over real-valued windows
    ``border`` - border modes and destination assembly

Processors
    ``MorphologicalFilter``, ``WindowFilter``, ``ConvolutionFilter``

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

from wrfl.image_processing.filters.dispatch import (
    FilterConfig,
    filter_image,
    filter_mask,
)
from wrfl.image_processing.filters.processors import (
    ConvolutionFilter,
    MorphologicalFilter,
    WindowFilter,
)

__all__ = [
    'FilterConfig',
    'filter_image',
    'filter_mask',
    'ConvolutionFilter',
    'MorphologicalFilter',
    'WindowFilter',
]
