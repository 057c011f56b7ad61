# -*- coding: utf-8 -*-
"""
Image Processing - Processor base classes and the filtering subpackage.

Base Classes
    ``ImageProcessor`` - version checking and tunable parameters
    ``ImageTransform`` - array-in, array-out transforms
    ``BandwiseTransformMixin`` - per-band application over 3D stacks

Parameters
    ``Range``, ``Options``, ``Desc`` - ``typing.Annotated`` markers
    ``ParamSpec`` - introspected parameter description

Versioning
    ``processor_version``, ``processor_tags``

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

from wrfl.image_processing.base import (
    BandwiseTransformMixin,
    ImageProcessor,
    ImageTransform,
)
from wrfl.image_processing.params import Desc, Options, ParamSpec, Range
from wrfl.image_processing.versioning import processor_tags, processor_version

__all__ = [
    'BandwiseTransformMixin',
    'ImageProcessor',
    'ImageTransform',
    'Desc',
    'Options',
    'ParamSpec',
    'Range',
    'processor_tags',
    'processor_version',
]
