# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for array processors.

Defines ``ImageProcessor``, the common base of the processor classes, and
the ``ImageTransform`` ABC for array-in, array-out transforms.
``ImageProcessor`` warns once per class when no ``@processor_version`` was
declared and turns ``typing.Annotated`` tunable declarations into an
auto-generated ``__init__`` plus runtime resolution through ``**kwargs``.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# WRFL internal
from wrfl.image_processing.params import ParamSpec, _make_init, collect_param_specs

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all processors.

    **Version checking**: concrete subclasses without
    ``@processor_version('x.y.z')`` trigger a ``UserWarning`` at first
    instantiation. The check runs in ``__new__`` so class decorators have
    been applied by then.

    **Tunable parameters**: subclasses declare ``typing.Annotated``
    class-body fields with the markers of
    :mod:`wrfl.image_processing.params`. ``__init_subclass__`` collects
    them into ``__param_specs__`` and generates an ``__init__`` unless the
    subclass defines its own. ``_resolve_params(kwargs)`` merges instance
    values with per-call overrides.
    """

    _version_warned_classes: set = set()

    #: Specs built by ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        Keys of *kwargs* that are not declared parameters are ignored.
        Every resolved value is validated against its spec.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs[spec.name] if spec.name in kwargs else getattr(
                self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved


class ImageTransform(ImageProcessor):
    """Abstract base class for transforms from one array to another."""

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source array.

        Parameters
        ----------
        source : np.ndarray
            Input array, ``(rows, cols)`` or ``(bands, rows, cols)``
            depending on the transform.

        Returns
        -------
        np.ndarray
            Transformed array.
        """
        ...


class BandwiseTransformMixin:
    """Mixin applying a 2D transform to every band of a 3D stack.

    Subclasses implement ``_apply_2d``. ``(bands, rows, cols)`` inputs are
    split along the first axis and the per-band results stacked again;
    when any band comes back as a masked array the stack is a masked
    array too.
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        if source.ndim == 3:
            bands = [self._apply_2d(source[b], **kwargs)
                     for b in range(source.shape[0])]
            if any(isinstance(band, np.ma.MaskedArray) for band in bands):
                return np.ma.stack(bands)
            return np.stack(bands)
        return self._apply_2d(source, **kwargs)

    @abstractmethod
    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform to one ``(rows, cols)`` band."""
        ...
