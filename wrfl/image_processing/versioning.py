# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability decorators for processors.

``@processor_version`` stamps a semantic version on a processor class and
``@processor_tags`` stamps its category and description, so callers can
discover and filter processors without instantiating them.

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

# Standard library
import importlib.metadata
from typing import Optional, Type, TypeVar

# WRFL internal
from wrfl.vocabulary import ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator setting ``__processor_version__``.

    Parameters
    ----------
    version : str, optional
        Semantic version string such as ``'1.0.0'``. When omitted, the
        installed ``wrfl`` distribution version is used, or
        ``'unknown'`` when the package is not installed.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyFilter(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> MyFilter.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('wrfl')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(category: Optional[ProcessorCategory] = None,
                   description: Optional[str] = None):
    """Class decorator setting ``__processor_tags__``.

    Parameters
    ----------
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short human-readable purpose.

    Raises
    ------
    TypeError
        If *category* is not a ``ProcessorCategory`` member.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator
